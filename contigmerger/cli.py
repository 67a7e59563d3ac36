#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for ContigMerger.

This module provides the main CLI entry point and all subcommands for
merging overlapping contigs into super-contigs.
"""

import sys
import logging
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.schema import (
    ConfigValidationError,
    apply_overrides,
    load_config,
    save_config_template,
    validate_config,
)
from .core import GraphCycleError, MissingSequenceError
from .io_utils import OverlapLabelError, SequenceStore
from .utils.pipeline import run_merge_pipeline
from .utils.sequence_utils import format_metrics, sequence_metrics


def setup_logging(level: str = 'INFO', log_file=None, verbose: bool = False, quiet: bool = False):
    """Configure root logging; --verbose and --quiet take precedence over the level."""
    if verbose:
        level = 'DEBUG'
    elif quiet:
        level = 'WARNING'

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S',
        handlers=handlers,
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    ContigMerger: overlap-graph contig merging

    Merges overlapping contigs inside Dedupe clusters into super-contigs by
    walking the overlap graph and keeping the best-scoring merge per root.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='contigmerger_config.yaml',
              help='Output configuration file path')
def config_init(output):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating configuration template: {output}")

    try:
        save_config_template(Path(output))
        click.echo(f"✓ Configuration file created: {output}")
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    click.echo(f"  Threads: {config['merge']['threads']}")
    click.echo(f"  Output directory: {config['output']['directory']}")
    click.echo(f"  Output prefix: {config['output']['prefix']}")
    click.echo(f"  Line width: {config['output']['line_width'] or 'unwrapped'}")
    click.echo(f"  Write removed contigs: {config['output']['write_removed']}")
    click.echo(f"  Log level: {config['logging']['level']}")


# ============================================================================
# Merging
# ============================================================================

@main.command()
@click.option('--graph', '-i', 'graph_file', required=True, type=click.Path(exists=True),
              help='Overlap graph in DOT format (Dedupe output)')
@click.option('--clusters', '-c', 'cluster_patterns', multiple=True, required=True,
              help='Cluster FASTA/FASTQ file or glob pattern (% may replace *); repeatable')
@click.option('--prefix', '-o', type=str, default=None,
              help='Output file prefix [default: overlap_extended_contigs]')
@click.option('--output-dir', '-d', type=click.Path(file_okay=False), default=None,
              help='Output directory [default: current directory]')
@click.option('--config', 'config_file', type=click.Path(exists=True), default=None,
              help='YAML configuration file')
@click.option('--threads', '-t', type=int, default=None,
              help='Worker threads for path merging')
@click.option('--line-width', type=int, default=None,
              help='FASTA line width (0 = no wrapping)')
@click.option('--removed/--no-removed', 'write_removed', default=None,
              help='Write rejected merged contigs to removed_<prefix>.fasta')
@click.pass_context
def merge(ctx, graph_file, cluster_patterns, prefix, output_dir, config_file,
          threads, line_width, write_removed):
    """
    Merge overlapping contigs along overlap graph paths.

    Every path from a source contig to a sink contig is merged into one
    super-contig; for each source the best-scoring super-contig is kept.
    """
    try:
        config = load_config(config_file)
    except ConfigValidationError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    config = apply_overrides(config, {
        'merge.threads': threads,
        'output.prefix': prefix,
        'output.directory': output_dir,
        'output.line_width': line_width,
        'output.write_removed': write_removed,
    })

    errors = validate_config(config)
    if errors:
        click.echo("✗ Configuration validation failed:", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    try:
        setup_logging(
            config['logging']['level'],
            config['logging']['log_file'],
            verbose=ctx.obj.get('VERBOSE', False),
            quiet=ctx.obj.get('QUIET', False),
        )
    except OSError as e:
        click.echo(f"✗ Cannot open log file: {e}", err=True)
        sys.exit(1)

    output = config['output']
    try:
        result = run_merge_pipeline(
            graph_file,
            list(cluster_patterns),
            output_dir=output['directory'],
            prefix=output['prefix'],
            threads=config['merge']['threads'],
            line_width=output['line_width'],
            write_removed=output['write_removed'],
            final_fasta=output['final_fasta'],
        )
    except (GraphCycleError, MissingSequenceError, OverlapLabelError, FileNotFoundError, ValueError) as e:
        click.echo(f"✗ Merging failed: {e}", err=True)
        sys.exit(1)

    if not ctx.obj.get('QUIET', False):
        click.echo(result.summary())
        for kind, path in result.output_files.items():
            click.echo(f"  {kind}: {path}")


@main.command()
@click.argument('sequence_files', nargs=-1, required=True, type=click.Path(exists=True))
def stats(sequence_files):
    """Print length metrics (count, total, median, average, N50) of FASTA/FASTQ files."""
    try:
        store = SequenceStore.from_files(sequence_files)
    except ValueError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    click.echo(format_metrics(sequence_metrics(store.lengths())))


if __name__ == '__main__':
    main()
