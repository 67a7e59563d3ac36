"""
ContigMerger v0.1.0

Configuration schema for ContigMerger.

Defines all available configuration parameters with defaults and validation.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Dict, Any, Optional, List
from pathlib import Path
import copy
import yaml


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Merging
    # ========================================================================
    'merge': {
        'threads': 1,  # Worker threads for path merging
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'directory': '.',
        'prefix': 'overlap_extended_contigs',
        'line_width': 0,  # 0 = one line per sequence
        'write_removed': True,  # removed_<prefix>.fasta with rejected merges
        'final_fasta': 'all_merged_contigs.fasta',
    },

    # ========================================================================
    # Logging
    # ========================================================================
    'logging': {
        'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
        'log_file': None,  # Console only by default
    },
}

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: config_path given but missing
        ConfigValidationError: File is not valid YAML or not a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in config file {config_path}: {e}")

        if user_config is None:
            return config
        if not isinstance(user_config, dict):
            raise ConfigValidationError(
                f"Config file {config_path} must contain a mapping, got {type(user_config).__name__}"
            )

        # Deep merge user config into defaults
        config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary

    Raises:
        ConfigValidationError: A section that must be a mapping is not one
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict):
            if not isinstance(value, dict):
                raise ConfigValidationError(
                    f"Invalid {key}: section must be a mapping, got {type(value).__name__}"
                )
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply dotted-key overrides (e.g. 'merge.threads'), skipping None values.

    Returns:
        New configuration dictionary
    """
    result = copy.deepcopy(config)
    for key, value in overrides.items():
        if value is None:
            continue
        keys = key.split('.')
        target = result
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value
    return result


def save_config_template(output_path: Path):
    """
    Save the default configuration to a YAML file.

    Args:
        output_path: Output file path
    """
    with open(output_path, 'w') as f:
        yaml.dump(copy.deepcopy(DEFAULT_CONFIG), f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    threads = config.get('merge', {}).get('threads', 1)
    if not isinstance(threads, int) or isinstance(threads, bool) or threads < 1:
        errors.append(f"Invalid merge.threads: {threads!r} (must be an integer >= 1)")

    output = config.get('output', {})
    line_width = output.get('line_width', 0)
    if not isinstance(line_width, int) or isinstance(line_width, bool) or line_width < 0:
        errors.append(f"Invalid output.line_width: {line_width!r} (must be an integer >= 0)")

    prefix = output.get('prefix')
    if not prefix or not isinstance(prefix, str):
        errors.append("Invalid output.prefix: must be a non-empty string")
    elif '/' in prefix:
        errors.append(f"Invalid output.prefix: {prefix!r} (use output.directory for paths)")

    if not isinstance(output.get('write_removed', True), bool):
        errors.append("Invalid output.write_removed: must be true or false")

    final_fasta = output.get('final_fasta')
    if not final_fasta or not isinstance(final_fasta, str):
        errors.append("Invalid output.final_fasta: must be a non-empty string")

    level = config.get('logging', {}).get('level', 'INFO')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging.level: {level} (choose from {', '.join(VALID_LOG_LEVELS)})")

    return errors
