#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

Sequence store — contig id to sequence lookup loaded from cluster files.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import glob
import gzip
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union
import logging

from Bio import SeqIO

from ..core.contig_merger import MissingSequenceError

logger = logging.getLogger(__name__)

FASTA_SUFFIXES = ('.fa', '.fasta', '.fna', '.fas')
FASTQ_SUFFIXES = ('.fq', '.fastq')


def detect_format(filepath: Union[str, Path]) -> str:
    """
    Detect 'fasta' or 'fastq' from the file suffix (ignoring .gz).

    Raises:
        ValueError: Unknown suffix
    """
    filepath = Path(filepath)
    suffixes = [s.lower() for s in filepath.suffixes]
    if suffixes and suffixes[-1] in ('.gz', '.gzip'):
        suffixes = suffixes[:-1]
    suffix = suffixes[-1] if suffixes else ''

    if suffix in FASTA_SUFFIXES:
        return 'fasta'
    if suffix in FASTQ_SUFFIXES:
        return 'fastq'
    raise ValueError(f"Unsupported file format: {filepath}")


def expand_cluster_pattern(pattern: str) -> List[Path]:
    """
    Expand a cluster file pattern into sorted paths.

    '%' is accepted as a wildcard alias for '*' so patterns survive shells
    that would expand '*' themselves.
    """
    pattern = pattern.replace('%', '*')
    if any(char in pattern for char in '*?['):
        return [Path(p) for p in sorted(glob.glob(pattern))]
    return [Path(pattern)]


def read_sequences(filepath: Union[str, Path]) -> Iterator[Tuple[str, str]]:
    """
    Yield (id, sequence) pairs from a FASTA/FASTQ file (can be gzipped).

    Raises:
        FileNotFoundError: File does not exist
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Sequence file not found: {filepath}")

    file_format = detect_format(filepath)

    # Determine file opener
    if filepath.suffix.lower() in ('.gz', '.gzip'):
        handle = gzip.open(filepath, 'rt')
    else:
        handle = open(filepath, 'r')

    try:
        for record in SeqIO.parse(handle, file_format):
            yield record.id, str(record.seq)
    finally:
        handle.close()


class SequenceStore(Mapping[str, str]):
    """
    Read-only mapping of contig id -> sequence.

    Insertion order is preserved. Loading the same id twice keeps the later
    sequence.
    """

    def __init__(self, sequences: Optional[Mapping[str, str]] = None):
        self._sequences: Dict[str, str] = dict(sequences or {})
        self.source_files: List[Path] = []

    @classmethod
    def from_files(cls, filepaths: Iterable[Union[str, Path]]) -> 'SequenceStore':
        """Load sequences from several FASTA/FASTQ files."""
        store = cls()
        for filepath in filepaths:
            store.load_file(filepath)
        return store

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> 'SequenceStore':
        """
        Load sequences from cluster file patterns.

        Raises:
            FileNotFoundError: A pattern matched no file
        """
        filepaths: List[Path] = []
        for pattern in patterns:
            matched = expand_cluster_pattern(pattern)
            if not matched:
                raise FileNotFoundError(f"No cluster files match: {pattern}")
            filepaths.extend(matched)

        logger.info(f"Number of cluster files = {len(filepaths)}")
        return cls.from_files(filepaths)

    def load_file(self, filepath: Union[str, Path]) -> int:
        """Add the sequences of one file; returns the number read."""
        count = 0
        for contig_id, sequence in read_sequences(filepath):
            if contig_id in self._sequences:
                logger.warning(f"Duplicate contig id {contig_id} in {filepath}; keeping the later sequence")
            self._sequences[contig_id] = sequence
            count += 1

        self.source_files.append(Path(filepath))
        logger.debug(f"Loaded {count} sequences from {filepath}")
        return count

    def lengths(self) -> List[int]:
        return [len(seq) for seq in self._sequences.values()]

    def require(self, contig_ids: Iterable[str]):
        """
        Check that every id has a sequence.

        Raises:
            MissingSequenceError: Listing all absent ids
        """
        missing = [contig_id for contig_id in contig_ids if contig_id not in self._sequences]
        if missing:
            raise MissingSequenceError(missing)

    def __getitem__(self, contig_id: str) -> str:
        return self._sequences[contig_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sequences)

    def __len__(self) -> int:
        return len(self._sequences)

    def __repr__(self) -> str:
        return f"SequenceStore(sequences={len(self)}, files={len(self.source_files)})"

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
