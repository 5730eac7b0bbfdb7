"""
Sequence file parsing.

This module reads uploaded sequence files in the formats produced by
eDNA sequencing workflows:
- FASTA: Header line plus sequence lines
- FASTQ: Four-line read records (quality lines are skipped)
- Plain text: One sequence per line
"""

from ednaseq.io.parser import (
    SequenceFormat,
    detect_format,
    parse_sequence_file,
    read_sequence_file,
)
from ednaseq.io.fasta import parse_fasta_string
from ednaseq.io.fastq import parse_fastq_string
from ednaseq.io.plain import parse_plain_string

__all__ = [
    "SequenceFormat",
    "detect_format",
    "parse_sequence_file",
    "read_sequence_file",
    "parse_fasta_string",
    "parse_fastq_string",
    "parse_plain_string",
]
