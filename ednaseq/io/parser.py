"""
Format detection and dispatch for uploaded sequence files.
"""

import gzip
import logging
from enum import Enum
from pathlib import Path
from typing import List, Union

from ednaseq.io.fasta import parse_fasta_string
from ednaseq.io.fastq import parse_fastq_string
from ednaseq.io.plain import parse_plain_string
from ednaseq.records import SequenceRecord

logger = logging.getLogger(__name__)


class SequenceFormat(str, Enum):
    FASTA = "fasta"
    FASTQ = "fastq"
    PLAIN = "plain"


_PARSERS = {
    SequenceFormat.FASTA: parse_fasta_string,
    SequenceFormat.FASTQ: parse_fastq_string,
    SequenceFormat.PLAIN: parse_plain_string,
}


def detect_format(content: str) -> SequenceFormat:
    """
    Guess the format of ``content`` from its first character.

    ``>`` means FASTA, ``@`` means FASTQ and anything else (including an
    empty string or a leading blank line) falls back to plain lines.
    """
    if content.startswith(">"):
        return SequenceFormat.FASTA
    if content.startswith("@"):
        return SequenceFormat.FASTQ
    return SequenceFormat.PLAIN


def parse_sequence_file(content: str) -> List[SequenceRecord]:
    """
    Parse an uploaded sequence file of unknown format.

    Never raises for string input: malformed content degrades to the
    plain-line fallback, and unknown characters are kept in the sequence
    (they only lower the quality score).

    Args:
        content: Raw file text

    Returns:
        List of SequenceRecord objects, in file order

    Example:
        >>> records = parse_sequence_file(">s1\\nATCG\\n>s2\\nGGCC")
        >>> [(r.header, r.sequence, r.quality_score) for r in records]
        [('s1', 'ATCG', 100.0), ('s2', 'GGCC', 100.0)]
    """
    fmt = detect_format(content)
    logger.debug("Detected %s content (%d chars)", fmt.value, len(content))
    return _PARSERS[fmt](content)


def _open_file(filepath: Union[str, Path], mode: str = "rt"):
    """Open a file, handling gzip compression if needed."""
    filepath = Path(filepath)
    if filepath.suffix == ".gz":
        return gzip.open(filepath, mode, encoding="utf-8")
    return open(filepath, mode, encoding="utf-8")


def read_sequence_file(filepath: Union[str, Path]) -> List[SequenceRecord]:
    """
    Read and parse a sequence file from disk.

    Supports both plain text and gzip-compressed files.

    Args:
        filepath: Path to a FASTA, FASTQ or plain-line file (or .gz)

    Returns:
        List of SequenceRecord objects

    Example:
        >>> for record in read_sequence_file("sample.fasta"):
        ...     print(f"{record.header}: {len(record)} bp")
    """
    with _open_file(filepath, "rt") as f:
        return parse_sequence_file(f.read())
