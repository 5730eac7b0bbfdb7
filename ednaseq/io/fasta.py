import re
from typing import List

from ednaseq.records import SequenceRecord

_WHITESPACE = re.compile(r"\s")


def parse_fasta_string(content: str) -> List[SequenceRecord]:
    """
    Parse FASTA format from a string.

    The content is split on ``>``. Each non-blank fragment contributes one
    record: its first line (trimmed) is the header and every following
    line, joined with all whitespace removed, is the sequence. The header
    line is kept whole; no identifier/description split is made.

    Args:
        content: FASTA formatted string

    Returns:
        List of SequenceRecord objects, in file order

    Example:
        >>> [r.header for r in parse_fasta_string(">s1\\nATCG\\n>s2\\nGGCC")]
        ['s1', 's2']
    """
    records = []

    for entry in content.split(">"):
        if not entry.strip():
            continue

        header, _, body = entry.partition("\n")
        records.append(SequenceRecord(
            header=header.strip(),
            sequence=_WHITESPACE.sub("", body),
        ))

    return records
