"""
FASTQ parsing.

FASTQ stores each read as 4 lines:
1. Header line starting with '@' followed by sequence ID
2. Sequence line
3. '+' line (optionally followed by the ID again)
4. Quality line (ASCII-encoded Phred scores)

Only the header and sequence lines are read into records; the separator
and quality lines are skipped positionally without validation.
"""

from typing import List

from ednaseq.records import SequenceRecord

LINES_PER_RECORD = 4


def parse_fastq_string(content: str) -> List[SequenceRecord]:
    """
    Parse FASTQ format from a string.

    Lines are consumed in blocks of four. A block is emitted only when its
    header and sequence lines are both present and non-empty, so a
    truncated trailing block is dropped rather than reported.

    Args:
        content: FASTQ formatted string

    Returns:
        List of SequenceRecord objects, in file order
    """
    lines = content.split("\n")
    records = []

    for i in range(0, len(lines), LINES_PER_RECORD):
        header = lines[i]
        sequence = lines[i + 1] if i + 1 < len(lines) else ""
        if not header or not sequence:
            continue

        records.append(SequenceRecord(
            header=header[1:].strip(),  # Remove @
            sequence=sequence.strip(),
        ))

    return records
