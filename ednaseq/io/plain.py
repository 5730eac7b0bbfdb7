from typing import List

from ednaseq.records import SequenceRecord

HEADER_TEMPLATE = "Sequence_{index}"


def parse_plain_string(content: str) -> List[SequenceRecord]:
    """
    Parse one-sequence-per-line text.

    Blank lines are dropped; every other line becomes a record named
    ``Sequence_1``, ``Sequence_2``, ... in order of appearance.

    Example:
        >>> [r.header for r in parse_plain_string("ACGT\\n\\nGGCC\\n")]
        ['Sequence_1', 'Sequence_2']
    """
    lines = [line for line in content.split("\n") if line.strip()]
    return [
        SequenceRecord(
            header=HEADER_TEMPLATE.format(index=idx),
            sequence=line.strip(),
        )
        for idx, line in enumerate(lines, start=1)
    ]
