"""
Sequence records produced by the file parser.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ednaseq.utils.sequences import calculate_quality_score


@dataclass(frozen=True)
class SequenceRecord:
    """
    A single sequence extracted from an uploaded file.

    Attributes:
        header: Identifier line (``Sequence_<n>`` for plain-line input)
        sequence: Nucleotide string without whitespace
        description: Extra header text; the parser keeps the whole
            header line in ``header`` and leaves this as None
    """
    header: str
    sequence: str
    description: Optional[str] = None

    def __len__(self) -> int:
        return len(self.sequence)

    @property
    def length(self) -> int:
        return len(self.sequence)

    @property
    def quality_score(self) -> float:
        """Composition-based quality score in [0, 100]."""
        return calculate_quality_score(self.sequence)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": self.header,
            "sequence": self.sequence,
            "description": self.description,
            "length": self.length,
            "quality_score": self.quality_score,
        }
