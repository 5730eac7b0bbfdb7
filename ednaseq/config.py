"""
Tunable constants for sequence scoring and ingestion.
"""

from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class ScoringConfig:
    """
    Weights and thresholds of the composition-based quality score.

    Attributes:
        valid_bases: Characters (uppercase) counted as recognized bases
        gc_bases: Characters (uppercase) counted towards GC content
        validity_weight: Points awarded for a fully valid sequence
        gc_min: Lower bound of the typical GC window (inclusive)
        gc_max: Upper bound of the typical GC window (inclusive)
        gc_in_range_score: Points when GC content is inside the window
        gc_out_of_range_score: Points when GC content is outside the window
        max_score: Ceiling applied to the summed score
    """
    valid_bases: FrozenSet[str] = field(
        default_factory=lambda: frozenset("ATCGUN")
    )
    gc_bases: FrozenSet[str] = field(default_factory=lambda: frozenset("GC"))
    validity_weight: float = 50.0
    gc_min: float = 0.4
    gc_max: float = 0.6
    gc_in_range_score: float = 50.0
    gc_out_of_range_score: float = 30.0
    max_score: float = 100.0


@dataclass(frozen=True)
class IngestConfig:
    """
    Settings for the upload and analysis pipeline.

    Attributes:
        preview_length: Bases of each sequence shown to the classifier
        high_quality_threshold: Score at which a record counts as high quality
    """
    preview_length: int = 200
    high_quality_threshold: float = 80.0


DEFAULT_SCORING = ScoringConfig()
DEFAULT_INGEST = IngestConfig()
