"""
Sequence composition utilities.

This module provides:
- GC content calculation
- Recognized-base fraction
- Composition-based quality scoring
- Command-line logging setup
"""

from ednaseq.utils.sequences import (
    gc_content,
    valid_base_fraction,
    calculate_quality_score,
    VALID_BASES,
    GC_BASES,
)
from ednaseq.utils.logging import setup_logging

__all__ = [
    "gc_content",
    "valid_base_fraction",
    "calculate_quality_score",
    "VALID_BASES",
    "GC_BASES",
    "setup_logging",
]
