"""
Composition metrics for nucleotide sequences.

Functions here are case-insensitive and total: any string, including
the empty string or one made of unknown characters, yields a number.
"""

from typing import Optional

from ednaseq.config import DEFAULT_SCORING, ScoringConfig

VALID_BASES = DEFAULT_SCORING.valid_bases
GC_BASES = DEFAULT_SCORING.gc_bases


def _fraction(sequence: str, alphabet) -> float:
    if not sequence:
        return 0.0
    hits = sum(1 for base in sequence if base.upper() in alphabet)
    return hits / len(sequence)


def gc_content(sequence: str) -> float:
    """
    Calculate the GC content (fraction) of a sequence.

    Args:
        sequence: DNA or RNA sequence

    Returns:
        GC content as a fraction between 0 and 1

    Example:
        >>> gc_content("ACGT")
        0.5
        >>> gc_content("AAAA")
        0.0
    """
    return _fraction(sequence, GC_BASES)


def valid_base_fraction(sequence: str) -> float:
    """
    Fraction of characters that are recognized bases (A, T, C, G, U, N).

    Example:
        >>> valid_base_fraction("XXXXATCG")
        0.5
    """
    return _fraction(sequence, VALID_BASES)


def calculate_quality_score(
    sequence: str,
    config: Optional[ScoringConfig] = None
) -> float:
    """
    Heuristic quality score of a sequence from its base composition.

    The score sums a validity part (fraction of recognized bases times
    ``validity_weight``) and a GC part (a step that rewards GC content
    inside ``[gc_min, gc_max]``), clamped at ``max_score``.

    Args:
        sequence: Nucleotide sequence, any case
        config: Scoring constants (defaults reproduce 50 + 50/30 scoring)

    Returns:
        Score between 0 and 100; 0 for an empty sequence

    Example:
        >>> calculate_quality_score("ATCGATCGAT")
        100.0
        >>> calculate_quality_score("XXXXATCG")
        55.0
    """
    if not sequence:
        return 0.0

    config = config or DEFAULT_SCORING

    validity_score = _fraction(sequence, config.valid_bases) * config.validity_weight
    gc = _fraction(sequence, config.gc_bases)
    if config.gc_min <= gc <= config.gc_max:
        gc_score = config.gc_in_range_score
    else:
        gc_score = config.gc_out_of_range_score

    return min(config.max_score, validity_score + gc_score)
