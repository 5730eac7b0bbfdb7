"""Tests for batch summary statistics."""

import pytest

from ednaseq import parse_sequence_file, summarize_records
from ednaseq.stats import SequenceSummary


def test_empty_batch():
    assert summarize_records([]) == SequenceSummary()


def test_fasta_batch():
    records = parse_sequence_file(">a\nATCG\n>b\nAAAAAAAA\n>c\nXXXXATCG")
    summary = summarize_records(records)

    assert summary.count == 3
    assert summary.total_bases == 20
    assert summary.mean_length == pytest.approx(20 / 3)
    assert summary.min_length == 4
    assert summary.max_length == 8
    # scores: 100, 80, 55
    assert summary.mean_quality == pytest.approx(235 / 3)
    assert summary.high_quality_count == 2
    assert summary.mean_gc == pytest.approx((0.5 + 0.0 + 0.25) / 3)


def test_custom_threshold():
    records = parse_sequence_file(">a\nATCG\n>b\nAAAAAAAA")
    assert summarize_records(records, min_quality=90).high_quality_count == 1


def test_to_dict_is_plain_python():
    summary = summarize_records(parse_sequence_file("ACGT"))
    data = summary.to_dict()
    assert data["count"] == 1
    assert isinstance(data["total_bases"], int)
    assert isinstance(data["mean_quality"], float)
