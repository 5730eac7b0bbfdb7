"""Tests for the classification prompt and response validation."""

import json

import pytest

from ednaseq.exceptions import InvalidUpstreamResponse, StorageError, UpstreamServiceError
from ednaseq.records import SequenceRecord
from ednaseq.taxonomy import (
    InMemoryAnalysisStore,
    analyze_sequences,
    build_analysis_prompt,
    classify_sequences,
    parse_classification_response,
)


def _taxon(**overrides):
    taxon = {
        "kingdom": "Animalia",
        "phylum": "Chordata",
        "class": "Actinopterygii",
        "order": "Salmoniformes",
        "family": "Salmonidae",
        "genus": "Salmo",
        "species": "Salmo trutta",
        "confidence": 0.93,
        "is_novel": False,
        "sequence_count": 3,
    }
    taxon.update(overrides)
    return taxon


def _response(taxa=None, **summary_overrides):
    summary = {"total_taxa": 1, "novel_species": 0, "average_confidence": 0.93}
    summary.update(summary_overrides)
    return {"taxa": [_taxon()] if taxa is None else taxa, "summary": summary}


class TestBuildAnalysisPrompt:

    def test_lists_sequences_with_preview(self):
        rows = [
            {"sequence_data": "A" * 300, "length": 300},
            {"sequence_data": "GGCC", "length": 4},
        ]
        prompt = build_analysis_prompt(rows)
        assert "Sequence 1:\n" + "A" * 200 + "... (length: 300)" in prompt
        assert "Sequence 2:\nGGCC... (length: 4)" in prompt
        assert "A" * 201 not in prompt
        assert '"average_confidence": number' in prompt

    def test_accepts_records(self):
        prompt = build_analysis_prompt([SequenceRecord("s1", "ATCG")], preview_length=2)
        assert "Sequence 1:\nAT... (length: 4)" in prompt


class TestParseClassificationResponse:

    def test_valid_json_text(self):
        report = parse_classification_response(json.dumps(_response()))
        taxon = report.taxa[0]
        assert taxon.species == "Salmo trutta"
        assert taxon.class_ == "Actinopterygii"
        assert taxon.sequence_count == 3
        assert report.summary.total_taxa == 1

    def test_defaults_for_optional_fields(self):
        taxon = _taxon()
        del taxon["is_novel"]
        del taxon["sequence_count"]
        report = parse_classification_response(_response(taxa=[taxon]))
        assert report.taxa[0].is_novel is False
        assert report.taxa[0].sequence_count == 1

    def test_to_rows(self):
        rows = parse_classification_response(_response()).to_rows("a1")
        assert rows[0]["analysis_id"] == "a1"
        assert rows[0]["order_name"] == "Salmoniformes"
        assert rows[0]["class"] == "Actinopterygii"
        assert rows[0]["confidence_score"] == pytest.approx(0.93)

    def test_invalid_json(self):
        with pytest.raises(InvalidUpstreamResponse, match="not valid JSON"):
            parse_classification_response("{not json")

    def test_root_must_be_object(self):
        with pytest.raises(InvalidUpstreamResponse) as excinfo:
            parse_classification_response("[]")
        assert excinfo.value.path == "$"

    @pytest.mark.parametrize(
        ("payload", "path"),
        [
            ({"summary": {}}, "$.taxa"),
            (_response(taxa=["x"]), "$.taxa[0]"),
            (_response(taxa=[_taxon(genus=None)]), "$.taxa[0].genus"),
            (_response(taxa=[_taxon(confidence="high")]), "$.taxa[0].confidence"),
            (_response(taxa=[_taxon(confidence=150)]), "$.taxa[0].confidence"),
            (_response(taxa=[_taxon(is_novel="no")]), "$.taxa[0].is_novel"),
            (_response(taxa=[_taxon(sequence_count=1.5)]), "$.taxa[0].sequence_count"),
            (_response(taxa=[_taxon(sequence_count=0)]), "$.taxa[0].sequence_count"),
            (_response(total_taxa="one"), "$.summary.total_taxa"),
            (_response(novel_species=-1), "$.summary.novel_species"),
            (_response(average_confidence=None), "$.summary.average_confidence"),
            (_response(average_confidence=float("nan")), "$.summary.average_confidence"),
            (_response(average_confidence=float("inf")), "$.summary.average_confidence"),
            (_response(average_confidence=120), "$.summary.average_confidence"),
            (_response(taxa=[_taxon(confidence=float("nan"))]), "$.taxa[0].confidence"),
        ],
    )
    def test_schema_violations_name_the_path(self, payload, path):
        with pytest.raises(InvalidUpstreamResponse) as excinfo:
            parse_classification_response(payload)
        assert excinfo.value.path == path

    def test_missing_summary(self):
        with pytest.raises(InvalidUpstreamResponse) as excinfo:
            parse_classification_response({"taxa": []})
        assert excinfo.value.path == "$.summary"

    def test_null_optional_fields_use_defaults(self):
        report = parse_classification_response(
            _response(taxa=[_taxon(is_novel=None, sequence_count=None)])
        )
        assert report.taxa[0].is_novel is False
        assert report.taxa[0].sequence_count == 1

    def test_nan_in_json_text_rejected(self):
        text = json.dumps(_response()).replace("0.93}", "NaN}")
        with pytest.raises(InvalidUpstreamResponse) as excinfo:
            parse_classification_response(text)
        assert excinfo.value.path == "$.summary.average_confidence"

    def test_percent_confidence_accepted(self):
        report = parse_classification_response(
            _response(taxa=[_taxon(confidence=87.5)], average_confidence=87.5)
        )
        assert report.summary.average_confidence == pytest.approx(87.5)

    def test_to_analysis_row(self):
        report = parse_classification_response(_response(novel_species=0))
        assert report.to_analysis_row("p1", sequences_processed=4) == {
            "project_id": "p1",
            "taxa_count": 1,
            "novel_species_count": 0,
            "sequences_processed": 4,
            "accuracy_rate": pytest.approx(0.93),
            "summary": {"total_taxa": 1, "novel_species": 0, "average_confidence": 0.93},
        }

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse_classification_response("null")


class TestClassifySequences:

    def test_round_trip_through_classifier(self):
        prompts = []

        def classifier(prompt):
            prompts.append(prompt)
            return json.dumps(_response())

        report = classify_sequences([SequenceRecord("s1", "ATCG")], classifier)
        assert report.summary.total_taxa == 1
        assert "ATCG" in prompts[0]

    def test_classifier_failure(self):
        def classifier(prompt):
            raise ConnectionError("gateway timeout")

        with pytest.raises(UpstreamServiceError, match="gateway timeout"):
            classify_sequences([SequenceRecord("s1", "ATCG")], classifier)

    def test_malformed_answer(self):
        with pytest.raises(InvalidUpstreamResponse):
            classify_sequences([SequenceRecord("s1", "ATCG")], lambda prompt: {"taxa": 3})


class FailingAnalysisStore(InMemoryAnalysisStore):

    def insert_analysis(self, row):
        raise RuntimeError("relation does not exist")


class TestAnalyzeSequences:

    def test_records_analysis_and_taxa(self):
        store = InMemoryAnalysisStore()
        sequences = [
            {"sequence_data": "ATCG", "length": 4},
            {"sequence_data": "GGCC", "length": 4},
        ]

        result = analyze_sequences("p1", sequences, lambda prompt: _response(), store)

        assert store.project_status["p1"] == "completed"
        assert store.analyses == [result.analysis]
        assert result.analysis["sequences_processed"] == 2
        assert result.analysis["taxa_count"] == 1
        assert result.taxa_count == 1
        assert [row["analysis_id"] for row in store.taxa] == [result.analysis["id"]]
        assert store.taxa[0]["species"] == "Salmo trutta"
        assert result.to_dict()["success"] is True

    def test_invalid_answer_leaves_project_processing(self):
        store = InMemoryAnalysisStore()
        with pytest.raises(InvalidUpstreamResponse):
            analyze_sequences("p1", [SequenceRecord("s1", "ATCG")],
                              lambda prompt: "{}", store)
        assert store.project_status["p1"] == "processing"
        assert store.analyses == []

    def test_storage_failure(self):
        store = FailingAnalysisStore()
        with pytest.raises(StorageError, match="relation does not exist"):
            analyze_sequences("p1", [SequenceRecord("s1", "ATCG")],
                              lambda prompt: _response(), store)
        assert store.project_status["p1"] == "processing"
        assert store.taxa == []
