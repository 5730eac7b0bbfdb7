"""
Boundary to the external taxonomic classification service.

The service itself is an injected callable that takes a prompt and
returns a JSON answer. This module builds the prompt from stored
sequences, validates the answer against the taxonomy schema before
anything downstream trusts it, and records the analysis through a
storage backend.
"""

import json
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Annotated, Any, Callable, Dict, List, Mapping, Sequence, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    field_validator,
)

from ednaseq.config import DEFAULT_INGEST
from ednaseq.exceptions import (
    InvalidUpstreamResponse,
    StorageError,
    UpstreamServiceError,
    error_path,
)

logger = logging.getLogger(__name__)

RESPONSE_TEMPLATE = """{
  "taxa": [
    {
      "kingdom": "string",
      "phylum": "string",
      "class": "string",
      "order": "string",
      "family": "string",
      "genus": "string",
      "species": "string",
      "confidence": number,
      "is_novel": boolean,
      "sequence_count": number
    }
  ],
  "summary": {
    "total_taxa": number,
    "novel_species": number,
    "average_confidence": number
  }
}"""

PROJECT_PROCESSING = "processing"
PROJECT_COMPLETED = "completed"

Classifier = Callable[[str], Union[str, bytes, Mapping[str, Any]]]

# Confidence may be reported as a fraction or as a percentage
Confidence = Annotated[float, Field(ge=0, le=100, allow_inf_nan=False)]


class Taxon(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kingdom: str
    phylum: str
    class_: str = Field(alias="class")
    order: str
    family: str
    genus: str
    species: str
    confidence: Confidence
    is_novel: StrictBool = False
    sequence_count: int = Field(1, gt=0)

    @field_validator("is_novel", "sequence_count", mode="before")
    @classmethod
    def _null_as_default(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def to_row(self, analysis_id: str) -> Dict[str, Any]:
        """Storage row for the identified-taxa table."""
        return {
            "analysis_id": analysis_id,
            "kingdom": self.kingdom,
            "phylum": self.phylum,
            "class": self.class_,
            "order_name": self.order,
            "family": self.family,
            "genus": self.genus,
            "species": self.species,
            "confidence_score": self.confidence,
            "sequence_count": self.sequence_count,
            "is_novel": self.is_novel,
        }


class TaxonomySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_taxa: int = Field(ge=0)
    novel_species: int = Field(ge=0)
    average_confidence: Confidence

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class TaxonomyReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    taxa: List[Taxon]
    summary: TaxonomySummary

    def to_rows(self, analysis_id: str) -> List[Dict[str, Any]]:
        return [taxon.to_row(analysis_id) for taxon in self.taxa]

    def to_analysis_row(self, project_id: str, sequences_processed: int) -> Dict[str, Any]:
        """Storage row for the analysis-results table."""
        return {
            "project_id": project_id,
            "taxa_count": self.summary.total_taxa,
            "novel_species_count": self.summary.novel_species,
            "sequences_processed": sequences_processed,
            "accuracy_rate": self.summary.average_confidence,
            "summary": self.summary.to_dict(),
        }


class AnalysisResult(BaseModel):
    analysis: Dict[str, Any]
    taxa: List[Dict[str, Any]]
    taxa_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "analysis": self.analysis,
            "taxa_count": self.taxa_count,
        }


class AnalysisStore(ABC):
    """Persistence backend for projects, analyses and identified taxa."""

    @abstractmethod
    def update_project_status(self, project_id: str, status: str) -> None:
        ...

    @abstractmethod
    def insert_analysis(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Persist an analysis row and return it with its ``id``."""

    @abstractmethod
    def insert_taxa(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        ...


class InMemoryAnalysisStore(AnalysisStore):

    def __init__(self):
        self.project_status: Dict[str, str] = {}
        self.analyses: List[Dict[str, Any]] = []
        self.taxa: List[Dict[str, Any]] = []

    def update_project_status(self, project_id: str, status: str) -> None:
        self.project_status[project_id] = status

    def insert_analysis(self, row: Dict[str, Any]) -> Dict[str, Any]:
        item = dict(row)
        item["id"] = str(uuid.uuid4())
        item["created_at"] = datetime.now(timezone.utc).isoformat()
        self.analyses.append(item)
        return item

    def insert_taxa(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        stored = [dict(row, id=str(uuid.uuid4())) for row in rows]
        self.taxa.extend(stored)
        return stored


def _sequence_fields(item: Any) -> Tuple[str, int]:
    # Accepts stored rows (dicts) as well as SequenceRecord objects
    if isinstance(item, Mapping):
        data = item.get("sequence_data", item.get("sequence", ""))
        length = item.get("length", len(data))
    else:
        data = item.sequence
        length = len(data)
    return data, length


def build_analysis_prompt(
    sequences: Sequence[Any],
    preview_length: int = DEFAULT_INGEST.preview_length
) -> str:
    """
    Render the classification prompt for a batch of sequences.

    Each sequence is listed with its first ``preview_length`` bases and
    its full length, followed by the JSON structure the answer must use.

    Args:
        sequences: Stored sequence rows or SequenceRecord objects
        preview_length: Number of leading bases shown per sequence

    Returns:
        Prompt text
    """
    blocks = []
    for idx, item in enumerate(sequences, start=1):
        data, length = _sequence_fields(item)
        blocks.append(
            f"Sequence {idx}:\n{data[:preview_length]}... (length: {length})"
        )

    return (
        "Analyze the following DNA sequences and provide taxonomic classification.\n\n"
        "Sequences to analyze:\n"
        + "\n\n".join(blocks)
        + "\n\nPlease provide:\n"
        "1. Taxonomic classification (Kingdom, Phylum, Class, Order, Family, Genus, Species)\n"
        "2. Confidence scores for each classification\n"
        "3. Identify any potentially novel species\n"
        "4. Quality assessment of sequences\n\n"
        "Respond in JSON format with this structure:\n"
        + RESPONSE_TEMPLATE
    )


def parse_classification_response(
    payload: Union[str, bytes, Mapping[str, Any]]
) -> TaxonomyReport:
    """
    Validate a classifier answer against the taxonomy schema.

    Args:
        payload: JSON text or an already decoded object

    Returns:
        TaxonomyReport built from the validated fields

    Raises:
        InvalidUpstreamResponse: If the payload is not valid JSON or any
            field is missing or has the wrong type; the error names the
            offending path

    Example:
        >>> report = parse_classification_response(
        ...     '{"taxa": [], "summary": {"total_taxa": 0, '
        ...     '"novel_species": 0, "average_confidence": 0}}')
        >>> report.summary.total_taxa
        0
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as exc:
            raise InvalidUpstreamResponse(f"not valid JSON ({exc})") from exc

    try:
        return TaxonomyReport.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        raise InvalidUpstreamResponse(first["msg"], error_path(first["loc"])) from exc


def classify_sequences(
    sequences: Sequence[Any],
    classifier: Classifier,
    preview_length: int = DEFAULT_INGEST.preview_length
) -> TaxonomyReport:
    """
    Ask the classification service about ``sequences`` and validate the answer.

    Args:
        sequences: Stored sequence rows or SequenceRecord objects
        classifier: Callable sending a prompt to the service and
            returning its JSON answer
        preview_length: Number of leading bases shown per sequence

    Raises:
        UpstreamServiceError: If the classifier call fails
        InvalidUpstreamResponse: If the answer does not match the schema
    """
    prompt = build_analysis_prompt(sequences, preview_length=preview_length)
    logger.info("Requesting classification for %d sequences", len(sequences))

    try:
        answer = classifier(prompt)
    except Exception as exc:
        logger.error("Classification service failed: %s", exc)
        raise UpstreamServiceError(f"AI analysis failed: {exc}") from exc

    report = parse_classification_response(answer)
    logger.info("Classification returned %d taxa", len(report.taxa))
    return report


def _store(action: str, call: Callable[..., Any], *args: Any) -> Any:
    try:
        return call(*args)
    except Exception as exc:
        logger.error("Failed to %s: %s", action, exc)
        raise StorageError(f"Failed to {action}: {exc}") from exc


def analyze_sequences(
    project_id: str,
    sequences: Sequence[Any],
    classifier: Classifier,
    store: AnalysisStore,
    preview_length: int = DEFAULT_INGEST.preview_length
) -> AnalysisResult:
    """
    Classify a project's sequences and record the analysis.

    The project is marked ``processing`` before the classifier is called
    and ``completed`` once the analysis and its taxa are stored. A failure
    at any step propagates and leaves the project in ``processing``.

    Args:
        project_id: Project owning the sequences
        sequences: Stored sequence rows or SequenceRecord objects
        classifier: Callable sending a prompt to the service
        store: Backend for project status, analyses and taxa

    Raises:
        UpstreamServiceError: If the classifier call fails
        InvalidUpstreamResponse: If the answer does not match the schema
        StorageError: If the store fails
    """
    logger.info("Analyzing %d sequences for project %s", len(sequences), project_id)
    _store("update project status", store.update_project_status,
           project_id, PROJECT_PROCESSING)

    report = classify_sequences(sequences, classifier, preview_length=preview_length)

    analysis = _store("save analysis", store.insert_analysis,
                      report.to_analysis_row(project_id, len(sequences)))
    taxa = _store("save taxa", store.insert_taxa, report.to_rows(analysis["id"]))

    _store("update project status", store.update_project_status,
           project_id, PROJECT_COMPLETED)
    logger.info("Analysis %s completed for project %s", analysis["id"], project_id)

    return AnalysisResult(
        analysis=analysis,
        taxa=taxa,
        taxa_count=report.summary.total_taxa,
    )
