"""
Upload processing: parse an uploaded file, score each sequence and
persist the results through a storage backend.

The storage backend is any object implementing ``SequenceStore``; the
in-memory store below is used by the CLI and the tests.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ednaseq.exceptions import InvalidRequestError, StorageError, error_path
from ednaseq.io import parse_sequence_file
from ednaseq.records import SequenceRecord

logger = logging.getLogger(__name__)


class UploadRequest(BaseModel):
    """
    A request to process one uploaded file.

    Attributes:
        file_id: Identifier of the uploaded file
        content: Raw file text
        project_id: Project the file belongs to
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_id: str = Field(alias="fileId")
    content: str
    project_id: str = Field(alias="projectId")

    @classmethod
    def from_dict(cls, body: Mapping[str, Any]) -> "UploadRequest":
        """
        Build a request from a decoded JSON body.

        Accepts ``fileId``/``content``/``projectId`` as well as their
        snake_case spellings.

        Raises:
            InvalidRequestError: If the body is not an object or a field
                is missing or not a string
        """
        try:
            return cls.model_validate(body)
        except ValidationError as exc:
            first = exc.errors()[0]
            raise InvalidRequestError(
                f"Invalid request at {error_path(first['loc'])}: {first['msg']}"
            ) from exc


@dataclass(frozen=True)
class SequenceRow:
    """Storage shape of a scored sequence, linked to its parent file."""
    file_id: str
    sequence_data: str
    quality_score: float
    length: int
    metadata: Dict[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def from_record(cls, file_id: str, record: SequenceRecord) -> "SequenceRow":
        return cls(
            file_id=file_id,
            sequence_data=record.sequence,
            quality_score=record.quality_score,
            length=record.length,
            metadata={
                "header": record.header,
                "description": record.description,
            },
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UploadResult:
    sequences_count: int
    sequences: List[Dict[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "sequences_count": self.sequences_count,
            "sequences": self.sequences,
        }


class SequenceStore(ABC):
    """Persistence backend for scored sequences."""

    @abstractmethod
    def insert_sequences(self, rows: List[SequenceRow]) -> List[Dict[str, Any]]:
        """
        Persist rows in one batch.

        Returns:
            The stored rows, as the backend represents them
        """


class InMemorySequenceStore(SequenceStore):
    """
    Store that keeps rows in a list, assigning an id and creation time
    to each inserted row.
    """

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []

    def insert_sequences(self, rows: List[SequenceRow]) -> List[Dict[str, Any]]:
        created_at = datetime.now(timezone.utc).isoformat()
        stored = []
        for row in rows:
            item = row.to_dict()
            item["id"] = str(uuid.uuid4())
            item["created_at"] = created_at
            item["analysis_id"] = None
            stored.append(item)
        self.rows.extend(stored)
        return stored

    def for_file(self, file_id: str) -> List[Dict[str, Any]]:
        return [row for row in self.rows if row["file_id"] == file_id]


def build_sequence_rows(file_id: str, content: str) -> List[SequenceRow]:
    """Parse ``content`` and turn each record into a storage row."""
    records = parse_sequence_file(content)
    logger.info("Parsed %d sequences from file %s", len(records), file_id)
    return [SequenceRow.from_record(file_id, record) for record in records]


def process_file_upload(request: UploadRequest, store: SequenceStore) -> UploadResult:
    """
    Parse, score and persist the sequences of an uploaded file.

    Args:
        request: Upload request carrying the file id, content and project id
        store: Backend receiving the scored rows in a single insert

    Returns:
        UploadResult with the number and contents of stored rows

    Raises:
        StorageError: If the store fails; the request is not retried
    """
    logger.info("Processing file %s for project %s", request.file_id, request.project_id)
    rows = build_sequence_rows(request.file_id, request.content)

    try:
        saved = store.insert_sequences(rows)
    except Exception as exc:
        logger.error("Failed to save sequences for file %s: %s", request.file_id, exc)
        raise StorageError(f"Failed to save sequences: {exc}") from exc

    logger.info("Saved %d sequences for file %s", len(saved), request.file_id)
    return UploadResult(sequences_count=len(saved), sequences=saved)
