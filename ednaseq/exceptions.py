"""
Errors raised by the ingestion and analysis pipeline.

Parsing and scoring never raise; these cover the request, storage and
classifier boundaries around them.
"""


class EdnaSeqError(Exception):
    """Base class for ednaseq errors."""


class InvalidRequestError(EdnaSeqError, ValueError):
    """An upload request body is missing fields or has the wrong types."""


class StorageError(EdnaSeqError):
    """The sequence store failed to persist records."""


class UpstreamServiceError(EdnaSeqError):
    """The external classification service failed."""


class InvalidUpstreamResponse(UpstreamServiceError, ValueError):
    """
    The classification service answered with data that does not match
    the expected taxonomy schema.

    Attributes:
        path: Location of the offending field (e.g. ``taxa[2].confidence``)
    """

    def __init__(self, message: str, path: str = "$"):
        super().__init__(f"{path}: {message}")
        self.path = path


def error_path(loc) -> str:
    """Render a pydantic error location as ``$.taxa[0].confidence``."""
    path = "$"
    for part in loc:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path
