"""
ednaseq: Sequence ingestion for eDNA biodiversity analysis

This package provides tools for:
- Detecting and parsing uploaded FASTA, FASTQ and plain-line files
- Composition-based quality scoring of sequences
- Batch statistics over parsed sequences
- Processing uploads into storage rows
- Validating taxonomic classifications returned by an external service
"""

__version__ = "0.1.0"
__author__ = "ednaseq Contributors"

from ednaseq.records import SequenceRecord

from ednaseq.io import (
    SequenceFormat,
    detect_format,
    parse_sequence_file,
    read_sequence_file,
)

from ednaseq.utils import (
    gc_content,
    valid_base_fraction,
    calculate_quality_score,
)

from ednaseq.stats import SequenceSummary, summarize_records

from ednaseq.ingest import (
    UploadRequest,
    UploadResult,
    SequenceStore,
    InMemorySequenceStore,
    process_file_upload,
)

from ednaseq.taxonomy import (
    TaxonomyReport,
    AnalysisResult,
    AnalysisStore,
    InMemoryAnalysisStore,
    analyze_sequences,
    parse_classification_response,
    classify_sequences,
)

from ednaseq.exceptions import (
    EdnaSeqError,
    InvalidRequestError,
    StorageError,
    UpstreamServiceError,
    InvalidUpstreamResponse,
)

__all__ = [
    # Records and parsing
    "SequenceRecord",
    "SequenceFormat",
    "detect_format",
    "parse_sequence_file",
    "read_sequence_file",
    # Scoring
    "gc_content",
    "valid_base_fraction",
    "calculate_quality_score",
    "SequenceSummary",
    "summarize_records",
    # Upload processing
    "UploadRequest",
    "UploadResult",
    "SequenceStore",
    "InMemorySequenceStore",
    "process_file_upload",
    # Classification boundary
    "TaxonomyReport",
    "AnalysisResult",
    "AnalysisStore",
    "InMemoryAnalysisStore",
    "analyze_sequences",
    "parse_classification_response",
    "classify_sequences",
    # Errors
    "EdnaSeqError",
    "InvalidRequestError",
    "StorageError",
    "UpstreamServiceError",
    "InvalidUpstreamResponse",
]
