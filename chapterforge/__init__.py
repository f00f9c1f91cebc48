"""Top-level package for chapterforge.

This package turns EPUB books into ordered narrative chapters with plain and
phonetically annotated text. The main entry point is `parse_document`.
"""

from .errors import (
    DocumentParseError,
    EmptyDocumentError,
    InvalidContainerError,
    InvalidPackageError,
    PipelineStageError,
)
from .pipeline import DocumentAssembler, document_payload, parse_document, to_standard_format
from .text.durations import format_duration
from .text.phonemes import apply_lexicon

__all__ = [
    "DocumentAssembler",
    "DocumentParseError",
    "EmptyDocumentError",
    "InvalidContainerError",
    "InvalidPackageError",
    "PipelineStageError",
    "__version__",
    "apply_lexicon",
    "document_payload",
    "format_duration",
    "parse_document",
    "to_standard_format",
]

__version__ = "0.1.0"
