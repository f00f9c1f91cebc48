"""Document assembly pipeline package.

Exports the assembler facade, the `parse_document` entry point and the
document serialization helpers.
"""

from .artifacts import (
    chapter_payload,
    document_payload,
    to_standard_format,
    write_document_export,
)
from .assembler import DocumentAssembler, parse_document

__all__ = [
    "DocumentAssembler",
    "chapter_payload",
    "document_payload",
    "parse_document",
    "to_standard_format",
    "write_document_export",
]
