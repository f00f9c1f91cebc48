"""Shared typed data models for chapterforge.

This package contains dataclasses used across parsing modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    Chapter,
    Document,
    ExtractedContent,
    LexiconEntry,
    ManifestEntry,
    PackageDescriptor,
    PhoneticAnnotation,
    PronunciationLexicon,
)

__all__ = [
    "Chapter",
    "Document",
    "ExtractedContent",
    "LexiconEntry",
    "ManifestEntry",
    "PackageDescriptor",
    "PhoneticAnnotation",
    "PronunciationLexicon",
]
