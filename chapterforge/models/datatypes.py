"""Core datatypes shared across chapterforge modules.

Responsibilities:
- Represent immutable records exchanged between parsing stages.
- Keep a parsed `Document` fully immutable so callers own it exclusively.

Key types:
- `ManifestEntry`, `PackageDescriptor`, `LexiconEntry`, `PronunciationLexicon`,
  `PhoneticAnnotation`, `ExtractedContent`, `Chapter`, and `Document`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """One `<item>` declared in the package manifest.

    Attributes:
        id: Manifest identifier referenced by the spine.
        resource_path: Container path resolved against the descriptor directory.
        media_type: Declared media type, empty when absent.
    """

    id: str
    resource_path: str
    media_type: str


@dataclass(frozen=True, slots=True)
class PackageDescriptor:
    """Parsed root package descriptor (OPF).

    Attributes:
        path: Container path of the descriptor itself.
        title: Book title or the `Untitled` placeholder.
        author: First creator or the `Unknown Author` placeholder.
        language: Language code, `es` when absent.
        manifest: Manifest entries keyed by id.
        reading_order: Spine idrefs in document order.
        lexicon_paths: Pronunciation lexicon paths in declaration order.
        navigation_path: NCX path, or `None` when no navigation resource exists.
    """

    path: str
    title: str
    author: str
    language: str
    manifest: Mapping[str, ManifestEntry]
    reading_order: tuple[str, ...]
    lexicon_paths: tuple[str, ...] = field(default_factory=tuple)
    navigation_path: str | None = None


@dataclass(frozen=True, slots=True)
class LexiconEntry:
    """Grapheme to phoneme substitution rule."""

    grapheme: str
    phoneme: str
    alphabet: str


@dataclass(frozen=True, slots=True)
class PronunciationLexicon:
    """Pronunciation lexicon (PLS) loaded from the container.

    Attributes:
        id: Resource basename.
        language: Lexicon language, `es` when undeclared.
        entries: Ordered substitution rules.
    """

    id: str
    language: str
    entries: tuple[LexiconEntry, ...]


@dataclass(frozen=True, slots=True)
class PhoneticAnnotation:
    """Inline phoneme markup found while extracting a content document."""

    original_text: str
    phoneme: str
    alphabet: str


@dataclass(frozen=True, slots=True)
class ExtractedContent:
    """Linearized text of one content document.

    Attributes:
        plain_text: Text without markup.
        annotated_text: Text with `<phoneme>` wrappers around annotated spans.
        annotations: Annotations in document order.
    """

    plain_text: str
    annotated_text: str
    annotations: tuple[PhoneticAnnotation, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class Chapter:
    """A narrative chapter extracted from one content document.

    Attributes:
        sequence_number: Dense 1-based index among narrative chapters.
        title: Inferred title, never empty, at most 150 characters.
        plain_text: Chapter text without markup.
        annotated_text: Chapter text with phoneme wrappers.
        character_count: Exactly `len(plain_text)`.
        estimated_duration_seconds: `ceil(character_count / 12.5)`.
        annotations: Inline phonetic annotations in document order.
        source_path: Container path of the content document.
    """

    sequence_number: int
    title: str
    plain_text: str
    annotated_text: str
    character_count: int
    estimated_duration_seconds: int
    annotations: tuple[PhoneticAnnotation, ...] = field(default_factory=tuple)
    source_path: str = ""


@dataclass(frozen=True, slots=True)
class Document:
    """Aggregate result of one parse call.

    Attributes:
        title: Book title from package metadata.
        author: Book author from package metadata.
        language: Book language from package metadata.
        chapters: Narrative chapters ordered by sequence number.
        total_characters: Sum of chapter character counts.
        total_estimated_duration: Sum of chapter duration estimates in seconds.
        has_annotations: Whether any chapter annotation or lexicon was found.
        lexicons: Successfully loaded pronunciation lexicons.
        source_name: Display name passed by the caller.
    """

    title: str
    author: str
    language: str
    chapters: tuple[Chapter, ...]
    total_characters: int
    total_estimated_duration: int
    has_annotations: bool
    lexicons: tuple[PronunciationLexicon, ...] = field(default_factory=tuple)
    source_name: str = ""
