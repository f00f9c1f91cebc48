"""Artifact serialization helpers for parsed documents.

Responsibilities:
- Build the reduced standard-format payload shared with other book importers.
- Build the complete JSON-safe export payload of a parsed `Document`.
- Write the document payload and per-chapter text files to an `ArtifactStore`.
"""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

from ..io.storage import ArtifactStore
from ..models.datatypes import Chapter, Document
from ..text.durations import format_duration
from ..text.phonemes import apply_lexicon
from ..text.slug import chapter_file_stem


def to_standard_format(document: Document) -> dict[str, object]:
    """Reduce a document to the importer-neutral chapter list shape."""

    return {
        "title": document.title,
        "chapters": [
            {
                "sequence_number": chapter.sequence_number,
                "title": chapter.title,
                "content_text": chapter.plain_text,
                "character_count": chapter.character_count,
                "estimated_duration_seconds": chapter.estimated_duration_seconds,
            }
            for chapter in document.chapters
        ],
        "total_characters": document.total_characters,
        "total_estimated_duration": document.total_estimated_duration,
    }


def chapter_payload(chapter: Chapter) -> dict[str, object]:
    """Serialize one chapter with its export stem and formatted duration."""

    payload = asdict(chapter)
    payload["annotations"] = [asdict(annotation) for annotation in chapter.annotations]
    payload["file_stem"] = chapter_file_stem(chapter.sequence_number, chapter.title)
    payload["formatted_duration"] = format_duration(chapter.estimated_duration_seconds)
    return payload


def document_payload(document: Document) -> dict[str, object]:
    """Serialize a complete document, lexicons included, for `document.json`."""

    return {
        "title": document.title,
        "author": document.author,
        "language": document.language,
        "source_name": document.source_name,
        "has_annotations": document.has_annotations,
        "total_characters": document.total_characters,
        "total_estimated_duration": document.total_estimated_duration,
        "formatted_duration": format_duration(document.total_estimated_duration),
        "chapters": [chapter_payload(chapter) for chapter in document.chapters],
        "lexicons": [
            {
                "id": lexicon.id,
                "language": lexicon.language,
                "entries": [asdict(entry) for entry in lexicon.entries],
            }
            for lexicon in document.lexicons
        ],
    }


def write_document_export(
    document: Document,
    store: ArtifactStore,
    selected_numbers: list[int],
    apply_lexicons: bool = False,
    write_annotated: bool = True,
    extra: dict[str, str] | None = None,
) -> list[Path]:
    """Write `document.json` and the selected chapter text files.

    Chapter files are `chapters/NNN-slug.txt`; annotated variants use the
    `.ssml.txt` suffix. With `apply_lexicons`, document lexicons are applied to
    the annotated variant.

    Returns:
        Written paths in write order, `document.json` first.
    """

    selected = set(selected_numbers)
    payload = document_payload(document)
    payload["selected_chapters"] = sorted(selected)
    payload["extra"] = dict(extra or {})

    written = [store.save_document(payload)]
    for chapter in document.chapters:
        if chapter.sequence_number not in selected:
            continue
        stem = chapter_file_stem(chapter.sequence_number, chapter.title)
        written.append(store.save_chapter(stem, chapter.plain_text))
        if not write_annotated:
            continue
        annotated = chapter.annotated_text
        if apply_lexicons:
            annotated = apply_lexicon(annotated, document.lexicons)
        written.append(store.save_chapter(stem, annotated, annotated=True))
    return written
