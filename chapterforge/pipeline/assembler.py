"""Document assembly for EPUB chapter extraction.

Responsibilities:
- Define the stage order from raw container bytes to a `Document`.
- Walk the spine, extract each content document, infer its title, and keep
  only narrative units as densely numbered chapters.
- Compute document totals from the surviving chapters.

Key types:
- `DocumentAssembler`: orchestration facade.
"""

from __future__ import annotations

import zipfile
from collections.abc import Callable

from bs4 import Tag

from ..errors import EmptyDocumentError
from ..io.container import ContainerReader
from ..io.lexicon import LexiconParser
from ..io.markup import load_content_document, read_entry
from ..io.navigation import NavigationParser
from ..io.package import PackageDescriptorParser
from ..models.datatypes import Chapter, Document, PackageDescriptor, PronunciationLexicon
from ..telemetry.events import ParseEventSink
from ..text.classifier import NarrativeClassifier
from ..text.durations import estimate_duration_seconds
from ..text.extractor import ContentExtractor
from ..text.titles import TitleInferenceEngine
from .telemetry import StageTelemetryMixin

HTML_MEDIA_TYPE_MARKER = "html"


class DocumentAssembler(StageTelemetryMixin):
    """Coordinate container, package, navigation and chapter stages for one parse."""

    def __init__(
        self,
        event_sink: ParseEventSink | None = None,
        stage_progress_callback: Callable[[str, int, int], None] | None = None,
        extractor: ContentExtractor | None = None,
        title_engine: TitleInferenceEngine | None = None,
        classifier: NarrativeClassifier | None = None,
    ) -> None:
        """Initialize optional event reporting and replaceable stage components."""

        self._event_sink = event_sink
        self._stage_progress_callback = stage_progress_callback
        self._container_reader = ContainerReader()
        self._package_parser = PackageDescriptorParser()
        self._navigation_parser = NavigationParser(event_sink=event_sink)
        self._lexicon_parser = LexiconParser(event_sink=event_sink)
        self._extractor = extractor or ContentExtractor()
        self._title_engine = title_engine or TitleInferenceEngine()
        self._classifier = classifier or NarrativeClassifier()

    def parse(self, raw_bytes: bytes, display_name: str) -> Document:
        """Parse EPUB bytes into an immutable `Document`.

        Raises:
            InvalidContainerError: If the bytes are not a readable container.
            InvalidPackageError: If the package descriptor is missing or unusable.
            EmptyDocumentError: If no narrative chapter survives classification.
        """

        archive, rootfile_path = self._run_stage("container", lambda: self._open_container(raw_bytes))
        with archive:
            package = self._run_stage(
                "package",
                lambda: self._package_parser.parse(archive, rootfile_path),
            )
            navigation = self._run_stage("navigation", lambda: self._navigation(archive, package))
            lexicons = self._run_stage("lexicons", lambda: self._lexicons(archive, package))
            chapters = self._run_stage(
                "chapters",
                lambda: self._chapters(archive, package, navigation),
            )
        return self._run_stage(
            "assemble",
            lambda: self._assemble(package, chapters, lexicons, display_name),
        )

    def _open_container(self, raw_bytes: bytes) -> tuple[zipfile.ZipFile, str]:
        """Open the container and locate its package descriptor path."""

        archive = self._container_reader.open(raw_bytes)
        try:
            return archive, self._container_reader.find_rootfile_path(archive)
        except Exception:
            archive.close()
            raise

    def _navigation(self, archive: zipfile.ZipFile, package: PackageDescriptor) -> dict[str, str]:
        """Return the navigation label lookup, empty when the package has no NCX."""

        if package.navigation_path is None:
            return {}
        return self._navigation_parser.parse(archive, package.navigation_path)

    def _lexicons(
        self,
        archive: zipfile.ZipFile,
        package: PackageDescriptor,
    ) -> tuple[PronunciationLexicon, ...]:
        """Load every declared lexicon, skipping unreadable ones."""

        loaded = (self._lexicon_parser.parse(archive, path) for path in package.lexicon_paths)
        return tuple(lexicon for lexicon in loaded if lexicon is not None)

    def _chapters(
        self,
        archive: zipfile.ZipFile,
        package: PackageDescriptor,
        navigation: dict[str, str],
    ) -> tuple[Chapter, ...]:
        """Extract and classify spine items, numbering narrative chapters densely."""

        chapters: list[Chapter] = []
        for idref in package.reading_order:
            entry = package.manifest.get(idref)
            if entry is None:
                self._emit("WARNING", "unit_skipped", "chapters", idref=idref, reason="not_in_manifest")
                continue
            if HTML_MEDIA_TYPE_MARKER not in entry.media_type.lower():
                self._emit(
                    "INFO",
                    "unit_skipped",
                    "chapters",
                    idref=idref,
                    reason="not_content_document",
                )
                continue

            data = read_entry(archive, entry.resource_path)
            if data is None:
                self._emit(
                    "WARNING",
                    "unit_skipped",
                    "chapters",
                    path=entry.resource_path,
                    reason="missing_resource",
                )
                continue

            chapter = self._chapter_from_content(
                data,
                entry.resource_path,
                navigation.get(entry.resource_path),
                len(chapters) + 1,
            )
            if chapter is not None:
                chapters.append(chapter)
        return tuple(chapters)

    def _chapter_from_content(
        self,
        data: bytes,
        resource_path: str,
        navigation_label: str | None,
        sequence_number: int,
    ) -> Chapter | None:
        """Build a chapter from one content document, or `None` when excluded."""

        try:
            soup = load_content_document(data)
            body = soup.find("body")
            extracted = self._extractor.extract(body) if isinstance(body, Tag) else None
        except Exception as exc:
            self._emit(
                "WARNING",
                "unit_failed",
                "chapters",
                path=resource_path,
                error_type=type(exc).__name__,
            )
            return None

        if extracted is None:
            self._emit("INFO", "unit_skipped", "chapters", path=resource_path, reason="no_text")
            return None

        title, title_source = self._title_engine.infer_with_source(
            soup,
            navigation_label,
            sequence_number,
            extracted.plain_text,
        )
        classification = self._classifier.classify(title, extracted.plain_text)
        if not classification.is_narrative:
            self._emit(
                "INFO",
                "chapter_excluded",
                "chapters",
                path=resource_path,
                reason=classification.reason,
            )
            return None

        character_count = len(extracted.plain_text)
        self._emit(
            "INFO",
            "chapter_added",
            "chapters",
            index=sequence_number,
            path=resource_path,
            chars=character_count,
            title_source=title_source,
        )
        return Chapter(
            sequence_number=sequence_number,
            title=title,
            plain_text=extracted.plain_text,
            annotated_text=extracted.annotated_text,
            character_count=character_count,
            estimated_duration_seconds=estimate_duration_seconds(character_count),
            annotations=extracted.annotations,
            source_path=resource_path,
        )

    def _assemble(
        self,
        package: PackageDescriptor,
        chapters: tuple[Chapter, ...],
        lexicons: tuple[PronunciationLexicon, ...],
        display_name: str,
    ) -> Document:
        """Aggregate chapters into a document with derived totals."""

        if not chapters:
            raise EmptyDocumentError(
                f"No narrative chapters found in `{display_name}`.",
                hint="The book may contain only front/back matter or image-only pages.",
            )

        has_annotations = bool(lexicons) or any(chapter.annotations for chapter in chapters)
        return Document(
            title=package.title,
            author=package.author,
            language=package.language,
            chapters=chapters,
            total_characters=sum(chapter.character_count for chapter in chapters),
            total_estimated_duration=sum(
                chapter.estimated_duration_seconds for chapter in chapters
            ),
            has_annotations=has_annotations,
            lexicons=lexicons,
            source_name=display_name,
        )


def parse_document(
    raw_bytes: bytes,
    display_name: str,
    event_sink: ParseEventSink | None = None,
) -> Document:
    """Parse EPUB bytes into a `Document` of narrative chapters.

    Args:
        raw_bytes: Complete container bytes.
        display_name: Caller-facing name used in diagnostics.
        event_sink: Optional receiver for structured parse events.

    Returns:
        Immutable parsed document. Identical input yields an equal document.
    """

    return DocumentAssembler(event_sink=event_sink).parse(raw_bytes, display_name)
