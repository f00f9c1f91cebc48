"""Pronunciation Lexicon Specification (PLS) parsing."""

from __future__ import annotations

import posixpath
import zipfile

from bs4 import Tag

from ..errors import InvalidContainerError
from ..models.datatypes import LexiconEntry, PronunciationLexicon
from ..telemetry.events import ParseEventSink
from .markup import load_xml, read_entry, tag_text

DEFAULT_LEXICON_LANGUAGE = "es"
DEFAULT_ALPHABET = "ipa"


class LexiconParser:
    """Load grapheme/phoneme tables declared in the package manifest."""

    def __init__(self, event_sink: ParseEventSink | None = None) -> None:
        """Initialize with an optional event sink for skip events."""

        self._event_sink = event_sink

    def parse(self, archive: zipfile.ZipFile, lexicon_path: str) -> PronunciationLexicon | None:
        """Parse one PLS resource.

        Returns `None` when the resource is missing or unreadable; the caller
        skips the lexicon and keeps parsing the document.
        """

        try:
            data = read_entry(archive, lexicon_path)
        except InvalidContainerError as exc:
            self._emit("WARNING", "lexicon_invalid", path=lexicon_path, error_type=type(exc).__name__)
            return None
        if data is None:
            self._emit("WARNING", "lexicon_missing", path=lexicon_path)
            return None

        try:
            lexicon = self._parse_bytes(data, lexicon_path)
        except Exception as exc:
            self._emit("WARNING", "lexicon_invalid", path=lexicon_path, error_type=type(exc).__name__)
            return None

        if lexicon is None:
            self._emit("WARNING", "lexicon_invalid", path=lexicon_path, error_type="MissingLexiconRoot")
            return None

        self._emit("INFO", "lexicon_loaded", path=lexicon_path, entries=len(lexicon.entries))
        return lexicon

    def _parse_bytes(self, data: bytes, lexicon_path: str) -> PronunciationLexicon | None:
        """Build a lexicon record from PLS bytes, or `None` without a `<lexicon>` root."""

        soup = load_xml(data)
        root = soup.find("lexicon")
        if not isinstance(root, Tag):
            return None

        language = (root.get("xml:lang") or "").strip() or DEFAULT_LEXICON_LANGUAGE
        alphabet = (root.get("alphabet") or "").strip() or DEFAULT_ALPHABET

        entries: list[LexiconEntry] = []
        for lexeme in root.find_all("lexeme"):
            grapheme = tag_text(lexeme.find("grapheme"))
            phoneme = tag_text(lexeme.find("phoneme"))
            if grapheme and phoneme:
                entries.append(LexiconEntry(grapheme=grapheme, phoneme=phoneme, alphabet=alphabet))

        return PronunciationLexicon(
            id=posixpath.basename(lexicon_path),
            language=language,
            entries=tuple(entries),
        )

    def _emit(self, level: str, event: str, **context: object) -> None:
        """Forward one lexicon event to the sink when present."""

        if self._event_sink is not None:
            self._event_sink.emit(level, event, "lexicons", **context)
