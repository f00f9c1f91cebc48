"""Narrative vs. front/back matter classification.

Responsibilities:
- Decide whether an extracted content unit belongs in the chapter sequence.
- Stay a pure predicate over `(title, text)` with a stable reason code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..parsing import collapse_whitespace

MIN_NARRATIVE_CHARS = 200
LEGAL_WINDOW_CHARS = 500
LEGAL_PAGE_MAX_CHARS = 1500

REASON_NARRATIVE = "narrative"
REASON_NON_NARRATIVE_TITLE = "non_narrative_title"
REASON_BELOW_MINIMUM_LENGTH = "below_minimum_length"
REASON_LEGAL_NOTICE = "legal_notice"

# Whole-title matches, English and Spanish.
NON_NARRATIVE_TITLE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(?:table of )?contents",
        r"[íi]ndice(?: general)?",
        r"tabla de contenidos?",
        r"contenidos?",
        r"sumario",
        r"copyright(?: page| notice)?",
        r"derechos de autor",
        r"legal notice",
        r"(?:aviso|nota) legal",
        r"credits",
        r"cr[ée]ditos",
        r"title page",
        r"half[- ]title",
        r"p[áa]gina de t[íi]tulo",
        r"portada",
        r"portadilla",
        r"cover",
        r"acknowledge?ments?",
        r"agradecimientos?",
        r"dedication",
        r"dedicatoria",
        r"colophon",
        r"colof[óo]n",
        r"(?:author|editor|translator)['’]?s note",
        r"a note from the (?:author|editor)",
        r"nota (?:del|de la) (?:autor|autora|editor|editora|traductor|traductora)",
        r"bibliograph(?:y|ies)",
        r"bibliograf[íi]a",
        r"references",
        r"referencias(?: bibliogr[áa]ficas)?",
        r"about the authors?",
        r"(?:sobre|acerca) (?:el|del|de la|la) autora?",
        r"(?:other |more )?books by .+",
        r"also by .+",
        r"(?:otros|m[áa]s) libros (?:de|del|de la) .+",
        r"otras obras (?:de|del|de la) .+",
        r"synopsis",
        r"sinopsis",
    )
)

LEGAL_MARKER_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(?:©|\(c\)|copyright)\s*(?:©\s*)?\d{4}",
        r"all rights reserved",
        r"todos los derechos reservados",
        r"\bISBN\b",
        r"dep[óo]sito legal",
        r"\bprinted in\b",
        r"\bimpreso en\b",
        r"\bfirst (?:edition|printing)\b",
        r"\bprimera edici[óo]n\b",
    )
)


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Outcome of classifying one content unit."""

    is_narrative: bool
    reason: str


class NarrativeClassifier:
    """Exclude front/back matter and separator pages from the chapter sequence."""

    def classify(self, title: str, text: str) -> ClassificationResult:
        """Classify a unit by title label, length floor, and legal markers."""

        if self._has_non_narrative_title(title):
            return ClassificationResult(False, REASON_NON_NARRATIVE_TITLE)
        if len(text) < MIN_NARRATIVE_CHARS:
            return ClassificationResult(False, REASON_BELOW_MINIMUM_LENGTH)
        if len(text) < LEGAL_PAGE_MAX_CHARS and self._has_legal_marker(text):
            return ClassificationResult(False, REASON_LEGAL_NOTICE)
        return ClassificationResult(True, REASON_NARRATIVE)

    def is_narrative(self, title: str, text: str) -> bool:
        """Return whether the unit should appear as a chapter."""

        return self.classify(title, text).is_narrative

    def _has_non_narrative_title(self, title: str) -> bool:
        """Return whether the whole title is a known front/back matter label."""

        normalized = collapse_whitespace(title).strip(" .:;-–—")
        if not normalized:
            return False
        return any(pattern.fullmatch(normalized) for pattern in NON_NARRATIVE_TITLE_PATTERNS)

    def _has_legal_marker(self, text: str) -> bool:
        """Return whether the opening window carries a copyright/legal marker."""

        window = text[:LEGAL_WINDOW_CHARS]
        return any(pattern.search(window) for pattern in LEGAL_MARKER_PATTERNS)
