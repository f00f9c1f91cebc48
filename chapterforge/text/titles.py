"""Chapter title inference for content documents.

Responsibilities:
- Resolve a human-readable title per content document through an ordered
  strategy table, first non-empty result wins.
- Normalize and cap titles so they are single-line and never empty.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from ..parsing import collapse_whitespace, truncate_with_ellipsis

MAX_TITLE_CHARS = 150
MAX_KEYWORD_ELEMENT_CHARS = 200
MAX_DOCUMENT_TITLE_CHARS = 100
MAX_BOLD_TITLE_CHARS = 100
PATTERN_WINDOW_CHARS = 500

TITLE_KEYWORDS = (
    "chapter",
    "chapitre",
    "capitulo",
    "capítulo",
    "title",
    "titulo",
    "título",
    "heading",
    "head",
)

_SUBTITLE = r"(?:[ \t]*[:.\-–—][ \t]*[^\n]+)?"
_ROMAN_NUMERAL = r"(?=[mdclxvi])m{0,3}(?:cm|cd|d?c{0,3})(?:xc|xl|l?x{0,3})(?:ix|iv|v?i{0,3})(?<=[mdclxvi])"
_ORDINAL = rf"(?:\d+|{_ROMAN_NUMERAL})\b"

CHAPTER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"^(?:cap[ií]tulo|chapter|chapitre)\s+{_ORDINAL}{_SUBTITLE}", re.IGNORECASE | re.MULTILINE),
    re.compile(rf"^(?:parte|part)\s+{_ORDINAL}{_SUBTITLE}", re.IGNORECASE | re.MULTILINE),
    re.compile(
        rf"^(?:pr[oó]logo|prologue|ep[ií]logo|epilogue|introducci[oó]n|introduction)\b{_SUBTITLE}",
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(rf"^(?:acto|act|escena|scene)\s+{_ORDINAL}{_SUBTITLE}", re.IGNORECASE | re.MULTILINE),
    re.compile(rf"^cap\.?\s*\d+\b{_SUBTITLE}", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^\d+\.[ \t]+[A-ZÁÉÍÓÚÑ][^\n]*", re.MULTILINE),
    re.compile(r"^[IVXLCDM]+\.[ \t]+[^\n]+", re.MULTILINE),
)


@dataclass(frozen=True, slots=True)
class TitleContext:
    """Inputs available to every title strategy."""

    soup: BeautifulSoup
    navigation_label: str | None
    sequence_number: int
    plain_text: str


_TitleStrategy = Callable[[TitleContext], str]


def _first_tag_text(soup: BeautifulSoup, names: str | list[str]) -> str:
    """Return the collapsed text of the first tag matching `names`."""

    tag = soup.find(names)
    if not isinstance(tag, Tag):
        return ""
    return collapse_whitespace(tag.get_text())


def _under(limit: int, text: str) -> str:
    """Return `text` only when it is shorter than `limit` characters."""

    return text if len(text) < limit else ""


def _from_navigation(context: TitleContext) -> str:
    return collapse_whitespace(context.navigation_label or "")


def _from_h1(context: TitleContext) -> str:
    return _first_tag_text(context.soup, "h1")


def _from_h2(context: TitleContext) -> str:
    return _first_tag_text(context.soup, "h2")


def _from_h3(context: TitleContext) -> str:
    return _first_tag_text(context.soup, "h3")


def _from_keyword_element(context: TitleContext) -> str:
    """Return the first short element whose class/id names a chapter heading."""

    body = context.soup.find("body")
    scope = body if isinstance(body, Tag) else context.soup
    for element in scope.find_all(True):
        if not _has_title_keyword(element):
            continue
        text = _under(MAX_KEYWORD_ELEMENT_CHARS, collapse_whitespace(element.get_text()))
        if text:
            return text
    return ""


def _from_document_title(context: TitleContext) -> str:
    # Long <title> values are usually the whole-book title.
    return _under(MAX_DOCUMENT_TITLE_CHARS, _first_tag_text(context.soup, "title"))


def _from_bold(context: TitleContext) -> str:
    return _under(MAX_BOLD_TITLE_CHARS, _first_tag_text(context.soup, ["b", "strong"]))


def _from_text_patterns(context: TitleContext) -> str:
    window = context.plain_text[:PATTERN_WINDOW_CHARS]
    for pattern in CHAPTER_PATTERNS:
        match = pattern.search(window)
        if match is not None:
            return match.group(0).strip()
    return ""


def _has_title_keyword(element: Tag) -> bool:
    """Return whether an element's class or id contains a title keyword."""

    for attribute in ("class", "id"):
        value = element.get(attribute)
        if not value:
            continue
        if isinstance(value, list):
            value = " ".join(value)
        lowered = value.lower()
        if any(keyword in lowered for keyword in TITLE_KEYWORDS):
            return True
    return False


class TitleInferenceEngine:
    """Infer chapter titles through an ordered strategy cascade."""

    _STRATEGIES: tuple[tuple[str, _TitleStrategy], ...] = (
        ("navigation", _from_navigation),
        ("h1", _from_h1),
        ("h2", _from_h2),
        ("keyword_element", _from_keyword_element),
        ("h3", _from_h3),
        ("document_title", _from_document_title),
        ("bold", _from_bold),
        ("text_pattern", _from_text_patterns),
    )

    def infer(
        self,
        soup: BeautifulSoup,
        navigation_label: str | None,
        sequence_number: int,
        plain_text: str,
    ) -> str:
        """Return the normalized title for one content document."""

        title, _ = self.infer_with_source(soup, navigation_label, sequence_number, plain_text)
        return title

    def infer_with_source(
        self,
        soup: BeautifulSoup,
        navigation_label: str | None,
        sequence_number: int,
        plain_text: str,
    ) -> tuple[str, str]:
        """Return the normalized title and the name of the strategy that produced it."""

        context = TitleContext(
            soup=soup,
            navigation_label=navigation_label,
            sequence_number=sequence_number,
            plain_text=plain_text,
        )
        for name, strategy in self._STRATEGIES:
            candidate = collapse_whitespace(strategy(context))
            if candidate:
                return truncate_with_ellipsis(candidate, MAX_TITLE_CHARS), name
        return fallback_title(sequence_number), "fallback"


def fallback_title(sequence_number: int) -> str:
    """Return the default title for a chapter without any title evidence."""

    return f"Chapter {sequence_number}"
