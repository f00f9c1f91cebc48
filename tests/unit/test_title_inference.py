"""Unit tests for the title inference strategy cascade."""

from __future__ import annotations

from bs4 import BeautifulSoup

from chapterforge.io.markup import load_content_document
from chapterforge.text.titles import TitleInferenceEngine, fallback_title
from tests.epub_builder import xhtml_document


def _soup(body: str, head_title: str | None = None) -> BeautifulSoup:
    """Parse an XHTML document with the given body markup."""

    return load_content_document(xhtml_document(body, head_title).encode("utf-8"))


def test_navigation_label_takes_precedence_over_heading() -> None:
    """A navigation label should win over a conflicting `<h1>`."""

    engine = TitleInferenceEngine()

    title, source = engine.infer_with_source(
        _soup("<h1>Heading Title</h1><p>Body</p>"), "Navigation Title", 1, "Heading Title\n\nBody"
    )

    assert title == "Navigation Title"
    assert source == "navigation"


def test_headings_are_tried_in_order() -> None:
    """Without navigation, `<h1>` beats `<h2>` and `<h2>` beats `<h3>`."""

    engine = TitleInferenceEngine()

    assert engine.infer(_soup("<h3>Third</h3><h2>Second</h2><h1>First</h1>"), None, 1, "") == "First"
    assert engine.infer(_soup("<h3>Third</h3><h2>Second</h2>"), None, 1, "") == "Second"


def test_keyword_element_precedes_h3() -> None:
    """An element with a chapter-like class should be tried before `<h3>`."""

    soup = _soup('<h3>Minor Heading</h3><p class="chapter-title">The Storm</p>')

    title, source = TitleInferenceEngine().infer_with_source(soup, None, 1, "")

    assert title == "The Storm"
    assert source == "keyword_element"


def test_document_title_is_used_only_when_short() -> None:
    """The `<title>` element is a candidate only below 100 characters."""

    engine = TitleInferenceEngine()
    long_title = "A" * 120

    assert engine.infer(_soup("<p>text</p>", head_title="Short Title"), None, 4, "") == "Short Title"
    assert engine.infer(_soup("<p>text</p>", head_title=long_title), None, 4, "") == "Chapter 4"


def test_bold_text_is_a_late_candidate() -> None:
    """Bold text should be used when no heading or title exists."""

    title, source = TitleInferenceEngine().infer_with_source(
        _soup("<p><strong>The Return</strong> began at noon.</p>"), None, 2, ""
    )

    assert title == "The Return"
    assert source == "bold"


def test_text_patterns_detect_chapter_openings() -> None:
    """Chapter markers at a line start in the opening text should become the title."""

    engine = TitleInferenceEngine()
    soup = _soup("<p>body</p>")

    assert engine.infer(soup, None, 1, "Capítulo 3: El viaje\n\nEra de noche.") == "Capítulo 3: El viaje"
    assert engine.infer(soup, None, 1, "Prologue\n\nIt began with rain.") == "Prologue"
    assert engine.infer(soup, None, 1, "12. The Bridge\n\nThey crossed.") == "12. The Bridge"


def test_text_patterns_require_real_roman_numerals() -> None:
    """Words spelled with numeral letters are not chapter ordinals."""

    engine = TitleInferenceEngine()
    soup = _soup("<p>body</p>")

    assert engine.infer(soup, None, 4, "Part IV: The Return\n\nThey came back.") == "Part IV: The Return"
    assert engine.infer(soup, None, 4, "Chapter xii\n\nNight fell.") == "Chapter xii"
    assert engine.infer(soup, None, 4, "Part mid way through the march.") == "Chapter 4"
    assert engine.infer(soup, None, 4, "Act civil and quiet, they said.") == "Chapter 4"
    assert engine.infer(soup, None, 4, "Chapter did not matter to him.") == "Chapter 4"


def test_fallback_title_uses_sequence_number() -> None:
    """Without any title evidence the title is `Chapter N`."""

    title, source = TitleInferenceEngine().infer_with_source(
        _soup("<p>plain words only</p>"), None, 7, "plain words only"
    )

    assert title == fallback_title(7) == "Chapter 7"
    assert source == "fallback"


def test_titles_are_collapsed_and_truncated() -> None:
    """Titles should be single-line and capped at 150 characters."""

    engine = TitleInferenceEngine()

    assert engine.infer(_soup("<p>x</p>"), "Line one\n  line two", 1, "") == "Line one line two"
    truncated = engine.infer(_soup("<p>x</p>"), "W" * 200, 1, "")
    assert len(truncated) == 150
    assert truncated.endswith("...")


def test_blank_navigation_label_falls_through() -> None:
    """A whitespace-only navigation label is not a title."""

    assert TitleInferenceEngine().infer(_soup("<h2>Real</h2>"), "   ", 1, "") == "Real"
