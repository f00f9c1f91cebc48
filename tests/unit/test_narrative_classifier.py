"""Unit tests for narrative vs. front/back matter classification."""

from __future__ import annotations

import pytest

from chapterforge.text.classifier import (
    LEGAL_PAGE_MAX_CHARS,
    MIN_NARRATIVE_CHARS,
    NarrativeClassifier,
)

STORY_TEXT = (
    "She counted the lanterns along the harbor wall and found one missing. "
    "The keeper would notice before midnight, and then the whole town would "
    "know that someone had climbed the tower while the bells were ringing for the feast."
)


def test_story_text_with_story_title_is_narrative() -> None:
    """Long story text with an ordinary title should be kept."""

    result = NarrativeClassifier().classify("The Harbor", STORY_TEXT)

    assert result.is_narrative is True
    assert result.reason == "narrative"


@pytest.mark.parametrize("title", ["Chapter 1", "Contents", "The Harbor", "Índice"])
def test_short_units_are_excluded_regardless_of_title(title: str) -> None:
    """A 150-character unit is always below the narrative floor."""

    text = ("x" * 149) + "."
    assert len(text) == 150 < MIN_NARRATIVE_CHARS

    result = NarrativeClassifier().classify(title, text)

    assert result.is_narrative is False


@pytest.mark.parametrize(
    "title",
    [
        "Table of Contents",
        "Índice",
        "Copyright",
        "Dedicatoria",
        "Acknowledgments",
        "Agradecimientos",
        "About the Author",
        "Sobre el autor",
        "Also by Ana Torres",
        "Otros libros de la autora",
        "Sinopsis",
        "Nota del traductor",
        "  Colophon. ",
    ],
)
def test_front_and_back_matter_titles_are_excluded(title: str) -> None:
    """Known front/back matter labels are excluded even with long text."""

    result = NarrativeClassifier().classify(title, STORY_TEXT * 3)

    assert result.is_narrative is False
    assert result.reason == "non_narrative_title"


def test_titles_are_matched_as_whole_labels() -> None:
    """A story title that merely contains a label word is still narrative."""

    classifier = NarrativeClassifier()

    assert classifier.is_narrative("The Dedication of Brother Tomas", STORY_TEXT)
    assert classifier.is_narrative("Contents of the Captain's Chest", STORY_TEXT)


def test_short_copyright_page_is_a_legal_notice() -> None:
    """A page opening with copyright markers is excluded below the page size limit."""

    text = "Copyright © 2024 Ana Torres. All rights reserved. ISBN 978-0-00-000000-0. " + STORY_TEXT

    result = NarrativeClassifier().classify("The Long Road", text)

    assert result.is_narrative is False
    assert result.reason == "legal_notice"


def test_long_chapter_quoting_a_copyright_notice_is_narrative() -> None:
    """Legal markers do not exclude chapter-length text."""

    text = "Copyright 1921, the old stamp read. " + STORY_TEXT * 10
    assert len(text) >= LEGAL_PAGE_MAX_CHARS

    assert NarrativeClassifier().is_narrative("The Archive", text) is True


def test_legal_markers_beyond_opening_window_are_ignored() -> None:
    """Only the first 500 characters are scanned for legal markers."""

    text = STORY_TEXT * 3 + " All rights reserved."
    assert len(text) < LEGAL_PAGE_MAX_CHARS

    assert NarrativeClassifier().is_narrative("The Harbor", text) is True
