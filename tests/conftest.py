"""Shared pytest fixtures for the full chapterforge test suite."""

from __future__ import annotations

import pytest

from tests.epub_builder import ContentDocument, NavigationPoint, build_epub, narrative_body


@pytest.fixture
def three_chapter_epub() -> bytes:
    """Provide a small book with navigation labels for every chapter."""

    documents = [
        ContentDocument("c1", "text/ch1.xhtml", narrative_body("The Oasis")),
        ContentDocument("c2", "text/ch2.xhtml", narrative_body("The Dunes")),
        ContentDocument("c3", "text/ch3.xhtml", narrative_body("The Well")),
    ]
    navigation = [
        NavigationPoint("One: The Oasis", "text/ch1.xhtml"),
        NavigationPoint("Two: The Dunes", "text/ch2.xhtml#start"),
        NavigationPoint("Three: The Well", "text/ch3.xhtml"),
    ]
    return build_epub(documents, navigation=navigation)
