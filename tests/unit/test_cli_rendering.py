"""Unit tests for CLI output and error rendering helpers."""

from __future__ import annotations

import pytest
import typer

from chapterforge.cli_rendering import (
    echo_chapter_list,
    echo_document_summary,
    exit_with_command_error,
    format_chapter_row,
)
from chapterforge.errors import InvalidContainerError, PipelineStageError
from chapterforge.models.datatypes import Chapter, Document


def _chapter(number: int, title: str, characters: int, seconds: int) -> Chapter:
    """Build a chapter record with placeholder text of the given length."""

    text = "x" * characters
    return Chapter(
        sequence_number=number,
        title=title,
        plain_text=text,
        annotated_text=text,
        character_count=characters,
        estimated_duration_seconds=seconds,
    )


def test_exit_with_command_error_renders_stage_error_with_hint(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print stage diagnostics and hint before exiting with code 1."""

    error = PipelineStageError(
        stage="input",
        detail="Input EPUB not found: `missing.epub`.",
        hint="Check the path passed as `<input.epub>`.",
    )

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("parse", error)

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "parse failed at stage `input`: Input EPUB not found" in captured.err
    assert "Hint: Check the path passed as `<input.epub>`." in captured.err


def test_exit_with_command_error_uses_parse_error_stage(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Document parse errors carry their own stage name."""

    with pytest.raises(typer.Exit):
        exit_with_command_error("export", InvalidContainerError("Input is not a valid zip."))

    assert "export failed at stage `container`: Input is not a valid zip." in capsys.readouterr().err


def test_exit_with_command_error_renders_non_stage_fallback(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print fallback exception text for non-stage failures."""

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("list-chapters", RuntimeError("unexpected failure"))

    assert exc_info.value.exit_code == 1
    assert "list-chapters failed: unexpected failure" in capsys.readouterr().err


def test_chapter_rows_include_characters_and_duration(capsys: pytest.CaptureFixture[str]) -> None:
    """Chapter rows render as `N. Title (chars, duration)` ordered by number."""

    chapters = [_chapter(2, "The Dunes", 2500, 200), _chapter(1, "The Oasis", 480, 39)]

    assert format_chapter_row(chapters[0]) == "2. The Dunes (2500 chars, 3m 20s)"
    echo_chapter_list(chapters)

    assert capsys.readouterr().out.splitlines() == [
        "1. The Oasis (480 chars, 39s)",
        "2. The Dunes (2500 chars, 3m 20s)",
    ]


def test_document_summary_lists_metadata_and_totals(capsys: pytest.CaptureFixture[str]) -> None:
    """The summary should show metadata, totals and the phonetic data flag."""

    document = Document(
        title="The Long Road",
        author="Ana Torres",
        language="en",
        chapters=(_chapter(1, "The Oasis", 480, 39),),
        total_characters=480,
        total_estimated_duration=39,
        has_annotations=False,
    )

    echo_document_summary(document)

    assert capsys.readouterr().out.splitlines() == [
        "Title: The Long Road",
        "Author: Ana Torres",
        "Language: en",
        "Chapters: 1",
        "Characters: 480",
        "Estimated duration: 39s",
        "Phonetic data: no",
    ]
