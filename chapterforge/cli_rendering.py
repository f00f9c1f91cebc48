"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
document summaries, and chapter listing rows.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import PipelineStageError
from .models.datatypes import Chapter, Document
from .text.durations import format_duration


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_document_summary(document: Document) -> None:
    """Print book metadata and document-level totals."""

    typer.echo(f"Title: {document.title}")
    typer.echo(f"Author: {document.author}")
    typer.echo(f"Language: {document.language}")
    typer.echo(f"Chapters: {len(document.chapters)}")
    typer.echo(f"Characters: {document.total_characters}")
    typer.echo(f"Estimated duration: {format_duration(document.total_estimated_duration)}")
    typer.echo(f"Phonetic data: {'yes' if document.has_annotations else 'no'}")


def format_chapter_row(chapter: Chapter) -> str:
    """Return one `N. Title (chars, duration)` listing row."""

    duration = format_duration(chapter.estimated_duration_seconds)
    return f"{chapter.sequence_number}. {chapter.title} ({chapter.character_count} chars, {duration})"


def echo_chapter_list(chapters: tuple[Chapter, ...] | list[Chapter]) -> None:
    """Print compact deterministic chapter rows ordered by sequence number."""

    for chapter in sorted(chapters, key=lambda item: item.sequence_number):
        typer.echo(format_chapter_row(chapter))
