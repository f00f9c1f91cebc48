"""Command-line interface for chapterforge.

Responsibilities:
- Expose user-facing commands for parsing, listing and exporting EPUB chapters.
- Convert CLI arguments and YAML defaults into `ChapterforgeConfig`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import Annotated

import typer

from .cli_rendering import echo_chapter_list, echo_document_summary, exit_with_command_error
from .config import ChapterforgeConfig, ConfigLoader
from .errors import PipelineStageError
from .io.storage import ArtifactStore
from .models.datatypes import Document
from .pipeline import DocumentAssembler, to_standard_format, write_document_export
from .telemetry.logger import RunLogger
from .text.chapter_selection import format_chapter_selection, parse_chapter_selection

app = typer.Typer(
    name="chapterforge",
    no_args_is_help=True,
    help="Extract narrative chapters from EPUB books.",
)


class BuildProgressIndicator:
    """Render deterministic per-stage progress lines for long-running commands."""

    _SPINNER_FRAMES = "|/-\\"

    def __init__(self, command_name: str) -> None:
        """Initialize progress indicator metadata for a command invocation."""

        self._command_name = command_name

    def on_stage_start(self, stage_name: str, stage_index: int, stage_total: int) -> None:
        """Print one progress line for a stage start transition."""

        spinner = self._SPINNER_FRAMES[(stage_index - 1) % len(self._SPINNER_FRAMES)]
        typer.echo(
            f"[progress] command={self._command_name} "
            f"{spinner} {stage_index}/{stage_total} stage={stage_name}"
        )


def _load_yaml_config(config_path: Path | None) -> ChapterforgeConfig | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except OSError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify file permissions.",
        ) from exc


def _resolve_command_config(
    config_file: Path | None,
    input_epub: Path | None,
    out: Path | None = None,
    chapters: str | None = None,
    apply_lexicons: bool | None = None,
    write_annotated: bool | None = None,
) -> ChapterforgeConfig:
    """Resolve effective command config from YAML defaults and explicit CLI overrides."""

    loaded_config = _load_yaml_config(config_file)

    if loaded_config is None:
        if input_epub is None:
            raise PipelineStageError(
                stage="config",
                detail="Input EPUB path is required when `--config` is not provided.",
                hint="Pass `<input.epub>` or use `--config <path.yaml>` with `input_epub`.",
            )
        loaded_config = ChapterforgeConfig(input_epub=input_epub)

    config = ChapterforgeConfig(
        input_epub=input_epub if input_epub is not None else loaded_config.input_epub,
        output_dir=out if out is not None else loaded_config.output_dir,
        display_name=loaded_config.display_name,
        chapter_selection=chapters if chapters is not None else loaded_config.chapter_selection,
        apply_lexicons=(
            apply_lexicons if apply_lexicons is not None else loaded_config.apply_lexicons
        ),
        write_annotated=(
            write_annotated if write_annotated is not None else loaded_config.write_annotated
        ),
        extra=dict(loaded_config.extra),
    )
    try:
        config.validate()
    except ValueError as exc:
        raise PipelineStageError(stage="config", detail=str(exc)) from exc
    return config


def _read_input(input_epub: Path) -> bytes:
    """Read the source container bytes and map failures to input-stage errors."""

    try:
        return input_epub.read_bytes()
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="input",
            detail=f"Input EPUB not found: `{input_epub}`.",
            hint="Check the path passed as `<input.epub>` or `input_epub` in the config.",
        ) from exc
    except OSError as exc:
        raise PipelineStageError(
            stage="input",
            detail=f"Failed to read input EPUB `{input_epub}`: {exc}",
        ) from exc


def _parse_config_document(
    config: ChapterforgeConfig,
    run_logger: RunLogger | None,
    progress: BuildProgressIndicator | None = None,
) -> Document:
    """Read and parse the configured EPUB with optional logging and progress hooks."""

    raw_bytes = _read_input(config.input_epub)
    assembler = DocumentAssembler(
        event_sink=run_logger,
        stage_progress_callback=progress.on_stage_start if progress is not None else None,
    )
    return assembler.parse(raw_bytes, config.resolved_display_name())


def _run_logger(enabled: bool) -> RunLogger | None:
    """Create a stderr run logger when event logging is enabled."""

    return RunLogger(sink=sys.stderr) if enabled else None


LogEventsOption = Annotated[
    bool,
    typer.Option(
        "--log-events/--no-log-events",
        help="Write structured parse events to stderr.",
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        help="Path to YAML config file with command defaults.",
    ),
]


@app.command("parse")
def parse_command(
    input_epub: Annotated[
        Path | None,
        typer.Argument(help="Path to source EPUB. Required unless provided by `--config`."),
    ] = None,
    config_file: ConfigOption = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the standard-format chapter payload as JSON."),
    ] = False,
    log_events: LogEventsOption = True,
) -> None:
    """Parse an EPUB and print its document summary."""

    try:
        config = _resolve_command_config(config_file=config_file, input_epub=input_epub)
        document = _parse_config_document(config, _run_logger(log_events))
    except Exception as exc:
        exit_with_command_error("parse", exc)

    if as_json:
        typer.echo(json.dumps(to_standard_format(document), ensure_ascii=False, indent=2))
        return
    echo_document_summary(document)


@app.command("list-chapters")
def list_chapters_command(
    input_epub: Annotated[Path, typer.Argument(help="Path to source EPUB.")],
    log_events: LogEventsOption = True,
) -> None:
    """List narrative chapters with character counts and estimated durations."""

    try:
        config = _resolve_command_config(config_file=None, input_epub=input_epub)
        document = _parse_config_document(config, _run_logger(log_events))
    except Exception as exc:
        exit_with_command_error("list-chapters", exc)

    echo_chapter_list(document.chapters)


@app.command("export")
def export_command(
    input_epub: Annotated[
        Path | None,
        typer.Argument(help="Path to source EPUB. Required unless provided by `--config`."),
    ] = None,
    config_file: ConfigOption = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output directory (overrides config file value)."),
    ] = None,
    chapters: Annotated[
        str | None,
        typer.Option(
            "--chapters",
            help="1-based chapter selection: `5`, `1,3,7`, `2-4`, or mixed `1,3-5`.",
        ),
    ] = None,
    apply_lexicons: Annotated[
        bool | None,
        typer.Option(
            "--apply-lexicons/--no-apply-lexicons",
            help="Apply book pronunciation lexicons to annotated chapter text.",
        ),
    ] = None,
    write_annotated: Annotated[
        bool | None,
        typer.Option(
            "--annotated/--no-annotated",
            help="Write `.ssml.txt` annotated chapter variants.",
        ),
    ] = None,
    log_events: LogEventsOption = True,
) -> None:
    """Parse an EPUB and export chapter text files plus `document.json`."""

    run_logger = _run_logger(log_events)
    try:
        config = _resolve_command_config(
            config_file=config_file,
            input_epub=input_epub,
            out=out,
            chapters=chapters,
            apply_lexicons=apply_lexicons,
            write_annotated=write_annotated,
        )
        document = _parse_config_document(
            config, run_logger, progress=BuildProgressIndicator("export")
        )
        selected_numbers = _resolve_selection(document, config.chapter_selection)
        written = _write_export(document, config, selected_numbers, run_logger)
    except Exception as exc:
        exit_with_command_error("export", exc)

    typer.echo(f"Title: {document.title}")
    typer.echo(f"Chapters exported: {format_chapter_selection(selected_numbers)}")
    typer.echo(f"Files written: {len(written)}")
    typer.echo(f"Output: {config.output_dir}")


def _resolve_selection(document: Document, selection: str | None) -> list[int]:
    """Parse the chapter selection against the parsed document's sequence numbers."""

    try:
        return parse_chapter_selection(
            selection,
            [chapter.sequence_number for chapter in document.chapters],
        )
    except ValueError as exc:
        raise PipelineStageError(
            stage="export",
            detail=f"Invalid chapter selection: {exc}",
            hint="Run `chapterforge list-chapters <input.epub>` to see valid numbers.",
        ) from exc


def _write_export(
    document: Document,
    config: ChapterforgeConfig,
    selected_numbers: list[int],
    run_logger: RunLogger | None,
) -> list[Path]:
    """Write export artifacts and emit export-stage log events."""

    if run_logger is not None:
        run_logger.log_stage_start("export")
    try:
        written = write_document_export(
            document,
            ArtifactStore(config.output_dir),
            selected_numbers,
            apply_lexicons=config.apply_lexicons,
            write_annotated=config.write_annotated,
            extra=config.extra,
        )
    except OSError as exc:
        if run_logger is not None:
            run_logger.log_stage_failure("export", type(exc).__name__)
        raise PipelineStageError(
            stage="export",
            detail=f"Failed to write export artifacts to `{config.output_dir}`: {exc}",
            hint="Check that the output directory is writable.",
        ) from exc
    if run_logger is not None:
        run_logger.log_stage_complete("export")
    return written


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
