"""Structured run logging utilities.

Responsibilities:
- Emit concise, deterministic stage-level parse logs through `loguru`.
- Implement `ParseEventSink` so the pipeline can log without global output.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def format_event_line(level: str, event: str, stage: str, context: dict[str, object]) -> str:
    """Render one event as a single `[parse]` log line."""

    return f"[parse] level={level} stage={stage} event={event}{_format_context(context)}"


class RunLogger:
    """Emit deterministic stage logs for parse activity."""

    def __init__(self, sink: TextIO | None = None) -> None:
        """Initialize logger sink and configure deterministic formatting."""

        self._sink = sink or sys.stdout
        _loguru_logger.remove()
        _loguru_logger.add(self._sink, format="{message}", level="INFO", colorize=False)

    def emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured runtime log line."""

        _loguru_logger.log(level, format_event_line(level, event, stage, context))

    def log_stage_start(self, stage: str) -> None:
        """Emit a stage-start runtime event."""

        self.emit("INFO", "start", stage)

    def log_stage_complete(self, stage: str) -> None:
        """Emit a stage-complete runtime event."""

        self.emit("INFO", "complete", stage)

    def log_stage_failure(self, stage: str, error_type: str) -> None:
        """Emit a stage-failure runtime event without sensitive payload details."""

        self.emit("ERROR", "failure", stage, error_type=error_type)
