"""Stage telemetry helper methods for the document assembler.

Responsibilities:
- Provide stage index/total metadata for progress reporting.
- Emit stage start/complete/failure events.
- Wrap stage actions with consistent telemetry hooks.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from ..telemetry.events import ParseEventSink

_StageResult = TypeVar("_StageResult")


class StageTelemetryMixin:
    """Provide stage-telemetry helper methods."""

    _STAGE_SEQUENCE = (
        "container",
        "package",
        "navigation",
        "lexicons",
        "chapters",
        "assemble",
    )

    _event_sink: ParseEventSink | None
    _stage_progress_callback: Callable[[str, int, int], None] | None

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Forward one event to the injected sink, if any."""

        if self._event_sink is not None:
            self._event_sink.emit(level, event, stage, **context)

    def _stage_position(self, stage_name: str) -> tuple[int, int] | None:
        """Return 1-based stage index and total stage count for known stages."""

        try:
            index = self._STAGE_SEQUENCE.index(stage_name) + 1
        except ValueError:
            return None
        return index, len(self._STAGE_SEQUENCE)

    def _on_stage_start(self, stage_name: str) -> None:
        """Emit start events to stage progress callback and event sink."""

        stage_position = self._stage_position(stage_name)
        if stage_position and self._stage_progress_callback is not None:
            self._stage_progress_callback(stage_name, stage_position[0], stage_position[1])
        self._emit("INFO", "start", stage_name)

    def _on_stage_complete(self, stage_name: str) -> None:
        """Emit stage-complete event to the event sink."""

        self._emit("INFO", "complete", stage_name)

    def _on_stage_failure(self, stage_name: str, exc: Exception) -> None:
        """Emit stage-failure event with sanitized exception metadata."""

        self._emit("ERROR", "failure", stage_name, error_type=type(exc).__name__)

    def _run_stage(
        self,
        stage_name: str,
        action: Callable[[], _StageResult],
    ) -> _StageResult:
        """Run one named stage and emit start/complete/failure telemetry events."""

        self._on_stage_start(stage_name)
        try:
            result = action()
        except Exception as exc:
            self._on_stage_failure(stage_name, exc)
            raise
        self._on_stage_complete(stage_name)
        return result
