"""Event sink interface used by the parsing pipeline.

Responsibilities:
- Define the structural interface the pipeline emits progress events through.
- Provide an in-memory sink so emitted events can be inspected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol


class ParseEventSink(Protocol):
    """Receiver of structured pipeline events."""

    def emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Record one event emitted by a pipeline stage."""


@dataclass(frozen=True, slots=True)
class ParseEvent:
    """One recorded pipeline event."""

    level: str
    event: str
    stage: str
    context: Mapping[str, object] = field(default_factory=dict)


class RecordingEventSink:
    """Collect emitted events in memory, in emission order."""

    def __init__(self) -> None:
        """Initialize an empty event list."""

        self.events: list[ParseEvent] = []

    def emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Append one event record."""

        self.events.append(ParseEvent(level=level, event=event, stage=stage, context=dict(context)))

    def named(self, event: str) -> list[ParseEvent]:
        """Return recorded events with the given event name."""

        return [item for item in self.events if item.event == event]
