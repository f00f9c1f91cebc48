"""Telemetry and observability helpers.

This package carries the event sink interface and the loguru-backed logger.
"""

from .events import ParseEvent, ParseEventSink, RecordingEventSink
from .logger import RunLogger

__all__ = ["ParseEvent", "ParseEventSink", "RecordingEventSink", "RunLogger"]
