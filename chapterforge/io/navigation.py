"""NCX navigation map parsing."""

from __future__ import annotations

import zipfile

from bs4 import Tag

from ..telemetry.events import ParseEventSink
from .markup import load_xml, read_entry, resolve_resource_path, split_fragment, tag_text


class NavigationParser:
    """Build a content-path to chapter-label lookup from an NCX file."""

    def __init__(self, event_sink: ParseEventSink | None = None) -> None:
        """Initialize with an optional event sink for missing-resource events."""

        self._event_sink = event_sink

    def parse(self, archive: zipfile.ZipFile, navigation_path: str) -> dict[str, str]:
        """Return `{normalized content path: label}` for every navigation point.

        Nested navigation points are visited in document order. When two points
        resolve to the same content path, the first label is kept, so a chapter
        file listed with its sub-sections keeps its primary heading.
        """

        data = read_entry(archive, navigation_path)
        if data is None:
            self._emit("navigation_missing", path=navigation_path)
            return {}

        soup = load_xml(data)
        nav_map = soup.find("navMap")
        if not isinstance(nav_map, Tag):
            self._emit("navigation_empty", path=navigation_path)
            return {}

        labels: dict[str, str] = {}
        for nav_point in nav_map.find_all("navPoint"):
            content = nav_point.find("content")
            if not isinstance(content, Tag):
                continue
            src = (content.get("src") or "").strip()
            if not src:
                continue
            label_tag = nav_point.find("navLabel")
            label = " ".join(tag_text(label_tag).split()) if isinstance(label_tag, Tag) else ""
            if not label:
                continue
            target = resolve_resource_path(navigation_path, split_fragment(src))
            labels.setdefault(target, label)
        return labels

    def _emit(self, event: str, **context: object) -> None:
        """Forward one navigation event to the sink when present."""

        if self._event_sink is not None:
            self._event_sink.emit("INFO", event, "navigation", **context)
