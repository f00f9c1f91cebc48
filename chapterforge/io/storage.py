"""Export directory layout for parsed documents.

Responsibilities:
- Own the on-disk layout of an export: `document.json` plus `chapters/`.
- Write UTF-8 text and stable, human-readable JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

DOCUMENT_FILENAME = "document.json"
CHAPTERS_DIRNAME = "chapters"
PLAIN_SUFFIX = ".txt"
ANNOTATED_SUFFIX = ".ssml.txt"


class ArtifactStore:
    """Filesystem export store rooted at one output directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def save_text(self, relative_path: Path, content: str) -> Path:
        """Write UTF-8 text below the root, creating parent directories."""

        target = self.root / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    def save_json(self, relative_path: Path, payload: dict[str, Any]) -> Path:
        """Write a payload as indented JSON with sorted keys and raw unicode."""

        return self.save_text(
            relative_path,
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        )

    def save_document(self, payload: dict[str, Any]) -> Path:
        """Write the document-level payload to `document.json`."""

        return self.save_json(Path(DOCUMENT_FILENAME), payload)

    def save_chapter(self, file_stem: str, content: str, annotated: bool = False) -> Path:
        """Write one chapter file, `chapters/<stem>.txt` or `chapters/<stem>.ssml.txt`."""

        suffix = ANNOTATED_SUFFIX if annotated else PLAIN_SUFFIX
        return self.save_text(Path(CHAPTERS_DIRNAME) / f"{file_stem}{suffix}", content)

    def load_text(self, relative_path: Path) -> str:
        return (self.root / relative_path).read_text(encoding="utf-8")

    def load_json(self, relative_path: Path) -> dict[str, Any]:
        return json.loads(self.load_text(relative_path))

    def exists(self, relative_path: Path) -> bool:
        return (self.root / relative_path).exists()
