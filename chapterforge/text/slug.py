"""Deterministic slug helpers for exported chapter filenames.

Responsibilities:
- Normalize free-form chapter titles into stable ASCII slugs.
- Keep slug behavior locale-independent for reproducible filenames.
"""

from __future__ import annotations

import re
import unicodedata

MAX_SLUG_CHARS = 60


def slugify_title(value: str) -> str:
    """Return a filesystem-safe ASCII slug for a chapter title, `chapter` when empty."""

    normalized = unicodedata.normalize("NFKD", value)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    collapsed = re.sub(r"[^a-z0-9]+", "-", ascii_only.lower().strip())
    slug = collapsed[:MAX_SLUG_CHARS].strip("-")
    return slug or "chapter"


def chapter_file_stem(sequence_number: int, title: str) -> str:
    """Return the zero-padded export stem for one chapter, e.g. `003-the-storm`."""

    return f"{sequence_number:03d}-{slugify_title(title)}"
