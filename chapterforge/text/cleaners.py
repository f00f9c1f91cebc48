"""Deterministic whitespace rules for extracted chapter text.

Responsibilities:
- Provide composable cleanup rules applied to plain and annotated buffers alike.
- Keep post-processing predictable so character counts are reproducible.
"""

from __future__ import annotations

import re
from typing import Protocol


class CleanerRule(Protocol):
    """Protocol for text cleaning rules."""

    def apply(self, text: str) -> str:
        """Apply a single cleaning transformation."""


class CollapseInlineWhitespace:
    """Collapse runs of spaces and tabs to a single space."""

    def apply(self, text: str) -> str:
        """Apply inline whitespace collapsing."""

        return re.sub(r"[ \t]+", " ", text)


class CollapseBlankLines:
    """Limit paragraph separation to one blank line."""

    def apply(self, text: str) -> str:
        """Collapse three or more consecutive newlines to exactly two."""

        return re.sub(r"\n{3,}", "\n\n", text)


class StripEdges:
    """Trim leading and trailing whitespace."""

    def apply(self, text: str) -> str:
        """Strip the whole text."""

        return text.strip()


class TextCleaner:
    """Apply a sequence of deterministic cleaner rules."""

    def __init__(self, rules: list[CleanerRule] | None = None) -> None:
        """Initialize with custom rules or default rule sequence."""

        self.rules = rules or [
            CollapseBlankLines(),
            CollapseInlineWhitespace(),
            StripEdges(),
        ]

    def clean(self, text: str) -> str:
        """Apply all configured rules in order."""

        current = text
        for rule in self.rules:
            current = rule.apply(current)
        return current
