"""Chapter selection parsing for export flows.

Responsibilities:
- Parse 1-based chapter selection expressions (`1`, `1,3`, `2-5`, mixed).
- Validate sequence numbers against the chapters of a parsed document.
- Produce deterministic normalized selection labels.
"""

from __future__ import annotations

from typing import Iterable, Sequence

_SYNTAX_HINT = "Use syntax like `1`, `1,3`, `2-4`, or `1,3-5`."


def parse_chapter_selection(
    selection: str | None, available_numbers: Sequence[int]
) -> list[int]:
    """Parse a selection expression into sorted unique sequence numbers.

    Args:
        selection: User selection string. `None` or blank selects all chapters.
        available_numbers: Sequence numbers present in the parsed document.

    Raises:
        ValueError: If the selection syntax or bounds are invalid.
    """

    available = sorted(set(int(number) for number in available_numbers))
    if not available:
        raise ValueError("No chapters are available for selection.")
    if selection is None or not selection.strip():
        return available

    tokens = [part.strip() for part in selection.split(",")]
    if any(not token for token in tokens):
        raise ValueError(f"Malformed chapter selection: empty item in list. {_SYNTAX_HINT}")

    selected: set[int] = set()
    for token in tokens:
        for number in _expand_token(token):
            if number not in available:
                raise ValueError(
                    f"Chapter `{number}` is out of available bounds `{available[0]}-{available[-1]}`."
                )
            if number in selected:
                raise ValueError(f"Overlapping chapter selection contains duplicate `{number}`.")
            selected.add(number)
    return sorted(selected)


def format_chapter_selection(numbers: Iterable[int]) -> str:
    """Format sequence numbers into compact range syntax, e.g. `1-3,5`."""

    ordered = sorted(set(int(number) for number in numbers))
    if not ordered:
        return ""

    parts: list[str] = []
    start = end = ordered[0]
    for number in ordered[1:]:
        if number == end + 1:
            end = number
            continue
        parts.append(str(start) if start == end else f"{start}-{end}")
        start = end = number
    parts.append(str(start) if start == end else f"{start}-{end}")
    return ",".join(parts)


def _expand_token(token: str) -> range:
    """Expand one `N` or `N-M` token into the sequence numbers it names."""

    if "-" not in token:
        number = _parse_positive(token)
        return range(number, number + 1)

    start_text, _, end_text = token.partition("-")
    if not start_text or not end_text or "-" in end_text:
        raise ValueError(f"Malformed chapter range `{token}`. {_SYNTAX_HINT}")
    start = _parse_positive(start_text)
    end = _parse_positive(end_text)
    if start > end:
        raise ValueError(
            f"Malformed chapter range `{token}`: range start must be less than or equal to end."
        )
    return range(start, end + 1)


def _parse_positive(token: str) -> int:
    """Parse one positive 1-based sequence number."""

    try:
        value = int(token.strip(), 10)
    except ValueError as exc:
        raise ValueError(f"Invalid chapter number `{token}`. Numbers must be integers.") from exc
    if value < 1:
        raise ValueError(f"Invalid chapter number `{token}`. Numbers are positive and 1-based.")
    return value
