"""Unit tests for shared string and boolean parsing helpers."""

import pytest

from chapterforge.parsing import (
    collapse_whitespace,
    normalize_optional_string,
    parse_permissive_boolean,
    truncate_with_ellipsis,
)


def test_normalize_optional_string_handles_blank_values() -> None:
    """Normalization should return `None` for `None` and blank textual values."""

    assert normalize_optional_string(None) is None
    assert normalize_optional_string("") is None
    assert normalize_optional_string("   ") is None
    assert normalize_optional_string("  value  ") == "value"
    assert normalize_optional_string(42) == "42"


@pytest.mark.parametrize(
    ("token", "expected"),
    [("TrUe", True), ("  ON ", True), ("1", True), ("FALSE", False), (" oFf ", False), ("nO", False)],
)
def test_parse_permissive_boolean_accepts_mixed_case_tokens(token: str, expected: bool) -> None:
    """Permissive parsing should accept valid tokens case-insensitively."""

    assert parse_permissive_boolean(token) is expected


@pytest.mark.parametrize("value", ["", "   ", "maybe", "2", object()])
def test_parse_permissive_boolean_returns_none_for_invalid_tokens(value: object) -> None:
    """Permissive parsing should return `None` for invalid or blank inputs."""

    assert parse_permissive_boolean(value) is None


def test_collapse_whitespace_joins_lines() -> None:
    """Every whitespace run, newlines included, becomes a single space."""

    assert collapse_whitespace("  Part\n\tOne   begins ") == "Part One begins"


def test_truncate_with_ellipsis_respects_limit() -> None:
    """Only values longer than the limit are cut, ending with `...`."""

    assert truncate_with_ellipsis("short", 10) == "short"
    assert truncate_with_ellipsis("abcdefghijk", 10) == "abcdefg..."
