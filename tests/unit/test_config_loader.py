"""Unit tests for YAML/environment configuration loader behavior."""

from __future__ import annotations

from pathlib import Path

import pytest

from chapterforge.config import ChapterforgeConfig, ConfigLoader


def test_config_loader_from_yaml_loads_valid_config_and_normalizes_values(
    tmp_path: Path,
) -> None:
    """YAML loader should parse valid payloads and normalize typed/blank values."""

    config_path = tmp_path / "chapterforge.yml"
    config_path.write_text(
        """
input_epub: " books/long-road.epub "
output_dir: " exports "
display_name: " The Long Road "
chapter_selection: " 1,3-4 "
apply_lexicons: " yes "
write_annotated: false
extra:
  batch: " nightly "
""".strip(),
        encoding="utf-8",
    )

    config = ConfigLoader.from_yaml(config_path)

    assert config.input_epub == Path("books/long-road.epub")
    assert config.output_dir == Path("exports")
    assert config.display_name == "The Long Road"
    assert config.chapter_selection == "1,3-4"
    assert config.apply_lexicons is True
    assert config.write_annotated is False
    assert config.extra == {"batch": "nightly"}


def test_config_loader_from_yaml_applies_defaults(tmp_path: Path) -> None:
    """Only `input_epub` is required; other fields take their defaults."""

    config_path = tmp_path / "minimal.yml"
    config_path.write_text("input_epub: book.epub\n", encoding="utf-8")

    config = ConfigLoader.from_yaml(config_path)

    assert config.output_dir == Path("out")
    assert config.display_name is None
    assert config.resolved_display_name() == "book.epub"
    assert config.chapter_selection is None
    assert config.apply_lexicons is False
    assert config.write_annotated is True
    assert config.extra == {}


def test_config_loader_from_yaml_rejects_missing_and_unknown_keys(tmp_path: Path) -> None:
    """YAML loader should fail clearly on missing required or unknown fields."""

    missing_path = tmp_path / "missing.yml"
    missing_path.write_text("output_dir: out\n", encoding="utf-8")

    with pytest.raises(ValueError, match=r"missing required key\(s\): input_epub"):
        ConfigLoader.from_yaml(missing_path)

    unknown_path = tmp_path / "unknown.yml"
    unknown_path.write_text("input_epub: in.epub\nvoice: echo\n", encoding="utf-8")

    with pytest.raises(ValueError, match=r"unsupported key\(s\): voice"):
        ConfigLoader.from_yaml(unknown_path)


def test_config_loader_from_yaml_rejects_invalid_payloads(tmp_path: Path) -> None:
    """Non-mapping roots, bad booleans and bad extra maps should be rejected."""

    list_path = tmp_path / "list.yml"
    list_path.write_text("- input_epub\n", encoding="utf-8")
    with pytest.raises(ValueError, match="top-level mapping"):
        ConfigLoader.from_yaml(list_path)

    bool_path = tmp_path / "bool.yml"
    bool_path.write_text("input_epub: in.epub\napply_lexicons: maybe\n", encoding="utf-8")
    with pytest.raises(ValueError, match="`apply_lexicons` must be a boolean"):
        ConfigLoader.from_yaml(bool_path)

    extra_path = tmp_path / "extra.yml"
    extra_path.write_text("input_epub: in.epub\nextra: [1, 2]\n", encoding="utf-8")
    with pytest.raises(ValueError, match="`extra` must be a mapping"):
        ConfigLoader.from_yaml(extra_path)

    blank_path = tmp_path / "blank.yml"
    blank_path.write_text('input_epub: "  "\n', encoding="utf-8")
    with pytest.raises(ValueError, match="requires non-empty `input_epub`"):
        ConfigLoader.from_yaml(blank_path)


def test_config_loader_from_yaml_reports_syntax_errors(tmp_path: Path) -> None:
    """Malformed YAML should surface as a `ValueError`."""

    config_path = tmp_path / "broken.yml"
    config_path.write_text("input_epub: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="could not be parsed"):
        ConfigLoader.from_yaml(config_path)


def test_config_loader_from_env_loads_values_and_normalizes_blanks() -> None:
    """Environment loader should parse keys and normalize blank strings."""

    env = {
        "CHAPTERFORGE_INPUT_EPUB": " books/long-road.epub ",
        "CHAPTERFORGE_OUTPUT_DIR": " exports ",
        "CHAPTERFORGE_DISPLAY_NAME": "   ",
        "CHAPTERFORGE_CHAPTER_SELECTION": " 2-3 ",
        "CHAPTERFORGE_APPLY_LEXICONS": " on ",
        "CHAPTERFORGE_WRITE_ANNOTATED": "0",
    }

    config = ConfigLoader.from_env(env)

    assert config.input_epub == Path("books/long-road.epub")
    assert config.output_dir == Path("exports")
    assert config.display_name is None
    assert config.chapter_selection == "2-3"
    assert config.apply_lexicons is True
    assert config.write_annotated is False


def test_config_loader_from_env_requires_input_and_valid_booleans() -> None:
    """Missing input paths and invalid booleans should fail clearly."""

    with pytest.raises(ValueError, match="`CHAPTERFORGE_INPUT_EPUB` is required"):
        ConfigLoader.from_env({})

    with pytest.raises(ValueError, match="`CHAPTERFORGE_WRITE_ANNOTATED` must be a boolean"):
        ConfigLoader.from_env(
            {"CHAPTERFORGE_INPUT_EPUB": "in.epub", "CHAPTERFORGE_WRITE_ANNOTATED": "maybe"}
        )


def test_config_validate_rejects_blank_display_name() -> None:
    """An explicitly blank display name is invalid."""

    config = ChapterforgeConfig(input_epub=Path("in.epub"), display_name="  ")

    with pytest.raises(ValueError, match="display_name"):
        config.validate()
