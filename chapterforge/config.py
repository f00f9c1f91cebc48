"""Configuration model and loaders for chapterforge.

Responsibilities:
- Define export configuration as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `ChapterforgeConfig`: normalized settings for one parse/export run.
- `ConfigLoader`: static construction helpers for `ChapterforgeConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import normalize_optional_string, parse_permissive_boolean

_DEFAULT_OUTPUT_DIR = Path("out")


@dataclass(slots=True)
class ChapterforgeConfig:
    """Runtime configuration for one parse/export run.

    Attributes:
        input_epub: Path to the source EPUB container.
        output_dir: Output directory for exported artifacts.
        display_name: Name used in diagnostics, defaulting to the input file name.
        chapter_selection: Optional 1-based chapter selection expression.
        apply_lexicons: Whether exported annotated text also gets lexicon substitution.
        write_annotated: Whether `.ssml.txt` chapter variants are exported.
        extra: Additional metadata copied into exported documents.
    """

    input_epub: Path
    output_dir: Path = _DEFAULT_OUTPUT_DIR
    display_name: str | None = None
    chapter_selection: str | None = None
    apply_lexicons: bool = False
    write_annotated: bool = True
    extra: dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate configuration values before parsing."""

        if not str(self.input_epub).strip():
            raise ValueError("`input_epub` must be a non-empty path.")
        if not str(self.output_dir).strip():
            raise ValueError("`output_dir` must be a non-empty path.")
        if self.display_name is not None and not self.display_name.strip():
            raise ValueError("`display_name` must not be blank when provided.")

    def resolved_display_name(self) -> str:
        """Return the configured display name or the input file name."""

        return self.display_name or self.input_epub.name


class ConfigLoader:
    """Factory methods for creating `ChapterforgeConfig` from external sources."""

    _REQUIRED_YAML_KEYS = frozenset({"input_epub"})
    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "input_epub",
            "output_dir",
            "display_name",
            "chapter_selection",
            "apply_lexicons",
            "write_annotated",
            "extra",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> ChapterforgeConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)

        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ChapterforgeConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        input_epub = ConfigLoader._required_env_path(env_map, "CHAPTERFORGE_INPUT_EPUB")
        output_dir = (
            ConfigLoader._optional_env_path(env_map, "CHAPTERFORGE_OUTPUT_DIR")
            or _DEFAULT_OUTPUT_DIR
        )
        display_name = ConfigLoader._optional_env_string(env_map, "CHAPTERFORGE_DISPLAY_NAME")
        chapter_selection = ConfigLoader._optional_env_string(
            env_map, "CHAPTERFORGE_CHAPTER_SELECTION"
        )
        apply_lexicons = ConfigLoader._optional_env_boolean(
            env_map, "CHAPTERFORGE_APPLY_LEXICONS"
        )
        write_annotated = ConfigLoader._optional_env_boolean(
            env_map, "CHAPTERFORGE_WRITE_ANNOTATED"
        )

        config = ChapterforgeConfig(
            input_epub=input_epub,
            output_dir=output_dir,
            display_name=display_name,
            chapter_selection=chapter_selection,
            apply_lexicons=False if apply_lexicons is None else apply_lexicons,
            write_annotated=True if write_annotated is None else write_annotated,
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` could not be parsed: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> ChapterforgeConfig:
        """Build a validated config from a normalized mapping payload."""

        ConfigLoader._validate_yaml_keys(payload, source_label)

        input_epub = ConfigLoader._required_path(payload, "input_epub", source_label)
        output_dir_value = ConfigLoader._optional_non_empty_string(payload, "output_dir")
        config = ChapterforgeConfig(
            input_epub=input_epub,
            output_dir=Path(output_dir_value) if output_dir_value else _DEFAULT_OUTPUT_DIR,
            display_name=ConfigLoader._optional_non_empty_string(payload, "display_name"),
            chapter_selection=ConfigLoader._optional_non_empty_string(
                payload, "chapter_selection"
            ),
            apply_lexicons=ConfigLoader._optional_boolean(
                payload, "apply_lexicons", source_label, default=False
            ),
            write_annotated=ConfigLoader._optional_boolean(
                payload, "write_annotated", source_label, default=True
            ),
            extra=ConfigLoader._optional_string_map(payload, "extra", source_label),
        )
        config.validate()
        return config

    @staticmethod
    def _validate_yaml_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Validate supported and required YAML keys."""

        unknown = sorted(str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        missing = sorted(
            key for key in ConfigLoader._REQUIRED_YAML_KEYS if key not in payload
        )
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(f"{source_label} is missing required key(s): {key_list}.")

    @staticmethod
    def _required_path(payload: Mapping[str, Any], key: str, source_label: str) -> Path:
        """Read a required non-empty path-like field from a payload."""

        value = ConfigLoader._optional_non_empty_string(payload, key)
        if value is None:
            raise ValueError(f"{source_label} requires non-empty `{key}`.")
        return Path(value)

    @staticmethod
    def _optional_non_empty_string(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        if key not in payload:
            return None
        return normalize_optional_string(payload[key])

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed

    @staticmethod
    def _optional_string_map(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> dict[str, str]:
        """Read an optional mapping with non-empty string keys and values."""

        raw = payload.get(key)
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `{key}` must be a mapping/object.")

        normalized: dict[str, str] = {}
        for raw_key, raw_value in raw.items():
            key_value = normalize_optional_string(raw_key)
            value_value = normalize_optional_string(raw_value)
            if key_value is None:
                raise ValueError(f"{source_label} field `{key}` contains a blank key.")
            if value_value is None:
                raise ValueError(
                    f"{source_label} field `{key}` contains blank value for `{key_value}`."
                )
            normalized[key_value] = value_value
        return normalized

    @staticmethod
    def _required_env_path(env: Mapping[str, str], key: str) -> Path:
        """Read a required non-empty path value from environment mapping."""

        value = ConfigLoader._optional_env_string(env, key)
        if value is None:
            raise ValueError(f"Environment variable `{key}` is required.")
        return Path(value)

    @staticmethod
    def _optional_env_path(env: Mapping[str, str], key: str) -> Path | None:
        """Read an optional path value from environment mapping."""

        value = ConfigLoader._optional_env_string(env, key)
        if value is None:
            return None
        return Path(value)

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))

    @staticmethod
    def _optional_env_boolean(env: Mapping[str, str], key: str) -> bool | None:
        """Read an optional boolean from environment mapping."""

        if key not in env:
            return None
        parsed = parse_permissive_boolean(env.get(key))
        if parsed is None:
            raise ValueError(
                f"Environment variable `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed
