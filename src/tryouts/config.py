# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser configuration and its YAML loader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".tryouts.yaml"

DEFAULT_DESCRIPTION_KEYWORDS: tuple[str, ...] = (
    "test",
    "example",
    "demonstrate",
    "show",
    "should",
    "when",
    "given",
    "verify",
    "check",
    "ensure",
    "validate",
)


class ParserConfigError(Exception):
    """Raised when a parser configuration file is invalid or cannot be loaded."""


@dataclass(frozen=True)
class ParserConfig:
    """Options controlling how a tryout file is parsed.

    Attributes:
        strict: Treat test cases without a description as fatal errors.
        lookahead_window: Number of meaningful tokens the boundary resolver
            inspects after a bare comment when deciding whether it heads a test.
        min_description_length: A bare comment must be longer than this many
            characters to be considered a test description.
        description_keywords: Words, one of which a bare comment must contain
            to be considered a test description (case-insensitive).
    """

    strict: bool = False
    lookahead_window: int = 5
    min_description_length: int = 10
    description_keywords: tuple[str, ...] = DEFAULT_DESCRIPTION_KEYWORDS

    def __post_init__(self) -> None:
        if self.lookahead_window < 1:
            raise ParserConfigError(f"lookahead-window must be at least 1, got {self.lookahead_window}")
        if self.min_description_length < 0:
            raise ParserConfigError(f"min-description-length must not be negative, got {self.min_description_length}")


def load_parser_config(path: Path) -> ParserConfig:
    """Load and parse a tryouts configuration file.

    Args:
        path: Path to the `.tryouts.yaml` file.

    Returns:
        A ParserConfig; keys missing from the file keep their defaults.

    Raises:
        ParserConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ParserConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ParserConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_parser_config(text, source_label=str(path))


def find_parser_config(start: Path) -> Path | None:
    """Return the nearest `.tryouts.yaml` in *start* or any parent directory."""
    directory = start if start.is_dir() else start.parent
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"strict", "lookahead-window", "min-description-length", "description-keywords"})


def _parse_parser_config(text: str, source_label: str = "<string>") -> ParserConfig:
    """Parse configuration YAML text into a ParserConfig.

    An empty document yields the defaults.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParserConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ParserConfig()
    if not isinstance(data, dict):
        raise ParserConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ParserConfigError(f"{source_label}: unknown config key(s): {', '.join(unknown)}")

    kwargs: dict[str, object] = {}
    if "strict" in data:
        kwargs["strict"] = _require_bool(data, "strict", source_label)
    if "lookahead-window" in data:
        kwargs["lookahead_window"] = _require_int(data, "lookahead-window", source_label)
    if "min-description-length" in data:
        kwargs["min_description_length"] = _require_int(data, "min-description-length", source_label)
    if "description-keywords" in data:
        kwargs["description_keywords"] = _require_string_list(data, "description-keywords", source_label)

    try:
        return ParserConfig(**kwargs)  # type: ignore[arg-type]
    except ParserConfigError as exc:
        raise ParserConfigError(f"{source_label}: {exc}") from exc


def _require_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    value = mapping[key]
    if not isinstance(value, bool):
        raise ParserConfigError(f"{source_label}: '{key}' must be true or false")
    return value


def _require_int(mapping: dict[str, object], key: str, source_label: str) -> int:
    value = mapping[key]
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParserConfigError(f"{source_label}: '{key}' must be an integer")
    return value


def _require_string_list(mapping: dict[str, object], key: str, source_label: str) -> tuple[str, ...]:
    value = mapping[key]
    if not isinstance(value, list) or not value:
        raise ParserConfigError(f"{source_label}: '{key}' must be a non-empty list of strings")
    for index, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            raise ParserConfigError(f"{source_label}: {key}[{index}] must be a non-empty string")
    return tuple(item.strip() for item in value)
