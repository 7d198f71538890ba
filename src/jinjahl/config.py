"""Highlighting configuration and TOML config file loading."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from jinjahl.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "jinjahl.toml"

# Dotted setting key -> HighlightConfig field
_SETTINGS: dict[str, str] = {
    "general.enableForTextFiles": "general_enable_for_text_files",
    "highlighting.enableForTextFiles": "highlighting_enable_for_text_files",
}


@dataclass(frozen=True, slots=True)
class HighlightConfig:
    """Switches consulted by the eligibility policy."""

    general_enable_for_text_files: bool = True
    highlighting_enable_for_text_files: bool = True

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any] | None, base: HighlightConfig | None = None
    ) -> HighlightConfig:
        """Build a config from nested tables or dotted keys.

        Values that are missing or not booleans keep the value from
        ``base`` (the defaults when no base is given).
        """
        base = base if base is not None else cls()
        if not isinstance(data, Mapping):
            return base

        values: dict[str, bool] = {}
        for key, field_name in _SETTINGS.items():
            value = _lookup(data, key)
            if value is None:
                continue
            if isinstance(value, bool):
                values[field_name] = value
            else:
                logger.warning("ignoring non-boolean setting %s=%r", key, value)
        return replace(base, **values)


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Find a dotted key either verbatim or by walking nested tables."""
    if key in data:
        return data[key]
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


def load_config(config_path: Path | None, directory: Path) -> HighlightConfig:
    """Load a TOML config file, returning defaults on a missing/absent file."""
    path = config_path if config_path is not None else directory / CONFIG_FILENAME

    if not path.is_file():
        return HighlightConfig()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML: {exc}", path) from exc
    except OSError as exc:
        raise ConfigError(f"cannot read config: {exc.strerror}", path) from exc

    return HighlightConfig.from_mapping(data)
