"""Global configuration for litenum.

Controls the shape of generated modules and the file naming used by the CLI.
Settings can be overridden via environment variables or explicit configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_flag(value: str) -> bool:
    return value.strip().lower() not in _FALSE_VALUES


@dataclass
class LitEnumConfig:
    """Top-level configuration for litenum."""

    # Generated code layout
    indent_width: int = 4
    emit_header: bool = True
    header_text: str = "Generated by litenum. Do not edit by hand."
    emit_all: bool = True

    # Files
    source_suffix: str = ".lenum"
    output_suffix: str = ".py"
    encoding: str = "utf-8"

    @property
    def indent(self) -> str:
        return " " * self.indent_width

    @classmethod
    def from_env(cls) -> LitEnumConfig:
        """Build config from environment variables, falling back to defaults."""
        config = cls()

        if val := os.environ.get("LITENUM_INDENT_WIDTH"):
            config.indent_width = int(val)
        if val := os.environ.get("LITENUM_EMIT_HEADER"):
            config.emit_header = _env_flag(val)
        if val := os.environ.get("LITENUM_HEADER_TEXT"):
            config.header_text = val
        if val := os.environ.get("LITENUM_EMIT_ALL"):
            config.emit_all = _env_flag(val)
        if val := os.environ.get("LITENUM_SOURCE_SUFFIX"):
            config.source_suffix = val
        if val := os.environ.get("LITENUM_OUTPUT_SUFFIX"):
            config.output_suffix = val

        return config


# Module-level singleton
_config: LitEnumConfig | None = None


def get_config() -> LitEnumConfig:
    """Return the global litenum config, lazily initialized from env."""
    global _config
    if _config is None:
        _config = LitEnumConfig.from_env()
    return _config


def set_config(config: LitEnumConfig | None) -> None:
    """Override the global config (useful in tests); None resets it."""
    global _config
    _config = config
