"""
Configuration for the converter.

Values are resolved in this order: explicit overrides (usually built from
CLI arguments), ``CONVERT_MD_*`` environment variables, then defaults.

MIT License - Copyright (c) 2025 Markdown to PDF Converter
"""

import os
from typing import Any, Dict, Optional

from .margins import parse_margins

ENV_PREFIX = "CONVERT_MD_"

DEFAULTS: Dict[str, Any] = {
    "mermaid_url": "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js",
    "mermaid_poll_interval_ms": 100,
    "mermaid_max_attempts": 50,
    "render_timeout_ms": 5000,
    "render_poll_interval_ms": 100,
    "render_initial_delay_ms": 1000,
    "settle_delay_ms": 2000,
    "page_format": "A4",
    "page_margins": "20mm",
    "debug": False,
}

_INT_KEYS = {
    "mermaid_poll_interval_ms",
    "mermaid_max_attempts",
    "render_timeout_ms",
    "render_poll_interval_ms",
    "render_initial_delay_ms",
    "settle_delay_ms",
}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Resolved converter settings."""

    def __init__(self, overrides: Optional[Dict[str, Any]] = None, environ: Optional[Dict[str, str]] = None):
        self._overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
        self._environ = os.environ if environ is None else environ

        unknown = set(self._overrides) - set(DEFAULTS)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    def get(self, key: str) -> Any:
        """Return the value for ``key`` following override > env > default."""
        if key not in DEFAULTS:
            raise KeyError(key)
        if key in self._overrides:
            return self._overrides[key]

        env_name = ENV_PREFIX + key.upper()
        raw = self._environ.get(env_name)
        if raw is None or raw == "":
            return DEFAULTS[key]

        if key in _INT_KEYS:
            try:
                value = int(raw)
            except ValueError:
                raise ValueError(f"{env_name} must be an integer, got '{raw}'") from None
            if value < 0:
                raise ValueError(f"{env_name} must not be negative, got {value}")
            return value
        if key == "debug":
            return _parse_bool(raw)
        return raw

    def validate(self) -> None:
        """Resolve every key so bad environment values fail early."""
        for key in DEFAULTS:
            self.get(key)
        self.get_page_margins()

    def get_mermaid_url(self) -> str:
        return self.get("mermaid_url")

    def get_mermaid_poll_interval_ms(self) -> int:
        return self.get("mermaid_poll_interval_ms")

    def get_mermaid_max_attempts(self) -> int:
        return self.get("mermaid_max_attempts")

    def get_render_timeout_ms(self) -> int:
        return self.get("render_timeout_ms")

    def get_render_poll_interval_ms(self) -> int:
        return self.get("render_poll_interval_ms")

    def get_render_initial_delay_ms(self) -> int:
        return self.get("render_initial_delay_ms")

    def get_settle_delay_ms(self) -> int:
        return self.get("settle_delay_ms")

    def get_page_format(self) -> str:
        return self.get("page_format")

    def get_page_margins(self) -> Dict[str, str]:
        """Return validated margins as a dict with top/right/bottom/left keys."""
        return parse_margins(self.get("page_margins"))

    def is_debug(self) -> bool:
        return bool(self.get("debug"))
