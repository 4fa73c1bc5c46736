"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULTS: dict[str, Any] = {
    "log_dir": None,
    "preview": {"max_side": 1600, "cache_size": 64},
    "lot_view": {"thumb_side": 300, "max_images": 3},
    "export": {"filename": "AuctionLots.docx", "image_side_pt": 150, "ask_for_path": True},
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay `override` on `base` (returns a new dict)."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access.

    Values from the file are layered over `DEFAULTS`; a missing file means
    defaults only.
    """

    def __init__(self, settings_path: str | Path | None = None) -> None:
        self._path = Path(settings_path) if settings_path is not None else None
        data: dict[str, Any] = {}
        if self._path is not None:
            if self._path.exists():
                with self._path.open("r", encoding="utf-8") as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError(f"settings root must be an object: {self._path}")
                data = loaded
            else:
                logger.info("settings file not found, using defaults: {}", self._path)
        self._data = _merge(DEFAULTS, data)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def get_int(self, key: str, default: int) -> int:
        """Return a positive int for `key`, falling back to `default`."""
        try:
            value = int(self.get(key, default))
        except (TypeError, ValueError):
            logger.warning("Invalid integer setting {}={!r}", key, self.get(key))
            return default
        return value if value > 0 else default
