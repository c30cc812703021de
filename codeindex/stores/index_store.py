"""Reads and writes the generated index documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping

from ..logging import get_logger

DEEP_DETAIL_KEY = "deep_detail"

logger = get_logger("stores.index_store")


def merge_deep_detail(
    previous: Mapping[str, Any], current: Mapping[str, Any]
) -> Dict[str, Any]:
    """Shallow-merge deep-detail maps; entries from the current run win."""
    merged = dict(previous)
    merged.update(current)
    return merged


class IndexStore:
    """Owns the two output files written at the project root."""

    def __init__(self, root: Path, json_name: str, markdown_name: str) -> None:
        self.json_path = root / json_name
        self.markdown_path = root / markdown_name

    def load_deep_detail(self) -> Dict[str, Any]:
        """Return the deep-detail map persisted by a previous run, or ``{}``."""
        try:
            data = json.loads(self.json_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.debug("Ignoring previous index at %s: %s", self.json_path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        deep_detail = data.get(DEEP_DETAIL_KEY)
        if not isinstance(deep_detail, dict):
            return {}
        return deep_detail

    def write(self, document: Mapping[str, Any], markdown: str) -> None:
        self.json_path.write_text(
            json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )
        self.markdown_path.write_text(markdown, encoding="utf-8")


__all__ = ["DEEP_DETAIL_KEY", "IndexStore", "merge_deep_detail"]
