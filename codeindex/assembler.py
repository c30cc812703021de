"""Accumulates index records under an approximate token budget."""

from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Optional

from .models import DirectoryRecord, FileRecord, ProjectIndex, RouteRecord

CHARS_PER_TOKEN = 3


def estimate_tokens(payload: Any) -> int:
    """Approximate token count as compact JSON length over a fixed ratio."""
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return math.ceil(len(text) / CHARS_PER_TOKEN)


class TokenBudget:
    """Running token estimate with a soft stop threshold."""

    def __init__(self, max_tokens: Optional[int], threshold: float = 0.8) -> None:
        self.max_tokens = max_tokens
        self.threshold = threshold
        self.used = 0

    @property
    def soft_limit(self) -> Optional[float]:
        if self.max_tokens is None:
            return None
        return self.max_tokens * self.threshold

    @property
    def exhausted(self) -> bool:
        limit = self.soft_limit
        return limit is not None and self.used > limit

    def charge(self, payload: Any) -> int:
        tokens = estimate_tokens(payload)
        self.used += tokens
        return tokens


class IndexAssembler:
    """Builds a ProjectIndex, refusing file records once the budget is spent.

    Directory records and project-level facts are always accepted; only
    per-file analysis is subject to the budget.
    """

    def __init__(self, budget: TokenBudget, *, include_private_symbols: bool = False) -> None:
        self.budget = budget
        self.include_private_symbols = include_private_symbols
        self.index = ProjectIndex()

    @property
    def accepting_files(self) -> bool:
        return not self.budget.exhausted

    def set_metadata(self, **metadata: Any) -> None:
        self.index.metadata.update(metadata)

    def add_directory(self, record: DirectoryRecord) -> None:
        self.index.structure[record.path] = record

    def add_file(self, record: FileRecord) -> bool:
        if not self.accepting_files:
            return False
        if record.path in self.index.modules:
            raise ValueError(f"Duplicate file record for {record.path}")

        entries: Dict[str, Dict[str, Any]] = {}
        for symbol in record.symbols:
            if symbol.exported or self.include_private_symbols:
                entries[f"{record.path}:{symbol.name}"] = symbol.to_entry(record.path)

        self.index.modules[record.path] = record
        self.index.symbols.update(entries)
        self.budget.charge({record.path: record.to_dict(), "symbols": entries})
        return True

    def set_patterns(self, patterns: Dict[str, Any]) -> None:
        self.index.patterns = dict(patterns)

    def set_routes(self, routes: Dict[str, List[RouteRecord]]) -> None:
        self.index.routes = {router: list(records) for router, records in routes.items()}

    def set_deep_detail(self, deep_detail: Dict[str, Any]) -> None:
        self.index.deep_detail = dict(deep_detail)


__all__ = ["CHARS_PER_TOKEN", "IndexAssembler", "TokenBudget", "estimate_tokens"]
