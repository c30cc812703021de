"""Persistence helpers for generated index documents."""

from .index_store import DEEP_DETAIL_KEY, IndexStore, merge_deep_detail

__all__ = ["DEEP_DETAIL_KEY", "IndexStore", "merge_deep_detail"]
