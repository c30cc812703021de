"""Tests for the index assembler and token budget."""

from __future__ import annotations

import pytest

from codeindex.assembler import IndexAssembler, TokenBudget, estimate_tokens
from codeindex.config import default_config
from codeindex.models import DirectoryRecord, FileRecord, SymbolRecord


def _record(path: str, *symbols: SymbolRecord) -> FileRecord:
    return FileRecord(path=path, role="component", exports=("Card",), components=tuple(symbols))


def _symbol(name: str, exported: bool = True) -> SymbolRecord:
    return SymbolRecord(name=name, params=("props",), is_async=False, exported=exported, kind="component")


def test_estimate_tokens_uses_compact_json_length() -> None:
    # {"a":"bcdef"} is 13 characters -> ceil(13 / 3)
    assert estimate_tokens({"a": "bcdef"}) == 5


def test_budget_without_limit_is_never_exhausted() -> None:
    budget = TokenBudget(None)
    budget.charge({"payload": "x" * 10000})

    assert budget.soft_limit is None
    assert budget.exhausted is False


def test_budget_soft_limit_follows_mode_presets(tmp_path) -> None:
    compact = default_config(tmp_path).budget
    full = default_config(tmp_path, "full").budget

    assert TokenBudget(compact.max_tokens, compact.threshold).soft_limit == pytest.approx(28000)
    assert TokenBudget(full.max_tokens, full.threshold).soft_limit is None


def test_assembler_stops_accepting_files_after_threshold() -> None:
    assembler = IndexAssembler(TokenBudget(max_tokens=50, threshold=0.8))

    accepted = [assembler.add_file(_record(f"components/Card{i}.tsx", _symbol(f"Card{i}"))) for i in range(5)]

    assert accepted[0] is True
    assert False in accepted
    first_rejected = accepted.index(False)
    assert all(flag is False for flag in accepted[first_rejected:])
    assert len(assembler.index.modules) == first_rejected
    assert assembler.budget.used > 40


def test_directories_and_facts_are_accepted_after_budget_exhausted() -> None:
    assembler = IndexAssembler(TokenBudget(max_tokens=1))
    assembler.add_file(_record("components/Card.tsx"))
    assert not assembler.accepting_files

    assembler.add_directory(
        DirectoryRecord(path="components", file_count=1, extensions={".tsx": 1}, purpose="ui", kind="ui")
    )
    assembler.set_patterns({"router": "app"})

    assert "components" in assembler.index.structure
    assert assembler.index.patterns == {"router": "app"}


def test_duplicate_file_records_are_rejected() -> None:
    assembler = IndexAssembler(TokenBudget(None))
    assembler.add_file(_record("components/Card.tsx"))

    with pytest.raises(ValueError):
        assembler.add_file(_record("components/Card.tsx"))


def test_symbol_map_is_keyed_by_path_and_name() -> None:
    assembler = IndexAssembler(TokenBudget(None))
    assembler.add_file(_record("components/Card.tsx", _symbol("Card"), _symbol("CardBody", exported=False)))

    assert list(assembler.index.symbols) == ["components/Card.tsx:Card"]
    entry = assembler.index.symbols["components/Card.tsx:Card"]
    assert entry["signature"] == "Card(props)"
    assert entry["kind"] == "component"
    assert entry["params"] == 1


def test_private_symbols_included_when_requested() -> None:
    assembler = IndexAssembler(TokenBudget(None), include_private_symbols=True)
    assembler.add_file(_record("components/Card.tsx", _symbol("CardBody", exported=False)))

    assert assembler.index.symbols["components/Card.tsx:CardBody"]["exported"] is False
