"""Helper utilities for constructing temporary projects in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Mapping

from codeindex.config import IndexConfig, load_config
from codeindex.orchestrator import GenerationResult, Orchestrator


class RepoBuilder:
    """Utility for writing files into a throwaway project and indexing it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_package_json(self, **sections: Mapping[str, str]) -> None:
        """Write a package.json with the given dependency sections."""
        payload: dict[str, Any] = {"name": "fixture", "version": "1.0.0"}
        payload.update({key: dict(value) for key, value in sections.items()})
        (self.root / "package.json").write_text(json.dumps(payload), encoding="utf-8")

    def config(self, mode: str | None = None) -> IndexConfig:
        return load_config(self.root, mode=mode)

    def generate(self, config: IndexConfig | None = None, mode: str | None = None) -> GenerationResult:
        """Run a full generation pass over the project."""
        return Orchestrator().run(str(self.root), config=config, mode=mode)

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["RepoBuilder"]
