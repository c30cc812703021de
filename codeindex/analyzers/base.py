"""Base classes for project-level analyzers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..config import IndexConfig
from ..models import ProjectManifest
from ..walker import DirectoryWalker


@dataclass(frozen=True)
class ProjectContext:
    """Read-only view of the project shared by analyzers during one run."""

    root: Path
    manifest: ProjectManifest
    config: IndexConfig
    walker: DirectoryWalker


class ProjectAnalyzer(ABC):
    """Contract for analyzers that derive project-wide facts."""

    @abstractmethod
    def supports(self, project: ProjectContext) -> bool:
        """Return True when this analyzer should run for the project."""

    @abstractmethod
    def analyze(self, project: ProjectContext) -> Any:
        """Produce the analyzer's contribution to the index."""
