"""Parsing, extraction, and project-level analyzers."""

from __future__ import annotations

from .base import ProjectAnalyzer, ProjectContext
from .parser import (
    TREE_SITTER_AVAILABLE,
    ParsedSource,
    ParserUnavailableError,
    SourceParseError,
    SourceParser,
)
from .patterns import PatternAnalyzer
from .routes import RouteAnalyzer
from .symbols import SymbolExtractor


__all__ = [
    "ParsedSource",
    "ParserUnavailableError",
    "PatternAnalyzer",
    "ProjectAnalyzer",
    "ProjectContext",
    "RouteAnalyzer",
    "SourceParseError",
    "SourceParser",
    "SymbolExtractor",
    "TREE_SITTER_AVAILABLE",
]
