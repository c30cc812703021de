"""Core data models shared across codeindex components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ProjectManifest:
    """Dependency names declared in package.json, read once per run."""

    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    peer_dependencies: Dict[str, str] = field(default_factory=dict)

    def has(self, name: str) -> bool:
        return self.version(name) is not None

    def has_any(self, *names: str) -> bool:
        return any(self.has(name) for name in names)

    def version(self, name: str) -> Optional[str]:
        for group in (self.dependencies, self.dev_dependencies, self.peer_dependencies):
            if name in group:
                return group[name]
        return None


@dataclass(frozen=True)
class SymbolRecord:
    """Declared function, component, hook, or route handler."""

    name: str
    params: Tuple[str, ...]
    is_async: bool
    exported: bool
    kind: str

    @property
    def signature(self) -> str:
        suffix = ": Promise" if self.is_async else ""
        return f"{self.name}({', '.join(self.params)}){suffix}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "params": list(self.params),
            "async": self.is_async,
            "exported": self.exported,
        }

    def to_entry(self, path: str) -> Dict[str, Any]:
        """Return the symbol-map entry stored under ``path:name``."""
        return {
            "name": self.name,
            "signature": self.signature,
            "kind": self.kind,
            "file": path,
            "exported": self.exported,
            "async": self.is_async,
            "params": len(self.params),
        }


@dataclass(frozen=True)
class FileRecord:
    """Analysis result for a single source file."""

    path: str
    role: str
    imports: Tuple[str, ...] = ()
    exports: Tuple[str, ...] = ()
    functions: Tuple[SymbolRecord, ...] = ()
    components: Tuple[SymbolRecord, ...] = ()
    hooks: Tuple[SymbolRecord, ...] = ()
    api_handlers: Tuple[SymbolRecord, ...] = ()
    framework_features: Tuple[str, ...] = ()
    purpose: str = "Source file"
    last_modified: Optional[str] = None

    @property
    def symbols(self) -> Tuple[SymbolRecord, ...]:
        return self.functions + self.components + self.hooks + self.api_handlers

    @property
    def complexity(self) -> int:
        return len(self.symbols)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "purpose": self.purpose,
            "imports": list(self.imports),
            "exports": list(self.exports),
            "functions": [symbol.to_dict() for symbol in self.functions],
            "components": [symbol.to_dict() for symbol in self.components],
            "hooks": [symbol.to_dict() for symbol in self.hooks],
            "api_handlers": [symbol.to_dict() for symbol in self.api_handlers],
            "framework_features": list(self.framework_features),
            "complexity": self.complexity,
            "last_modified": self.last_modified,
        }


@dataclass(frozen=True)
class DirectoryRecord:
    """Summary statistics for one scanned directory."""

    path: str
    file_count: int
    extensions: Dict[str, int]
    purpose: str
    kind: str
    last_modified: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "purpose": self.purpose,
            "kind": self.kind,
            "file_count": self.file_count,
            "extensions": dict(self.extensions),
            "last_modified": self.last_modified,
        }


@dataclass(frozen=True)
class RouteRecord:
    """URL pattern derived from a file inside a routing directory."""

    path: str
    file: str
    kind: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "file": self.file, "kind": self.kind}


@dataclass
class ProjectIndex:
    """Root aggregate produced by one generation run."""

    metadata: Dict[str, Any] = field(default_factory=dict)
    structure: Dict[str, DirectoryRecord] = field(default_factory=dict)
    modules: Dict[str, FileRecord] = field(default_factory=dict)
    symbols: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    patterns: Dict[str, Any] = field(default_factory=dict)
    routes: Dict[str, List[RouteRecord]] = field(default_factory=dict)
    deep_detail: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "structure": {path: record.to_dict() for path, record in self.structure.items()},
            "modules": {path: record.to_dict() for path, record in self.modules.items()},
            "symbols": dict(self.symbols),
            "patterns": dict(self.patterns),
            "routes": {
                router: [route.to_dict() for route in routes]
                for router, routes in self.routes.items()
            },
            "deep_detail": dict(self.deep_detail),
        }


__all__ = [
    "DirectoryRecord",
    "FileRecord",
    "ProjectIndex",
    "ProjectManifest",
    "RouteRecord",
    "SymbolRecord",
]
