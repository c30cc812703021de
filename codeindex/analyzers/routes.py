"""Derives URL routes from Next.js routing directories."""

from __future__ import annotations

import posixpath
import re
from pathlib import Path
from typing import Dict, List, Optional

from ..classify import is_api_path
from ..models import RouteRecord
from ..walker import DirectoryWalker
from .base import ProjectAnalyzer, ProjectContext
from .patterns import APP_DIRECTORIES, APP_SPECIAL_FILES, PAGES_DIRECTORIES, ROUTER_APP, ROUTER_PAGES

_DYNAMIC_SEGMENT = re.compile(r"\[([^\]]+)\]")
_SOURCE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")
_ROUTE_KINDS = ("layout", "loading", "error", "not-found", "page")

# App Router handler files (route.ts) are retained alongside the UI segments.
APP_ROUTE_FILES = APP_SPECIAL_FILES | {"route"}


class RouteAnalyzer(ProjectAnalyzer):
    """Lists routes for both the Pages Router and the App Router."""

    def supports(self, project: ProjectContext) -> bool:
        return _routing_root(project.root, PAGES_DIRECTORIES) is not None or (
            _routing_root(project.root, APP_DIRECTORIES) is not None
        )

    def analyze(self, project: ProjectContext) -> Dict[str, List[RouteRecord]]:
        walker = DirectoryWalker(_SOURCE_EXTENSIONS, exclude_dirs=project.walker.excluded)
        routes: Dict[str, List[RouteRecord]] = {}
        for router, candidates in ((ROUTER_PAGES, PAGES_DIRECTORIES), (ROUTER_APP, APP_DIRECTORIES)):
            directory = _routing_root(project.root, candidates)
            if directory is not None:
                routes[router] = extract_routes(project.root, directory, router, walker)
        return routes


def extract_routes(
    root: Path, directory: str, router: str, walker: DirectoryWalker
) -> List[RouteRecord]:
    records: List[RouteRecord] = []
    for rel_path in walker.files(root, [directory]):
        route = file_path_to_route(posixpath.relpath(rel_path, directory), router)
        if route is not None:
            records.append(RouteRecord(path=route, file=rel_path, kind=route_kind(rel_path)))
    return records


def file_path_to_route(path: str, router: str) -> Optional[str]:
    """Convert a path relative to the routing directory into a URL pattern."""
    route, _ = posixpath.splitext(path)

    if router == ROUTER_PAGES:
        if route == "index":
            return "/"
        if route.endswith("/index"):
            route = route[: -len("/index")]
        if route.startswith("_") or "/_" in route:
            return None
    elif router == ROUTER_APP:
        segments = route.split("/")
        if segments[-1] not in APP_ROUTE_FILES:
            return None
        route = "/".join(segments[:-1])
    else:
        return None

    route = _DYNAMIC_SEGMENT.sub(r":\1", route)
    return route if route.startswith("/") else "/" + route


def route_kind(path: str) -> str:
    stem = posixpath.splitext(posixpath.basename(path))[0]
    if stem in _ROUTE_KINDS:
        return stem
    if is_api_path(path):
        return "api"
    return "page"


def _routing_root(root: Path, candidates: tuple[str, ...]) -> Optional[str]:
    for candidate in candidates:
        if (root / candidate).is_dir():
            return candidate
    return None


__all__ = ["APP_ROUTE_FILES", "RouteAnalyzer", "extract_routes", "file_path_to_route", "route_kind"]
