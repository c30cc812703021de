"""Analyzer for project-wide framework, styling, and routing patterns."""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Dict, Sequence, Tuple

from ..logging import get_logger
from ..models import ProjectManifest
from ..walker import DirectoryWalker
from .base import ProjectAnalyzer, ProjectContext

logger = get_logger("analyzers.patterns")

ROUTER_APP = "app"
ROUTER_PAGES = "pages"
ROUTER_UNKNOWN = "unknown"

APP_DIRECTORIES = ("app", "src/app")
PAGES_DIRECTORIES = ("pages", "src/pages")
APP_SPECIAL_FILES = frozenset({"page", "layout", "loading", "error", "not-found", "template"})

_SOURCE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")
_STYLESHEET_EXTENSIONS = (".css", ".scss", ".sass")
_TAILWIND_CONFIGS = (
    "tailwind.config.js",
    "tailwind.config.ts",
    "tailwind.config.mjs",
    "tailwind.config.cjs",
)
_TAILWIND_MARKERS = ("@tailwind", "tailwindcss")

STATE_MANAGEMENT: Tuple[Tuple[str, str], ...] = (
    ("zustand", "zustand"),
    ("@reduxjs/toolkit", "redux-toolkit"),
    ("redux", "redux"),
    ("jotai", "jotai"),
    ("recoil", "recoil"),
    ("mobx", "mobx"),
)

STYLING: Tuple[Tuple[str, str], ...] = (
    ("tailwindcss", "tailwind"),
    ("styled-components", "styled-components"),
    ("@emotion/react", "emotion"),
    ("@mui/material", "mui"),
)

DATA_FETCHING: Tuple[Tuple[str, str], ...] = (
    ("@tanstack/react-query", "tanstack-query"),
    ("react-query", "react-query"),
    ("swr", "swr"),
    ("@apollo/client", "apollo"),
    ("apollo-client", "apollo"),
)


class PatternAnalyzer(ProjectAnalyzer):
    """Reports which routing, typing, styling, and data libraries are in use."""

    def supports(self, project: ProjectContext) -> bool:
        return project.root.is_dir()

    def analyze(self, project: ProjectContext) -> Dict[str, object]:
        root = project.root
        manifest = project.manifest
        walker = project.walker
        tailwind = detect_tailwind(root, manifest, walker)

        styling = first_match(manifest, STYLING, default="css")
        if tailwind:
            styling = "tailwind"

        return {
            "router": detect_router(root, walker, verify_files=project.config.verify_router_files),
            "app_router": has_app_router(root, walker),
            "pages_router": has_pages_router(root, walker),
            "src_directory": (root / "src").is_dir(),
            "typescript": detect_typescript(root, manifest),
            "tailwind": tailwind,
            "testing": manifest.has_any("jest", "@testing-library/react", "vitest"),
            "state_management": first_match(manifest, STATE_MANAGEMENT, default="context"),
            "styling": styling,
            "data_fetching": first_match(manifest, DATA_FETCHING, default="fetch"),
            "styled_components": manifest.has("styled-components"),
            "emotion": manifest.has_any("@emotion/react", "@emotion/styled"),
            "mui": manifest.has_any("@mui/material", "@material-ui/core"),
            "prisma": manifest.has_any("prisma", "@prisma/client"),
            "trpc": manifest.has_any("@trpc/server", "@trpc/client"),
            "next_auth": manifest.has_any("next-auth", "@auth/nextjs"),
        }


def first_match(
    manifest: ProjectManifest, candidates: Sequence[Tuple[str, str]], *, default: str
) -> str:
    for package, label in candidates:
        if manifest.has(package):
            return label
    return default


def detect_router(root: Path, walker: DirectoryWalker, *, verify_files: bool = False) -> str:
    if verify_files:
        if has_app_router(root, walker):
            return ROUTER_APP
        if has_pages_router(root, walker):
            return ROUTER_PAGES
        return ROUTER_UNKNOWN
    if any((root / directory).is_dir() for directory in APP_DIRECTORIES):
        return ROUTER_APP
    if any((root / directory).is_dir() for directory in PAGES_DIRECTORIES):
        return ROUTER_PAGES
    return ROUTER_UNKNOWN


def has_app_router(root: Path, walker: DirectoryWalker) -> bool:
    return any(
        _stem(path) in APP_SPECIAL_FILES
        for path in _routing_files(root, walker, APP_DIRECTORIES)
    )


def has_pages_router(root: Path, walker: DirectoryWalker) -> bool:
    return any(
        not _stem(path).startswith("_")
        for path in _routing_files(root, walker, PAGES_DIRECTORIES)
    )


def detect_typescript(root: Path, manifest: ProjectManifest) -> bool:
    return (
        (root / "tsconfig.json").exists()
        or (root / "next-env.d.ts").exists()
        or manifest.has_any("typescript", "@types/node")
    )


def detect_tailwind(root: Path, manifest: ProjectManifest, walker: DirectoryWalker) -> bool:
    if any((root / name).exists() for name in _TAILWIND_CONFIGS):
        return True
    if manifest.has("tailwindcss"):
        return True

    stylesheets = DirectoryWalker(_STYLESHEET_EXTENSIONS, exclude_dirs=walker.excluded)
    for rel_path in stylesheets.files(root):
        try:
            content = (root / rel_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.debug("Skipping unreadable stylesheet %s", rel_path)
            continue
        if any(marker in content for marker in _TAILWIND_MARKERS):
            return True
    return False


def _routing_files(root: Path, walker: DirectoryWalker, directories: Sequence[str]) -> list[str]:
    sources = DirectoryWalker(_SOURCE_EXTENSIONS, exclude_dirs=walker.excluded)
    return sources.files(root, [d for d in directories if (root / d).is_dir()])


def _stem(path: str) -> str:
    return posixpath.splitext(posixpath.basename(path))[0]


__all__ = [
    "APP_DIRECTORIES",
    "APP_SPECIAL_FILES",
    "PAGES_DIRECTORIES",
    "PatternAnalyzer",
    "ROUTER_APP",
    "ROUTER_PAGES",
    "ROUTER_UNKNOWN",
    "detect_router",
    "detect_tailwind",
    "detect_typescript",
    "first_match",
    "has_app_router",
    "has_pages_router",
]
