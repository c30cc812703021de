"""Heuristic classification of files, directories, and declared symbols.

Component and hook detection relies purely on naming conventions
(``UserCard``, ``useAuth``). Symbols that ignore those conventions are
misclassified; no semantic inference is attempted.
"""

from __future__ import annotations

import posixpath
from typing import Sequence

ROLE_PAGE = "page"
ROLE_LAYOUT = "layout"
ROLE_COMPONENT = "component"
ROLE_HOOK = "hook"
ROLE_API = "api-handler"
ROLE_UTILITY = "utility"
ROLE_STYLE = "style"
ROLE_SOURCE = "source"

KIND_COMPONENT = "component"
KIND_HOOK = "hook"
KIND_API_HANDLER = "api-handler"
KIND_FUNCTION = "function"

HTTP_HANDLER_NAMES = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH", "default"})

_STYLE_EXTENSIONS = (".css", ".scss", ".sass")

_DIRECTORY_PURPOSES = {
    "pages": "Next.js Pages Router - file-based routing",
    "app": "Next.js App Router - modern routing with layouts",
    "components": "Reusable React components",
    "lib": "Library functions and utilities",
    "utils": "Helper functions and utilities",
    "hooks": "Custom React hooks",
    "styles": "CSS and styling files",
    "public": "Static assets served at root",
    "api": "API route handlers",
    "src": "Main source code directory",
}

_DIRECTORY_KINDS = {
    "pages": "routing",
    "app": "routing",
    "components": "ui",
    "lib": "utility",
    "utils": "utility",
    "hooks": "logic",
    "styles": "styling",
    "public": "static",
    "api": "backend",
}

_SPECIAL_FILE_PURPOSES = {
    "layout": "Layout component for route group",
    "page": "Page component for route",
    "loading": "Loading UI component",
    "error": "Error boundary component",
    "not-found": "Not found page component",
    "template": "Template component for route segment",
}


def _segment(path: str, name: str) -> bool:
    return f"/{name}/" in f"/{path}"


def is_api_path(path: str) -> bool:
    return _segment(path, "api")


def classify_file(path: str) -> str:
    """Map a project-relative path to exactly one role; first matching rule wins."""
    basename = posixpath.basename(path)
    if is_api_path(path):
        return ROLE_API
    if _segment(path, "pages"):
        return ROLE_PAGE
    if _segment(path, "app") and basename.startswith("page."):
        return ROLE_PAGE
    if _segment(path, "app") and basename.startswith("layout."):
        return ROLE_LAYOUT
    if _segment(path, "components"):
        return ROLE_COMPONENT
    if _segment(path, "hooks"):
        return ROLE_HOOK
    if _segment(path, "lib") or _segment(path, "utils"):
        return ROLE_UTILITY
    if basename.lower().endswith(_STYLE_EXTENSIONS):
        return ROLE_STYLE
    return ROLE_SOURCE


def is_component_name(name: str) -> bool:
    return bool(name) and name[0].isupper()


def is_hook_name(name: str) -> bool:
    return len(name) > 3 and name.startswith("use") and name[3].isupper()


def is_api_handler(path: str, name: str) -> bool:
    return is_api_path(path) and name in HTTP_HANDLER_NAMES


def classify_symbol(path: str, name: str) -> str:
    if is_api_handler(path, name):
        return KIND_API_HANDLER
    if is_component_name(name):
        return KIND_COMPONENT
    if is_hook_name(name):
        return KIND_HOOK
    return KIND_FUNCTION


def directory_purpose(name: str) -> str:
    return _DIRECTORY_PURPOSES.get(name, "Source code directory")


def directory_kind(name: str) -> str:
    return _DIRECTORY_KINDS.get(name, "source")


def file_purpose(
    path: str,
    components: Sequence[str] = (),
    hooks: Sequence[str] = (),
    functions: Sequence[str] = (),
) -> str:
    stem = posixpath.splitext(posixpath.basename(path))[0]
    if stem in _SPECIAL_FILE_PURPOSES:
        return _SPECIAL_FILE_PURPOSES[stem]
    if is_api_path(path):
        return "API route handler"
    if components:
        return f"React component ({', '.join(components)})"
    if hooks:
        return f"Custom React hook ({', '.join(hooks)})"
    if functions:
        return f"Utility functions ({', '.join(functions)})"
    return "Source file"


__all__ = [
    "HTTP_HANDLER_NAMES",
    "KIND_API_HANDLER",
    "KIND_COMPONENT",
    "KIND_FUNCTION",
    "KIND_HOOK",
    "ROLE_API",
    "ROLE_COMPONENT",
    "ROLE_HOOK",
    "ROLE_LAYOUT",
    "ROLE_PAGE",
    "ROLE_SOURCE",
    "ROLE_STYLE",
    "ROLE_UTILITY",
    "classify_file",
    "classify_symbol",
    "directory_kind",
    "directory_purpose",
    "file_purpose",
    "is_api_handler",
    "is_api_path",
    "is_component_name",
    "is_hook_name",
]
