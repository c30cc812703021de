"""Shared helpers for reading the project manifest."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from ..logging import get_logger
from ..models import ProjectManifest

logger = get_logger("analyzers.utils")


def load_package_json(root: Path) -> Dict[str, object]:
    """Return the parsed package.json contents or an empty dict."""
    package_json = root / "package.json"
    if not package_json.exists():
        return {}
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable package.json: %s", exc)
        return {}
    if isinstance(data, dict):
        return data
    return {}


def load_manifest(root: Path) -> ProjectManifest:
    """Collect declared dependency names; degrades to an empty manifest."""
    data = load_package_json(root)

    def _extract(key: str) -> Dict[str, str]:
        deps = data.get(key, {})
        if isinstance(deps, dict):
            return {str(name): str(version) for name, version in deps.items()}
        return {}

    return ProjectManifest(
        dependencies=_extract("dependencies"),
        dev_dependencies=_extract("devDependencies"),
        peer_dependencies=_extract("peerDependencies"),
    )


def detect_framework(manifest: ProjectManifest) -> str:
    next_version = manifest.version("next")
    if next_version is not None:
        return f"Next.js {next_version}"
    react_version = manifest.version("react")
    if react_version is not None:
        return f"React {react_version}"
    return "JavaScript"


def detect_nextjs_version(manifest: ProjectManifest) -> str:
    return manifest.version("next") or "unknown"


__all__ = ["detect_framework", "detect_nextjs_version", "load_manifest", "load_package_json"]
