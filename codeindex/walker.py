"""Directory walking utilities for locating JavaScript/TypeScript sources."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from .config import SOURCE_EXTENSIONS

_EXCLUDED_DIRS = {
    "node_modules",
    "bower_components",
    "jspm_packages",
    "dist",
}


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def isoformat_mtime(timestamp: float) -> str:
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return moment.isoformat().replace("+00:00", "Z")


class DirectoryWalker:
    """Enumerates relevant files below a set of candidate directories.

    Hidden entries and dependency stores are never descended into. Directories
    that cannot be listed are skipped silently; ``os.walk`` drops them when no
    ``onerror`` callback is supplied. Entries are visited in sorted order so the
    result is stable for a fixed filesystem state.
    """

    def __init__(
        self,
        extensions: Sequence[str] = SOURCE_EXTENSIONS,
        exclude_dirs: Iterable[str] = (),
    ) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.excluded = _EXCLUDED_DIRS | set(exclude_dirs)

    def is_relevant(self, filename: str) -> bool:
        return filename.lower().endswith(self.extensions)

    def files(self, root: Path, directories: Sequence[str] = (".",)) -> List[str]:
        """Return project-relative POSIX paths of relevant files, without duplicates."""
        seen: set[str] = set()
        results: List[str] = []
        for directory in directories:
            for path in self.iter_files(root / directory):
                rel_path = path.relative_to(root).as_posix()
                if rel_path in seen:
                    continue
                seen.add(rel_path)
                results.append(rel_path)
        return results

    def iter_files(self, start: Path) -> Iterator[Path]:
        if not start.is_dir():
            return
        for dirpath, dirnames, filenames in os.walk(start):
            dirnames[:] = sorted(name for name in dirnames if self._descend(name))
            current_dir = Path(dirpath)
            for filename in sorted(filenames):
                if is_hidden(filename) or not self.is_relevant(filename):
                    continue
                yield current_dir / filename

    def directories(self, start: Path) -> List[Path]:
        """Return ``start`` followed by every walkable subdirectory below it."""
        if not start.is_dir():
            return []
        found: List[Path] = []
        for dirpath, dirnames, _ in os.walk(start):
            dirnames[:] = sorted(name for name in dirnames if self._descend(name))
            found.append(Path(dirpath))
        return found

    def last_modified(self, paths: Iterable[Path]) -> Optional[str]:
        latest: Optional[float] = None
        for path in paths:
            try:
                mtime = path.stat().st_mtime
            except OSError:
                continue
            if latest is None or mtime > latest:
                latest = mtime
        return isoformat_mtime(latest) if latest is not None else None

    def _descend(self, name: str) -> bool:
        return not is_hidden(name) and name not in self.excluded


__all__ = ["DirectoryWalker", "is_hidden", "isoformat_mtime"]
