"""Tests for the directory walker."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from codeindex.config import STRUCTURE_EXTENSIONS_FULL
from codeindex.walker import DirectoryWalker
from tests._fixtures.repo_builder import RepoBuilder


def test_walker_filters_extensions_and_skips_hidden(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/App.tsx": "export default function App() {}\n",
            "src/util.js": "export const x = 1;\n",
            "src/readme.md": "# notes\n",
            "src/styles.css": "body {}\n",
            "src/.hidden/Secret.tsx": "export const s = 1;\n",
            "src/.eslintrc.js": "module.exports = {};\n",
            "node_modules/react/index.js": "module.exports = {};\n",
            "src/node_modules/pkg/index.js": "module.exports = {};\n",
        }
    )

    files = DirectoryWalker().files(repo_builder.path())

    assert files == ["src/App.tsx", "src/util.js"]


def test_walker_includes_style_files_when_configured(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "styles/globals.css": "body {}\n",
            "styles/theme.scss": "$c: red;\n",
            "styles/tokens.json": "{}\n",
        }
    )

    files = DirectoryWalker(STRUCTURE_EXTENSIONS_FULL).files(repo_builder.path(), ["styles"])

    assert files == ["styles/globals.css", "styles/theme.scss", "styles/tokens.json"]


def test_walker_deduplicates_overlapping_directories(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "pages/index.tsx": "export default function Home() {}\n",
            "pages/api/hello.ts": "export default function handler() {}\n",
        }
    )

    files = DirectoryWalker().files(repo_builder.path(), ["pages", "pages/api", "missing"])

    assert files == ["pages/index.tsx", "pages/api/hello.ts"]
    assert len(files) == len(set(files))


def test_walker_excludes_configured_directories(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/keep.ts": "export const a = 1;\n",
            "src/generated/skip.ts": "export const b = 1;\n",
        }
    )

    files = DirectoryWalker(exclude_dirs=["generated"]).files(repo_builder.path())

    assert files == ["src/keep.ts"]


def test_walker_is_deterministic(repo_builder: RepoBuilder) -> None:
    repo_builder.write({f"lib/mod{i}.ts": "export const v = 1;\n" for i in range(8)})

    walker = DirectoryWalker()
    assert walker.files(repo_builder.path()) == walker.files(repo_builder.path())


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores permissions")
def test_walker_skips_unreadable_directories(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/ok.ts": "export const ok = 1;\n",
            "src/locked/hidden.ts": "export const no = 1;\n",
        }
    )
    locked = repo_builder.path() / "src" / "locked"
    locked.chmod(0)
    try:
        files = DirectoryWalker().files(repo_builder.path())
    finally:
        locked.chmod(0o755)

    assert files == ["src/ok.ts"]


def test_walker_directories_and_last_modified(tmp_path: Path) -> None:
    (tmp_path / "app" / "blog").mkdir(parents=True)
    (tmp_path / "app" / ".cache").mkdir()
    target = tmp_path / "app" / "blog" / "page.tsx"
    target.write_text("export default function Blog() {}\n", encoding="utf-8")
    os.utime(target, (0, 86400))

    walker = DirectoryWalker()
    directories = [path.relative_to(tmp_path).as_posix() for path in walker.directories(tmp_path / "app")]

    assert directories == ["app", "app/blog"]
    assert walker.last_modified([target]) == "1970-01-02T00:00:00Z"
    assert walker.last_modified([]) is None
