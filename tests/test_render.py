"""Tests for Markdown rendering."""

from __future__ import annotations

from codeindex.models import DirectoryRecord, FileRecord, ProjectIndex, RouteRecord, SymbolRecord
from codeindex.render import render_markdown


def test_render_markdown_lists_every_section() -> None:
    symbol = SymbolRecord(name="getUser", params=("id",), is_async=True, exported=True, kind="function")
    index = ProjectIndex(
        metadata={"generated_at": "2024-01-01T00:00:00Z", "framework": "Next.js 14.1.0", "nextjs_version": "14.1.0"},
        structure={
            "app": DirectoryRecord(path="app", file_count=3, extensions={".tsx": 3}, purpose="App Router", kind="routing")
        },
        modules={
            "lib/users.ts": FileRecord(
                path="lib/users.ts",
                role="utility",
                exports=("getUser",),
                functions=(symbol,),
                framework_features=("SSR",),
                purpose="Utility functions (getUser)",
            )
        },
        symbols={"lib/users.ts:getUser": symbol.to_entry("lib/users.ts")},
        patterns={"router": "app", "typescript": True, "tailwind": False},
        routes={"app": [RouteRecord(path="/dashboard", file="app/dashboard/page.tsx", kind="page")]},
    )

    markdown = render_markdown(index, size_tokens=321)

    assert markdown.startswith("# Codebase Index")
    assert "**Framework:** Next.js 14.1.0" in markdown
    assert "**Size:** ~321 tokens" in markdown
    assert "- **app**: App Router (3 files)" in markdown
    assert "- **router**: app" in markdown
    assert "- **typescript**: ✅" in markdown
    assert "- **tailwind**: ❌" in markdown
    assert "### APP Router" in markdown
    assert "- **/dashboard**: app/dashboard/page.tsx (page)" in markdown
    assert "- **lib/users.ts**: utility - Utility functions (getUser)" in markdown
    assert "  - Exports: getUser" in markdown
    assert "  - Framework Features: SSR" in markdown
    assert "- **getUser**: `getUser(id): Promise` (function) [EXPORTED]" in markdown


def test_render_markdown_omits_empty_sections() -> None:
    markdown = render_markdown(ProjectIndex(patterns={"router": "unknown"}), size_tokens=0)

    assert "## Project Structure" not in markdown
    assert "## Routes" not in markdown
    assert "## Module Summaries" not in markdown
    assert "## Architectural Patterns" in markdown
