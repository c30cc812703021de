"""Markdown rendering of a ProjectIndex."""

from __future__ import annotations

from typing import List

from .models import ProjectIndex


def _status(value: object) -> str:
    if isinstance(value, bool):
        return "✅" if value else "❌"
    return str(value)


def render_markdown(index: ProjectIndex, *, size_tokens: int) -> str:
    """Return the human-readable companion of the structured index."""
    metadata = index.metadata
    lines: List[str] = ["# Codebase Index", ""]
    lines.append(f"**Generated:** {metadata.get('generated_at', 'unknown')}")
    lines.append(f"**Framework:** {metadata.get('framework', 'JavaScript')}")
    lines.append(f"**Next.js Version:** {metadata.get('nextjs_version', 'unknown')}")
    lines.append(f"**Size:** ~{size_tokens} tokens")
    lines.append("")

    if index.structure:
        lines.append("## Project Structure")
        lines.append("")
        for path, directory in index.structure.items():
            lines.append(f"- **{path}**: {directory.purpose} ({directory.file_count} files)")
        lines.append("")

    lines.append("## Architectural Patterns")
    lines.append("")
    for name, value in index.patterns.items():
        lines.append(f"- **{name}**: {_status(value)}")
    lines.append("")

    if any(index.routes.values()):
        lines.append("## Routes")
        for router, routes in index.routes.items():
            if not routes:
                continue
            lines.append("")
            lines.append(f"### {router.upper()} Router")
            lines.append("")
            for route in routes:
                lines.append(f"- **{route.path}**: {route.file} ({route.kind})")
        lines.append("")

    if index.modules:
        lines.append(f"## Module Summaries ({len(index.modules)})")
        lines.append("")
        for path, record in index.modules.items():
            lines.append(f"- **{path}**: {record.role} - {record.purpose}")
            if record.exports:
                lines.append(f"  - Exports: {', '.join(record.exports)}")
            if record.framework_features:
                lines.append(f"  - Framework Features: {', '.join(record.framework_features)}")
        lines.append("")

    if index.symbols:
        lines.append(f"## Symbols ({len(index.symbols)})")
        lines.append("")
        for entry in index.symbols.values():
            marker = " [EXPORTED]" if entry.get("exported") else ""
            lines.append(f"- **{entry['name']}**: `{entry['signature']}` ({entry['kind']}){marker}")
        lines.append("")

    return "\n".join(lines)


__all__ = ["render_markdown"]
