"""CLI entrypoint for codeindex."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .analyzers.parser import ParserUnavailableError, ensure_available
from .config import MODES, ConfigError, apply_overrides, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codeindex",
        description=(
            "Generate a compact JSON/Markdown index of a JavaScript/TypeScript "
            "project for an AI assistant's context window."
        ),
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default=None,
        help="compact: token-budgeted index; full: every file, recursive structure, routes.",
    )
    parser.add_argument(
        "--max-tokens",
        type=int,
        default=None,
        help="Approximate token ceiling for the index (0 disables the budget).",
    )
    parser.add_argument(
        "--max-files",
        type=int,
        default=None,
        help="Maximum number of source files to analyze (0 means no limit).",
    )
    parser.add_argument("--output-json", default=None, help="Filename for the JSON index.")
    parser.add_argument("--output-markdown", default=None, help="Filename for the Markdown index.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for index generation."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        ensure_available()
    except ParserUnavailableError as exc:
        parser.exit(1, f"{exc}\n")

    try:
        config = load_config(Path(args.path), mode=args.mode)
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")
    config = apply_overrides(
        config,
        max_tokens=args.max_tokens,
        max_files=args.max_files,
        output_json=args.output_json,
        output_markdown=args.output_markdown,
    )

    try:
        result = Orchestrator().run(args.path, config=config)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")

    print(
        f"Index generated at {_relativize(result.json_path)} and "
        f"{_relativize(result.markdown_path)} (~{result.size_tokens} tokens)"
    )


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
