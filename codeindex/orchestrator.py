"""Pipeline orchestration for a single index generation run."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Optional

from .analyzers import (
    PatternAnalyzer,
    ProjectAnalyzer,
    ProjectContext,
    RouteAnalyzer,
    SourceParseError,
    SourceParser,
    SymbolExtractor,
)
from .analyzers.utils import detect_framework, detect_nextjs_version, load_manifest
from .assembler import IndexAssembler, TokenBudget, estimate_tokens
from .classify import directory_kind, directory_purpose
from .config import SOURCE_EXTENSIONS, IndexConfig, load_config
from .logging import get_logger
from .models import DirectoryRecord, FileRecord, ProjectIndex
from .render import render_markdown
from .stores import IndexStore, merge_deep_detail
from .walker import DirectoryWalker, isoformat_mtime


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    index: ProjectIndex
    json_path: Path
    markdown_path: Path
    size_tokens: int
    analyzed_files: int
    skipped_files: int
    budget_exhausted: bool


class Orchestrator:
    """Runs the walk → parse → extract → assemble → detect → serialize pipeline."""

    def __init__(
        self,
        parser: SourceParser | None = None,
        pattern_analyzer: ProjectAnalyzer | None = None,
        route_analyzer: ProjectAnalyzer | None = None,
    ) -> None:
        self.parser = parser
        self.pattern_analyzer = pattern_analyzer or PatternAnalyzer()
        self.route_analyzer = route_analyzer or RouteAnalyzer()
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str,
        *,
        config: IndexConfig | None = None,
        mode: Optional[str] = None,
    ) -> GenerationResult:
        """Generate both index documents for the project at ``path``."""
        root = Path(path).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Project path not found: {path}")
        if not root.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {path}")

        config = config or load_config(root, mode=mode)
        parser = self.parser or SourceParser()
        self.logger.info("Indexing %s (%s mode)", root, config.mode)

        manifest = load_manifest(root)
        walker = DirectoryWalker(SOURCE_EXTENSIONS, config.exclude_dirs)
        project = ProjectContext(root=root, manifest=manifest, config=config, walker=walker)
        store = IndexStore(root, config.output.json, config.output.markdown)
        previous_deep_detail = store.load_deep_detail()

        assembler = IndexAssembler(
            TokenBudget(config.budget.max_tokens, config.budget.threshold),
            include_private_symbols=config.include_private_symbols,
        )
        assembler.set_metadata(
            generated_at=datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            project_path=str(root),
            mode=config.mode,
            framework=detect_framework(manifest),
            nextjs_version=detect_nextjs_version(manifest),
        )

        self._analyze_structure(project, assembler)
        analyzed, skipped = self._analyze_files(project, parser, assembler)

        self.logger.info("Detecting architectural patterns...")
        if self.pattern_analyzer.supports(project):
            assembler.set_patterns(self.pattern_analyzer.analyze(project))

        self.logger.info("Analyzing routes...")
        if self.route_analyzer.supports(project):
            assembler.set_routes(self.route_analyzer.analyze(project))

        assembler.set_deep_detail(
            merge_deep_detail(previous_deep_detail, assembler.index.deep_detail)
        )

        index = assembler.index
        document = index.to_dict()
        size_tokens = estimate_tokens(document)
        store.write(document, render_markdown(index, size_tokens=size_tokens))
        self.logger.info("Index saved to %s", store.json_path)
        self.logger.info("Readable index saved to %s", store.markdown_path)

        return GenerationResult(
            index=index,
            json_path=store.json_path,
            markdown_path=store.markdown_path,
            size_tokens=size_tokens,
            analyzed_files=analyzed,
            skipped_files=skipped,
            budget_exhausted=assembler.budget.exhausted,
        )

    def _analyze_structure(self, project: ProjectContext, assembler: IndexAssembler) -> None:
        self.logger.info("Analyzing project structure...")
        config = project.config
        walker = DirectoryWalker(config.structure_extensions, config.exclude_dirs)
        visited: set[str] = set()

        for base in config.directories:
            base_path = project.root / base
            if not base_path.is_dir():
                continue
            targets = walker.directories(base_path) if config.recursive_structure else [base_path]
            for directory in targets:
                rel_path = directory.relative_to(project.root).as_posix()
                if rel_path in visited:
                    continue
                visited.add(rel_path)
                files = list(walker.iter_files(directory))
                if not files:
                    continue
                extensions = Counter(file.suffix for file in files)
                assembler.add_directory(
                    DirectoryRecord(
                        path=rel_path,
                        file_count=len(files),
                        extensions=dict(sorted(extensions.items())),
                        purpose=directory_purpose(directory.name),
                        kind=directory_kind(directory.name),
                        last_modified=walker.last_modified(files),
                    )
                )
        self.logger.debug("Recorded %d directories", len(assembler.index.structure))

    def _analyze_files(
        self, project: ProjectContext, parser: SourceParser, assembler: IndexAssembler
    ) -> tuple[int, int]:
        self.logger.info("Analyzing source files...")
        limits = project.config.limits
        candidates = project.walker.files(project.root)
        if limits.max_files is not None:
            candidates = candidates[: limits.max_files]

        extractor = SymbolExtractor(max_imports=limits.max_imports, max_exports=limits.max_exports)
        analyzed = 0
        skipped = 0
        for position, rel_path in enumerate(candidates):
            if not assembler.accepting_files:
                self.logger.info(
                    "Token budget reached (~%d tokens); %d files not analyzed",
                    assembler.budget.used,
                    len(candidates) - position,
                )
                break
            record = self._analyze_file(project.root, rel_path, parser, extractor, limits.max_file_chars)
            if record is None:
                skipped += 1
                continue
            assembler.add_file(record)
            analyzed += 1

        self.logger.info("Analyzed %d source files", analyzed)
        return analyzed, skipped

    def _analyze_file(
        self,
        root: Path,
        rel_path: str,
        parser: SourceParser,
        extractor: SymbolExtractor,
        max_chars: int,
    ) -> Optional[FileRecord]:
        file_path = root / rel_path
        try:
            text = file_path.read_text(encoding="utf-8")
            mtime = file_path.stat().st_mtime
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning("Skipping %s: %s", rel_path, exc)
            return None

        if len(text) > max_chars:
            self.logger.debug("Skipping %s: %d characters exceeds %d", rel_path, len(text), max_chars)
            return None

        try:
            parsed = parser.parse(text, rel_path)
        except SourceParseError as exc:
            self.logger.warning("Parse error in %s: %s", rel_path, exc)
            return None
        return extractor.extract(parsed, last_modified=isoformat_mtime(mtime))


__all__ = ["GenerationResult", "Orchestrator"]
