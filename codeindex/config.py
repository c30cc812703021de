"""Configuration loading for codeindex (.codeindex.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".codeindex.yml"

MODE_COMPACT = "compact"
MODE_FULL = "full"
MODES = (MODE_COMPACT, MODE_FULL)

SOURCE_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")
STRUCTURE_EXTENSIONS_FULL: Tuple[str, ...] = SOURCE_EXTENSIONS + (".json", ".css", ".scss")

_COMPACT_DIRECTORIES = (
    "app",
    "src/app",
    "pages",
    "src/pages",
    "components",
    "src/components",
    "lib",
    "src/lib",
    "utils",
    "src/utils",
    "hooks",
    "src/hooks",
)

_FULL_DIRECTORIES = (
    "pages",
    "app",
    "src/pages",
    "src/app",
    "components",
    "src/components",
    "lib",
    "src/lib",
    "utils",
    "src/utils",
    "hooks",
    "src/hooks",
    "styles",
    "src/styles",
    "public",
    "api",
    "src/api",
    "pages/api",
    "src/pages/api",
    "app/api",
    "src/app/api",
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class BudgetConfig:
    """Approximate token ceiling for the structured output."""

    max_tokens: Optional[int] = 35000
    threshold: float = 0.8


@dataclass
class LimitsConfig:
    """Per-file and per-run caps."""

    max_file_chars: int = 10000
    max_files: Optional[int] = 50
    max_imports: int = 10
    max_exports: int = 10


@dataclass
class OutputConfig:
    """Filenames written at the project root."""

    json: str = "code-index.json"
    markdown: str = "code-index.md"


@dataclass
class IndexConfig:
    """Effective settings for one generation run."""

    root: Path
    mode: str = MODE_COMPACT
    budget: BudgetConfig = field(default_factory=BudgetConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    directories: List[str] = field(default_factory=lambda: list(_COMPACT_DIRECTORIES))
    exclude_dirs: List[str] = field(default_factory=list)
    structure_extensions: Tuple[str, ...] = SOURCE_EXTENSIONS
    recursive_structure: bool = False
    verify_router_files: bool = False
    include_private_symbols: bool = False


def default_config(root: Path, mode: str = MODE_COMPACT) -> IndexConfig:
    """Return the preset for ``mode`` without consulting the filesystem."""
    if mode not in MODES:
        raise ConfigError(f"Unknown mode '{mode}' (expected one of: {', '.join(MODES)})")
    if mode == MODE_COMPACT:
        return IndexConfig(root=root)
    return IndexConfig(
        root=root,
        mode=MODE_FULL,
        budget=BudgetConfig(max_tokens=None),
        limits=LimitsConfig(max_files=None),
        output=OutputConfig(json="codebase-index.json", markdown="codebase-index-formatted.md"),
        directories=list(_FULL_DIRECTORIES),
        structure_extensions=STRUCTURE_EXTENSIONS_FULL,
        recursive_structure=True,
        verify_router_files=True,
        include_private_symbols=True,
    )


def load_config(config_path: Path, *, mode: Optional[str] = None) -> IndexConfig:
    """Load configuration from disk, layering file values over the mode preset."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    data: Dict[str, Any] = {}
    if config_file.exists():
        data = _read_config(config_file)

    selected_mode = mode or _as_str(data.get("mode")) or MODE_COMPACT
    config = default_config(root, selected_mode)

    budget_data = _as_dict(data.get("budget"))
    if budget_data:
        if "max_tokens" in budget_data:
            config.budget.max_tokens = _as_int(budget_data.get("max_tokens"))
        threshold = _as_float(budget_data.get("threshold"))
        if threshold is not None:
            if not 0 < threshold <= 1:
                raise ConfigError("budget.threshold must be within (0, 1]")
            config.budget.threshold = threshold

    limits_data = _as_dict(data.get("limits"))
    if limits_data:
        max_file_chars = _as_int(limits_data.get("max_file_chars"))
        if max_file_chars is not None:
            config.limits.max_file_chars = max_file_chars
        if "max_files" in limits_data:
            config.limits.max_files = _as_int(limits_data.get("max_files"))
        max_imports = _as_int(limits_data.get("max_imports"))
        if max_imports is not None:
            config.limits.max_imports = max_imports
        max_exports = _as_int(limits_data.get("max_exports"))
        if max_exports is not None:
            config.limits.max_exports = max_exports

    output_data = _as_dict(data.get("output"))
    if output_data:
        config.output.json = _as_str(output_data.get("json")) or config.output.json
        config.output.markdown = _as_str(output_data.get("markdown")) or config.output.markdown

    directories = _as_str_list(data.get("directories"))
    if directories:
        config.directories = directories
    config.exclude_dirs = _as_str_list(data.get("exclude_dirs"))

    return config


def apply_overrides(
    config: IndexConfig,
    *,
    max_tokens: Optional[int] = None,
    max_files: Optional[int] = None,
    output_json: Optional[str] = None,
    output_markdown: Optional[str] = None,
) -> IndexConfig:
    """Return a copy of ``config`` with command-line values applied."""
    budget = config.budget
    if max_tokens is not None:
        budget = replace(budget, max_tokens=max_tokens if max_tokens > 0 else None)
    limits = config.limits
    if max_files is not None:
        limits = replace(limits, max_files=max_files if max_files > 0 else None)
    output = replace(
        config.output,
        json=output_json or config.output.json,
        markdown=output_markdown or config.output.markdown,
    )
    return replace(config, budget=budget, limits=limits, output=output)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "BudgetConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "IndexConfig",
    "LimitsConfig",
    "MODES",
    "MODE_COMPACT",
    "MODE_FULL",
    "OutputConfig",
    "SOURCE_EXTENSIONS",
    "apply_overrides",
    "default_config",
    "load_config",
]
