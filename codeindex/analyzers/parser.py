"""Tree-sitter powered JavaScript/TypeScript parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

try:  # pragma: no cover - optional dependency
    import tree_sitter_javascript
    import tree_sitter_typescript
    from tree_sitter import Language, Parser

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    tree_sitter_javascript = None  # type: ignore[assignment]
    tree_sitter_typescript = None  # type: ignore[assignment]
    Language = None  # type: ignore[assignment]
    Parser = None  # type: ignore[assignment]
    TREE_SITTER_AVAILABLE = False


INSTALL_HINT = "pip install tree-sitter tree-sitter-javascript tree-sitter-typescript"

GRAMMAR_JAVASCRIPT = "javascript"
GRAMMAR_TSX = "tsx"

# The TSX grammar is the TypeScript grammar with JSX enabled, and the JavaScript
# grammar always accepts JSX, so JSX parses regardless of extension.
_GRAMMAR_BY_SUFFIX = {
    ".js": GRAMMAR_JAVASCRIPT,
    ".jsx": GRAMMAR_JAVASCRIPT,
    ".ts": GRAMMAR_TSX,
    ".tsx": GRAMMAR_TSX,
}


class ParserUnavailableError(RuntimeError):
    """Raised when tree-sitter or one of its grammars is not installed."""

    def __init__(self) -> None:
        super().__init__(f"Please install parsing dependencies: {INSTALL_HINT}")


class SourceParseError(ValueError):
    """Raised when a file's syntax tree contains unrecoverable errors."""

    def __init__(
        self,
        path: str,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.path = path
        self.line = line
        self.column = column
        location = f" ({line}:{column})" if line is not None else ""
        super().__init__(f"{message}{location}")


@dataclass(frozen=True)
class ParsedSource:
    """Syntax tree plus the exact bytes it was produced from."""

    path: str
    grammar: str
    source: bytes
    tree: Any

    @property
    def root(self) -> Any:
        return self.tree.root_node

    def text(self, node: Any) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def grammar_for_path(path: str) -> Optional[str]:
    lower = path.lower()
    for suffix, grammar in _GRAMMAR_BY_SUFFIX.items():
        if lower.endswith(suffix):
            return grammar
    return None


def ensure_available() -> None:
    if not TREE_SITTER_AVAILABLE:
        raise ParserUnavailableError()


class SourceParser:
    """Parses source text with a cached tree-sitter parser per grammar."""

    def __init__(self) -> None:
        ensure_available()
        self._parsers: Dict[str, Any] = {}

    def parse(self, text: str, path: str) -> ParsedSource:
        grammar = grammar_for_path(path)
        if grammar is None:
            raise SourceParseError(path, "Unsupported file extension")
        source = text.encode("utf-8")
        tree = self._get_parser(grammar).parse(source)
        if tree.root_node.has_error:
            error_node = _first_error(tree.root_node)
            if error_node is not None and error_node.is_missing:
                message = f"Missing '{error_node.type}'"
            else:
                message = "Unexpected syntax"
            node = error_node or tree.root_node
            line, column = node.start_point
            raise SourceParseError(path, message, line + 1, column + 1)
        return ParsedSource(path=path, grammar=grammar, source=source, tree=tree)

    def _get_parser(self, grammar: str) -> Any:
        parser = self._parsers.get(grammar)
        if parser is not None:
            return parser
        if grammar == GRAMMAR_TSX:
            language = Language(tree_sitter_typescript.language_tsx())
        else:
            language = Language(tree_sitter_javascript.language())
        parser = Parser(language)
        self._parsers[grammar] = parser
        return parser


def _first_error(root: Any) -> Optional[Any]:
    stack: List[Any] = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if not node.has_error:
            continue
        stack.extend(reversed(node.children))
    return None


__all__ = [
    "GRAMMAR_JAVASCRIPT",
    "GRAMMAR_TSX",
    "INSTALL_HINT",
    "ParsedSource",
    "ParserUnavailableError",
    "SourceParseError",
    "SourceParser",
    "TREE_SITTER_AVAILABLE",
    "ensure_available",
    "grammar_for_path",
]
