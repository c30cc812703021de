"""Symbol extraction from parsed JavaScript/TypeScript syntax trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple

from ..classify import (
    KIND_API_HANDLER,
    KIND_COMPONENT,
    KIND_HOOK,
    classify_file,
    classify_symbol,
    file_purpose,
)
from ..models import FileRecord, SymbolRecord
from .parser import ParsedSource

DATA_FETCHING_FEATURES = {
    "getServerSideProps": "SSR",
    "getStaticProps": "SSG",
    "getStaticPaths": "Dynamic Routes",
}

_FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration"}
_VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}
_TOP_LEVEL_CONTAINERS = {"program", "export_statement"}
_TYPED_PARAMETERS = {"required_parameter", "optional_parameter"}
_FUNCTION_EXPRESSIONS = {"function_expression", "function", "generator_function"}


@dataclass
class _FileAnalysis:
    """Accumulates facts for one file while its tree is walked."""

    path: str
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)
    symbols: List[Tuple[str, Tuple[str, ...], bool, bool]] = field(default_factory=list)
    features: List[str] = field(default_factory=list)

    def add_import(self, source: str) -> None:
        if source.startswith((".", "/")) or source in self.imports:
            return
        self.imports.append(source)

    def add_export(self, name: str) -> None:
        if name and name not in self.exports:
            self.exports.append(name)
        self.add_feature_for(name)

    def add_feature_for(self, name: str) -> None:
        label = DATA_FETCHING_FEATURES.get(name)
        if label is not None and label not in self.features:
            self.features.append(label)

    def add_symbol(self, name: str, params: Tuple[str, ...], is_async: bool, exported: bool) -> None:
        self.symbols.append((name, params, is_async, exported))

    def build(
        self, *, max_imports: int, max_exports: int, last_modified: Optional[str]
    ) -> FileRecord:
        buckets: dict[str, List[SymbolRecord]] = {
            KIND_COMPONENT: [],
            KIND_HOOK: [],
            KIND_API_HANDLER: [],
        }
        functions: List[SymbolRecord] = []
        for name, params, is_async, exported in self.symbols:
            kind = classify_symbol(self.path, name)
            record = SymbolRecord(
                name=name, params=params, is_async=is_async, exported=exported, kind=kind
            )
            buckets.get(kind, functions).append(record)

        components = buckets[KIND_COMPONENT]
        hooks = buckets[KIND_HOOK]
        return FileRecord(
            path=self.path,
            role=classify_file(self.path),
            imports=tuple(self.imports[:max_imports]),
            exports=tuple(self.exports[:max_exports]),
            functions=tuple(functions),
            components=tuple(components),
            hooks=tuple(hooks),
            api_handlers=tuple(buckets[KIND_API_HANDLER]),
            framework_features=tuple(self.features),
            purpose=file_purpose(
                self.path,
                components=[item.name for item in components],
                hooks=[item.name for item in hooks],
                functions=[item.name for item in functions],
            ),
            last_modified=last_modified,
        )


class SymbolExtractor:
    """Collects imports, exports, declared functions and framework markers."""

    def __init__(self, max_imports: int = 10, max_exports: int = 10) -> None:
        self.max_imports = max_imports
        self.max_exports = max_exports

    def extract(self, parsed: ParsedSource, *, last_modified: Optional[str] = None) -> FileRecord:
        analysis = _FileAnalysis(path=parsed.path)
        for node in _walk(parsed.root):
            handler = getattr(self, f"_visit_{node.type}", None)
            if handler is not None:
                handler(node, parsed, analysis)
            elif node.type in _FUNCTION_DECLARATIONS:
                self._capture_function(node, parsed, analysis)
        return analysis.build(
            max_imports=self.max_imports,
            max_exports=self.max_exports,
            last_modified=last_modified,
        )

    def _visit_import_statement(self, node: Any, parsed: ParsedSource, analysis: _FileAnalysis) -> None:
        source = node.child_by_field_name("source")
        if source is not None:
            analysis.add_import(_string_value(parsed.text(source)))

    def _visit_export_statement(self, node: Any, parsed: ParsedSource, analysis: _FileAnalysis) -> None:
        declaration = node.child_by_field_name("declaration")
        if any(child.type == "default" for child in node.children):
            analysis.add_export(self._default_export_name(node, declaration, parsed))
            value = node.child_by_field_name("value")
            if value is not None and value.type in _FUNCTION_EXPRESSIONS:
                self._capture_function(value, parsed, analysis)
            return

        if declaration is not None:
            if declaration.type in _VARIABLE_DECLARATIONS:
                for declarator in declaration.named_children:
                    if declarator.type != "variable_declarator":
                        continue
                    name = declarator.child_by_field_name("name")
                    if name is not None and name.type == "identifier":
                        analysis.add_export(parsed.text(name))
            else:
                name = declaration.child_by_field_name("name")
                if name is not None:
                    analysis.add_export(parsed.text(name))

        for clause in node.named_children:
            if clause.type != "export_clause":
                continue
            for specifier in clause.named_children:
                if specifier.type != "export_specifier":
                    continue
                exported = specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")
                if exported is not None:
                    analysis.add_export(_string_value(parsed.text(exported)))

    @staticmethod
    def _default_export_name(node: Any, declaration: Optional[Any], parsed: ParsedSource) -> str:
        if declaration is not None:
            name = declaration.child_by_field_name("name")
            return parsed.text(name) if name is not None else "default"
        value = node.child_by_field_name("value")
        if value is None:
            return "default"
        if value.type == "identifier":
            return parsed.text(value)
        name = value.child_by_field_name("name")
        return parsed.text(name) if name is not None else "default"

    def _capture_function(self, node: Any, parsed: ParsedSource, analysis: _FileAnalysis) -> None:
        if not _is_top_level(node):
            return
        name = node.child_by_field_name("name")
        if name is None:
            return
        analysis.add_symbol(
            parsed.text(name),
            _describe_params(node, parsed),
            _is_async(node),
            _is_exported(node),
        )

    def _visit_variable_declarator(self, node: Any, parsed: ParsedSource, analysis: _FileAnalysis) -> None:
        value = node.child_by_field_name("value")
        name = node.child_by_field_name("name")
        if value is None or value.type != "arrow_function":
            return
        if name is None or name.type != "identifier":
            return
        analysis.add_symbol(
            parsed.text(name),
            _describe_params(value, parsed),
            _is_async(value),
            _is_exported(node),
        )

    def _visit_call_expression(self, node: Any, parsed: ParsedSource, analysis: _FileAnalysis) -> None:
        callee = node.child_by_field_name("function")
        if callee is not None and callee.type == "identifier":
            analysis.add_feature_for(parsed.text(callee))


def _walk(root: Any) -> Iterator[Any]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _is_top_level(node: Any) -> bool:
    current = node.parent
    while current is not None:
        if current.type == "program":
            return True
        if current.type not in _TOP_LEVEL_CONTAINERS:
            return False
        current = current.parent
    return False


def _is_exported(node: Any) -> bool:
    current = node
    while current is not None:
        if current.type == "export_statement":
            return True
        current = current.parent
    return False


def _is_async(node: Any) -> bool:
    return any(child.type == "async" for child in node.children)


def _string_value(text: str) -> str:
    if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def _describe_params(node: Any, parsed: ParsedSource) -> Tuple[str, ...]:
    single = node.child_by_field_name("parameter")
    if single is not None:
        return (_describe_param(single, parsed),)
    parameters = node.child_by_field_name("parameters")
    if parameters is None:
        return ()
    return tuple(
        _describe_param(child, parsed)
        for child in parameters.named_children
        if child.type != "comment"
    )


def _describe_param(node: Any, parsed: ParsedSource) -> str:
    if node.type in _TYPED_PARAMETERS:
        if node.child_by_field_name("value") is not None:
            return "complex"
        pattern = node.child_by_field_name("pattern")
        if pattern is None:
            return "complex"
        node = pattern

    if node.type in {"identifier", "this"}:
        return parsed.text(node)
    if node.type == "object_pattern":
        keys = [_object_key(child, parsed) for child in node.named_children if child.type != "comment"]
        return "{" + ", ".join(keys) + "}"
    if node.type == "array_pattern":
        items = [
            parsed.text(child) if child.type == "identifier" else "..."
            for child in node.named_children
            if child.type != "comment"
        ]
        return "[" + ", ".join(items) + "]"
    if node.type == "rest_pattern":
        return "..." + _rest_name(node, parsed)
    return "complex"


def _object_key(node: Any, parsed: ParsedSource) -> str:
    if node.type == "shorthand_property_identifier_pattern":
        return parsed.text(node)
    if node.type == "pair_pattern":
        key = node.child_by_field_name("key")
        if key is not None and key.type == "property_identifier":
            return parsed.text(key)
        return "..."
    if node.type == "object_assignment_pattern":
        left = node.child_by_field_name("left")
        if left is not None and left.type == "shorthand_property_identifier_pattern":
            return parsed.text(left)
    return "..."


def _rest_name(node: Any, parsed: ParsedSource) -> str:
    for child in node.named_children:
        if child.type == "identifier":
            return parsed.text(child)
    return ""


__all__ = ["DATA_FETCHING_FEATURES", "SymbolExtractor"]
