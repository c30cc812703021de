"""Tests for symbol extraction."""

from __future__ import annotations

import textwrap

import pytest

from codeindex.analyzers.parser import TREE_SITTER_AVAILABLE, SourceParser
from codeindex.analyzers.symbols import SymbolExtractor
from codeindex.models import FileRecord

pytestmark = pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")


def _extract(path: str, source: str, **limits: int) -> FileRecord:
    parsed = SourceParser().parse(textwrap.dedent(source).lstrip("\n"), path)
    return SymbolExtractor(**limits).extract(parsed)


def test_imports_keep_only_unique_external_modules() -> None:
    record = _extract(
        "components/Nav.tsx",
        """
        import React, { useState } from "react";
        import Link from "next/link";
        import { cn } from "../lib/cn";
        import data from "/abs/data";
        import { useEffect } from "react";
        import type { Session } from "next-auth";
        """,
    )

    assert set(record.imports) == {"react", "next/link", "next-auth"}
    assert len(record.imports) == 3


def test_imports_and_exports_are_capped() -> None:
    imports = "\n".join(f'import m{i} from "pkg-{i}";' for i in range(15))
    exports = "\n".join(f"export const value{i} = {i};" for i in range(15))
    record = _extract("lib/many.ts", imports + "\n" + exports + "\n")

    assert len(record.imports) == 10
    assert len(record.exports) == 10
    assert record.exports[0] == "value0"

    narrow = _extract("lib/many.ts", imports + "\n" + exports + "\n", max_imports=3, max_exports=2)
    assert len(narrow.imports) == 3
    assert narrow.exports == ("value0", "value1")


def test_default_export_names() -> None:
    named = _extract("pages/index.jsx", "export default function Home() { return null; }\n")
    anonymous = _extract("pages/about.jsx", "export default () => null;\n")
    identifier = _extract(
        "pages/blog.jsx",
        """
        const Blog = () => null;
        export default Blog;
        """,
    )
    klass = _extract("components/Old.jsx", "export default class Legacy {}\n")

    assert named.exports == ("Home",)
    assert anonymous.exports == ("default",)
    assert identifier.exports == ("Blog",)
    assert klass.exports == ("Legacy",)


def test_named_export_specifiers_use_exported_name() -> None:
    record = _extract(
        "lib/index.ts",
        """
        const a = 1;
        const b = 2;
        export { a, b as renamed };
        export * from "./other";
        """,
    )

    assert record.exports == ("a", "renamed")


def test_functions_capture_params_async_and_export_state() -> None:
    record = _extract(
        "lib/api.ts",
        """
        export async function fetchUser(id: string, { include, fields }: Options, [first, second], ...rest: string[]) {
          return null;
        }

        function helper(value = 1, opts?: Options) {
          return value;
        }

        export const formatDate = (date: Date) => date.toISOString();
        const slugify = text => text.toLowerCase();
        """,
    )

    by_name = {symbol.name: symbol for symbol in record.functions}
    assert list(by_name) == ["fetchUser", "helper", "formatDate", "slugify"]

    fetch_user = by_name["fetchUser"]
    assert fetch_user.params == ("id", "{include, fields}", "[first, second]", "...rest")
    assert fetch_user.is_async is True
    assert fetch_user.exported is True
    assert fetch_user.signature == "fetchUser(id, {include, fields}, [first, second], ...rest): Promise"

    assert by_name["helper"].params == ("complex", "opts")
    assert by_name["helper"].exported is False
    assert by_name["formatDate"].params == ("date",)
    assert by_name["formatDate"].exported is True
    assert by_name["slugify"].params == ("text",)
    assert by_name["slugify"].exported is False


def test_javascript_destructuring_descriptions() -> None:
    record = _extract(
        "lib/util.js",
        """
        export function pick({ a, b: renamed, c = 3, ...others }, [x, , { y }], ...args) {}
        function withDefault(limit = 10) {}
        """,
    )

    pick = record.functions[0]
    assert pick.params == ("{a, b, c, ...}", "[x, ...]", "...args")
    assert record.functions[1].params == ("complex",)


def test_symbols_are_bucketed_by_kind() -> None:
    record = _extract(
        "app/api/users/route.ts",
        """
        export async function GET(request: Request) { return Response.json([]); }
        export const POST = async (request: Request) => Response.json({});
        export function UserCard() { return null; }
        export const useUsers = () => [];
        function formatName(user) { return user.name; }
        """,
    )

    assert [symbol.name for symbol in record.api_handlers] == ["GET", "POST"]
    assert [symbol.name for symbol in record.components] == ["UserCard"]
    assert [symbol.name for symbol in record.hooks] == ["useUsers"]
    assert [symbol.name for symbol in record.functions] == ["formatName"]
    assert record.role == "api-handler"
    assert record.purpose == "API route handler"
    assert record.complexity == 5


def test_nested_arrow_functions_are_captured() -> None:
    record = _extract(
        "components/Counter.jsx",
        """
        export default function Counter() {
          const increment = () => {};
          const handleSubmit = async (event) => {};
          function reset() {}
          return <button onClick={increment}>+</button>;
        }

        function Local() {
          const onClose = () => {};
          return null;
        }
        """,
    )

    functions = {symbol.name: symbol for symbol in record.functions}
    assert list(functions) == ["increment", "handleSubmit", "onClose"]
    assert functions["increment"].exported is True
    assert functions["handleSubmit"].is_async is True
    assert functions["handleSubmit"].params == ("event",)
    assert functions["handleSubmit"].exported is True
    assert functions["onClose"].exported is False
    assert "reset" not in [symbol.name for symbol in record.symbols]
    assert [symbol.name for symbol in record.components] == ["Counter", "Local"]
    assert record.components[0].exported is True
    assert record.purpose == "React component (Counter, Local)"


def test_handler_inside_exported_component_is_exported() -> None:
    record = _extract(
        "components/Card.tsx",
        """
        export function Card() {
          const handleClick = async (e) => {};
          return <div onClick={handleClick} />;
        }
        """,
    )

    assert [symbol.name for symbol in record.functions] == ["handleClick"]
    assert record.functions[0].exported is True
    assert record.functions[0].signature == "handleClick(e): Promise"
    assert [symbol.name for symbol in record.components] == ["Card"]


def test_framework_features_from_exports_and_calls() -> None:
    exported = _extract(
        "pages/posts/[id].tsx",
        """
        export async function getStaticPaths() { return { paths: [], fallback: false }; }
        export const getStaticProps = async () => ({ props: {} });
        export default function Post() { return null; }
        """,
    )
    called = _extract(
        "lib/ssr.js",
        """
        export async function wrapper(ctx) {
          return getServerSideProps(ctx);
        }
        """,
    )
    specifier = _extract(
        "pages/feed.js",
        """
        async function getServerSideProps() { return { props: {} }; }
        export { getServerSideProps };
        """,
    )

    assert exported.framework_features == ("Dynamic Routes", "SSG")
    assert called.framework_features == ("SSR",)
    assert specifier.framework_features == ("SSR",)


def test_last_modified_is_carried_through() -> None:
    parsed = SourceParser().parse("export const a = 1;\n", "lib/a.ts")

    record = SymbolExtractor().extract(parsed, last_modified="2024-01-01T00:00:00Z")

    assert record.last_modified == "2024-01-01T00:00:00Z"
    assert record.role == "utility"
