"""Tree-sitter grammars used to parse SFC documents, templates and scripts."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterator, Optional

import tree_sitter_html as tshtml
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

_TSX_LANGS = {"tsx", "jsx"}


@lru_cache(maxsize=None)
def html_language() -> Language:
    return Language(tshtml.language())


@lru_cache(maxsize=None)
def typescript_language() -> Language:
    return Language(tstypescript.language_typescript())


@lru_cache(maxsize=None)
def tsx_language() -> Language:
    return Language(tstypescript.language_tsx())


def script_language(lang: Optional[str]) -> Language:
    """Return the grammar for a script block's ``lang`` attribute.

    Plain JavaScript is parsed with the TypeScript grammar, which accepts it.
    """
    if lang and lang.lower() in _TSX_LANGS:
        return tsx_language()
    return typescript_language()


def parse_html(source: bytes) -> Tree:
    # Parsers are not shared so that files can be analysed on worker threads.
    return Parser(html_language()).parse(source)


def parse_script(source: str, lang: Optional[str] = None) -> Tree:
    return Parser(script_language(lang)).parse(source.encode("utf-8"))


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def iter_error_nodes(node: Node) -> Iterator[Node]:
    """Yield ERROR and MISSING nodes below ``node`` in document order."""
    if not node.has_error:
        return
    if node.is_error or node.is_missing:
        yield node
        return
    for child in node.children:
        yield from iter_error_nodes(child)


def describe_error(node: Node) -> str:
    line, column = node.start_point
    if node.is_missing:
        return f"missing {node.type} at line {line + 1}, column {column + 1}"
    return f"unexpected syntax at line {line + 1}, column {column + 1}"


__all__ = [
    "describe_error",
    "html_language",
    "iter_error_nodes",
    "node_text",
    "parse_html",
    "parse_script",
    "script_language",
    "tsx_language",
    "typescript_language",
]
