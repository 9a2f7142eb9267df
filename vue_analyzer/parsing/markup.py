"""Helpers for reading tree-sitter-html element nodes."""

from __future__ import annotations

import codecs
import html
import re
from typing import List, Optional, Tuple

from tree_sitter import Node

from .languages import node_text

_OPEN_TAG_TYPES = {"start_tag", "self_closing_tag"}

# Void elements as Vue's compiler knows them; matched case-sensitively.
_VUE_VOID_TAGS = frozenset(
    "area base br col embed hr img input link meta param source track wbr".split()
)

# Tags the HTML grammar treats as void or closes implicitly (``<p><div>``,
# ``<li><li>``). Vue applies neither rule, so these names are renamed before
# parsing unless they are one of Vue's own void elements.
_HTML_CONTENT_MODEL_TAGS = frozenset(
    """
    AREA BASE BASEFONT BGSOUND BR COL COMMAND EMBED FRAME HR IMAGE IMG INPUT
    ISINDEX KEYGEN LINK MENUITEM META NEXTID PARAM SOURCE TRACK WBR
    P LI DT DD RB RT RP RTC OPTGROUP OPTION COLGROUP TR TD TH
    """.split()
)

_INTERPOLATION_SPAN_RE = re.compile(
    rb"\{\{(?:(?!\}\}|</?(?:template|script|style)\b|<!--|-->)[\s\S])*?\}\}", re.IGNORECASE
)
_MASKABLE_RE = re.compile(rb"[^\r\n]")
_TAG_NAME_RE = re.compile(rb"<(/?)([A-Za-z][A-Za-z0-9]*)(?=[\s/>])")
_END_TAG_RE = re.compile(r"^\s*(</\s*[^\s/<>]+\s*>?)\s*$")


def prepare_markup(source: bytes) -> bytes:
    """Return a same-length copy of ``source`` that the HTML grammar parses like Vue.

    ``{{ ... }}`` bodies are blanked so operators such as ``<`` or ``&&`` are not
    read as markup, and tag names the grammar would treat as void or implicitly
    closed are ROT13-renamed. Offsets are unchanged, so node text is always
    read from the original bytes.
    """
    masked = _INTERPOLATION_SPAN_RE.sub(_blank_interpolation, source)
    return _TAG_NAME_RE.sub(_neutral_tag_name, masked)


def _blank_interpolation(match: "re.Match[bytes]") -> bytes:
    body = match.group(0)[2:-2]
    return b"{{" + _MASKABLE_RE.sub(b"_", body) + b"}}"


def _neutral_tag_name(match: "re.Match[bytes]") -> bytes:
    name = match.group(2).decode("ascii")
    if name.upper() not in _HTML_CONTENT_MODEL_TAGS or name in _VUE_VOID_TAGS:
        return match.group(0)
    return b"<" + match.group(1) + codecs.encode(name, "rot13").encode("ascii")


def is_void_tag(name: str) -> bool:
    return name in _VUE_VOID_TAGS


def stray_end_tag(node: Node, source: bytes) -> Optional[str]:
    """Return the end tag text when ``node`` is an end tag with nothing to close."""
    if node.type not in ("erroneous_end_tag", "ERROR"):
        return None
    match = _END_TAG_RE.match(node_text(node, source))
    return match.group(1) if match else None


def open_tag(element: Node) -> Optional[Node]:
    """Return the start (or self-closing) tag of an element node."""
    for child in element.children:
        if child.type in _OPEN_TAG_TYPES:
            return child
    return None


def close_tag(element: Node) -> Optional[Node]:
    last = element.children[-1] if element.children else None
    if last is not None and last.type == "end_tag" and not last.is_missing:
        return last
    return None


def tag_name(tag: Node, source: bytes) -> str:
    for child in tag.children:
        if child.type == "tag_name":
            return node_text(child, source)
    return ""


def read_attributes(tag: Node, source: bytes) -> List[Tuple[str, Optional[str]]]:
    """Return ``(name, value)`` pairs in source order.

    ``value`` is ``None`` for a bare attribute and entity-decoded otherwise.
    """
    attributes: List[Tuple[str, Optional[str]]] = []
    for child in tag.named_children:
        if child.type != "attribute":
            continue
        name = ""
        value: Optional[str] = None
        for part in child.named_children:
            if part.type == "attribute_name":
                name = node_text(part, source)
            elif part.type == "attribute_value":
                value = node_text(part, source)
            elif part.type == "quoted_attribute_value":
                inner = [item for item in part.named_children if item.type == "attribute_value"]
                value = node_text(inner[0], source) if inner else ""
        if not name:
            continue
        attributes.append((name, html.unescape(value) if value is not None else None))
    return attributes


def inner_source(element: Node, source: bytes) -> str:
    """Return the raw text between an element's open and close tags."""
    start = open_tag(element)
    end = close_tag(element)
    if start is None or start.type == "self_closing_tag":
        return ""
    stop = end.start_byte if end is not None else element.end_byte
    return source[start.end_byte : stop].decode("utf-8", errors="replace")


__all__ = [
    "close_tag",
    "inner_source",
    "is_void_tag",
    "open_tag",
    "prepare_markup",
    "read_attributes",
    "stray_end_tag",
    "tag_name",
]
