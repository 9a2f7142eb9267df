"""Split a Vue single-file component into its template, script and style blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from tree_sitter import Node

from .languages import describe_error, parse_html
from .markup import (
    close_tag,
    inner_source,
    open_tag,
    prepare_markup,
    read_attributes,
    stray_end_tag,
    tag_name,
)

_BLOCK_NODE_TYPES = {"element", "script_element", "style_element"}


class SfcParseError(RuntimeError):
    """Raised when a document cannot be split into SFC blocks."""

    def __init__(self, errors: List[str], filename: Optional[str] = None) -> None:
        self.errors = list(errors)
        self.filename = filename
        prefix = f"{filename}: " if filename else ""
        super().__init__(prefix + "; ".join(self.errors))


@dataclass
class SfcBlock:
    """One top-level block of a single-file component."""

    type: str
    content: str
    attrs: Dict[str, Union[str, bool]] = field(default_factory=dict)
    line: int = 1

    @property
    def lang(self) -> Optional[str]:
        value = self.attrs.get("lang")
        return value if isinstance(value, str) else None

    @property
    def setup(self) -> bool:
        return "setup" in self.attrs


@dataclass
class SfcDescriptor:
    """The blocks found in a single-file component."""

    filename: Optional[str] = None
    template: Optional[SfcBlock] = None
    script: Optional[SfcBlock] = None
    script_setup: Optional[SfcBlock] = None
    styles: List[SfcBlock] = field(default_factory=list)
    custom_blocks: List[SfcBlock] = field(default_factory=list)


def parse_sfc(source: str, filename: Optional[str] = None) -> SfcDescriptor:
    """Split ``source`` into blocks, raising :class:`SfcParseError` on malformed input."""
    data = source.encode("utf-8")
    tree = parse_html(prepare_markup(data))
    descriptor = SfcDescriptor(filename=filename)
    errors: List[str] = []

    for node in tree.root_node.children:
        if node.type in _BLOCK_NODE_TYPES:
            block = _read_block(node, data, errors)
            if block is not None:
                _assign_block(descriptor, block, errors)
        elif node.type in ("erroneous_end_tag", "ERROR") or node.is_missing:
            errors.append(_describe_error(node, data))
    if tree.root_node.is_error and not errors:
        errors.append(_describe_error(tree.root_node, data))

    if (
        descriptor.script is not None
        and descriptor.script_setup is not None
        and descriptor.script.lang != descriptor.script_setup.lang
    ):
        errors.append("<script> and <script setup> must have the same language type.")

    if descriptor.template is None and descriptor.script is None and descriptor.script_setup is None:
        errors.append(
            "At least one <template> or <script> is required in a single file component."
        )

    if errors:
        raise SfcParseError(errors, filename)
    return descriptor


def _describe_error(node: Node, data: bytes) -> str:
    end_tag = stray_end_tag(node, data)
    if end_tag is not None:
        line, column = node.start_point
        return f"Invalid end tag {end_tag!r} at line {line + 1}, column {column + 1}."
    return f"Syntax error: {describe_error(node)}."


def _read_block(node: Node, data: bytes, errors: List[str]) -> Optional[SfcBlock]:
    start = open_tag(node)
    if start is None:
        return None
    name = tag_name(start, data)
    line = node.start_point[0] + 1
    if start.type != "self_closing_tag" and close_tag(node) is None:
        errors.append(f"Element <{name}> at line {line} is missing end tag.")
        return None
    # Errors inside <template> are reported by the template compiler.
    if node.type != "element" and node.has_error:
        errors.append(f"Element <{name}> at line {line} could not be parsed.")
        return None
    attrs: Dict[str, Union[str, bool]] = {}
    for attr_name, value in read_attributes(start, data):
        attrs[attr_name] = True if value is None else value
    return SfcBlock(type=name.lower(), content=inner_source(node, data), attrs=attrs, line=line)


def _assign_block(descriptor: SfcDescriptor, block: SfcBlock, errors: List[str]) -> None:
    if block.type == "template":
        if descriptor.template is not None:
            errors.append("Single file component can contain only one <template> element.")
            return
        descriptor.template = block
    elif block.type == "script":
        if block.setup:
            if descriptor.script_setup is not None:
                errors.append("Single file component can contain only one <script setup> element.")
                return
            descriptor.script_setup = block
        else:
            if descriptor.script is not None:
                errors.append("Single file component can contain only one <script> element.")
                return
            descriptor.script = block
    elif block.type == "style":
        descriptor.styles.append(block)
    else:
        descriptor.custom_blocks.append(block)


__all__ = ["SfcBlock", "SfcDescriptor", "SfcParseError", "parse_sfc"]
