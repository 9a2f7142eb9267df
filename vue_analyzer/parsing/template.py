"""Compile Vue template markup into a small, Vue-shaped template AST."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Sequence, Union

from tree_sitter import Node

from .languages import describe_error, iter_error_nodes, node_text, parse_html
from .markup import (
    close_tag,
    is_void_tag,
    open_tag,
    prepare_markup,
    read_attributes,
    stray_end_tag,
    tag_name,
)

_DIRECTIVE_PREFIX_RE = re.compile(r"^(v-[A-Za-z0-9-]|:|\.|@|#)")
_DIRECTIVE_RE = re.compile(
    r"(?:^v-([a-z0-9-]+))?(?:(?::|^\.|^@|^#)(\[[^\]]+\]|[^.]+))?(.+)?$",
    re.IGNORECASE,
)
_FOR_ALIAS_RE = re.compile(r"([\s\S]*?)\s+(?:in|of)\s+(\S[\s\S]*)")
_INTERPOLATION_RE = re.compile(r"\{\{([\s\S]*?)\}\}")

_ELEMENT_NODE_TYPES = {"element", "script_element", "style_element"}
_TEXT_NODE_TYPES = {"text", "entity"}


class TemplateSyntaxError(ValueError):
    """Raised when template markup cannot be compiled."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{message}{location}")


class NodeType(Enum):
    ROOT = "root"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    SIMPLE_EXPRESSION = "simple_expression"
    INTERPOLATION = "interpolation"
    ATTRIBUTE = "attribute"
    DIRECTIVE = "directive"
    IF = "if"
    IF_BRANCH = "if_branch"
    FOR = "for"


@dataclass
class SimpleExpressionNode:
    content: str
    is_static: bool = False
    type: ClassVar[NodeType] = NodeType.SIMPLE_EXPRESSION


@dataclass
class TextNode:
    content: str
    type: ClassVar[NodeType] = NodeType.TEXT


@dataclass
class CommentNode:
    content: str
    type: ClassVar[NodeType] = NodeType.COMMENT


@dataclass
class InterpolationNode:
    content: SimpleExpressionNode
    type: ClassVar[NodeType] = NodeType.INTERPOLATION


@dataclass
class AttributeNode:
    """A plain attribute; ``value`` is ``None`` when written without ``=``."""

    name: str
    value: Optional[TextNode] = None
    type: ClassVar[NodeType] = NodeType.ATTRIBUTE


@dataclass
class DirectiveNode:
    """A ``v-*`` attribute or one of its ``:``, ``@``, ``#`` and ``.`` shorthands."""

    name: str
    raw_name: str
    arg: Optional[SimpleExpressionNode] = None
    exp: Optional[SimpleExpressionNode] = None
    modifiers: List[str] = field(default_factory=list)
    type: ClassVar[NodeType] = NodeType.DIRECTIVE


PropNode = Union[AttributeNode, DirectiveNode]


@dataclass
class ElementNode:
    tag: str
    props: List[PropNode] = field(default_factory=list)
    children: List["TemplateChildNode"] = field(default_factory=list)
    line: int = 1
    type: ClassVar[NodeType] = NodeType.ELEMENT


@dataclass
class IfBranchNode:
    """One ``v-if`` / ``v-else-if`` / ``v-else`` arm; ``condition`` is ``None`` for ``v-else``."""

    condition: Optional[SimpleExpressionNode]
    children: List["TemplateChildNode"] = field(default_factory=list)
    type: ClassVar[NodeType] = NodeType.IF_BRANCH


@dataclass
class IfNode:
    branches: List[IfBranchNode] = field(default_factory=list)
    type: ClassVar[NodeType] = NodeType.IF


@dataclass
class ForNode:
    source: SimpleExpressionNode
    alias: str
    children: List["TemplateChildNode"] = field(default_factory=list)
    type: ClassVar[NodeType] = NodeType.FOR


TemplateChildNode = Union[ElementNode, TextNode, CommentNode, InterpolationNode, IfNode, ForNode]


@dataclass
class RootNode:
    children: List[TemplateChildNode] = field(default_factory=list)
    type: ClassVar[NodeType] = NodeType.ROOT


def compile_template(source: str) -> RootNode:
    """Parse template markup and lift ``v-if``/``v-for`` into IF and FOR nodes."""
    data = source.encode("utf-8")
    tree = parse_html(prepare_markup(data))
    for error in iter_error_nodes(tree.root_node):
        line, column = error.start_point
        end_tag = stray_end_tag(error, data)
        if end_tag is not None:
            raise TemplateSyntaxError(f"Invalid end tag {end_tag!r}", line + 1, column + 1)
        raise TemplateSyntaxError(f"Template {describe_error(error)}", line + 1, column + 1)
    return RootNode(children=_build_children(tree.root_node.children, data))


def parse_directive(raw_name: str, value: Optional[str]) -> Optional[DirectiveNode]:
    """Split an attribute into a directive, or return ``None`` for a plain attribute."""
    if not _DIRECTIVE_PREFIX_RE.match(raw_name):
        return None
    match = _DIRECTIVE_RE.match(raw_name)
    dir_name = match.group(1) if match else None
    if not dir_name:
        if raw_name.startswith((":", ".")):
            dir_name = "bind"
        elif raw_name.startswith("@"):
            dir_name = "on"
        else:
            dir_name = "slot"

    arg: Optional[SimpleExpressionNode] = None
    raw_arg = match.group(2) if match else None
    if raw_arg:
        if raw_arg.startswith("["):
            arg = SimpleExpressionNode(raw_arg[1:-1], is_static=False)
        else:
            arg = SimpleExpressionNode(raw_arg, is_static=True)

    raw_modifiers = match.group(3) if match else None
    modifiers = [item for item in raw_modifiers[1:].split(".") if item] if raw_modifiers else []
    if raw_name.startswith("."):
        modifiers.append("prop")

    exp = SimpleExpressionNode(value) if value else None
    return DirectiveNode(name=dir_name, raw_name=raw_name, arg=arg, exp=exp, modifiers=modifiers)


def _build_children(nodes: Sequence[Node], data: bytes) -> List[TemplateChildNode]:
    children: List[TemplateChildNode] = []
    text_run: List[Node] = []
    for node in nodes:
        if node.type in _TEXT_NODE_TYPES:
            text_run.append(node)
            continue
        if text_run:
            children.extend(_build_text(text_run, data))
            text_run = []
        if node.type in _ELEMENT_NODE_TYPES:
            _place_element(_build_element(node, data), children)
        elif node.type == "comment":
            raw = node_text(node, data)
            children.append(CommentNode(raw[4:-3] if raw.startswith("<!--") else raw))
        elif node.type == "erroneous_end_tag":
            line, column = node.start_point
            raise TemplateSyntaxError(
                f"Invalid end tag {node_text(node, data)!r}", line + 1, column + 1
            )
    if text_run:
        children.extend(_build_text(text_run, data))
    return children


def _build_text(run: Sequence[Node], data: bytes) -> List[TemplateChildNode]:
    raw = data[run[0].start_byte : run[-1].end_byte].decode("utf-8", errors="replace")
    nodes: List[TemplateChildNode] = []
    position = 0
    for match in _INTERPOLATION_RE.finditer(raw):
        if match.start() > position:
            nodes.append(TextNode(html.unescape(raw[position : match.start()])))
        nodes.append(InterpolationNode(SimpleExpressionNode(match.group(1).strip())))
        position = match.end()
    if position < len(raw):
        nodes.append(TextNode(html.unescape(raw[position:])))
    return nodes


def _build_element(node: Node, data: bytes) -> ElementNode:
    start = open_tag(node)
    if start is None:  # pragma: no cover - grammar always yields an open tag
        raise TemplateSyntaxError("Element without start tag", node.start_point[0] + 1)
    props: List[PropNode] = []
    for name, value in read_attributes(start, data):
        directive = parse_directive(name, value)
        if directive is not None:
            props.append(directive)
        else:
            props.append(AttributeNode(name, TextNode(value) if value is not None else None))
    tag = tag_name(start, data)
    line, column = node.start_point
    children: List[TemplateChildNode] = []
    if start.type == "start_tag":
        if close_tag(node) is None and not is_void_tag(tag):
            raise TemplateSyntaxError(f"Element <{tag}> is missing end tag", line + 1, column + 1)
        if node.type == "element":
            children = _build_children(node.children, data)
    return ElementNode(tag=tag, props=props, children=children, line=line + 1)


def _take_directive(element: ElementNode, name: str) -> Optional[DirectiveNode]:
    for index, prop in enumerate(element.props):
        if isinstance(prop, DirectiveNode) and prop.name == name:
            del element.props[index]
            return prop
    return None


def _contents(node: Union[ElementNode, ForNode], element: ElementNode) -> List[TemplateChildNode]:
    # <template v-if>/<template v-for> contribute their children, not themselves.
    if node is element and element.tag == "template":
        return list(element.children)
    return [node]


def _place_element(element: ElementNode, siblings: List[TemplateChildNode]) -> None:
    if_dir = _take_directive(element, "if")
    else_if_dir = _take_directive(element, "else-if")
    else_dir = _take_directive(element, "else")
    for_dir = _take_directive(element, "for")

    node: Union[ElementNode, ForNode] = element
    if for_dir is not None:
        node = _build_for(for_dir, element)

    if if_dir is not None:
        siblings.append(IfNode([IfBranchNode(if_dir.exp, _contents(node, element))]))
        return

    if else_if_dir is None and else_dir is None:
        siblings.append(node)
        return

    comments: List[TemplateChildNode] = []
    while siblings and isinstance(siblings[-1], CommentNode):
        comments.insert(0, siblings.pop())
    previous = siblings[-1] if siblings else None
    if not isinstance(previous, IfNode):
        raise TemplateSyntaxError(
            "v-else/v-else-if has no adjacent v-if or v-else-if", element.line
        )
    if previous.branches[-1].condition is None:
        raise TemplateSyntaxError("v-else/v-else-if cannot follow v-else", element.line)
    condition = else_if_dir.exp if else_if_dir is not None else None
    previous.branches.append(IfBranchNode(condition, comments + _contents(node, element)))


def _build_for(directive: DirectiveNode, element: ElementNode) -> ForNode:
    content = directive.exp.content if directive.exp is not None else ""
    match = _FOR_ALIAS_RE.match(content)
    if not match:
        raise TemplateSyntaxError("v-for has invalid expression", element.line)
    if element.tag == "template":
        children = list(element.children)
    else:
        children = [element]
    return ForNode(
        source=SimpleExpressionNode(match.group(2).strip()),
        alias=match.group(1).strip(),
        children=children,
    )


__all__ = [
    "AttributeNode",
    "CommentNode",
    "DirectiveNode",
    "ElementNode",
    "ForNode",
    "IfBranchNode",
    "IfNode",
    "InterpolationNode",
    "NodeType",
    "RootNode",
    "SimpleExpressionNode",
    "TemplateChildNode",
    "TemplateSyntaxError",
    "TextNode",
    "compile_template",
    "parse_directive",
]
