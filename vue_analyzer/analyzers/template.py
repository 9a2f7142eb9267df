"""Collect component usages and their props from a compiled template."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..models import ComponentUsage, PropValue
from ..parsing.template import (
    AttributeNode,
    DirectiveNode,
    ElementNode,
    NodeType,
    RootNode,
    SimpleExpressionNode,
    TemplateChildNode,
)


def is_component(tag: str) -> bool:
    """Return True for hyphenated or capitalised tag names."""
    if "-" in tag:
        return True
    first = tag[:1]
    return bool(first) and first == first.upper() and first != first.lower()


def find_components(
    node: RootNode | TemplateChildNode, components: List[ComponentUsage]
) -> None:
    """Append every component usage under ``node`` to ``components`` in document order."""
    if node.type is NodeType.ROOT:
        for child in node.children:
            find_components(child, components)
    elif node.type is NodeType.ELEMENT:
        if is_component(node.tag):
            components.append(ComponentUsage(name=node.tag, props=extract_props(node)))
        for child in node.children:
            find_components(child, components)
    elif node.type is NodeType.IF:
        for branch in node.branches:
            for child in branch.children:
                find_components(child, components)
    elif node.type is NodeType.FOR:
        for child in node.children:
            find_components(child, components)
    else:
        # Text, comments and interpolations never contain elements.
        return


def extract_props(element: ElementNode) -> Dict[str, PropValue]:
    """Map each attribute or directive of ``element`` to its value.

    Later entries overwrite earlier ones that resolve to the same key.
    """
    props: Dict[str, PropValue] = {}
    for prop in element.props:
        if isinstance(prop, AttributeNode):
            props[prop.name] = prop.value.content if prop.value is not None else True
        elif isinstance(prop, DirectiveNode):
            props[_directive_key(prop)] = _expression_value(prop.exp)
    return props


def _directive_key(directive: DirectiveNode) -> str:
    static_arg = directive.arg is not None and directive.arg.is_static
    if directive.name == "bind" and static_arg:
        return f":{directive.arg.content}"  # type: ignore[union-attr]
    if directive.name == "on" and static_arg:
        return f"@{directive.arg.content}"  # type: ignore[union-attr]
    return f"v-{directive.name}"


def _expression_value(exp: Optional[SimpleExpressionNode]) -> PropValue:
    if exp is None:
        return True
    if exp.type is NodeType.SIMPLE_EXPRESSION:
        return exp.content
    return True


__all__ = ["extract_props", "find_components", "is_component"]
