"""Tree-sitter powered matcher for Options API and ``<script setup>`` bindings."""

from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

from ..models import ScriptAnalysis
from ..parsing.languages import node_text, parse_script

_REACTIVE_CALLEES = {"ref", "reactive"}
_DERIVED_CALLEES = {"computed"}
_DEFINE_PROPS = "defineProps"

_VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}
_FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration"}
_FUNCTION_LITERALS = {"function", "function_expression", "arrow_function"}


class ScriptPatternMatcher:
    """Classifies imports, props, state and functions found in one script block.

    The syntax tree is walked once in pre-order. Each rule looks at a single
    node kind, so a script mixing both authoring styles yields the union of
    what each style declares. Shapes the rules do not know are skipped.
    """

    def __init__(self, source: str, lang: Optional[str] = None) -> None:
        self._code = source
        self._source = source.encode("utf-8")
        self._lang = lang

    def analyze(self) -> ScriptAnalysis:
        tree = parse_script(self._code, self._lang)
        analysis = ScriptAnalysis()
        self._visit(tree.root_node, analysis)
        return analysis

    def _visit(self, node: Node, analysis: ScriptAnalysis) -> None:
        kind = node.type
        if kind == "import_statement":
            self._match_import(node, analysis)
        elif kind in _VARIABLE_DECLARATIONS:
            self._match_state(node, analysis)
        elif kind in _FUNCTION_DECLARATIONS:
            name = node.child_by_field_name("name")
            if name is not None:
                analysis.methods.append(self._text(name))
        elif kind == "call_expression":
            self._match_define_props(node, analysis)
        elif kind == "export_statement":
            self._match_options_export(node, analysis)

        for child in node.named_children:
            self._visit(child, analysis)

    def _match_import(self, node: Node, analysis: ScriptAnalysis) -> None:
        source = node.child_by_field_name("source")
        if source is not None and source.type == "string":
            analysis.imports.append(self._string_value(source))

    def _match_state(self, node: Node, analysis: ScriptAnalysis) -> None:
        for declarator in node.named_children:
            if declarator.type != "variable_declarator":
                continue
            name = declarator.child_by_field_name("name")
            value = declarator.child_by_field_name("value")
            if name is None or name.type != "identifier":
                continue
            callee = self._callee_name(value)
            if callee in _REACTIVE_CALLEES:
                analysis.data.append(self._text(name))
            elif callee in _DERIVED_CALLEES:
                analysis.computed.append(self._text(name))

    def _match_define_props(self, node: Node, analysis: ScriptAnalysis) -> None:
        if self._callee_name(node) != _DEFINE_PROPS:
            return
        arguments = node.child_by_field_name("arguments")
        first = _first_named(arguments) if arguments is not None else None
        if first is None:
            return
        if first.type == "object":
            analysis.defined_props.extend(self._object_keys(first))
        elif first.type == "array":
            for element in first.named_children:
                if element.type == "string":
                    analysis.defined_props.append(self._string_value(element))

    def _match_options_export(self, node: Node, analysis: ScriptAnalysis) -> None:
        options = node.child_by_field_name("value")
        if options is None or options.type != "object":
            return
        for member in options.named_children:
            key = _member_key(member)
            name = self._property_name(key) if key is not None else None
            if name == "props":
                # Options API props are not collected; only defineProps() feeds defined_props.
                continue
            if name == "data":
                returned = self._returned_object(member)
                if returned is not None:
                    analysis.data.extend(self._object_keys(returned))
            elif name in ("computed", "methods") and member.type == "pair":
                value = member.child_by_field_name("value")
                if value is None or value.type != "object":
                    continue
                bucket = analysis.computed if name == "computed" else analysis.methods
                bucket.extend(self._object_keys(value))

    def _returned_object(self, member: Node) -> Optional[Node]:
        """Return the object literal produced by a ``data`` function, if any."""
        if member.type == "method_definition":
            function = member
        elif member.type == "pair":
            function = member.child_by_field_name("value")
            if function is None or function.type not in _FUNCTION_LITERALS:
                return None
        else:
            return None

        body = function.child_by_field_name("body")
        if body is None:
            return None
        if body.type == "statement_block":
            for statement in body.named_children:
                if statement.type == "return_statement":
                    result = _unwrap(_first_named(statement))
                    return result if result is not None and result.type == "object" else None
            return None
        result = _unwrap(body)
        return result if result is not None and result.type == "object" else None

    def _object_keys(self, obj: Node) -> List[str]:
        keys: List[str] = []
        for member in obj.named_children:
            if member.type == "shorthand_property_identifier":
                keys.append(self._text(member))
                continue
            key = _member_key(member)
            name = self._property_name(key) if key is not None else None
            if name:
                keys.append(name)
        return keys

    def _callee_name(self, node: Optional[Node]) -> Optional[str]:
        if node is None or node.type != "call_expression":
            return None
        function = node.child_by_field_name("function")
        if function is None or function.type != "identifier":
            return None
        return self._text(function)

    def _property_name(self, key: Node) -> Optional[str]:
        if key.type == "property_identifier":
            return self._text(key)
        if key.type == "string":
            return self._string_value(key)
        return None

    def _string_value(self, node: Node) -> str:
        return self._text(node)[1:-1]

    def _text(self, node: Node) -> str:
        return node_text(node, self._source)


def analyze_script(source: str, lang: Optional[str] = None) -> ScriptAnalysis:
    """Return the bindings declared by a script block."""
    return ScriptPatternMatcher(source, lang).analyze()


def _member_key(member: Node) -> Optional[Node]:
    if member.type == "pair":
        return member.child_by_field_name("key")
    if member.type == "method_definition":
        return member.child_by_field_name("name")
    return None


def _first_named(node: Optional[Node]) -> Optional[Node]:
    if node is None:
        return None
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


def _unwrap(node: Optional[Node]) -> Optional[Node]:
    while node is not None and node.type == "parenthesized_expression":
        node = _first_named(node)
    return node


__all__ = ["ScriptPatternMatcher", "analyze_script"]
