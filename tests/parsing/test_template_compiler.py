from __future__ import annotations

import pytest

from vue_analyzer.parsing.template import (
    AttributeNode,
    CommentNode,
    DirectiveNode,
    ElementNode,
    ForNode,
    IfNode,
    InterpolationNode,
    NodeType,
    TemplateSyntaxError,
    TextNode,
    compile_template,
    parse_directive,
)


def test_plain_attributes_are_not_directives() -> None:
    assert parse_directive("class", "a") is None
    assert parse_directive("data-v", "1") is None


@pytest.mark.parametrize(
    ("raw_name", "name", "arg", "is_static", "modifiers"),
    [
        (":title", "bind", "title", True, []),
        ("v-bind:title.camel", "bind", "title", True, ["camel"]),
        (".value", "bind", "value", True, ["prop"]),
        ("@click.stop.prevent", "on", "click", True, ["stop", "prevent"]),
        ("v-on:[event]", "on", "event", False, []),
        ("#header", "slot", "header", True, []),
        ("v-model.trim", "model", None, None, ["trim"]),
        ("v-else", "else", None, None, []),
    ],
)
def test_parse_directive(
    raw_name: str, name: str, arg: str | None, is_static: bool | None, modifiers: list[str]
) -> None:
    directive = parse_directive(raw_name, "expr")

    assert directive is not None
    assert directive.name == name
    assert directive.raw_name == raw_name
    assert directive.modifiers == modifiers
    assert directive.exp is not None and directive.exp.content == "expr"
    if arg is None:
        assert directive.arg is None
    else:
        assert directive.arg is not None
        assert directive.arg.content == arg
        assert directive.arg.is_static is is_static


def test_directive_without_value_has_no_expression() -> None:
    assert parse_directive("v-cloak", None).exp is None  # type: ignore[union-attr]
    assert parse_directive(":active", "").exp is None  # type: ignore[union-attr]


def test_elements_text_and_interpolations() -> None:
    root = compile_template('<p class="lead">Hello {{ name }}! a &amp; b</p>\n<!-- note -->')

    assert root.type is NodeType.ROOT
    paragraph, comment = root.children
    assert isinstance(paragraph, ElementNode)
    assert paragraph.tag == "p"
    assert paragraph.props == [AttributeNode("class", TextNode("lead"))]
    first, interpolation, last = paragraph.children
    assert first == TextNode("Hello ")
    assert isinstance(interpolation, InterpolationNode)
    assert interpolation.content.content == "name"
    assert last == TextNode("! a & b")
    assert comment == CommentNode(" note ")


def test_element_lines_are_one_based() -> None:
    root = compile_template("<div>\n  <Child />\n</div>")

    outer = root.children[0]
    assert isinstance(outer, ElementNode)
    child = outer.children[0]
    assert isinstance(child, ElementNode)
    assert (outer.line, child.line) == (1, 2)


def test_conditional_chain_is_lifted() -> None:
    root = compile_template(
        '<A v-if="x" id="a" />\n<!-- between -->\n<B v-else-if="y" />\n<C v-else />'
    )

    assert len(root.children) == 1
    conditional = root.children[0]
    assert isinstance(conditional, IfNode)
    conditions = [
        branch.condition.content if branch.condition is not None else None
        for branch in conditional.branches
    ]
    assert conditions == ["x", "y", None]
    first = conditional.branches[0].children[0]
    assert isinstance(first, ElementNode)
    assert first.props == [AttributeNode("id", TextNode("a"))]
    assert isinstance(conditional.branches[1].children[0], CommentNode)


def test_loop_is_lifted_with_alias_and_source() -> None:
    root = compile_template('<li v-for="(item, i) in items" :key="i">{{ item }}</li>')

    loop = root.children[0]
    assert isinstance(loop, ForNode)
    assert loop.alias == "(item, i)"
    assert loop.source.content == "items"
    item = loop.children[0]
    assert isinstance(item, ElementNode)
    assert [prop.raw_name for prop in item.props if isinstance(prop, DirectiveNode)] == [":key"]


def test_loop_inside_conditional() -> None:
    root = compile_template('<Row v-if="ok" v-for="row of rows" />')

    conditional = root.children[0]
    assert isinstance(conditional, IfNode)
    assert isinstance(conditional.branches[0].children[0], ForNode)


def test_template_wrapper_contributes_children() -> None:
    root = compile_template('<template v-if="ok"><A /><B /></template>')

    conditional = root.children[0]
    assert isinstance(conditional, IfNode)
    tags = [child.tag for child in conditional.branches[0].children if isinstance(child, ElementNode)]
    assert tags == ["A", "B"]


def test_paragraph_keeps_block_children() -> None:
    root = compile_template("<p><div>inside</div></p>")

    assert len(root.children) == 1
    paragraph = root.children[0]
    assert isinstance(paragraph, ElementNode)
    assert paragraph.tag == "p"
    assert [child.tag for child in paragraph.children if isinstance(child, ElementNode)] == ["div"]


def _element_tags(children: list) -> list[str]:
    tags: list[str] = []
    for child in children:
        if isinstance(child, ElementNode):
            tags.append(child.tag)
            tags.extend(_element_tags(child.children))
    return tags


@pytest.mark.parametrize(
    "expression",
    [
        "a < b",
        "a > b ? 1 : 2",
        "a && b",
        "items.map(i => i.x)",
        "x<y && y>z",
    ],
)
def test_interpolation_operators_are_not_markup(expression: str) -> None:
    root = compile_template(f"<div><span>{{{{ {expression} }}}}</span><MyWidget /></div>")

    assert _element_tags(root.children) == ["div", "span", "MyWidget"]
    outer = root.children[0]
    assert isinstance(outer, ElementNode)
    span = outer.children[0]
    assert isinstance(span, ElementNode)
    (interpolation,) = span.children
    assert isinstance(interpolation, InterpolationNode)
    assert interpolation.content.content == expression


@pytest.mark.parametrize(
    ("source", "tags"),
    [
        ("<Input v-model='x'><Icon/></Input>", ["Input", "Icon"]),
        ('<nav><Link to="/"><Icon name="home" /> Home</Link></nav>', ["nav", "Link", "Icon"]),
        ("<p><MyWidget/><div>x</div></p>", ["p", "MyWidget", "div"]),
        ("<ul><li><a>one</a><li>two</li></li></ul>", ["ul", "li", "a", "li"]),
        ("<div><input><br><img src='a.png'><MyWidget /></div>", ["div", "input", "br", "img", "MyWidget"]),
    ],
)
def test_nesting_follows_vue_rather_than_html(source: str, tags: list[str]) -> None:
    assert _element_tags(compile_template(source).children) == tags


def test_void_named_component_keeps_children() -> None:
    root = compile_template("<Input v-model='x'><Icon/></Input>")

    (component,) = root.children
    assert isinstance(component, ElementNode)
    assert [prop.raw_name for prop in component.props if isinstance(prop, DirectiveNode)] == [
        "v-model"
    ]
    assert [child.tag for child in component.children if isinstance(child, ElementNode)] == ["Icon"]


def test_else_without_if_is_an_error() -> None:
    with pytest.raises(TemplateSyntaxError, match="no adjacent v-if"):
        compile_template('<div />\n<span v-else />')


def test_branch_after_else_is_an_error() -> None:
    with pytest.raises(TemplateSyntaxError, match="cannot follow v-else"):
        compile_template('<A v-if="a" />\n<B v-else />\n<C v-else-if="c" />')


def test_invalid_loop_expression_is_an_error() -> None:
    with pytest.raises(TemplateSyntaxError, match="v-for"):
        compile_template('<li v-for="items" />')


def test_unmatched_end_tag_is_an_error() -> None:
    with pytest.raises(TemplateSyntaxError) as excinfo:
        compile_template("<div>\n  </span>\n</div>")

    assert excinfo.value.line is not None
    assert "end tag" in excinfo.value.message or "unexpected syntax" in excinfo.value.message


@pytest.mark.parametrize(
    "source",
    ["<div><span></div>", "<Input v-model='x'><Icon />", "<p>\n  <MyWidget />\n"],
)
def test_unclosed_element_is_an_error(source: str) -> None:
    with pytest.raises(TemplateSyntaxError, match="missing end[ _]tag"):
        compile_template(source)
