from __future__ import annotations

import textwrap

import pytest

from vue_analyzer.parsing import SfcParseError, parse_sfc


def _parse(source: str):
    return parse_sfc(textwrap.dedent(source).lstrip("\n"), filename="Demo.vue")


def test_blocks_are_split_by_type() -> None:
    descriptor = _parse(
        """
        <template>
          <div><Child /></div>
        </template>

        <script setup lang="ts">
        const count = ref(0)
        </script>

        <style scoped>
        .a { color: red; }
        </style>
        <style lang="scss" module></style>

        <i18n lang="json">{"en": {}}</i18n>
        """
    )

    assert descriptor.filename == "Demo.vue"
    assert descriptor.template is not None
    assert "<Child />" in descriptor.template.content
    assert descriptor.template.line == 1
    assert descriptor.script is None
    assert descriptor.script_setup is not None
    assert descriptor.script_setup.setup is True
    assert descriptor.script_setup.lang == "ts"
    assert descriptor.script_setup.content.strip() == "const count = ref(0)"
    assert len(descriptor.styles) == 2
    assert descriptor.styles[0].attrs == {"scoped": True}
    assert descriptor.styles[1].lang == "scss"
    assert [block.type for block in descriptor.custom_blocks] == ["i18n"]


def test_classic_and_setup_scripts_coexist() -> None:
    descriptor = _parse(
        """
        <script>
        export default { name: 'Demo' }
        </script>
        <script setup>
        function go() {}
        </script>
        """
    )

    assert descriptor.template is None
    assert descriptor.script is not None
    assert descriptor.script.setup is False
    assert descriptor.script.lang is None
    assert descriptor.script_setup is not None
    assert "function go" in descriptor.script_setup.content


def test_script_only_document_is_valid() -> None:
    descriptor = _parse("<script>export default {}</script>\n")

    assert descriptor.script is not None
    assert descriptor.styles == []


def test_requires_template_or_script() -> None:
    with pytest.raises(SfcParseError) as excinfo:
        _parse("<style>.a {}</style>\n")

    assert excinfo.value.errors == [
        "At least one <template> or <script> is required in a single file component."
    ]
    assert excinfo.value.filename == "Demo.vue"
    assert str(excinfo.value).startswith("Demo.vue: ")


def test_duplicate_blocks_are_rejected() -> None:
    with pytest.raises(SfcParseError) as excinfo:
        _parse(
            """
            <template><div /></template>
            <template><span /></template>
            <script>export default {}</script>
            <script>export default {}</script>
            """
        )

    assert excinfo.value.errors == [
        "Single file component can contain only one <template> element.",
        "Single file component can contain only one <script> element.",
    ]


def test_script_languages_must_match() -> None:
    with pytest.raises(SfcParseError, match="same language type"):
        _parse(
            """
            <script lang="ts">export default {}</script>
            <script setup>const a = 1</script>
            """
        )


def test_unclosed_template_is_reported() -> None:
    with pytest.raises(SfcParseError, match="missing end tag"):
        _parse("<template>\n  <div></div>\n")


def test_stray_end_tag_is_reported() -> None:
    with pytest.raises(SfcParseError, match="Invalid end tag|Syntax error"):
        _parse("<template><div /></template>\n</section>\n")


@pytest.mark.parametrize(
    "markup",
    [
        "<span>{{ a < b }}</span>",
        "<Input v-model='x'><Icon /></Input>",
        "<p><MyWidget /><div>x</div></p>",
    ],
)
def test_template_content_survives_block_split(markup: str) -> None:
    descriptor = _parse(f"<template>\n  {markup}\n</template>\n<script setup>\nconst a = 1\n</script>\n")

    assert descriptor.template is not None
    assert descriptor.template.content.strip() == markup
    assert descriptor.script_setup is not None
