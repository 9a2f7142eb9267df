"""Parsers that turn SFC documents into blocks and syntax trees."""

from __future__ import annotations

from .sfc import SfcBlock, SfcDescriptor, SfcParseError, parse_sfc
from .template import RootNode, TemplateSyntaxError, compile_template

__all__ = [
    "RootNode",
    "SfcBlock",
    "SfcDescriptor",
    "SfcParseError",
    "TemplateSyntaxError",
    "compile_template",
    "parse_sfc",
]
