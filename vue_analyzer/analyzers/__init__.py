"""Pattern matchers over script and template syntax trees."""

from __future__ import annotations

from .script import ScriptPatternMatcher, analyze_script
from .template import extract_props, find_components, is_component

__all__ = [
    "ScriptPatternMatcher",
    "analyze_script",
    "extract_props",
    "find_components",
    "is_component",
]
