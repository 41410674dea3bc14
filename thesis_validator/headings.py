from __future__ import annotations
from typing import Optional
import re

from thesis_validator.locale_patterns import HEADING_PREFIXES, NON_HEADING_KINDS, style_kinds
from thesis_validator.styles import StyleResolver

_TRAILING_LEVEL = re.compile(r"^(?P<prefix>.*?)\s*(?P<level>\d+)$")


class HeadingClassifier:
    """Decides whether a paragraph is a heading, and at which 1-based level."""

    def __init__(self, resolver: StyleResolver):
        self.resolver = resolver

    def style_level(self, style_id: Optional[str]) -> Optional[int]:
        if not style_id:
            return None
        if style_kinds(style_id) & NON_HEADING_KINDS:
            return None

        m = _TRAILING_LEVEL.match(style_id)
        if m and m.group("prefix").lower() in HEADING_PREFIXES:
            level = int(m.group("level"))
            if level >= 1:
                return level

        outline = self.resolver.resolve_outline_level(style_id)
        return outline + 1 if outline is not None else None

    def heading_level(self, paragraph) -> Optional[int]:
        return self.style_level(self.resolver.paragraph_style_id(paragraph))

    def is_heading(self, paragraph) -> bool:
        return self.heading_level(paragraph) is not None
