"""
Locale-aware style name patterns.

Word derives style IDs from the localized display name with non-ASCII
characters dropped, so "Nagłówek 1" becomes "Nagwek1" and "Überschrift 1"
becomes "berschrift1". Both spellings are listed.

Adding a locale means adding rows here; rules only ask for kinds.
"""
from __future__ import annotations
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Set, Tuple


class StyleKind(str, Enum):
    HEADING = "heading"
    TITLE = "title"
    SUBTITLE = "subtitle"
    CAPTION = "caption"
    TOC = "toc"
    QUOTE = "quote"
    HEADER_FOOTER = "header_footer"
    LIST = "list"
    LIST_PARAGRAPH = "list_paragraph"
    NOTE = "note"
    FIGURE = "figure"
    TABLE = "table"
    BIBLIOGRAPHY = "bibliography"


# (substring, kind), matched case-insensitively against a style id or name
STYLE_PATTERNS: Tuple[Tuple[str, StyleKind], ...] = (
    ("heading", StyleKind.HEADING),
    ("nagwek", StyleKind.HEADING),
    ("nagłówek", StyleKind.HEADING),
    ("überschrift", StyleKind.HEADING),
    ("berschrift", StyleKind.HEADING),
    ("titre", StyleKind.HEADING),
    ("título", StyleKind.HEADING),
    ("ttulo", StyleKind.HEADING),
    ("titolo", StyleKind.HEADING),
    ("title", StyleKind.TITLE),
    ("tytu", StyleKind.TITLE),
    ("subtitle", StyleKind.SUBTITLE),
    ("podtytu", StyleKind.SUBTITLE),
    ("caption", StyleKind.CAPTION),
    ("podpis", StyleKind.CAPTION),
    ("legenda", StyleKind.CAPTION),
    ("toc", StyleKind.TOC),
    ("tableofcontents", StyleKind.TOC),
    ("contents", StyleKind.TOC),
    ("spistreci", StyleKind.TOC),
    ("spis", StyleKind.TOC),
    ("quote", StyleKind.QUOTE),
    ("cytat", StyleKind.QUOTE),
    ("header", StyleKind.HEADER_FOOTER),
    ("footer", StyleKind.HEADER_FOOTER),
    ("listparagraph", StyleKind.LIST_PARAGRAPH),
    ("list paragraph", StyleKind.LIST_PARAGRAPH),
    ("akapitzlist", StyleKind.LIST_PARAGRAPH),
    ("list", StyleKind.LIST),
    ("lista", StyleKind.LIST),
    ("footnote", StyleKind.NOTE),
    ("endnote", StyleKind.NOTE),
    ("figure", StyleKind.FIGURE),
    ("rysunek", StyleKind.FIGURE),
    ("table", StyleKind.TABLE),
    ("tabela", StyleKind.TABLE),
    ("bibliography", StyleKind.BIBLIOGRAPHY),
    ("bibliografia", StyleKind.BIBLIOGRAPHY),
)

# Prefixes that carry a heading level as a trailing number: "Heading2", "Nagwek3".
HEADING_PREFIXES: FrozenSet[str] = frozenset({
    "heading",
    "nagwek",
    "nagłówek",
    "überschrift",
    "berschrift",
    "titre",
    "título",
    "ttulo",
    "titolo",
})

# Never headings, whatever digits or outline level they carry.
NON_HEADING_KINDS: FrozenSet[StyleKind] = frozenset({
    StyleKind.TOC,
    StyleKind.CAPTION,
    StyleKind.TITLE,
    StyleKind.SUBTITLE,
    StyleKind.HEADER_FOOTER,
    StyleKind.NOTE,
    StyleKind.LIST_PARAGRAPH,
})


def style_kinds(*names: Optional[str]) -> Set[StyleKind]:
    kinds: Set[StyleKind] = set()
    for name in names:
        if not name:
            continue
        lowered = name.lower()
        for pattern, kind in STYLE_PATTERNS:
            if pattern in lowered:
                kinds.add(kind)
    return kinds


def matches_kind(kinds: Iterable[StyleKind], *names: Optional[str]) -> bool:
    return bool(style_kinds(*names) & set(kinds))
