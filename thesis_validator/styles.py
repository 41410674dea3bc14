"""
Effective formatting resolution.

Every attribute is resolved through the same ladder:

    direct properties -> paragraph style -> basedOn chain
    -> default paragraph style (and its chain) -> docDefaults -> fallback

Each level is read as a tri-state: ``UNSET`` when the attribute is absent
(keep walking) or an explicit value, zero included (stop). Resolution never
raises; "no information anywhere" comes back as ``None``.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from docx.oxml.ns import qn
from lxml import etree

logger = logging.getLogger(__name__)

A_NS = {"a": "http://schemas.openxmlformats.org/drawingml/2006/main"}

TWIPS_PER_CM = 567
TWIPS_PER_POINT = 20
LINE_SPACING_ONE_AND_HALF = 360   # 240ths of a line
SPACING_AUTO = -1                 # unparsable or auto spacing; never an allowed value


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class Justification(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    BOTH = "both"
    DISTRIBUTE = "distribute"


_JC_VALUES = {
    "left": Justification.LEFT,
    "start": Justification.LEFT,
    "right": Justification.RIGHT,
    "end": Justification.RIGHT,
    "center": Justification.CENTER,
    "both": Justification.BOTH,
    "lowkashida": Justification.BOTH,
    "mediumkashida": Justification.BOTH,
    "highkashida": Justification.BOTH,
    "distribute": Justification.DISTRIBUTE,
    "thaidistribute": Justification.DISTRIBUTE,
}


@dataclass(frozen=True)
class Indentation:
    left: int = 0
    first_line: int = 0   # negative for hanging indents


@dataclass(frozen=True)
class LineSpacing:
    value: int
    rule: Optional[str] = None

    @property
    def is_one_and_half(self) -> bool:
        return self.value == LINE_SPACING_ONE_AND_HALF and self.rule in (None, "auto")


@dataclass(frozen=True)
class ParagraphSpacing:
    before: Optional[int] = None
    after: Optional[int] = None


@dataclass(frozen=True)
class StyleDefinition:
    style_id: str
    name: Optional[str]
    style_type: str
    based_on: Optional[str]
    is_default: bool
    element: Any

    @property
    def ppr(self):
        return self.element.find(qn("w:pPr"))

    @property
    def rpr(self):
        return self.element.find(qn("w:rPr"))


# =============================================================================
# Raw attribute readers
# =============================================================================

def _element_of(obj):
    """Accept python-docx proxies or bare oxml elements."""
    return getattr(obj, "_element", obj)


def _attr(elem, name: str) -> Optional[str]:
    if elem is None:
        return None
    return elem.get(qn(f"w:{name}"))


def _child(elem, name: str):
    if elem is None:
        return None
    return elem.find(qn(f"w:{name}"))


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        try:
            return int(round(float(value)))
        except ValueError:
            return None


def _on_off(elem) -> Any:
    if elem is None:
        return UNSET
    val = _attr(elem, "val")
    if val is None:
        return True
    return val.strip().lower() not in ("0", "false", "off", "none")


def parse_theme_fonts(theme_bytes: Optional[bytes]) -> Dict[str, str]:
    """Map theme font slots (``minorHAnsi``...) to typefaces from theme1.xml."""
    if not theme_bytes:
        return {}
    try:
        root = etree.fromstring(theme_bytes)
    except etree.XMLSyntaxError as exc:
        logger.warning(f"Ignoring unreadable theme part: {exc}")
        return {}
    scheme = root.find(".//a:fontScheme", namespaces=A_NS)
    if scheme is None:
        return {}
    mapping: Dict[str, str] = {}
    for prefix in ("major", "minor"):
        font = scheme.find(f"a:{prefix}Font", namespaces=A_NS)
        if font is None:
            continue
        latin = font.find("a:latin", namespaces=A_NS)
        if latin is not None and latin.get("typeface"):
            mapping[f"{prefix}Ascii"] = latin.get("typeface")
            mapping[f"{prefix}HAnsi"] = latin.get("typeface")
        ea = font.find("a:ea", namespaces=A_NS)
        if ea is not None and ea.get("typeface"):
            mapping[f"{prefix}EastAsia"] = ea.get("typeface")
    return mapping


# =============================================================================
# Style catalog
# =============================================================================

class StyleCatalog:
    """Read-only index over styles.xml."""

    def __init__(self, styles_element=None, theme_fonts: Optional[Dict[str, str]] = None):
        self._by_id: Dict[str, StyleDefinition] = {}
        self._by_folded_id: Dict[str, StyleDefinition] = {}
        self._chains: Dict[str, Tuple[StyleDefinition, ...]] = {}
        self.theme_fonts = dict(theme_fonts or {})
        self.default_paragraph_style: Optional[StyleDefinition] = None
        self.doc_defaults_ppr = None
        self.doc_defaults_rpr = None
        if styles_element is not None:
            self._load(styles_element)

    def _load(self, root) -> None:
        defaults = root.find(qn("w:docDefaults"))
        if defaults is not None:
            self.doc_defaults_ppr = _child(_child(defaults, "pPrDefault"), "pPr")
            self.doc_defaults_rpr = _child(_child(defaults, "rPrDefault"), "rPr")

        paragraph_defaults: List[StyleDefinition] = []
        for elem in root.findall(qn("w:style")):
            style_id = _attr(elem, "styleId")
            if not style_id:
                continue
            based_on = _attr(_child(elem, "basedOn"), "val")
            style = StyleDefinition(
                style_id=style_id,
                name=_attr(_child(elem, "name"), "val"),
                style_type=_attr(elem, "type") or "paragraph",
                based_on=based_on,
                is_default=(_attr(elem, "default") or "").lower() in ("1", "true", "on"),
                element=elem,
            )
            self._by_id.setdefault(style_id, style)
            self._by_folded_id.setdefault(style_id.casefold(), style)
            if style.is_default and style.style_type == "paragraph":
                paragraph_defaults.append(style)

        if paragraph_defaults:
            self.default_paragraph_style = paragraph_defaults[0]
        if len(paragraph_defaults) > 1:
            logger.warning(
                f"{len(paragraph_defaults)} default paragraph styles declared; "
                f"using '{paragraph_defaults[0].style_id}'"
            )

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, style_id: Optional[str]) -> Optional[StyleDefinition]:
        if not style_id:
            return None
        style = self._by_id.get(style_id)
        if style is None:
            style = self._by_folded_id.get(style_id.casefold())
        return style

    def chain(self, style_id: Optional[str]) -> Tuple[StyleDefinition, ...]:
        """The style followed by its basedOn ancestors, stopping at the first revisit."""
        if not style_id:
            return ()
        cached = self._chains.get(style_id)
        if cached is not None:
            return cached
        seen = set()
        out: List[StyleDefinition] = []
        current = self.get(style_id)
        while current is not None and current.style_id not in seen:
            seen.add(current.style_id)
            out.append(current)
            current = self.get(current.based_on)
        result = tuple(out)
        self._chains[style_id] = result
        return result

    def name_of(self, style_id: Optional[str]) -> Optional[str]:
        style = self.get(style_id)
        return style.name if style is not None else None


# =============================================================================
# Resolver
# =============================================================================

class StyleResolver:
    def __init__(self, catalog: StyleCatalog):
        self.catalog = catalog

    # -- ladders ---------------------------------------------------------------

    def paragraph_style_id(self, paragraph) -> Optional[str]:
        ppr = _child(_element_of(paragraph), "pPr")
        return _attr(_child(ppr, "pStyle"), "val")

    def _style_ladder(self, style_id: Optional[str]) -> List[StyleDefinition]:
        styles = list(self.catalog.chain(style_id))
        default = self.catalog.default_paragraph_style
        if default is not None:
            ids = {s.style_id for s in styles}
            styles.extend(s for s in self.catalog.chain(default.style_id) if s.style_id not in ids)
        return styles

    def _ppr_levels(self, paragraph) -> List[Any]:
        p = _element_of(paragraph)
        levels = [_child(p, "pPr")]
        levels.extend(s.ppr for s in self._style_ladder(self.paragraph_style_id(p)))
        levels.append(self.catalog.doc_defaults_ppr)
        return levels

    def _rpr_levels(self, paragraph, run=None) -> List[Any]:
        levels: List[Any] = []
        if run is not None:
            rpr = _child(_element_of(run), "rPr")
            levels.append(rpr)
            char_style = _attr(_child(rpr, "rStyle"), "val")
            levels.extend(s.rpr for s in self.catalog.chain(char_style))
        levels.extend(s.rpr for s in self._style_ladder(self.paragraph_style_id(paragraph)))
        levels.append(self.catalog.doc_defaults_rpr)
        return levels

    @staticmethod
    def _first(levels: List[Any], reader: Callable[[Any], Any]) -> Any:
        for elem in levels:
            if elem is None:
                continue
            value = reader(elem)
            if value is not UNSET:
                return value
        return UNSET

    # -- per-level readers -----------------------------------------------------

    def _read_font(self, rpr) -> Any:
        fonts = _child(rpr, "rFonts")
        if fonts is None:
            return UNSET
        ascii_font = _attr(fonts, "ascii")
        if ascii_font:
            return ascii_font
        theme = _attr(fonts, "asciiTheme")
        if theme and theme in self.catalog.theme_fonts:
            return self.catalog.theme_fonts[theme]
        return UNSET

    @staticmethod
    def _read_size(rpr) -> Any:
        half_points = _parse_int(_attr(_child(rpr, "sz"), "val"))
        return UNSET if half_points is None else half_points / 2.0

    @staticmethod
    def _read_bold(rpr) -> Any:
        return _on_off(_child(rpr, "b"))

    @staticmethod
    def _read_jc(ppr) -> Any:
        val = _attr(_child(ppr, "jc"), "val")
        if val is None:
            return UNSET
        return _JC_VALUES.get(val.lower(), UNSET)

    @staticmethod
    def _read_left(ppr) -> Any:
        ind = _child(ppr, "ind")
        left = _parse_int(_attr(ind, "left"))
        if left is None:
            left = _parse_int(_attr(ind, "start"))
        return UNSET if left is None else left

    @staticmethod
    def _read_first_line(ppr) -> Any:
        ind = _child(ppr, "ind")
        if ind is None:
            return UNSET
        first_line = _attr(ind, "firstLine")
        chars = _attr(ind, "firstLineChars")
        hanging = _attr(ind, "hanging")
        if first_line is None and chars is None and hanging is None:
            return UNSET
        value = _parse_int(first_line)
        hanging_value = _parse_int(hanging)
        if value is not None and not (value == 0 and hanging_value):
            return value
        chars_value = _parse_int(chars)
        if chars_value:
            return int(round(chars_value * 2.5))
        if hanging_value is not None:
            return -hanging_value
        return 0

    @staticmethod
    def _read_line(ppr) -> Any:
        spacing = _child(ppr, "spacing")
        line = _parse_int(_attr(spacing, "line"))
        if line is None:
            return UNSET
        return LineSpacing(value=line, rule=_attr(spacing, "lineRule"))

    @staticmethod
    def _spacing_reader(side: str) -> Callable[[Any], Any]:
        def read(ppr) -> Any:
            spacing = _child(ppr, "spacing")
            if spacing is None:
                return UNSET
            autospacing = (_attr(spacing, f"{side}Autospacing") or "").lower()
            if autospacing in ("1", "true", "on"):
                return SPACING_AUTO
            raw = _attr(spacing, side)
            if raw is None:
                return UNSET
            value = _parse_int(raw)
            return SPACING_AUTO if value is None else value
        return read

    @staticmethod
    def _read_outline(ppr) -> Any:
        level = _parse_int(_attr(_child(ppr, "outlineLvl"), "val"))
        return UNSET if level is None else level

    # -- public queries --------------------------------------------------------

    def resolve_font(self, paragraph, run) -> Optional[str]:
        value = self._first(self._rpr_levels(paragraph, run), self._read_font)
        return None if value is UNSET else value

    def resolve_font_size(self, paragraph, run=None) -> Optional[float]:
        value = self._first(self._rpr_levels(paragraph, run), self._read_size)
        return None if value is UNSET else value

    def direct_font_size(self, run) -> Optional[float]:
        value = self._read_size(_child(_element_of(run), "rPr"))
        return None if value is UNSET else value

    def resolve_bold(self, paragraph, run) -> bool:
        value = self._first(self._rpr_levels(paragraph, run), self._read_bold)
        return bool(value) if value is not UNSET else False

    def resolve_justification(self, paragraph) -> Justification:
        value = self._first(self._ppr_levels(paragraph), self._read_jc)
        return Justification.LEFT if value is UNSET else value

    def resolve_indentation(self, paragraph) -> Indentation:
        levels = self._ppr_levels(paragraph)
        left = self._first(levels, self._read_left)
        first_line = self._first(levels, self._read_first_line)
        return Indentation(
            left=0 if left is UNSET else left,
            first_line=0 if first_line is UNSET else first_line,
        )

    def direct_left_indent(self, paragraph) -> Optional[int]:
        value = self._read_left(_child(_element_of(paragraph), "pPr"))
        return None if value is UNSET else value

    def resolve_line_spacing(self, paragraph) -> Optional[LineSpacing]:
        value = self._first(self._ppr_levels(paragraph), self._read_line)
        return None if value is UNSET else value

    def resolve_paragraph_spacing(self, paragraph) -> ParagraphSpacing:
        levels = self._ppr_levels(paragraph)
        before = self._first(levels, self._spacing_reader("before"))
        after = self._first(levels, self._spacing_reader("after"))
        return ParagraphSpacing(
            before=None if before is UNSET else before,
            after=None if after is UNSET else after,
        )

    def resolve_outline_level(self, style_id: Optional[str]) -> Optional[int]:
        """First outline level 0-8 on the style or its ancestors.

        Level 9 marks body text; an ancestor may still declare a heading level.
        """
        for style in self.catalog.chain(style_id):
            level = self._read_outline(style.ppr) if style.ppr is not None else UNSET
            if level is not UNSET and 0 <= level <= 8:
                return level
        return None
