from __future__ import annotations
from bisect import bisect_right
from typing import Iterable, List, Optional, Tuple

from thesis_validator.adapters.docx_adapter import DocumentView
from thesis_validator.models import Finding, HeadingInfo


def extract_headings(view: DocumentView) -> List[HeadingInfo]:
    headings: List[HeadingInfo] = []
    for ref in view.paragraphs:
        level = view.heading_level(ref)
        if level is None:
            continue
        text = ref.text.strip()
        if text:
            headings.append(HeadingInfo(level=level, text=text, paragraph=ref.index))
    return headings


class SectionMap:
    """Nearest preceding heading for any paragraph index."""

    def __init__(self, headings: Iterable[HeadingInfo]):
        ordered: List[Tuple[int, str]] = sorted((h.paragraph, h.text) for h in headings if h.text.strip())
        self._indices = [i for i, _ in ordered]
        self._texts = [t for _, t in ordered]

    def section_for(self, paragraph: int) -> Optional[str]:
        if paragraph <= 0:
            return None
        pos = bisect_right(self._indices, paragraph)
        return self._texts[pos - 1] if pos else None


def assign_sections(findings: Iterable[Finding], section_map: SectionMap) -> None:
    """Fill in ``location.section``; the only place findings are mutated after creation."""
    for f in findings:
        section = section_map.section_for(f.location.paragraph)
        if section is not None:
            f.location.section = section
