from __future__ import annotations
from dataclasses import dataclass
from io import BytesIO
from typing import Dict, Iterator, List, Optional, Union
from zipfile import BadZipFile
import logging

from docx import Document
from docx.document import Document as DocxDocument
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.exceptions import PackageNotFoundError
from docx.oxml.ns import qn
from docx.text.paragraph import Paragraph
from docx.text.run import Run
from lxml import etree

from thesis_validator.errors import DocumentOpenError
from thesis_validator.headings import HeadingClassifier
from thesis_validator.styles import StyleCatalog, StyleResolver, parse_theme_fonts

logger = logging.getLogger(__name__)

_W_P = qn("w:p")
_W_T = qn("w:t")
_W_SECT_PR = qn("w:sectPr")
_W_COMMENT_REFERENCE = qn("w:commentReference")

# Body children that carry no content of their own.
_MARKUP_ONLY = {
    _W_SECT_PR,
    qn("w:bookmarkStart"),
    qn("w:bookmarkEnd"),
    qn("w:commentRangeStart"),
    qn("w:commentRangeEnd"),
    qn("w:proofErr"),
    qn("w:permStart"),
    qn("w:permEnd"),
}


def open_document(data: bytes) -> DocxDocument:
    if not data:
        raise DocumentOpenError("Document is empty.")
    try:
        return Document(BytesIO(data))
    except (PackageNotFoundError, BadZipFile, KeyError, ValueError, etree.XMLSyntaxError) as e:
        raise DocumentOpenError(f"Cannot open document as .docx: {e}") from e


def save_document(document: DocxDocument) -> bytes:
    buf = BytesIO()
    document.save(buf)
    return buf.getvalue()


def _related_part(document: DocxDocument, reltype: str):
    try:
        return document.part.part_related_by(reltype)
    except KeyError:
        return None


def paragraph_text(paragraph) -> str:
    p = getattr(paragraph, "_element", paragraph)
    return "".join(t.text or "" for t in p.iter(_W_T))


def run_text(run: Run) -> str:
    return "".join(t.text or "" for t in run._element.findall(_W_T))


def content_runs(paragraph: Paragraph) -> List[Run]:
    """Direct runs of a paragraph, ignoring comment-reference runs."""
    return [r for r in paragraph.runs if r._element.find(_W_COMMENT_REFERENCE) is None]


def numbering_id(paragraph) -> Optional[int]:
    """numId of a numbered paragraph; 0 (numbering removed) counts as none."""
    p = getattr(paragraph, "_element", paragraph)
    num_pr = p.find(f"{qn('w:pPr')}/{qn('w:numPr')}")
    if num_pr is None:
        return None
    num_id = num_pr.find(qn("w:numId"))
    if num_id is None:
        return None
    try:
        value = int(num_id.get(qn("w:val")))
    except (TypeError, ValueError):
        return None
    return value or None


def numbering_level(paragraph) -> int:
    p = getattr(paragraph, "_element", paragraph)
    ilvl = p.find(f"{qn('w:pPr')}/{qn('w:numPr')}/{qn('w:ilvl')}")
    if ilvl is None:
        return 0
    try:
        return int(ilvl.get(qn("w:val")))
    except (TypeError, ValueError):
        return 0


class NumberingCatalog:
    """Left indents declared by numbering definitions, keyed by (numId, ilvl)."""

    def __init__(self, numbering_element=None):
        self._abstract_for_num: Dict[int, int] = {}
        self._level_left: Dict[tuple, int] = {}
        if numbering_element is not None:
            self._load(numbering_element)

    def _load(self, root) -> None:
        for abstract in root.findall(qn("w:abstractNum")):
            abstract_id = _int_attr(abstract, "abstractNumId")
            if abstract_id is None:
                continue
            for lvl in abstract.findall(qn("w:lvl")):
                ilvl = _int_attr(lvl, "ilvl")
                ind = lvl.find(f"{qn('w:pPr')}/{qn('w:ind')}")
                if ilvl is None or ind is None:
                    continue
                left = _int_attr(ind, "left")
                if left is None:
                    left = _int_attr(ind, "start")
                if left is not None:
                    self._level_left[(abstract_id, ilvl)] = left
        for num in root.findall(qn("w:num")):
            num_id = _int_attr(num, "numId")
            ref = num.find(qn("w:abstractNumId"))
            abstract_id = _int_attr(ref, "val") if ref is not None else None
            if num_id is not None and abstract_id is not None:
                self._abstract_for_num[num_id] = abstract_id

    def level_left_indent(self, num_id: int, ilvl: int) -> Optional[int]:
        abstract_id = self._abstract_for_num.get(num_id)
        if abstract_id is None:
            return None
        return self._level_left.get((abstract_id, ilvl))


def _int_attr(elem, name: str) -> Optional[int]:
    try:
        return int(elem.get(qn(f"w:{name}")))
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class ParagraphRef:
    index: int            # 1-based, document order over every paragraph
    paragraph: Paragraph
    top_level: bool       # direct child of the body

    @property
    def text(self) -> str:
        return paragraph_text(self.paragraph)


Block = Union[ParagraphRef, "etree._Element"]


class DocumentView:
    """Read model shared by all rules for one validation run.

    Every paragraph gets one index from a single document-order walk, so
    findings from any rule can be matched against the same section map.
    """

    def __init__(self, document: DocxDocument):
        self.document = document
        self.body = document.element.body

        styles_part = _related_part(document, RT.STYLES)
        numbering_part = _related_part(document, RT.NUMBERING)
        theme_part = _related_part(document, RT.THEME)

        self.styles = StyleCatalog(
            styles_part.element if styles_part is not None else None,
            theme_fonts=parse_theme_fonts(theme_part.blob if theme_part is not None else None),
        )
        self.numbering = NumberingCatalog(numbering_part.element if numbering_part is not None else None)
        self.resolver = StyleResolver(self.styles)
        self.headings = HeadingClassifier(self.resolver)

        self.paragraphs: List[ParagraphRef] = []
        self._index_by_element: Dict[etree._Element, int] = {}
        if self.body is not None:
            parent = document._body
            for i, p in enumerate(self.body.iter(_W_P), start=1):
                ref = ParagraphRef(index=i, paragraph=Paragraph(p, parent), top_level=p.getparent() is self.body)
                self.paragraphs.append(ref)
                self._index_by_element[p] = i
        logger.debug(f"Document view: {len(self.paragraphs)} paragraphs, {len(self.styles)} styles")

    def body_paragraphs(self) -> List[ParagraphRef]:
        return [ref for ref in self.paragraphs if ref.top_level]

    def index_of(self, paragraph) -> int:
        p = getattr(paragraph, "_element", paragraph)
        return self._index_by_element.get(p, 0)

    def block_items(self) -> Iterator[Block]:
        """Direct body children: ParagraphRef for paragraphs, raw elements otherwise."""
        if self.body is None:
            return
        for child in self.body.iterchildren():
            if child.tag == _W_P:
                yield self.paragraphs[self._index_by_element[child] - 1]
            elif isinstance(child.tag, str) and child.tag not in _MARKUP_ONLY:
                yield child

    def heading_level(self, ref: ParagraphRef) -> Optional[int]:
        return self.headings.heading_level(ref.paragraph)
