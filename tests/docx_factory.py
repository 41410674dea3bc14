"""Builds small .docx packages from WordprocessingML snippets for tests."""
from __future__ import annotations
from io import BytesIO
from typing import Dict, Optional, Tuple
from xml.sax.saxutils import escape
import zipfile

from thesis_validator.adapters.docx_adapter import DocumentView, open_document

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

_CT = {
    "document": "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml",
    "styles": "application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml",
    "numbering": "application/vnd.openxmlformats-officedocument.wordprocessingml.numbering+xml",
    "theme": "application/vnd.openxmlformats-officedocument.theme+xml",
}


def _attrs(values: Optional[Dict[str, object]]) -> str:
    if not values:
        return ""
    return "".join(f' w:{k}="{v}"' for k, v in values.items())


def run(text: str = "", *, font=None, size=None, bold=None, rstyle=None, tab=False) -> str:
    rpr = ""
    if rstyle:
        rpr += f'<w:rStyle w:val="{rstyle}"/>'
    if font:
        rpr += f'<w:rFonts w:ascii="{font}" w:hAnsi="{font}"/>'
    if bold is not None:
        rpr += "<w:b/>" if bold else '<w:b w:val="0"/>'
    if size is not None:
        rpr += f'<w:sz w:val="{int(size * 2)}"/>'
    body = "<w:tab/>" if tab else ""
    if text:
        body += f'<w:t xml:space="preserve">{escape(text)}</w:t>'
    return f"<w:r>{f'<w:rPr>{rpr}</w:rPr>' if rpr else ''}{body}</w:r>"


def para(*content: str, style=None, jc=None, ind=None, spacing=None, num: Optional[Tuple[int, int]] = None) -> str:
    ppr = ""
    if style:
        ppr += f'<w:pStyle w:val="{style}"/>'
    if num is not None:
        ppr += f'<w:numPr><w:ilvl w:val="{num[1]}"/><w:numId w:val="{num[0]}"/></w:numPr>'
    if spacing:
        ppr += f"<w:spacing{_attrs(spacing)}/>"
    if ind:
        ppr += f"<w:ind{_attrs(ind)}/>"
    if jc:
        ppr += f'<w:jc w:val="{jc}"/>'
    runs = "".join(c if c.startswith("<") else run(c) for c in content)
    return f"<w:p>{f'<w:pPr>{ppr}</w:pPr>' if ppr else ''}{runs}</w:p>"


def table(*cell_paragraphs: str) -> str:
    cells = "".join(f"<w:tc>{p}</w:tc>" for p in cell_paragraphs)
    return f"<w:tbl><w:tblPr/><w:tblGrid/><w:tr>{cells}</w:tr></w:tbl>"


def image_para() -> str:
    return "<w:p><w:r><w:drawing/></w:r></w:p>"


def toc_field() -> str:
    return (
        '<w:p><w:r><w:fldChar w:fldCharType="begin"/></w:r>'
        '<w:r><w:instrText xml:space="preserve"> TOC \\o "1-3" \\h \\z \\u </w:instrText></w:r>'
        '<w:r><w:fldChar w:fldCharType="separate"/></w:r>'
        '<w:r><w:t>Contents</w:t></w:r>'
        '<w:r><w:fldChar w:fldCharType="end"/></w:r></w:p>'
    )


def style(style_id: str, *, name=None, type="paragraph", based_on=None, default=False, ppr="", rpr="") -> str:
    attrs = f' w:type="{type}" w:styleId="{style_id}"'
    if default:
        attrs += ' w:default="1"'
    inner = f'<w:name w:val="{name or style_id}"/>'
    if based_on:
        inner += f'<w:basedOn w:val="{based_on}"/>'
    if ppr:
        inner += f"<w:pPr>{ppr}</w:pPr>"
    if rpr:
        inner += f"<w:rPr>{rpr}</w:rPr>"
    return f"<w:style{attrs}>{inner}</w:style>"


def heading_style(level: int, style_id: Optional[str] = None) -> str:
    return style(
        style_id or f"Heading{level}",
        name=f"heading {level}",
        based_on="Normal",
        ppr=f'<w:outlineLvl w:val="{level - 1}"/>',
    )


def styles_xml(*styles: str, defaults_ppr: str = "", defaults_rpr: str = "") -> str:
    defaults = ""
    if defaults_ppr or defaults_rpr:
        defaults = (
            "<w:docDefaults>"
            f"<w:rPrDefault><w:rPr>{defaults_rpr}</w:rPr></w:rPrDefault>"
            f"<w:pPrDefault><w:pPr>{defaults_ppr}</w:pPr></w:pPrDefault>"
            "</w:docDefaults>"
        )
    return f'<w:styles xmlns:w="{W_NS}">{defaults}{"".join(styles)}</w:styles>'


def numbering_xml(num_id: int = 1, abstract_id: int = 0, level_left: Optional[Dict[int, int]] = None) -> str:
    levels = "".join(
        f'<w:lvl w:ilvl="{lvl}"><w:start w:val="1"/><w:numFmt w:val="bullet"/>'
        f'<w:pPr><w:ind w:left="{left}" w:hanging="360"/></w:pPr></w:lvl>'
        for lvl, left in sorted((level_left or {}).items())
    )
    return (
        f'<w:numbering xmlns:w="{W_NS}">'
        f'<w:abstractNum w:abstractNumId="{abstract_id}">{levels}</w:abstractNum>'
        f'<w:num w:numId="{num_id}"><w:abstractNumId w:val="{abstract_id}"/></w:num>'
        "</w:numbering>"
    )


def theme_xml(minor: str = "Calibri", major: str = "Calibri Light") -> str:
    return (
        '<a:theme xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" name="Office Theme">'
        "<a:themeElements><a:fontScheme name=\"Office\">"
        f'<a:majorFont><a:latin typeface="{major}"/><a:ea typeface=""/><a:cs typeface=""/></a:majorFont>'
        f'<a:minorFont><a:latin typeface="{minor}"/><a:ea typeface=""/><a:cs typeface=""/></a:minorFont>'
        "</a:fontScheme></a:themeElements></a:theme>"
    )


def build_docx(body: str, styles: Optional[str] = None, numbering: Optional[str] = None,
               theme: Optional[str] = None) -> bytes:
    parts = {"word/document.xml": (
        f'<w:document xmlns:w="{W_NS}" xmlns:r="{REL_NS}"><w:body>{body}<w:sectPr/></w:body></w:document>'
    )}
    overrides = [("/word/document.xml", _CT["document"])]
    rels = []
    if styles is not None:
        parts["word/styles.xml"] = styles
        overrides.append(("/word/styles.xml", _CT["styles"]))
        rels.append(("styles", "styles.xml"))
    if numbering is not None:
        parts["word/numbering.xml"] = numbering
        overrides.append(("/word/numbering.xml", _CT["numbering"]))
        rels.append(("numbering", "numbering.xml"))
    if theme is not None:
        parts["word/theme/theme1.xml"] = theme
        overrides.append(("/word/theme/theme1.xml", _CT["theme"]))
        rels.append(("theme", "theme/theme1.xml"))

    content_types = (
        '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
        '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
        '<Default Extension="xml" ContentType="application/xml"/>'
        + "".join(f'<Override PartName="{name}" ContentType="{ct}"/>' for name, ct in overrides)
        + "</Types>"
    )
    package_rels = (
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        f'<Relationship Id="rId1" Type="{REL_NS}/officeDocument" Target="word/document.xml"/>'
        "</Relationships>"
    )
    document_rels = (
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        + "".join(
            f'<Relationship Id="rId{i}" Type="{REL_NS}/{kind}" Target="{target}"/>'
            for i, (kind, target) in enumerate(rels, start=1)
        )
        + "</Relationships>"
    )

    buf = BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("[Content_Types].xml", content_types)
        zf.writestr("_rels/.rels", package_rels)
        zf.writestr("word/_rels/document.xml.rels", document_rels)
        for name, xml in parts.items():
            zf.writestr(name, xml)
    return buf.getvalue()


def open_view(body: str, **kwargs) -> DocumentView:
    return DocumentView(open_document(build_docx(body, **kwargs)))
