from __future__ import annotations
from typing import List, Optional

from docx.oxml.ns import qn

from thesis_validator.adapters.docx_adapter import ParagraphRef, content_runs, run_text
from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule
from thesis_validator.styles import TWIPS_PER_CM, Justification

CAPTION_SIZE_PT = 11.0
INDENT_TOLERANCE_TWIPS = 10
_PLAIN_STYLES = {"normal", "normalny"}

_ALIGNMENT_NAMES = {
    Justification.LEFT: "left-aligned",
    Justification.RIGHT: "right-aligned",
    Justification.BOTH: "justified",
    Justification.DISTRIBUTE: "justified",
}


def contains_image(ref: ParagraphRef) -> bool:
    p = ref.paragraph._element
    return p.find(".//" + qn("w:drawing")) is not None or p.find(".//" + qn("w:pict")) is not None


class FigureCaptionStyleRule(ValidationRule):
    """
    Each image paragraph must be followed by a caption paragraph that uses a
    caption style, 11pt text, centered alignment and no indentation.
    """

    name = "FigureCaptionStyleRule"

    def validate(self, view, config, comments=None) -> List[Finding]:
        findings: List[Finding] = []
        body = view.body_paragraphs()

        for i, ref in enumerate(body):
            if not contains_image(ref):
                continue

            caption: Optional[ParagraphRef] = body[i + 1] if i + 1 < len(body) else None
            if caption is None or not caption.text.strip():
                message = "Figure has no caption. Add a caption paragraph with text immediately after the image."
                findings.append(self.finding(message, ref, text="[Image]"))
                if comments is not None:
                    comments.add_comment_to_paragraph(ref.paragraph, message)
                continue

            for message in self._caption_problems(view, caption):
                findings.append(self.finding(message, caption, preview=caption.text))
                if comments is not None:
                    comments.add_comment_to_paragraph(caption.paragraph, message)

        return findings

    def _caption_problems(self, view, caption: ParagraphRef) -> List[str]:
        problems: List[str] = []
        resolver = view.resolver

        style_id = resolver.paragraph_style_id(caption.paragraph)
        style_name = view.styles.name_of(style_id) or style_id
        if not style_id or style_id.lower() in _PLAIN_STYLES or (style_name or "").lower() in _PLAIN_STYLES:
            label = style_name or "Normal"
            problems.append(
                f'Figure caption uses "{label}" style. '
                'Assign a Caption style (e.g., "Caption", "Legenda").'
            )

        text_runs = [r for r in content_runs(caption.paragraph) if run_text(r).strip()]
        # first run with an explicit size wins over the style chain
        size = next((s for s in map(resolver.direct_font_size, text_runs) if s is not None), None)
        if size is None:
            size = resolver.resolve_font_size(caption.paragraph)
        if size is not None and abs(size - CAPTION_SIZE_PT) > 0.01:
            problems.append(f"Figure caption font size must be 11pt, found {size:g}pt.")

        alignment = resolver.resolve_justification(caption.paragraph)
        if alignment != Justification.CENTER:
            problems.append(f"Figure caption must be centered, found {_ALIGNMENT_NAMES[alignment]}.")

        indent = resolver.resolve_indentation(caption.paragraph)
        if abs(indent.left) > INDENT_TOLERANCE_TWIPS or abs(indent.first_line) > INDENT_TOLERANCE_TWIPS:
            problems.append(
                "Figure caption must have no indentation "
                f"(left: {indent.left / TWIPS_PER_CM:.2f}cm, first-line: {indent.first_line / TWIPS_PER_CM:.2f}cm)."
            )
        return problems
