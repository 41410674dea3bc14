from __future__ import annotations
from typing import List

from thesis_validator.adapters.docx_adapter import numbering_id
from thesis_validator.locale_patterns import StyleKind, matches_kind
from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule
from thesis_validator.styles import Justification

_EXCLUDED_KINDS = (
    StyleKind.HEADING,
    StyleKind.TITLE,
    StyleKind.SUBTITLE,
    StyleKind.CAPTION,
    StyleKind.TOC,
    StyleKind.QUOTE,
    StyleKind.HEADER_FOOTER,
    StyleKind.LIST,
    StyleKind.LIST_PARAGRAPH,
)

_ALIGNMENT_NAMES = {
    Justification.LEFT: "left",
    Justification.RIGHT: "right",
    Justification.CENTER: "center",
    Justification.DISTRIBUTE: "distributed",
}


class TextJustificationRule(ValidationRule):
    name = "TextJustificationRule"

    def validate(self, view, config, comments=None) -> List[Finding]:
        findings: List[Finding] = []
        for ref in view.paragraphs:
            if not ref.text.strip() or numbering_id(ref.paragraph) is not None:
                continue
            style_id = view.resolver.paragraph_style_id(ref.paragraph)
            if matches_kind(_EXCLUDED_KINDS, style_id):
                continue

            alignment = view.resolver.resolve_justification(ref.paragraph)
            if alignment == Justification.BOTH:
                continue

            message = (
                f"Paragraph is {_ALIGNMENT_NAMES[alignment]} aligned. "
                "Standard text must use full justification (both margins)."
            )
            findings.append(self.finding(message, ref, preview=ref.text))
            if comments is not None:
                comments.add_comment_to_paragraph(ref.paragraph, message)
        return findings
