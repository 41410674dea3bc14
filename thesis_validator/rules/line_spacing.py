from __future__ import annotations
from typing import List

from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule
from thesis_validator.styles import SPACING_AUTO, TWIPS_PER_POINT


class LineSpacingDependencyRule(ValidationRule):
    """Paragraphs set to 1.5 line spacing must have no space before or after."""

    name = "LineSpacingDependencyRule"

    def validate(self, view, config, comments=None) -> List[Finding]:
        findings: List[Finding] = []
        for ref in view.paragraphs:
            line = view.resolver.resolve_line_spacing(ref.paragraph)
            if line is None or not line.is_one_and_half:
                continue

            spacing = view.resolver.resolve_paragraph_spacing(ref.paragraph)
            before = spacing.before or 0
            after = spacing.after or 0
            if before == 0 and after == 0:
                continue

            message = (
                "Paragraph with 1.5 line spacing must have 0pt spacing before and after. "
                f"Found: Before={_points(before)}, After={_points(after)}."
            )
            findings.append(self.finding(message, ref, preview=ref.text))
            if comments is not None:
                comments.add_comment_to_paragraph(ref.paragraph, message)
        return findings


def _points(twips: int) -> str:
    if twips == SPACING_AUTO:
        return "auto"
    return f"{twips / TWIPS_PER_POINT:.1f}pt"
