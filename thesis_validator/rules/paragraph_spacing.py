from __future__ import annotations
from typing import List

from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule
from thesis_validator.styles import SPACING_AUTO, TWIPS_PER_POINT


def _describe_allowed(points) -> str:
    parts = []
    for pt in points:
        twips = int(round(pt * TWIPS_PER_POINT))
        parts.append(str(twips) if twips == 0 else f"{twips} ({pt:g}pt)")
    return " or ".join(parts)


class ParagraphSpacingRule(ValidationRule):
    name = "ParagraphSpacingRule"

    def validate(self, view, config, comments=None) -> List[Finding]:
        points = config.formatting.layout.paragraph_spacing_pt
        allowed = {int(round(pt * TWIPS_PER_POINT)) for pt in points}
        findings: List[Finding] = []

        for ref in view.paragraphs:
            after = view.resolver.resolve_paragraph_spacing(ref.paragraph).after
            if after is None:
                after = 0
            if after != SPACING_AUTO and after in allowed:
                continue

            shown = "auto" if after == SPACING_AUTO else str(after)
            message = (
                f"Paragraph has incorrect spacing or set to auto. After value: {shown} twips. "
                f"Expected {_describe_allowed(points)}."
            )
            findings.append(self.finding(message, ref, preview=ref.text))
            if comments is not None:
                comments.add_comment_to_paragraph(ref.paragraph, message)

        return findings
