from __future__ import annotations
from typing import List

from thesis_validator.locale_patterns import StyleKind, matches_kind
from thesis_validator.models import Finding, truncate
from thesis_validator.rules.base import ValidationRule

_TITLE_KINDS = (StyleKind.HEADING, StyleKind.TITLE, StyleKind.SUBTITLE, StyleKind.CAPTION)


def ends_with_single_period(text: str) -> bool:
    stripped = text.rstrip()
    return stripped.endswith(".") and not stripped.endswith("..")


class NoDotsInTitlesRule(ValidationRule):
    """Headings, titles and captions must not end with a period; an ellipsis is fine."""

    name = "NoDotsInTitlesRule"

    def validate(self, view, config, comments=None) -> List[Finding]:
        findings: List[Finding] = []
        for ref in view.paragraphs:
            style_id = view.resolver.paragraph_style_id(ref.paragraph)
            if not style_id:
                continue
            if not (matches_kind(_TITLE_KINDS, style_id) or view.headings.is_heading(ref.paragraph)):
                continue
            text = ref.text
            if not ends_with_single_period(text):
                continue

            message = (
                f"Title/Heading should not end with a period. Style: {style_id}. "
                f'Text: "{truncate(text.strip(), 60)}"'
            )
            findings.append(self.finding(message, ref, preview=text, preview_length=60))
            if comments is not None:
                comments.add_comment_to_paragraph(ref.paragraph, message)
        return findings
