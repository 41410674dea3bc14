from __future__ import annotations
from typing import List

from thesis_validator.adapters.docx_adapter import content_runs, run_text
from thesis_validator.locale_patterns import StyleKind, matches_kind
from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule

MAX_HEADING_LENGTH = 200
SIZE_MARGIN_PT = 2.0

_EXCLUDED_KINDS = (
    StyleKind.TOC,
    StyleKind.HEADER_FOOTER,
    StyleKind.CAPTION,
    StyleKind.TITLE,
    StyleKind.SUBTITLE,
    StyleKind.LIST_PARAGRAPH,
    StyleKind.NOTE,
)


class HeadingStyleUsageRule(ValidationRule):
    """Flags short paragraphs made to look like headings with bold and a larger font."""

    name = "HeadingStyleUsageRule"

    def validate(self, view, config, comments=None) -> List[Finding]:
        threshold = config.formatting.font.font_size + SIZE_MARGIN_PT
        findings: List[Finding] = []

        for ref in view.body_paragraphs():
            if view.headings.is_heading(ref.paragraph):
                continue
            if matches_kind(_EXCLUDED_KINDS, view.resolver.paragraph_style_id(ref.paragraph)):
                continue
            text = ref.text.strip()
            if not text or len(text) > MAX_HEADING_LENGTH:
                continue

            runs = [r for r in content_runs(ref.paragraph) if run_text(r).strip()]
            if not runs:
                continue
            if not all(view.resolver.resolve_bold(ref.paragraph, r) for r in runs):
                continue
            sizes = [view.resolver.resolve_font_size(ref.paragraph, r) for r in runs]
            if not any(size is not None and size >= threshold for size in sizes):
                continue

            message = (
                "Paragraph appears manually formatted as a heading. Apply a proper Heading style "
                "(Heading 1, Heading 2, etc.) instead of manual bold/font-size formatting."
            )
            findings.append(self.finding(message, ref, preview=text))
            if comments is not None:
                comments.add_comment_to_paragraph(ref.paragraph, message)
        return findings
