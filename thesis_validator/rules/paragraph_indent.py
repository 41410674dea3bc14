from __future__ import annotations
from typing import List, Tuple

from thesis_validator.adapters.docx_adapter import content_runs, numbering_id, run_text
from thesis_validator.locale_patterns import StyleKind, matches_kind
from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule
from thesis_validator.styles import TWIPS_PER_CM, Justification

INDENT_TOLERANCE_TWIPS = 60

_SKIPPED_KINDS = (
    StyleKind.HEADING,
    StyleKind.TITLE,
    StyleKind.SUBTITLE,
    StyleKind.TOC,
    StyleKind.CAPTION,
    StyleKind.FIGURE,
    StyleKind.TABLE,
    StyleKind.BIBLIOGRAPHY,
    StyleKind.LIST,
    StyleKind.LIST_PARAGRAPH,
)


def _format_cm(values: Tuple[float, ...]) -> str:
    labels = [f"{v:.2f} cm" for v in values]
    if len(labels) == 1:
        return labels[0]
    return ", ".join(labels[:-1]) + " or " + labels[-1]


class ParagraphIndentRule(ValidationRule):
    """Body paragraphs need a first-line indent of one of the allowed widths.

    Headings, captions, TOC entries, list items and centered or right-aligned
    paragraphs are exempt. A leading tab used in place of an indent is
    reported separately.
    """

    name = "RequiredIndentCm"

    def _is_exempt(self, view, ref) -> bool:
        style_id = view.resolver.paragraph_style_id(ref.paragraph)
        if style_id:
            if matches_kind(_SKIPPED_KINDS, style_id, view.styles.name_of(style_id)):
                return True
            if view.resolver.resolve_outline_level(style_id) is not None:
                return True
        return view.resolver.resolve_justification(ref.paragraph) in (Justification.CENTER, Justification.RIGHT)

    def validate(self, view, config, comments=None) -> List[Finding]:
        allowed_cm = config.formatting.layout.allowed_indents_cm
        allowed = [int(round(cm * TWIPS_PER_CM)) for cm in allowed_cm]
        expected = _format_cm(allowed_cm)
        findings: List[Finding] = []

        for ref in view.paragraphs:
            text = ref.text
            if not text.strip() or self._is_exempt(view, ref):
                continue

            first_line = view.resolver.resolve_indentation(ref.paragraph).first_line
            if first_line == 0 and numbering_id(ref.paragraph) is not None:
                continue

            if first_line == 0 and self._starts_with_tab(ref.paragraph):
                message = (
                    "Paragraph uses TAB character for indent instead of proper first-line indent formatting. "
                    f"Please use paragraph formatting ({expected} first-line indent) instead of TAB."
                )
            elif any(abs(first_line - target) <= INDENT_TOLERANCE_TWIPS for target in allowed):
                continue
            else:
                message = (
                    f"Paragraph has incorrect first line indent: {first_line / TWIPS_PER_CM:.2f} cm. "
                    f"Expected {expected}."
                )

            findings.append(self.finding(message, ref, preview=text))
            if comments is not None:
                comments.add_comment_to_paragraph(ref.paragraph, message)

        return findings

    @staticmethod
    def _starts_with_tab(paragraph) -> bool:
        runs = content_runs(paragraph)
        if not runs:
            return False
        for child in runs[0]._element.iterchildren():
            local = child.tag.rsplit("}", 1)[-1] if isinstance(child.tag, str) else ""
            if local == "tab":
                return True
            if local == "t" and child.text:
                return False
        return run_text(runs[0]).startswith("\t")
