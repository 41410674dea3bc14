from __future__ import annotations
from typing import List
import logging

from thesis_validator.adapters.docx_adapter import content_runs, run_text
from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule

logger = logging.getLogger(__name__)


class FontFamilyRule(ValidationRule):
    """Every non-blank run must use the configured font family."""

    name = "FontFamily"

    def validate(self, view, config, comments=None) -> List[Finding]:
        expected = config.formatting.font.font_family
        findings: List[Finding] = []

        for ref in view.body_paragraphs():
            offset = 0
            for run_index, run in enumerate(content_runs(ref.paragraph), start=1):
                text = run_text(run)
                if not text.strip():
                    offset += len(text)
                    continue

                actual = view.resolver.resolve_font(ref.paragraph, run)
                if actual is None or actual.casefold() != expected.casefold():
                    message = f"Invalid font '{actual or 'unknown'}' found, expected '{expected}'"
                    findings.append(self.finding(
                        message, ref,
                        preview=text,
                        run=run_index,
                        character_offset=offset,
                        length=len(text),
                    ))
                    if comments is not None:
                        comments.add_comment_to_run(run, message)
                offset += len(text)

        return findings
