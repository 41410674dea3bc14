from __future__ import annotations
from typing import List, Optional

from thesis_validator.adapters.docx_adapter import ParagraphRef
from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule


class EmptySectionStructureRule(ValidationRule):
    """A heading must not be followed directly by a deeper heading.

    Tables and other non-paragraph body elements count as body content.
    """

    name = "EmptySectionStructureRule"

    def validate(self, view, config, comments=None) -> List[Finding]:
        findings: List[Finding] = []
        last_heading: Optional[ParagraphRef] = None
        last_level = 0
        has_content = False

        for block in view.block_items():
            if not isinstance(block, ParagraphRef):
                has_content = True
                continue

            level = view.heading_level(block)
            if level is None:
                if block.text.strip():
                    has_content = True
                continue

            if last_heading is not None and level > last_level and not has_content:
                message = (
                    f'Heading {last_level} "{last_heading.text.strip()}" is immediately followed by '
                    f'Heading {level} "{block.text.strip()}" with no introductory text. '
                    "Add at least one paragraph of body text before the first sub-section."
                )
                findings.append(self.finding(message, last_heading, preview=last_heading.text))
                if comments is not None:
                    comments.add_comment_to_paragraph(last_heading.paragraph, message)

            last_heading = block
            last_level = level
            has_content = False

        return findings
