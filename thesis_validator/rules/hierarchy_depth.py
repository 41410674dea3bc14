from __future__ import annotations
from typing import List

from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule


class HierarchyDepthRule(ValidationRule):
    name = "HierarchyDepthRule"

    def validate(self, view, config, comments=None) -> List[Finding]:
        max_depth = config.formatting.max_heading_depth
        findings: List[Finding] = []
        for ref in view.paragraphs:
            level = view.heading_level(ref)
            if level is None or level <= max_depth:
                continue
            message = f"Structure too deep. Detected Level {level}, but maximum allowed is {max_depth}."
            findings.append(self.finding(message, ref, preview=ref.text))
            if comments is not None:
                comments.add_comment_to_paragraph(ref.paragraph, message)
        return findings
