from __future__ import annotations
from typing import List
import re

from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule

_MULTIPLE_SPACES = re.compile(r" {2,}")
CONTEXT_CHARS = 15


def context_snippet(text: str, start: int, end: int) -> str:
    """Text around a match, with the run of spaces shown as ``[N spaces]``."""
    left = max(0, start - CONTEXT_CHARS)
    right = min(len(text), end + CONTEXT_CHARS)
    prefix = "..." if left > 0 else ""
    suffix = "..." if right < len(text) else ""
    return f"{prefix}{text[left:start]}[{end - start} spaces]{text[end:right]}{suffix}"


class SingleSpaceRule(ValidationRule):
    name = "SingleSpaceRule"

    def validate(self, view, config, comments=None) -> List[Finding]:
        findings: List[Finding] = []
        for ref in view.paragraphs:
            text = ref.text
            for m in _MULTIPLE_SPACES.finditer(text):
                count = m.end() - m.start()
                message = (
                    f"Multiple spaces found ({count} spaces). Only single spaces allowed between words. "
                    f'Context: "{context_snippet(text, m.start(), m.end())}"'
                )
                findings.append(self.finding(
                    message, ref,
                    preview=text,
                    character_offset=m.start(),
                    length=count,
                ))
                if comments is not None:
                    comments.add_comment_at_offset(ref.paragraph, m.start(), count, message)
        return findings
