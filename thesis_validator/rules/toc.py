from __future__ import annotations
from typing import List

from docx.oxml.ns import qn

from thesis_validator.adapters.docx_adapter import content_runs
from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule


def has_toc_field(body) -> bool:
    if body is None:
        return False
    for instr in body.iter(qn("w:instrText")):
        if (instr.text or "").strip().upper().startswith("TOC"):
            return True
    for simple in body.iter(qn("w:fldSimple")):
        if (simple.get(qn("w:instr")) or "").strip().upper().startswith("TOC"):
            return True
    return False


class TableOfContentsRule(ValidationRule):
    name = "CheckTableOfContents"

    def validate(self, view, config, comments=None) -> List[Finding]:
        if view.body is None or has_toc_field(view.body):
            return []

        message = "Document is missing a Table of Contents."
        finding = self.finding(message)
        if comments is not None and view.paragraphs:
            for ref in view.paragraphs:
                runs = content_runs(ref.paragraph)
                if runs:
                    comments.add_comment_to_run(runs[0], message)
                    break
            else:
                comments.add_comment_to_paragraph(view.paragraphs[0].paragraph, message)
        return [finding]
