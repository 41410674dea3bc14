from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import unicodedata

from thesis_validator.adapters.docx_adapter import ParagraphRef, numbering_id, numbering_level
from thesis_validator.models import Finding, truncate
from thesis_validator.rules.base import ValidationRule
from thesis_validator.styles import TWIPS_PER_CM

PREVIEW_LENGTH = 40


@dataclass
class ListItem:
    ref: ParagraphRef
    text: str
    level: int
    left_indent: int


@dataclass
class ListGroup:
    num_id: int
    items: List[ListItem] = field(default_factory=list)

    def by_level(self) -> Dict[int, List[ListItem]]:
        levels: Dict[int, List[ListItem]] = {}
        for item in self.items:
            levels.setdefault(item.level, []).append(item)
        return levels


def trailing_punctuation(text: str) -> Optional[str]:
    stripped = text.rstrip()
    if not stripped:
        return None
    last = stripped[-1]
    return last if unicodedata.category(last).startswith("P") else None


def _describe(mark: Optional[str]) -> str:
    return f"'{mark}'" if mark else "no punctuation"


class ListConsistencyRule(ValidationRule):
    """
    Consecutive numbered paragraphs sharing a numbering definition form a list.

    Within each level of a list, middle items must end with the same
    punctuation as the first item, the last item must end with a period,
    and all items must share the left indent most of them use.
    """

    name = "ListConsistencyRule"

    def collect_groups(self, view) -> List[ListGroup]:
        groups: List[ListGroup] = []
        current: Optional[ListGroup] = None
        for ref in view.body_paragraphs():
            num_id = numbering_id(ref.paragraph)
            if num_id is None:
                current = None
                continue
            if current is None or current.num_id != num_id:
                current = ListGroup(num_id=num_id)
                groups.append(current)
            level = numbering_level(ref.paragraph)
            current.items.append(ListItem(
                ref=ref,
                text=ref.text,
                level=level,
                left_indent=self._left_indent(view, ref, num_id, level),
            ))
        return groups

    @staticmethod
    def _left_indent(view, ref: ParagraphRef, num_id: int, level: int) -> int:
        direct = view.resolver.direct_left_indent(ref.paragraph)
        if direct is not None:
            return direct
        from_numbering = view.numbering.level_left_indent(num_id, level)
        if from_numbering is not None:
            return from_numbering
        return view.resolver.resolve_indentation(ref.paragraph).left

    def validate(self, view, config, comments=None) -> List[Finding]:
        findings: List[Finding] = []
        for group in self.collect_groups(view):
            if len(group.items) < 2:
                continue
            levels = group.by_level()
            for items in levels.values():
                findings.extend(self._check_punctuation(items, comments))
            for level, items in levels.items():
                findings.extend(self._check_indentation(level, items, comments))
        return findings

    def _report(self, item: ListItem, message: str, comments) -> Finding:
        if comments is not None:
            comments.add_comment_to_paragraph(item.ref.paragraph, message)
        return self.finding(message, item.ref, preview=item.text, preview_length=PREVIEW_LENGTH)

    def _check_punctuation(self, items: List[ListItem], comments) -> List[Finding]:
        if len(items) < 2:
            return []
        findings: List[Finding] = []
        expected = trailing_punctuation(items[0].text)

        for item in items[1:-1]:
            actual = trailing_punctuation(item.text)
            if actual != expected:
                message = (
                    f"List item ends with {_describe(actual)} but first item uses {_describe(expected)}. "
                    f'Text: "{truncate(item.text.strip(), PREVIEW_LENGTH)}"'
                )
                findings.append(self._report(item, message, comments))

        last = items[-1]
        last_mark = trailing_punctuation(last.text)
        if last_mark != ".":
            preview = truncate(last.text.strip(), PREVIEW_LENGTH)
            if last_mark:
                message = f"Last list item should end with period (.), found '{last_mark}'. Text: \"{preview}\""
            else:
                message = f'Last list item should end with period (.). Text: "{preview}"'
            findings.append(self._report(last, message, comments))
        return findings

    def _check_indentation(self, level: int, items: List[ListItem], comments) -> List[Finding]:
        if len(items) < 2:
            return []
        counts = Counter(item.left_indent for item in items)
        # most_common keeps first-seen order among ties
        expected = counts.most_common(1)[0][0]
        findings: List[Finding] = []
        for item in items:
            if item.left_indent == expected:
                continue
            message = (
                f"List item has inconsistent indentation ({item.left_indent / TWIPS_PER_CM:.2f} cm). "
                f"Expected {expected / TWIPS_PER_CM:.2f} cm at level {level}. "
                f'Text: "{truncate(item.text.strip(), PREVIEW_LENGTH)}"'
            )
            findings.append(self._report(item, message, comments))
        return findings
