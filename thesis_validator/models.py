from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Page/line numbers are estimates; nothing is rendered.
PARAGRAPHS_PER_PAGE = 10
LINES_PER_PARAGRAPH = 4


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


@dataclass
class DocumentLocation:
    paragraph: int = 0           # 1-based, document order over all paragraphs
    run: Optional[int] = None    # 1-based among content runs
    character_offset: Optional[int] = None
    length: Optional[int] = None
    text: Optional[str] = None   # truncated preview
    section: Optional[str] = None

    @property
    def page_number(self) -> int:
        if self.paragraph <= 0:
            return 1
        return (self.paragraph - 1) // PARAGRAPHS_PER_PAGE + 1

    @property
    def line_number(self) -> int:
        if self.paragraph <= 0:
            return 1
        return ((self.paragraph - 1) % PARAGRAPHS_PER_PAGE) * LINES_PER_PARAGRAPH + 1

    @property
    def description(self) -> str:
        return f"Page {self.page_number}, Line {self.line_number} (Paragraph {self.paragraph})"


@dataclass
class Finding:
    rule_name: str
    message: str
    is_error: bool = True
    location: DocumentLocation = field(default_factory=DocumentLocation)

    @property
    def severity(self) -> str:
        return "error" if self.is_error else "warning"


@dataclass(frozen=True)
class HeadingInfo:
    level: int
    text: str
    paragraph: int


def finding_to_dict(f: Finding) -> Dict[str, Any]:
    loc = f.location
    return {
        "rule_name": f.rule_name,
        "message": f.message,
        "is_error": f.is_error,
        "severity": f.severity,
        "location": {
            "page_number": loc.page_number,
            "line_number": loc.line_number,
            "paragraph": loc.paragraph,
            "run": loc.run,
            "character_offset": loc.character_offset,
            "length": loc.length,
            "text": loc.text,
            "section": loc.section,
            "description": loc.description,
        },
    }


def heading_to_dict(h: HeadingInfo) -> Dict[str, Any]:
    return {"level": h.level, "text": h.text, "paragraph": h.paragraph}
