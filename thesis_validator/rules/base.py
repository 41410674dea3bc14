from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

from thesis_validator.models import DocumentLocation, Finding, truncate

if TYPE_CHECKING:
    from thesis_validator.adapters.comments import DocumentCommentSink
    from thesis_validator.adapters.docx_adapter import DocumentView, ParagraphRef
    from thesis_validator.config import UniversityConfig


class ValidationRule(ABC):
    """A stateless check over one document.

    ``uses_external_service`` marks rules that block on network calls; the
    pipeline schedules those on worker threads.
    """

    name: str = ""
    uses_external_service: bool = False

    @abstractmethod
    def validate(
        self,
        view: "DocumentView",
        config: "UniversityConfig",
        comments: Optional["DocumentCommentSink"] = None,
    ) -> List[Finding]:
        ...

    def finding(
        self,
        message: str,
        ref: Optional["ParagraphRef"] = None,
        *,
        is_error: bool = True,
        preview: Optional[str] = None,
        preview_length: int = 50,
        **location,
    ) -> Finding:
        loc = DocumentLocation(paragraph=ref.index if ref is not None else 0, **location)
        if preview is not None:
            loc.text = truncate(preview, preview_length)
        return Finding(rule_name=self.name, message=message, is_error=is_error, location=loc)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
