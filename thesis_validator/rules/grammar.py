"""
Grammar and spelling via an external LanguageTool service.

Paragraph texts are sent to the service on worker threads, in paragraph
order. Findings and review comments are produced afterwards on the calling
thread, so the document is never touched concurrently.
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Protocol, Sequence, Tuple, Union
import logging
import time

from thesis_validator.adapters.docx_adapter import ParagraphRef
from thesis_validator.adapters.languagetool_adapter import GrammarMatch
from thesis_validator.models import Finding
from thesis_validator.rules.base import ValidationRule

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3
ERROR_ISSUE_TYPES = {"Spelling", "Grammar"}


class GrammarService(Protocol):
    def is_available(self) -> bool: ...

    def check_text(self, text: str, language: str) -> Sequence[GrammarMatch]: ...


def classify(match: GrammarMatch) -> str:
    issue = match.issue_type.lower()
    category = f"{match.category_id} {match.category_name}".lower()
    if issue == "misspelling" or "typos" in category:
        return "Spelling"
    if "grammar" in category or issue == "grammar":
        return "Grammar"
    if "style" in category or issue == "style":
        return "Style"
    if "punctuation" in category:
        return "Punctuation"
    if "typography" in category or issue == "typographical":
        return "Typography"
    return "Other"


def format_message(issue: str, match: GrammarMatch) -> str:
    message = f"{issue}: {match.message}"
    suggestions = match.replacements[:MAX_SUGGESTIONS]
    if suggestions:
        message += " Suggestions: " + ", ".join(suggestions)
    return message


# any exception from the service is kept as that paragraph's outcome
CheckOutcome = Union[Sequence[GrammarMatch], Exception]


class GrammarRule(ValidationRule):
    name = "Grammar"
    uses_external_service = True

    def __init__(self, service: Optional[GrammarService] = None, max_concurrent: int = 4):
        self.service = service
        self.max_concurrent = max(1, max_concurrent)

    def validate(self, view, config, comments=None) -> List[Finding]:
        if not config.check_grammar:
            return []
        if self.service is None or not self.service.is_available():
            logger.warning("Grammar check skipped: LanguageTool service is not available")
            return [self.finding(
                "Grammar check skipped: LanguageTool service is not available",
                is_error=False,
            )]

        targets = [ref for ref in view.body_paragraphs() if ref.text.strip()]
        outcomes = self._check_all(targets, config.language)

        findings: List[Finding] = []
        for ref, text, outcome in outcomes:
            if isinstance(outcome, Exception):
                logger.warning(f"Grammar check failed for paragraph {ref.index}: {outcome}")
                findings.append(self.finding(
                    f"Grammar check failed for paragraph {ref.index}: {outcome}",
                    ref,
                    is_error=False,
                ))
                continue
            for match in outcome:
                findings.append(self._to_finding(ref, text, match, comments))
        return findings

    def _check_all(self, targets: List[ParagraphRef], language: str) -> List[Tuple[ParagraphRef, str, CheckOutcome]]:
        if not targets:
            return []
        texts = [ref.text for ref in targets]

        def check(text: str) -> CheckOutcome:
            try:
                return self.service.check_text(text, language)
            except Exception as e:
                return e

        start = time.time()
        with ThreadPoolExecutor(max_workers=min(self.max_concurrent, len(texts))) as executor:
            results = list(executor.map(check, texts))
        logger.info(f"Checked {len(texts)} paragraphs for grammar in {time.time() - start:.1f}s")
        return list(zip(targets, texts, results))

    def _to_finding(self, ref: ParagraphRef, text: str, match: GrammarMatch, comments) -> Finding:
        issue = classify(match)
        message = format_message(issue, match)
        if comments is not None:
            comments.add_comment_at_offset(ref.paragraph, match.offset, match.length, message)
        return self.finding(
            message, ref,
            is_error=issue in ERROR_ISSUE_TYPES,
            preview=text[match.offset:match.offset + match.length],
            run=1,
            character_offset=match.offset,
            length=match.length,
        )
