from __future__ import annotations
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
import logging
import time

from thesis_validator.adapters.comments import DocumentCommentSink
from thesis_validator.adapters.docx_adapter import DocumentView, open_document, save_document
from thesis_validator.config import UniversityConfig
from thesis_validator.models import Finding, HeadingInfo, finding_to_dict, heading_to_dict
from thesis_validator.rules import ValidationRule, default_rules
from thesis_validator.rules.grammar import GrammarService
from thesis_validator.sections import SectionMap, assign_sections, extract_headings

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    findings: List[Finding] = field(default_factory=list)
    headings: List[HeadingInfo] = field(default_factory=list)

    @property
    def total_errors(self) -> int:
        return sum(1 for f in self.findings if f.is_error)

    @property
    def total_warnings(self) -> int:
        return sum(1 for f in self.findings if not f.is_error)

    @property
    def is_valid(self) -> bool:
        return self.total_errors == 0


@dataclass
class AnnotatedReport(ValidationReport):
    document_bytes: bytes = b""
    comments_added: int = 0


class ThesisValidator:
    """Runs a selection of rules over one document and collects their findings."""

    def __init__(
        self,
        rules: Optional[List[ValidationRule]] = None,
        grammar_service: Optional[GrammarService] = None,
    ):
        self.rules = rules if rules is not None else default_rules(grammar_service)

    def available_rules(self) -> List[str]:
        return [r.name for r in self.rules]

    def select_rules(self, selected: Optional[Iterable[str]] = None) -> List[ValidationRule]:
        """Registered rules whose name is in ``selected`` (case-insensitive).

        ``None`` or an empty selection means every rule; unknown names are ignored.
        """
        wanted = {name.strip().casefold() for name in (selected or []) if name and name.strip()}
        if not wanted:
            return list(self.rules)
        known = {r.name.casefold() for r in self.rules}
        unknown = wanted - known
        if unknown:
            logger.debug(f"Ignoring unknown rule names: {sorted(unknown)}")
        return [r for r in self.rules if r.name.casefold() in wanted]

    def validate(
        self,
        data: bytes,
        config: UniversityConfig,
        selected_rules: Optional[Iterable[str]] = None,
    ) -> ValidationReport:
        view = DocumentView(open_document(data))
        rules = self.select_rules(selected_rules)
        findings = self._run_concurrently(rules, view, config)
        headings = extract_headings(view)
        assign_sections(findings, SectionMap(headings))
        logger.info(f"Validation finished: {len(findings)} findings from {len(rules)} rules")
        return ValidationReport(findings=findings, headings=headings)

    def validate_with_comments(
        self,
        data: bytes,
        config: UniversityConfig,
        selected_rules: Optional[Iterable[str]] = None,
        author: Optional[str] = None,
    ) -> AnnotatedReport:
        document = open_document(data)
        view = DocumentView(document)
        sink = DocumentCommentSink(document, author) if author else DocumentCommentSink(document)
        rules = self.select_rules(selected_rules)

        findings: List[Finding] = []
        for rule in rules:
            findings.extend(self._run_rule(rule, view, config, sink))
        headings = extract_headings(view)
        assign_sections(findings, SectionMap(headings))

        annotated = save_document(document)
        logger.info(f"Annotated document with {sink.count} comments ({len(findings)} findings)")
        return AnnotatedReport(
            findings=findings,
            headings=headings,
            document_bytes=annotated,
            comments_added=sink.count,
        )

    def _run_concurrently(self, rules: List[ValidationRule], view: DocumentView, config) -> List[Finding]:
        """Service-backed rules run on worker threads while the rest run inline.

        Results are joined in registration order, so output does not depend
        on scheduling.
        """
        pending: Dict[int, Future] = {}
        per_rule: Dict[int, List[Finding]] = {}
        service_rules = [(i, r) for i, r in enumerate(rules) if r.uses_external_service]

        if service_rules:
            with ThreadPoolExecutor(max_workers=len(service_rules)) as executor:
                for i, rule in service_rules:
                    pending[i] = executor.submit(self._run_rule, rule, view, config, None)
                for i, rule in enumerate(rules):
                    if i not in pending:
                        per_rule[i] = self._run_rule(rule, view, config, None)
                for i, future in pending.items():
                    per_rule[i] = future.result()
        else:
            for i, rule in enumerate(rules):
                per_rule[i] = self._run_rule(rule, view, config, None)

        findings: List[Finding] = []
        for i in range(len(rules)):
            findings.extend(per_rule[i])
        return findings

    @staticmethod
    def _run_rule(rule: ValidationRule, view: DocumentView, config, sink) -> List[Finding]:
        start = time.time()
        found = rule.validate(view, config, sink)
        logger.debug(f"{rule.name}: {len(found)} findings in {time.time() - start:.2f}s")
        return found


def build_response(
    report: ValidationReport,
    config: UniversityConfig,
    *,
    file_name: str,
    file_size: int,
) -> Dict[str, Any]:
    """Serializable summary of one validation, as shown by the CLI and the web app."""
    return {
        "file_name": file_name,
        "file_size": file_size,
        "validated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "is_valid": report.is_valid,
        "total_errors": report.total_errors,
        "total_warnings": report.total_warnings,
        "config_used": config.name,
        "results": [finding_to_dict(f) for f in report.findings],
        "headings": [heading_to_dict(h) for h in report.headings],
    }
