from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

import requests

from thesis_validator.errors import GrammarServiceError

logger = logging.getLogger(__name__)


@dataclass
class LanguageToolConfig:
    """Configuration for the LanguageTool HTTP service."""
    base_url: str = "http://localhost:8081"
    timeout_s: float = 30.0          # per request; no retries
    max_concurrent: int = 4          # parallel paragraph checks


@dataclass
class GrammarMatch:
    """One issue reported by the grammar service."""
    message: str
    offset: int
    length: int
    sentence: str = ""
    short_message: str = ""
    replacements: List[str] = field(default_factory=list)
    rule_id: str = ""
    issue_type: str = ""
    category_id: str = ""
    category_name: str = ""


def _parse_match(raw: Dict[str, Any]) -> GrammarMatch:
    rule = raw.get("rule") or {}
    category = rule.get("category") or {}
    return GrammarMatch(
        message=str(raw.get("message", "")),
        short_message=str(raw.get("shortMessage", "") or ""),
        offset=int(raw.get("offset", 0)),
        length=int(raw.get("length", 0)),
        sentence=str(raw.get("sentence", "") or ""),
        replacements=[str(r.get("value", "")) for r in raw.get("replacements") or [] if r.get("value")],
        rule_id=str(rule.get("id", "") or ""),
        issue_type=str(rule.get("issueType", "") or ""),
        category_id=str(category.get("id", "") or ""),
        category_name=str(category.get("name", "") or ""),
    )


class LanguageToolClient:
    """Thin wrapper around the LanguageTool v2 HTTP API."""

    def __init__(self, config: Optional[LanguageToolConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or LanguageToolConfig()
        self._session = session or requests.Session()

    def _url(self, path: str) -> str:
        return self.config.base_url.rstrip("/") + path

    def is_available(self) -> bool:
        try:
            resp = self._session.get(self._url("/v2/languages"), timeout=self.config.timeout_s)
        except requests.RequestException as e:
            logger.warning(f"LanguageTool not reachable at {self.config.base_url}: {e}")
            return False
        return resp.ok

    def check_text(self, text: str, language: str) -> List[GrammarMatch]:
        try:
            resp = self._session.post(
                self._url("/v2/check"),
                data={"text": text, "language": language, "enabledOnly": "false"},
                timeout=self.config.timeout_s,
            )
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            raise GrammarServiceError(str(e)) from e
        except ValueError as e:
            raise GrammarServiceError(f"invalid response from LanguageTool: {e}") from e

        try:
            return [_parse_match(m) for m in payload.get("matches") or []]
        except (AttributeError, TypeError, ValueError) as e:
            raise GrammarServiceError(f"unexpected LanguageTool payload: {e}") from e
