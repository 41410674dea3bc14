from __future__ import annotations


class ThesisValidatorError(Exception):
    """Base class for every error the validator surfaces to callers."""


class DocumentOpenError(ThesisValidatorError):
    """The input bytes could not be opened as a DOCX package."""


class ConfigError(ThesisValidatorError):
    """A university profile is missing fields or holds invalid values."""


class GrammarServiceError(ThesisValidatorError):
    """A grammar check request failed (transport, HTTP status or payload)."""
