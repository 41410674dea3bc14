"""Academic formatting validator for Word (.docx) theses."""
from thesis_validator.config import UniversityConfig, load_config, default_config
from thesis_validator.models import Finding, DocumentLocation, HeadingInfo
from thesis_validator.pipeline import ThesisValidator, ValidationReport, AnnotatedReport

__all__ = [
    "UniversityConfig",
    "load_config",
    "default_config",
    "Finding",
    "DocumentLocation",
    "HeadingInfo",
    "ThesisValidator",
    "ValidationReport",
    "AnnotatedReport",
]

__version__ = "0.3.0"
