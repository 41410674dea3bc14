from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple
import logging

import yaml

from thesis_validator.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = Path(__file__).parent / "profiles" / "default.yml"


@dataclass(frozen=True)
class FontConfig:
    font_family: str = "Times New Roman"
    font_size: float = 12.0


@dataclass(frozen=True)
class LayoutConfig:
    margin_left_cm: float = 2.5
    margin_right_cm: float = 2.5
    required_indent_cm: float = 1.25
    allowed_indents_cm: Tuple[float, ...] = (1.0, 1.25)
    paragraph_spacing_pt: Tuple[float, ...] = (0.0, 6.0)


@dataclass(frozen=True)
class FormattingConfig:
    font: FontConfig = field(default_factory=FontConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    max_heading_depth: int = 3


@dataclass(frozen=True)
class UniversityConfig:
    """A university's formatting profile. Immutable for the duration of a run."""
    name: str = "Default University"
    check_grammar: bool = True
    language: str = "pl-PL"
    formatting: FormattingConfig = field(default_factory=FormattingConfig)


def _floats(value: Any, key: str) -> Tuple[float, ...]:
    if isinstance(value, (int, float)):
        value = [value]
    if not isinstance(value, (list, tuple)) or not value:
        raise ConfigError(f"'{key}' must be a non-empty list of numbers")
    try:
        return tuple(float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{key}' must contain only numbers: {e}") from e


def config_from_dict(data: Dict[str, Any]) -> UniversityConfig:
    if not isinstance(data, dict):
        raise ConfigError("profile must be a mapping")
    fmt = data.get("formatting") or {}
    font = fmt.get("font") or {}
    layout = fmt.get("layout") or {}
    try:
        font_cfg = FontConfig(
            font_family=str(font.get("font_family", FontConfig.font_family)),
            font_size=float(font.get("font_size", FontConfig.font_size)),
        )
        layout_cfg = LayoutConfig(
            margin_left_cm=float(layout.get("margin_left_cm", LayoutConfig.margin_left_cm)),
            margin_right_cm=float(layout.get("margin_right_cm", LayoutConfig.margin_right_cm)),
            required_indent_cm=float(layout.get("required_indent_cm", LayoutConfig.required_indent_cm)),
            allowed_indents_cm=_floats(
                layout.get("allowed_indents_cm", LayoutConfig.allowed_indents_cm), "allowed_indents_cm"
            ),
            paragraph_spacing_pt=_floats(
                layout.get("paragraph_spacing_pt", LayoutConfig.paragraph_spacing_pt), "paragraph_spacing_pt"
            ),
        )
        max_depth = int(fmt.get("max_heading_depth", FormattingConfig.max_heading_depth))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid formatting value: {e}") from e

    check_grammar = data.get("check_grammar", UniversityConfig.check_grammar)
    if not isinstance(check_grammar, bool):
        raise ConfigError(f"'check_grammar' must be true or false, got {check_grammar!r}")
    if font_cfg.font_size <= 0:
        raise ConfigError("font_size must be positive")
    if max_depth < 1:
        raise ConfigError("max_heading_depth must be at least 1")

    return UniversityConfig(
        name=str(data.get("name", UniversityConfig.name)),
        check_grammar=check_grammar,
        language=str(data.get("language", UniversityConfig.language)),
        formatting=FormattingConfig(font=font_cfg, layout=layout_cfg, max_heading_depth=max_depth),
    )


def load_config(path: str | Path) -> UniversityConfig:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read profile {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"profile {path} is not valid YAML: {e}") from e
    cfg = config_from_dict(data)
    logger.info(f"Loaded profile '{cfg.name}' from {path}")
    return cfg


def default_config() -> UniversityConfig:
    return load_config(DEFAULT_PROFILE)
