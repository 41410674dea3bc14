import pytest

from thesis_validator.config import config_from_dict, default_config, load_config
from thesis_validator.errors import ConfigError
from thesis_validator.models import DocumentLocation


def test_bundled_profile():
    cfg = default_config()
    assert cfg.name == "Default University"
    assert cfg.language == "pl-PL"
    assert cfg.formatting.font.font_family == "Times New Roman"
    assert cfg.formatting.font.font_size == 12.0
    assert cfg.formatting.layout.allowed_indents_cm == (1.0, 1.25)
    assert cfg.formatting.layout.paragraph_spacing_pt == (0.0, 6.0)
    assert cfg.formatting.max_heading_depth == 3


def test_partial_profile_falls_back_to_defaults(tmp_path):
    path = tmp_path / "uni.yml"
    path.write_text(
        "name: Example Tech\n"
        "check_grammar: false\n"
        "formatting:\n"
        "  font: {font_family: Arial, font_size: 11}\n"
        "  layout: {allowed_indents_cm: 1.5}\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.name == "Example Tech"
    assert cfg.check_grammar is False
    assert cfg.formatting.font.font_family == "Arial"
    assert cfg.formatting.layout.allowed_indents_cm == (1.5,)
    assert cfg.formatting.max_heading_depth == 3


@pytest.mark.parametrize("data", [
    [],
    {"formatting": {"font": {"font_size": "big"}}},
    {"formatting": {"font": {"font_size": 0}}},
    {"formatting": {"layout": {"paragraph_spacing_pt": []}}},
    {"formatting": {"max_heading_depth": 0}},
    {"check_grammar": "false"},
    {"check_grammar": 1},
])
def test_invalid_profiles(data):
    with pytest.raises(ConfigError):
        config_from_dict(data)


def test_unreadable_profile(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yml")
    bad = tmp_path / "bad.yml"
    bad.write_text("name: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(bad)


def test_location_estimates():
    assert DocumentLocation(paragraph=0).description == "Page 1, Line 1 (Paragraph 0)"
    assert DocumentLocation(paragraph=1).description == "Page 1, Line 1 (Paragraph 1)"
    assert DocumentLocation(paragraph=12).description == "Page 2, Line 5 (Paragraph 12)"
