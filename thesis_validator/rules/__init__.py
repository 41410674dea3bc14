from __future__ import annotations
from typing import List, Optional

from thesis_validator.rules.base import ValidationRule
from thesis_validator.rules.empty_section import EmptySectionStructureRule
from thesis_validator.rules.figure_caption import FigureCaptionStyleRule
from thesis_validator.rules.font_family import FontFamilyRule
from thesis_validator.rules.grammar import GrammarRule, GrammarService
from thesis_validator.rules.heading_style_usage import HeadingStyleUsageRule
from thesis_validator.rules.hierarchy_depth import HierarchyDepthRule
from thesis_validator.rules.justification import TextJustificationRule
from thesis_validator.rules.line_spacing import LineSpacingDependencyRule
from thesis_validator.rules.list_consistency import ListConsistencyRule
from thesis_validator.rules.no_dots_in_titles import NoDotsInTitlesRule
from thesis_validator.rules.paragraph_indent import ParagraphIndentRule
from thesis_validator.rules.paragraph_spacing import ParagraphSpacingRule
from thesis_validator.rules.single_space import SingleSpaceRule
from thesis_validator.rules.toc import TableOfContentsRule


def default_rules(grammar_service: Optional[GrammarService] = None, grammar_workers: int = 4) -> List[ValidationRule]:
    """All registered rules, in reporting order."""
    return [
        FontFamilyRule(),
        ParagraphIndentRule(),
        ParagraphSpacingRule(),
        LineSpacingDependencyRule(),
        TextJustificationRule(),
        SingleSpaceRule(),
        ListConsistencyRule(),
        NoDotsInTitlesRule(),
        HeadingStyleUsageRule(),
        EmptySectionStructureRule(),
        FigureCaptionStyleRule(),
        HierarchyDepthRule(),
        TableOfContentsRule(),
        GrammarRule(grammar_service, max_concurrent=grammar_workers),
    ]


__all__ = [
    "ValidationRule",
    "default_rules",
    "EmptySectionStructureRule",
    "FigureCaptionStyleRule",
    "FontFamilyRule",
    "GrammarRule",
    "HeadingStyleUsageRule",
    "HierarchyDepthRule",
    "TextJustificationRule",
    "LineSpacingDependencyRule",
    "ListConsistencyRule",
    "NoDotsInTitlesRule",
    "ParagraphIndentRule",
    "ParagraphSpacingRule",
    "SingleSpaceRule",
    "TableOfContentsRule",
]
