from thesis_validator.config import UniversityConfig
from thesis_validator.rules.font_family import FontFamilyRule
from thesis_validator.rules.justification import TextJustificationRule
from thesis_validator.rules.line_spacing import LineSpacingDependencyRule
from thesis_validator.rules.paragraph_indent import ParagraphIndentRule
from thesis_validator.rules.paragraph_spacing import ParagraphSpacingRule
from thesis_validator.rules.single_space import SingleSpaceRule, context_snippet

from docx_factory import heading_style, open_view, para, run, style, styles_xml

CONFIG = UniversityConfig()


def test_font_family_reports_only_the_wrong_run():
    view = open_view(
        para(run("Correct font", font="Times New Roman"))
        + para(run("Wrong font", font="Arial"))
    )
    findings = FontFamilyRule().validate(view, CONFIG)
    assert len(findings) == 1
    f = findings[0]
    assert f.rule_name == "FontFamily"
    assert f.is_error
    assert f.location.paragraph == 2
    assert f.location.run == 1
    assert f.location.character_offset == 0
    assert "Arial" in f.message and "Times New Roman" in f.message


def test_font_family_is_case_insensitive_and_tracks_offsets():
    view = open_view(para(
        run("Lead ", font="times new roman"),
        run("   "),
        run("tail", font="Courier New"),
    ))
    findings = FontFamilyRule().validate(view, CONFIG)
    assert len(findings) == 1
    assert findings[0].location.run == 3
    assert findings[0].location.character_offset == 8
    assert findings[0].location.length == 4


def test_font_family_unknown_font():
    view = open_view(para("No font anywhere"))
    findings = FontFamilyRule().validate(view, CONFIG)
    assert findings[0].message == "Invalid font 'unknown' found, expected 'Times New Roman'"


def test_indent_accepts_allowed_values_within_tolerance():
    view = open_view(
        para("One centimetre.", ind={"firstLine": 567})
        + para("One and a quarter.", ind={"firstLine": 709})
        + para("Close enough.", ind={"firstLine": 700})
    )
    assert ParagraphIndentRule().validate(view, CONFIG) == []


def test_indent_reports_wrong_value():
    view = open_view(para("Too small.", ind={"firstLine": 300}))
    findings = ParagraphIndentRule().validate(view, CONFIG)
    assert len(findings) == 1
    assert findings[0].message == (
        "Paragraph has incorrect first line indent: 0.53 cm. Expected 1.00 cm or 1.25 cm."
    )


def test_indent_reports_tab_used_as_indent():
    view = open_view(para(run("Indented with a tab.", tab=True)))
    findings = ParagraphIndentRule().validate(view, CONFIG)
    assert len(findings) == 1
    assert "TAB character" in findings[0].message


def test_indent_skips_exempt_paragraphs():
    styles = styles_xml(style("Normal", default=True), heading_style(1))
    view = open_view(
        para("Chapter", style="Heading1")
        + para("Centered", jc="center")
        + para("List item", num=(1, 0))
        + para("")
        + para("Right", jc="right"),
        styles=styles,
    )
    assert ParagraphIndentRule().validate(view, CONFIG) == []


def test_indent_inherited_from_style():
    styles = styles_xml(style("Body", default=True, ppr='<w:ind w:firstLine="709"/>'))
    view = open_view(para("Styled body text."), styles=styles)
    assert ParagraphIndentRule().validate(view, CONFIG) == []


def test_paragraph_spacing():
    styles = styles_xml(style("Loose", ppr='<w:spacing w:after="200"/>'))
    view = open_view(
        para("none")
        + para("six points", spacing={"after": 120})
        + para("twelve points", spacing={"after": 240})
        + para("auto", spacing={"after": "auto"})
        + para("styled", style="Loose"),
        styles=styles,
    )
    findings = ParagraphSpacingRule().validate(view, CONFIG)
    assert [f.location.paragraph for f in findings] == [3, 4, 5]
    assert "After value: 240 twips" in findings[0].message
    assert "Expected 0 or 120 (6pt)" in findings[0].message
    assert "After value: auto twips" in findings[1].message


def test_line_spacing_dependency():
    view = open_view(
        para("ok", spacing={"line": 360, "lineRule": "auto", "before": 0, "after": 0})
        + para("bad", spacing={"line": 360, "after": 120})
        + para("exact", spacing={"line": 360, "lineRule": "exact", "after": 120})
        + para("double", spacing={"line": 480, "after": 120})
    )
    findings = LineSpacingDependencyRule().validate(view, CONFIG)
    assert len(findings) == 1
    assert findings[0].location.paragraph == 2
    assert "Before=0.0pt, After=6.0pt" in findings[0].message


def test_line_spacing_dependency_through_style():
    styles = styles_xml(style("Body", ppr='<w:spacing w:line="360" w:before="240"/>'))
    view = open_view(para("text", style="Body"), styles=styles)
    findings = LineSpacingDependencyRule().validate(view, CONFIG)
    assert len(findings) == 1
    assert "Before=12.0pt" in findings[0].message


def test_justification():
    styles = styles_xml(style("Normal", default=True), heading_style(1), style("Quote"))
    view = open_view(
        para("Justified.", jc="both")
        + para("Left by default.")
        + para("Centered.", jc="center")
        + para("Heading", style="Heading1")
        + para("Quoted", style="Quote")
        + para("Item", num=(1, 0))
        + para(""),
        styles=styles,
    )
    findings = TextJustificationRule().validate(view, CONFIG)
    assert [f.location.paragraph for f in findings] == [2, 3]
    assert findings[0].message.startswith("Paragraph is left aligned.")
    assert findings[1].message.startswith("Paragraph is center aligned.")


def test_single_space_offset_and_length():
    view = open_view(para("ABC  DEF"))
    findings = SingleSpaceRule().validate(view, CONFIG)
    assert len(findings) == 1
    assert findings[0].location.character_offset == 3
    assert findings[0].location.length == 2
    assert 'Context: "ABC[2 spaces]DEF"' in findings[0].message


def test_single_space_message_has_context_words():
    view = open_view(para("word1  word2"))
    [finding] = SingleSpaceRule().validate(view, CONFIG)
    assert "word1" in finding.message
    assert "word2" in finding.message


def test_single_space_one_finding_per_occurrence():
    view = open_view(para("a   b  c d"))
    findings = SingleSpaceRule().validate(view, CONFIG)
    assert [(f.location.character_offset, f.location.length) for f in findings] == [(1, 3), (5, 2)]
    assert "(3 spaces)" in findings[0].message


def test_context_snippet_marks_truncation():
    text = "x" * 20 + "  " + "y" * 20
    assert context_snippet(text, 20, 22) == "..." + "x" * 15 + "[2 spaces]" + "y" * 15 + "..."


def test_removed_numbering_is_not_a_list_item():
    view = open_view(
        para("Numbering removed.", jc="left", num=(0, 0))
        + para("Still a list item.", jc="left", num=(1, 0))
    )
    justified = TextJustificationRule().validate(view, CONFIG)
    assert [f.location.paragraph for f in justified] == [1]

    indented = ParagraphIndentRule().validate(view, CONFIG)
    assert [f.location.paragraph for f in indented] == [1]
    assert "incorrect first line indent: 0.00 cm" in indented[0].message
