from thesis_validator.config import UniversityConfig
from thesis_validator.rules.list_consistency import ListConsistencyRule, trailing_punctuation

from docx_factory import numbering_xml, open_view, para

CONFIG = UniversityConfig()


def _items(*texts, num_id=1, level=0):
    return "".join(para(t, num=(num_id, level)) for t in texts)


def _run(body, **kwargs):
    return ListConsistencyRule().validate(open_view(body, **kwargs), CONFIG)


def test_consistent_semicolons_pass():
    assert _run(_items("First item;", "Second item;", "Last item.")) == []


def test_mismatched_middle_item_is_reported_once():
    findings = _run(_items("First;", "Second,", "Third;", "Fourth."))
    assert len(findings) == 1
    assert "','" in findings[0].message
    assert "';'" in findings[0].message
    assert findings[0].location.paragraph == 2


def test_missing_final_period():
    findings = _run(_items("alpha", "beta", "gamma"))
    assert len(findings) == 1
    assert findings[0].message.startswith("Last list item should end with period (.).")
    assert findings[0].location.paragraph == 3


def test_wrong_final_punctuation_is_named():
    findings = _run(_items("alpha;", "omega;"))
    assert len(findings) == 1
    assert "found ';'" in findings[0].message


def test_single_item_list_is_ignored():
    assert _run(_items("Only one")) == []


def test_lists_split_by_body_text_are_checked_separately():
    body = _items("a;", "b.") + para("Some body text.") + _items("c;", "d;")
    findings = _run(body)
    assert len(findings) == 1
    assert findings[0].location.paragraph == 5


def test_numbering_change_starts_new_list():
    body = _items("a;", num_id=1) + _items("b", num_id=2)
    assert _run(body) == []


def test_nested_levels_checked_independently():
    body = (
        para("First point;", num=(1, 0))
        + para("detail a;", num=(1, 1))
        + para("detail b.", num=(1, 1))
        + para("Second point.", num=(1, 0))
    )
    assert _run(body) == []


def test_indentation_majority_wins():
    body = (
        para("one;", num=(1, 0))
        + para("two;", num=(1, 0), ind={"left": 1440})
        + para("three.", num=(1, 0))
    )
    findings = _run(body, numbering=numbering_xml(num_id=1, level_left={0: 720}))
    assert len(findings) == 1
    assert findings[0].location.paragraph == 2
    assert "inconsistent indentation (2.54 cm)" in findings[0].message
    assert "Expected 1.27 cm at level 0" in findings[0].message


def test_trailing_punctuation():
    assert trailing_punctuation("end;  ") == ";"
    assert trailing_punctuation("word") is None
    assert trailing_punctuation("quote»") == "»"
    assert trailing_punctuation("") is None


def test_removed_numbering_does_not_form_a_list():
    assert _run(para("first", num=(0, 0)) + para("second", num=(0, 0))) == []


def test_removed_numbering_splits_a_list():
    body = para("a;", num=(1, 0)) + para("Plain paragraph", num=(0, 0)) + para("b;", num=(1, 0))
    assert _run(body) == []
