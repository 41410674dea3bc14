import json

from thesis_validator.cli import main

from docx_factory import build_docx, para, run, style, styles_xml, toc_field

STYLES = styles_xml(
    style(
        "Normal",
        default=True,
        ppr='<w:jc w:val="both"/><w:ind w:firstLine="709"/>',
        rpr='<w:rFonts w:ascii="Times New Roman" w:hAnsi="Times New Roman"/>',
    ),
)


def test_list_rules(capsys):
    assert main(["--list-rules"]) == 0
    names = capsys.readouterr().out.split()
    assert names[0] == "FontFamily"
    assert "Grammar" in names


def test_clean_document_exits_zero(tmp_path, capsys):
    path = tmp_path / "clean.docx"
    path.write_bytes(build_docx(toc_field() + para("Well formatted body text."), styles=STYLES))
    json_out = tmp_path / "report.json"

    code = main([str(path), "--no-grammar", "--rules", "FontFamily,SingleSpaceRule", "--json-out", str(json_out)])

    assert code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["is_valid"] is True
    assert json.loads(json_out.read_text(encoding="utf-8"))["results"] == []


def test_errors_exit_one_and_annotate(tmp_path, capsys):
    path = tmp_path / "thesis.docx"
    path.write_bytes(build_docx(para(run("Bad font.", font="Arial")), styles=STYLES))

    code = main([str(path), "--no-grammar", "--rules", "fontfamily", "--annotate"])

    assert code == 1
    summary = json.loads(capsys.readouterr().out)
    assert summary["total_errors"] == 1
    assert (tmp_path / "thesis_annotated.docx").exists()


def test_unreadable_input_exits_two(tmp_path):
    path = tmp_path / "broken.docx"
    path.write_bytes(b"garbage")
    assert main([str(path), "--no-grammar"]) == 2
