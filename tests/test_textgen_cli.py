from kochmorse.textgen_cli import main


def test_prints_generated_text(tmp_path, capsys):
    path = tmp_path / "rules.xml"
    path.write_text('<rules><t>cq de dl1abc<ar/></t></rules>', encoding="utf-8")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "cq de dl1abc+"


def test_prints_text_file(tmp_path, capsys):
    path = tmp_path / "text.txt"
    path.write_text("vvv test", encoding="utf-8")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "vvv test"


def test_missing_argument_prints_usage(capsys):
    assert main([]) == 1
    assert "RULE-FILE" in capsys.readouterr().err


def test_missing_file_reports_error(tmp_path, capsys):
    assert main([str(tmp_path / "missing.xml")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "missing.xml" in captured.err