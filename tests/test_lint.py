import pytest

from greenlib.lint import GreenLinter, check_spoilers
from greenlib.parser import LineParser


def _paste(tmp_path, text, name="paste.txt"):
    path = tmp_path / name
    path.write_bytes(text.encode("utf-8"))
    return str(path)


def test_check_spoilers():
    lines = ["[spoiler]a", "b[spoiler]c", "[/spoiler]", "[/spoiler]x", "", "[spoiler]"]
    findings = check_spoilers(lines)
    assert [(line_num, severity) for line_num, severity, _ in findings] == [
        (2, "warning"),
        (4, "warning"),
        (6, "error"),
    ]
    assert "Nested [spoiler]" in findings[0][2]
    assert "Stray [/spoiler]" in findings[1][2]
    assert "never closed" in findings[2][2]


def test_check_spoilers_clean():
    assert check_spoilers([">be me", "[spoiler]x", "y[/spoiler]", ""]) == []


@pytest.mark.parametrize("lines", [
    ["[spoiler]a", "b"],
    ["[spoiler]a[/spoiler]", "[spoiler]"],
    ["[/spoiler][spoiler]x[spoiler]", "[/spoiler]"],
    ["a[spoiler]", "", "b[/spoiler]c[spoiler]"],
])
def test_check_spoilers_agrees_with_parser(lines):
    parser = LineParser()
    for line in lines:
        if line:
            parser.parse(line)
    unclosed = [f for f in check_spoilers(lines) if f[1] == "error"]
    assert bool(unclosed) == parser.is_spoiler_open()


def test_clean_file(tmp_path, capsys):
    path = _paste(tmp_path, ">be me\n\nit was [spoiler]fine[/spoiler]\n")
    assert GreenLinter([path], color=False).run() is True
    assert "No issues found across 1 files." in capsys.readouterr().out


def test_unclosed_spoiler_is_an_error(tmp_path, capsys):
    path = _paste(tmp_path, "a [spoiler]b\nc\n")
    linter = GreenLinter([path], color=False)
    assert linter.run() is False
    out = capsys.readouterr().out
    assert "[ERROR] :1 Spoiler opened here is never closed" in out
    assert linter.total_counts["error"] == 1


def test_stray_close_is_a_warning(tmp_path, capsys):
    path = _paste(tmp_path, "a[/spoiler]b\n")
    linter = GreenLinter([path], color=False)
    assert linter.run() is True
    assert linter.total_counts["warning"] == 1
    assert "Stray [/spoiler]" in capsys.readouterr().out


def test_capitalized_tags(tmp_path, capsys):
    path = _paste(tmp_path, "[Spoiler]x[/SPOILER]\n")
    linter = GreenLinter([path], color=False)
    linter.run()
    assert linter.total_counts["warning"] == 2
    assert "Capitalized spoiler tag" in capsys.readouterr().out


def test_fix_rewrites_file(tmp_path, capsys):
    path = _paste(tmp_path, "a\u00a0b  \r\n[spoiler]x[/spoiler]\n")
    linter = GreenLinter([path], fix=True, color=False)
    assert linter.run() is True
    assert linter.total_fixes == 3
    with open(path, "rb") as f:
        assert f.read() == b"a b\n[spoiler]x[/spoiler]\n"
    assert "Applied 3 fixes" in capsys.readouterr().out


def test_check_mode_does_not_write(tmp_path, capsys):
    original = "\ufeff\t>be me\n"
    path = _paste(tmp_path, original)
    linter = GreenLinter([path], color=False)
    linter.run()
    with open(path, "rb") as f:
        assert f.read() == original.encode("utf-8")
    out = capsys.readouterr().out
    assert "File starts with UTF-8 BOM" in out
    assert "Run with --fix" in out


def test_unreadable_file(tmp_path, capsys):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\x00bad")
    assert GreenLinter([str(path)], color=False).run() is False
    assert "Cannot read (encoding error)" in capsys.readouterr().out
