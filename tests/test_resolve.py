from greenlib.resolve import (
    assemble_inputs,
    natural_sort_key,
    paste_title,
    read_lines,
    split_lines,
)


def test_natural_sort_key():
    names = ["10.txt", "2.txt", "1.txt"]
    assert sorted(names, key=natural_sort_key) == ["1.txt", "2.txt", "10.txt"]


def test_assemble_inputs_expands_directories(tmp_path):
    pastes = tmp_path / "pastes"
    pastes.mkdir()
    for name in ["part10.txt", "part2.txt", "notes.md"]:
        (pastes / name).write_text("x", encoding="utf-8")
    single = tmp_path / "intro.txt"
    single.write_text("x", encoding="utf-8")

    files = assemble_inputs([str(single), str(pastes)])
    assert files == [
        str(single),
        str(pastes / "part2.txt"),
        str(pastes / "part10.txt"),
    ]


def test_assemble_inputs_keeps_missing_files():
    assert assemble_inputs(["missing.txt"]) == ["missing.txt"]


def test_paste_title():
    assert paste_title("/tmp/pastes/Anon goes outside.txt") == "Anon goes outside"


def test_split_lines():
    assert split_lines("") == []
    assert split_lines("a") == ["a"]
    assert split_lines("a\n") == ["a"]
    assert split_lines("a\n\nb\n") == ["a", "", "b"]
    assert split_lines("a\r\nb\r\n") == ["a", "b"]
    assert split_lines("\n") == [""]
    assert split_lines("a\rb\r\nc\n") == ["a\rb", "c"]


def test_read_lines_strips_bom(tmp_path):
    path = tmp_path / "paste.txt"
    path.write_bytes("\ufeff>be me\r\n\r\n>ok\n".encode("utf-8"))
    assert read_lines(str(path)) == [">be me", "", ">ok"]


def test_read_lines_keeps_lone_carriage_return(tmp_path):
    path = tmp_path / "paste.txt"
    path.write_bytes(b"a\rb\r\nc\n")
    assert read_lines(str(path)) == ["a\rb", "c"]
