import io
import os
import re
import zipfile

from PIL import Image

from greenlib.builders import EpubBuilder
from greenlib.builders.base import render_paste
from greenlib.config import GreenConfig
from greenlib.content import coverpage_content
from greenlib.report import Reporter
from greenlib.tag import Tag


def _config(tmp_path, **extra):
    data = {
        "title": "Anon's week",
        "author": "Anon",
        "output": str(tmp_path / "week.epub"),
        "subjects": ["greentext"],
    }
    data.update(extra)
    return GreenConfig.from_mapping(data)


def _paste(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def _reporter():
    stream = io.StringIO()
    return Reporter(color="never", stream=stream), stream


def _spine(opf):
    spine = re.search(r"<spine[^>]*>(.*?)</spine>", opf, re.S).group(1)
    return re.findall(r'idref="([^"]+)"', spine)


def test_render_paste():
    paste, spoiler_open = render_paste("t", [">be me", "", "it was [spoiler]fine"])
    assert spoiler_open is True
    assert paste.body.children[1] == Tag("br")
    assert paste.line_count == 3


def test_build_without_cover(tmp_path):
    first = _paste(tmp_path, "monday.txt", ">be me\n\nit was [spoiler]fine[/spoiler]\n")
    second = _paste(tmp_path, "tuesday.txt", ">mfw\n")
    reporter, stream = _reporter()

    builder = EpubBuilder(_config(tmp_path), [first, second], reporter)
    assert builder.build() is True

    output = tmp_path / "week.epub"
    assert output.exists()

    with zipfile.ZipFile(str(output)) as z:
        names = z.namelist()
        assert names[0] == "mimetype"
        assert "EPUB/stylesheet.css" in names
        assert "EPUB/content/paste-001.xhtml" in names
        assert "EPUB/content/paste-002.xhtml" in names
        assert not any(name.startswith("EPUB/img/") for name in names)

        css = z.read("EPUB/stylesheet.css").decode("utf-8")
        assert "p { color: #2CAF26; }" in css

        first_doc = z.read("EPUB/content/paste-001.xhtml").decode("utf-8")
        assert "<span>fine</span>" in first_doc
        assert 'class="icolor"' in first_doc
        assert "../stylesheet.css" in first_doc

        opf = z.read("EPUB/content.opf").decode("utf-8")
        assert "Anon's week" in opf
        assert "greentext" in opf
        assert _spine(opf) == ["nav", "paste-001", "paste-002"]

    assert "Successfully generated" in stream.getvalue()
    assert "WARN:" not in stream.getvalue()


def test_build_with_cover(tmp_path):
    cover_path = tmp_path / "cover.png"
    Image.new("RGB", (300, 400), (0, 0, 0)).save(str(cover_path), format="PNG")
    paste = _paste(tmp_path, "monday.txt", ">be me\n")
    reporter, _ = _reporter()

    config = _config(tmp_path, cover=str(cover_path))
    assert EpubBuilder(config, [paste], reporter).build() is True

    with zipfile.ZipFile(str(tmp_path / "week.epub")) as z:
        names = z.namelist()
        assert "EPUB/img/cover.png" in names
        assert "EPUB/style/coverstyle.css" in names
        assert z.read("EPUB/content/cover.xhtml").decode("utf-8") == coverpage_content(
            "img/cover.png", (300, 400)
        )
        opf = z.read("EPUB/content.opf").decode("utf-8")
        assert _spine(opf) == ["coverpage", "nav", "paste-001"]


def test_unclosed_spoiler_warns_but_builds(tmp_path):
    paste = _paste(tmp_path, "monday.txt", "it was [spoiler]fine\n")
    reporter, stream = _reporter()
    assert EpubBuilder(_config(tmp_path), [paste], reporter).build() is True
    assert "WARN: Input file has a spoiler that hasn't been closed" in stream.getvalue()


def test_missing_input_fails(tmp_path):
    reporter, stream = _reporter()
    builder = EpubBuilder(_config(tmp_path), [str(tmp_path / "nope.txt")], reporter)
    assert builder.build() is False
    assert "failed to read input file" in stream.getvalue()
    assert not (tmp_path / "week.epub").exists()


def test_bad_cover_fails(tmp_path):
    cover = _paste(tmp_path, "cover.png", "not an image")
    paste = _paste(tmp_path, "monday.txt", ">be me\n")
    reporter, stream = _reporter()
    builder = EpubBuilder(_config(tmp_path, cover=cover), [paste], reporter)
    assert builder.build() is False
    assert "failed to recognize cover image format" in stream.getvalue()


def test_output_extension_added(tmp_path):
    config = _config(tmp_path, output=str(tmp_path / "week"))
    reporter, _ = _reporter()
    builder = EpubBuilder(config, [], reporter)
    assert builder.output_file == os.path.join(str(tmp_path), "week.epub")


def test_paste_markup_is_shipped_unchanged(tmp_path):
    text = "[spoiler]four[/spoiler][spoiler]spoilers[/spoiler]\nx[spoiler]a[spoiler]b[/spoiler]\n"
    paste = _paste(tmp_path, "monday.txt", text)
    reporter, _ = _reporter()
    assert EpubBuilder(_config(tmp_path), [paste], reporter).build() is True

    expected, _ = render_paste("monday", text.splitlines())
    with zipfile.ZipFile(str(tmp_path / "week.epub")) as z:
        doc = z.read("EPUB/content/paste-001.xhtml").decode("utf-8")
    assert doc == expected.build()
    assert "<span>four</span><span>spoilers</span>" in doc
    assert "<span>a</span><span>[spoiler]</span><span>b</span>" in doc
