"""
XHTML documents and stylesheets that go into the EPUB.

Everything here is composed from greenlib.tag, so escaping is handled
in one place.
"""

import os

from greenlib.parser import RESET_FOREGROUND_CLASS
from greenlib.tag import Tag

NS_XHTML = "http://www.w3.org/1999/xhtml"
NS_OPS = "http://www.idpf.org/2007/ops"
NS_SVG = "http://www.w3.org/2000/svg"
NS_XLINK = "http://www.w3.org/1999/xlink"

STRUCTURE_VOCAB = "z3998: http://www.daisy.org/z3998/2012/vocab/structure/#"

STYLESHEET = "stylesheet.css"
COVER_STYLESHEET = "style/coverstyle.css"

STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


def _read_static(filename):
    with open(os.path.join(STATIC_DIR, filename), "rb") as f:
        return f.read()


def xhtml_document(html):
    """Prefix a serialized <html> tag with the XML declaration and doctype."""
    return f"<?xml version='1.0' encoding='utf-8'?><!DOCTYPE html>{html.serialize()}"


# ── Cover page ─────────────────────────────────────────────────────────
#
# Same layout as fimfic2epub's cover page: an SVG viewport sized to the
# image so readers scale it to the screen.


def coverpage_content(href, size, lang="en"):
    """Cover page XHTML for an image at `href` of (width, height) pixels."""
    width, height = size

    head = (
        Tag("head")
        .child(Tag("meta").attribute("charset", "utf-8"))
        .child(
            Tag("meta")
            .attribute("name", "viewport")
            .attribute("content", f"width={width}, height={height}")
        )
        .child(Tag("title").child("Cover"))
        .child(
            Tag("link")
            .attribute("rel", "stylesheet")
            .attribute("type", "text/css")
            .attribute("href", f"../{COVER_STYLESHEET}")
        )
    )

    svg = (
        Tag("svg")
        .attribute("xmlns", NS_SVG)
        .attribute("xmlns:xlink", NS_XLINK)
        .attribute("version", "1.1")
        .attribute("viewBox", f"0 0 {width} {height}")
        .attribute("id", "cover")
        .child(
            Tag("image")
            .attribute("width", width)
            .attribute("height", height)
            .attribute("xlink:href", f"../{href}")
        )
    )

    html = (
        Tag("html")
        .attribute("xmlns", NS_XHTML)
        .attribute("xmlns:epub", NS_OPS)
        .attribute("lang", lang)
        .attribute("xml:lang", lang)
        .child(head)
        .child(
            Tag("body")
            .attribute("epub:type", "frontmatter cover")
            .attribute("id", "coverpage")
            .child(svg)
        )
    )

    return xhtml_document(html)


# ── Stylesheets ────────────────────────────────────────────────────────


def stylesheet_content(green_color, spoiler_color):
    """
    Base stylesheet plus the highlight rules.

    Every paragraph is green by default and the reset class removes it,
    since most lines of a green are highlighted anyway.
    """
    rules = (
        f"p {{ color: {green_color}; }}\n"
        f".{RESET_FOREGROUND_CLASS} {{ color: initial; }}\n"
        f"p > span {{ background-color: {spoiler_color}; color: transparent; }}"
    )
    return _read_static("style.css") + rules.encode("utf-8")


def cover_stylesheet_content():
    return _read_static("coverstyle.css")


# ── Paste documents ────────────────────────────────────────────────────


class PasteContent:
    """
    One paste rendered as an XHTML document.

    Usage:
        paste = PasteContent("Anon goes outside")
        paste.add_line(parser.parse(">be me")).add_line(Tag("br"))
        xhtml = paste.build()
    """

    def __init__(self, title, lang="en"):
        self.title = str(title)
        self.lang = lang
        self.body = Tag("body")

    def add_line(self, child):
        self.body.child(child)
        return self

    @property
    def line_count(self):
        return len(self.body.children)

    def build(self):
        html = (
            Tag("html")
            .attribute("xmlns", NS_XHTML)
            .attribute("xmlns:epub", NS_OPS)
            .attribute("epub:prefix", STRUCTURE_VOCAB)
            .attribute("lang", self.lang)
            .attribute("xml:lang", self.lang)
            .child(
                Tag("head")
                .child(Tag("title").child(self.title))
                .child(
                    Tag("link")
                    .attribute("href", f"../{STYLESHEET}")
                    .attribute("rel", "stylesheet")
                    .attribute("type", "text/css")
                )
            )
            .child(self.body)
        )
        return xhtml_document(html)
