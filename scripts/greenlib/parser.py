"""
Greentext line parser.

Each input line becomes one <p> element:

    - Lines whose first piece of text starts with '>' keep the default
      highlight; every other paragraph gets the reset class.
    - Text between [spoiler] and [/spoiler] is wrapped in <span> tags.
      A spoiler may stay open across lines, so the parser keeps that
      state between calls. Use one LineParser per input file.
"""

from greenlib.tag import Tag

RESET_FOREGROUND_CLASS = "icolor"
SPOILER_OPEN_TAG = "[spoiler]"
SPOILER_CLOSE_TAG = "[/spoiler]"
HIGHLIGHT_PREFIX = ">"


# ── Tokens ─────────────────────────────────────────────────────────────


class Token:
    """A piece of a line: a spoiler marker or a run of text."""

    __slots__ = ("kind", "text")

    SPOILER_OPEN = "spoiler_open"
    SPOILER_CLOSE = "spoiler_close"
    TEXT = "text"

    def __init__(self, kind, text=None):
        self.kind = kind
        self.text = text

    @classmethod
    def spoiler_open(cls):
        return cls(cls.SPOILER_OPEN, SPOILER_OPEN_TAG)

    @classmethod
    def spoiler_close(cls):
        return cls(cls.SPOILER_CLOSE, SPOILER_CLOSE_TAG)

    @classmethod
    def of_text(cls, text):
        return cls(cls.TEXT, text)

    @property
    def is_text(self):
        return self.kind == self.TEXT

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.text) == (other.kind, other.text)

    def __repr__(self):
        if self.is_text:
            return f"Token.of_text({self.text!r})"
        return f"Token.{self.kind}()"


_MARKERS = (
    (SPOILER_OPEN_TAG, Token.spoiler_open),
    (SPOILER_CLOSE_TAG, Token.spoiler_close),
)


def tokenize(line):
    """
    Split a line into spoiler markers and text runs.

    Whichever marker comes first in the rest of the line is consumed
    first. Empty text runs are never emitted.
    """
    tokens = []
    pos = 0

    while True:
        found = None
        for marker, make_token in _MARKERS:
            idx = line.find(marker, pos)
            if idx != -1 and (found is None or idx < found[0]):
                found = (idx, marker, make_token)

        if found is None:
            break

        idx, marker, make_token = found
        if idx > pos:
            tokens.append(Token.of_text(line[pos:idx]))
        tokens.append(make_token())
        pos = idx + len(marker)

    if pos < len(line):
        tokens.append(Token.of_text(line[pos:]))

    return tokens


# ── Parser ─────────────────────────────────────────────────────────────


def spoiler_span(text):
    return Tag("span").child(text)


def is_highlighted(tokens):
    """True if the first text token starts with the highlight prefix."""
    for token in tokens:
        if token.is_text:
            return token.text.startswith(HIGHLIGHT_PREFIX)
    return False


class LineParser:
    """
    Turns greentext lines into paragraphs.

    Usage:
        parser = LineParser()
        for line in lines:
            body.child(parser.parse(line))
        if parser.is_spoiler_open():
            ...  # the file ended inside a spoiler
    """

    def __init__(self):
        self.open_spoiler = False

    def is_spoiler_open(self):
        return self.open_spoiler

    # NOTE: adjacent spoiler spans are emitted separately, never merged.
    def parse(self, line):
        """Parse one line (without its newline) into a <p> Tag."""
        tokens = tokenize(line)
        paragraph = Tag("p")

        # A line with only markers has no text to exempt, so it gets the class.
        if not is_highlighted(tokens):
            paragraph.attribute("class", RESET_FOREGROUND_CLASS)

        for token in tokens:
            if token.is_text:
                if self.open_spoiler:
                    paragraph.child(spoiler_span(token.text))
                else:
                    paragraph.child(token.text)
            elif token.kind == Token.SPOILER_OPEN:
                if self.open_spoiler:
                    # Stray opening marker inside a spoiler stays literal.
                    paragraph.child(spoiler_span(token.text))
                else:
                    self.open_spoiler = True
            else:
                if self.open_spoiler:
                    self.open_spoiler = False
                else:
                    paragraph.child(token.text)

        return paragraph
