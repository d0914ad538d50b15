"""
Base builder class.

Subclasses implement `build()` and set `format_name` / `extension`.
Shared logic (output path, reporting, reading pastes) lives here.
"""

import os
from abc import ABC, abstractmethod

from greenlib.content import PasteContent
from greenlib.parser import LineParser
from greenlib.resolve import read_lines
from greenlib.tag import Tag


def render_paste(title, lines, lang="en"):
    """
    Parse the lines of one paste into a document.

    Empty lines become <br/>. Returns (PasteContent, spoiler_left_open).
    """
    paste = PasteContent(title, lang=lang)
    parser = LineParser()

    for line in lines:
        if not line:
            paste.add_line(Tag("br"))
            continue
        paste.add_line(parser.parse(line))

    return paste, parser.is_spoiler_open()


class BuildError(Exception):
    """Raised for a failure that aborts the build, with context."""

    def __init__(self, message, context=None):
        super().__init__(message)
        self.context = context

    def __str__(self):
        message = super().__str__()
        if self.context:
            return f"{message}\nContext: {self.context}"
        return message


class BaseBuilder(ABC):
    """
    Abstract base for output builders.

    Subclasses must define:
        format_name:  str   — human-readable name ("EPUB")
        extension:    str   — output file extension (".epub")
        build():      method — the actual build logic
    """

    format_name = None  # Override in subclass
    extension = None    # Override in subclass

    def __init__(self, config, input_files, reporter, **kwargs):
        self.config = config
        self.input_files = input_files
        self.reporter = reporter
        self.kwargs = kwargs

    # ── Output path ────────────────────────────────────────

    @property
    def output_file(self):
        output = self.config.output
        if self.extension and not os.path.splitext(output)[1]:
            output += self.extension
        return output

    # ── Logging ────────────────────────────────────────────

    def log(self, msg):
        self.reporter.debug(msg)

    def header(self):
        self.reporter.header(f"  Building {self.format_name}: {self.config.title}")

    # ── Input ──────────────────────────────────────────────

    def load_paste(self, path, title):
        """Read and parse a paste file. Raises BuildError."""
        self.log(f"Opening file {path!r}")
        try:
            lines = read_lines(path)
        except (OSError, UnicodeDecodeError) as e:
            raise BuildError(f"IO error: {e}", f"failed to read input file: {path!r}")

        paste, spoiler_open = render_paste(title, lines, lang=self.config.lang)
        self.reporter.info(f"Parsed {path!r}")
        self.reporter.trace(f"{len(lines)} lines, {paste.line_count} elements")

        if spoiler_open:
            self.reporter.warn(
                "Input file has a spoiler that hasn't been closed and extended "
                f"to the end of the file: {path!r}"
            )
        return paste

    # ── Abstract interface ─────────────────────────────────

    @abstractmethod
    def build(self):
        """
        Execute the build. Returns True on success, False on failure.
        """
        ...
