"""
Console reporting.

Verbosity and color are carried by a Reporter instance that is passed
to whatever needs to print, instead of living in module globals.

    quiet          errors only
    verbosity 0    info, warnings, errors
    verbosity 1    + debug (timestamped)
    verbosity 2+   + trace
"""

import sys
from datetime import datetime, timezone

LEVELS = {"error": 0, "warn": 1, "info": 2, "debug": 3, "trace": 4}

COLOR_MODES = ("auto", "always", "never")

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"

RULE = "─" * 60


def level_for(verbosity, quiet=False):
    """Highest level shown for a -v count."""
    if quiet:
        return LEVELS["error"]
    return min(LEVELS["info"] + verbosity, LEVELS["trace"])


def colors_enabled(mode, stream=None):
    if mode == "always":
        return True
    if mode == "never":
        return False
    stream = stream or sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


def indent_lines(message):
    """Indent every line after the first by two spaces."""
    lines = str(message).splitlines() or [""]
    return "\n".join([lines[0]] + [f"  {line}" for line in lines[1:]])


class Reporter:
    """
    Leveled console output.

    Usage:
        reporter = Reporter(verbosity=args.verbose, quiet=args.quiet, color="auto")
        reporter.info("Parsed paste.txt")
        reporter.warn("Spoiler never closed")
    """

    def __init__(self, verbosity=0, quiet=False, color="auto", stream=None):
        self.stream = stream or sys.stderr
        self.level = level_for(verbosity, quiet)
        self.color = colors_enabled(color, self.stream)

    @property
    def is_verbose(self):
        return self.level >= LEVELS["debug"]

    def enabled(self, level):
        return LEVELS[level] <= self.level

    def style(self, text, *codes):
        if not self.color or not codes:
            return text
        return "".join(codes) + text + RESET

    # ── Levels ─────────────────────────────────────────────

    def error(self, message):
        self._emit("error", message)

    def warn(self, message):
        self._emit("warn", message)

    def info(self, message):
        self._emit("info", message)

    def debug(self, message):
        self._emit("debug", message)

    def trace(self, message):
        self._emit("trace", message)

    # ── Decorations ────────────────────────────────────────

    def header(self, text):
        self.info(f"\n{RULE}\n{text}\n{RULE}")

    def success(self, text):
        self.info(self.style(f"  ✓ {text}", GREEN))

    def failure(self, text):
        self.error(f"  ✗ {text}")

    # ── Output ─────────────────────────────────────────────

    def _emit(self, level, message):
        if not self.enabled(level):
            return

        text = indent_lines(message)

        if self.is_verbose:
            stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
            prefix = f"[{stamp}] [{level.upper():^7}] "
            if level in ("debug", "trace"):
                prefix = self.style(prefix, DIM)
        elif level == "error":
            prefix = self.style("ERROR: ", RED, BOLD)
        elif level == "warn":
            prefix = self.style("WARN: ", YELLOW, BOLD)
        else:
            prefix = ""

        if level == "error":
            text = self.style(text, RED)
        elif level == "warn":
            text = self.style(text, YELLOW)
        elif level in ("debug", "trace"):
            text = self.style(text, DIM)

        print(f"{prefix}{text}", file=self.stream)
