"""
Paste linter.

Scans greentext pastes for encoding issues, whitespace problems, and
spoiler markup that won't render the way the author intended.

Can be invoked from the unified build.py CLI.
"""

import re

from greenlib.parser import Token, tokenize
from greenlib.resolve import split_lines


# ── Lint Patterns ──────────────────────────────────────────────────────
#
# Each: (description, compiled regex, replacement, severity)
#   replacement = None → report only (manual review)
#   replacement = str  → auto-fixable with --fix
#   severity: "error" | "warning" | "info"

ENCODING_PATTERNS = [
    ("Non-breaking space",
     re.compile(r"\u00A0"), " ", "warning"),
    ("Zero-width space/joiner",
     re.compile(r"[\u200B-\u200D]"), "", "error"),
    ("Soft hyphen",
     re.compile(r"\u00AD"), "", "error"),
    ("Directional mark (LTR/RTL)",
     re.compile(r"[\u200E\u200F]"), "", "error"),
    ("Fullwidth greater-than sign (won't highlight)",
     re.compile(r"^\uFF1E", re.MULTILINE), ">", "warning"),
]

WHITESPACE_PATTERNS = [
    ("Tab character (use spaces)",
     re.compile(r"\t"), "    ", "warning"),
    ("Carriage return (Windows line ending)",
     re.compile(r"\r"), "", "info"),
    ("Trailing whitespace",
     re.compile(r"[ \t]+$", re.MULTILINE), "", "info"),
    ("Leading space before '>' (line won't highlight)",
     re.compile(r"^ +(?=>)", re.MULTILINE), "", "warning"),
]

MARKUP_PATTERNS = [
    ("Capitalized spoiler tag (tags are case-sensitive)",
     re.compile(r"\[/?(?:SPOILER|Spoiler)\]"), None, "warning"),
]

ALL_PATTERNS = ENCODING_PATTERNS + WHITESPACE_PATTERNS + MARKUP_PATTERNS


# ── Severity display ───────────────────────────────────────────────────

SEVERITY_COLOR = {
    "error":   "\033[31m✗\033[0m",
    "warning": "\033[33m!\033[0m",
    "info":    "\033[36m·\033[0m",
}

SEVERITY_PLAIN = {
    "error":   "[ERROR]",
    "warning": "[WARN]",
    "info":    "[INFO]",
}


# ── Markup checks ──────────────────────────────────────────────────────


def check_spoilers(lines):
    """
    Walk the lines the way the parser does and report markup problems.

    Returns a list of (line_num, severity, message).
    """
    findings = []
    open_spoiler = False
    opened_at = None

    for line_num, line in enumerate(lines, 1):
        for token in tokenize(line):
            if token.kind == Token.SPOILER_OPEN:
                if open_spoiler:
                    findings.append((
                        line_num, "warning",
                        f"Nested {token.text} inside an open spoiler (rendered literally)"
                    ))
                else:
                    opened_at = line_num
                    open_spoiler = True
            elif token.kind == Token.SPOILER_CLOSE:
                if open_spoiler:
                    open_spoiler = False
                else:
                    findings.append((
                        line_num, "warning",
                        f"Stray {token.text} with no open spoiler (rendered literally)"
                    ))

    if open_spoiler:
        findings.append((
            opened_at, "error",
            "Spoiler opened here is never closed (extends to the end of the file)"
        ))

    return findings


# ── Linter class ───────────────────────────────────────────────────────


class GreenLinter:
    """
    Paste linter.

    Usage:
        linter = GreenLinter(files, fix=False, color=True)
        success = linter.run()
    """

    def __init__(self, files, fix=False, verbose=False, color=True):
        self.files = files
        self.fix = fix
        self.verbose = verbose
        self.symbols = SEVERITY_COLOR if color else SEVERITY_PLAIN
        self.total_counts = {"error": 0, "warning": 0, "info": 0}
        self.total_fixes = 0
        self.files_with_issues = 0

    def run(self):
        """Lint all files. Returns True if no errors found."""
        for filepath in self.files:
            findings, fixes, counts = self._lint_file(filepath)
            self.total_fixes += fixes

            for sev in self.total_counts:
                self.total_counts[sev] += counts[sev]

            if findings:
                self.files_with_issues += 1
                print(f"  {filepath}")
                for f in findings:
                    print(f)
                print()
            elif self.verbose:
                print(f"  {filepath} — clean")

        self._summary()
        return self.total_counts["error"] == 0

    def _lint_file(self, filepath):
        """Scan a single file. Returns (findings, fix_count, severity_counts)."""
        findings = []
        fixes_applied = 0
        counts = {"error": 0, "warning": 0, "info": 0}

        try:
            with open(filepath, "r", encoding="utf-8", newline="") as f:
                content = f.read()
            original = content
        except UnicodeDecodeError:
            return (
                [f"  {self.symbols['error']} Cannot read (encoding error)"],
                0,
                {"error": 1, "warning": 0, "info": 0},
            )
        except OSError as e:
            return (
                [f"  {self.symbols['error']} Cannot read ({e.strerror or e})"],
                0,
                {"error": 1, "warning": 0, "info": 0},
            )

        # ── BOM ────────────────────────────────────────────
        if content.startswith("\ufeff"):
            counts["warning"] += 1
            if self.fix:
                content = content[1:]
                fixes_applied += 1
                findings.append(f"  {self.symbols['warning']} :1 Fixed: File starts with UTF-8 BOM")
            else:
                findings.append(f"  {self.symbols['warning']} :1 Fixable: File starts with UTF-8 BOM")

        # ── Regex patterns ─────────────────────────────────
        for description, pattern, replacement, severity in ALL_PATTERNS:
            matches = list(pattern.finditer(content))
            if not matches:
                continue

            for match in matches:
                line_num = content[: match.start()].count("\n") + 1
                counts[severity] += 1

                matched = match.group(0)
                display = (
                    repr(matched)
                    if len(matched) == 1 and ord(matched[0]) > 127
                    else f"'{matched[:30]}'"
                )

                if replacement is not None and self.fix:
                    findings.append(
                        f"  {self.symbols[severity]} :{line_num} Fixed: {description}"
                    )
                else:
                    label = "Found" if replacement is None else "Fixable"
                    findings.append(
                        f"  {self.symbols[severity]} :{line_num} {label}: {description} ({display})"
                    )

            if self.fix and replacement is not None:
                new = pattern.sub(replacement, content)
                if new != content:
                    fixes_applied += len(matches)
                    content = new

        # ── Spoiler markup ─────────────────────────────────
        for line_num, severity, message in check_spoilers(split_lines(content)):
            counts[severity] += 1
            ref = f":{line_num}" if line_num > 0 else ""
            findings.append(f"  {self.symbols[severity]} {ref} {message}")

        # ── Write back ─────────────────────────────────────
        if self.fix and content != original:
            with open(filepath, "w", encoding="utf-8", newline="") as f:
                f.write(content)

        return findings, fixes_applied, counts

    def _summary(self):
        """Print the summary line."""
        total = sum(self.total_counts.values())

        print(f"{'─' * 50}")

        if total == 0:
            print(f"  No issues found across {len(self.files)} files.")
            return

        parts = []
        if self.total_counts["error"]:
            parts.append(f"{self.total_counts['error']} errors")
        if self.total_counts["warning"]:
            parts.append(f"{self.total_counts['warning']} warnings")
        if self.total_counts["info"]:
            parts.append(f"{self.total_counts['info']} info")

        print(f"  {', '.join(parts)} across {self.files_with_issues}/{len(self.files)} files")

        if self.fix:
            print(f"  Applied {self.total_fixes} fixes")
            remaining = total - self.total_fixes
            if remaining > 0:
                print(f"  {remaining} issues require manual review")

        if not self.fix and (self.total_counts["error"] or self.total_counts["warning"]):
            print("  Run with --fix to auto-correct fixable issues")
