"""
Input resolution: turn command-line paths into an ordered list of
pastes, and read each paste as lines.
"""

import glob
import os
import re

PASTE_EXTENSION = ".txt"


def natural_sort_key(s):
    """Sort strings with embedded numbers naturally (2.txt before 10.txt)."""
    return [
        int(text) if text.isdigit() else text.lower()
        for text in re.split(r"(\d+)", s)
    ]


def assemble_inputs(paths):
    """
    Expand paths into paste files, keeping the given order.

    Files are kept as-is. Directories contribute their *.txt files in
    natural sort order.
    """
    files = []
    for path in paths:
        if os.path.isdir(path):
            found = glob.glob(os.path.join(path, f"*{PASTE_EXTENSION}"))
            found.sort(key=natural_sort_key)
            files.extend(found)
        else:
            files.append(path)
    return files


def paste_title(path):
    """Paste title: the file name without its extension."""
    return os.path.splitext(os.path.basename(path))[0]


def split_lines(content):
    """
    Split text on newlines, dropping a trailing carriage return from
    each line. A final newline does not add an empty line.
    """
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_lines(path):
    """Read a UTF-8 paste (BOM tolerated) as a list of lines."""
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        return split_lines(f.read())
