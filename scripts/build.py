#!/usr/bin/env python3
"""
Unified build script for greenlib.

Usage:
    python build.py -t "Title" -a Anon -o out.epub a.txt b.txt
    python build.py build --config greens.yaml -v
    python build.py lint pastes/ --fix

Requires: ebooklib, Pillow, PyYAML
"""

import os
import sys

# Ensure greenlib is importable from the scripts/ directory
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from greenlib.cli import run


if __name__ == "__main__":
    run()
