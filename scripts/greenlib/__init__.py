"""
greenlib — greentext-to-EPUB toolchain.

Public API:
    from greenlib.tag import Tag
    from greenlib.parser import LineParser
    from greenlib.content import PasteContent
    from greenlib.config import GreenConfig
    from greenlib.builders import BUILDERS
    from greenlib.lint import GreenLinter
"""

__version__ = "0.1.0"
