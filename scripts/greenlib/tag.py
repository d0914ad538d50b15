"""
Minimal markup tree.

A Tag has a name, an ordered list of attributes and an ordered list of
children. Children are either nested Tags or plain text. Serializing a
tag never mutates it, so it can be rendered any number of times.

Usage:
    p = Tag("p").attribute("class", "icolor").child("Hello ").child(Tag("br"))
    str(p)   # '<p class="icolor">Hello <br/></p>'
"""

from html import escape


def escape_text(text):
    """Escape text content (&, <, >)."""
    return escape(text, quote=False)


def escape_attribute(value):
    """Escape a value for a double-quoted attribute (&, <, >, ", ')."""
    return escape(value, quote=True)


class Attribute:
    """A name/value pair. A value of None renders as a boolean attribute."""

    __slots__ = ("name", "value")

    def __init__(self, name, value=None):
        self.name = name
        self.value = value

    def serialize(self):
        if self.value is None:
            return self.name
        return f'{self.name}="{escape_attribute(self.value)}"'

    def __eq__(self, other):
        if not isinstance(other, Attribute):
            return NotImplemented
        return (self.name, self.value) == (other.name, other.value)

    def __repr__(self):
        return f"Attribute({self.name!r}, {self.value!r})"


class Tag:
    """
    A markup element.

    `attribute()`, `boolean_attribute()` and `child()` append and return
    the tag itself, so calls chain.
    """

    def __init__(self, name):
        self.name = str(name)
        self.attributes = []
        self.children = []

    # ── Building ───────────────────────────────────────────

    def attribute(self, name, value):
        self.attributes.append(Attribute(str(name), str(value)))
        return self

    def boolean_attribute(self, name):
        self.attributes.append(Attribute(str(name)))
        return self

    def child(self, child):
        """Append a nested Tag or a text node (anything else goes through str())."""
        if not isinstance(child, Tag):
            child = str(child)
        self.children.append(child)
        return self

    # ── Rendering ──────────────────────────────────────────

    def serialize(self):
        parts = ["<", self.name]
        for attribute in self.attributes:
            parts.append(" ")
            parts.append(attribute.serialize())

        if not self.children:
            parts.append("/>")
            return "".join(parts)

        parts.append(">")
        for child in self.children:
            if isinstance(child, Tag):
                parts.append(child.serialize())
            else:
                parts.append(escape_text(child))
        parts.append(f"</{self.name}>")
        return "".join(parts)

    __str__ = serialize

    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented
        return (
            self.name == other.name
            and self.attributes == other.attributes
            and self.children == other.children
        )

    def __repr__(self):
        return f"Tag({self.serialize()!r})"
