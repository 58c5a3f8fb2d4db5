"""Exceptions raised while converting UVL feature models."""


class ParseError(Exception):
    """Raised when a parsed UVL model cannot be turned into a feature tree.

    The conversion is aborted as a whole, no partial tree is returned.
    """


class AttributeTypeError(TypeError):
    """Raised when an attribute value does not match the attribute's declared type."""
