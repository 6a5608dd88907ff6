"""
Built-in TypeConverter plugins, discovered automatically by the plugin catalog.
"""

from .core import (
    BooleanConverter,
    BytesConverter,
    CharsetConverter,
    ClassConverter,
    ComplexConverter,
    DecimalConverter,
    DurationConverter,
    FloatConverter,
    IntegerConverter,
    PathConverter,
    PatternConverter,
    StringConverter,
    URLConverter,
    UUIDConverter,
)

__all__ = [
    "BooleanConverter",
    "BytesConverter",
    "CharsetConverter",
    "ClassConverter",
    "ComplexConverter",
    "DecimalConverter",
    "DurationConverter",
    "FloatConverter",
    "IntegerConverter",
    "PathConverter",
    "PatternConverter",
    "StringConverter",
    "URLConverter",
    "UUIDConverter",
]
