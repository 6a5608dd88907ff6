"""
Built-in converters for common configuration value types.

Every converter here registers itself with the TypeConverter plugin registry and
is found through auto-discovery. Registration order matters: it is the order in
which a registry scans entries when it looks for an assignment-compatible
converter, so the numeric converters are listed from the most general
(``float``) to the most specific (``bool``).
"""

from __future__ import annotations

import base64
import binascii
import codecs
import importlib
import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any
from urllib.parse import ParseResult, urlparse
from uuid import UUID

from typeconverters.converter import TypeConverter
from typeconverters.exceptions import ConversionError
from typeconverters.utils import type_name

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


def _invalid(text: str, target_type: Any, reason: Any = None) -> ConversionError:
    message = f"Cannot convert [{text}] to {type_name(target_type)}"
    if reason is not None:
        message += f": {reason}"

    return ConversionError(message, text=text, target_type=target_type)


@TypeConverter.register("float")
class FloatConverter(TypeConverter[float]):
    def convert(self, text: str) -> float:
        try:
            return float(text)
        except ValueError as err:
            raise _invalid(text, float) from err


@TypeConverter.register(["int", "integer"])
class IntegerConverter(TypeConverter[int]):
    def convert(self, text: str) -> int:
        try:
            return int(text)
        except ValueError as err:
            raise _invalid(text, int) from err


@TypeConverter.register("complex")
class ComplexConverter(TypeConverter[complex]):
    def convert(self, text: str) -> complex:
        try:
            return complex(text.strip())
        except ValueError as err:
            raise _invalid(text, complex) from err


@TypeConverter.register("decimal")
class DecimalConverter(TypeConverter[Decimal]):
    def convert(self, text: str) -> Decimal:
        try:
            return Decimal(text.strip())
        except InvalidOperation as err:
            raise _invalid(text, Decimal) from err


@TypeConverter.register(["bool", "boolean"])
class BooleanConverter(TypeConverter[bool]):
    """
    Accepts true/false, yes/no, on/off and 1/0 in any letter case.
    """

    TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
    FALSE_VALUES = frozenset({"false", "no", "off", "0"})

    def convert(self, text: str) -> bool:
        normalized = text.strip().casefold()

        if normalized in self.TRUE_VALUES:
            return True

        if normalized in self.FALSE_VALUES:
            return False

        raise _invalid(text, bool, "expected one of true/false, yes/no, on/off, 1/0")


@TypeConverter.register(["str", "string"])
class StringConverter(TypeConverter[str]):
    def convert(self, text: str) -> str:
        return text


@TypeConverter.register("bytes")
class BytesConverter(TypeConverter[bytes]):
    """
    Decodes ``Base64:``-prefixed text as base64 and ``0x``-prefixed text as hex;
    anything else is encoded as UTF-8.
    """

    BASE64_PREFIX = "Base64:"
    HEX_PREFIX = "0x"

    def convert(self, text: str) -> bytes:
        try:
            if text.startswith(self.BASE64_PREFIX):
                return base64.b64decode(
                    text[len(self.BASE64_PREFIX) :], validate=True
                )

            if text.startswith(self.HEX_PREFIX):
                return bytes.fromhex(text[len(self.HEX_PREFIX) :])
        except (binascii.Error, ValueError) as err:
            raise _invalid(text, bytes, err) from err

        return text.encode("utf-8")


@TypeConverter.register("path")
class PathConverter(TypeConverter[Path]):
    def convert(self, text: str) -> Path:
        if not text:
            raise _invalid(text, Path, "empty path")

        return Path(text)


@TypeConverter.register("uuid")
class UUIDConverter(TypeConverter[UUID]):
    def convert(self, text: str) -> UUID:
        try:
            return UUID(text.strip())
        except ValueError as err:
            raise _invalid(text, UUID) from err


@TypeConverter.register(["pattern", "regex"])
class PatternConverter(TypeConverter[re.Pattern]):
    def convert(self, text: str) -> re.Pattern:
        try:
            return re.compile(text)
        except re.error as err:
            raise _invalid(text, re.Pattern, err) from err


@TypeConverter.register(["duration", "timedelta"])
class DurationConverter(TypeConverter[timedelta]):
    """
    Parses ``<number><unit>`` durations such as ``250ms``, ``30 s``, ``1.5h`` or
    ``7 days``; a bare number is read as seconds.
    """

    PATTERN = re.compile(
        r"^\s*(?P<amount>[-+]?\d+(?:\.\d+)?)\s*(?P<unit>[a-z]*)\s*$", re.IGNORECASE
    )
    UNITS = {
        "": "seconds",
        "ms": "milliseconds",
        "millis": "milliseconds",
        "millisecond": "milliseconds",
        "milliseconds": "milliseconds",
        "s": "seconds",
        "sec": "seconds",
        "second": "seconds",
        "seconds": "seconds",
        "m": "minutes",
        "min": "minutes",
        "minute": "minutes",
        "minutes": "minutes",
        "h": "hours",
        "hour": "hours",
        "hours": "hours",
        "d": "days",
        "day": "days",
        "days": "days",
    }

    def convert(self, text: str) -> timedelta:
        match = self.PATTERN.match(text)

        if match is None or (unit := match["unit"].lower()) not in self.UNITS:
            raise _invalid(text, timedelta, "expected <number><unit>")

        try:
            return timedelta(**{self.UNITS[unit]: float(match["amount"])})
        except OverflowError as err:
            raise _invalid(text, timedelta, err) from err


@TypeConverter.register(["charset", "encoding"])
class CharsetConverter(TypeConverter[codecs.CodecInfo]):
    def convert(self, text: str) -> codecs.CodecInfo:
        try:
            return codecs.lookup(text.strip())
        except LookupError as err:
            raise _invalid(text, codecs.CodecInfo, "unknown charset") from err


@TypeConverter.register(["url", "uri"])
class URLConverter(TypeConverter[ParseResult]):
    def convert(self, text: str) -> ParseResult:
        try:
            result = urlparse(text.strip())
        except ValueError as err:
            raise _invalid(text, ParseResult, err) from err

        if not result.scheme:
            raise _invalid(text, ParseResult, "missing URL scheme")

        return result


@TypeConverter.register("class")
class ClassConverter(TypeConverter[type]):
    """
    Resolves a class from ``package.module:Outer.Inner`` or
    ``package.module.ClassName``; unqualified names are looked up in builtins.
    """

    def convert(self, text: str) -> type:
        module_name, separator, qualname = text.strip().partition(":")

        if not separator:
            module_name, _, qualname = module_name.rpartition(".")
            module_name = module_name or "builtins"

        if not module_name:
            raise _invalid(text, type, "missing module name")

        if not qualname:
            raise _invalid(text, type, "missing class name")

        try:
            resolved: Any = importlib.import_module(module_name)
        except (ImportError, ValueError, TypeError) as err:
            raise _invalid(text, type, err) from err

        for attribute in qualname.split("."):
            try:
                resolved = getattr(resolved, attribute)
            except AttributeError as err:
                raise _invalid(text, type, err) from err

        if not isinstance(resolved, type):
            raise _invalid(text, type, f"{qualname} is not a class")

        return resolved
