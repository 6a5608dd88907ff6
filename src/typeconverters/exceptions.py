"""
Exceptions raised by converters and the converter registry.

ConversionError belongs to individual converters and reaches whoever called
``convert``. UnknownTypeConversionError is raised by the registry when a type
cannot be resolved to any converter. ConverterBootstrapError describes a defect
found while populating a registry; it is recorded and logged instead of raised
so the registry remains usable for every other type.
"""

from __future__ import annotations

from typing import Any

from typeconverters.utils.typing_utils import type_name

__all__ = [
    "ConversionError",
    "ConverterBootstrapError",
    "UnknownTypeConversionError",
]


class ConversionError(ValueError):
    """
    Raised when text cannot be interpreted as the converter's target type.

    :param message: Human-readable description of the failure
    :param text: The text that failed to convert
    :param target_type: The type the text was being converted to
    """

    def __init__(
        self, message: str, *, text: str | None = None, target_type: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.text = text
        self.target_type = target_type

    def __str__(self) -> str:
        return self.message


class UnknownTypeConversionError(LookupError):
    """
    Raised when no exact, enum or assignment-compatible converter exists for a type.

    :param target_type: The type that could not be resolved
    """

    def __init__(self, target_type: Any):
        self.target_type = target_type
        super().__init__(f"No TypeConverter found for type [{type_name(target_type)}]")


class ConverterBootstrapError(RuntimeError):
    """
    Describes a configuration defect found while bootstrapping a registry, such as
    a primitive alias whose builtin type has no converter.
    """
