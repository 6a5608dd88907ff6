"""
Converter interfaces for turning configuration text into typed values.

TypeConverter is the plugin base class: implementations parameterize it with the
type they produce (``TypeConverter[int]``) and join the plugin catalog through
``@TypeConverter.register()``. PrioritizedConverter adds an ordering so that a
more specific converter can take over a type another converter already claims,
and EnumConverter is the converter a registry builds on the fly for enum types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar, get_args, get_origin

from typeconverters.exceptions import ConversionError
from typeconverters.utils import RegistryMixin, type_name

__all__ = [
    "ConvertedT",
    "EnumConverter",
    "PrioritizedConverter",
    "TypeConverter",
    "resolve_supported_type",
]


ConvertedT = TypeVar("ConvertedT")
"""Generic type variable for the values a converter produces"""
EnumT = TypeVar("EnumT", bound=Enum)


class TypeConverter(ABC, RegistryMixin, Generic[ConvertedT]):
    """
    Abstract base for converters that interpret text as a value of one type.

    The type a converter supports is declared through its parameterization, or
    through the ``supported_type`` class attribute when the parameterization
    cannot express it. Converters registered with ``TypeConverter.register`` are
    listed by the plugin catalog; the built-in converters living in
    ``typeconverters.converters`` are discovered automatically.

    Example:
    ::
        @TypeConverter.register("ip_address")
        class IPAddressConverter(TypeConverter[IPv4Address]):
            def convert(self, text: str) -> IPv4Address:
                try:
                    return IPv4Address(text)
                except ValueError as err:
                    raise ConversionError(str(err), text=text) from err

    :cvar supported_type: Explicit type declaration, overrides the parameterization
    """

    registry_auto_discovery: ClassVar[bool] = True
    auto_package: ClassVar[str | tuple[str, ...] | None] = "typeconverters.converters"

    supported_type: ClassVar[Any] = None

    @abstractmethod
    def convert(self, text: str) -> ConvertedT:
        """
        Convert the given text into a value of the supported type.

        :param text: The text to convert
        :return: The converted value
        :raises ConversionError: If the text cannot be interpreted as the type
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class PrioritizedConverter(TypeConverter[ConvertedT]):
    """
    Converter that can be ordered against other prioritized converters.

    A converter with a higher ``priority`` sorts before one with a lower priority,
    so when both are registered for the same type the higher one is kept. There
    is no ordering against converters that are not prioritized.

    :cvar priority: Relative preference among converters for the same type
    """

    priority: ClassVar[int] = 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PrioritizedConverter):
            return NotImplemented

        return self.priority > other.priority

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PrioritizedConverter):
            return NotImplemented

        return self.priority < other.priority

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(priority={self.priority})"


class EnumConverter(TypeConverter[EnumT]):
    """
    Converts member names to members of an enum, ignoring letter case.

    An exact name match is preferred; otherwise the first member in definition
    order whose name matches case-insensitively is returned. Aliases count as
    names.

    :param enum_type: The enum class to convert to
    """

    def __init__(self, enum_type: type[EnumT]):
        if not (isinstance(enum_type, type) and issubclass(enum_type, Enum)):
            raise ValueError(f"EnumConverter requires an Enum subclass, got {enum_type}")

        self.enum_type = enum_type
        self._members = tuple(enum_type.__members__.items())

    def convert(self, text: str) -> EnumT:
        if not text:
            raise ConversionError(
                f"Cannot convert an empty string to {type_name(self.enum_type)}",
                text=text,
                target_type=self.enum_type,
            )

        if (member := self.enum_type.__members__.get(text)) is not None:
            return member

        folded = text.casefold()
        for name, member in self._members:
            if name.casefold() == folded:
                return member

        names = ", ".join(name for name, _ in self._members)
        raise ConversionError(
            f"Invalid {type_name(self.enum_type)} value [{text}], expected one of: "
            f"{names}",
            text=text,
            target_type=self.enum_type,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({type_name(self.enum_type)})"


def resolve_supported_type(converter_cls: type) -> Any | None:
    """
    Determine the type a converter class declares support for.

    The ``supported_type`` class attribute wins when set. Otherwise the class
    hierarchy is searched for a concrete ``TypeConverter[...]`` parameterization.

    :param converter_cls: The converter implementation
    :return: The supported type, or None if it cannot be determined
    """
    if (explicit := getattr(converter_cls, "supported_type", None)) is not None:
        return explicit

    for klass in getattr(converter_cls, "__mro__", ()):
        for base in klass.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)

            if not (isinstance(origin, type) and issubclass(origin, TypeConverter)):
                continue

            args = get_args(base)

            if args and not isinstance(args[0], TypeVar):
                return args[0]

    return None
