"""
Unit tests for the converter module in the typeconverters library.
"""

from enum import Enum, IntFlag
from typing import Generic, TypeVar

import pytest

from typeconverters import ConversionError
from typeconverters.converter import (
    EnumConverter,
    PrioritizedConverter,
    TypeConverter,
    resolve_supported_type,
)

T = TypeVar("T")


class Mode(Enum):
    FAST = "fast"
    SAFE = "safe"
    QUICK = "fast"


class Letters(Enum):
    a = 1
    A = 2


class Permission(IntFlag):
    READ = 1
    WRITE = 2


class LowConverter(PrioritizedConverter[int]):
    priority = 1

    def convert(self, text: str) -> int:
        return int(text)


class HighConverter(PrioritizedConverter[int]):
    priority = 5

    def convert(self, text: str) -> int:
        return int(text)


class PlainConverter(TypeConverter[int]):
    def convert(self, text: str) -> int:
        return int(text)


# ===== TypeConverter Tests =====


@pytest.mark.smoke
def test_type_converter_is_abstract():
    with pytest.raises(TypeError):
        TypeConverter()  # type: ignore[abstract]


@pytest.mark.smoke
def test_type_converter_repr():
    assert repr(PlainConverter()) == "PlainConverter()"


# ===== resolve_supported_type Tests =====


@pytest.mark.smoke
def test_resolve_supported_type_from_parameterization():
    assert resolve_supported_type(PlainConverter) is int
    assert resolve_supported_type(LowConverter) is int


@pytest.mark.sanity
def test_resolve_supported_type_from_generic_subclass():
    class Base(TypeConverter[list[str]]):
        def convert(self, text: str) -> list[str]:
            return text.split(",")

    class Derived(Base):
        pass

    assert resolve_supported_type(Base) == list[str]
    assert resolve_supported_type(Derived) == list[str]


@pytest.mark.sanity
def test_resolve_supported_type_prefers_explicit_declaration():
    class Explicit(TypeConverter[object]):
        supported_type = bytes

        def convert(self, text: str) -> object:
            return text.encode()

    assert resolve_supported_type(Explicit) is bytes


@pytest.mark.sanity
def test_resolve_supported_type_unresolvable():
    class StillGeneric(TypeConverter[T], Generic[T]):
        def convert(self, text: str) -> T:
            raise NotImplementedError

    class Unrelated:
        pass

    assert resolve_supported_type(StillGeneric) is None
    assert resolve_supported_type(Unrelated) is None
    assert resolve_supported_type(PrioritizedConverter) is None


# ===== PrioritizedConverter Tests =====


@pytest.mark.smoke
def test_higher_priority_sorts_first():
    high = HighConverter()
    low = LowConverter()

    assert high < low
    assert not low < high
    assert low > high
    assert sorted([low, high]) == [high, low]


@pytest.mark.sanity
def test_no_ordering_against_plain_converters():
    with pytest.raises(TypeError):
        _ = HighConverter() < PlainConverter()

    with pytest.raises(TypeError):
        _ = PlainConverter() < HighConverter()


@pytest.mark.sanity
def test_prioritized_repr():
    assert repr(HighConverter()) == "HighConverter(priority=5)"


# ===== EnumConverter Tests =====


@pytest.mark.smoke
def test_enum_converter_requires_enum():
    with pytest.raises(ValueError, match="requires an Enum subclass"):
        EnumConverter(int)  # type: ignore[type-var]


@pytest.mark.smoke
@pytest.mark.parametrize(
    ("text", "expected"),
    [("FAST", Mode.FAST), ("safe", Mode.SAFE), ("Safe", Mode.SAFE)],
)
def test_enum_converter_matches_names(text, expected):
    assert EnumConverter(Mode).convert(text) is expected


@pytest.mark.sanity
def test_enum_converter_accepts_aliases():
    assert EnumConverter(Mode).convert("quick") is Mode.FAST


@pytest.mark.sanity
def test_enum_converter_does_not_match_values():
    with pytest.raises(ConversionError) as exc_info:
        EnumConverter(Mode).convert("fastest")

    assert exc_info.value.text == "fastest"
    assert exc_info.value.target_type is Mode
    assert "FAST, SAFE, QUICK" in str(exc_info.value)


@pytest.mark.sanity
def test_enum_converter_prefers_exact_match():
    converter = EnumConverter(Letters)

    assert converter.convert("A") is Letters.A
    assert converter.convert("a") is Letters.a


@pytest.mark.sanity
def test_enum_converter_rejects_empty_text():
    with pytest.raises(ConversionError, match="empty string"):
        EnumConverter(Mode).convert("")


@pytest.mark.regression
def test_enum_converter_supports_flags():
    assert EnumConverter(Permission).convert("write") is Permission.WRITE
