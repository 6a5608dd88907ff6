"""
Helpers for reading typed values out of flat, dotted configuration properties.

Properties are plain string mappings such as the ones produced by ``.properties``
files or environment exports (``appender.console.level = DEBUG``). The module
functions split them into per-component sections; PropertiesUtil reads single
values through a ConverterRegistry.
"""

from __future__ import annotations

import codecs
from collections.abc import Mapping, MutableMapping
from typing import Any

from loguru import logger

from typeconverters.exceptions import ConversionError
from typeconverters.registry import ConverterRegistry

__all__ = ["PropertiesUtil", "extract_subset", "partition_on_common_prefixes"]


def _string_items(properties: Mapping[Any, Any]) -> list[tuple[str, str]]:
    return [
        (key, value)
        for key, value in properties.items()
        if isinstance(key, str) and isinstance(value, str)
    ]


def extract_subset(properties: MutableMapping[Any, Any], prefix: str) -> dict[str, str]:
    """
    Move every property below the prefix into a new mapping.

    A ``.`` is appended to the prefix unless it already ends with one. Matching
    keys are removed from ``properties`` and stored in the result with the prefix
    stripped; the bare prefix key itself is left in place.

    Example:
    ::
        props = {"a": "x", "a.1": "1", "a.2": "2", "b.1": "1"}
        extract_subset(props, "a")  # {"1": "1", "2": "2"}
        props  # {"a": "x", "b.1": "1"}

    :param properties: The properties to extract from, modified in place
    :param prefix: The prefix to extract
    :return: The extracted properties keyed by the remainder of their names
    """
    subset: dict[str, str] = {}

    if not prefix:
        return subset

    prefix_to_match = prefix if prefix.endswith(".") else f"{prefix}."

    for key, value in _string_items(properties):
        if key.startswith(prefix_to_match):
            subset[key[len(prefix_to_match) :]] = value
            del properties[key]

    return subset


def partition_on_common_prefixes(
    properties: Mapping[Any, Any],
) -> dict[str, dict[str, str]]:
    """
    Group properties by the part of their name before the first ``.``.

    Keys without a ``.`` are not part of any group and are ignored.

    :param properties: The properties to partition, left unchanged
    :return: Mapping of prefix to the properties below it, prefix stripped
    """
    parts: dict[str, dict[str, str]] = {}

    for key, value in _string_items(properties):
        prefix, separator, remainder = key.partition(".")

        if separator:
            parts.setdefault(prefix, {})[remainder] = value

    return parts


class PropertiesUtil:
    """
    Typed read access to a properties mapping.

    :param properties: The properties to read; non-string keys and values are
        ignored
    :param registry: The registry used to convert values. A new registry with
        the default plugin catalog is created when omitted
    """

    def __init__(
        self,
        properties: Mapping[Any, Any],
        registry: ConverterRegistry | None = None,
    ):
        self.properties = properties
        self.registry = registry if registry is not None else ConverterRegistry()

    def get_string_property(self, name: str, default: str | None = None) -> str | None:
        value = self.properties.get(name)

        return value if isinstance(value, str) else default

    def get_property(self, name: str, target_type: Any, default: Any = None) -> Any:
        """
        Read a property and convert it to the target type.

        :param name: The property name
        :param target_type: The type to convert the property value to
        :param default: Value, or text to convert, used when the property is
            missing or cannot be converted
        :return: The converted value or the default
        """
        return self.registry.convert(
            self.get_string_property(name), target_type, default
        )

    def get_charset_property(self, name: str, default: str = "utf-8") -> str:
        """
        Read a charset name, normalized to the codec's canonical name.

        :param name: The property name
        :param default: Charset name returned when the property is missing or names
            an unknown charset
        :return: The canonical charset name
        """
        value = self.get_string_property(name)

        if value is None:
            return default

        converter = self.registry.find_compatible_converter(codecs.CodecInfo)

        try:
            return converter.convert(value).name
        except ConversionError:
            logger.warning(
                f"Unable to get charset {value} for property {name}, using "
                f"default {default}"
            )
            return default
