"""
typeconverters: Text to typed value conversion for configuration loading

typeconverters resolves a requested type to a converter that can build a value
of that type from text, so configuration loaders can coerce string-valued fields
into whatever types they declare without knowing which converter applies.

The library offers:
- A ConverterRegistry that resolves types by exact match, synthesizes converters
  for enums, falls back to assignment-compatible converters and caches what it
  resolves, with deterministic conflict resolution between converters.
- A TypeConverter plugin base with auto-discovered built-in converters for the
  builtin types and common standard library value types.
- Helpers for reading typed values from flat, dotted configuration properties.
"""

from .catalog import (
    ConverterCatalog,
    KnownConverter,
    PluginConverterCatalog,
    StaticConverterCatalog,
)
from .converter import (
    EnumConverter,
    PrioritizedConverter,
    TypeConverter,
    resolve_supported_type,
)
from .exceptions import (
    ConversionError,
    ConverterBootstrapError,
    UnknownTypeConversionError,
)
from .properties import PropertiesUtil, extract_subset, partition_on_common_prefixes
from .registry import PRIMITIVE_TYPE_ALIASES, ConverterRegistry

__all__ = [
    "PRIMITIVE_TYPE_ALIASES",
    "ConversionError",
    "ConverterBootstrapError",
    "ConverterCatalog",
    "ConverterRegistry",
    "EnumConverter",
    "KnownConverter",
    "PluginConverterCatalog",
    "PrioritizedConverter",
    "PropertiesUtil",
    "StaticConverterCatalog",
    "TypeConverter",
    "UnknownTypeConversionError",
    "extract_subset",
    "partition_on_common_prefixes",
    "resolve_supported_type",
]
