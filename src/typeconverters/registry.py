"""
Registry resolving target types to the converters able to produce them.

ConverterRegistry is populated once from a converter catalog, extended with
numpy scalar aliases of the builtin types, and grows on demand: enum converters
are built the first time an enum type is requested and assignment-compatible
fallbacks are cached under the type they were requested for. A registry is an
ordinary object; applications create one at start-up and hand it to whatever
needs to coerce configuration text.

Example:
::
    from typeconverters import ConverterRegistry

    registry = ConverterRegistry()
    registry.find_compatible_converter(int).convert("42")  # 42
    registry.convert("250ms", timedelta)  # timedelta(microseconds=250000)
"""

from __future__ import annotations

import threading
from enum import EnumMeta
from typing import Any

import numpy as np
from loguru import logger

from typeconverters.catalog import ConverterCatalog, PluginConverterCatalog
from typeconverters.converter import EnumConverter, TypeConverter
from typeconverters.exceptions import (
    ConversionError,
    ConverterBootstrapError,
    UnknownTypeConversionError,
)
from typeconverters.settings import settings
from typeconverters.utils import is_assignable, type_name

__all__ = ["PRIMITIVE_TYPE_ALIASES", "ConverterRegistry"]


PRIMITIVE_TYPE_ALIASES: tuple[tuple[type, type], ...] = (
    (bool, np.bool_),
    (int, np.int8),
    (int, np.int16),
    (int, np.int32),
    (int, np.int64),
    (int, np.uint8),
    (int, np.uint16),
    (int, np.uint32),
    (int, np.uint64),
    (float, np.float16),
    (float, np.float32),
    (float, np.float64),
    (complex, np.complex64),
    (complex, np.complex128),
    (str, np.str_),
    (bytes, np.bytes_),
)
"""Builtin types paired with the numpy scalar types that share their converter"""


class ConverterRegistry:
    """
    Thread-safe mapping from target types to converters with lazy resolution.

    Lookups of already resolved types are plain dictionary reads. Every change to
    the mapping, from ``register_converter`` or from caching a lookup, goes
    through one locked read-decide-write step so that concurrent resolutions of
    the same type agree on one converter.

    :param catalog: Source of the converters registered at bootstrap. Defaults to
        a PluginConverterCatalog
    :param alias_primitive_types: Register builtin converters under the matching
        numpy scalar types. Defaults to ``settings.registry.alias_primitive_types``
    """

    def __init__(
        self,
        catalog: ConverterCatalog | None = None,
        *,
        alias_primitive_types: bool | None = None,
    ):
        self.catalog = catalog if catalog is not None else PluginConverterCatalog()
        self.alias_primitive_types = (
            alias_primitive_types
            if alias_primitive_types is not None
            else settings.registry.alias_primitive_types
        )
        self.bootstrap_errors: list[ConverterBootstrapError] = []
        self._converters: dict[Any, TypeConverter] = {}
        # types whose converter was resolved by lookup rather than registered
        self._resolved_types: set[Any] = set()
        self._lock = threading.Lock()

        self.bootstrap()

    def find_compatible_converter(self, target_type: Any) -> TypeConverter:
        """
        Find a converter for the given type, falling back to an assignment-compatible
        converter if none exists for the type itself. A fallback found this way is
        registered for the requested type, so the next lookup is an exact match.
        Enum types get a case-insensitive member name converter on first use.

        Compatible entries are searched in registration order, first among types
        whose values can be assigned to the requested type (a ``str`` converter
        serves ``Sequence``), then among supertypes of the requested type (an
        ``Animal`` converter serves ``Dog``). Only registered converters are
        candidates; types resolved by an earlier lookup are skipped, so the outcome
        never depends on what was looked up before. The first match wins; there is
        no attempt to pick the most specific one. Bare enum bases without members,
        such as ``Enum`` itself, are not given an enum converter.

        :param target_type: The type to find a converter for
        :return: The converter registered for the type
        :raises ValueError: If target_type is None
        :raises UnknownTypeConversionError: If no converter can be found
        """
        if target_type is None:
            raise ValueError("No type was provided to find a converter for")

        if (primary := self._converters.get(target_type)) is not None:
            return primary

        if isinstance(target_type, EnumMeta) and target_type.__members__:
            return self._register(
                target_type, EnumConverter(target_type), resolved=True
            )

        if (compatible := self._find_compatible_entry(target_type)) is not None:
            key, converter = compatible
            logger.debug(
                f"Found compatible {converter!r} registered for "
                f"[{type_name(key)}] to use for type [{type_name(target_type)}]"
            )
            return self._register(target_type, converter, resolved=True)

        raise UnknownTypeConversionError(target_type)

    def register_converter(
        self, target_type: Any, converter: TypeConverter
    ) -> TypeConverter:
        """
        Attempt to register a converter and return the effective converter for the
        type.

        When another converter is already registered, the new one replaces it only
        if it sorts before the existing one (``converter < existing``). Otherwise
        the existing converter is kept and returned; this is not an error.

        :param target_type: The type to register the converter for
        :param converter: The candidate converter
        :return: The converter registered for the type after the attempt
        """
        return self._register(target_type, converter, resolved=False)

    def get_converter(self, target_type: Any) -> TypeConverter | None:
        """
        :param target_type: The type to look up
        :return: The converter registered for exactly this type, without any
            enum or fallback resolution, or None
        """
        return self._converters.get(target_type)

    def is_registered(self, target_type: Any) -> bool:
        return target_type in self._converters

    def registered_types(self) -> tuple[Any, ...]:
        """
        :return: The types with a registered converter, in registration order
        """
        return tuple(self._converters)

    def convert(self, text: str | None, target_type: Any, default: Any = None) -> Any:
        """
        Convert text to the target type, substituting a default on failure.

        A missing text or one the converter rejects yields the default. String
        defaults are converted with the same converter, other defaults are returned
        unchanged. Failing to find a converter is not covered by the default.

        :param text: The text to convert, or None when the value is absent
        :param target_type: The type to convert to
        :param default: Fallback value or text used when conversion is not possible
        :return: The converted value or the default
        :raises ValueError: If target_type is None
        :raises UnknownTypeConversionError: If no converter can be found
        """
        converter = self.find_compatible_converter(target_type)

        if text is None:
            return self._parse_default(converter, default)

        try:
            return converter.convert(text)
        except ConversionError as err:
            logger.warning(
                f"Error while converting string [{text}] to type "
                f"[{type_name(target_type)}]. Using default value [{default}]: {err}"
            )
            return self._parse_default(converter, default)

    def bootstrap(self):
        """
        Register the catalog's converters, then the primitive type aliases.

        Catalog entries that are not TypeConverter classes or whose supported type
        is unknown are skipped. Aliases whose builtin type has no converter are
        recorded in ``bootstrap_errors`` and logged.
        """
        logger.trace("ConverterRegistry initializing")

        for known in self.catalog.list_known_converters():
            implementation = known.implementation

            if not (
                isinstance(implementation, type)
                and issubclass(implementation, TypeConverter)
            ):
                logger.debug(f"Skipping {implementation}, it is not a TypeConverter")
                continue

            if known.declared_type is None:
                logger.warning(
                    f"Skipping {implementation.__name__}, its supported type could "
                    "not be determined"
                )
                continue

            self.register_converter(known.declared_type, implementation())

        if self.alias_primitive_types:
            for known_type, alias_type in PRIMITIVE_TYPE_ALIASES:
                self._register_type_alias(known_type, alias_type)

    def _register(
        self, target_type: Any, converter: TypeConverter, resolved: bool
    ) -> TypeConverter:
        with self._lock:
            existing = self._converters.get(target_type)

            if existing is None:
                self._store(target_type, converter, resolved)
                return converter

            if existing is converter:
                return existing

            try:
                overridable = bool(converter < existing)
            except TypeError:
                overridable = False

            if overridable:
                logger.debug(
                    f"Replacing {existing!r} for type [{type_name(target_type)}] "
                    f"with {converter!r} after comparison"
                )
                self._store(target_type, converter, resolved)
                return converter

        logger.warning(
            f"Ignoring {converter!r} for type [{type_name(target_type)}] that "
            f"conflicts with {existing!r}, since it does not take precedence"
        )
        return existing

    def _store(self, target_type: Any, converter: TypeConverter, resolved: bool):
        self._converters[target_type] = converter

        if resolved:
            self._resolved_types.add(target_type)
        else:
            self._resolved_types.discard(target_type)

    def _find_compatible_entry(
        self, target_type: Any
    ) -> tuple[Any, TypeConverter] | None:
        # only registered converters are candidates, never earlier lookup results
        with self._lock:
            entries = tuple(
                (key, converter)
                for key, converter in self._converters.items()
                if key not in self._resolved_types
            )

        for key, converter in entries:
            if is_assignable(target_type, key):
                return key, converter

        for key, converter in entries:
            if is_assignable(key, target_type):
                return key, converter

        return None

    def _register_type_alias(self, known_type: type, alias_type: type):
        if (converter := self._converters.get(known_type)) is not None:
            self._converters.setdefault(alias_type, converter)
            return

        error = ConverterBootstrapError(
            f"Cannot locate converter for {type_name(known_type)} to alias as "
            f"{type_name(alias_type)}"
        )
        logger.error(str(error))
        self.bootstrap_errors.append(error)

    @staticmethod
    def _parse_default(converter: TypeConverter, default: Any) -> Any:
        if default is None or not isinstance(default, str):
            return default

        try:
            return converter.convert(default)
        except ConversionError as err:
            logger.debug(f"Cannot parse default value [{default}]: {err}")
            return None

    def __contains__(self, target_type: Any) -> bool:
        return self.is_registered(target_type)

    def __len__(self) -> int:
        return len(self._converters)
