"""
Catalogs enumerating the converter implementations available to a registry.

A catalog is consulted once, when a ConverterRegistry bootstraps, and yields
KnownConverter descriptors naming an implementation and the type it declares
support for. PluginConverterCatalog reads the TypeConverter plugin registry
(auto-discovering the built-in converters); StaticConverterCatalog serves an
explicit list, which is handy for applications that want full control and for
tests.
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from typeconverters.converter import TypeConverter, resolve_supported_type
from typeconverters.settings import settings

__all__ = [
    "ConverterCatalog",
    "KnownConverter",
    "PluginConverterCatalog",
    "StaticConverterCatalog",
]


@dataclass(frozen=True)
class KnownConverter:
    """
    A converter implementation together with the type it declares support for.

    :param implementation: The converter class, instantiated without arguments
    :param declared_type: The supported type, None when it could not be determined
    """

    implementation: Any
    declared_type: Any = None

    @classmethod
    def from_implementation(cls, implementation: Any) -> KnownConverter:
        return cls(implementation, resolve_supported_type(implementation))


@runtime_checkable
class ConverterCatalog(Protocol):
    def list_known_converters(self) -> tuple[KnownConverter, ...]:
        """
        :return: The available converters in the order they should be registered
        """
        ...


class StaticConverterCatalog:
    """
    Catalog over an explicit, ordered collection of converter implementations.

    Entries may be converter classes, whose supported type is resolved from their
    declaration, ``(class, declared_type)`` pairs, or KnownConverter instances.

    :param implementations: The converters to list, in registration order
    """

    def __init__(
        self,
        implementations: Iterable[KnownConverter | tuple[Any, Any] | Any] = (),
    ):
        known = []

        for entry in implementations:
            if isinstance(entry, KnownConverter):
                known.append(entry)
            elif isinstance(entry, tuple):
                known.append(KnownConverter(*entry))
            else:
                known.append(KnownConverter.from_implementation(entry))

        self._known = tuple(known)

    def list_known_converters(self) -> tuple[KnownConverter, ...]:
        return self._known


class PluginConverterCatalog:
    """
    Catalog over every converter registered with ``@TypeConverter.register()``.

    The configured plugin modules are imported first so their registrations run;
    listing the TypeConverter registry then auto-discovers the built-in
    converters in ``typeconverters.converters``.

    :param plugin_modules: Modules to import before listing. Defaults to
        ``settings.registry.plugin_modules``
    """

    def __init__(self, plugin_modules: Iterable[str] | None = None):
        self.plugin_modules = tuple(
            plugin_modules
            if plugin_modules is not None
            else settings.registry.plugin_modules
        )

    def list_known_converters(self) -> tuple[KnownConverter, ...]:
        for module_name in self.plugin_modules:
            logger.debug(f"Importing converter plugin module {module_name}")
            importlib.import_module(module_name)

        return tuple(
            KnownConverter.from_implementation(implementation)
            for implementation in TypeConverter.registered_objects()
        )
