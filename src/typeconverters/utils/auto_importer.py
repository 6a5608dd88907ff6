"""
Automatic module importing for package-based plugin discovery.

Provides a mixin that imports every module below one or more packages so that
decorator-based registrations inside those modules run before a registry is
queried. Used by the converter plugin catalog to pick up the built-in
converters without an explicit import list.
"""

from __future__ import annotations

import importlib
import pkgutil
import sys
from typing import ClassVar

from loguru import logger

__all__ = ["AutoImporterMixin"]


class AutoImporterMixin:
    """
    Mixin that imports all modules of the configured package(s) on demand.

    Example:
    ::
        class ConverterPlugins(AutoImporterMixin):
            auto_package = "mypackage.converters"

        ConverterPlugins.auto_import_package_modules()

    :cvar auto_package: Package name or tuple of package names to import from
    :cvar auto_ignore_modules: Fully qualified module names to skip
    :cvar auto_imported_modules: Modules imported by the last discovery run
    """

    auto_package: ClassVar[str | tuple[str, ...] | None] = None
    auto_ignore_modules: ClassVar[tuple[str, ...] | None] = None
    auto_imported_modules: ClassVar[list[str] | None] = None

    @classmethod
    def auto_import_package_modules(cls):
        """
        Import every module found below the configured package(s).

        :raises ValueError: If auto_package is not set on the class
        """
        if not cls.auto_package:
            raise ValueError(
                "The class variable 'auto_package' must be set to the package name "
                "to import modules from."
            )

        cls.auto_imported_modules = []
        packages = (
            cls.auto_package
            if isinstance(cls.auto_package, tuple)
            else (cls.auto_package,)
        )

        for package_name in packages:
            package = importlib.import_module(package_name)

            for _, module_name, is_pkg in pkgutil.walk_packages(
                package.__path__, package.__name__ + "."
            ):
                if (
                    is_pkg
                    or (
                        cls.auto_ignore_modules is not None
                        and module_name in cls.auto_ignore_modules
                    )
                    or module_name in cls.auto_imported_modules
                ):
                    continue

                if module_name in sys.modules:
                    logger.debug(f"Module {module_name} already imported")
                else:
                    logger.debug(f"Importing module {module_name}")
                    importlib.import_module(module_name)

                cls.auto_imported_modules.append(module_name)
