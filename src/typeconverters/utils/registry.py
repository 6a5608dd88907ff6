"""
Named plugin registry with optional package auto-discovery.

Classes that mix in RegistryMixin keep a name-keyed table of the objects
registered through their ``register`` decorator. With auto-discovery enabled,
the first query imports every module of ``auto_package`` so that decorated
plugins defined there are registered before the table is read. Registration
order is preserved, which makes the table usable as an ordered plugin catalog.
"""

from __future__ import annotations

from typing import Callable, ClassVar, Generic, TypeVar, cast

from typeconverters.utils.auto_importer import AutoImporterMixin

__all__ = ["RegisterT", "RegistryMixin", "RegistryObjT"]


RegistryObjT = TypeVar("RegistryObjT")
"""Generic type variable for objects managed by the registry system."""
RegisterT = TypeVar("RegisterT")
"""Generic type variable for the args and return values within the registry."""


class RegistryMixin(Generic[RegistryObjT], AutoImporterMixin):
    """
    Generic mixin for creating named plugin registries with optional auto-discovery.

    Example:
    ::
        class BaseConverter(RegistryMixin):
            pass

        @BaseConverter.register()
        class IntegerConverter(BaseConverter):
            pass

        @BaseConverter.register(["bool", "boolean"])
        class BooleanConverter(BaseConverter):
            pass

        plugins = BaseConverter.registered_objects()

    Example with auto-discovery:
    ::
        class BaseConverter(RegistryMixin):
            registry_auto_discovery = True
            auto_package = "mypackage.converters"

        # imports mypackage.converters.* before reading the registry
        plugins = BaseConverter.registered_objects()

    :cvar registry: Dictionary mapping names to registered objects
    :cvar registry_auto_discovery: Enable automatic package-based discovery
    :cvar registry_populated: Track whether auto-discovery has completed
    """

    registry: ClassVar[dict[str, RegistryObjT] | None] = None  # type: ignore[misc]
    registry_auto_discovery: ClassVar[bool] = False
    registry_populated: ClassVar[bool] = False

    @classmethod
    def register(
        cls, name: str | list[str] | None = None
    ) -> Callable[[RegisterT], RegisterT]:
        """
        Decorator for registering objects with the registry.

        :param name: Optional name(s) to register the object under.
            If None, uses the object's __name__ attribute
        :return: Decorator function that registers the decorated object
        """

        def _decorator(obj: RegisterT) -> RegisterT:
            cls.register_decorator(obj, name=name)
            return obj

        return _decorator

    @classmethod
    def register_decorator(
        cls, obj: RegisterT, name: str | list[str] | None = None
    ) -> RegisterT:
        """
        Register an object directly with the registry.

        :param obj: The object to register
        :param name: Optional name(s) to register the object under.
            If None, uses the object's __name__ attribute
        :return: The registered object
        :raises ValueError: If the name is already taken or is not a string
        """
        if name is None:
            name = obj.__name__ if hasattr(obj, "__name__") else str(obj)
        elif not isinstance(name, (str, list)):
            raise ValueError(
                "RegistryMixin.register_decorator name must be a string or "
                f"a list of strings. Got {name}."
            )

        if cls.registry is None:
            cls.registry = {}

        names = [name] if isinstance(name, str) else list(name)

        for register_name in names:
            if not isinstance(register_name, str):
                raise ValueError(
                    "RegistryMixin.register_decorator name must be a string or "
                    f"a list of strings. Got {register_name}."
                )

            if register_name in cls.registry:
                raise ValueError(
                    f"RegistryMixin.register_decorator cannot register {obj} under "
                    f"the name {register_name} because it is already registered "
                    f"for {cls.registry[register_name]}."
                )

            cls.registry[register_name] = cast("RegistryObjT", obj)

        return obj

    @classmethod
    def auto_populate_registry(cls) -> bool:
        """
        Import and register all modules from the auto_package.

        :return: True if registry was populated, False if already populated
        :raises ValueError: If called when registry_auto_discovery is False
        """
        if not cls.registry_auto_discovery:
            raise ValueError(
                "RegistryMixin.auto_populate_registry() cannot be called "
                "because registry_auto_discovery is set to False. "
                "Set registry_auto_discovery to True to enable auto-discovery."
            )

        if cls.registry_populated:
            return False

        cls.auto_import_package_modules()
        cls.registry_populated = True

        return True

    @classmethod
    def registered_objects(cls) -> tuple[RegistryObjT, ...]:
        """
        Get all registered objects in registration order.

        An object registered under several names is listed once, at the position
        of its first name.

        :return: Tuple of all registered objects including auto-discovered ones
        :raises ValueError: If called before any objects have been registered
        """
        if cls.registry_auto_discovery:
            cls.auto_populate_registry()

        if cls.registry is None:
            raise ValueError(
                "RegistryMixin.registered_objects() must be called after "
                "registering objects with RegistryMixin.register()."
            )

        unique: dict[int, RegistryObjT] = {}
        for obj in cls.registry.values():
            unique.setdefault(id(obj), obj)

        return tuple(unique.values())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """
        Check if an object is registered under the given name.
        It matches first by exact name, then by str.lower().

        :param name: The name to check for registration.
        :return: True if the object is registered, False otherwise.
        """
        return cls.get_registered_object(name) is not None

    @classmethod
    def get_registered_object(cls, name: str) -> RegistryObjT | None:
        """
        Get a registered object by its name. It matches first by exact name,
        then by str.lower().

        :param name: The name of the registered object.
        :return: The registered object if found, None otherwise.
        """
        if cls.registry is None:
            return None

        if name in cls.registry:
            return cls.registry[name]

        lower_key_map = {key.lower(): key for key in cls.registry}

        return (
            cls.registry[lower_key_map[name.lower()]]
            if name.lower() in lower_key_map
            else None
        )
