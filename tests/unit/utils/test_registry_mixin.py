"""
Unit tests for the registry module in the typeconverters library.
"""

from unittest import mock

import pytest

from typeconverters.utils.registry import RegistryMixin

# ===== RegistryMixin Tests =====


@pytest.mark.smoke
def test_registry_initialization():
    class TestRegistryClass(RegistryMixin):
        pass

    assert TestRegistryClass.registry is None
    assert TestRegistryClass.registry_auto_discovery is False
    assert TestRegistryClass.registry_populated is False


@pytest.mark.smoke
def test_register_with_name():
    class TestRegistryClass(RegistryMixin):
        pass

    @TestRegistryClass.register("custom_name")
    class TestClass:
        pass

    assert TestRegistryClass.registry is not None
    assert TestRegistryClass.registry["custom_name"] is TestClass


@pytest.mark.smoke
def test_register_without_name():
    class TestRegistryClass(RegistryMixin):
        pass

    @TestRegistryClass.register()
    class TestClass:
        pass

    assert TestRegistryClass.registry == {"TestClass": TestClass}


@pytest.mark.smoke
def test_register_with_multiple_names():
    class TestRegistryClass(RegistryMixin):
        pass

    @TestRegistryClass.register(["bool", "boolean"])
    class TestClass:
        pass

    assert TestRegistryClass.registry == {"bool": TestClass, "boolean": TestClass}
    assert TestRegistryClass.registered_objects() == (TestClass,)


@pytest.mark.smoke
def test_register_decorator_direct():
    class TestRegistryClass(RegistryMixin):
        pass

    class TestClass:
        pass

    assert TestRegistryClass.register_decorator(TestClass) is TestClass
    assert TestRegistryClass.registry == {"TestClass": TestClass}


@pytest.mark.sanity
@pytest.mark.parametrize("name", [123, ["valid", 456]])
def test_register_invalid_name(name):
    class TestRegistryClass(RegistryMixin):
        pass

    class TestClass:
        pass

    with pytest.raises(ValueError) as exc_info:
        TestRegistryClass.register_decorator(TestClass, name=name)

    assert "name must be a string or a list of strings" in str(exc_info.value)


@pytest.mark.sanity
def test_register_duplicate_name():
    class TestRegistryClass(RegistryMixin):
        pass

    @TestRegistryClass.register("test_name")
    class TestClass1:
        pass

    with pytest.raises(ValueError) as exc_info:

        @TestRegistryClass.register("test_name")
        class TestClass2:
            pass

    assert "already registered" in str(exc_info.value)


@pytest.mark.sanity
def test_registered_objects_empty():
    class TestRegistryClass(RegistryMixin):
        pass

    with pytest.raises(ValueError) as exc_info:
        TestRegistryClass.registered_objects()

    assert "must be called after registering objects" in str(exc_info.value)


@pytest.mark.sanity
def test_registered_objects_in_registration_order():
    class TestRegistryClass(RegistryMixin):
        pass

    @TestRegistryClass.register("second_name")
    class TestClass2:
        pass

    @TestRegistryClass.register()
    class TestClass1:
        pass

    @TestRegistryClass.register("a_name")
    class TestClass3:
        pass

    assert TestRegistryClass.registered_objects() == (
        TestClass2,
        TestClass1,
        TestClass3,
    )


@pytest.mark.sanity
def test_get_registered_object():
    class TestRegistryClass(RegistryMixin):
        pass

    assert TestRegistryClass.get_registered_object("missing") is None

    @TestRegistryClass.register("Duration")
    class TestClass:
        pass

    assert TestRegistryClass.get_registered_object("Duration") is TestClass
    assert TestRegistryClass.get_registered_object("duration") is TestClass
    assert TestRegistryClass.is_registered("DURATION")
    assert not TestRegistryClass.is_registered("period")


@pytest.mark.regression
def test_multiple_registries_isolation():
    class Registry1(RegistryMixin):
        pass

    class Registry2(RegistryMixin):
        pass

    @Registry1.register()
    class TestClass1:
        pass

    @Registry2.register()
    class TestClass2:
        pass

    assert Registry1.registry == {"TestClass1": TestClass1}
    assert Registry2.registry == {"TestClass2": TestClass2}


# ===== Auto-Discovery Tests =====


@pytest.mark.smoke
def test_auto_populate_registry():
    class TestAutoRegistry(RegistryMixin):
        registry_auto_discovery = True
        auto_package = "test_package.modules"

    with mock.patch.object(
        TestAutoRegistry, "auto_import_package_modules"
    ) as mock_import:
        assert TestAutoRegistry.auto_populate_registry() is True
        mock_import.assert_called_once()
        assert TestAutoRegistry.registry_populated is True

        assert TestAutoRegistry.auto_populate_registry() is False
        mock_import.assert_called_once()


@pytest.mark.sanity
def test_auto_populate_registry_requires_discovery():
    class TestRegistryClass(RegistryMixin):
        pass

    with pytest.raises(ValueError) as exc_info:
        TestRegistryClass.auto_populate_registry()

    assert "registry_auto_discovery is set to False" in str(exc_info.value)


@pytest.mark.sanity
def test_registered_objects_triggers_discovery():
    class TestAutoRegistry(RegistryMixin):
        registry_auto_discovery = True
        auto_package = "test_package.modules"

    class Discovered:
        pass

    def discover():
        TestAutoRegistry.register_decorator(Discovered)

    with mock.patch.object(
        TestAutoRegistry, "auto_import_package_modules", side_effect=discover
    ):
        assert TestAutoRegistry.registered_objects() == (Discovered,)
        assert TestAutoRegistry.registered_objects() == (Discovered,)
