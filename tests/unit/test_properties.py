"""
Unit tests for the properties module in the typeconverters library.
"""

from datetime import timedelta
from unittest import mock

import pytest

from typeconverters import (
    ConverterRegistry,
    PropertiesUtil,
    extract_subset,
    partition_on_common_prefixes,
)


@pytest.fixture(scope="module")
def registry():
    return ConverterRegistry(alias_primitive_types=False)


# ===== extract_subset Tests =====


@pytest.mark.smoke
def test_extract_subset_moves_matching_keys():
    props = {"a": "x", "a.1": "one", "a.2": "two", "ab.3": "three", "b.1": "uno"}

    subset = extract_subset(props, "a")

    assert subset == {"1": "one", "2": "two"}
    assert props == {"a": "x", "ab.3": "three", "b.1": "uno"}


@pytest.mark.sanity
def test_extract_subset_accepts_trailing_dot():
    props = {"appender.console.level": "DEBUG", "appender.file.level": "INFO"}

    subset = extract_subset(props, "appender.")

    assert subset == {"console.level": "DEBUG", "file.level": "INFO"}
    assert props == {}


@pytest.mark.sanity
def test_extract_subset_empty_prefix():
    props = {"a.1": "one"}

    assert extract_subset(props, "") == {}
    assert props == {"a.1": "one"}


@pytest.mark.sanity
def test_extract_subset_ignores_non_string_entries():
    props = {"a.1": 1, "a.2": "two", 3: "three"}

    assert extract_subset(props, "a") == {"2": "two"}
    assert props == {"a.1": 1, 3: "three"}


# ===== partition_on_common_prefixes Tests =====


@pytest.mark.smoke
def test_partition_on_common_prefixes():
    props = {
        "root": "ignored",
        "console.type": "Console",
        "console.level": "DEBUG",
        "file.type": "File",
        "file.layout.pattern": "%m%n",
        "rolling.type": "RollingFile",
        "socket.host": "localhost",
    }

    parts = partition_on_common_prefixes(props)

    assert parts == {
        "console": {"type": "Console", "level": "DEBUG"},
        "file": {"type": "File", "layout.pattern": "%m%n"},
        "rolling": {"type": "RollingFile"},
        "socket": {"host": "localhost"},
    }
    assert "root" in props


# ===== PropertiesUtil Tests =====


@pytest.mark.smoke
def test_get_string_property():
    util = PropertiesUtil({"name": "app", "count": 3}, registry=mock.MagicMock())

    assert util.get_string_property("name") == "app"
    assert util.get_string_property("count") is None
    assert util.get_string_property("missing", "fallback") == "fallback"


@pytest.mark.smoke
def test_get_property_converts_values(registry):
    util = PropertiesUtil(
        {"retries": "3", "timeout": "250ms", "enabled": "on"}, registry=registry
    )

    assert util.get_property("retries", int) == 3
    assert util.get_property("timeout", timedelta) == timedelta(milliseconds=250)
    assert util.get_property("enabled", bool) is True


@pytest.mark.sanity
def test_get_property_uses_default(registry):
    util = PropertiesUtil({"retries": "many"}, registry=registry)

    assert util.get_property("retries", int, 5) == 5
    assert util.get_property("timeout", timedelta, "5s") == timedelta(seconds=5)
    assert util.get_property("timeout", timedelta) is None


@pytest.mark.smoke
@pytest.mark.parametrize(
    ("properties", "expected"),
    [
        ({"charset": "ascii"}, "ascii"),
        ({"charset": "UTF8"}, "utf-8"),
        ({}, "utf-8"),
        ({"charset": "klingon-8"}, "utf-8"),
    ],
)
def test_get_charset_property(registry, properties, expected):
    util = PropertiesUtil(properties, registry=registry)

    assert util.get_charset_property("charset") == expected


@pytest.mark.sanity
def test_get_charset_property_logs_unknown_charset(registry):
    util = PropertiesUtil({"charset": "klingon-8"}, registry=registry)

    with (
        mock.patch("typeconverters.properties.logger") as mock_logger,
        mock.patch("typeconverters.registry.logger") as mock_registry_logger,
    ):
        assert util.get_charset_property("charset", "latin-1") == "latin-1"

    mock_logger.warning.assert_called_once()
    mock_registry_logger.warning.assert_not_called()


@pytest.mark.sanity
def test_default_registry_created():
    with mock.patch("typeconverters.properties.ConverterRegistry") as mock_registry:
        util = PropertiesUtil({})

    assert util.registry is mock_registry.return_value
