from __future__ import annotations

import pytest

from confstore import (
    AddressingConflictError,
    ConfigItem,
    ConfigSection,
    Configuration,
    NotFoundError,
    parse_address,
)
from tests.utils import build_config


@pytest.mark.parametrize(
    "key,expected",
    [
        ("default", ("default", None)),
        ("default::foo", ("default", "foo")),
        ("a::b::c", ("a", "b::c")),
        ("::foo", ("", "foo")),
        ("default::", ("default", "")),
    ],
)
def test_parse_address(key, expected):
    assert parse_address(key) == expected


def test_constructor_rejects_foreign_objects():
    with pytest.raises(TypeError):
        Configuration(sections=[ConfigSection("ok"), "nope"])


def test_lookup():
    config = build_config()
    assert config.section_names() == ["default", "extra"]
    assert config.has_section("default")
    assert not config.has_section("missing")
    assert config.has_item("default", "foo")
    assert not config.has_item("default", "missing")
    assert not config.has_item("missing", "foo")
    assert config.get_value("default", "bar") == 1234
    assert config.get_value("missing", "bar") is None
    assert config.get_item("extra", "missing") is None
    assert config.get_provider() is None
    assert len(config) == 2


def test_composite_keys():
    config = build_config()
    assert "default" in config
    assert "default::foo" in config
    assert "default::nope" not in config
    assert 42 not in config
    assert isinstance(config["default"], ConfigSection)
    assert config["default::bar"].get_value() == 1234
    with pytest.raises(NotFoundError):
        config["missing"]
    with pytest.raises(NotFoundError):
        config["default::missing"]


def test_set_value_through_key():
    config = build_config()
    config.set_is_changed(False)
    config["default::bar"] = "99"
    assert config.get_value("default", "bar") == 99
    assert config.is_changed()
    with pytest.raises(NotFoundError):
        config["default::missing"] = 1
    with pytest.raises(NotFoundError):
        config["missing::bar"] = 1
    with pytest.raises(AddressingConflictError):
        config["default"] = 1


def test_assign_section_by_key():
    config = Configuration()
    section = ConfigSection("network")
    config["network"] = section
    assert config.get_section("network") is section
    with pytest.raises(AddressingConflictError):
        config["other"] = ConfigSection("network")
    with pytest.raises(AddressingConflictError):
        config["network::port"] = ConfigSection("network")


def test_assign_item_by_key():
    config = Configuration()
    item = ConfigItem.create(ConfigSection("network", "Remote access"), "port", "int", 80)
    with pytest.raises(AddressingConflictError):
        config["network::host"] = item
    config["network::port"] = item
    section = config.get_section("network")
    assert section is not None
    assert section.description == "Remote access"
    assert config.get_item("network", "port") is item
    assert item.get_parent() is section


def test_set_item_joins_existing_section():
    config = build_config()
    config.set_is_changed(False)
    item = ConfigItem.create(ConfigSection("default"), "added", "string", "x")
    config.set_item(item)
    assert config.get_section("default").item_names()[-1] == "added"
    assert config.is_changed()
    assert config.section_names() == ["default", "extra"]


def test_set_item_without_named_parent():
    item = ConfigItem(ConfigSection(""), "orphan")
    with pytest.raises(AddressingConflictError):
        Configuration().set_item(item)


def test_remove():
    config = build_config()
    config.set_is_changed(False)
    config.remove_section("missing")
    config.remove_item("missing", "foo")
    assert not config.is_changed()

    config.remove_item("default", "foo")
    assert not config.has_item("default", "foo")
    assert config.is_changed()

    del config["extra::tags"]
    assert not config.has_item("extra", "tags")
    del config["extra"]
    assert config.section_names() == ["default"]
    with pytest.raises(NotFoundError):
        del config["extra"]
    with pytest.raises(NotFoundError):
        del config["default::foo"]


def test_flag_cascade():
    config = build_config()
    assert not config.is_changed()
    config.set_is_changed(False)
    assert not config.is_changed()
    assert not any(section.is_changed() for section in config)

    config.get_item("extra", "ratio").set_value(3)
    assert config.is_changed()
    assert config.get_section("extra").is_changed()
    assert not config.get_section("default").is_changed()

    config.set_is_changed(False)
    config.set_is_changed(True)
    assert config.is_changed()
    assert not config.get_section("extra").is_changed()


def test_iteration_and_records():
    config = build_config()
    assert [section.name for section in config] == ["default", "extra"]
    records = config.to_records()
    assert records[0]["items"][0] == {
        "name": "foo",
        "description": "A optional item description…",
        "type": "bool",
        "nullable": False,
        "value": False,
    }


def test_set_item_creates_missing_section():
    config = Configuration()
    item = ConfigItem.create(ConfigSection("fresh", "New"), "flag", "bool", "yes")
    config.set_item(item)
    assert config.section_names() == ["fresh"]
    assert config.get_value("fresh", "flag") is True
