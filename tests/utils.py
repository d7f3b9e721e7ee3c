from __future__ import annotations

from pathlib import Path

import pytest

from confstore import ConfigItem, ConfigSection, Configuration

# Canonical JSON document: exactly what JsonProvider writes for it.
SAMPLE_JSON = """[
    {
        "name": "default",
        "description": "A optional section description…",
        "items": [
            {
                "name": "foo",
                "description": "A optional item description…",
                "type": "bool",
                "nullable": false,
                "value": false
            },
            {
                "name": "bar",
                "type": "int",
                "nullable": true,
                "value": 1234
            },
            {
                "name": "baz",
                "type": "string",
                "nullable": true,
                "value": null
            }
        ]
    },
    {
        "name": "extra",
        "items": [
            {
                "name": "ratio",
                "type": "float",
                "nullable": false,
                "value": 12.5
            },
            {
                "name": "since",
                "type": "datetime",
                "nullable": false,
                "value": "2018-02-14 08:30:00"
            },
            {
                "name": "tags",
                "type": "array",
                "nullable": false,
                "value": [
                    "Foo",
                    "Bar",
                    "Baz"
                ]
            }
        ]
    }
]
"""


def require_pyyaml():
    try:
        import yaml  # type: ignore  # noqa: F401
    except ModuleNotFoundError:
        pytest.skip("PyYAML not installed")


def require_lxml():
    try:
        import lxml  # type: ignore  # noqa: F401
    except ModuleNotFoundError:
        pytest.skip("lxml not installed")


def build_config() -> Configuration:
    """Return an unsaved configuration mirroring :data:`SAMPLE_JSON`."""

    default = ConfigSection("default", "A optional section description…")
    ConfigItem.create(default, "foo", "bool", False, description="A optional item description…")
    ConfigItem.create(default, "bar", "int", 1234, nullable=True)
    ConfigItem.create(default, "baz", "string", None, nullable=True)
    extra = ConfigSection("extra")
    ConfigItem.create(extra, "ratio", "float", 12.5)
    ConfigItem.create(extra, "since", "datetime", "2018-02-14 08:30:00")
    ConfigItem.create(extra, "tags", "array", ["Foo", "Bar", "Baz"])
    return Configuration(sections=[default, extra])


def write_file(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path
