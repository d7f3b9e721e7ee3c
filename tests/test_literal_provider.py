from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from confstore import LiteralProvider, ParseError, ProviderError
from tests.utils import build_config, write_file


def test_literal_round_trip(tmp_path: Path):
    path = tmp_path / "settings.py"
    provider = LiteralProvider.init(path)
    provider.write(build_config())
    first = path.read_text(encoding="utf-8")
    assert first.startswith("{\n    'default': {\n")
    assert "'value': '2018-02-14 08:30:00'," in first

    config = provider.read()
    assert config.to_records() == build_config().to_records()
    provider.write(config)
    assert path.read_text(encoding="utf-8") == first


def test_literal_list_form(tmp_path: Path):
    path = write_file(
        tmp_path / "settings.py",
        """[
    {
        "name": "default",
        "items": [
            {"name": "since", "type": "DateTime", "value": "14.02.2018"},
            {"name": "limits", "type": "array", "value": {"low": (1, 2)}},
        ],
    },
]
""",
    )
    section = LiteralProvider.init(path).read().get_section("default")
    assert section.get_value("since") == datetime(2018, 2, 14)
    assert section.get_value("limits") == {"low": (1, 2)}


def test_literal_is_never_executed(tmp_path: Path):
    path = write_file(tmp_path / "settings.py", "__import__('os').remove('x')\n")
    with pytest.raises(ProviderError):
        LiteralProvider.init(path).read()


@pytest.mark.parametrize("text", ["42\n", "'text'\n"])
def test_literal_requires_container(tmp_path: Path, text):
    path = write_file(tmp_path / "settings.py", text)
    with pytest.raises(ProviderError):
        LiteralProvider.init(path).read()


def test_literal_keyed_records_must_be_mappings(tmp_path: Path):
    path = write_file(tmp_path / "settings.py", "{'default': ['not', 'a', 'mapping']}\n")
    with pytest.raises(ParseError):
        LiteralProvider.init(path).read()
