from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from confstore import ProviderError, YamlProvider
from tests.utils import build_config, require_pyyaml, write_file


def test_yaml_round_trip(tmp_path: Path):
    require_pyyaml()
    path = tmp_path / "config.yaml"
    provider = YamlProvider.init(path)
    provider.write(build_config())
    first = path.read_text(encoding="utf-8")

    config = provider.read()
    assert config.to_records() == build_config().to_records()
    provider.write(config)
    assert path.read_text(encoding="utf-8") == first


def test_yaml_reads_hand_written_file(tmp_path: Path):
    require_pyyaml()
    path = write_file(
        tmp_path / "config.yml",
        """
- name: default
  description: Main settings
  items:
    - name: enabled
      type: boolean
      value: "on"
    - name: started
      type: datetime
      value: 2018-02-14 08:30:00
    - name: hosts
      type: list
      value: [a, b]
""",
    )
    config = YamlProvider.init(path).read()
    section = config.get_section("default")
    assert section.description == "Main settings"
    assert section.get_value("enabled") is True
    assert section.get_value("started") == datetime(2018, 2, 14, 8, 30)
    assert section.get_value("hosts") == ["a", "b"]


@pytest.mark.parametrize("text", ["", "name: default\n", "- [unclosed\n"])
def test_yaml_invalid_documents(tmp_path: Path, text):
    require_pyyaml()
    path = write_file(tmp_path / "config.yaml", text)
    with pytest.raises(ProviderError):
        YamlProvider.init(path).read()


def test_yaml_extensions():
    assert YamlProvider().get_extensions() == ["yaml", "yml"]
