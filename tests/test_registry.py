from __future__ import annotations

from pathlib import Path

import pytest

import confstore.paths as paths
from confstore import (
    JsonProvider,
    LiteralProvider,
    XmlProvider,
    YamlProvider,
    open_config,
    provider_for_path,
    user_provider,
)
from confstore.providers import registered_extensions


def test_registered_extensions():
    assert registered_extensions() == ["json", "py", "xml", "yaml", "yml"]


@pytest.mark.parametrize(
    "filename,provider_cls",
    [
        ("config.json", JsonProvider),
        ("config.JSON", JsonProvider),
        ("config.yml", YamlProvider),
        ("config.yaml", YamlProvider),
        ("config.xml", XmlProvider),
        ("settings.py", LiteralProvider),
    ],
)
def test_provider_for_path(tmp_path: Path, filename, provider_cls):
    provider = provider_for_path(tmp_path / filename)
    assert type(provider) is provider_cls
    assert provider.get_file() == tmp_path / filename


def test_provider_for_path_custom_name(tmp_path: Path):
    assert provider_for_path(tmp_path / "a.json", name="Main").name == "Main"


@pytest.mark.parametrize("filename", ["config.ini", "config"])
def test_provider_for_unknown_suffix(tmp_path: Path, filename):
    with pytest.raises(ValueError):
        provider_for_path(tmp_path / filename)


def test_open_config(sample_json: Path):
    config = open_config(sample_json, ["extra"])
    assert config.section_names() == ["extra"]
    assert isinstance(config.get_provider(), JsonProvider)


def test_user_config_file(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(paths, "_uc", lambda appname: str(tmp_path / "cfg" / appname))
    target = paths.user_config_file("demo")
    assert target == (tmp_path / "cfg" / "demo" / "config.json").resolve()
    assert not target.parent.exists()
    paths.user_config_file("demo", create=True)
    assert target.parent.is_dir()


def test_user_provider(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(paths, "_uc", lambda appname: str(tmp_path / appname))
    provider = user_provider("demo", "settings.yaml")
    assert isinstance(provider, YamlProvider)
    assert provider.get_file() == (tmp_path / "demo" / "settings.yaml").resolve()
    assert not provider.file_exists()


def test_user_config_dir_is_absolute():
    assert paths.user_config_dir("confstore-test").is_absolute()
