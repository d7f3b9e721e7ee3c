from __future__ import annotations

import os
from collections.abc import Collection

from .configuration import ADDRESS_SEPARATOR, Configuration, parse_address
from .errors import (
    AddressingConflictError,
    ConfigError,
    FileAccessError,
    InvalidOptionError,
    InvalidValueError,
    NotFoundError,
    ParseError,
    ProviderError,
)
from .item import ConfigItem
from .paths import user_config_file
from .providers import (
    FileProvider,
    JsonProvider,
    LiteralProvider,
    XmlProvider,
    YamlProvider,
    provider_for_path,
)
from .section import ConfigSection


def open_config(
    path: str | os.PathLike[str],
    section_names: Collection[str] | None = None,
) -> Configuration:
    """Read the configuration stored at *path* with the matching provider."""
    return provider_for_path(path).read(section_names)


def user_provider(app_name: str, filename: str = "config.json") -> FileProvider:
    """Return a provider for the per-user config file of *app_name*."""
    return provider_for_path(user_config_file(app_name, filename, create=True))


__all__ = [
    "ADDRESS_SEPARATOR",
    "AddressingConflictError",
    "ConfigError",
    "ConfigItem",
    "ConfigSection",
    "Configuration",
    "FileAccessError",
    "FileProvider",
    "InvalidOptionError",
    "InvalidValueError",
    "JsonProvider",
    "LiteralProvider",
    "NotFoundError",
    "ParseError",
    "ProviderError",
    "XmlProvider",
    "YamlProvider",
    "open_config",
    "parse_address",
    "provider_for_path",
    "user_provider",
]
