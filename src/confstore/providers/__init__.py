"""Provider registry and factory."""
from __future__ import annotations

import os
from pathlib import Path

from .base import BaseProvider
from .file import FileProvider

_REGISTRY: dict[str, type[FileProvider]] = {}


def register_provider(provider: type[FileProvider]) -> type[FileProvider]:
    """Register a provider class and return it for decorator use."""
    for extension in provider.default_extensions:
        _REGISTRY[extension.lower()] = provider
    return provider


def registered_extensions() -> list[str]:
    return sorted(_REGISTRY)


def provider_for_path(path: str | os.PathLike[str], name: str | None = None) -> FileProvider:
    """Return a provider configured for *path*, chosen by its file suffix."""
    path = Path(path)
    provider_cls = _REGISTRY.get(path.suffix[1:].lower())
    if provider_cls is None:
        raise ValueError(f"No config provider for {path.suffix or path.name!r}")
    return provider_cls.init(path, name=name)


# register default providers
from .json_provider import JsonProvider  # noqa: E402
from .literal_provider import LiteralProvider  # noqa: E402
from .xml_provider import XmlProvider  # noqa: E402
from .yaml_provider import YamlProvider  # noqa: E402

__all__ = [
    "BaseProvider",
    "FileProvider",
    "JsonProvider",
    "LiteralProvider",
    "XmlProvider",
    "YamlProvider",
    "provider_for_path",
    "register_provider",
    "registered_extensions",
]
