from __future__ import annotations

from typing import Any


class ConfigError(Exception):
    """Base class for confstore errors."""


class InvalidValueError(ConfigError, ValueError):
    """Raised when a value can not be coerced into an item's declared type."""

    def __init__(self, item_name: str, value: Any, message: str) -> None:
        super().__init__(message)
        self.item_name = item_name
        self.value = value


class NotFoundError(ConfigError, LookupError):
    """Raised when a required item or section does not exist."""

    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(message or f"unknown config element {name!r}")
        self.name = name


class AddressingConflictError(ConfigError, ValueError):
    """Raised when an element is attached under a key that is not its name."""


class ProviderError(ConfigError):
    """Raised for environment level failures of a config provider."""

    def __init__(self, provider_name: str, message: str | None = None) -> None:
        text = f'"{provider_name}" config provider error.'
        if message:
            text = f"{text} {message}"
        super().__init__(text)
        self.provider_name = provider_name


class ParseError(ProviderError):
    """Raised when external config data is structurally invalid."""

    def __init__(
        self,
        provider_name: str,
        message: str,
        *,
        section_name: str | None = None,
        item_name: str | None = None,
    ) -> None:
        super().__init__(provider_name, f"Configuration parse error. {message}")
        self.section_name = section_name
        self.item_name = item_name


class InvalidOptionError(ProviderError):
    """Raised when a provider option value fails validation."""

    def __init__(self, provider_name: str, option_name: str, message: str | None = None) -> None:
        text = f'Set a new value for option "{option_name}" fails.'
        if message:
            text = f"{text} {message}"
        super().__init__(provider_name, text)
        self.option_name = option_name


class FileAccessError(OSError):
    """Raised when a config file can not be read or written."""

    def __init__(self, path: object, mode: str, reason: str | None = None) -> None:
        message = f"can not {mode} file {str(path)!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path
        self.mode = mode
