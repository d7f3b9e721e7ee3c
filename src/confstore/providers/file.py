from __future__ import annotations

import logging
import os
import re
from abc import abstractmethod
from collections.abc import Collection, Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, ClassVar

from .. import io_helper
from ..coercion import try_bool
from ..configuration import Configuration
from ..errors import (
    FileAccessError,
    InvalidOptionError,
    InvalidValueError,
    ParseError,
    ProviderError,
)
from ..item import ConfigItem
from ..section import ConfigSection
from .base import BaseProvider, OptionSetter

logger = logging.getLogger(__name__)

_EXTENSION_RX = re.compile(r"^[A-Za-z0-9]{1,5}$")


def _extension_of(path: Path) -> str:
    return path.suffix[1:].lower()


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return bool(try_bool(value))
    return bool(value)


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


class FileProvider(BaseProvider):
    """Base class for providers persisting into a single file.

    Subclasses implement :meth:`_load_records` and :meth:`_dump`; reading,
    filtering, record validation and writing are shared so that every
    format behaves the same way.
    """

    default_name: ClassVar[str] = "file"
    default_extensions: ClassVar[tuple[str, ...]] = ()

    def __init__(self, name: str | None = None, extensions: Sequence[str] | None = None) -> None:
        super().__init__(
            name or self.default_name,
            {"file": None, "extensions": list(self.default_extensions)},
        )
        self._file_exists = False
        if extensions is not None:
            self.set_extensions(extensions)

    @classmethod
    def init(
        cls,
        file: str | os.PathLike[str],
        extensions: Sequence[str] | None = None,
        name: str | None = None,
    ) -> FileProvider:
        """Return a provider configured for *file*."""
        provider = cls(name)
        if extensions is not None:
            provider.set_extensions(extensions)
        provider.set_file(file)
        return provider

    # ------------------------------------------------------------- options
    def get_file(self) -> Path | None:
        return self._options["file"]

    def get_extensions(self) -> list[str]:
        return list(self._options["extensions"])

    def file_exists(self) -> bool:
        return self._file_exists

    def set_file(self, file: str | os.PathLike[str]) -> None:
        if not isinstance(file, str | os.PathLike) or str(file) == "":
            raise InvalidOptionError(self.name, "file", "The config file must be a path.")
        path = Path(file)
        if not path.is_file():
            if path.is_dir():
                raise InvalidOptionError(
                    self.name,
                    "file",
                    "Can not set the config file if it points to a directory and not a file!",
                )
            directory = path.parent
            if not directory.is_dir():
                raise InvalidOptionError(
                    self.name,
                    "file",
                    "Can not set the config file if it points to a not existing file "
                    "inside a not existing directory!",
                )
            if not io_helper.is_writable(directory):
                raise InvalidOptionError(
                    self.name,
                    "file",
                    "Can not set the config file if it points to a not writable directory!",
                )
            self._options["file"] = path
            self._valid = True
            self._file_exists = False
            logger.debug("%s provider: file %s (not existing yet)", self.name, path)
            return
        if not io_helper.is_readable(path):
            raise InvalidOptionError(
                self.name, "file", f"The config file {str(path)!r} is not readable!"
            )
        extension = _extension_of(path)
        if extension not in self._options["extensions"]:
            raise InvalidOptionError(
                self.name,
                "file",
                f'The file name extension "{extension}" is not allowed!',
            )
        self._options["file"] = path
        self._valid = True
        self._file_exists = True
        logger.debug("%s provider: file %s", self.name, path)

    def set_extensions(self, extensions: Iterable[str]) -> None:
        if isinstance(extensions, str) or not isinstance(extensions, Iterable):
            raise InvalidOptionError(
                self.name, "extensions", "The extensions must be a list of strings!"
            )
        cleaned: list[str] = []
        for extension in extensions:
            if not isinstance(extension, str) or not _EXTENSION_RX.fullmatch(
                extension.lstrip(".")
            ):
                raise InvalidOptionError(
                    self.name,
                    "extensions",
                    "Every extension must be a string of 1-5 alphanumeric chars!",
                )
            cleaned.append(extension.lstrip(".").lower())
        if not cleaned:
            raise InvalidOptionError(
                self.name, "extensions", "Can not set an empty list of extensions!"
            )
        current = self._options["file"]
        if current is not None and _extension_of(current) not in cleaned:
            raise InvalidOptionError(
                self.name,
                "extensions",
                "The defined file does not use one of the allowed extensions!",
            )
        self._options["extensions"] = cleaned

    option_setters: ClassVar[Mapping[str, OptionSetter]] = {
        "file": set_file,
        "extensions": set_extensions,
    }

    # ------------------------------------------------------------- reading
    def read(self, section_names: Collection[str] | None = None) -> Configuration:
        config = Configuration(self)
        path = self.get_file()
        if path is None or not path.is_file():
            logger.debug("%s provider: no source to read", self.name)
            return config
        self._file_exists = True
        if isinstance(section_names, str):
            section_names = [section_names]
        wanted = set(section_names) if section_names else None
        try:
            text = io_helper.read_text(path)
        except FileAccessError as exc:
            raise ProviderError(
                self.name, f"Unable to load config data from file {str(path)!r}!"
            ) from exc
        records = self._load_records(text)
        self._build(config, records, wanted)
        config.set_is_changed(False)
        logger.debug("%s provider: read %d section(s) from %s", self.name, len(config), path)
        return config

    @abstractmethod
    def _load_records(self, text: str) -> Iterable[Any]:
        """Parse *text* into section records (mappings with ``name`` and ``items``)."""

    def _build(
        self,
        config: Configuration,
        records: Iterable[Any],
        wanted: set[str] | None,
    ) -> None:
        for record in records:
            if not isinstance(record, Mapping):
                raise ParseError(self.name, "Invalid config section, a section must be a mapping.")
            section_name = record.get("name")
            if section_name is None or section_name == "":
                raise ParseError(self.name, "Invalid config section, a section must have a name.")
            section_name = str(section_name)
            if wanted is not None and section_name not in wanted:
                logger.debug("%s provider: skipping section %r", self.name, section_name)
                continue
            section = ConfigSection(section_name, _optional_text(record.get("description")))
            items = record.get("items")
            if items is None:
                items = []
            if not isinstance(items, list | tuple):
                raise ParseError(
                    self.name,
                    f'Invalid items of config section "{section_name}", a list is required.',
                    section_name=section_name,
                )
            for item_record in items:
                section.set_item(self._build_item(section, item_record))
            config.set_section(section)

    def _build_item(self, section: ConfigSection, record: Any) -> ConfigItem:
        section_name = section.name
        if not isinstance(record, Mapping):
            raise ParseError(
                self.name,
                f'Invalid config item in section "{section_name}", an item must be a mapping.',
                section_name=section_name,
            )
        item_name = record.get("name")
        if item_name is None or item_name == "":
            raise ParseError(
                self.name,
                f'Invalid config item in section "{section_name}", missing a item name.',
                section_name=section_name,
            )
        item_name = str(item_name)
        nullable = _flag(record.get("nullable", False))
        item = ConfigItem(section, item_name, _optional_text(record.get("description")))
        item.set_is_nullable(nullable)
        item.set_type(str(record.get("type") or "string"))
        value = record.get("value")
        if value is None:
            if not nullable:
                raise ParseError(
                    self.name,
                    f'Invalid config item "{item_name}" in section "{section_name}", '
                    "null is not a allowed value.",
                    section_name=section_name,
                    item_name=item_name,
                )
            return item
        try:
            item.set_value(value)
        except InvalidValueError as exc:
            raise ParseError(
                self.name,
                f'Invalid config item "{item_name}" value in section "{section_name}".',
                section_name=section_name,
                item_name=item_name,
            ) from exc
        return item

    # ------------------------------------------------------------- writing
    def write(self, config: Configuration) -> None:
        path = self.get_file()
        if path is None:
            raise ProviderError(self.name, "Can not write config data if no file is defined!")
        if path.exists() and not io_helper.is_writable(path):
            raise ProviderError(
                self.name,
                f"Can not write to config file {str(path)!r} if the file is not writable!",
            )
        text = self._dump(config)
        try:
            io_helper.write_text(path, text)
        except FileAccessError as exc:
            raise ProviderError(self.name, f"Can not write to config file {str(path)!r}!") from exc
        self._file_exists = True
        config.set_is_changed(False)
        logger.debug("%s provider: wrote %d section(s) to %s", self.name, len(config), path)

    @abstractmethod
    def _dump(self, config: Configuration) -> str:
        """Render *config* into the text stored on disk."""

    # ------------------------------------------------------------- helpers
    @staticmethod
    def section_record(section: ConfigSection, items: list[dict[str, Any]]) -> dict[str, Any]:
        record: dict[str, Any] = {"name": section.name}
        if section.description is not None:
            record["description"] = section.description
        record["items"] = items
        return record

    @staticmethod
    def item_record(item: ConfigItem, value: Any) -> dict[str, Any]:
        record: dict[str, Any] = {"name": item.name}
        if item.description is not None:
            record["description"] = item.description
        record["type"] = item.get_type()
        record["nullable"] = item.is_nullable()
        record["value"] = value
        return record
