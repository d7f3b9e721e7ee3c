from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from .errors import AddressingConflictError, NotFoundError
from .item import ConfigItem
from .section import ConfigSection

if TYPE_CHECKING:  # pragma: no cover
    from .providers.base import BaseProvider

ADDRESS_SEPARATOR = "::"

Address = tuple[str, str | None]


def parse_address(key: str) -> Address:
    """Split a composite key into ``(section_name, item_name)``.

    Only the first separator counts, so ``"a::b::c"`` addresses item
    ``"b::c"`` of section ``"a"``.  Without a separator the whole key is a
    section name and the item part is ``None``.
    """
    section_name, sep, item_name = key.partition(ADDRESS_SEPARATOR)
    if not sep:
        return key, None
    return section_name, item_name


def format_address(section_name: str, item_name: str) -> str:
    return f"{section_name}{ADDRESS_SEPARATOR}{item_name}"


class Configuration:
    """Ordered collection of :class:`ConfigSection` keyed by section name.

    Besides section addressing the configuration understands composite
    ``"section::item"`` keys (see :func:`parse_address`) in its subscript
    operators.
    """

    def __init__(
        self,
        provider: BaseProvider | None = None,
        sections: Iterable[ConfigSection] = (),
    ) -> None:
        self._provider = provider
        self._sections: dict[str, ConfigSection] = {}
        self._changed = False
        for section in sections:
            if not isinstance(section, ConfigSection):
                raise TypeError(
                    f"expected ConfigSection instances, got {type(section).__name__}"
                )
            self._sections[section.name] = section

    def get_provider(self) -> BaseProvider | None:
        return self._provider

    # ------------------------------------------------------------ sections
    def has_section(self, name: str) -> bool:
        return name in self._sections

    def get_section(self, name: str) -> ConfigSection | None:
        return self._sections.get(name)

    def section_names(self) -> list[str]:
        return list(self._sections)

    def set_section(self, section: ConfigSection) -> Configuration:
        self._sections[section.name] = section
        return self

    def remove_section(self, name: str) -> None:
        if self._sections.pop(name, None) is not None:
            self._changed = True

    # --------------------------------------------------------------- items
    def has_item(self, section_name: str, item_name: str) -> bool:
        section = self._sections.get(section_name)
        return section is not None and section.has_item(item_name)

    def get_item(self, section_name: str, item_name: str) -> ConfigItem | None:
        section = self._sections.get(section_name)
        return None if section is None else section.get_item(item_name)

    def get_value(self, section_name: str, item_name: str) -> Any:
        item = self.get_item(section_name, item_name)
        return None if item is None else item.get_value()

    def set_item(self, item: ConfigItem) -> Configuration:
        """Attach *item* to the section named by its parent.

        The owning section is created when it does not exist yet.
        """
        parent = item.get_parent()
        if parent is None or not parent.name:
            raise AddressingConflictError(
                f"Can not set config item {item.name!r} without a named parent section"
            )
        section = self._sections.get(parent.name)
        if section is None:
            section = ConfigSection(parent.name, parent.description)
            self._sections[parent.name] = section
        section.set_item(item)
        self._changed = True
        return self

    def set_value(self, section_name: str, item_name: str, value: Any) -> Configuration:
        section = self._sections.get(section_name)
        if section is None:
            raise NotFoundError(
                section_name,
                f"Can not set value for item {item_name!r} if the owning section "
                f"{section_name!r} does not exist",
            )
        if not section.has_item(item_name):
            raise NotFoundError(
                item_name,
                f"Can not set value for item {item_name!r} in section "
                f"{section_name!r} if the item does not exist",
            )
        section.set_value(item_name, value)
        self._changed = True
        return self

    def remove_item(self, section_name: str, item_name: str) -> None:
        section = self._sections.get(section_name)
        if section is not None:
            section.remove_item(item_name)

    # --------------------------------------------------------- change flag
    def is_changed(self) -> bool:
        if self._changed:
            return True
        return any(section.is_changed() for section in self._sections.values())

    def set_is_changed(self, changed: bool) -> Configuration:
        self._changed = bool(changed)
        if not changed:
            for section in self._sections.values():
                section.set_is_changed(False)
        return self

    # ------------------------------------------------------------- records
    def to_records(self) -> list[dict[str, Any]]:
        return [section.to_record() for section in self._sections.values()]

    # ---------------------------------------------------- mapping protocol
    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        section_name, item_name = parse_address(key)
        if item_name is None:
            return self.has_section(section_name)
        return self.has_item(section_name, item_name)

    def __getitem__(self, key: str) -> ConfigSection | ConfigItem:
        section_name, item_name = parse_address(key)
        if item_name is None:
            section = self.get_section(section_name)
            if section is None:
                raise NotFoundError(section_name, f"no config section {section_name!r}")
            return section
        item = self.get_item(section_name, item_name)
        if item is None:
            raise NotFoundError(key, f"no config item {key!r}")
        return item

    def __setitem__(self, key: str, value: Any) -> None:
        section_name, item_name = parse_address(key)
        if isinstance(value, ConfigSection):
            if item_name is not None or key != value.name:
                raise AddressingConflictError(
                    f"Can not assign config section {value.name!r} with the "
                    f"different name {key!r} to a configuration"
                )
            self.set_section(value)
            return
        if isinstance(value, ConfigItem):
            parent = value.get_parent()
            identifier = format_address(parent.name if parent is not None else "", value.name)
            if key != identifier:
                raise AddressingConflictError(
                    f"Can not assign config item {identifier!r} with the "
                    f"different name {key!r}"
                )
            self.set_item(value)
            return
        if item_name is None:
            raise AddressingConflictError(
                f"Can not set a config value for key {key!r} without an item name "
                f'(use the format "SectionName{ADDRESS_SEPARATOR}ItemName")'
            )
        self.set_value(section_name, item_name, value)

    def __delitem__(self, key: str) -> None:
        if key not in self:
            raise NotFoundError(key, f"no config element {key!r}")
        section_name, item_name = parse_address(key)
        if item_name is None:
            self.remove_section(section_name)
        else:
            self.remove_item(section_name, item_name)

    def __iter__(self) -> Iterator[ConfigSection]:
        return iter(list(self._sections.values()))

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return f"Configuration(sections={list(self._sections)!r})"
