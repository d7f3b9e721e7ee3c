from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .errors import AddressingConflictError, NotFoundError
from .item import ConfigItem, _clean_description


class ConfigSection:
    """Ordered collection of :class:`ConfigItem` keyed by item name."""

    def __init__(self, name: str, description: str | None = None) -> None:
        self._name = name
        self._description = _clean_description(description)
        self._items: dict[str, ConfigItem] = {}
        self._changed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    # --------------------------------------------------------------- items
    def has_item(self, name: str) -> bool:
        return name in self._items

    def get_item(self, name: str) -> ConfigItem | None:
        return self._items.get(name)

    def get_value(self, name: str) -> Any:
        item = self._items.get(name)
        return None if item is None else item.get_value()

    def item_names(self) -> list[str]:
        return list(self._items)

    def set_item(self, item: ConfigItem) -> ConfigSection:
        """Attach *item* to this section, replacing one with the same name."""
        item.set_parent(self)
        self._items[item.name] = item
        self._changed = True
        return self

    def set_value(self, name: str, value: Any) -> ConfigSection:
        item = self._items.get(name)
        if item is None:
            raise NotFoundError(
                name,
                f"There is no config item {name!r} within section {self._name!r}",
            )
        item.set_value(value)
        return self

    def remove_item(self, name: str) -> None:
        if self._items.pop(name, None) is not None:
            self._changed = True

    # --------------------------------------------------------- change flag
    def is_changed(self) -> bool:
        if self._changed:
            return True
        return any(item.is_changed() for item in self._items.values())

    def set_is_changed(self, changed: bool) -> ConfigSection:
        """Set the section flag; clearing it also clears every item flag."""
        self._changed = bool(changed)
        if not changed:
            for item in self._items.values():
                item.set_is_changed(False)
        return self

    # ------------------------------------------------------------- records
    def to_record(self) -> dict[str, Any]:
        return {
            "name": self._name,
            "description": self._description,
            "items": [item.to_record() for item in self._items.values()],
        }

    # ---------------------------------------------------- mapping protocol
    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __getitem__(self, name: str) -> ConfigItem:
        try:
            return self._items[name]
        except KeyError as exc:
            raise NotFoundError(name, f"no item {name!r} in section {self._name!r}") from exc

    def __setitem__(self, name: str, value: Any) -> None:
        if not isinstance(value, ConfigItem):
            self.set_value(name, value)
            return
        if name != value.name:
            raise AddressingConflictError(
                f"Can not assign config item {value.name!r} with the different "
                f"name {name!r} to section {self._name!r}"
            )
        self.set_item(value)

    def __delitem__(self, name: str) -> None:
        if name not in self._items:
            raise NotFoundError(name, f"no item {name!r} in section {self._name!r}")
        self.remove_item(name)

    def __iter__(self) -> Iterator[ConfigItem]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ConfigSection(name={self._name!r}, items={list(self._items)!r})"
