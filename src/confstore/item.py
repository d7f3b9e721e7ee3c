from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from . import coercion
from .errors import InvalidValueError

if TYPE_CHECKING:  # pragma: no cover
    from .section import ConfigSection


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    text = str(description).strip()
    return text or None


class ConfigItem:
    """A single named and typed configuration value.

    The item keeps a plain (non-owning) reference to the section it belongs
    to.  Every value stored on the item went through :func:`coercion.coerce`
    for the declared type, so ``get_value()`` always returns a normalised
    value or ``None`` for nullable items.
    """

    def __init__(
        self,
        parent: ConfigSection,
        name: str,
        description: str | None = None,
    ) -> None:
        self._name = name
        self._description = _clean_description(description)
        self._parent = parent
        self._type = "string"
        self._nullable = False
        self._value: Any = None
        self._changed = False

    @classmethod
    def create(
        cls,
        parent: ConfigSection,
        name: str,
        type_name: str,
        value: Any,
        nullable: bool = False,
        description: str | None = None,
    ) -> ConfigItem:
        """Create a validated item and register it inside *parent*.

        The new item starts unchanged.  Adding it to an unchanged section that
        has no item of that name leaves the section unchanged.
        """

        item = cls(parent, name, description)
        item.set_type(type_name).set_is_nullable(nullable).set_value(value)
        item.set_is_changed(False)
        was_clean = not parent.is_changed() and not parent.has_item(name)
        parent.set_item(item)
        if was_clean:
            parent.set_is_changed(False)
        return item

    # ------------------------------------------------------------ identity
    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    def get_parent(self) -> ConfigSection:
        return self._parent

    def set_parent(self, section: ConfigSection) -> ConfigItem:
        self._parent = section
        return self

    # --------------------------------------------------------------- state
    def get_type(self) -> str:
        return self._type

    def set_type(self, type_name: str) -> ConfigItem:
        """Change the declared type; the current value is not revalidated."""
        self._type = type_name
        self._changed = True
        return self

    def is_nullable(self) -> bool:
        return self._nullable

    def set_is_nullable(self, nullable: bool) -> ConfigItem:
        self._nullable = bool(nullable)
        self._changed = True
        return self

    def is_changed(self) -> bool:
        return self._changed

    def set_is_changed(self, changed: bool) -> ConfigItem:
        self._changed = bool(changed)
        return self

    # --------------------------------------------------------------- value
    def get_value(self) -> Any:
        return self._value

    def _is_current(self, value: Any) -> bool:
        current = self._value
        if value is current:
            return True
        return type(value) is type(current) and value == current

    def set_value(self, value: Any) -> ConfigItem:
        """Coerce *value* into the declared type and store it.

        Raises :class:`InvalidValueError` if the value is ``None`` for a non
        nullable item or can not be coerced.  The previous value is kept in
        that case.
        """
        if self._is_current(value):
            return self
        self._changed = True
        if value is None:
            if not self._nullable:
                raise InvalidValueError(
                    self._name,
                    value,
                    f"None is not a supported value for config item {self._name!r}",
                )
            self._value = None
            return self
        try:
            normalised = coercion.coerce(self._type, value)
        except (TypeError, ValueError) as exc:
            raise InvalidValueError(
                self._name,
                value,
                f"The new value {value!r} for config item {self._name!r} is not "
                f"convertible to {self._type!r}: {exc}",
            ) from exc
        self._value = normalised
        return self

    def get_int_value(self) -> int | None:
        return coercion.try_int(self._value)

    def get_float_value(self) -> float | None:
        return coercion.try_float(self._value)

    def get_bool_value(self) -> bool | None:
        return coercion.try_bool(self._value)

    def get_string_value(self) -> str | None:
        return coercion.to_string(self._type, self._value)

    # ------------------------------------------------------------- records
    def to_record(self) -> dict[str, Any]:
        return {
            "name": self._name,
            "description": self._description,
            "type": self._type,
            "nullable": self._nullable,
            "value": self._value,
        }

    def __str__(self) -> str:
        return self.get_string_value() or ""

    def __repr__(self) -> str:
        return f"ConfigItem(name={self._name!r}, type={self._type!r}, value={self._value!r})"

    def __copy__(self) -> ConfigItem:
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._value = copy.deepcopy(self._value)
        return clone

    def __deepcopy__(self, memo: dict[int, Any]) -> ConfigItem:
        # the parent stays shared; only the payload is duplicated
        clone = self.__copy__()
        memo[id(self)] = clone
        return clone
