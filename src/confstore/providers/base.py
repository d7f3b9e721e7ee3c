from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Collection, Mapping
from typing import Any, ClassVar

from ..configuration import Configuration
from ..errors import InvalidOptionError

OptionSetter = Callable[["BaseProvider", Any], None]


class BaseProvider(ABC):
    """Abstract persistence strategy for a :class:`Configuration`.

    Providers carry a bag of named options.  Options listed in
    :attr:`option_setters` are routed to a dedicated setter (allowing side
    effects such as revalidating other options); every other option goes
    through :meth:`validate_option` before it is stored.
    """

    option_setters: ClassVar[Mapping[str, OptionSetter]] = {}

    def __init__(self, name: str, options: Mapping[str, Any] | None = None) -> None:
        self._name = name
        self._options: dict[str, Any] = dict(options or {})
        self._valid = False

    @property
    def name(self) -> str:
        return self._name

    def is_valid(self) -> bool:
        return self._valid

    # ------------------------------------------------------------- options
    def get_options(self) -> dict[str, Any]:
        return dict(self._options)

    def get_option_names(self) -> list[str]:
        return list(self._options)

    def get_option(self, name: str) -> Any:
        return self._options.get(name)

    def has_option(self, name: str) -> bool:
        return name in self._options

    def set_option(self, name: str, value: Any) -> None:
        setter = self.option_setters.get(name)
        if setter is not None:
            setter(self, value)
            return
        self.validate_option(name, value)
        self._options[name] = value

    def validate_option(self, name: str, value: Any) -> None:
        """Validate a generic option; raise :class:`InvalidOptionError` on failure."""
        if not isinstance(name, str) or not name.strip():
            raise InvalidOptionError(self._name, str(name), "option names must be non-empty strings")

    # ---------------------------------------------------------- persistence
    @abstractmethod
    def read(self, section_names: Collection[str] | None = None) -> Configuration:
        """Load a configuration, optionally limited to *section_names*."""

    @abstractmethod
    def write(self, config: Configuration) -> None:
        """Persist *config* and clear its changed flags."""
