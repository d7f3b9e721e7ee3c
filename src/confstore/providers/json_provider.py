from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from ..coercion import canonical_type
from ..configuration import Configuration
from ..dates import format_datetime
from ..errors import InvalidOptionError, ProviderError
from ..item import ConfigItem
from . import register_provider
from .file import FileProvider

DEFAULT_INDENT = 4


@register_provider
class JsonProvider(FileProvider):
    """JSON file provider.

    The document is an array of section objects::

        [
            {
                "name": "default",
                "description": "optional",
                "items": [
                    {"name": "foo", "type": "bool", "nullable": false, "value": true}
                ]
            }
        ]
    """

    default_name = "JSON"
    default_extensions = ("json",)

    def validate_option(self, name: str, value: Any) -> None:
        super().validate_option(name, value)
        if name == "indent" and (
            isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 8
        ):
            raise InvalidOptionError(self.name, name, "The indent must be an int between 0 and 8!")

    def _load_records(self, text: str) -> Iterable[Any]:
        if text.strip() == "":
            raise ProviderError(
                self.name,
                f"Unable to load config data from file {str(self.get_file())!r} "
                "if the file is empty!",
            )
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ProviderError(
                self.name,
                f"Unable to load config data from file {str(self.get_file())!r} "
                "if the data are invalid JSON!",
            ) from exc
        if not isinstance(data, list):
            raise ProviderError(
                self.name, "Root of a JSON config document must be an array of sections!"
            )
        return data

    @staticmethod
    def _value(item: ConfigItem) -> Any:
        value = item.get_value()
        if canonical_type(item.get_type()) == "datetime" and isinstance(value, date):
            return format_datetime(value)
        return value

    def _dump(self, config: Configuration) -> str:
        records = [
            self.section_record(section, [self.item_record(i, self._value(i)) for i in section])
            for section in config
        ]
        indent = self.get_option("indent")
        return (
            json.dumps(
                records,
                indent=DEFAULT_INDENT if indent is None else indent,
                ensure_ascii=False,
                default=_fallback,
            )
            + "\n"
        )


def _fallback(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, set | frozenset):
        return list(value)
    return str(value)
