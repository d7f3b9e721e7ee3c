from __future__ import annotations

import ast
import math
from collections.abc import Iterable, Mapping
from typing import Any

from ..configuration import Configuration
from ..errors import ParseError, ProviderError
from ..item import ConfigItem
from . import register_provider
from .file import FileProvider

INDENT = "    "


def _is_literal(value: Any) -> bool:
    if value is None or isinstance(value, str | bool | int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, list | tuple):
        return all(_is_literal(v) for v in value)
    if isinstance(value, dict):
        return all(_is_literal(k) and _is_literal(v) for k, v in value.items())
    return False


def _keyed(records: Any, what: str, provider: str) -> list[Any]:
    """Turn a ``{name: record}`` mapping into a list of records with names."""
    if not isinstance(records, Mapping):
        return records
    result = []
    for name, record in records.items():
        if not isinstance(record, Mapping):
            raise ParseError(provider, f"Invalid config {what} {name!r}, a mapping is required.")
        result.append({**record, "name": name})
    return result


@register_provider
class LiteralProvider(FileProvider):
    """Provider for files holding a single Python literal.

    The file is evaluated with :func:`ast.literal_eval`, never executed.  It
    may hold a list of section records or a dict keyed by section name; the
    ``items`` of a section may likewise be a list or a dict keyed by item
    name.  Files are written in the keyed dict form.
    """

    default_name = "Literal"
    default_extensions = ("py",)

    def _load_records(self, text: str) -> Iterable[Any]:
        try:
            data = ast.literal_eval(text.strip())
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError) as exc:
            raise ProviderError(
                self.name,
                f"Unable to load config data from file {str(self.get_file())!r}!",
            ) from exc
        if not isinstance(data, list | tuple | dict):
            raise ProviderError(
                self.name,
                f"Unable to load config data from file {str(self.get_file())!r}, "
                "a list or dict literal is required!",
            )
        sections = _keyed(data, "section", self.name)
        for section in sections:
            if isinstance(section, Mapping) and isinstance(section.get("items"), Mapping):
                section["items"] = _keyed(section["items"], "item", self.name)
        return sections

    @staticmethod
    def _value(item: ConfigItem) -> Any:
        value = item.get_value()
        if _is_literal(value):
            return value
        return item.get_string_value()

    def _dump(self, config: Configuration) -> str:
        lines = ["{"]
        for section in config:
            lines.append(f"{INDENT}{section.name!r}: {{")
            if section.description is not None:
                lines.append(f"{INDENT * 2}'description': {section.description!r},")
            lines.append(f"{INDENT * 2}'items': {{")
            for item in section:
                lines.append(f"{INDENT * 3}{item.name!r}: {{")
                if item.description is not None:
                    lines.append(f"{INDENT * 4}'description': {item.description!r},")
                lines.append(f"{INDENT * 4}'type': {item.get_type()!r},")
                lines.append(f"{INDENT * 4}'nullable': {item.is_nullable()!r},")
                lines.append(f"{INDENT * 4}'value': {self._value(item)!r},")
                lines.append(f"{INDENT * 3}}},")
            lines.append(f"{INDENT * 2}}},")
            lines.append(f"{INDENT}}},")
        lines.append("}")
        return "\n".join(lines) + "\n"
