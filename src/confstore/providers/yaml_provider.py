from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..configuration import Configuration
from ..errors import ProviderError
from . import register_provider
from .file import FileProvider


@register_provider
class YamlProvider(FileProvider):
    """YAML file provider using the same section/item records as JSON."""

    default_name = "YAML"
    default_extensions = ("yaml", "yml")

    def _require_yaml(self):
        try:
            import yaml  # type: ignore
        except ModuleNotFoundError as exc:
            raise ProviderError(self.name, "PyYAML is required for the YAML provider") from exc
        return yaml

    def _load_records(self, text: str) -> Iterable[Any]:
        yaml = self._require_yaml()
        if text.strip() == "":
            raise ProviderError(
                self.name,
                f"Unable to load config data from file {str(self.get_file())!r} "
                "if the file is empty!",
            )
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ProviderError(self.name, f"Invalid YAML: {exc}") from exc
        if not isinstance(data, list):
            raise ProviderError(
                self.name, "Root of a YAML config document must be a sequence of sections!"
            )
        return data

    def _dump(self, config: Configuration) -> str:
        yaml = self._require_yaml()
        records = [
            self.section_record(section, [self.item_record(i, i.get_value()) for i in section])
            for section in config
        ]
        try:
            return yaml.safe_dump(
                records,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False,
            )
        except yaml.YAMLError as exc:
            raise ProviderError(self.name, f"Can not represent config data as YAML: {exc}") from exc
