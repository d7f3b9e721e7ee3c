from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from lxml import etree

from ..coercion import value_type
from ..configuration import Configuration
from ..errors import ProviderError
from . import register_provider
from .file import FileProvider


def _text_of(element: etree._Element, attribute: str, child: str) -> str | None:
    value = element.get(attribute)
    if value:
        return value
    node = element.find(child)
    if node is None:
        return None
    return node.text or ""


@register_provider
class XmlProvider(FileProvider):
    """XML file provider.

    Layout::

        <Config>
          <Section name="default">
            <Description>optional</Description>
            <Item name="foo" type="bool" nullable="false" value="true"/>
            <Item name="bar" type="string" nullable="true">
              <Value>text</Value>
              <Description>optional</Description>
            </Item>
          </Section>
        </Config>

    Scalar values (bool, int, float, datetime) are stored in the ``value``
    attribute, everything else in a ``Value`` child element.  Items holding
    ``None`` carry neither.
    """

    default_name = "XML"
    default_extensions = ("xml",)

    def _load_records(self, text: str) -> Iterable[Any]:
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            root = etree.fromstring(text.encode("utf-8"), parser)
        except etree.XMLSyntaxError as exc:
            raise ProviderError(
                self.name,
                f"Unable to load config data from file {str(self.get_file())!r} "
                "if the file is not valid XML!",
            ) from exc
        sections = root.findall("Section")
        if not sections:
            raise ProviderError(
                self.name,
                f"Unable to load config data from file {str(self.get_file())!r} "
                "if the XML does not define the required Section element(s)!",
            )
        return [self._section(element) for element in sections]

    def _section(self, element: etree._Element) -> dict[str, Any]:
        return {
            "name": element.get("name"),
            "description": _text_of(element, "description", "Description"),
            "items": [self._item(node) for node in element.findall("Item")],
        }

    @staticmethod
    def _item(element: etree._Element) -> dict[str, Any]:
        return {
            "name": element.get("name"),
            "description": _text_of(element, "description", "Description"),
            "type": element.get("type") or "string",
            "nullable": element.get("nullable", "false"),
            "value": _text_of(element, "value", "Value"),
        }

    def _dump(self, config: Configuration) -> str:
        try:
            root = self._tree(config)
        except ValueError as exc:
            raise ProviderError(self.name, f"Can not represent config data as XML: {exc}") from exc
        return etree.tostring(
            root, pretty_print=True, xml_declaration=True, encoding="utf-8"
        ).decode("utf-8")

    def _tree(self, config: Configuration) -> etree._Element:
        root = etree.Element("Config")
        for section in config:
            section_el = etree.SubElement(root, "Section", name=section.name)
            if section.description is not None:
                etree.SubElement(section_el, "Description").text = section.description
            for item in section:
                item_el = etree.SubElement(
                    section_el,
                    "Item",
                    name=item.name,
                    type=item.get_type(),
                    nullable="true" if item.is_nullable() else "false",
                )
                text = item.get_string_value()
                if text is not None:
                    if value_type(item.get_type()).scalar:
                        item_el.set("value", text)
                    else:
                        etree.SubElement(item_el, "Value").text = text
                if item.description is not None:
                    etree.SubElement(item_el, "Description").text = item.description
        return root
