"""
CSDL Parser.

This module parses OData CSDL metadata documents (``$metadata`` responses,
EDMX files or bare ``<Schema>`` documents) into the CSDL data models.

Every element whose local name is ``Schema`` becomes one Schema instance,
whatever XML namespace it lives in, so OData v2/v3 (EDM 2008/2009) and
v4 (``http://docs.oasis-open.org/odata/ns/edm``) documents are handled alike.

Usage:
    from formats.csdl.csdl_parser import CSDLParser, parse_schemas

    schemas = parse_schemas(xml_text)

    parser = CSDLParser()
    schemas = parser.parse_file("metadata.xml")
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union
from xml.etree.ElementTree import Element, ParseError

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from .csdl_models import (
    ComplexType,
    EntityType,
    NavigationProperty,
    Property,
    Schema,
)

logger = logging.getLogger(__name__)


class CSDLParseError(Exception):
    """Exception raised when CSDL parsing fails."""

    def __init__(self, message: str, file_path: Optional[str] = None, details: Optional[str] = None):
        self.file_path = file_path
        self.details = details
        super().__init__(message)


def _local_name(element: Element) -> str:
    """Return the tag of an element without its ``{namespace}`` prefix."""
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() == "true"


class CSDLParser:
    """
    Parse CSDL metadata into Schema instances.

    The parser is stateless; one instance may be shared freely.

    Example:
        >>> parser = CSDLParser()
        >>> schemas = parser.parse(xml_text)
        >>> for schema in schemas:
        ...     print(schema.namespace, schema.type_count)
    """

    def parse(self, content: Union[str, bytes], file_path: Optional[str] = None) -> List[Schema]:
        """
        Parse a CSDL document.

        Args:
            content: Complete XML text of the metadata document.
            file_path: Optional path for error messages.

        Returns:
            Schemas in document order. Empty if the document declares none.

        Raises:
            CSDLParseError: If the content is not well-formed XML or uses
                forbidden constructs (entity declarations, external DTDs).
        """
        if content is None:
            raise CSDLParseError("No metadata content supplied", file_path=file_path)

        try:
            root = ET.fromstring(content)
        except ParseError as e:
            raise CSDLParseError(
                f"Invalid XML: {e}",
                file_path=file_path,
                details=str(e)
            )
        except DefusedXmlException as e:
            raise CSDLParseError(
                f"Forbidden XML construct: {e}",
                file_path=file_path,
                details=str(e)
            )

        schemas = [self._parse_schema(element) for element in root.iter() if _local_name(element) == "Schema"]

        if not schemas:
            logger.debug(f"No Schema elements found in {file_path or 'metadata document'}")
        else:
            logger.debug(
                f"Parsed {len(schemas)} schema(s) with "
                f"{sum(s.type_count for s in schemas)} type(s)"
            )
        return schemas

    def parse_file(self, file_path: str) -> List[Schema]:
        """
        Parse a CSDL file.

        Args:
            file_path: Path to the metadata document.

        Returns:
            Schemas in document order.

        Raises:
            FileNotFoundError: If file doesn't exist.
            CSDLParseError: If content cannot be parsed.
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"CSDL file not found: {file_path}")

        if path.is_dir():
            raise CSDLParseError(f"Not a file: {file_path}", file_path=file_path)

        with open(path, 'rb') as f:
            content = f.read()

        return self.parse(content, file_path)

    # =========================================================================
    # Element handlers
    # =========================================================================

    def _parse_schema(self, element: Element) -> Schema:
        namespace = element.get("Namespace", "")
        if not namespace:
            logger.warning("Schema element without Namespace attribute")

        complex_types: List[ComplexType] = []
        entities: List[EntityType] = []

        for child in self._iter_declarations(element):
            kind = _local_name(child)
            name = child.get("Name")
            if not name:
                logger.warning(f"Skipping {kind} without Name in schema '{namespace}'")
                continue
            if kind == "ComplexType":
                complex_types.append(self._parse_complex_type(child, namespace))
            else:
                entities.append(self._parse_entity_type(child, namespace))

        return Schema(
            namespace=namespace,
            complex_types=tuple(complex_types),
            entities=tuple(entities),
            alias=element.get("Alias"),
        )

    @staticmethod
    def _iter_declarations(schema_element: Element) -> Iterator[Element]:
        """Yield nested ComplexType and EntityType elements in document order."""
        for element in schema_element.iter():
            if element is schema_element:
                continue
            if _local_name(element) in ("ComplexType", "EntityType"):
                yield element

    def _parse_complex_type(self, element: Element, namespace: str) -> ComplexType:
        return ComplexType(
            name=element.get("Name", ""),
            namespace=namespace,
            properties=tuple(self._parse_properties(element)),
            base_type=element.get("BaseType"),
            abstract=_parse_bool(element.get("Abstract"), False),
            open_type=_parse_bool(element.get("OpenType"), False),
        )

    def _parse_entity_type(self, element: Element, namespace: str) -> EntityType:
        keys: List[str] = []
        navigation: List[NavigationProperty] = []

        for child in element:
            kind = _local_name(child)
            if kind == "Key":
                keys.extend(
                    ref.get("Name", "")
                    for ref in child
                    if _local_name(ref) == "PropertyRef" and ref.get("Name")
                )
            elif kind == "NavigationProperty" and child.get("Name"):
                navigation.append(NavigationProperty(
                    name=child.get("Name", ""),
                    type=child.get("Type", ""),
                ))

        return EntityType(
            name=element.get("Name", ""),
            namespace=namespace,
            properties=tuple(self._parse_properties(element)),
            base_type=element.get("BaseType"),
            abstract=_parse_bool(element.get("Abstract"), False),
            open_type=_parse_bool(element.get("OpenType"), False),
            keys=tuple(keys),
            navigation_properties=tuple(navigation),
        )

    @staticmethod
    def _parse_properties(element: Element) -> List[Property]:
        properties: List[Property] = []
        for child in element:
            if _local_name(child) != "Property":
                continue
            name = child.get("Name")
            if not name:
                logger.warning(f"Skipping Property without Name on '{element.get('Name')}'")
                continue
            properties.append(Property(
                name=name,
                type=child.get("Type", ""),
                nullable=_parse_bool(child.get("Nullable"), True),
            ))
        return properties


def parse_schemas(xml_text: Union[str, bytes]) -> List[Schema]:
    """
    Parse CSDL metadata text into schemas.

    Args:
        xml_text: Complete XML payload.

    Returns:
        Schemas in document order.

    Raises:
        CSDLParseError: If the XML is malformed.
    """
    return CSDLParser().parse(xml_text)
