"""
CSDL Data Models.

This module defines the data structures for representing parsed OData CSDL
(Conceptual Schema Definition Language) metadata. Instances are created by the
parser and never modified afterwards, so they are frozen dataclasses holding
tuples rather than lists.

Models:
- Property: Structural property declaration (name + type identifier)
- NavigationProperty: Entity navigation declaration
- ComplexType: Named structural type
- EntityType: ComplexType with keys and navigation properties
- Schema: Namespace container for type declarations
- ResourceDefinition: Generated example paired with its type name
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

# JSON-shaped example value tree
ExampleValue = Union[str, bool, int, float, List["ExampleValue"], Dict[str, "ExampleValue"]]


class CodeBlockType(Enum):
    """Classification of a documentation code block."""
    RESOURCE = "resource"


@dataclass(frozen=True)
class Property:
    """
    Represents a structural property of a complex or entity type.

    Attributes:
        name: Property name.
        type: Type identifier exactly as written in the metadata, e.g.
            ``Edm.String``, ``Collection(Test.Pet)`` or ``Test.Address``.
        nullable: Value of the ``Nullable`` facet (defaults to True).
    """
    name: str
    type: str
    nullable: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {"name": self.name, "type": self.type}
        if not self.nullable:
            result["nullable"] = False
        return result


@dataclass(frozen=True)
class NavigationProperty:
    """Navigation from an entity type to a related type."""
    name: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {"name": self.name, "type": self.type}


@dataclass(frozen=True)
class ComplexType:
    """
    Represents a CSDL complex type.

    Properties are looked up by name; their order is only used to keep
    generated examples stable.

    Attributes:
        name: Type name, unqualified.
        namespace: Namespace of the declaring schema.
        properties: Declared structural properties.
        base_type: Qualified name of the base type, if any.
        abstract: Whether the type is declared abstract.
        open_type: Whether the type allows dynamic properties.
    """
    name: str
    namespace: str = ""
    properties: Tuple[Property, ...] = ()
    base_type: Optional[str] = None
    abstract: bool = False
    open_type: bool = False

    @property
    def full_name(self) -> str:
        """Namespace-qualified type name."""
        return f"{self.namespace}.{self.name}"

    def get_property(self, name: str) -> Optional[Property]:
        """
        Find a property by name.

        Args:
            name: Property name to search for.

        Returns:
            Property if found, None otherwise.
        """
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def property_names(self) -> List[str]:
        """Get list of all property names."""
        return [prop.name for prop in self.properties]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {
            "name": self.name,
            "properties": [p.to_dict() for p in self.properties],
        }
        if self.base_type:
            result["baseType"] = self.base_type
        if self.abstract:
            result["abstract"] = True
        if self.open_type:
            result["openType"] = True
        return result


@dataclass(frozen=True)
class EntityType(ComplexType):
    """
    Represents a CSDL entity type.

    Entity types add key and navigation declarations to a complex type.
    Example generation only walks ``properties``, exactly as for complex
    types.

    Attributes:
        keys: Names of the key properties.
        navigation_properties: Declared navigation properties.
    """
    keys: Tuple[str, ...] = ()
    navigation_properties: Tuple[NavigationProperty, ...] = ()

    @property
    def key_properties(self) -> List[Property]:
        """Get the properties referenced by the key."""
        return [p for p in self.properties if p.name in self.keys]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result = super().to_dict()
        if self.keys:
            result["keys"] = list(self.keys)
        if self.navigation_properties:
            result["navigationProperties"] = [n.to_dict() for n in self.navigation_properties]
        return result


@dataclass(frozen=True)
class Schema:
    """
    Represents one CSDL ``<Schema>`` element.

    Attributes:
        namespace: Schema namespace.
        complex_types: Complex types in declaration order.
        entities: Entity types in declaration order.
        alias: Optional namespace alias.
    """
    namespace: str
    complex_types: Tuple[ComplexType, ...] = ()
    entities: Tuple[EntityType, ...] = ()
    alias: Optional[str] = None

    def iter_types(self) -> Iterator[ComplexType]:
        """Yield complex types first, then entity types."""
        yield from self.complex_types
        yield from self.entities

    @property
    def type_count(self) -> int:
        """Get total number of declared types."""
        return len(self.complex_types) + len(self.entities)

    def get_type_by_name(self, name: str) -> Optional[ComplexType]:
        """Find a declared type by its unqualified name."""
        for declared in self.iter_types():
            if declared.name == name:
                return declared
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {
            "namespace": self.namespace,
            "complexTypes": [c.to_dict() for c in self.complex_types],
            "entityTypes": [e.to_dict() for e in self.entities],
        }
        if self.alias:
            result["alias"] = self.alias
        return result


@dataclass(frozen=True)
class ResourceDefinition:
    """
    A generated JSON example for one documented type.

    Attributes:
        type_name: Namespace-qualified type name.
        example_json: Serialized example (valid JSON text).
        classification: Code block classification, always RESOURCE.
        language: Code block language.
    """
    type_name: str
    example_json: str
    classification: CodeBlockType = CodeBlockType.RESOURCE
    language: str = "json"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "resourceType": self.type_name,
            "blockType": self.classification.value,
            "language": self.language,
            "example": self.example_json,
        }
