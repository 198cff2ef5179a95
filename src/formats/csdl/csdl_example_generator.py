"""
CSDL Example Generator.

Builds a representative JSON value for any CSDL type identifier:

- EDM primitives map to one fixed literal each (EDM_SIMPLE_TYPE_EXAMPLES)
- ``Collection(T)`` becomes a two-item array of T examples, which marks the
  field as repeating while keeping the example short
- Complex and entity types become objects with one key per property
- Anything that cannot be resolved becomes ``{"datatype": "<identifier>"}``

Type graphs may reference themselves (directly or through other types). The
generator tracks the types being expanded on the current path and emits the
fallback object when a type reappears, so generation always terminates.
Expansion also stops after ``max_depth`` nested object levels, which bounds
the size of examples for densely cross-referenced schemas.

Usage:
    from formats.csdl.csdl_example_generator import ExampleGenerator

    generator = ExampleGenerator(schemas)
    example = generator.generate("Test.Person")
"""

import copy
import json
import logging
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Union

from constants import ExampleConfig

from .csdl_models import ComplexType, ExampleValue, Property, Schema
from .csdl_type_registry import (
    TypeRegistry,
    TypeResolutionError,
    collection_item_type,
    is_collection,
    strip_collection,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EDM Primitive Examples
# =============================================================================

EDM_SIMPLE_TYPE_EXAMPLES: Mapping[str, Any] = MappingProxyType({
    "Edm.String": "string",
    "Edm.Boolean": False,
    "Edm.Int64": 1234567890,
    "Edm.Int32": 1234,
    "Edm.Int16": 1234,
    "Edm.Double": 12.345678,
    "Edm.Decimal": 12.345678901234,
    "Edm.Float": 12.3456,
    "Edm.Byte": 12,
    "Edm.SByte": -12,
    "Edm.DateTime": "2014-01-01T00:00:00Z",
    "Edm.DateTimeOffset": "2014-01-01T00:00:00Z",
    "Edm.Time": "00:00:00Z",
})

SchemaSource = Union[TypeRegistry, Iterable[Schema]]


def is_stream_property(prop: Property) -> bool:
    """Check if a property holds stream data, which has no literal form."""
    return strip_collection(prop.type) == ExampleConfig.STREAM_TYPE


def fallback_example(type_identifier: str) -> Dict[str, ExampleValue]:
    """Diagnostic object returned for a type that could not be expanded."""
    return {ExampleConfig.FALLBACK_KEY: type_identifier}


def serialize_example(value: ExampleValue, indent: Optional[int] = None) -> str:
    """
    Serialize an example to JSON text.

    Compact output (no indent) uses no whitespace, e.g.
    ``{"name":"string","age":1234}``.
    """
    if indent is None:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(value, indent=indent, ensure_ascii=False)


class ExampleGenerator:
    """
    Generate example values from a schema set.

    The generator keeps no per-call state on the instance, so ``generate``
    may run concurrently from several threads.

    Example:
        >>> generator = ExampleGenerator(schemas)
        >>> generator.generate("Collection(Edm.Int32)")
        [1234, 1234]
    """

    def __init__(self, schemas: SchemaSource, max_depth: Optional[int] = ExampleConfig.MAX_EXPANSION_DEPTH):
        """
        Initialize the generator.

        Args:
            schemas: The schema set, or a registry already built from it.
            max_depth: Nested object levels to expand, counting the outermost
                type. Deeper types get the fallback object. None expands
                until a cycle is found.

        Raises:
            ValueError: If max_depth is less than 1.
        """
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")

        if isinstance(schemas, TypeRegistry):
            self.registry = schemas
        else:
            self.registry = TypeRegistry(schemas)
        self.max_depth = max_depth

    def generate(self, type_identifier: str) -> ExampleValue:
        """
        Generate an example for a type identifier.

        Args:
            type_identifier: EDM primitive, ``Collection(...)`` wrapper or
                qualified complex/entity type name.

        Returns:
            A JSON-serializable example. Never raises for unknown types.
        """
        return self._example_of_type(type_identifier, frozenset())

    def build_example(self, complex_type: ComplexType, type_name: Optional[str] = None) -> Dict[str, ExampleValue]:
        """
        Generate the object example for an already resolved type.

        Args:
            complex_type: A ComplexType or EntityType from the schema set.
            type_name: Qualified name the type is registered under. Defaults
                to the type's own ``full_name``.

        Returns:
            Mapping of every non-stream property name to its example.
        """
        return self._build_dictionary(complex_type, frozenset({type_name or complex_type.full_name}))

    def build_json_example(self, complex_type: ComplexType, type_name: Optional[str] = None) -> str:
        """Generate and serialize the object example for a type."""
        return serialize_example(self.build_example(complex_type, type_name))

    def _example_of_type(self, type_identifier: str, expanding: FrozenSet[str]) -> ExampleValue:
        if is_collection(type_identifier):
            item = self._example_of_type(collection_item_type(type_identifier), expanding)
            return [item, copy.deepcopy(item)]

        return self._object_example_for_type(type_identifier, expanding)

    def _object_example_for_type(self, type_identifier: str, expanding: FrozenSet[str]) -> ExampleValue:
        if type_identifier in EDM_SIMPLE_TYPE_EXAMPLES:
            return EDM_SIMPLE_TYPE_EXAMPLES[type_identifier]

        try:
            matching_type = self.registry.resolve(type_identifier)
        except TypeResolutionError as e:
            logger.debug(f"Failed to find an example for type: {type_identifier} - {e}")
            return fallback_example(type_identifier)

        if type_identifier in expanding:
            logger.debug(f"Circular reference to {type_identifier}; emitting placeholder")
            return fallback_example(type_identifier)

        if self.max_depth is not None and len(expanding) >= self.max_depth:
            logger.debug(f"Depth limit {self.max_depth} reached at {type_identifier}; emitting placeholder")
            return fallback_example(type_identifier)

        return self._build_dictionary(matching_type, expanding | {type_identifier})

    def _build_dictionary(self, complex_type: ComplexType, expanding: FrozenSet[str]) -> Dict[str, ExampleValue]:
        return {
            prop.name: self._example_of_type(prop.type, expanding)
            for prop in complex_type.properties
            if not is_stream_property(prop)
        }


# =============================================================================
# Functional API
# =============================================================================

def generate(
    type_identifier: str,
    schemas: SchemaSource,
    max_depth: Optional[int] = ExampleConfig.MAX_EXPANSION_DEPTH,
) -> ExampleValue:
    """
    Generate an example for ``type_identifier`` using ``schemas``.

    Args:
        type_identifier: Type to exemplify.
        schemas: The schema set (or a TypeRegistry built from it).
        max_depth: Nested object levels to expand (None for no limit).

    Returns:
        Scalar, list or dict example value.
    """
    return ExampleGenerator(schemas, max_depth).generate(type_identifier)


def build_json_example(complex_type: ComplexType, schemas: SchemaSource) -> str:
    """Serialized object example for a resolved type."""
    return ExampleGenerator(schemas).build_json_example(complex_type)
