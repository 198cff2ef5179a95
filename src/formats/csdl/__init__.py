"""
CSDL (OData Conceptual Schema Definition Language) Module

This module parses OData CSDL metadata and generates a JSON example for every
complex and entity type it declares. The examples are packaged as resource
definitions that documentation validators check written API docs against.

Key Components:
- csdl_parser: Parse CSDL XML into Schema models
- csdl_type_registry: Resolve qualified type names across schemas
- csdl_example_generator: Build example values for type identifiers
- csdl_resources: Assemble resource definitions for a schema set

Usage:
    from formats.csdl import parse_schemas, generate_resources

    schemas = parse_schemas(xml_text)
    for resource in generate_resources(schemas):
        print(resource.type_name, resource.example_json)
"""

from .csdl_models import (
    CodeBlockType,
    ComplexType,
    EntityType,
    ExampleValue,
    NavigationProperty,
    Property,
    ResourceDefinition,
    Schema,
)

from .csdl_parser import CSDLParser, CSDLParseError, parse_schemas

from .csdl_type_registry import (
    AmbiguousTypeReference,
    TypeRegistry,
    TypeResolutionError,
    UnresolvedTypeReference,
    find_type_with_identifier,
    strip_collection,
)

from .csdl_example_generator import (
    EDM_SIMPLE_TYPE_EXAMPLES,
    ExampleGenerator,
    build_json_example,
    generate,
    serialize_example,
)

from .csdl_resources import generate_resources, resource_definition_from_type

__all__ = [
    # Models
    'CodeBlockType',
    'ComplexType',
    'EntityType',
    'ExampleValue',
    'NavigationProperty',
    'Property',
    'ResourceDefinition',
    'Schema',
    # Parsing
    'CSDLParser',
    'CSDLParseError',
    'parse_schemas',
    # Resolution
    'AmbiguousTypeReference',
    'TypeRegistry',
    'TypeResolutionError',
    'UnresolvedTypeReference',
    'find_type_with_identifier',
    'strip_collection',
    # Generation
    'EDM_SIMPLE_TYPE_EXAMPLES',
    'ExampleGenerator',
    'build_json_example',
    'generate',
    'serialize_example',
    # Resources
    'generate_resources',
    'resource_definition_from_type',
]
