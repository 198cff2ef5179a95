"""
CSDL Resource Assembler.

Turns every complex and entity type of a schema set into a
ResourceDefinition that documentation validators can test against.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from tqdm import tqdm

from constants import ExampleConfig

from .csdl_example_generator import ExampleGenerator
from .csdl_models import CodeBlockType, ComplexType, ResourceDefinition, Schema

logger = logging.getLogger(__name__)


def resource_definition_from_type(
    schema: Schema,
    complex_type: ComplexType,
    generator: ExampleGenerator,
) -> ResourceDefinition:
    """
    Build the resource definition for one declared type.

    Args:
        schema: Schema that declares the type.
        complex_type: The ComplexType or EntityType.
        generator: Generator over the full schema set.

    Returns:
        ResourceDefinition named ``<namespace>.<type name>``.
    """
    type_name = f"{schema.namespace}.{complex_type.name}"
    return ResourceDefinition(
        type_name=type_name,
        example_json=generator.build_json_example(complex_type, type_name),
        classification=CodeBlockType.RESOURCE,
        language=ExampleConfig.RESOURCE_LANGUAGE,
    )


def generate_resources(
    schemas: Iterable[Schema],
    max_depth: Optional[int] = ExampleConfig.MAX_EXPANSION_DEPTH,
) -> List[ResourceDefinition]:
    """
    Convert every type in the schema set into a ResourceDefinition.

    Output follows schema order, and within each schema complex types come
    before entity types, so identical input always yields identical output.

    Args:
        schemas: The complete schema set.
        max_depth: Nested object levels to expand (None for no limit).

    Returns:
        One ResourceDefinition per declared type.
    """
    schema_list: Sequence[Schema] = tuple(schemas)
    generator = ExampleGenerator(schema_list, max_depth)

    declared = [(schema, complex_type) for schema in schema_list for complex_type in schema.iter_types()]

    resources: List[ResourceDefinition] = []
    for schema, complex_type in tqdm(
        declared,
        desc="Generating examples",
        unit="type",
        disable=len(declared) < ExampleConfig.PROGRESS_THRESHOLD,
    ):
        resources.append(resource_definition_from_type(schema, complex_type, generator))

    logger.info(f"Generated {len(resources)} resource example(s) from {len(schema_list)} schema(s)")
    return resources
