"""
CSDL Type Registry.

Resolves type identifiers against every schema of a metadata set. Types are
indexed once by fully-qualified name (``Namespace.TypeName``) so references
that cross schema documents are as cheap to resolve as local ones.

Usage:
    from formats.csdl.csdl_type_registry import TypeRegistry

    registry = TypeRegistry(schemas)
    person = registry.find("Test.Person")
    pets = registry.resolve("Collection(Test.Pet)")  # raises if unresolved
"""

import logging
from typing import Dict, Iterable, List, Optional

from constants import ExampleConfig

from .csdl_models import ComplexType, Schema

logger = logging.getLogger(__name__)


class TypeResolutionError(LookupError):
    """Base class for type identifiers that cannot be resolved."""

    def __init__(self, type_identifier: str, message: str):
        self.type_identifier = type_identifier
        super().__init__(message)


class UnresolvedTypeReference(TypeResolutionError):
    """No schema declares the referenced type."""

    def __init__(self, type_identifier: str):
        super().__init__(type_identifier, f"Type not found in any schema: {type_identifier}")


class AmbiguousTypeReference(TypeResolutionError):
    """More than one declaration shares the referenced name."""

    def __init__(self, type_identifier: str, count: int):
        self.count = count
        super().__init__(
            type_identifier,
            f"Type declared {count} times across schemas: {type_identifier}"
        )


def is_collection(type_identifier: str) -> bool:
    """Check if the identifier is a ``Collection(...)`` wrapper."""
    return (
        type_identifier.startswith(ExampleConfig.COLLECTION_PREFIX)
        and type_identifier.endswith(ExampleConfig.COLLECTION_SUFFIX)
    )


def collection_item_type(type_identifier: str) -> str:
    """Remove one ``Collection(...)`` wrapper, if present."""
    if not is_collection(type_identifier):
        return type_identifier
    return type_identifier[len(ExampleConfig.COLLECTION_PREFIX):-len(ExampleConfig.COLLECTION_SUFFIX)]


def strip_collection(type_identifier: str) -> str:
    """Remove every ``Collection(...)`` wrapper, leaving the bare type name."""
    while is_collection(type_identifier):
        type_identifier = collection_item_type(type_identifier)
    return type_identifier


class TypeRegistry:
    """
    Lookup table of complex and entity types keyed by qualified name.

    The registry is built once and never modified, so it can be shared by
    concurrent generators.

    Example:
        >>> registry = TypeRegistry(schemas)
        >>> "Test.Person" in registry
        True
    """

    def __init__(self, schemas: Iterable[Schema]):
        """
        Index the types declared in ``schemas``.

        Args:
            schemas: The complete schema set, in declaration order.
        """
        self._schemas = tuple(schemas)
        self._types: Dict[str, List[ComplexType]] = {}

        for schema in self._schemas:
            for declared in schema.iter_types():
                full_name = f"{schema.namespace}.{declared.name}"
                self._types.setdefault(full_name, []).append(declared)

        for name in self.ambiguous_names():
            logger.warning(
                f"Type '{name}' is declared {len(self._types[name])} times; "
                f"references to it will not resolve"
            )

    @property
    def schemas(self) -> tuple:
        """The schema set the registry was built from."""
        return self._schemas

    def resolve(self, type_identifier: str) -> ComplexType:
        """
        Resolve a type identifier to its declaration.

        ``Collection(...)`` wrappers are stripped before matching.

        Args:
            type_identifier: Qualified type name, optionally wrapped.

        Returns:
            The single matching ComplexType or EntityType.

        Raises:
            UnresolvedTypeReference: If no schema declares the type.
            AmbiguousTypeReference: If several declarations match.
        """
        name = strip_collection(type_identifier)
        matches = self._types.get(name)
        if not matches:
            raise UnresolvedTypeReference(name)
        if len(matches) > 1:
            raise AmbiguousTypeReference(name, len(matches))
        return matches[0]

    def find(self, type_identifier: str) -> Optional[ComplexType]:
        """Resolve a type identifier, returning None instead of raising."""
        try:
            return self.resolve(type_identifier)
        except TypeResolutionError:
            return None

    def type_names(self) -> List[str]:
        """Get all qualified type names in declaration order."""
        return list(self._types)

    def ambiguous_names(self) -> List[str]:
        """Get qualified names declared more than once."""
        return [name for name, matches in self._types.items() if len(matches) > 1]

    def __contains__(self, type_identifier: object) -> bool:
        if not isinstance(type_identifier, str):
            return False
        return self.find(type_identifier) is not None

    def __len__(self) -> int:
        return sum(len(matches) for matches in self._types.values())


def find_type_with_identifier(schemas: Iterable[Schema], type_identifier: str) -> ComplexType:
    """
    Resolve a type identifier against a plain schema sequence.

    Builds a throwaway registry; prefer a shared TypeRegistry when resolving
    many identifiers.

    Raises:
        TypeResolutionError: If the identifier is unresolved or ambiguous.
    """
    return TypeRegistry(schemas).resolve(type_identifier)
