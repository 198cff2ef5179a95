"""
CSDL test configuration and shared fixtures.
"""

import os
import sys

# Ensure src is in path
src_dir = os.path.join(os.path.dirname(__file__), '..', '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Import fixtures from __init__.py
from . import (
    person_schema,
    person_with_pets_schema,
    unknown_type_schema,
    entity_schema,
    cross_schema,
    cyclic_schema,
    duplicate_type_schema,
    no_schema_document,
    malformed_xml,
    entity_expansion_xml,
)

# Re-export fixtures
__all__ = [
    'person_schema',
    'person_with_pets_schema',
    'unknown_type_schema',
    'entity_schema',
    'cross_schema',
    'cyclic_schema',
    'duplicate_type_schema',
    'no_schema_document',
    'malformed_xml',
    'entity_expansion_xml',
]
