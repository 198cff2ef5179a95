"""
Core utilities and cross-cutting concerns for the CSDL Example Generator.

This module provides shared infrastructure used by metadata retrieval:

- URL validation (URLValidator)

Usage:
    from core import URLValidator
    from core.validators.url import URLValidator
"""

from .validators import URLValidator

__all__ = [
    "URLValidator",
]
