"""
Validation utilities for the CSDL Example Generator.

- url.py: URLValidator - checks metadata URLs before they are fetched

Usage:
    from core.validators import URLValidator
"""

from .url import URLValidator

__all__ = [
    'URLValidator',
]
