"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # End-to-end pipeline tests
    pytest -m security      # URL and XML hardening tests
    pytest -m resilience    # Retry behavior
"""

import os
import sys

import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: End-to-end pipeline tests")
    config.addinivalue_line("markers", "security: URL validation and XML hardening tests")
    config.addinivalue_line("markers", "resilience: Retry and failure handling tests")


@pytest.fixture
def write_metadata(tmp_path):
    """Write metadata text to a temporary file and return its path."""
    def _write(content: str, name: str = "metadata.xml") -> str:
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write
