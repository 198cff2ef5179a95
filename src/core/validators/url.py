"""
URL validation for metadata document retrieval.

Metadata URLs usually come from command-line arguments or configuration
files, so they are checked before any request is made.

Checks:
- Scheme allowlist (https and http by default)
- Hostname required
- Loopback, private, link-local and reserved addresses blocked unless
  explicitly allowed

Usage:
    from core.validators.url import URLValidator

    url = URLValidator.validate_metadata_url("https://services.odata.org/V4/TripPinService/$metadata")
"""

import ipaddress
import logging
import socket
from typing import Any, Iterable, Optional
from urllib.parse import urlparse, urlunparse

from constants import FetchConfig

logger = logging.getLogger(__name__)


class URLValidator:
    """Validation helpers for remote metadata URLs."""

    LOCALHOST_NAMES = ('localhost', 'localhost.localdomain')

    @classmethod
    def _is_private_address(cls, address: str) -> bool:
        """Check if an IP literal is loopback, private or otherwise internal."""
        try:
            ip = ipaddress.ip_address(address.split('%', 1)[0])
        except ValueError:
            return False
        return (
            ip.is_private
            or ip.is_loopback
            or ip.is_link_local
            or ip.is_multicast
            or ip.is_reserved
            or ip.is_unspecified
        )

    @classmethod
    def _is_private_host(cls, hostname: str, check_dns: bool) -> bool:
        """Check if a hostname is, or resolves to, an internal address."""
        if hostname in cls.LOCALHOST_NAMES:
            return True

        try:
            ipaddress.ip_address(hostname)
        except ValueError:
            pass
        else:
            return cls._is_private_address(hostname)

        if not check_dns:
            return False

        try:
            info = socket.getaddrinfo(hostname, None)
        except socket.gaierror:
            logger.warning(f"Could not resolve hostname: {hostname}")
            return False

        return any(cls._is_private_address(sockaddr[0]) for _, _, _, _, sockaddr in info)

    @classmethod
    def validate_metadata_url(
        cls,
        url: Any,
        allowed_schemes: Optional[Iterable[str]] = None,
        allow_private_hosts: bool = False,
        check_dns: bool = True,
    ) -> str:
        """
        Validate a metadata document URL.

        Args:
            url: URL to validate.
            allowed_schemes: Accepted schemes (default: https, http).
            allow_private_hosts: If True, allow internal addresses such as
                a local development service.
            check_dns: If True, resolve the hostname and reject it when it
                points to an internal address.

        Returns:
            The stripped URL.

        Raises:
            TypeError: If URL is not a string.
            ValueError: If URL is malformed or not allowed.
        """
        if not isinstance(url, str):
            raise TypeError(f"URL must be string, got {type(url).__name__}")

        url = url.strip()
        if not url:
            raise ValueError("URL cannot be empty")

        parsed = urlparse(url)

        schemes = [s.lower() for s in (allowed_schemes or FetchConfig.DEFAULT_ALLOWED_SCHEMES)]
        if not parsed.scheme:
            raise ValueError("URL must include protocol scheme (e.g., https://)")
        if parsed.scheme.lower() not in schemes:
            raise ValueError(
                f"URL protocol '{parsed.scheme}' not allowed. "
                f"Allowed protocols: {', '.join(schemes)}"
            )

        if not parsed.hostname:
            raise ValueError("URL must include a hostname")

        if not allow_private_hosts and cls._is_private_host(parsed.hostname.lower(), check_dns):
            raise ValueError(
                f"URL points to a private or internal address: {parsed.hostname}. "
                f"Set metadata.allow_private_hosts to permit it."
            )

        return url

    @classmethod
    def is_url(cls, value: Any) -> bool:
        """Check if a string looks like an http(s) URL."""
        if not isinstance(value, str):
            return False
        return value.strip().lower().startswith(('http://', 'https://'))

    @classmethod
    def sanitize_url_for_logging(cls, url: str) -> str:
        """Strip credentials, query and fragment from a URL before logging it."""
        parsed = urlparse(url)
        netloc = parsed.hostname or ''
        if ':' in netloc:
            netloc = f"[{netloc}]"
        if parsed.port:
            netloc = f"{netloc}:{parsed.port}"
        return urlunparse(parsed._replace(netloc=netloc, query='', fragment=''))
