"""
OData Metadata Retrieval

This module obtains CSDL metadata text from a URL or a local file and hands
it to the CSDL parser. Transient HTTP failures are retried with exponential
backoff.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from constants import FetchConfig
from core.validators.url import URLValidator
from formats.csdl import CSDLParser, Schema

logger = logging.getLogger(__name__)


class MetadataFetchError(Exception):
    """Raised when a metadata document cannot be retrieved."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class TransientFetchError(Exception):
    """HTTP response that is worth retrying (429, 502, 503, 504)."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Transient error (HTTP {status_code}): {message}")


def _is_transient_error(exception: BaseException) -> bool:
    """Check if exception is a transient error that should be retried."""
    if isinstance(exception, TransientFetchError):
        return True
    if isinstance(exception, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)):
        return True
    return False


@dataclass
class MetadataClientConfig:
    """Configuration for metadata retrieval."""
    timeout: int = FetchConfig.DEFAULT_TIMEOUT_SECONDS
    max_retries: int = FetchConfig.DEFAULT_MAX_RETRIES
    retry_min_wait: float = FetchConfig.RETRY_MIN_WAIT_SECONDS
    retry_max_wait: float = FetchConfig.RETRY_MAX_WAIT_SECONDS
    allowed_schemes: Tuple[str, ...] = FetchConfig.DEFAULT_ALLOWED_SCHEMES
    allow_private_hosts: bool = False
    check_dns: bool = True
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MetadataClientConfig':
        """Create MetadataClientConfig from a dictionary."""
        metadata_config = config_dict.get('metadata', config_dict) or {}
        return cls(
            timeout=int(metadata_config.get('timeout', FetchConfig.DEFAULT_TIMEOUT_SECONDS)),
            max_retries=max(1, int(metadata_config.get('max_retries', FetchConfig.DEFAULT_MAX_RETRIES))),
            retry_min_wait=float(metadata_config.get('retry_min_wait', FetchConfig.RETRY_MIN_WAIT_SECONDS)),
            retry_max_wait=float(metadata_config.get('retry_max_wait', FetchConfig.RETRY_MAX_WAIT_SECONDS)),
            allowed_schemes=tuple(metadata_config.get('allowed_schemes', FetchConfig.DEFAULT_ALLOWED_SCHEMES)),
            allow_private_hosts=bool(metadata_config.get('allow_private_hosts', False)),
            check_dns=bool(metadata_config.get('check_dns', True)),
            headers=dict(metadata_config.get('headers', {})),
        )

    @classmethod
    def from_file(cls, config_path: str) -> 'MetadataClientConfig':
        """Load configuration from a JSON file."""
        if not config_path:
            raise ValueError("config_path cannot be empty")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")

        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration file must contain a JSON object, got {type(config_dict)}")

        return cls.from_dict(config_dict)


class MetadataClient:
    """
    Fetch CSDL metadata documents over HTTP.

    Example:
        >>> client = MetadataClient()
        >>> xml_text = client.fetch("https://services.odata.org/V4/TripPinService/$metadata")
    """

    def __init__(self, config: Optional[MetadataClientConfig] = None):
        self.config = config or MetadataClientConfig()

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.config.max_retries),
            wait=wait_exponential(
                multiplier=self.config.retry_min_wait,
                min=self.config.retry_min_wait,
                max=self.config.retry_max_wait,
            ),
            retry=retry_if_exception(_is_transient_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    def fetch(self, url: str) -> bytes:
        """
        Download a metadata document.

        Args:
            url: Metadata URL, typically ending in ``$metadata``.

        Returns:
            The raw response body. The XML parser decodes it using the
            document's encoding declaration.

        Raises:
            ValueError: If the URL fails validation.
            MetadataFetchError: On a non-success response, or when transient
                failures persist after all retries.
        """
        validated_url = URLValidator.validate_metadata_url(
            url,
            allowed_schemes=self.config.allowed_schemes,
            allow_private_hosts=self.config.allow_private_hosts,
            check_dns=self.config.check_dns,
        )
        safe_url = URLValidator.sanitize_url_for_logging(validated_url)

        try:
            for attempt in self._retrying():
                with attempt:
                    return self._get(validated_url, safe_url)
        except TransientFetchError as e:
            raise MetadataFetchError(
                f"Metadata request kept failing after {self.config.max_retries} attempt(s): {e}",
                url=safe_url,
                status_code=e.status_code,
            ) from e
        except requests.exceptions.Timeout as e:
            raise MetadataFetchError(
                f"Metadata request timed out after {self.config.timeout} seconds",
                url=safe_url,
                status_code=408,
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise MetadataFetchError(
                f"Failed to connect to metadata service: {e}",
                url=safe_url,
                status_code=503,
            ) from e

    def _get(self, url: str, safe_url: str) -> bytes:
        headers = {'Accept': FetchConfig.ACCEPT_HEADER}
        headers.update(self.config.headers)

        logger.debug(f"Fetching metadata: GET {safe_url}")
        try:
            response = requests.get(url, headers=headers, timeout=self.config.timeout)
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError):
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"Metadata request error: {e}")
            raise MetadataFetchError(f"Metadata request failed: {e}", url=safe_url) from e

        if response.status_code in FetchConfig.TRANSIENT_STATUS_CODES:
            raise TransientFetchError(response.status_code, response.reason or "")

        if not 200 <= response.status_code < 300:
            logger.error(f"Metadata request returned HTTP {response.status_code} for {safe_url}")
            raise MetadataFetchError(
                f"Metadata request returned HTTP {response.status_code}: {response.reason}",
                url=safe_url,
                status_code=response.status_code,
            )

        logger.info(f"Fetched {len(response.content)} bytes of metadata from {safe_url}")
        return response.content


def read_schemas_from_url(url: str, config: Optional[MetadataClientConfig] = None) -> List[Schema]:
    """Fetch a metadata document and parse its schemas."""
    content = MetadataClient(config).fetch(url)
    return CSDLParser().parse(content, URLValidator.sanitize_url_for_logging(url))


def read_schemas_from_file(path: str) -> List[Schema]:
    """Read a metadata file and parse its schemas."""
    return CSDLParser().parse_file(path)


def read_schemas(source: str, config: Optional[MetadataClientConfig] = None) -> List[Schema]:
    """Parse schemas from a URL or a local path, whichever ``source`` is."""
    if URLValidator.is_url(source):
        return read_schemas_from_url(source, config)
    return read_schemas_from_file(source)
