"""ML Plugin API Client - Transport for ML expression commands."""

import abc
import logging
from typing import Dict, Optional
import requests

import config

logger = logging.getLogger(__name__)


class AbstractPluginTransport(abc.ABC):
    """Abstract base class for plugin transport implementations."""

    @abc.abstractmethod
    def send(self, path: str, body: bytes) -> bytes:
        """
        Send a JSON payload to the plugin API.

        Args:
            path: Resource path, e.g. "/proxy/api/v1/outlier"
            body: Serialized JSON request body

        Returns:
            Raw response body

        Raises:
            PluginTransportError: If the request fails
        """
        raise NotImplementedError


class HTTPPluginTransport(AbstractPluginTransport):
    """HTTP-based transport to the ML plugin resource API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        cookies: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize plugin transport.

        Args:
            base_url: Base URL of the plugin resource API. If None, uses config.
            timeout: Request timeout in seconds. If None, uses config.
            cookies: Cookies forwarded with every request
        """
        self.base_url = (base_url or config.get_plugin_api_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else config.get_plugin_timeout()
        self.cookies = dict(cookies or {})

    def send(self, path: str, body: bytes) -> bytes:
        url = f"{self.base_url}{path}"

        logger.info(f"Calling plugin API {url} ({len(body)} bytes)")

        try:
            response = requests.post(
                url,
                data=body,
                headers={"Content-Type": "application/json"},
                cookies=self.cookies,
                timeout=self.timeout,
            )
            response.raise_for_status()

            logger.info(f"Plugin API {url} responded with status {response.status_code}")
            return response.content

        except requests.exceptions.HTTPError as e:
            logger.error(f"HTTP error calling plugin API {url}: {e}")
            raise PluginTransportError(
                f"Plugin API responded with status {e.response.status_code}"
            ) from e

        except requests.exceptions.RequestException as e:
            logger.error(f"Network error calling plugin API {url}: {e}")
            raise PluginTransportError(f"Network error: {e}") from e


class PluginTransportError(Exception):
    """Exception raised for errors in the plugin transport."""
    pass
