"""
HTTP transport for PANClient.

One synchronous call per request against ``https://<host>/api/``. No retry
and no backoff: failures are surfaced as TransportError with the original
requests exception chained.
"""

import logging
from typing import Dict, Optional

import requests

from ..constants import DEFAULT_VALUES
from .exceptions import TransportError
from .logging_utils import log_request

logger = logging.getLogger("panclient")


class HttpTransport:
    """
    Send XML API requests with ``requests``.

    Certificate verification is on unless ``verify_ssl`` is explicitly set
    to False or to a CA bundle path.
    """

    def __init__(
        self,
        host: str,
        verify_ssl=True,
        timeout: float = DEFAULT_VALUES["TIMEOUT"],
        port: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the transport.

        Args:
            host: Hostname or IP address of the device
            verify_ssl: True, False, or a path to a CA bundle
            timeout: Seconds to wait for connect and read
            port: HTTPS port when not 443
            session: Optional pre-configured requests session
        """
        if not host:
            raise ValueError("Host must not be empty")
        self.host = host
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        authority = f"{host}:{port}" if port else host
        self.base_url = f"https://{authority}/api/"
        self._session = session or requests.Session()
        if verify_ssl is False:
            logger.warning(f"Certificate verification is disabled for {host}")

    def send(self, method: str, params: Dict[str, str]) -> bytes:
        """
        Perform one API call.

        Args:
            method: GET (parameters in the query string) or POST (form data)
            params: Request parameters including the API key

        Returns:
            Raw response body

        Raises:
            TransportError: On connection, TLS, timeout or HTTP status failures
        """
        log_request(method, params)
        try:
            if method == "POST":
                response = self._session.post(
                    self.base_url, data=params, verify=self.verify_ssl, timeout=self.timeout
                )
            else:
                response = self._session.get(
                    self.base_url, params=params, verify=self.verify_ssl, timeout=self.timeout
                )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            # The XML API answers 400/403 with a response document worth classifying
            if e.response is not None and e.response.status_code in (400, 403) and e.response.content:
                logger.debug(f"HTTP {e.response.status_code} from {self.host}, passing body to the classifier")
                return e.response.content
            logger.error(f"Request to {self.host} failed: {e}")
            raise TransportError(str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {self.host} failed: {e}")
            raise TransportError(str(e)) from e

        logger.debug(f"Received {len(response.content)} bytes from {self.host}")
        return response.content

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
