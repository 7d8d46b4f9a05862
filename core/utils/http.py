import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

class ApiClient:
    """Thin JSON-over-HTTP wrapper shared by the external providers.

    Every call carries an explicit timeout. Failures surface as
    requests.RequestException (network errors, timeouts, non-2xx statuses)
    or ValueError (a body that is not JSON); callers decide how to degrade.
    """

    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None,
                 headers: Optional[Dict[str, str]] = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        if headers:
            self.session.headers.update(headers)

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET a URL and decode the JSON body.

        Args:
            url: The URL to fetch
            params: Query string parameters

        Returns:
            The decoded JSON document
        """
        logger.debug("GET %s", url)
        response = self.session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def post_json(self, url: str, payload: Dict[str, Any], params: Optional[Dict[str, Any]] = None) -> Any:
        """POST a JSON document and decode the JSON reply"""
        logger.debug("POST %s", url)
        response = self.session.post(url, json=payload, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def close(self) -> None:
        self.session.close()
