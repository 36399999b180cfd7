"""HTTP client for the json2video API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests import Response
from requests.exceptions import ConnectionError, RequestException, Timeout

DEFAULT_BASE_URL = "https://api.json2video.com/v2"

LOGGER = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Raised when a json2video request fails in transport or returns no JSON."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class Json2VideoClient:
    """Small wrapper around the json2video HTTP API.

    The API key is passed on every call rather than held by the client, so a
    single client serves requests carrying different keys. Non-2xx responses
    are not raised: json2video reports failures through the ``success`` flag
    of the JSON body, which callers inspect.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def create_movie(self, payload: Dict[str, Any], api_key: str) -> Any:
        """POST `/movies` to start a render job."""
        return self._request("POST", "/movies", api_key, json=payload)

    def get_movie(self, project: str, api_key: str) -> Any:
        """GET `/movies?project=<id>` for a render job's status."""
        return self._request("GET", "/movies", api_key, params={"project": project})

    def create_template(self, name: str, description: str, api_key: str) -> Any:
        """POST `/templates`."""
        return self._request(
            "POST",
            "/templates",
            api_key,
            json={"name": name, "description": description},
        )

    def list_templates(self, api_key: str) -> Any:
        """GET `/templates`."""
        return self._request("GET", "/templates", api_key)

    def close(self) -> None:
        self._session.close()

    def _request(self, method: str, endpoint: str, api_key: str, **kwargs) -> Any:
        url = f"{self.base_url}{endpoint}"
        headers = {"x-api-key": api_key}
        if "json" in kwargs:
            headers["Content-Type"] = "application/json"

        LOGGER.debug("%s %s", method, url)
        try:
            response: Response = self._session.request(
                method,
                url,
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except Timeout:
            raise ApiClientError("Request timed out")
        except ConnectionError:
            raise ApiClientError(f"Cannot connect to {self.base_url}")
        except RequestException as exc:
            raise ApiClientError(f"Request failed: {exc}")

        try:
            return response.json()
        except ValueError:
            raise ApiClientError(
                f"Non-JSON response ({response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
