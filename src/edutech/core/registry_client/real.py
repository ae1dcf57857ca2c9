"""HTTP registry client backed by httpx."""

import json
import logging
from typing import Any

import httpx

from edutech.core.registry_client.abc import RegistryClient, RegistryFetchError

logger = logging.getLogger(__name__)


class HttpRegistryClient(RegistryClient):
    def __init__(self, *, timeout: float = 30.0) -> None:
        self._timeout = timeout

    def fetch_document(self, url: str) -> dict[str, Any]:
        logger.debug("Fetching registry from %s", url)
        try:
            response = httpx.get(url, timeout=self._timeout, follow_redirects=True)
        except httpx.HTTPError as e:
            raise RegistryFetchError(f"Request to {url} failed: {e}") from e

        if response.status_code != 200:
            raise RegistryFetchError(f"Registry returned HTTP {response.status_code}")

        try:
            document = response.json()
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RegistryFetchError(f"Registry response is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise RegistryFetchError("Registry response is not a JSON object")
        return document
