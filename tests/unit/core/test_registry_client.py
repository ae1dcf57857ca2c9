"""Tests for the httpx-backed registry client."""

from unittest.mock import patch

import httpx
import pytest

from edutech.core.registry_client.abc import RegistryFetchError
from edutech.core.registry_client.real import HttpRegistryClient

URL = "https://registry.example.test/registry.json"


def _response(status_code: int, **kwargs: object) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("GET", URL), **kwargs)


def test_fetch_document_returns_decoded_object() -> None:
    with patch("edutech.core.registry_client.real.httpx.get") as mock_get:
        mock_get.return_value = _response(200, json={"portals": {}})

        document = HttpRegistryClient(timeout=5.0).fetch_document(URL)

    assert document == {"portals": {}}
    mock_get.assert_called_once_with(URL, timeout=5.0, follow_redirects=True)


def test_fetch_document_rejects_non_200() -> None:
    with patch("edutech.core.registry_client.real.httpx.get") as mock_get:
        mock_get.return_value = _response(503, text="unavailable")

        with pytest.raises(RegistryFetchError, match="Registry returned HTTP 503"):
            HttpRegistryClient().fetch_document(URL)


def test_fetch_document_wraps_transport_errors() -> None:
    with patch("edutech.core.registry_client.real.httpx.get") as mock_get:
        mock_get.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(RegistryFetchError, match="connection refused"):
            HttpRegistryClient().fetch_document(URL)


def test_fetch_document_rejects_invalid_json() -> None:
    with patch("edutech.core.registry_client.real.httpx.get") as mock_get:
        mock_get.return_value = _response(200, text="<html>not json</html>")

        with pytest.raises(RegistryFetchError, match="not valid JSON"):
            HttpRegistryClient().fetch_document(URL)


def test_fetch_document_rejects_non_object_body() -> None:
    with patch("edutech.core.registry_client.real.httpx.get") as mock_get:
        mock_get.return_value = _response(200, json=["cbt", "academic"])

        with pytest.raises(RegistryFetchError, match="not a JSON object"):
            HttpRegistryClient().fetch_document(URL)


def test_fetch_document_rejects_undecodable_body() -> None:
    with patch("edutech.core.registry_client.real.httpx.get") as mock_get:
        mock_get.return_value = _response(200, content=b'{"portals": {"\xc3\x28": {}}}')

        with pytest.raises(RegistryFetchError, match="not valid JSON"):
            HttpRegistryClient().fetch_document(URL)
