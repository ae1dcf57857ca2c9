from typing import Any

from edutech.core.registry_client.abc import RegistryClient, RegistryFetchError


class FakeRegistryClient(RegistryClient):
    """Serves registry documents from memory.

    Constructor Injection:
    - documents: url -> decoded document
    - error: when set, every fetch raises RegistryFetchError with this text

    Unknown urls fail as if the server answered 404.
    """

    def __init__(
        self,
        *,
        documents: dict[str, dict[str, Any]] | None = None,
        error: str | None = None,
    ) -> None:
        self._documents = documents or {}
        self._error = error
        self._fetch_calls: list[str] = []

    @property
    def fetch_calls(self) -> list[str]:
        return list(self._fetch_calls)

    def fetch_document(self, url: str) -> dict[str, Any]:
        self._fetch_calls.append(url)
        if self._error is not None:
            raise RegistryFetchError(self._error)
        if url not in self._documents:
            raise RegistryFetchError("Registry returned HTTP 404")
        return self._documents[url]
