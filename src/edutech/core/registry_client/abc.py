from abc import ABC, abstractmethod
from typing import Any


class RegistryFetchError(RuntimeError):
    """Raised when the registry document cannot be downloaded or decoded."""


class RegistryClient(ABC):
    """Downloads the raw registry document."""

    @abstractmethod
    def fetch_document(self, url: str) -> dict[str, Any]:
        """Fetch and JSON-decode the document at `url`.

        Raises:
            RegistryFetchError: On transport failure, a non-200 status, or a
                body that is not a JSON object
        """
        ...
