from edutech.core.registry_client.abc import RegistryClient, RegistryFetchError
from edutech.core.registry_client.real import HttpRegistryClient

__all__ = ["HttpRegistryClient", "RegistryClient", "RegistryFetchError"]
