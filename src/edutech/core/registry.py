"""Portal registry models and the on-disk registry cache.

The registry is a remote JSON document listing every portal that can be
added, with one snapshot locator per theme:

    {"portals": {"cbt": {"description": "...", "version": "1.2.0",
                         "themes": {"default": "org/cbt-default"}}}}

RegistryCache keeps the last good copy next to the workspace root, stamped
with `lastFetched`, and falls back to it whenever the network fails.
"""

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from edutech.core.errors import RegistryUnavailableError
from edutech.core.fs_utils import atomic_write_text
from edutech.core.registry_client.abc import RegistryClient, RegistryFetchError
from edutech.core.time.abc import Time
from edutech.core.user_feedback.abc import UserFeedback

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = timedelta(hours=1)
LAST_FETCHED_KEY = "lastFetched"


class PortalDescriptor(BaseModel):
    """One registry entry."""

    model_config = ConfigDict(extra="ignore")

    description: str = "No description"
    version: str = "1.0.0"
    themes: dict[str, str] = Field(default_factory=dict)


class Registry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    portals: dict[str, PortalDescriptor] = Field(default_factory=dict)

    def theme_names(self) -> dict[str, list[str]]:
        """Portal name -> its theme names, both sorted."""
        return {
            name: sorted(descriptor.themes)
            for name, descriptor in sorted(self.portals.items())
        }


@dataclass(frozen=True)
class CachedRegistry:
    registry: Registry
    last_fetched: datetime


def is_fresh(entry: CachedRegistry, now: datetime, ttl: timedelta = DEFAULT_CACHE_TTL) -> bool:
    """True when the cache entry is younger than `ttl` at `now`."""
    return now - entry.last_fetched < ttl


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_registry(document: dict[str, Any]) -> Registry:
    """Validate a decoded registry document.

    Raises:
        ValidationError: If the document does not have the registry shape
    """
    return Registry.model_validate(document)


class RegistryCache:
    """Registry access with a one-file cache and offline fallback.

    Examples:
        >>> cache = RegistryCache(cache_path, url, client, time, feedback)
        >>> registry = cache.fetch()
        >>> registry.portals["cbt"].themes
        {'default': 'org/cbt-default'}
    """

    def __init__(
        self,
        cache_path: Path,
        registry_url: str | None,
        client: RegistryClient,
        time: Time,
        feedback: UserFeedback,
        *,
        ttl: timedelta = DEFAULT_CACHE_TTL,
    ) -> None:
        self._cache_path = cache_path
        self._registry_url = registry_url
        self._client = client
        self._time = time
        self._feedback = feedback
        self._ttl = ttl

    @property
    def cache_path(self) -> Path:
        return self._cache_path

    def load_cached(self) -> CachedRegistry | None:
        """Read the cache file; a missing or corrupt file yields None."""
        if not self._cache_path.exists():
            return None
        try:
            raw = json.loads(self._cache_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.debug("Ignoring unreadable registry cache %s: %s", self._cache_path, e)
            return None
        if not isinstance(raw, dict):
            return None

        last_fetched = _parse_timestamp(raw.get(LAST_FETCHED_KEY))
        if last_fetched is None:
            logger.debug("Registry cache %s has no valid %s", self._cache_path, LAST_FETCHED_KEY)
            return None

        document = {key: value for key, value in raw.items() if key != LAST_FETCHED_KEY}
        try:
            registry = parse_registry(document)
        except ValidationError as e:
            logger.debug("Ignoring invalid registry cache %s: %s", self._cache_path, e)
            return None
        return CachedRegistry(registry=registry, last_fetched=last_fetched)

    def cache_age(self, now: datetime | None = None) -> timedelta | None:
        """Age of the cached copy, or None when there is no usable cache."""
        entry = self.load_cached()
        if entry is None:
            return None
        return (now or self._time.now()) - entry.last_fetched

    def fetch(self, *, force_refresh: bool = False) -> Registry:
        """Return the registry, preferring a fresh cache unless forced.

        Raises:
            RegistryUnavailableError: If the download fails and no usable
                cache exists
        """
        now = self._time.now()
        if not force_refresh:
            cached = self.load_cached()
            if cached is not None and is_fresh(cached, now, self._ttl):
                self._feedback.info("Using cached registry (use --refresh to update)")
                return cached.registry

        try:
            registry = self._download(now)
        except RegistryFetchError as e:
            self._feedback.warning(f"Failed to fetch registry: {e}")
            fallback = self.load_cached()
            if fallback is None:
                raise RegistryUnavailableError() from e
            self._feedback.info("Using cached registry...")
            return fallback.registry
        return registry

    def _download(self, now: datetime) -> Registry:
        if not self._registry_url:
            raise RegistryFetchError("no registry_url configured")

        self._feedback.info("Fetching portal registry...")
        document = self._client.fetch_document(self._registry_url)
        try:
            registry = parse_registry(document)
        except ValidationError as e:
            raise RegistryFetchError(f"invalid registry document: {e}") from e

        payload = {**document, LAST_FETCHED_KEY: now.isoformat()}
        try:
            atomic_write_text(self._cache_path, json.dumps(payload, indent=2) + "\n")
        except OSError as e:
            self._feedback.warning(f"Could not write registry cache {self._cache_path}: {e}")
        else:
            logger.debug("Cached registry at %s", self._cache_path)
        return registry
