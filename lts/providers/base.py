"""Service abstraction layer.

This module defines the provider-neutral Track model, the capability
contract every streaming backend implements, and the name-keyed registry
that turns a service name into a live, credential-bound instance.

Key abstractions:
- Track: artist/name pair, the only thing carried between services
- Service: per-invocation session object for one backend
- ServiceLoader: resolves service names to Service instances
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, List, Mapping

from ..errors import UnknownServiceError
from ..secrets import SecretsConfig, SecretsLoader
from ..utils.normalization import normalize_service_name

logger = logging.getLogger(__name__)

# ---------------- Domain Model -----------------

@dataclass(frozen=True)
class Track:
    artist: str
    name: str

    def __str__(self) -> str:
        return f"{self.artist} - {self.name}"

# ---------------- Capability contract -----------------

class Service(ABC):
    """Session object for one streaming backend.

    A Service is created per command invocation, optionally restored from
    its secrets unit, and closed exactly once. Use it as a context manager
    so close() runs on every exit path:

        with loader.for_name('spotify') as service:
            tracks = service.get_loved_tracks(10, 1)
    """

    @abstractmethod
    def name(self) -> str:
        """Human-readable backend label (e.g. 'Spotify')."""

    @abstractmethod
    def authenticated(self) -> bool:
        """True when a usable session exists (fresh or restored)."""

    @abstractmethod
    def create_auth_url(self, redirect_url: str) -> str:
        """Build the consent URL the user visits to authorize access."""

    @abstractmethod
    def code_param(self) -> str:
        """Query parameter name carrying the code on the OAuth callback."""

    @abstractmethod
    def authenticate(self, code: str, redirect_url: str) -> None:
        """Exchange an authorization code for a session.

        Raises:
            AuthenticationError: If the exchange fails
        """

    @abstractmethod
    def get_username(self) -> str:
        """Return the logged-in user's display name.

        Raises:
            ProfileReadError: If the profile cannot be read
        """

    @abstractmethod
    def get_loved_tracks(self, limit: int, page: int) -> List[Track]:
        """Return one page of loved tracks.

        Args:
            limit: Tracks per page
            page: 1-based page number (offset = (page - 1) * limit)

        Raises:
            TrackFetchError: If the page cannot be fetched
        """

    @abstractmethod
    def love_track(self, track: Track) -> None:
        """Find track by artist and name and mark it as loved.

        Finding no match is not an error; the call is a no-op then.

        Raises:
            TrackLoveError: If searching or loving fails
        """

    @abstractmethod
    def close(self) -> None:
        """Persist session state; no-op when not authenticated.

        Raises:
            TokenPersistenceError: If session material cannot be saved
        """

    def __enter__(self) -> Service:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # Do not mask the error that is already propagating
        try:
            self.close()
        except Exception as close_error:
            logger.warning(f"Failed to close {self.name()}: {close_error}")

# ---------------- Service registry -----------------

ServiceFactory = Callable[[SecretsConfig], Service]


class ServiceLoader(ABC):
    """Loads service instances by name."""

    @abstractmethod
    def for_name(self, service_name: str) -> Service:
        """Return a new service instance for service_name.

        Raises:
            UnknownServiceError: If no such service is registered
            ConfigLoadError: If the service's secrets cannot be loaded
        """

    @abstractmethod
    def names(self) -> List[str]:
        """Registered service names, sorted."""


class MapServiceLoader(ServiceLoader):
    """Registry backed by a fixed name -> factory mapping.

    Each factory receives the secrets unit ``secrets-<name>`` for its service.
    """

    def __init__(self, factories: Mapping[str, ServiceFactory], secrets_loader: SecretsLoader):
        self._factories = MappingProxyType(
            {normalize_service_name(name): factory for name, factory in factories.items()}
        )
        self.secrets_loader = secrets_loader

    def for_name(self, service_name: str) -> Service:
        key = normalize_service_name(service_name)
        factory = self._factories.get(key)
        if factory is None:
            raise UnknownServiceError(service_name)

        secrets = self.secrets_loader.load(f"secrets-{key}")
        logger.debug(f"Creating service '{key}'")
        return factory(secrets)

    def names(self) -> List[str]:
        return sorted(self._factories.keys())


__all__ = [
    'Track', 'Service', 'ServiceFactory', 'ServiceLoader', 'MapServiceLoader',
]
