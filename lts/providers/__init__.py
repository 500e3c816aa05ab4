"""Service abstraction public API.

build_service_loader() wires the built-in backends (Spotify, Last.fm) into
a registry bound to the application config. Additional backends register
by adding a factory to the mapping.
"""

from __future__ import annotations

from .base import (
    Track,
    Service,
    ServiceFactory,
    ServiceLoader,
    MapServiceLoader,
)
from .lastfm import LastfmService
from .spotify import SpotifyService
from ..config_types import AppConfig
from ..secrets import JsonSecretsLoader


def build_service_loader(config: AppConfig) -> MapServiceLoader:
    """Create the registry of available services.

    Args:
        config: Typed application config; factories read their provider
            credentials from it when a service is constructed.
    """
    factories = {
        "spotify": lambda secrets: SpotifyService(secrets, config.providers.spotify),
        "lastfm": lambda secrets: LastfmService(secrets, config.providers.lastfm),
    }
    return MapServiceLoader(factories, JsonSecretsLoader(config.secrets.directory))


__all__ = [
    "Track",
    "Service",
    "ServiceFactory",
    "ServiceLoader",
    "MapServiceLoader",
    "build_service_loader",
]
