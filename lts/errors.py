"""Exception hierarchy shared by providers, services and the CLI.

Every failure the application reports to the user derives from LtsError so
the CLI has a single place to turn errors into a non-zero exit.
"""

from __future__ import annotations


class LtsError(Exception):
    """Base class for all loved-track-sync errors."""


class UnknownServiceError(LtsError):
    """No service is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f'unknown service "{name}"')
        self.name = name


class ConfigLoadError(LtsError):
    """A secrets unit could not be read from disk."""


class ConfigurationError(LtsError):
    """Required configuration (client credentials) is missing or invalid."""


class NotAuthenticatedError(LtsError):
    """An operation needs a logged-in service."""

    def __init__(self, service_name: str):
        super().__init__(f"not logged in on {service_name}")
        self.service_name = service_name


class AuthenticationError(LtsError):
    """Exchanging an authorization code for a session failed."""


class ProfileReadError(LtsError):
    """The logged-in user's profile could not be read."""


class TrackFetchError(LtsError):
    """A page of loved tracks could not be fetched."""


class TrackLoveError(LtsError):
    """Searching or loving a track on the target service failed."""


class TokenPersistenceError(LtsError):
    """Session material could not be written back to the secrets unit."""


class PlaylistError(LtsError):
    """Creating or filling a derivative playlist failed."""


class PlaylistNotFoundError(PlaylistError):
    """A playlist the command depends on does not exist remotely."""


__all__ = [
    "LtsError",
    "UnknownServiceError",
    "ConfigLoadError",
    "ConfigurationError",
    "NotAuthenticatedError",
    "AuthenticationError",
    "ProfileReadError",
    "TrackFetchError",
    "TrackLoveError",
    "TokenPersistenceError",
    "PlaylistError",
    "PlaylistNotFoundError",
]
