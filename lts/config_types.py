"""Typed configuration dataclasses for loved-track-sync.

Provides strongly-typed configuration objects that can be used throughout
the application for better type safety and IDE support.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Dict, Any


@dataclass
class SecretsSettings:
    """Where per-service session secrets are persisted."""
    directory: str = "data/secrets"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CallbackSettings:
    """Local OAuth callback server used by interactive login."""
    scheme: str = "http"
    host: str = "127.0.0.1"
    port: int = 9876
    path: str = "/callback"
    timeout_seconds: int = 300

    def redirect_url(self) -> str:
        """Build the redirect URL registered with each provider."""
        path = self.path if self.path.startswith('/') else '/' + self.path
        return f"{self.scheme}://{self.host}:{self.port}{path}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SpotifySettings:
    """Spotify OAuth application credentials."""
    client_id: str | None = None
    client_secret: str | None = None
    scope: str = "user-read-private user-library-read user-library-modify playlist-modify-public user-top-read"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class LastfmSettings:
    """Last.fm API account credentials."""
    api_key: str | None = None
    api_secret: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProvidersConfig:
    """Configuration for all providers."""
    spotify: SpotifySettings = field(default_factory=SpotifySettings)
    lastfm: LastfmSettings = field(default_factory=LastfmSettings)

    def to_dict(self) -> Dict[str, Any]:
        return {"spotify": self.spotify.to_dict(), "lastfm": self.lastfm.to_dict()}


@dataclass
class AppConfig:
    """Root application configuration with all subsections."""
    log_level: str = "INFO"
    secrets: SecretsSettings = field(default_factory=SecretsSettings)
    callback: CallbackSettings = field(default_factory=CallbackSettings)
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary.

        Returns:
            Nested dict structure matching config format
        """
        return {
            "log_level": self.log_level,
            "secrets": self.secrets.to_dict(),
            "callback": self.callback.to_dict(),
            "providers": self.providers.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create typed config from dictionary.

        Unknown keys inside a section are ignored so stray environment
        variables do not break start-up.

        Args:
            data: Dictionary config (from load_config)

        Returns:
            Typed AppConfig instance
        """
        providers_data = data.get("providers", {})
        return cls(
            log_level=data.get("log_level", "INFO"),
            secrets=_build(SecretsSettings, data.get("secrets", {})),
            callback=_build(CallbackSettings, data.get("callback", {})),
            providers=ProvidersConfig(
                spotify=_build(SpotifySettings, providers_data.get("spotify", {})),
                lastfm=_build(LastfmSettings, providers_data.get("lastfm", {})),
            ),
        )


def _build(settings_cls, values: Dict[str, Any]):
    known = settings_cls.__dataclass_fields__.keys()
    return settings_cls(**{k: v for k, v in (values or {}).items() if k in known})


__all__ = [
    "AppConfig",
    "SecretsSettings",
    "CallbackSettings",
    "SpotifySettings",
    "LastfmSettings",
    "ProvidersConfig",
]
