"""Spotify provider package.

This package contains all Spotify-specific logic:
- auth.py: OAuth authorization-code flow and token model
- client.py: Web API client
- service.py: Service implementation and session lifecycle
"""

from .auth import SpotifyAuthenticator, SpotifyToken
from .client import SpotifyAPIClient
from .service import SpotifyService

__all__ = [
    "SpotifyAuthenticator",
    "SpotifyToken",
    "SpotifyAPIClient",
    "SpotifyService",
]
