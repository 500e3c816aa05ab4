"""Last.fm provider package."""

from .client import LastfmAPIClient, LastfmAPIError
from .service import LastfmService

__all__ = ["LastfmAPIClient", "LastfmAPIError", "LastfmService"]
