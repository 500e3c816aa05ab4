"""Authentication helpers (local OAuth callback server)."""

from .callback import CallbackServer

__all__ = ["CallbackServer"]
