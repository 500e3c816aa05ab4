"""Login service: authenticate a service and persist its session."""

from __future__ import annotations
import logging
from typing import Protocol

from ..providers.base import ServiceLoader
from ..utils.output import Writer

logger = logging.getLogger(__name__)


class CallbackProvider(Protocol):
    """Waits for the OAuth redirect and returns the delivered code."""

    def read_code(self, code_param: str) -> str:
        ...  # pragma: no cover


def login(
    loader: ServiceLoader,
    service_name: str,
    redirect_url: str,
    write: Writer,
    code: str | None = None,
    callback: CallbackProvider | None = None,
) -> str:
    """Log in on service_name and return the account's username.

    Without a code the consent URL is written and the code is read from
    the callback provider. Closing the service persists the new session.

    Raises:
        AuthenticationError: If the code exchange fails
        ProfileReadError: If the username cannot be read afterwards
    """
    with loader.for_name(service_name) as service:
        if code is None:
            write(f"{service.name()} authentication URL: {service.create_auth_url(redirect_url)}")
            if callback is None:
                return ""
            code = callback.read_code(service.code_param())

        service.authenticate(code, redirect_url)
        username = service.get_username()
        write(f"Logged in on {service.name()} as {username}")

    logger.debug(f"Stored session for {service_name}")
    return username


__all__ = ["login", "CallbackProvider"]
