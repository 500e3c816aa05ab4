"""Local HTTP callback server for OAuth-style logins.

Providers redirect the browser to ``http://127.0.0.1:<port>/callback`` with
the authorization code in a provider-specific query parameter (``code`` for
Spotify, ``token`` for Last.fm). The server captures that value.
"""

from __future__ import annotations
import logging
import threading
import time
from http.server import HTTPServer, BaseHTTPRequestHandler
from urllib.parse import urlparse, parse_qs
from typing import Optional

from ..config_types import CallbackSettings
from ..errors import AuthenticationError

logger = logging.getLogger(__name__)


class OAuthServer(HTTPServer):
    def __init__(self, server_address, RequestHandlerClass, code_param: str, path: str):
        super().__init__(server_address, RequestHandlerClass)
        self.code_param = code_param
        self.callback_path = path
        self.code: Optional[str] = None
        self.error: Optional[str] = None
        self.error_description: Optional[str] = None


class OAuthHandler(BaseHTTPRequestHandler):
    server: OAuthServer

    def do_GET(self):  # type: ignore[override]
        parsed = urlparse(self.path)
        if parsed.path != self.server.callback_path:
            # Browsers also ask for /favicon.ico and similar
            self.send_response(404)
            self.end_headers()
            return
        qs = parse_qs(parsed.query)
        code = qs.get(self.server.code_param, [None])[0]
        error = qs.get('error', [None])[0]
        if code is not None:
            self.server.code = code
        if error is not None:
            self.server.error = error
            self.server.error_description = qs.get('error_description', [None])[0]
        logger.debug(f"Callback received path={parsed.path} code={'yes' if code else 'no'} error={error}")
        self.send_response(200)
        self.send_header('Content-Type', 'text/plain')
        self.end_headers()
        if error:
            self.wfile.write(b"Authorization failed. You may close this window.")
        else:
            self.wfile.write(b"You may close this window.")

    def log_message(self, format, *args):  # silence default logging
        return


class CallbackServer:
    """Reads one authorization code from the browser redirect."""

    def __init__(self, settings: CallbackSettings, poll_interval: float = 0.05):
        self.settings = settings
        self.poll_interval = poll_interval

    def read_code(self, code_param: str) -> str:
        """Serve the callback until a code arrives.

        Raises:
            AuthenticationError: If the provider reports an error or the
                timeout expires first
        """
        path = self.settings.path if self.settings.path.startswith('/') else '/' + self.settings.path
        server = OAuthServer((self.settings.host, self.settings.port), OAuthHandler, code_param, path)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        logger.info(f"Waiting for authorization on {self.settings.redirect_url()} ...")
        start = time.time()
        try:
            while server.code is None:
                if server.error:
                    desc = server.error_description or ''
                    raise AuthenticationError(f"authorization error: {server.error} {desc}".strip())
                if time.time() - start > self.settings.timeout_seconds:
                    raise AuthenticationError("authorization timeout expired")
                time.sleep(self.poll_interval)
            return server.code
        finally:
            server.shutdown()
            server.server_close()


__all__ = ["CallbackServer", "OAuthServer", "OAuthHandler"]
