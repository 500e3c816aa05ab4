"""Pytest fixtures for test configuration.

Global test safety measures:
 - Monkeypatch webbrowser.open to a no-op to guard against accidental flows
 - Strip LTS__ variables from the environment so defaults are deterministic
"""
import os
import webbrowser
from pathlib import Path

import pytest

from lts.config_types import AppConfig


def pytest_sessionstart(session):  # type: ignore[no-untyped-def]
    webbrowser.open = lambda *a, **k: True  # type: ignore[assignment]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith('LTS__') or key == 'LTS_ENABLE_DOTENV':
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Typed config isolated to tmp_path with dummy provider credentials."""
    return AppConfig.from_dict({
        'log_level': 'DEBUG',
        'secrets': {'directory': str(tmp_path / 'secrets')},
        'providers': {
            'spotify': {'client_id': 'dummy-id', 'client_secret': 'dummy-secret'},
            'lastfm': {'api_key': 'dummy-key', 'api_secret': 'dummy-secret'},
        },
    })
