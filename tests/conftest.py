"""
Pytest config.

Pins the repo root on sys.path so the local `client_authn/` package imports even when
pytest is invoked through a global entrypoint without an editable install.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


@pytest.fixture(autouse=True)
def _fresh_authn_config(monkeypatch: pytest.MonkeyPatch):
    """Config is cached per process; tests that set env vars need a clean load."""
    monkeypatch.delenv("AUTHN_STORAGE_SECRET", raising=False)
    from client_authn.config import load_authn_config

    load_authn_config.cache_clear()
    yield
    load_authn_config.cache_clear()
