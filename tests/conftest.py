# tests/conftest.py

"""Shared pytest fixtures for all importer tests."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_flipkart_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip FLIPKART_* variables so a local .env never leaks into tests."""
    for name in list(os.environ):
        if name.startswith("FLIPKART_"):
            monkeypatch.delenv(name, raising=False)
