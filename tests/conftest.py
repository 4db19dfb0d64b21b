"""Shared fixtures: every test starts from a clean environment-derived config."""

import pytest

from function.config import reset_config

_ENV_VARS = (
    "THINGS_STORAGE_CONNECTION_STRING",
    "THINGS_STORAGE_ACCOUNT",
    "THINGS_TABLE_ENDPOINT",
    "THINGS_TABLE_NAME",
    "THINGS_CREATE_TABLE",
    "USE_MANAGED_IDENTITY",
    "AZURE_CLIENT_ID",
    "APP_VERSION",
    "SERVICE_NAME",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
