import pytest

from natively.core.config import KEYS


@pytest.fixture
def clean_env(monkeypatch):
    """Remove the recognized keys; monkeypatch restores them afterwards"""
    for key in KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
