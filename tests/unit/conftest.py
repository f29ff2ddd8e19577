"""Fixtures shared by the unit tests."""
import pytest

from timetracker.config import settings


@pytest.fixture(autouse=True)
def without_transactions(monkeypatch):
    """Unit tests run against mocks, which cannot open client sessions."""
    monkeypatch.setattr(settings, "mongodb_transactions", False)
