"""Shared pytest fixtures for freshservice-tools tests."""

from unittest.mock import patch

import pytest

from freshservice_tools.freshservice.base import FreshserviceClient
from freshservice_tools.freshservice.credentials import FreshserviceCredentials

BASE_URL = "https://acme.freshservice.com"
API_URL = f"{BASE_URL}/api/v2"


@pytest.fixture
def credentials() -> FreshserviceCredentials:
    """Connection profile with an API key and throttling disabled."""
    return FreshserviceCredentials(base_url=BASE_URL, api_key="test-key", throttle=False)


@pytest.fixture
def throttled_credentials() -> FreshserviceCredentials:
    """Connection profile with throttling enabled."""
    return FreshserviceCredentials(base_url=BASE_URL, api_key="test-key", throttle=True)


@pytest.fixture
def client(credentials: FreshserviceCredentials) -> FreshserviceClient:
    """Engine client for testing."""
    return FreshserviceClient(credentials=credentials)


@pytest.fixture
def no_sleep():
    """Patch time.sleep so retry and throttle waits return immediately."""
    with patch("time.sleep") as mock:
        yield mock


@pytest.fixture
def sample_ticket() -> dict:
    """Sample Freshservice ticket record."""
    return {
        "id": 42,
        "subject": "Printer on fire",
        "status": 2,
        "priority": 4,
        "requester_id": 1001,
        "created_at": "2026-01-15T10:30:00Z",
        "updated_at": "2026-01-16T14:45:00Z",
    }
