"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import patch

from models.mapping import MappingConfiguration, BoundToColumn
from services import session_store


# ===================
# SAMPLE DATA
# ===================

@pytest.fixture
def sample_csv_text() -> str:
    """Small export with a title-like and an owner-like column."""
    return "Name,Owner\nFix bug,Alice\nAdd feature,Bob\n"


@pytest.fixture
def backlog_csv_text() -> str:
    """Wider export touching every built-in suggestion rule."""
    return (
        "Item Type,Title,Assigned To,Details,Priority,Story Points,Hours\n"
        "Bug,Login fails,alice@example.com,Stack trace attached,1,3,5\n"
        "User Story,Export report,bob@example.com,As a user I want CSV,2,8,13\n"
        "Task,Update docs,,,3,1,2\n"
    )


@pytest.fixture
def sample_rows() -> list:
    """Rows as the reader produces them for sample_csv_text."""
    return [
        {"Name": "Fix bug", "Owner": "Alice"},
        {"Name": "Add feature", "Owner": "Bob"},
    ]


@pytest.fixture
def title_config() -> MappingConfiguration:
    """Only Title mapped, to the Name column."""
    return MappingConfiguration(entries={"title": BoundToColumn("Name")})


# ===================
# SESSION STORE
# ===================

@pytest.fixture(autouse=True)
def clear_session_store():
    """Every test starts with no sessions."""
    session_store.clear_sessions()
    yield
    session_store.clear_sessions()


# ===================
# ANALYTICS
# ===================

@pytest.fixture
def captured_events() -> list:
    """
    Record analytics events instead of sending them.

    Usage:
        def test_something(captured_events):
            ...
            assert captured_events[0]["event"] == "file_uploaded"
    """
    events = []

    def fake_capture(event, distinct_id, properties=None):
        events.append({
            "event": event,
            "distinct_id": distinct_id,
            "properties": properties or {},
        })
        return True

    with patch("integrations.analytics.capture", side_effect=fake_capture):
        yield events


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/mapper/fields")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def uploaded_session(test_client, sample_csv_text) -> str:
    """Upload sample_csv_text and return the new session id."""
    response = test_client.post(
        "/api/mapper/sessions",
        files={"file": ("backlog.csv", sample_csv_text.encode("utf-8"), "text/csv")},
    )
    assert response.status_code == 201
    return response.json()["session_id"]
