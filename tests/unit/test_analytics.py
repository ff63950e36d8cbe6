"""
Unit tests for the PostHog analytics integration.
"""

from unittest.mock import patch, MagicMock

import pytest
import requests

from config.settings import Settings
from integrations import analytics


@pytest.fixture
def enabled_settings() -> Settings:
    return Settings(
        posthog_api_key="phc_test",
        posthog_host="https://posthog.example.com/",
        environment="production",
    )


@pytest.fixture
def mock_post():
    with patch("integrations.analytics.requests.post") as mock:
        mock.return_value = MagicMock(status_code=200)
        yield mock


class TestSettingsGate:
    """When analytics is switched on."""

    def test_disabled_without_key(self):
        assert not Settings(posthog_api_key=None, environment="production").analytics_enabled

    def test_disabled_in_development(self):
        assert not Settings(posthog_api_key="phc_test", environment="development").analytics_enabled

    def test_enabled(self, enabled_settings):
        assert enabled_settings.analytics_enabled


class TestCapture:
    """Tests for capture."""

    def test_skips_when_disabled(self, mock_post):
        disabled = Settings(posthog_api_key=None, environment="development")

        with patch("integrations.analytics.get_settings", return_value=disabled):
            assert analytics.capture("file_uploaded", "session-1") is False

        mock_post.assert_not_called()

    def test_posts_event(self, enabled_settings, mock_post):
        with patch("integrations.analytics.get_settings", return_value=enabled_settings):
            assert analytics.capture("file_uploaded", "session-1", {"row_count": 2}) is True

        mock_post.assert_called_once_with(
            "https://posthog.example.com/capture/",
            json={
                "api_key": "phc_test",
                "event": "file_uploaded",
                "distinct_id": "session-1",
                "properties": {"row_count": 2},
            },
            timeout=enabled_settings.analytics_timeout_seconds,
        )

    def test_http_error_swallowed(self, enabled_settings, mock_post):
        mock_post.return_value.raise_for_status.side_effect = requests.HTTPError("500")

        with patch("integrations.analytics.get_settings", return_value=enabled_settings):
            assert analytics.capture("field_mapped", "session-1") is False

    def test_connection_error_swallowed(self, enabled_settings, mock_post):
        mock_post.side_effect = requests.ConnectionError("down")

        with patch("integrations.analytics.get_settings", return_value=enabled_settings):
            assert analytics.capture("field_mapped", "session-1") is False

    def test_unexpected_error_swallowed(self, enabled_settings, mock_post):
        mock_post.side_effect = RuntimeError("boom")

        with patch("integrations.analytics.get_settings", return_value=enabled_settings):
            assert analytics.capture("field_mapped", "session-1") is False


class TestEventHelpers:
    """Event names and properties."""

    def test_file_uploaded(self, captured_events):
        analytics.track_file_uploaded("s", "tasks.csv", 4096, row_count=10, column_count=3)

        assert captured_events[0] == {
            "event": "file_uploaded",
            "distinct_id": "s",
            "properties": {
                "filename": "tasks.csv",
                "file_size_kb": 4,
                "row_count": 10,
                "column_count": 3,
            },
        }

    def test_field_mapped(self, captured_events):
        analytics.track_field_mapped("s", "workItemType", "default_value", True)

        assert captured_events[0]["event"] == "field_mapped"
        assert captured_events[0]["properties"] == {
            "field_type": "workItemType",
            "mapping_type": "default_value",
            "is_required": True,
        }

    def test_custom_field_added(self, captured_events):
        analytics.track_custom_field_added("s", "Tags", 2)
        assert captured_events[0]["properties"] == {"field_name": "Tags", "total_custom_fields": 2}

    @pytest.mark.parametrize("event", [analytics.CSV_COPIED, analytics.CSV_DOWNLOADED])
    def test_csv_exported(self, captured_events, event):
        analytics.track_csv_exported(event, "s", row_count=5, field_count=3, custom_field_count=1)

        assert captured_events[0]["event"] == event
        assert captured_events[0]["properties"] == {
            "row_count": 5,
            "field_count": 3,
            "custom_field_count": 1,
        }
