"""
Unit tests for column-name based mapping suggestions.
"""

import pytest

from models.mapping import BoundToColumn, MappingConfiguration
from services.mapping_suggester import suggest_mappings, config_from_suggestions


class TestSuggestMappings:
    """Tests for suggest_mappings."""

    def test_name_and_owner(self):
        assert suggest_mappings(["Name", "Owner"]) == {
            "title": "Name",
            "assignedTo": "Owner",
        }

    @pytest.mark.parametrize("header,field_key", [
        ("Work Item Type", "workItemType"),
        ("ITEM", "workItemType"),
        ("Title", "title"),
        ("Task Name", "title"),
        ("Assignee", "assignedTo"),
        ("Owner", "assignedTo"),
        ("Description", "description"),
        ("Details", "description"),
        ("Priority", "priority"),
        ("Effort", "effort"),
        ("Story Points", "effort"),
        ("Hours", "effort"),
    ])
    def test_each_rule(self, header, field_key):
        assert suggest_mappings([header]) == {field_key: header}

    def test_unmatched_headers_ignored(self):
        assert suggest_mappings(["Sprint", "Area Path", "Tags"]) == {}

    def test_empty_headers(self):
        assert suggest_mappings([]) == {}

    def test_first_rule_wins_within_header(self):
        # "type" beats "name" because workItemType is checked first
        assert suggest_mappings(["Type Name"]) == {"workItemType": "Type Name"}

    def test_item_name_goes_to_work_item_type(self):
        assert suggest_mappings(["Item Name"]) == {"workItemType": "Item Name"}

    def test_later_header_overwrites_earlier(self):
        result = suggest_mappings(["Title", "Display Name"])
        assert result == {"title": "Display Name"}

    def test_last_match_wins_for_effort(self):
        result = suggest_mappings(["Effort", "Story Points", "Hours Logged"])
        assert result == {"effort": "Hours Logged"}

    def test_backlog_headers(self, backlog_csv_text):
        headers = backlog_csv_text.split("\n")[0].split(",")
        assert suggest_mappings(headers) == {
            "workItemType": "Item Type",
            "title": "Title",
            "assignedTo": "Assigned To",
            "description": "Details",
            "priority": "Priority",
            "effort": "Hours",
        }


class TestConfigFromSuggestions:
    """Tests for the initial configuration."""

    def test_binds_each_suggestion(self):
        config = config_from_suggestions({"title": "Name", "assignedTo": "Owner"})

        assert config.entries == {
            "title": BoundToColumn("Name"),
            "assignedTo": BoundToColumn("Owner"),
        }
        assert config.literals == {}
        assert config.decorations == {}
        assert config.custom_fields == ()

    def test_empty_suggestions(self):
        assert config_from_suggestions({}) == MappingConfiguration()
