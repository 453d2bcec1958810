"""
Tests for placeholder recognition.
"""

import datetime

import pytest

from envoverlay.config.placeholders import Placeholder, classify


class TestClassify:
    """Tests for classify()."""

    def test_required(self):
        assert classify("<<ENV:FOO>>") == Placeholder("FOO", required=True)

    def test_optional(self):
        assert classify("<<ENV?:BAZ>>") == Placeholder("BAZ", required=False)

    def test_name_charset(self):
        assert classify("<<ENV:db_Host_2>>") == Placeholder("db_Host_2", required=True)

    @pytest.mark.parametrize(
        "value",
        [
            "prefix<<ENV:FOO>>",
            "<<ENV:FOO>>suffix",
            " <<ENV:FOO>>",
            "<<ENV:FOO>>\n",
            "<<ENV:>>",
            "<<ENV?:>>",
            "<<ENV:FOO-BAR>>",
            "<<ENV:FOO BAR>>",
            "<<env:FOO>>",
            "<<ENV:FOO>",
            "${FOO}",
            "foo value",
            "",
        ],
    )
    def test_literals(self, value):
        assert classify(value) is None

    @pytest.mark.parametrize("value", [1234, 1.5, True, None, datetime.date(2024, 1, 1), ["<<ENV:FOO>>"], {"a": 1}])
    def test_non_strings(self, value):
        assert classify(value) is None


class TestPlaceholder:
    """Tests for the Placeholder value type."""

    def test_mode(self):
        assert Placeholder("FOO", required=True).mode == "required"
        assert Placeholder("FOO", required=False).mode == "optional"

    def test_str_round_trips_through_classify(self):
        for placeholder in (Placeholder("FOO", True), Placeholder("BAR", False)):
            assert classify(str(placeholder)) == placeholder
