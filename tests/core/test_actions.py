"""Tests for the action parser."""

import pytest

from core.game import Action, parse_action


class TestParseAction:
    """Tests for parse_action."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("hit", Action.HIT),
            ("stand", Action.STAND),
            ("double-down", Action.DOUBLE_DOWN),
            ("split", Action.SPLIT),
            ("surrender", Action.SURRENDER),
        ],
    )
    def test_known_commands(self, raw, expected):
        assert parse_action(raw) == expected

    def test_surrounding_whitespace_is_trimmed(self):
        """Test that a trailing newline from input is ignored."""
        assert parse_action("  hit\n") == Action.HIT
        assert parse_action("\tsurrender ") == Action.SURRENDER

    @pytest.mark.parametrize(
        "raw",
        ["fold", "", "   ", "HIT", "Hit", "double", "double down", "hit me", "h"],
    )
    def test_unknown_commands_give_no_action(self, raw):
        """Test that anything else parses to None rather than raising."""
        assert parse_action(raw) is None

    def test_every_action_round_trips_through_its_text(self):
        for action in Action:
            assert parse_action(str(action)) is action
