"""Tests for round events."""

import pytest

from core.game import EventEmitter, EventType, GameEvent, new_round, start


class TestEventEmitter:
    """Tests for the EventEmitter class."""

    def test_subscribe_to_type(self, events):
        received = []
        events.subscribe(received.append, EventType.CARD_DEALT)

        events.emit_new(EventType.CARD_DEALT, card="A♠")
        events.emit_new(EventType.PLAYER_HIT)

        assert [e.event_type for e in received] == [EventType.CARD_DEALT]
        assert received[0].data == {"card": "A♠"}

    def test_subscribe_to_all(self, events):
        received = []
        events.subscribe(received.append)

        events.emit_new(EventType.CARD_DEALT)
        events.emit_new(EventType.PLAYER_HIT)

        assert len(received) == 2

    def test_unsubscribe(self, events):
        received = []
        events.subscribe(received.append, EventType.PLAYER_HIT)
        events.unsubscribe(received.append, EventType.PLAYER_HIT)

        events.emit_new(EventType.PLAYER_HIT)

        assert received == []

    def test_unsubscribe_unknown_handler_is_ignored(self, events):
        events.unsubscribe(print, EventType.PLAYER_HIT)

    def test_subscribed_block_removes_handler_on_exit(self, events):
        received = []

        with events.subscribed(received.append, EventType.PLAYER_HIT):
            events.emit_new(EventType.PLAYER_HIT)
        events.emit_new(EventType.PLAYER_HIT)

        assert len(received) == 1

    def test_subscribed_block_removes_handler_on_error(self, events):
        received = []

        with pytest.raises(RuntimeError):
            with events.subscribed(received.append):
                raise RuntimeError("boom")
        events.emit_new(EventType.PLAYER_HIT)

        assert received == []

    def test_typed_handlers_run_before_catch_all(self, events):
        order = []
        events.subscribe(lambda e: order.append("all"))
        events.subscribe(lambda e: order.append("typed"), EventType.CARD_DEALT)

        events.emit_new(EventType.CARD_DEALT)

        assert order == ["typed", "all"]

    def test_history_is_a_copy(self, events):
        events.emit_new(EventType.ROUND_STARTED)
        events.history.clear()

        assert events.event_types() == [EventType.ROUND_STARTED]

    def test_events_are_immutable(self):
        event = GameEvent(EventType.ROUND_ENDED)
        with pytest.raises(AttributeError):
            event.event_type = EventType.ROUND_STARTED


class TestRoundEvents:
    """Tests for the events a round emits."""

    def test_new_round_events(self, rng):
        round_ = new_round(rng=rng)
        assert round_.events.event_types() == [
            EventType.DECK_SHUFFLED,
            EventType.ROUND_STARTED,
        ]

    def test_hit_to_win(self, stacked_round, events):
        round_ = stacked_round("QS", "AD")
        seen = len(events.history)

        round_.hit()
        round_.hit()

        assert events.event_types()[seen:] == [
            EventType.CARD_DEALT,
            EventType.PLAYER_HIT,
            EventType.CARD_DEALT,
            EventType.PLAYER_HIT,
            EventType.PLAYER_WINS,
            EventType.ROUND_ENDED,
        ]
        assert events.history[-1].data["result"] == "Won"
        assert events.history[seen + 2].data["card"] == "A♦"

    def test_hit_to_bust(self, stacked_round, events):
        round_ = stacked_round("QS", "KD", "5C")

        for _ in range(3):
            round_.hit()

        assert events.event_types()[-3:] == [
            EventType.PLAYER_HIT,
            EventType.PLAYER_BUSTS,
            EventType.ROUND_ENDED,
        ]
        assert events.history[-1].data["result"] == "Lost"

    @pytest.mark.parametrize(
        "method, event_type",
        [
            ("stand", EventType.PLAYER_STAND),
            ("double_down", EventType.PLAYER_DOUBLE),
            ("split", EventType.PLAYER_SPLIT),
            ("surrender", EventType.PLAYER_SURRENDER),
        ],
    )
    def test_forfeit_events(self, deck, events, method, event_type):
        round_ = start(deck, events=events)

        getattr(round_, method)()

        assert events.event_types() == [
            EventType.ROUND_STARTED,
            event_type,
            EventType.PLAYER_LOSES,
            EventType.ROUND_ENDED,
        ]

    def test_terminal_round_is_silent(self, deck, events):
        round_ = start(deck, events=events)
        round_.surrender()
        seen = len(events.history)

        round_.hit()
        round_.stand()

        assert len(events.history) == seen

    def test_subscription_scoped_to_play(self, stacked_round, events):
        round_ = stacked_round("7H", "8D")
        dealt = []

        with events.subscribed(lambda e: dealt.append(e.data["card"]), EventType.CARD_DEALT):
            round_.hit()
        round_.hit()

        assert dealt == ["7♥"]


def test_emitter_defaults_per_round(deck):
    """Rounds without an emitter get their own."""
    round_ = start(deck)
    assert isinstance(round_.events, EventEmitter)
    assert round_.events.event_types() == [EventType.ROUND_STARTED]
