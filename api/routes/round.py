"""Round API endpoints."""

import logging
from random import Random
from fastapi import APIRouter, HTTPException, Header
from typing import Annotated, Any

from api.schemas import (
    ActionRequest,
    CardResponse,
    NewRoundResponse,
    RoundStateResponse,
)
from api.session import get_round_store, get_session_signer, session_id_from_token
from config import config
from core.cards import Card, Deck, Rank, Suit
from core.game import Action, BlackjackRound, PlayerState, RoundState, new_round, parse_action
from core.hand import Hand

logger = logging.getLogger(__name__)

router = APIRouter()


def _serialize_card(card: Card) -> dict[str, int]:
    """Serialize a card to a dict."""
    return {"rank": card.rank.value, "suit": card.suit.value}


def _deserialize_card(data: dict[str, int]) -> Card:
    """Deserialize a card from a dict."""
    return Card(Rank(data["rank"]), Suit(data["suit"]))


def _serialize_round(round_: BlackjackRound) -> dict[str, Any]:
    """Serialize round state for session storage."""
    return {
        "state": round_.state.name,
        "remaining": [_serialize_card(c) for c in round_.player.deck.remaining],
        "drawn": [_serialize_card(c) for c in round_.player.deck.drawn],
        "hand": [_serialize_card(c) for c in round_.hand],
    }


def _deserialize_round(data: dict[str, Any]) -> BlackjackRound:
    """
    Restore a round from session data.

    Only rounds that play could have produced are accepted: the hand is the
    drawn pile, and the state matches what the hand's totals would have
    settled.

    Raises:
        ValueError: If the stored deck, hand or state is inconsistent
    """
    try:
        state = RoundState[data["state"]]
    except KeyError:
        raise ValueError(f"Unknown round state: {data['state']!r}") from None

    deck = Deck.from_cards(
        remaining=[_deserialize_card(c) for c in data["remaining"]],
        drawn=[_deserialize_card(c) for c in data["drawn"]],
    )
    hand = Hand(cards=[_deserialize_card(c) for c in data["hand"]])
    if tuple(hand.cards) != deck.drawn:
        raise ValueError("Hand does not match the drawn cards")
    if hand.has_winning_total != (state == RoundState.WON):
        raise ValueError(f"Round {state} does not fit hand [{hand}]")
    if hand.is_too_large and state != RoundState.LOST:
        raise ValueError(f"Round {state} does not fit busted hand [{hand}]")

    return BlackjackRound(PlayerState(deck=deck, hand=hand), initial=state)


def _new_round() -> BlackjackRound:
    """Shuffle a fresh deck and start a round."""
    seed = config.round.seed
    return new_round(rng=Random(seed) if seed is not None else None)


async def _save_round(session_id: str, round_: BlackjackRound) -> None:
    store = await get_round_store()
    await store.save_round(session_id, _serialize_round(round_))


def _session_id(token: str) -> str:
    """Return the session ID of a token, rejecting forged and expired ones."""
    session_id = session_id_from_token(token)
    if session_id is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return session_id


async def _get_round(token: str) -> tuple[str, BlackjackRound]:
    """Load the session's round, starting a new one if the store has none."""
    session_id = _session_id(token)
    store = await get_round_store()

    round_data = await store.load_round(session_id)
    if round_data is not None:
        return session_id, _deserialize_round(round_data)

    logger.info("No stored round for session %s; dealing a new one", session_id)
    round_ = _new_round()
    await _save_round(session_id, round_)
    return session_id, round_


def _card_to_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(
        rank=str(card.rank),
        suit=str(card.suit),
        values=sorted(card.values),
    )


def _round_state_response(
    round_: BlackjackRound,
    action: Action | None = None,
) -> RoundStateResponse:
    """Convert round state to response."""
    return RoundStateResponse(
        state=round_.state.name,
        message=round_.message,
        hand=[_card_to_response(c) for c in round_.hand],
        possible_totals=sorted(round_.possible_totals),
        is_over=round_.is_over,
        cards_remaining=round_.cards_remaining,
        action=action.value if action is not None else None,
    )


@router.post("/new")
async def start_round(
    token: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> NewRoundResponse:
    """Start a new round, opening a session if needed."""
    if token is None:
        token = get_session_signer().issue()

    await _save_round(_session_id(token), _new_round())
    return NewRoundResponse(session_id=token)


@router.get("/state")
async def get_state(
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """Get current round state."""
    _, round_ = await _get_round(token)
    return _round_state_response(round_)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """
    Apply a player command to the round.

    Unrecognised commands leave the round untouched, as do commands sent
    after the round is over.
    """
    session_id, round_ = await _get_round(token)

    action = parse_action(request.action)
    round_.apply(action)

    await _save_round(session_id, round_)
    return _round_state_response(round_, action)
