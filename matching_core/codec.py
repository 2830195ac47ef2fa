from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .cards import Card, PlayedCard
from .deck import Deck
from .state import SessionState


def card_to_json(c: Card) -> Dict[str, Any]:
    return {"id": c.id, "text": c.text, "photo": c.photo}


def _opt_str(v: Any, what: str) -> Optional[str]:
    if v is None or isinstance(v, str):
        return v
    raise ValueError(f"{what} must be a string or null")


def card_from_json(obj: Any) -> Card:
    if not isinstance(obj, dict):
        raise ValueError("card must be an object")
    cid = obj.get("id")
    if not isinstance(cid, str) or not cid:
        raise ValueError("card id required")
    return Card(id=cid, text=_opt_str(obj.get("text"), "text"), photo=_opt_str(obj.get("photo"), "photo"))


def state_to_json(s: SessionState) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "deck": [card_to_json(c) for c in s.deck],
        "board": None,
        "cards": [],
        "pending": s.pending,
        "needsReset": bool(s.needs_reset),
    }
    if s.board is not None:
        # Board cards are embedded separately so the board does not depend on the deck.
        seen: Dict[str, Card] = {}
        for slot in s.board:
            seen.setdefault(slot.card_id, slot.card)
        out["cards"] = [card_to_json(c) for c in seen.values()]
        out["board"] = [
            {"cardId": slot.card_id, "revealed": bool(slot.revealed), "matched": bool(slot.matched)}
            for slot in s.board
        ]
    return out


def _check_board(board: Tuple[PlayedCard, ...], pending: Optional[str], needs_reset: bool) -> None:
    """Rejects boards the engine could never have produced."""
    by_id: Dict[str, List[PlayedCard]] = {}
    for slot in board:
        by_id.setdefault(slot.card_id, []).append(slot)
    for cid, twins in by_id.items():
        if len(twins) != 2:
            raise ValueError(f"card {cid!r} must appear exactly twice on the board")
        if twins[0].matched != twins[1].matched:
            raise ValueError(f"card {cid!r} is only half matched")
    up = [slot for slot in board if slot.revealed and not slot.matched]
    if needs_reset:
        if len(up) != 2 or up[0].card_id == up[1].card_id:
            raise ValueError("a mismatch needs two different face-up cards")
        if pending not in (up[0].card_id, up[1].card_id):
            raise ValueError("pending card is not face up")
    elif pending is not None:
        if len(up) != 1 or up[0].card_id != pending:
            raise ValueError("pending card is not the single face-up card")
    elif up:
        raise ValueError("face-up cards without a pending guess")


def json_to_state(obj: Any) -> SessionState:
    """Rebuilds a SessionState from `state_to_json` output. Raises ValueError when malformed."""
    if not isinstance(obj, dict):
        raise ValueError("state must be an object")
    deck_in = obj.get("deck", [])
    if not isinstance(deck_in, list):
        raise ValueError("deck must be a list")
    cards = [card_from_json(c) for c in deck_in]
    if len({c.id for c in cards}) != len(cards):
        raise ValueError("duplicate card id in deck")
    deck = Deck(tuple(sorted(cards, key=lambda c: c.id)))

    pending = _opt_str(obj.get("pending"), "pending")
    needs_reset = bool(obj.get("needsReset", False))

    board_in = obj.get("board")
    if board_in is None:
        return SessionState(deck=deck)
    if not isinstance(board_in, list):
        raise ValueError("board must be a list or null")
    cards_in = obj.get("cards", [])
    if not isinstance(cards_in, list):
        raise ValueError("cards must be a list")
    by_id = {c.id: c for c in (card_from_json(x) for x in cards_in)}
    slots: List[PlayedCard] = []
    for raw in board_in:
        if not isinstance(raw, dict):
            raise ValueError("board slot must be an object")
        cid = raw.get("cardId")
        if not isinstance(cid, str):
            raise ValueError("board slot cardId must be a string")
        card = by_id.get(cid)
        if card is None:
            raise ValueError(f"unknown card id on board: {cid!r}")
        matched = bool(raw.get("matched", False))
        revealed = bool(raw.get("revealed", False)) or matched
        slots.append(PlayedCard(card=card, revealed=revealed, matched=matched))
    board = tuple(slots)
    _check_board(board, pending, needs_reset)
    return SessionState(deck=deck, board=board, pending=pending, needs_reset=needs_reset)
