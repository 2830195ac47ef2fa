from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .deal import build_board, can_deal
from .deck import Deck
from .state import SessionState

logger = logging.getLogger(__name__)


def start_game(state: SessionState, seed: Optional[int] = None) -> SessionState:
    """Deals a fresh board from the deck. Fewer than two playable cards leaves the state unchanged."""
    if not can_deal(state.deck):
        logger.debug(f"start ignored: {len(state.deck.playable())} playable card(s)")
        return state
    board = build_board(state.deck, seed=seed)
    logger.debug(f"dealt {len(board)} slots")
    return SessionState(deck=state.deck, board=board, pending=None, needs_reset=False)


def end_game(state: SessionState) -> SessionState:
    """Leaves the game. The authored deck is cleared along with the board."""
    return SessionState(deck=Deck(), board=None, pending=None, needs_reset=False)


def acknowledge(state: SessionState) -> SessionState:
    """Flips every unmatched slot face down after a mismatch."""
    if state.board is None or not state.needs_reset:
        return state
    board = tuple(slot.face_down() for slot in state.board)
    return replace(state, board=board, pending=None, needs_reset=False)


def guess(state: SessionState, index: int) -> SessionState:
    """Applies one click on board slot `index`.

    While a mismatch is shown, any click only acknowledges it. Clicks with no
    board, outside the board, or on a slot that is already face up are ignored.
    """
    if state.board is None:
        return state
    if state.needs_reset:
        return acknowledge(state)
    if not 0 <= index < len(state.board):
        return state
    slot = state.board[index]
    if slot.shown:
        return state

    board = list(state.board)
    if state.pending is None:
        board[index] = slot.face_up()
        return replace(state, board=tuple(board), pending=slot.card_id)

    if slot.card_id == state.pending:
        # Match by card id, so either twin completes the pair.
        board = [s.as_matched() if s.card_id == state.pending else s for s in board]
        logger.debug(f"matched {slot.card_id}")
        return replace(state, board=tuple(board), pending=None)

    board[index] = slot.face_up()
    return replace(state, board=tuple(board), needs_reset=True)
