from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .cards import CardId
from .deal import Board
from .deck import Deck


class Phase:
    EDITING = 'editing'
    IDLE = 'idle'
    PENDING = 'pending'
    MISMATCH = 'mismatch'


@dataclass(frozen=True)
class SessionState:
    """Everything one player session holds: the deck and, while playing, the board."""
    deck: Deck = field(default_factory=Deck)
    board: Optional[Board] = None
    pending: Optional[CardId] = None  # card id of the single revealed, unmatched guess
    needs_reset: bool = False  # two mismatched slots are face up

    @property
    def is_playing(self) -> bool:
        return self.board is not None

    @property
    def phase(self) -> str:
        if self.board is None:
            return Phase.EDITING
        if self.needs_reset:
            return Phase.MISMATCH
        if self.pending is not None:
            return Phase.PENDING
        return Phase.IDLE

    @property
    def is_complete(self) -> bool:
        return bool(self.board) and all(slot.matched for slot in self.board)

    @property
    def remaining_pairs(self) -> int:
        if not self.board:
            return 0
        return sum(1 for slot in self.board if not slot.matched) // 2
