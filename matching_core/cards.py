from __future__ import annotations

import os
import threading
import time
from dataclasses import dataclass, replace
from typing import Optional

CardId = str  # 16 hex digits of nanoseconds + 8 random hex digits

_id_lock = threading.Lock()
_last_stamp = 0


def new_card_id() -> CardId:
    """Returns a fresh, sortable card id. Ids from one process are strictly increasing."""
    global _last_stamp
    with _id_lock:
        stamp = time.time_ns()
        if stamp <= _last_stamp:
            stamp = _last_stamp + 1
        _last_stamp = stamp
    return f"{stamp:016x}{os.urandom(4).hex()}"


@dataclass(frozen=True)
class Card:
    """An authored deck entry: optional text and/or optional photo (a data URI)."""
    id: CardId
    text: Optional[str] = None
    photo: Optional[str] = None

    def is_playable(self) -> bool:
        return self.text is not None or self.photo is not None

    def with_text(self, text: str) -> 'Card':
        return replace(self, text=text)


@dataclass(frozen=True)
class PlayedCard:
    """One slot on the board. Once matched, the slot stays revealed for good."""
    card: Card
    revealed: bool = False
    matched: bool = False

    @property
    def card_id(self) -> CardId:
        return self.card.id

    @property
    def shown(self) -> bool:
        return self.revealed or self.matched

    def face_up(self) -> 'PlayedCard':
        return PlayedCard(self.card, True, self.matched)

    def face_down(self) -> 'PlayedCard':
        if self.matched:
            return self
        return PlayedCard(self.card, False, False)

    def as_matched(self) -> 'PlayedCard':
        return PlayedCard(self.card, True, True)
