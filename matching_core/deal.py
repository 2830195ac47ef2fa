from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .cards import PlayedCard
from .deck import Deck

Board = Tuple[PlayedCard, ...]

MIN_PLAYABLE_CARDS = 2


def can_deal(deck: Deck) -> bool:
    return len(deck.playable()) >= MIN_PLAYABLE_CARDS


def build_board(deck: Deck, seed: Optional[int] = None) -> Board:
    """Deals two face-down slots per playable card and shuffles them.

    Cards with neither text nor photo are skipped. A new permutation is drawn
    on every call unless a seed is given.
    """
    rng = random.Random(seed)
    slots: List[PlayedCard] = []
    for card in deck.playable():
        slots.append(PlayedCard(card=card))
        slots.append(PlayedCard(card=card))
    rng.shuffle(slots)
    return tuple(slots)
