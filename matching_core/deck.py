from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .cards import Card, CardId, new_card_id


@dataclass(frozen=True)
class Deck:
    """The authored cards, kept sorted by id so iteration order is key order."""
    cards: Tuple[Card, ...] = ()

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card_id: object) -> bool:
        return any(c.id == card_id for c in self.cards)

    def get(self, card_id: CardId) -> Optional[Card]:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def ids(self) -> Tuple[CardId, ...]:
        return tuple(c.id for c in self.cards)

    def playable(self) -> Tuple[Card, ...]:
        """Cards with at least a text or a photo; only these are dealt."""
        return tuple(c for c in self.cards if c.is_playable())


def _sorted(cards) -> Tuple[Card, ...]:
    return tuple(sorted(cards, key=lambda c: c.id))


def add_card(deck: Deck, photo: Optional[str] = None, card_id: Optional[CardId] = None) -> Deck:
    """Adds a card without text. An explicit id that is already taken is replaced by a fresh one."""
    if card_id is None or card_id in deck:
        card_id = new_card_id()
        while card_id in deck:
            card_id = new_card_id()
    return Deck(_sorted(deck.cards + (Card(id=card_id, text=None, photo=photo),)))


def set_card_text(deck: Deck, card_id: CardId, text: str) -> Deck:
    """Replaces a card's text. Empty text and unknown ids leave the deck unchanged."""
    if not text:
        return deck
    card = deck.get(card_id)
    if card is None:
        return deck
    return Deck(tuple(c.with_text(text) if c.id == card_id else c for c in deck.cards))


def delete_card(deck: Deck, card_id: CardId) -> Deck:
    if card_id not in deck:
        return deck
    return Deck(tuple(c for c in deck.cards if c.id != card_id))


def list_cards(deck: Deck) -> List[Tuple[CardId, Optional[str], Optional[str]]]:
    """(id, text, photo) rows in key order, for display."""
    return [(c.id, c.text, c.photo) for c in deck.cards]


def clear_deck() -> Deck:
    return Deck()
