from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from .cards import CardId
from .deck import add_card, clear_deck, delete_card, set_card_text
from .engine import acknowledge, end_game, guess, start_game
from .state import SessionState


@dataclass(frozen=True)
class NewCard:
    photo: Optional[str] = None


@dataclass(frozen=True)
class UpdateCardText:
    card_id: CardId
    text: str


@dataclass(frozen=True)
class DeleteCard:
    card_id: CardId


@dataclass(frozen=True)
class GuessCard:
    index: int


@dataclass(frozen=True)
class StartGame:
    seed: Optional[int] = None


@dataclass(frozen=True)
class ExitGame:
    pass


@dataclass(frozen=True)
class ClearDeck:
    pass


@dataclass(frozen=True)
class ResetClick:
    pass


DECK_ACTIONS = (NewCard, UpdateCardText, DeleteCard, ClearDeck)


def update(state: SessionState, action: object) -> SessionState:
    """Returns the state that follows `action`. Deck edits are ignored while a game is on."""
    if isinstance(action, DECK_ACTIONS) and state.is_playing:
        return state
    if isinstance(action, NewCard):
        return SessionState(deck=add_card(state.deck, photo=action.photo))
    if isinstance(action, UpdateCardText):
        return SessionState(deck=set_card_text(state.deck, action.card_id, action.text))
    if isinstance(action, DeleteCard):
        return SessionState(deck=delete_card(state.deck, action.card_id))
    if isinstance(action, ClearDeck):
        return SessionState(deck=clear_deck())
    if isinstance(action, GuessCard):
        return guess(state, action.index)
    if isinstance(action, StartGame):
        return start_game(state, seed=action.seed)
    if isinstance(action, ExitGame):
        return end_game(state)
    if isinstance(action, ResetClick):
        return acknowledge(state)
    raise TypeError(f"unknown action: {action!r}")


def apply_all(state: SessionState, actions: Iterable[object]) -> SessionState:
    for action in actions:
        state = update(state, action)
    return state


# ---------- Wire form used by the web client ----------

def action_to_json(action: object) -> Dict[str, Any]:
    if isinstance(action, NewCard):
        return {"type": "new_card", "photo": action.photo}
    if isinstance(action, UpdateCardText):
        return {"type": "update_text", "id": action.card_id, "text": action.text}
    if isinstance(action, DeleteCard):
        return {"type": "delete_card", "id": action.card_id}
    if isinstance(action, GuessCard):
        return {"type": "guess", "index": action.index}
    if isinstance(action, StartGame):
        return {"type": "start", "seed": action.seed}
    if isinstance(action, ExitGame):
        return {"type": "exit"}
    if isinstance(action, ClearDeck):
        return {"type": "clear"}
    if isinstance(action, ResetClick):
        return {"type": "reset"}
    raise TypeError(f"unknown action: {action!r}")


def _opt_str(obj: Dict[str, Any], key: str) -> Optional[str]:
    v = obj.get(key)
    if v is None:
        return None
    if not isinstance(v, str):
        raise ValueError(f"{key} must be a string")
    return v


def _req_str(obj: Dict[str, Any], key: str) -> str:
    v = _opt_str(obj, key)
    if v is None:
        raise ValueError(f"{key} required")
    return v


def action_from_json(obj: Any) -> object:
    """Parses the wire form of an action. Raises ValueError on anything malformed."""
    if not isinstance(obj, dict):
        raise ValueError("action must be an object")
    kind = obj.get("type")
    if kind == "new_card":
        return NewCard(photo=_opt_str(obj, "photo"))
    if kind == "update_text":
        return UpdateCardText(card_id=_req_str(obj, "id"), text=_opt_str(obj, "text") or "")
    if kind == "delete_card":
        return DeleteCard(card_id=_req_str(obj, "id"))
    if kind == "guess":
        index = obj.get("index")
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValueError("index must be an integer")
        return GuessCard(index=index)
    if kind == "start":
        seed = obj.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise ValueError("seed must be an integer")
        return StartGame(seed=seed)
    if kind == "exit":
        return ExitGame()
    if kind == "clear":
        return ClearDeck()
    if kind == "reset":
        return ResetClick()
    raise ValueError(f"unknown action type: {kind!r}")
