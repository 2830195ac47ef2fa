from __future__ import annotations

# Facade module that re-exports the matching core.
# The Flask app and the tests import from here; single-responsibility
# modules live under matching_core/*.

# Prefer a relative import when this repo is used as a package, then the
# installed top-level package.
try:
    from .matching_core.cards import Card, CardId, PlayedCard, new_card_id  # type: ignore
    from .matching_core.deck import Deck, add_card, set_card_text, delete_card, list_cards, clear_deck  # type: ignore
    from .matching_core.deal import Board, build_board, can_deal, MIN_PLAYABLE_CARDS  # type: ignore
    from .matching_core.state import Phase, SessionState  # type: ignore
    from .matching_core.engine import start_game, guess, acknowledge, end_game  # type: ignore
    from .matching_core.actions import (  # type: ignore
        NewCard,
        UpdateCardText,
        DeleteCard,
        GuessCard,
        StartGame,
        ExitGame,
        ClearDeck,
        ResetClick,
        update,
        apply_all,
        action_from_json,
        action_to_json,
    )
    from .matching_core.view import project, board_slots, board_rows, deck_rows, pretty  # type: ignore
    from .matching_core.thumbnail import ThumbnailError, THUMB_SIZE, is_supported_filename, make_thumbnail  # type: ignore
    from .matching_core.ingest import Ingestor, ingest_files  # type: ignore
    from .matching_core.codec import card_to_json, card_from_json, state_to_json, json_to_state  # type: ignore
except ImportError:
    from matching_core.cards import Card, CardId, PlayedCard, new_card_id
    from matching_core.deck import Deck, add_card, set_card_text, delete_card, list_cards, clear_deck
    from matching_core.deal import Board, build_board, can_deal, MIN_PLAYABLE_CARDS
    from matching_core.state import Phase, SessionState
    from matching_core.engine import start_game, guess, acknowledge, end_game
    from matching_core.actions import (
        NewCard,
        UpdateCardText,
        DeleteCard,
        GuessCard,
        StartGame,
        ExitGame,
        ClearDeck,
        ResetClick,
        update,
        apply_all,
        action_from_json,
        action_to_json,
    )
    from matching_core.view import project, board_slots, board_rows, deck_rows, pretty
    from matching_core.thumbnail import ThumbnailError, THUMB_SIZE, is_supported_filename, make_thumbnail
    from matching_core.ingest import Ingestor, ingest_files
    from matching_core.codec import card_to_json, card_from_json, state_to_json, json_to_state
