"""
Matching core Python package.

This package contains the data structures and pure-logic helpers behind the
memory-matching game so the Flask app and the CLI stay thin.
Modules:
- cards.py: Card, PlayedCard, card ids
- deck.py: deck editing operations
- deal.py: board construction
- state.py: SessionState
- engine.py: start/guess/acknowledge/exit transitions
- actions.py: action types and the update reducer
- view.py: projection of a state for rendering
- thumbnail.py, ingest.py: dropped-image pipeline
- codec.py: JSON (de)serialization
"""
