from __future__ import annotations

import argparse
from typing import List, Optional

from .actions import GuessCard, NewCard, StartGame, UpdateCardText, update
from .state import Phase, SessionState
from .thumbnail import ThumbnailError, is_supported_filename, make_thumbnail
from .view import pretty


def build_state(texts: List[str], photos: List[str]) -> SessionState:
    """Creates a deck from card texts and image paths. Unreadable or unsupported images are skipped."""
    state = SessionState()
    for text in texts:
        state = update(state, NewCard())
        new_id = state.deck.ids()[-1]
        state = update(state, UpdateCardText(new_id, text))
    for path in photos:
        if not is_supported_filename(path):
            print(f"skipping {path}: only .png and .gif are supported")
            continue
        try:
            with open(path, 'rb') as f:
                photo = make_thumbnail(f.read())
        except (OSError, ThumbnailError) as e:
            print(f"skipping {path}: {e}")
            continue
        state = update(state, NewCard(photo=photo))
    return state


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Memory-matching game in the terminal')
    parser.add_argument('--card', action='append', default=[], help='Card text (repeatable)')
    parser.add_argument('--photo', action='append', default=[], help='PNG or GIF card image (repeatable)')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal')
    parser.add_argument('--reveal', action='store_true', help='Print the dealt board face up and exit')
    args = parser.parse_args(argv)

    state = update(build_state(args.card, args.photo), StartGame(seed=args.seed))
    if not state.is_playing:
        print('Need at least two cards with text or a photo to play.')
        return

    if args.reveal:
        for i, slot in enumerate(state.board):
            print(f"{i + 1}: {slot.card.text or '[photo]'}")
        return

    print(pretty(state))
    while not state.is_complete:
        if state.phase == Phase.MISMATCH:
            input('No match. Press Enter to flip them back.')
            state = update(state, GuessCard(0))
            print(pretty(state))
            continue
        text = input('Slot number (q to quit): ').strip().lower()
        if text in ('q', 'quit', 'exit'):
            return
        try:
            index = int(text) - 1
        except ValueError:
            print('Could not parse. Try again.')
            continue
        before = state
        state = update(state, GuessCard(index))
        if state is before:
            print('Pick a face-down slot on the board.')
            continue
        print(pretty(state))
    print('All pairs found!')


if __name__ == '__main__':
    main()
