from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from .deal import can_deal
from .state import Phase, SessionState

COLUMNS_NUMBER = int(os.getenv("MATCHING_COLUMNS", "6"))

QUESTION_IMG = "/static/q.svg"
ARROW_IMG = "/static/arrow.svg"

Slot = Dict[str, Any]


def deck_rows(state: SessionState) -> List[Dict[str, Optional[str]]]:
    return [{"id": c.id, "text": c.text, "photo": c.photo} for c in state.deck]


def board_slots(state: SessionState) -> List[Slot]:
    """Projects each board slot; hidden slots expose only a placeholder and their 1-based label."""
    if state.board is None:
        return []
    mismatch = state.phase == Phase.MISMATCH
    out: List[Slot] = []
    for i, slot in enumerate(state.board):
        entry: Slot = {
            "index": i,
            "label": i + 1,
            "shown": slot.shown,
            "matched": slot.matched,
            # During a mismatch any click acknowledges it.
            "clickable": mismatch or not slot.shown,
        }
        if slot.shown:
            entry["text"] = slot.card.text or ""
            entry["image"] = slot.card.photo or ARROW_IMG
        else:
            entry["text"] = None
            entry["image"] = QUESTION_IMG
        out.append(entry)
    return out


def board_rows(slots: List[Slot], columns: int = COLUMNS_NUMBER) -> List[List[Optional[Slot]]]:
    """Splits slots into rows of `columns`, padding the last row with None."""
    if columns <= 0:
        raise ValueError("columns must be positive")
    rows: List[List[Optional[Slot]]] = []
    for i in range(0, len(slots), columns):
        row: List[Optional[Slot]] = list(slots[i:i + columns])
        row.extend([None] * (columns - len(row)))
        rows.append(row)
    return rows


def project(state: SessionState, columns: int = COLUMNS_NUMBER) -> Dict[str, Any]:
    slots = board_slots(state)
    return {
        "phase": state.phase,
        "mismatch": state.phase == Phase.MISMATCH,
        "complete": state.is_complete,
        "remainingPairs": state.remaining_pairs,
        "canStart": can_deal(state.deck),
        "deck": deck_rows(state),
        "board": slots,
        "rows": board_rows(slots, columns),
    }


def pretty(state: SessionState, columns: int = COLUMNS_NUMBER) -> str:
    """Generates a human-readable grid of the board: '?N' for hidden slots, '*' marks matched ones."""
    cells: List[str] = []
    for slot in board_slots(state):
        if not slot["shown"]:
            cells.append(f"?{slot['label']}")
            continue
        text = slot["text"] or ("[photo]" if slot["image"] != ARROW_IMG else "")
        cells.append(f"{text}*" if slot["matched"] else text)
    if not cells:
        return ""
    width = max(len(c) for c in cells)
    lines: List[str] = []
    for i in range(0, len(cells), columns):
        lines.append(" ".join(c.ljust(width) for c in cells[i:i + columns]).rstrip())
    return "\n".join(lines)
