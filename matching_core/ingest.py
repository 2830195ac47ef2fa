from __future__ import annotations

import logging
import os
import queue
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Iterable, List, Optional, Tuple

from .actions import NewCard, update
from .state import SessionState
from .thumbnail import THUMB_SIZE, ThumbnailError, is_supported_filename, make_thumbnail

logger = logging.getLogger(__name__)

INGEST_WORKERS = int(os.getenv("MATCHING_INGEST_WORKERS", "4"))


class Ingestor:
    """Runs the thumbnail pipeline once per dropped file.

    Each successful file puts exactly one NewCard action on `actions`; a
    failed file is logged and contributes nothing.
    """

    def __init__(self, executor: Optional[ThreadPoolExecutor] = None, bound: int = THUMB_SIZE):
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(max_workers=INGEST_WORKERS)
        self.bound = bound
        self.actions: "queue.Queue[NewCard]" = queue.Queue()

    def submit(self, name: str, data: bytes) -> Optional[Future]:
        if not is_supported_filename(name):
            logger.debug(f"skipping unsupported file {name!r}")
            return None
        return self.executor.submit(self._run, name, data)

    def _run(self, name: str, data: bytes) -> bool:
        try:
            photo = make_thumbnail(data, self.bound)
        except ThumbnailError as e:
            logger.warning(f"dropping {name!r}: {e}")
            return False
        self.actions.put(NewCard(photo=photo))
        return True

    def drain(self, state: SessionState) -> Tuple[SessionState, int]:
        """Applies every queued action in completion order."""
        applied = 0
        while True:
            try:
                action = self.actions.get_nowait()
            except queue.Empty:
                return state, applied
            state = update(state, action)
            applied += 1

    def close(self) -> None:
        if self._owns_executor:
            self.executor.shutdown(wait=True)

    def __enter__(self) -> 'Ingestor':
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def ingest_files(
    state: SessionState,
    files: Iterable[Tuple[str, bytes]],
    ingestor: Optional[Ingestor] = None,
) -> Tuple[SessionState, int, List[str]]:
    """Ingests a batch of (name, bytes) pairs and folds the results into `state`.

    Returns the new state, how many cards were added, and the names skipped
    because of their extension.
    """
    own = ingestor is None
    ing = ingestor or Ingestor()
    try:
        futures: List[Tuple[str, Future]] = []
        skipped: List[str] = []
        for name, data in files:
            fut = ing.submit(name, data)
            if fut is None:
                skipped.append(name)
            else:
                futures.append((name, fut))
        wait([fut for _, fut in futures])
        for name, fut in futures:
            exc = fut.exception()
            if exc is not None:
                logger.warning(f"dropping {name!r}: ingestion failed: {exc!r}")
        new_state, added = ing.drain(state)
        return new_state, added, skipped
    finally:
        if own:
            ing.close()
