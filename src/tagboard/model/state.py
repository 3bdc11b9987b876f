"""The board state container: one current tree, one way to change it."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import replace
from typing import Callable

from tagboard.grammar import GRAMMAR_KEYS
from tagboard.model.node import Board, redecode
from tagboard.settings import Settings

logger = logging.getLogger(__name__)

Updater = Callable[[Board], Board]
Callback = Callable[["BoardState", Board, Board], None]


class BoardState:
    """Holds the current board and applies updaters to it in order.

    apply() is the only way to change the tree. Updaters submitted while
    another one (or a watcher) is running are queued and run afterwards,
    each seeing the result of everything submitted before it. Watchers
    fire after every update that produced a different tree.

    The state follows its settings until close() is called.
    """

    def __init__(self, board: Board, settings: Settings | None = None) -> None:
        if settings is None:
            settings = board.settings if board.settings is not None else Settings()
        if board.settings is not settings:
            board = replace(board, settings=settings)
        self._board = board
        self._settings = settings
        self._watchers: list[Callback] = []
        self._pending: deque[Updater] = deque()
        self._applying = False
        self._version = 0
        self._unwatch_settings = settings.watch(self._on_settings_changed)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def version(self) -> int:
        """Number of updates that changed the tree."""
        return self._version

    def current(self) -> Board:
        return self._board

    def apply(self, updater: Updater) -> Board:
        """Submit an updater. Returns the tree after all queued updates ran.

        If an updater raises, the tree is left as it was by that updater and
        the updaters queued behind it still run. The first error is raised
        once the queue is empty; later ones are logged.
        """
        self._pending.append(updater)
        if self._applying:
            return self._board
        self._applying = True
        error: Exception | None = None
        try:
            while self._pending:
                queued = self._pending.popleft()
                try:
                    self._run(queued)
                except Exception as exc:
                    if error is not None:
                        logger.exception("queued update %r failed", queued)
                    else:
                        error = exc
        finally:
            self._applying = False
        if error is not None:
            raise error
        return self._board

    def _run(self, updater: Updater) -> None:
        old = self._board
        new = updater(old)
        if not isinstance(new, Board):
            raise TypeError(f"updater returned {type(new).__name__}, expected Board")
        if new is old:
            logger.debug("update %r left the board unchanged", updater)
            return
        self._board = new
        self._version += 1
        logger.debug("applied update %d", self._version)
        for cb in list(self._watchers):
            cb(self, old, new)

    def _on_settings_changed(self, settings: Settings, key: str, old, new) -> None:
        if key not in GRAMMAR_KEYS:
            return
        grammar = settings.grammar
        logger.debug("setting %s changed, re-decoding items", key)
        self.apply(lambda board: redecode(board, grammar))

    def close(self) -> None:
        """Stop following the settings."""
        self._unwatch_settings()

    def watch(self, callback: Callback) -> Callable[[], None]:
        """Watch for board changes. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def __repr__(self) -> str:
        return f"<BoardState v{self._version} lanes={len(self._board.children)}>"
