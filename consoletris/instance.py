"""Base class for a game that repeats its main loop until told to stop."""

from __future__ import annotations

from abc import ABC, abstractmethod


class GameInstance(ABC):
    """Runs ``game_loop`` over and over between ``start`` and ``stop``."""

    def __init__(self) -> None:
        self.is_running = False

    def _run(self) -> None:
        while self.is_running:
            self.game_loop()

    def start(self) -> None:
        """Mark the game as running and loop until ``stop`` is called."""
        self.is_running = True
        self._run()

    def stop(self) -> None:
        """Let the current loop iteration be the last one."""
        self.is_running = False

    @abstractmethod
    def game_loop(self) -> None:
        """One pass of the game; called repeatedly while running."""