"""Abstract interfaces and enums for the game layer.

The controller depends on these abstractions, not on concrete player or
scheduler implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from gambit.core.enums import Color, PieceType

if TYPE_CHECKING:
    from gambit.core.types import Square
    from gambit.game.settings import GameSettings

# ── Game state FSM ───────────────────────────────────────────────────────────


class GameState(IntEnum):
    """Finite-state-machine states for a chess game.

    ``MENU → PLAYING ⇄ CHECK → CHECKMATE → RESULT``, or
    ``PLAYING → STALEMATE → RESULT``.
    """

    MENU = auto()
    PLAYING = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()
    RESULT = auto()

    @property
    def accepts_moves(self) -> bool:
        return self in (GameState.PLAYING, GameState.CHECK)

    @property
    def is_terminal(self) -> bool:
        return self in (GameState.CHECKMATE, GameState.STALEMATE)


class GameMode(IntEnum):
    """Who plays the two sides."""

    PVP = auto()  # two humans
    PVE = auto()  # human vs engine


class Difficulty(IntEnum):
    """Engine strength, valued by search depth in plies."""

    EASY = 2
    MEDIUM = 4
    HARD = 5

    @property
    def depth(self) -> int:
        return int(self.value)


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or engine)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...


class ScheduledCall(ABC):
    """Handle to a callback scheduled with an :class:`IScheduler`."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. No-op once it has run."""

    @property
    @abstractmethod
    def cancelled(self) -> bool: ...

    @property
    @abstractmethod
    def done(self) -> bool:
        """Whether the callback has already run."""

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)


class IScheduler(ABC):
    """Runs callbacks after a delay on the caller's own thread of control."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        """Schedule *callback* to run once, *delay_ms* from now."""


class IGameController(ABC):
    """Interface for the game orchestrator.

    Mutating calls report invalid input by returning ``False``.
    """

    @abstractmethod
    def start_game(
        self, settings: GameSettings | None = None, fen: str | None = None
    ) -> None:
        """Set up a new game, from *fen* or the standard starting position."""

    @abstractmethod
    def restart_to_menu(self) -> None:
        """Abandon the current game and return to the menu."""

    @abstractmethod
    def try_select(self, square: Square) -> bool:
        """Select the side-to-move's piece on *square*."""

    @abstractmethod
    def try_move(self, square: Square) -> bool:
        """Move the selected piece to *square* if that is legal."""

    @abstractmethod
    def promote_pawn(self, piece_type: PieceType) -> bool:
        """Finish a pending promotion with *piece_type*."""
