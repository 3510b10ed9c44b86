"""GameController — the central orchestrator of a chess game.

Coordinates: Position, MoveGenerator, Rules, players and the scheduler.
Emits events via simple callbacks so rendering / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from gambit.core.board import Board
from gambit.core.enums import PROMOTION_TYPES, Color, GameStatus, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import position_from_fen
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.types import Square, is_valid_square
from gambit.engine import DefaultEngine
from gambit.engine.search import IEngine
from gambit.game.interfaces import (
    GameState,
    IGameController,
    IPlayer,
    IScheduler,
    ScheduledCall,
)
from gambit.game.player import EnginePlayer, HumanPlayer
from gambit.game.record import AwaitingMove, AwaitingPromotion, GameRecord, TurnPhase
from gambit.game.scheduler import ManualScheduler
from gambit.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

StateCallback = Callable[[GameState], None]
MoveCallback = Callable[[Move], None]
BoardCallback = Callable[[], None]
PromotionCallback = Callable[[Square], None]  # square of the waiting pawn

_STATE_FOR_STATUS: dict[GameStatus, GameState] = {
    GameStatus.ONGOING: GameState.PLAYING,
    GameStatus.CHECK: GameState.CHECK,
    GameStatus.CHECKMATE: GameState.CHECKMATE,
    GameStatus.STALEMATE: GameState.STALEMATE,
}


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event, called in order."""

    on_state_changed: list[StateCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_board_updated: list[BoardCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full chess game: validates moves, executes them,
    switches turns, drives the engine side, notifies listeners.

    Single-threaded: every call, and every scheduled callback, must come
    from the same thread. Human input is refused while the engine is
    thinking (see :attr:`is_thinking`).
    """

    __slots__ = (
        "_scheduler",
        "_engine",
        "_settings",
        "_position",
        "_state",
        "_turn",
        "_record",
        "_players",
        "_selected",
        "_selected_moves",
        "_final_state",
        "_engine_call",
        "_result_call",
        "events",
    )

    def __init__(
        self,
        scheduler: IScheduler | None = None,
        engine: IEngine | None = None,
    ) -> None:
        self._scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._engine = engine if engine is not None else DefaultEngine()
        self._settings = GameSettings()
        self._position = Position()
        self._state = GameState.MENU
        self._turn: TurnPhase = AwaitingMove(Color.WHITE)
        self._record = GameRecord()
        self._players: dict[Color, IPlayer] = {}
        self._selected: Square | None = None
        self._selected_moves: list[Move] = []
        self._final_state: GameState | None = None
        self._engine_call: ScheduledCall | None = None
        self._result_call: ScheduledCall | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def scheduler(self) -> IScheduler:
        return self._scheduler

    @property
    def position(self) -> Position:
        """Live position. Treat as read-only; use :attr:`board` for a copy."""
        return self._position

    @property
    def board(self) -> Board:
        """Snapshot of the board; mutating it does not affect the game."""
        return self._position.board.copy()

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def turn(self) -> TurnPhase:
        return self._turn

    @property
    def pending_promotion(self) -> AwaitingPromotion | None:
        turn = self._turn
        return turn if isinstance(turn, AwaitingPromotion) else None

    @property
    def selected_square(self) -> Square | None:
        return self._selected

    @property
    def selected_piece(self) -> Piece | None:
        if self._selected is None:
            return None
        return self._position.board[self._selected]

    @property
    def legal_destinations(self) -> list[Square]:
        """Where the selected piece may go."""
        return [m.to_sq for m in self._selected_moves]

    @property
    def record(self) -> GameRecord:
        return self._record

    @property
    def move_count(self) -> int:
        return self._record.move_count

    @property
    def last_move(self) -> Move | None:
        return self._record.last_move

    @property
    def captured_pieces(self) -> list[Piece]:
        return list(self._record.captured)

    @property
    def final_state(self) -> GameState | None:
        """CHECKMATE or STALEMATE once the game has ended, else ``None``."""
        return self._final_state

    @property
    def winner(self) -> Color | None:
        """The mating side; the mated side is the one left to move."""
        if self._final_state == GameState.CHECKMATE:
            return self._position.side_to_move.opposite
        return None

    @property
    def is_thinking(self) -> bool:
        """Whether an engine move is scheduled or being computed."""
        return self._engine_call is not None

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._position.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def start_game(
        self, settings: GameSettings | None = None, fen: str | None = None
    ) -> None:
        position = position_from_fen(fen) if fen else Position()
        self._cancel_scheduled()
        self._settings = settings if settings is not None else GameSettings()

        self._position = position
        self._turn = AwaitingMove(self._position.side_to_move)
        self._record.clear()
        self._clear_selection()
        self._final_state = None
        self._players = {
            color: (
                EnginePlayer(
                    color,
                    self._engine,
                    self._settings.difficulty,
                    time_limit_ms=self._settings.ai_time_limit_ms,
                )
                if self._settings.is_engine_side(color)
                else HumanPlayer(color)
            )
            for color in Color
        }

        _LOGGER.info(
            "New game: mode=%s engine=%s difficulty=%s",
            self._settings.mode.name,
            self._settings.ai_color,
            self._settings.difficulty.name,
        )
        self._update_state()
        self._emit_board_updated()
        self._schedule_engine_move()

    def restart_to_menu(self) -> None:
        self._cancel_scheduled()
        self._clear_selection()
        self._turn = AwaitingMove(self._position.side_to_move)
        self._final_state = None
        self._state = GameState.MENU
        self._emit_state(self._state)

    def try_select(self, square: Square) -> bool:
        sq = _as_square(square)
        if sq is None or not self._accepts_human_input():
            self._reject_selection(square)
            return False

        piece = self._position.board[sq]
        if piece is None or piece.color != self._position.side_to_move:
            self._reject_selection(square)
            return False

        self._selected = sq
        self._selected_moves = MoveGenerator(self._position).legal_moves(sq)
        _LOGGER.debug("Selected %s (%d legal moves)", sq, len(self._selected_moves))
        self._emit_board_updated()
        return True

    def try_move(self, square: Square) -> bool:
        sq = _as_square(square)
        if sq is None or self._selected is None or not self._accepts_human_input():
            _LOGGER.debug("Rejected move to %r", square)
            return False

        move = next((m for m in self._selected_moves if m.to_sq == sq), None)
        if move is None:
            _LOGGER.debug("Rejected move %s -> %s: not legal", self._selected, sq)
            return False

        self._execute(move)
        return True

    def click(self, square: Square) -> bool:
        """Move the selected piece to *square* if legal, else select it."""
        sq = _as_square(square)
        if sq is not None and sq in self.legal_destinations:
            return self.try_move(sq)
        return self.try_select(square)

    def promote_pawn(self, piece_type: PieceType) -> bool:
        turn = self._turn
        if not isinstance(turn, AwaitingPromotion) or not self._state.accepts_moves:
            _LOGGER.debug("Rejected promotion: no pawn awaiting promotion")
            return False
        if piece_type not in PROMOTION_TYPES:
            _LOGGER.debug("Rejected promotion to %r", piece_type)
            return False

        self._position.promote(turn.square, piece_type)
        self._complete_turn(replace(turn.move, promotion=piece_type))
        return True

    # ── Move execution ───────────────────────────────────────────────────

    def _execute(self, move: Move) -> None:
        """Apply a legal *move*; capture, castling and en passant included."""
        mover = self._position.side_to_move
        captured = self._position.apply_move(move)
        if captured is not None and move.captured is None:
            move = replace(move, captured=captured)
        self._clear_selection()

        if move.flag == MoveFlag.PROMOTION and move.promotion is None:
            # Two-phase commit: the turn completes in promote_pawn().
            self._turn = AwaitingPromotion(mover, move.to_sq, move)
            _LOGGER.debug("%s pawn on %s awaiting promotion", mover, move.to_sq)
            self._emit_board_updated()
            self._emit_promotion_required(move.to_sq)
            return

        self._complete_turn(move)

    def _complete_turn(self, move: Move) -> None:
        self._record.append(move)
        self._position.pass_turn()
        self._turn = AwaitingMove(self._position.side_to_move)
        _LOGGER.debug("Played %s (ply %d)", move, self._record.move_count)

        self._update_state()
        self._emit_move(move)
        self._emit_board_updated()
        self._schedule_engine_move()

    def _update_state(self) -> None:
        """Recompute check / checkmate / stalemate for the side to move."""
        self._state = _STATE_FOR_STATUS[Rules.status(self._position)]
        if self._state.is_terminal:
            self._final_state = self._state
            _LOGGER.info(
                "Game over: %s, winner=%s", self._state.name, self.winner
            )
            self._result_call = self._scheduler.call_later(
                self._settings.result_delay_ms, self._show_result
            )
        self._emit_state(self._state)

    def _show_result(self) -> None:
        self._result_call = None
        if not self._state.is_terminal:
            return
        self._state = GameState.RESULT
        self._emit_state(self._state)

    # ── Engine turns ─────────────────────────────────────────────────────

    def _schedule_engine_move(self) -> None:
        if not self._state.accepts_moves or not isinstance(self._turn, AwaitingMove):
            return
        if not isinstance(self.current_player, EnginePlayer):
            return
        # One automated move at a time.
        if self.is_thinking:
            return
        self._engine_call = self._scheduler.call_later(
            self._settings.ai_move_delay_ms, self._play_engine_move
        )

    def _play_engine_move(self) -> None:
        player = self.current_player
        if (
            not isinstance(player, EnginePlayer)
            or not self._state.accepts_moves
            or not isinstance(self._turn, AwaitingMove)
        ):
            self._engine_call = None
            return

        try:
            proposed = player.choose_move(self._position.copy())
        finally:
            self._engine_call = None
        if proposed is None:
            _LOGGER.warning(
                "Engine has no move for %s in state %s", player.color, self._state.name
            )
            return

        legal = MoveGenerator(self._position).legal_moves(proposed.from_sq)
        move = next((m for m in legal if m.to_sq == proposed.to_sq), None)
        if move is None:
            raise ValueError(f"Engine proposed an illegal move: {proposed}")
        if move.flag == MoveFlag.PROMOTION:
            move = replace(move, promotion=proposed.promotion or PieceType.QUEEN)
        self._execute(move)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _accepts_human_input(self) -> bool:
        if not self._state.accepts_moves or not isinstance(self._turn, AwaitingMove):
            return False
        if self.is_thinking:
            return False
        player = self.current_player
        return player is None or player.is_human

    def _reject_selection(self, square: object) -> None:
        _LOGGER.debug("Rejected selection of %r", square)
        had_selection = self._selected is not None
        self._clear_selection()
        if had_selection:
            self._emit_board_updated()

    def _clear_selection(self) -> None:
        self._selected = None
        self._selected_moves = []

    def _cancel_scheduled(self) -> None:
        for call in (self._engine_call, self._result_call):
            if call is not None:
                call.cancel()
        self._engine_call = None
        self._result_call = None

    def _emit_state(self, state: GameState) -> None:
        for cb in list(self.events.on_state_changed):
            cb(state)

    def _emit_move(self, move: Move) -> None:
        for cb in list(self.events.on_move):
            cb(move)

    def _emit_board_updated(self) -> None:
        for cb in list(self.events.on_board_updated):
            cb()

    def _emit_promotion_required(self, square: Square) -> None:
        for cb in list(self.events.on_promotion_required):
            cb(square)


def _as_square(value: object) -> Square | None:
    """Coerce a (row, col) pair into a Square; ``None`` if off the board."""
    if not isinstance(value, tuple) or len(value) != 2:
        return None
    row, col = value
    if not isinstance(row, int) or not isinstance(col, int):
        return None
    if not is_valid_square(row, col):
        return None
    return Square(row, col)
