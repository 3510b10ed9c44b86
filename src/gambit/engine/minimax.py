"""Pure-Python chess search (minimax + alpha-beta)."""

from __future__ import annotations

import logging
from dataclasses import replace
from time import perf_counter

from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.position import Position
from gambit.engine.evaluation import Evaluator
from gambit.engine.search import IEngine, MoveSource, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000
_MATE_SCORE = 100_000


def generate_legal_moves(position: Position) -> list[Move]:
    """Default :data:`MoveSource`: legal moves for the side to move."""
    return MoveGenerator(position).generate_legal_moves()


class MinimaxEngine(IEngine):
    """Fixed-depth minimax searcher with alpha-beta pruning.

    Moves are searched in the order the move source yields them and the
    first of equally scored root moves wins, so results are deterministic.
    The position handed in is never modified: every node works on its
    own copy.

    A node whose side to move has no legal moves scores as a decisive loss
    for that side, whether it is checkmate or stalemate.

    With a ``time_limit_ms`` the search stops once the deadline passes and
    answers with the best root move fully searched so far (the first root
    move if none was).
    """

    __slots__ = ("_move_source", "_evaluator", "_nodes", "_deadline", "_timed_out")

    def __init__(
        self,
        move_source: MoveSource | None = None,
        evaluator: Evaluator | None = None,
    ) -> None:
        self._move_source: MoveSource = move_source or generate_legal_moves
        self._evaluator = evaluator or Evaluator()
        self._nodes = 0
        self._deadline: float | None = None
        self._timed_out = False

    def best_move(
        self,
        position: Position,
        side: Color,
        depth: int,
        time_limit_ms: int | None = None,
    ) -> Move | None:
        return self.search(position, side, depth, time_limit_ms).best_move

    def search(
        self,
        position: Position,
        side: Color,
        depth: int,
        time_limit_ms: int | None = None,
    ) -> SearchResult:
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._timed_out = False
        self._deadline = None
        if time_limit_ms is not None:
            ms = max(time_limit_ms, 1)
            self._deadline = perf_counter() + (ms / 1000.0)

        root = position.copy()
        root.side_to_move = side

        root_moves = self._moves(root)
        if not root_moves:
            return SearchResult(None, -_MATE_SCORE, 0, self._nodes)

        best_move: Move | None = None
        best_score = -_INF_SCORE
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in root_moves:
            child = root.copy()
            child.make_move(move)
            score = self._minimax(child, side, depth - 1, alpha, beta, ply=1)
            if self._timed_out:
                break
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

        if best_move is None:
            best_move = root_moves[0]
            best_score = self._static_eval(root, side)
        if self._timed_out:
            _LOGGER.debug("Search stopped at the %d ms deadline", time_limit_ms)

        _LOGGER.debug(
            "Search depth=%d side=%s best=%s score=%d nodes=%d",
            depth,
            side,
            best_move,
            best_score,
            self._nodes,
        )
        return SearchResult(best_move, best_score, depth, self._nodes)

    def _minimax(
        self,
        position: Position,
        root_side: Color,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        self._nodes += 1
        if depth == 0 or self._should_stop():
            return self._static_eval(position, root_side)

        moves = self._moves(position)
        maximizing = position.side_to_move == root_side
        if not moves:
            # The side to move is stuck: decisive for whoever is not to move.
            mate = _MATE_SCORE - ply
            return -mate if maximizing else mate

        if maximizing:
            value = -_INF_SCORE
            for move in moves:
                child = position.copy()
                child.make_move(move)
                score = self._minimax(child, root_side, depth - 1, alpha, beta, ply + 1)
                value = max(value, score)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value

        value = _INF_SCORE
        for move in moves:
            child = position.copy()
            child.make_move(move)
            score = self._minimax(child, root_side, depth - 1, alpha, beta, ply + 1)
            value = min(value, score)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value

    def _should_stop(self) -> bool:
        if not self._timed_out and self._deadline is not None:
            self._timed_out = perf_counter() >= self._deadline
        return self._timed_out

    def _moves(self, position: Position) -> list[Move]:
        return [_with_default_promotion(m) for m in self._move_source(position)]

    def _static_eval(self, position: Position, root_side: Color) -> int:
        score = self._evaluator.evaluate(position)
        return score if root_side == Color.WHITE else -score

    @property
    def nodes(self) -> int:
        """Nodes visited by the most recent search."""
        return self._nodes


def _with_default_promotion(move: Move) -> Move:
    if move.flag == MoveFlag.PROMOTION and move.promotion is None:
        return replace(move, promotion=PieceType.QUEEN)
    return move
