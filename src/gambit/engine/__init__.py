"""Chess engine package: static evaluation and minimax search."""

from gambit.engine.evaluation import PIECE_VALUES, Evaluator, SideScore
from gambit.engine.minimax import MinimaxEngine, generate_legal_moves
from gambit.engine.search import IEngine, MoveSource, SearchResult

DefaultEngine: type[IEngine] = MinimaxEngine

__all__ = [
    "DefaultEngine",
    "Evaluator",
    "IEngine",
    "MinimaxEngine",
    "MoveSource",
    "PIECE_VALUES",
    "SearchResult",
    "SideScore",
    "generate_legal_moves",
]
