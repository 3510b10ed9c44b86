"""Game configuration."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color
from gambit.game.interfaces import Difficulty, GameMode


@dataclass(frozen=True)
class GameSettings:
    """All options chosen when a game is started."""

    mode: GameMode = GameMode.PVP
    ai_color: Color | None = None
    difficulty: Difficulty = Difficulty.MEDIUM

    # Timing
    ai_move_delay_ms: int = 500
    result_delay_ms: int = 2000
    # Search budget per engine move; None searches to full depth.
    ai_time_limit_ms: int | None = 3000

    def __post_init__(self) -> None:
        if self.mode == GameMode.PVE and self.ai_color is None:
            raise ValueError("PVE games need an engine side (ai_color)")
        if self.mode == GameMode.PVP and self.ai_color is not None:
            raise ValueError("PVP games cannot have an engine side")
        if self.ai_move_delay_ms < 0 or self.result_delay_ms < 0:
            raise ValueError("Delays must be non-negative")
        if self.ai_time_limit_ms is not None and self.ai_time_limit_ms <= 0:
            raise ValueError("Engine time limit must be positive")

    @classmethod
    def vs_engine(
        cls,
        human_color: Color = Color.WHITE,
        difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> GameSettings:
        """Human plays *human_color*; the engine takes the other side."""
        return cls(GameMode.PVE, human_color.opposite, difficulty)

    def is_engine_side(self, color: Color) -> bool:
        return self.mode == GameMode.PVE and self.ai_color == color
