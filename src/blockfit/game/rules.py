from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_points: int = 2000
    multi_line_bonus: int = 1000
    streak_bonus: float = 0.1
    placement_points: int = 0

    def score_for_lines(self, lines: int, combo: int) -> int:
        """Bonus for a placement clearing `lines` lines as the `combo`-th clear in a row."""
        if lines <= 0:
            return 0
        base = lines * self.line_clear_points + (lines - 1) * self.multi_line_bonus
        return int(math.floor(base * combo * (1 + combo * self.streak_bonus)))

    def score_for_move(self, cells_placed: int, lines: int, combo: int) -> int:
        return cells_placed * self.placement_points + self.score_for_lines(lines, combo)


def crowns_for(score: int, target: int) -> int:
    """Level rating: 1, 2 or 3 crowns at 1x, 1.5x and 2x the target score."""
    if score >= target * 2:
        return 3
    if score >= target * 1.5:
        return 2
    if score >= target:
        return 1
    return 0
