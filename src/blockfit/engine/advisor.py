from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Sequence

from .grid import Grid, Position
from .lines import find_cleared_lines
from .placement import place
from .shapes import Piece, cell_count
from .terminal import valid_placements


@dataclass(frozen=True)
class HeuristicWeights:
    """Scoring weights for hint search: line clears dominate, size breaks ties."""
    line: int = 20
    size: int = 1

    def score(self, lines_cleared: int, cells: int) -> int:
        return lines_cleared * self.line + cells * self.size


class Move(NamedTuple):
    piece_index: int
    anchor: Position
    score: int
    lines_cleared: int


def iter_scored_moves(grid: Grid, pieces: Sequence[Piece],
                      weights: HeuristicWeights = HeuristicWeights()) -> Iterator[Move]:
    """Yield every legal move with its heuristic score.

    Order is fixed: piece index ascending, then anchors row by row, column
    by column. Each candidate is simulated on a copy; `grid` is untouched.
    """
    for piece_index, piece in enumerate(pieces):
        cells = cell_count(piece.shape)
        for anchor in valid_placements(grid, piece.shape):
            simulated = place(grid, piece.shape, anchor, piece.tag)
            lines = find_cleared_lines(simulated).lines_cleared
            yield Move(piece_index, anchor, weights.score(lines, cells), lines)


def find_best_move(grid: Grid, pieces: Sequence[Piece],
                   weights: HeuristicWeights = HeuristicWeights()) -> Optional[Move]:
    """Best (piece, anchor) by heuristic score, or None when nothing fits.

    Only a strictly higher score replaces the current best, so ties go to
    the move enumerated first.
    """
    best: Optional[Move] = None
    for move in iter_scored_moves(grid, pieces, weights):
        if best is None or move.score > best.score:
            best = move
    return best
