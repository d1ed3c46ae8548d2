"""Puzzle state-transition engine for BlockFit.

Exports the pure, copy-on-write engine operations:
- Grid / Position: board of fill tags and shape anchors
- as_shape / rotate_cw / Piece: shape definitions and hand pieces
- can_place / place: placement validation and execution
- find_cleared_lines / clear_lines: full row and column handling
- is_terminal: no-moves detection
- find_best_move: hint heuristic
- HandGenerator: difficulty-weighted piece generation
"""

from .grid import Grid, Position, format_grid
from .shapes import SINGLE_CELL, Piece, Shape, as_shape, cell_count, format_shape, rotate_cw, shape_cells
from .placement import can_place, place
from .lines import LineClearResult, clear_lines, find_cleared_lines, resolve_lines
from .terminal import has_valid_placement, is_terminal, valid_placements
from .advisor import HeuristicWeights, Move, find_best_move, iter_scored_moves
from .catalog import BOARD_SIZE, DEFAULT_CATALOG, HAND_SIZE, SHAPE_COLORS, ShapeCatalog
from .generator import DifficultySchedule, HandGenerator, Tier, TierWeights

__all__ = [
    "Grid",
    "Position",
    "format_grid",
    "Piece",
    "Shape",
    "SINGLE_CELL",
    "as_shape",
    "cell_count",
    "format_shape",
    "rotate_cw",
    "shape_cells",
    "can_place",
    "place",
    "LineClearResult",
    "clear_lines",
    "find_cleared_lines",
    "resolve_lines",
    "has_valid_placement",
    "is_terminal",
    "valid_placements",
    "HeuristicWeights",
    "Move",
    "find_best_move",
    "iter_scored_moves",
    "BOARD_SIZE",
    "DEFAULT_CATALOG",
    "HAND_SIZE",
    "SHAPE_COLORS",
    "ShapeCatalog",
    "DifficultySchedule",
    "HandGenerator",
    "Tier",
    "TierWeights",
]
