from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, List, NamedTuple, Optional, Tuple

from blockfit.engine import (
    BOARD_SIZE,
    DEFAULT_CATALOG,
    HAND_SIZE,
    SHAPE_COLORS,
    DifficultySchedule,
    Grid,
    HandGenerator,
    HeuristicWeights,
    Move,
    Piece,
    ShapeCatalog,
    can_place,
    find_best_move,
    find_cleared_lines,
    clear_lines,
    is_terminal,
    place,
    valid_placements,
)

from .rules import ScoringRules, crowns_for


logger = logging.getLogger(__name__)

INFINITE = "infinite"
LEVEL = "level"

WIN = "win"
FAIL = "fail"
MAX_CROWNS = 3


@dataclass
class GameConfig:
    """Configuration for a BlockFit session"""
    board_size: int = BOARD_SIZE
    hand_size: int = HAND_SIZE
    mode: str = INFINITE
    max_moves: Optional[int] = None
    target_score: Optional[int] = None
    max_history: Optional[int] = None
    max_episode_steps: int = 10000
    seed: Optional[int] = None
    catalog: ShapeCatalog = DEFAULT_CATALOG
    palette: Tuple[Any, ...] = SHAPE_COLORS
    schedule: DifficultySchedule = field(default_factory=DifficultySchedule)
    heuristic: HeuristicWeights = field(default_factory=HeuristicWeights)
    scoring: ScoringRules = field(default_factory=ScoringRules)

    def __post_init__(self) -> None:
        if self.mode not in (INFINITE, LEVEL):
            raise ValueError(f"unknown mode {self.mode!r}")
        if self.max_moves is not None and self.max_moves <= 0:
            raise ValueError("max_moves must be positive")
        if self.target_score is not None and self.target_score <= 0:
            raise ValueError("target_score must be positive")


class PlacementOutcome(NamedTuple):
    success: bool
    gained: int
    lines_cleared: int


@dataclass(frozen=True)
class GameSnapshot:
    grid: Grid
    pieces: Tuple[Piece, ...]
    score: int
    combo: int
    moves_left: Optional[int]
    game_over: bool
    total_lines_cleared: int
    total_pieces_placed: int
    level_result: Optional[str] = None


class BlockFitGame:
    """Host-side game state: grid, hand, score, combo and undo history.

    Every grid held here comes from the engine's copy-on-write operations,
    so snapshots share grids safely.
    """

    def __init__(self, config: GameConfig | None = None, rng: random.Random | None = None):
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.generator = HandGenerator(
            catalog=self.config.catalog,
            palette=self.config.palette,
            schedule=self.config.schedule,
            hand_size=self.config.hand_size,
            rng=self.rng,
        )
        self.scoring = self.config.scoring

        self.grid = Grid(self.config.board_size)
        self.current_pieces: List[Piece] = []
        self.score = 0
        self.combo = 0
        self.moves_left: Optional[int] = self.config.max_moves
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.step_count = 0
        self.game_over = False
        self.level_result: Optional[str] = None
        self.history: Deque[GameSnapshot] = deque(maxlen=self.config.max_history)

        self.generate_new_piece_set()

    def generate_new_piece_set(self) -> None:
        if self.config.mode == LEVEL:
            self.current_pieces = self.generator.uniform_hand()
        else:
            self.current_pieces = self.generator.generate_hand(self.score, self.grid)
        logger.debug("new hand: %s", [p.shape.tolist() for p in self.current_pieces])

    def get_valid_actions(self) -> List[Tuple[int, int, int]]:
        """List of (piece_idx, row, col) valid actions"""
        actions: List[Tuple[int, int, int]] = []
        for piece_idx, piece in enumerate(self.current_pieces):
            for row, col in valid_placements(self.grid, piece.shape):
                actions.append((piece_idx, row, col))
        return actions

    def can_place_any_piece(self) -> bool:
        return not is_terminal(self.grid, [p.shape for p in self.current_pieces])

    def _snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            grid=self.grid,
            pieces=tuple(self.current_pieces),
            score=self.score,
            combo=self.combo,
            moves_left=self.moves_left,
            game_over=self.game_over,
            total_lines_cleared=self.total_lines_cleared,
            total_pieces_placed=self.total_pieces_placed,
            level_result=self.level_result,
        )

    def place_piece(self, piece_idx: int, row: int, col: int) -> PlacementOutcome:
        if self.game_over or piece_idx < 0 or piece_idx >= len(self.current_pieces):
            return PlacementOutcome(False, 0, 0)
        piece = self.current_pieces[piece_idx]
        if not can_place(self.grid, piece.shape, (row, col)):
            return PlacementOutcome(False, 0, 0)

        self.history.append(self._snapshot())

        placed = place(self.grid, piece.shape, (row, col), piece.tag)
        cleared = find_cleared_lines(placed)
        lines = cleared.lines_cleared
        self.grid = clear_lines(placed, cleared.rows, cleared.cols) if lines else placed

        self.combo = self.combo + 1 if lines else 0
        gained = self.scoring.score_for_move(piece.cell_count, lines, self.combo)
        self.score += gained
        self.total_pieces_placed += 1
        self.total_lines_cleared += lines
        self.step_count += 1
        self.current_pieces.pop(piece_idx)
        if self.moves_left is not None:
            self.moves_left = max(0, self.moves_left - 1)

        if len(self.current_pieces) == 0:
            self.generate_new_piece_set()
        if self.crowns == MAX_CROWNS or not self.can_place_any_piece() or self.moves_left == 0:
            self._end_game()
        return PlacementOutcome(True, gained, lines)

    @property
    def crowns(self) -> int:
        """Crowns earned so far; always 0 outside a level with a target score."""
        if self.config.mode != LEVEL or self.config.target_score is None:
            return 0
        return crowns_for(self.score, self.config.target_score)

    def _end_game(self) -> None:
        self.game_over = True
        if self.config.mode == LEVEL and self.config.target_score is not None:
            self.level_result = WIN if self.crowns >= 1 else FAIL
        logger.info("game over: score=%d pieces=%d lines=%d result=%s",
                    self.score, self.total_pieces_placed, self.total_lines_cleared, self.level_result)

    def simulate_placement(self, piece_idx: int, row: int, col: int) -> PlacementOutcome:
        if piece_idx < 0 or piece_idx >= len(self.current_pieces):
            return PlacementOutcome(False, 0, 0)
        piece = self.current_pieces[piece_idx]
        if not can_place(self.grid, piece.shape, (row, col)):
            return PlacementOutcome(False, 0, 0)
        lines = find_cleared_lines(place(self.grid, piece.shape, (row, col), piece.tag)).lines_cleared
        combo = self.combo + 1 if lines else 0
        return PlacementOutcome(True, self.scoring.score_for_move(piece.cell_count, lines, combo), lines)

    def undo(self) -> bool:
        """Restore the state before the last successful placement."""
        if not self.history:
            return False
        snap = self.history.pop()
        self.grid = snap.grid
        self.current_pieces = list(snap.pieces)
        self.score = snap.score
        self.combo = snap.combo
        self.moves_left = snap.moves_left
        self.game_over = snap.game_over
        self.total_lines_cleared = snap.total_lines_cleared
        self.total_pieces_placed = snap.total_pieces_placed
        self.level_result = snap.level_result
        logger.debug("undo: score back to %d", self.score)
        return True

    def refresh_hand(self) -> bool:
        if self.game_over:
            return False
        self.generate_new_piece_set()
        if not self.can_place_any_piece():
            self._end_game()
        return True

    def rotate_piece(self, piece_idx: int) -> Piece:
        if not 0 <= piece_idx < len(self.current_pieces):
            raise IndexError(f"no piece at index {piece_idx}")
        rotated = self.current_pieces[piece_idx].rotated()
        self.current_pieces[piece_idx] = rotated
        return rotated

    def hint(self) -> Optional[Move]:
        if self.game_over:
            return None
        return find_best_move(self.grid, self.current_pieces, self.config.heuristic)

    def get_state(self) -> dict:
        return {
            "grid": self.grid.occupancy().astype(int),
            "current_pieces": [p.shape.tolist() for p in self.current_pieces],
            "pieces_remaining": len(self.current_pieces),
            "score": self.score,
            "combo": self.combo,
            "moves_left": self.moves_left,
            "total_lines_cleared": self.total_lines_cleared,
            "total_pieces_placed": self.total_pieces_placed,
            "step_count": self.step_count,
            "game_over": self.game_over,
            "crowns": self.crowns,
            "level_result": self.level_result,
            "filled_ratio": self.grid.get_filled_ratio(),
        }

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid = Grid(self.config.board_size)
        self.current_pieces = []
        self.score = 0
        self.combo = 0
        self.moves_left = self.config.max_moves
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.step_count = 0
        self.game_over = False
        self.level_result = None
        self.history.clear()
        self.generate_new_piece_set()

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "pieces_placed": self.total_pieces_placed,
            "lines_cleared": self.total_lines_cleared,
            "steps_taken": self.step_count,
            "final_fill_ratio": self.grid.get_filled_ratio(),
            "avg_score_per_piece": self.score / max(1, self.total_pieces_placed),
            "avg_lines_per_piece": self.total_lines_cleared / max(1, self.total_pieces_placed),
        }
