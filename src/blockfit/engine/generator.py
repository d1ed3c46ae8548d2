from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from .catalog import DEFAULT_CATALOG, HAND_SIZE, SHAPE_COLORS, ShapeCatalog
from .grid import Grid
from .shapes import SINGLE_CELL, Piece, Shape
from .terminal import is_terminal


logger = logging.getLogger(__name__)


class Tier(str, Enum):
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


@dataclass(frozen=True)
class TierWeights:
    simple: float
    medium: float
    complex: float

    def __post_init__(self) -> None:
        values = self.as_tuple()
        if any(w < 0 for w in values) or sum(values) <= 0:
            raise ValueError(f"tier weights must be non-negative with a positive sum, got {values}")

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.simple, self.medium, self.complex)


@dataclass(frozen=True)
class DifficultySchedule:
    """Score-based step function over tier weights.

    Below `low_threshold` the hand leans on simple shapes; from
    `high_threshold` on, complex shapes are capped so they never dominate.
    """

    low_threshold: int = 2000
    high_threshold: int = 10000
    early: TierWeights = TierWeights(0.7, 0.3, 0.0)
    mid: TierWeights = TierWeights(0.4, 0.4, 0.2)
    late: TierWeights = TierWeights(0.3, 0.4, 0.3)

    def __post_init__(self) -> None:
        if self.low_threshold > self.high_threshold:
            raise ValueError("low_threshold must not exceed high_threshold")

    def weights_for(self, score: int) -> TierWeights:
        if score < self.low_threshold:
            return self.early
        if score < self.high_threshold:
            return self.mid
        return self.late


TIER_ORDER = (Tier.SIMPLE, Tier.MEDIUM, Tier.COMPLEX)


class HandGenerator:
    """Draws hands of pieces from the tiered catalog.

    All randomness goes through `rng`, so a seeded generator produces the
    same hands every run.
    """

    def __init__(
        self,
        catalog: ShapeCatalog = DEFAULT_CATALOG,
        palette: Sequence[Any] = SHAPE_COLORS,
        schedule: Optional[DifficultySchedule] = None,
        hand_size: int = HAND_SIZE,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        if hand_size <= 0:
            raise ValueError(f"hand_size must be positive, got {hand_size}")
        if len(palette) == 0:
            raise ValueError("palette must contain at least one fill tag")
        self.catalog = catalog
        self.palette = tuple(palette)
        self.schedule = schedule or DifficultySchedule()
        self.hand_size = int(hand_size)
        self.rng = rng if rng is not None else random.Random(seed)

    def _new_id(self) -> str:
        return f"{self.rng.getrandbits(32):08x}"

    def _make_piece(self, shape: Shape, tier: Optional[Tier]) -> Piece:
        tag = self.rng.choice(self.palette)
        return Piece(id=self._new_id(), shape=shape, tag=tag, tier=tier.value if tier else None)

    def _piece_from_tier(self, tier: Tier) -> Piece:
        shape = self.rng.choice(self.catalog.tiers[tier.value])
        return self._make_piece(shape, tier)

    def sample_tier(self, score: int) -> Tier:
        weights = self.schedule.weights_for(score).as_tuple()
        return self.rng.choices(TIER_ORDER, weights=weights)[0]

    def generate_hand(self, current_score: int, grid: Grid) -> List[Piece]:
        """Weighted hand with at least one simple piece and a playable-hand guarantee.

        If the board still has an empty cell but nothing in the drawn hand
        fits, the first slot becomes a single-cell piece.
        """
        forced = self._piece_from_tier(Tier.SIMPLE)
        hand = [self._piece_from_tier(self.sample_tier(current_score)) for _ in range(self.hand_size - 1)]
        hand.insert(self.rng.randrange(self.hand_size), forced)

        if not grid.is_full() and is_terminal(grid, [p.shape for p in hand]):
            logger.debug("no piece of the drawn hand fits (score=%d); substituting a single cell", current_score)
            hand[0] = self._make_piece(SINGLE_CELL, Tier.SIMPLE)
        return hand

    def uniform_hand(self) -> List[Piece]:
        """Uniform draw over every tier, no safety net."""
        pool = self.catalog.all_shapes()
        return [self._make_piece(self.rng.choice(pool), None) for _ in range(self.hand_size)]
