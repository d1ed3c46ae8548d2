"""Reference configuration: board size, palette and the three shape tiers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence, Tuple

from .shapes import Shape, as_shape


BOARD_SIZE = 10
HAND_SIZE = 3

SHAPE_COLORS: Tuple[str, ...] = (
    "#ef4444",  # red
    "#f97316",  # orange
    "#eab308",  # yellow
    "#22c55e",  # green
    "#06b6d4",  # cyan
    "#3b82f6",  # blue
    "#a855f7",  # purple
    "#ec4899",  # pink
)


def _shapes(*matrices: Sequence[Sequence[int]]) -> Tuple[Shape, ...]:
    return tuple(as_shape(m) for m in matrices)


# Tier 1: dots, dominoes, small corners, 2x2, short lines
SIMPLE_SHAPES = _shapes(
    [[1]],
    [[1, 1]],
    [[1], [1]],
    [[1, 1], [1, 1]],
    [[1, 0], [1, 1]],
    [[0, 1], [1, 1]],
    [[1, 1], [1, 0]],
    [[1, 1], [0, 1]],
    [[1, 1, 1]],
    [[1], [1], [1]],
)

# Tier 2: 4-lines, 2x3 block, big corners
MEDIUM_SHAPES = _shapes(
    [[1, 1, 1, 1]],
    [[1], [1], [1], [1]],
    [[1, 1, 1], [1, 1, 1]],
    [[1, 0, 0], [1, 0, 0], [1, 1, 1]],
    [[0, 0, 1], [0, 0, 1], [1, 1, 1]],
    [[1, 1, 1], [1, 0, 0], [1, 0, 0]],
    [[1, 1, 1], [0, 0, 1], [0, 0, 1]],
)

# Tier 3: 5-lines, T and S/Z shapes
COMPLEX_SHAPES = _shapes(
    [[1, 1, 1, 1, 1]],
    [[1], [1], [1], [1], [1]],
    [[1, 1, 1], [0, 1, 0]],
    [[0, 1, 0], [1, 1, 1]],
    [[1, 0], [1, 1], [1, 0]],
    [[0, 1], [1, 1], [0, 1]],
    [[1, 1, 0], [0, 1, 1]],
    [[0, 1, 1], [1, 1, 0]],
    [[1, 0], [1, 1], [0, 1]],
    [[0, 1], [1, 1], [1, 0]],
)


@dataclass(frozen=True, eq=False)
class ShapeCatalog:
    """Named difficulty tiers of shape definitions."""

    simple: Tuple[Shape, ...] = SIMPLE_SHAPES
    medium: Tuple[Shape, ...] = MEDIUM_SHAPES
    complex: Tuple[Shape, ...] = COMPLEX_SHAPES
    tiers: Dict[str, Tuple[Shape, ...]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        tiers = {}
        for name in ("simple", "medium", "complex"):
            shapes = tuple(as_shape(s) for s in getattr(self, name))
            if not shapes:
                raise ValueError(f"shape tier {name!r} is empty")
            object.__setattr__(self, name, shapes)
            tiers[name] = shapes
        object.__setattr__(self, "tiers", tiers)

    @classmethod
    def from_matrices(cls, simple: Sequence, medium: Sequence, complex: Sequence) -> "ShapeCatalog":
        return cls(tuple(simple), tuple(medium), tuple(complex))

    def all_shapes(self) -> Tuple[Shape, ...]:
        return self.simple + self.medium + self.complex

    def max_extent(self) -> int:
        """Largest bounding-box side over every tier."""
        return max(max(s.shape) for s in self.all_shapes())


DEFAULT_CATALOG = ShapeCatalog()
