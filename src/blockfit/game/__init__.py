"""Game session for BlockFit.

Exports the host-side state owner built on the engine:
- BlockFitGame: grid, hand, score, combo, undo history and tools
- GameConfig: session configuration
- ScoringRules: line-clear bonus with combo multiplier
- crowns_for: level rating against a target score
- PlacementOutcome / GameSnapshot: placement result and undo record
"""

from .rules import ScoringRules, crowns_for
from .session import FAIL, INFINITE, LEVEL, WIN, BlockFitGame, GameConfig, GameSnapshot, PlacementOutcome

__all__ = [
    "BlockFitGame",
    "GameConfig",
    "GameSnapshot",
    "PlacementOutcome",
    "ScoringRules",
    "crowns_for",
    "INFINITE",
    "LEVEL",
    "WIN",
    "FAIL",
]
