"""BlockFit: block-placement puzzle engine.

Subpackages:
- engine: grid, shapes, placement, line clears, terminal detection, hints, piece generation
- game: host-side session with scoring, undo and hand management
- env: Gymnasium environment and wrappers
- rl: command-line agents
"""

__version__ = "0.1.0"
