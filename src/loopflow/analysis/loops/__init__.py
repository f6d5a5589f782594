"""
Loop nesting analysis.

**Module Structure:**
- forest.py: Loop records and the loop forest (SimpleLoop, LoopStructureGraph)
- havlak.py: Havlak's loop finder populating the forest from a CFG
"""

from .forest import SimpleLoop, LoopStructureGraph, loopChecksums, mix
from .havlak import HavlakLoopFinder, findLoops

__all__ = [
    'SimpleLoop',
    'LoopStructureGraph',
    'loopChecksums',
    'mix',
    'HavlakLoopFinder',
    'findLoops',
]
