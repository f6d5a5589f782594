"""loopflow - Loop nesting analysis for control flow graphs.
"""

__version__ = "0.1.0"

# Import main components for easy access
from .analysis.cfg.graph import CFG, BasicBlock, BasicBlockEdge
from .analysis.loops.forest import LoopStructureGraph, SimpleLoop
from .analysis.loops.havlak import HavlakLoopFinder, findLoops

__all__ = [
    "CFG",
    "BasicBlock",
    "BasicBlockEdge",
    "LoopStructureGraph",
    "SimpleLoop",
    "HavlakLoopFinder",
    "findLoops",
    "__version__",
]
