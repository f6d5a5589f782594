import unittest

from loopflow.analysis.cfg.graph import CFG
from loopflow.analysis.loops.forest import LoopStructureGraph
from loopflow.analysis.loops.havlak import HavlakLoopFinder


def buildCFG(edges, count=None):
    """Build a CFG from (src, dst) id pairs.

    Blocks are registered in id order first, so block 0 is the start node.
    """
    if count is None:
        count = 1 + max(max(edge) for edge in edges) if edges else 0

    cfg = CFG()
    for i in range(count):
        cfg.createNode("bb%d" % i, i)
    for src, dst in edges:
        cfg.createEdge(src, dst)
    return cfg


# Single loop nested in another one; block 4 is the exit.
NESTED_EDGES = [(0, 1), (1, 2), (2, 3), (3, 2), (3, 1), (1, 4)]

# Two entries (A=1, C=2) into the cycle B=3 <-> D=4.
IRREDUCIBLE_EDGES = [(0, 1), (0, 2), (1, 3), (2, 4), (3, 4), (4, 3)]


class LoopTestBase(unittest.TestCase):
    def analyze(self, cfg, finderClass=HavlakLoopFinder):
        """Run the loop finder on cfg with a fresh forest."""
        lsg = LoopStructureGraph()
        finder = finderClass(cfg, lsg)
        count = finder.findLoops()
        return count, lsg, finder

    def loopIds(self, loop):
        return [bb.id for bb in loop.basicBlocks]
