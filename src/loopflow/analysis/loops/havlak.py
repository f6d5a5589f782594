"""Havlak's loop finder.

Find loops and build the loop forest using Havlak's algorithm, which is
derived from Tarjan's interval finding. Variable names and step lettering
follow the nomenclature of Havlak's paper ("Nesting of Reducible and
Irreducible Loops", TOPLAS 1997), which in turn is close to Tarjan's.

The algorithm runs in one pass:

a. Number the blocks reachable from the start node in DFS preorder.
b. Split the incoming edges of every block into backedges (from DFS
   descendants) and non-backedges (from everything else).
c. Visit the blocks in reverse preorder, so inner loop headers are handled
   before the headers of surrounding loops.
d. For a header w, seed the loop body P with the representatives of the
   sources of w's backedges.
e. Chase non-backedges upwards from P. A predecessor that is not a DFS
   descendant of w is another way into the loop that avoids w, which makes w
   the header of an irreducible loop.

Each body is then collapsed into w with union-find and linked into the
LoopStructureGraph.
"""

import collections
import logging

from loopflow.analysis.cfg.dfs import DFSNumbering
from loopflow.util.unionfind import UnionFindNode

LOG = logging.getLogger(__name__)


class HavlakLoopFinder(object):
    """Populate a LoopStructureGraph with the loops of a CFG.

    The finder only reads the CFG. One instance may be run several times,
    but each run should get a fresh LoopStructureGraph.

    Attributes:
        cfg: The CFG under analysis.
        lsg: The LoopStructureGraph receiving the loops.
        aborted: True if the last run gave up on a degenerate input.
        abortedAt: The BasicBlock whose fan-in tripped the guard, or None.
    """

    BB_NONHEADER = 1  # a regular BB
    BB_REDUCIBLE = 2  # reducible loop
    BB_SELF = 3  # single BB loop
    BB_IRREDUCIBLE = 4  # irreducible loop
    BB_DEAD = 5  # a dead BB

    # Marker for blocks the DFS never reached.
    UNVISITED = -1

    # Safeguard against pathologic algorithm behavior.
    MAXNONBACKPREDS = 32 * 1024

    def __init__(self, cfg, lsg):
        self.cfg = cfg
        self.lsg = lsg
        self.aborted = False
        self.abortedAt = None

    def findLoops(self):
        """Run the analysis.

        Returns:
            int: Number of loops in the forest, root included. 0 if the CFG
            has no start node or if the analysis aborted (see aborted).
        """
        self.aborted = False
        self.abortedAt = None

        if self.cfg.startNode is None:
            return 0

        size = self.cfg.getNumNodes()

        nonBackPreds = [[] for _ in range(size)]
        backPreds = [[] for _ in range(size)]
        types = [self.BB_NONHEADER] * size
        nodes = [UnionFindNode() for _ in range(size)]

        # Step a:
        #   - depth-first traversal and numbering.
        #   - unreached BB's keep an unbound node and are marked dead below.
        dfs = DFSNumbering(self.cfg.startNode)
        for current, bb in enumerate(dfs.order):
            nodes[current].initNode(bb, current)

        # Step b:
        #   A backedge comes from a descendant in the DFS tree, and
        #   non-backedges from non-descendants (following Tarjan).
        for w in range(size):
            nodeW = nodes[w].bb
            if nodeW is None:
                types[w] = self.BB_DEAD
                continue

            for nodeV in nodeW.inEdges:
                v = dfs.numbers.get(nodeV.id, self.UNVISITED)
                if v == self.UNVISITED:
                    continue
                if dfs.isAncestor(w, v):
                    backPreds[w].append(v)
                else:
                    nonBackPreds[w].append(v)

        # Step c:
        #   The outer loop, unchanged from Tarjan. It does nothing except for
        #   those nodes which are the destinations of backedges.
        for w in range(size - 1, -1, -1):
            nodeW = nodes[w].bb
            if nodeW is None:
                continue

            # 'P' in Havlak's paper
            nodePool = []

            # Step d:
            for v in backPreds[w]:
                if v != w:
                    nodePool.append(nodes[v].findSet())
                else:
                    types[w] = self.BB_SELF

            pooled = set(nodePool)
            workList = collections.deque(nodePool)

            if nodePool:
                types[w] = self.BB_REDUCIBLE

            while workList:
                x = workList.popleft()

                # Step e:
                #   Chase upwards from the sources of w's backedges. A node y'
                #   that is not a descendant of w is another entry into the
                #   loop, so w heads an irreducible loop.
                preds = nonBackPreds[x.dfsNumber]
                if len(preds) > self.MAXNONBACKPREDS:
                    self._abort(x, len(preds))
                    return 0

                for y in preds:
                    ydash = nodes[y].findSet()

                    if not dfs.isAncestor(w, ydash.dfsNumber):
                        types[w] = self.BB_IRREDUCIBLE
                        nonBackPreds[w].append(ydash.dfsNumber)
                    elif ydash.dfsNumber != w and ydash not in pooled:
                        workList.append(ydash)
                        nodePool.append(ydash)
                        pooled.add(ydash)

            # Collapse the nodes of the SCC into w, creating a loop
            # descriptor and linking nested loops below it.
            if nodePool or types[w] == self.BB_SELF:
                loop = self.lsg.createNewLoop()
                loop.setHeader(nodeW)
                loop.isReducible = types[w] != self.BB_IRREDUCIBLE
                nodes[w].setLoop(loop)

                for node in nodePool:
                    node.union(nodes[w])

                    # Nested loops are not added, but linked together.
                    if node.loop is not None:
                        node.loop.setParent(loop)
                    else:
                        loop.addNode(node.bb)

                self.lsg.addLoop(loop)

        self.lsg.adoptOrphans()

        count = self.lsg.getNumLoops()
        LOG.debug(
            "found %d loops in %d reachable of %d blocks",
            count - 1,
            len(dfs),
            size,
        )
        return count

    def _abort(self, x, fanIn):
        self.aborted = True
        self.abortedAt = x.bb
        self.lsg.adoptOrphans()
        LOG.warning(
            "loop analysis aborted at %r: %d non-backedge predecessors exceed %d",
            x.bb,
            fanIn,
            self.MAXNONBACKPREDS,
        )


def findLoops(cfg, lsg):
    """Find the loops of cfg and record them in lsg.

    Returns:
        int: Number of loops in lsg, root included, or 0 (see
        HavlakLoopFinder.findLoops).
    """
    return HavlakLoopFinder(cfg, lsg).findLoops()
