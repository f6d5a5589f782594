"""Control Flow Graph (CFG) representation.

This module provides the minimal graph container consumed by the loop
finder:

- BasicBlock: a node with ordered lists of predecessor and successor blocks
- BasicBlockEdge: an immutable (src, dst) pair that wires both blocks
- CFG: the id -> block map, the ordered edge list and the start node

The graph is append-only. Blocks are registered once per id and edges are
never removed, so an analysis can rely on the stored edge order being stable
for the lifetime of the graph.
"""

from loopflow.application.errors import UnknownBlockError


class BasicBlock(object):
    """A single control flow node.

    BasicBlock only maintains a list of in-edges and a list of out-edges.
    Both hold neighbouring blocks (not edge objects) in the order the edges
    were created.

    Attributes:
        name: Human readable label.
        id: Integer identity, unique within the owning CFG.
        inEdges: Predecessor blocks.
        outEdges: Successor blocks.
    """

    __slots__ = "name", "id", "inEdges", "outEdges"

    def __init__(self, name, id):
        self.name = name
        self.id = id
        self.inEdges = []
        self.outEdges = []

    def numPred(self):
        return len(self.inEdges)

    def numSucc(self):
        return len(self.outEdges)

    def addInEdge(self, bb):
        self.inEdges.append(bb)

    def addOutEdge(self, bb):
        self.outEdges.append(bb)

    def __repr__(self):
        return "%s(%r, %d)" % (type(self).__name__, self.name, self.id)


class BasicBlockEdge(object):
    """A directed edge between two blocks of the same CFG.

    Creating the edge updates the adjacency lists of both endpoints and
    registers the edge with the CFG.

    Attributes:
        src: Source block.
        dst: Destination block.
    """

    __slots__ = "src", "dst"

    def __init__(self, cfg, src, dst):
        """Create and register an edge.

        Args:
            cfg: The CFG owning both endpoints.
            src: Source block.
            dst: Destination block.

        Raises:
            UnknownBlockError: If either endpoint is not registered in cfg.
        """
        for bb in (src, dst):
            if not cfg.owns(bb):
                raise UnknownBlockError(bb)

        self.src = src
        self.dst = dst

        src.addOutEdge(dst)
        dst.addInEdge(src)

        cfg.addEdge(self)

    def __repr__(self):
        return "%s(%d -> %d)" % (type(self).__name__, self.src.id, self.dst.id)


class CFG(object):
    """CFG maintains a map of nodes, a list of edges, plus a start node.

    The start node is the first block ever registered, whatever its id. It is
    set iff the graph has at least one node and never changes afterwards.

    Attributes:
        basicBlockMap: Mapping from block id to BasicBlock, in registration
            order.
        edgeList: Edges in creation order.
        startNode: The entry block, or None for an empty graph.
    """

    def __init__(self):
        self.basicBlockMap = {}
        self.edgeList = []
        self.startNode = None

    def createNode(self, name, id):
        """Return the block registered under id, creating it if needed.

        Registration is idempotent: a second call with a known id returns the
        existing block and keeps its original name.

        Args:
            name: Label for a new block.
            id: Integer identity.

        Returns:
            BasicBlock: The block for id.
        """
        node = self.basicBlockMap.get(id)
        if node is None:
            node = BasicBlock(name, id)
            self.basicBlockMap[id] = node

            if self.startNode is None:
                self.startNode = node
        return node

    def createEdge(self, srcId, dstId):
        """Connect two registered blocks by id.

        Raises:
            UnknownBlockError: If either id has not been registered.
        """
        for id in (srcId, dstId):
            if id not in self.basicBlockMap:
                raise UnknownBlockError(id, "no block with id %r in this CFG" % (id,))
        return BasicBlockEdge(self, self.basicBlockMap[srcId], self.basicBlockMap[dstId])

    def addEdge(self, edge):
        self.edgeList.append(edge)

    def owns(self, bb):
        """Check whether bb is the block this CFG registered under bb.id."""
        return self.basicBlockMap.get(bb.id) is bb

    def getNumNodes(self):
        return len(self.basicBlockMap)

    def getSrc(self, edge):
        return edge.src

    def getDst(self, edge):
        return edge.dst

    def blocks(self):
        """Iterate over blocks in registration order."""
        return iter(self.basicBlockMap.values())

    def __len__(self):
        return len(self.basicBlockMap)

    def __contains__(self, id):
        return id in self.basicBlockMap

    def __repr__(self):
        return "%s(%d nodes, %d edges)" % (
            type(self).__name__,
            len(self.basicBlockMap),
            len(self.edgeList),
        )
