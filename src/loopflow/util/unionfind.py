"""
Union-Find (Disjoint Set Union) nodes for loop collapsing.

The loop finder keeps one UnionFindNode per depth-first numbered block.
Whenever a loop is discovered, every node of its body is unioned into the
node of the loop header, so later queries see the whole loop as a single
representative.

Unlike a general purpose disjoint set, the structure is driven entirely by
the caller:
- union() simply re-parents a node; the caller always unions into the header
  of the loop being built
- findSet() performs a selective one-pass path compression that only
  repoints nodes which are not already one hop below a root
"""


class UnionFindNode(object):
    """
    A disjoint-set element wrapping one basic block.

    Attributes:
        parent: Parent in the union tree (self for a representative)
        bb: The wrapped BasicBlock, None for slots never reached by the DFS
        dfsNumber: Preorder number of bb
        loop: The SimpleLoop headed by bb, once it exists
    """
    __slots__ = "parent", "bb", "dfsNumber", "loop"

    def __init__(self):
        self.parent = self
        self.bb = None
        self.dfsNumber = 0
        self.loop = None

    def initNode(self, bb, dfsNumber):
        """
        Bind this node to a block.

        Args:
            bb: BasicBlock represented by this node
            dfsNumber: Preorder number of bb
        """
        self.parent = self
        self.bb = bb
        self.dfsNumber = dfsNumber

    def findSet(self):
        """
        Find the representative of this node's set.

        Walks the parent chain to the root, remembering the nodes whose
        parent is not itself a root, then points all of them at the root.
        Inner loops are only visited and collapsed once; deep nests may still
        cost a full traversal on the first query.

        Returns:
            The root UnionFindNode of the set containing this node
        """
        nodeList = []

        node = self
        while node is not node.parent:
            if node.parent is not node.parent.parent:
                nodeList.append(node)
            node = node.parent

        for n in nodeList:
            n.parent = node

        return node

    def union(self, other):
        """
        Attach this node below other.

        Assigning the parent pointer is enough; findSet() compresses later.
        """
        self.parent = other

    def setLoop(self, loop):
        """
        Associate the loop this node's block heads.

        Returns:
            loop, for chaining
        """
        self.loop = loop
        return loop

    def __repr__(self):
        return "UnionFindNode(%r, dfs=%d)" % (self.bb, self.dfsNumber)
