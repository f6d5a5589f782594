"""Loop forest data structures.

A loop has an entry point (its header), a list of member blocks, and
potentially an enclosing "parent" loop. Loops discovered in a CFG form a
forest hung below a synthetic root loop; LoopStructureGraph owns the records.

Two values are maintained per loop, nesting level and depth:

    loop        nesting level    depth
    ----------------------------------
    loop-0      2                0
      loop-1    1                1
      loop-3    1                1
        loop-2  0                2

The loop finder leaves both at 0 for every non-root loop. They are only
filled in by LoopStructureGraph.calculateNestingLevel(), which changes the
checksum accordingly.
"""

MASK28 = 0x0FFFFFFF
MASK32 = 0xFFFFFFFF


def mix(existing, value):
    """Fold value into a 32-bit checksum accumulator."""
    return (((existing & MASK28) << 1) + value) & MASK32


def loopChecksums(loops):
    """Compute the checksum of every loop reachable from loops.

    Children are hashed before their parent with an explicit stack, so
    arbitrarily deep nests do not run into the recursion limit. A child
    listed twice in children is mixed in twice.

    Returns:
        dict: Mapping from SimpleLoop to its checksum.
    """
    results = {}
    stack = [(loop, False) for loop in reversed(loops)]
    while stack:
        loop, expanded = stack.pop()
        if expanded:
            result = loop.localChecksum()
            for child in loop.children:
                result = mix(result, results[child])
            results[loop] = result
        elif loop not in results:
            stack.append((loop, True))
            for child in reversed(loop.children):
                stack.append((child, False))
    return results


class SimpleLoop(object):
    """One loop of the forest.

    Attributes:
        counter: Serial id; 0 for the root, then 1, 2, ... in creation order.
        header: Entry BasicBlock, or None for the root.
        basicBlocks: Member blocks, header first. Blocks of nested loops are
            not repeated here; they are reached through children.
        children: Immediately nested loops.
        parent: Enclosing loop, or None for the root.
        isRoot: True only for the synthetic root loop.
        isReducible: False when the loop has more than one entry.
        nestingLevel: Height of the subtree rooted at this loop.
        depthLevel: Distance from the root.
    """

    __slots__ = (
        "counter",
        "header",
        "basicBlocks",
        "children",
        "parent",
        "isRoot",
        "isReducible",
        "nestingLevel",
        "depthLevel",
    )

    def __init__(self, counter):
        self.counter = counter
        self.header = None
        self.basicBlocks = []
        self.children = []
        self.parent = None
        self.isRoot = False
        self.isReducible = True
        self.nestingLevel = 0
        self.depthLevel = 0

    def addNode(self, bb):
        self.basicBlocks.append(bb)

    def addChildLoop(self, loop):
        self.children.append(loop)

    def setParent(self, p):
        """Make p the enclosing loop and register self as one of its children."""
        self.parent = p
        p.addChildLoop(self)

    def setHeader(self, bb):
        self.basicBlocks.append(bb)
        self.header = bb

    def checksum(self):
        """Deterministic structural hash of this loop and its children."""
        return loopChecksums([self])[self]

    def localChecksum(self):
        """Hash of this loop's own fields, before any child is mixed in."""
        result = self.counter
        result = mix(result, 1 if self.isRoot else 0)
        result = mix(result, 1 if self.isReducible else 0)
        result = mix(result, self.nestingLevel)
        result = mix(result, self.depthLevel)
        if self.header is not None:
            result = mix(result, self.header.id)
        for bb in self.basicBlocks:
            result = mix(result, bb.id)
        return result

    def __repr__(self):
        if self.isRoot:
            return "SimpleLoop(root)"
        return "SimpleLoop(%d, header=%r, %s)" % (
            self.counter,
            self.header,
            "reducible" if self.isReducible else "irreducible",
        )


class LoopStructureGraph(object):
    """Maintain the loop structure for a given CFG.

    The root loop is created with the graph and always stored at index 0 of
    loops; every other loop follows in discovery order.

    Attributes:
        loopCounter: Serial id handed to the next loop.
        loops: All loops, root first.
        root: The synthetic root loop.
    """

    def __init__(self):
        self.loopCounter = 1
        self.loops = []
        self.root = SimpleLoop(0)
        self.root.isRoot = True
        self.loops.append(self.root)

    def createNewLoop(self):
        loop = SimpleLoop(self.loopCounter)
        self.loopCounter += 1
        return loop

    def addLoop(self, loop):
        self.loops.append(loop)

    def getNumLoops(self):
        return len(self.loops)

    def adoptOrphans(self):
        """Point every top-level loop's parent at the root.

        The link is a back-reference only: the root's children list is left
        untouched so that checksums do not depend on it.
        """
        for loop in self.loops:
            if loop.parent is None and loop is not self.root:
                loop.parent = self.root

    def childrenOf(self, loop):
        """Get the loops immediately nested in loop.

        For the root these are the top-level loops, in discovery order.
        """
        if loop is self.root:
            return [l for l in self.loops if l.parent is self.root]
        return list(loop.children)

    def loopForBlock(self, bb):
        """Find the innermost loop containing bb.

        Every block that belongs to a loop is stored exactly once, in the
        basicBlocks of its innermost loop.

        Returns:
            SimpleLoop or None: None if bb is not part of any loop.
        """
        for loop in self.loops:
            for member in loop.basicBlocks:
                if member is bb:
                    return loop
        return None

    def calculateNestingLevel(self):
        """Assign depthLevel and nestingLevel to every loop.

        depthLevel is the distance from the root and nestingLevel the height
        of the subtree rooted at the loop, so innermost loops end up at 0.
        The traversal is iterative and visits children before computing a
        parent's height.
        """
        self.adoptOrphans()

        stack = [(self.root, 0, False)]
        while stack:
            loop, depth, expanded = stack.pop()
            if expanded:
                height = 0
                for child in self.childrenOf(loop):
                    height = max(height, 1 + child.nestingLevel)
                loop.nestingLevel = height
            else:
                loop.depthLevel = depth
                stack.append((loop, depth, True))
                for child in reversed(self.childrenOf(loop)):
                    stack.append((child, depth + 1, False))

    def checksum(self):
        """Deterministic structural hash of the whole forest."""
        checksums = loopChecksums(self.loops)
        result = len(self.loops)
        for loop in self.loops:
            result = mix(result, checksums[loop])
        return mix(result, checksums[self.root])

    def __iter__(self):
        return iter(self.loops)

    def __len__(self):
        return len(self.loops)
