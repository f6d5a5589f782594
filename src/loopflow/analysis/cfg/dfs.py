"""Depth-first numbering for CFGs.

This module assigns preorder numbers to the blocks reachable from a start
block and records, for every numbered block, the largest number found in its
depth-first subtree. Together the two give a constant time ancestor test:

    isAncestor(w, v)  <=>  w <= v <= last[w]

because the descendants of a node in a DFS tree are exactly the contiguous
range of preorder numbers starting at the node itself.
"""

import logging

LOG = logging.getLogger(__name__)


class DFSNumbering(object):
    """Preorder numbering of a CFG from a single entry block.

    The traversal follows each block's outEdges in stored order and uses an
    explicit stack, so deep graphs do not run into the interpreter's
    recursion limit. The numbering is identical to the recursive formulation.

    Attributes:
        numbers: Mapping from block id to preorder number.
        order: Blocks indexed by preorder number.
        last: last[n] is the largest preorder number in the subtree of the
            block numbered n.
    """

    __slots__ = "numbers", "order", "last"

    def __init__(self, start):
        """Number every block reachable from start.

        Args:
            start: Entry BasicBlock, numbered 0.
        """
        self.numbers = {}
        self.order = []
        self.last = []

        self._visit(start)
        stack = [(start, iter(start.outEdges))]
        while stack:
            _node, children = stack[-1]
            try:
                child = next(children)
                if child.id not in self.numbers:
                    self._visit(child)
                    stack.append((child, iter(child.outEdges)))
            except StopIteration:
                # Every descendant has been numbered by now.
                node = stack.pop()[0]
                self.last[self.numbers[node.id]] = len(self.order) - 1

        LOG.debug("numbered %d blocks from %r", len(self.order), start)

    def _visit(self, node):
        current = len(self.order)
        self.numbers[node.id] = current
        self.order.append(node)
        self.last.append(current)

    def number(self, node):
        """Get the preorder number of node, or None if it was not reached."""
        return self.numbers.get(node.id)

    def isAncestor(self, w, v):
        """Check whether the block numbered w is a DFS ancestor of v.

        The test is reflexive: every numbered block is its own ancestor.

        Args:
            w: Preorder number of the candidate ancestor.
            v: Preorder number of the candidate descendant.
        """
        return w <= v <= self.last[w]

    def __len__(self):
        return len(self.order)
