"""
Error handling for loopflow graph construction and analysis.

This module defines the exception classes raised by the CFG model. The loop
finder itself never raises on well-formed input; a degenerate input makes it
return 0 and set its abort status instead (see HavlakLoopFinder).
"""


class CFGError(Exception):
    """
    Base class for errors raised while building a control flow graph.
    """
    pass


class UnknownBlockError(CFGError, ValueError):
    """
    Exception raised when an edge refers to a block the CFG does not own.

    Edges may only connect blocks registered through CFG.createNode on the
    same CFG. The check happens before any adjacency list is touched, so a
    failed edge construction leaves the graph unchanged.

    Attributes:
        block: The offending block, or the unknown block id
    """

    def __init__(self, block, msg=None):
        self.block = block
        if msg is None:
            msg = "block %r is not registered in this CFG" % (block,)
        super().__init__(msg)
