"""
Conversion of loopflow graphs to networkx.

These adapters hand a CFG or a loop forest to the networkx ecosystem for
downstream graph algorithms. The conversion only reads its input.
"""

import networkx as nx


def cfgToDiGraph(cfg):
    """
    Build a directed graph mirroring a CFG.

    Parameters
    ----------
    cfg : CFG
        The control flow graph to convert

    Returns
    -------
    networkx.DiGraph
        Nodes are block ids carrying a ``name`` attribute; there is one edge
        per distinct (src, dst) pair of cfg.edgeList. The start node, if any,
        is recorded in ``graph["start"]``.
    """
    G = nx.DiGraph()
    for bb in cfg.blocks():
        G.add_node(bb.id, name=bb.name)
    for edge in cfg.edgeList:
        G.add_edge(cfg.getSrc(edge).id, cfg.getDst(edge).id)

    start = cfg.startNode
    G.graph["start"] = start.id if start is not None else None
    return G


def forestToDiGraph(lsg):
    """
    Build the loop-nesting tree of a LoopStructureGraph.

    Parameters
    ----------
    lsg : LoopStructureGraph
        A populated loop forest

    Returns
    -------
    networkx.DiGraph
        Nodes are loop counters with ``header`` (block id or None),
        ``reducible`` and ``blocks`` (member block ids) attributes. Edges go
        from each loop's parent to the loop, so the result is an
        arborescence rooted at the root loop's counter (0).
    """
    G = nx.DiGraph()
    for loop in lsg.loops:
        header = loop.header.id if loop.header is not None else None
        G.add_node(
            loop.counter,
            header=header,
            reducible=loop.isReducible,
            blocks=[bb.id for bb in loop.basicBlocks],
        )
    for loop in lsg.loops:
        if loop.parent is not None:
            G.add_edge(loop.parent.counter, loop.counter)
    return G
