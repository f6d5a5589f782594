import unittest

from loopflow.analysis.cfg.graph import CFG
from loopflow.analysis.loops.forest import LoopStructureGraph, SimpleLoop, loopChecksums, mix


class TestMix(unittest.TestCase):
    def test_shift_and_add(self):
        self.assertEqual(mix(0, 1), 1)
        self.assertEqual(mix(3, 0), 6)
        self.assertEqual(mix(10, 5), 25)

    def test_high_bits_are_dropped(self):
        self.assertEqual(mix(0x10000000, 5), 5)
        self.assertEqual(mix(0x0FFFFFFF, 0), 0x1FFFFFFE)

    def test_wraps_at_32_bits(self):
        self.assertEqual(mix(0x0FFFFFFF, 0xFFFFFFFF), 0x1FFFFFFD)


class TestLoopStructureGraph(unittest.TestCase):
    def setUp(self):
        self.cfg = CFG()
        self.blocks = [self.cfg.createNode("bb%d" % i, i) for i in range(4)]

    def test_root_only(self):
        lsg = LoopStructureGraph()

        self.assertEqual(lsg.getNumLoops(), 1)
        self.assertEqual(len(lsg), 1)
        self.assertIs(lsg.loops[0], lsg.root)
        self.assertTrue(lsg.root.isRoot)
        self.assertEqual(lsg.root.counter, 0)
        self.assertIsNone(lsg.root.parent)
        self.assertEqual(lsg.root.checksum(), 12)
        self.assertEqual(lsg.checksum(), 40)

    def test_counters_are_sequential(self):
        lsg = LoopStructureGraph()
        counters = [lsg.createNewLoop().counter for _ in range(3)]
        self.assertEqual(counters, [1, 2, 3])
        # Creating does not register.
        self.assertEqual(lsg.getNumLoops(), 1)

    def test_header_is_first_member(self):
        loop = SimpleLoop(1)
        loop.setHeader(self.blocks[2])
        loop.addNode(self.blocks[3])

        self.assertIs(loop.header, self.blocks[2])
        self.assertEqual(loop.basicBlocks, [self.blocks[2], self.blocks[3]])
        self.assertTrue(loop.isReducible)
        self.assertFalse(loop.isRoot)

    def test_child_checksum_is_mixed_in(self):
        lsg = LoopStructureGraph()
        outer = lsg.createNewLoop()
        outer.setHeader(self.blocks[1])
        inner = lsg.createNewLoop()
        inner.setHeader(self.blocks[2])
        inner.addNode(self.blocks[3])

        alone = outer.checksum()
        inner.setParent(outer)

        self.assertIs(inner.parent, outer)
        self.assertEqual(outer.children, [inner])
        self.assertEqual(outer.checksum(), mix(alone, inner.checksum()))

    def test_reducibility_changes_checksum(self):
        loop = SimpleLoop(1)
        loop.setHeader(self.blocks[0])
        reducible = loop.checksum()
        loop.isReducible = False
        self.assertNotEqual(loop.checksum(), reducible)

    def test_adopt_orphans(self):
        lsg = LoopStructureGraph()
        outer = lsg.createNewLoop()
        inner = lsg.createNewLoop()
        inner.setParent(outer)
        lsg.addLoop(inner)
        lsg.addLoop(outer)

        lsg.adoptOrphans()

        self.assertIs(outer.parent, lsg.root)
        self.assertIs(inner.parent, outer)
        self.assertIsNone(lsg.root.parent)
        self.assertEqual(lsg.root.children, [])
        self.assertEqual(lsg.childrenOf(lsg.root), [outer])
        self.assertEqual(lsg.childrenOf(outer), [inner])

    def test_nesting_levels_siblings(self):
        """Nesting level is the subtree height, depth the distance from root."""
        lsg = LoopStructureGraph()
        a, b, c, d = [lsg.createNewLoop() for _ in range(4)]
        b.setParent(a)
        c.setParent(a)
        d.setParent(c)
        for loop in (d, b, c, a):
            lsg.addLoop(loop)

        lsg.calculateNestingLevel()

        self.assertEqual([l.depthLevel for l in (a, b, c, d)], [1, 2, 2, 3])
        self.assertEqual([l.nestingLevel for l in (a, b, c, d)], [2, 0, 1, 0])
        self.assertEqual(lsg.root.nestingLevel, 3)
        self.assertEqual(lsg.root.depthLevel, 0)
        self.assertTrue(lsg.root.isRoot)
        self.assertFalse(any(l.isRoot for l in (a, b, c, d)))

    def test_iteration_order(self):
        lsg = LoopStructureGraph()
        loops = [lsg.createNewLoop() for _ in range(2)]
        for loop in loops:
            lsg.addLoop(loop)
        self.assertEqual(list(lsg), [lsg.root] + loops)

    def test_deep_chain_checksum(self):
        """Children are hashed before parents without recursing."""
        lsg = LoopStructureGraph()
        chain = [lsg.createNewLoop() for _ in range(5000)]
        for outer, inner in zip(chain, chain[1:]):
            inner.setParent(outer)
        for loop in chain:
            loop.setHeader(self.blocks[loop.counter % 4])
            lsg.addLoop(loop)

        expected = chain[-1].localChecksum()
        for loop in reversed(chain[:-1]):
            expected = mix(loop.localChecksum(), expected)

        self.assertEqual(chain[0].checksum(), expected)
        checksums = loopChecksums(lsg.loops)
        self.assertEqual(checksums[chain[0]], expected)

        result = len(lsg.loops)
        for loop in lsg.loops:
            result = mix(result, checksums[loop])
        self.assertEqual(lsg.checksum(), mix(result, lsg.root.checksum()))
