"""
Utility modules for loopflow.

This package provides:
- Union-find nodes used to collapse loop bodies (unionfind.py)
- networkx interop for graphs and loop forests (graphalgorithim/)
"""
