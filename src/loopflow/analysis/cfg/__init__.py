"""Control Flow Graph (CFG) modules.

This package contains the basic block graph container and the depth-first
numbering used by the loop analysis.
"""
