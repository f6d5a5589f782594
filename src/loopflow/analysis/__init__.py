"""Analysis modules for loopflow.

This package contains the control flow graph model and the loop nesting
analysis built on top of it.
"""
