"""
loopflow application layer.

**Core Components:**
- `errors.py`: exception classes raised while building CFGs
"""
