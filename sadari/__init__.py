"""
Sadari - Penalty Ladder Game Engine

A small engine for the "sadari" ladder game used to pick who takes a
household penalty. The engine provides:
- Randomized ladder generation with a per-level matching invariant
- Pure path tracing from a starting column to its outcome
- A session state machine for revealing players one at a time
- Result reporting to an external recorder
"""

__version__ = "0.1.0"
