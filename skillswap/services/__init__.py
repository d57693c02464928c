"""
High-level use cases for SkillSwap.

Each service orchestrates SkillSwapStore to implement business rules (send a
swap request, respond to it, moderate users, search profiles). Callers use
these services instead of manipulating collections directly.
"""
