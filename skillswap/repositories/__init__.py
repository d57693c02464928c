"""
Persistence adapters.

These modules encapsulate how collections are stored and retrieved (memory,
JSON file or SQL). Services depend on SkillSwapStore rather than touching a
storage backend directly.
"""
