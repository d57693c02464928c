"""
Core utilities shared across the SkillSwap package.

This package hosts:
- configuration helpers (env vars, storage paths, admin allow-list)
- logging setup
- id/clock helpers used when stamping new records

Repositories and services depend on these primitives instead of reading
os.environ directly.
"""
