#!/usr/bin/env python3
"""
Initialize the configured storage and print how many records it holds.

Usage:
  python scripts/init_store.py [--no-seed] [--log-level DEBUG]
"""
from __future__ import annotations

import argparse
import sys

from skillswap.core.config import get_settings
from skillswap.core.logging_setup import configure_logging
from skillswap.repositories.storage import build_storage
from skillswap.repositories.store import SkillSwapStore


def main() -> None:
    ap = argparse.ArgumentParser(description="Initialize SkillSwap storage")
    ap.add_argument("--no-seed", action="store_true", help="do not write the sample users")
    ap.add_argument("--log-level", help="override LOG_LEVEL")
    args = ap.parse_args()

    configure_logging(args.log_level)
    settings = get_settings()
    seed = () if (args.no_seed or not settings.seed_sample_users) else None
    store = SkillSwapStore(build_storage(settings), seed_users=seed)
    store.initialize_data()
    print(f"OK: storage '{settings.storage_backend}' ready")
    print(f"  users:          {store.users.count()}")
    print(f"  swap requests:  {store.swap_requests.count()}")
    print(f"  feedback:       {store.feedback.count()}")
    print(f"  admin actions:  {store.admin_actions.count()}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
