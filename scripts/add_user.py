#!/usr/bin/env python3
"""
Create a user profile directly in the configured store.

Usage:
  python scripts/add_user.py --email bob@x.com --clerk-id user_123 --name "Bob" \
      [--offers Python --offers Django] [--wants React] [--location "Austin, TX"] [--private]
"""
from __future__ import annotations

import argparse
import sys

from skillswap.core.logging_setup import configure_logging
from skillswap.repositories.store import get_store
from skillswap.services.user_service import normalize_skills


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a SkillSwap user")
    ap.add_argument("--email", required=True)
    ap.add_argument("--clerk-id", required=True, help="identity provider id")
    ap.add_argument("--name", required=True)
    ap.add_argument("--offers", action="append", default=[], help="skill offered (repeatable)")
    ap.add_argument("--wants", action="append", default=[], help="skill wanted (repeatable)")
    ap.add_argument("--location")
    ap.add_argument("--availability", default="")
    ap.add_argument("--private", action="store_true", help="hide the profile from search")
    args = ap.parse_args()

    configure_logging()
    store = get_store()
    email = (args.email or "").strip()
    if "@" not in email:
        raise SystemExit("Invalid e-mail")
    if store.get_user_by_clerk_id(args.clerk_id):
        raise SystemExit(f"clerk id '{args.clerk_id}' already has a profile")

    user = store.create_user(
        email=email,
        clerk_id=args.clerk_id,
        name=args.name.strip(),
        availability=args.availability.strip(),
        skills_offered=normalize_skills(args.offers),
        skills_wanted=normalize_skills(args.wants),
        location=(args.location or "").strip() or None,
        is_public=not args.private,
    )
    print("OK: user created")
    print(f"  id:     {user.id}")
    print(f"  offers: {', '.join(user.skills_offered) or '-'}")
    print(f"  wants:  {', '.join(user.skills_wanted) or '-'}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
