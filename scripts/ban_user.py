#!/usr/bin/env python3
"""
Ban or unban a user as an admin, recording the admin action.

Usage:
  python scripts/ban_user.py --user 2 --admin-email admin@skillswap.com [--unban] [--reason "spam"]
"""
from __future__ import annotations

import argparse
import sys

from skillswap.core.logging_setup import configure_logging
from skillswap.domain.identity import Identity
from skillswap.services.admin_service import AdminPermissionError, AdminService


def main() -> None:
    ap = argparse.ArgumentParser(description="Ban/unban a SkillSwap user")
    ap.add_argument("--user", required=True, help="target user id")
    ap.add_argument("--admin-email", required=True)
    ap.add_argument("--admin-id", default="cli", help="admin identity id recorded in the audit log")
    ap.add_argument("--unban", action="store_true")
    ap.add_argument("--reason")
    args = ap.parse_args()

    configure_logging()
    svc = AdminService()
    admin = Identity(clerk_id=args.admin_id, email=args.admin_email)
    try:
        user = svc.set_banned(admin, args.user, not args.unban, reason=args.reason)
    except AdminPermissionError:
        raise SystemExit(f"'{args.admin_email}' is not allowed to moderate users")
    if user is None:
        raise SystemExit(f"User '{args.user}' does not exist")
    print(f"OK: {user.name} is now {'banned' if user.banned else 'active'}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
