#!/usr/bin/env python3
"""
Show a user's pending incoming and all outgoing swap requests.

Usage:
  python scripts/list_requests.py --user 1
"""
from __future__ import annotations

import argparse
import sys

from skillswap.repositories.store import get_store
from skillswap.services.swap_service import SwapService


def _line(request) -> str:
    return (
        f"  [{request.status.value:<9}] {request.id}  {request.from_user_name} -> {request.to_user_name}: "
        f"{request.skill_offered} for {request.skill_wanted}"
    )


def main() -> None:
    ap = argparse.ArgumentParser(description="List swap requests for a user")
    ap.add_argument("--user", required=True, help="user id")
    args = ap.parse_args()

    store = get_store()
    if not store.get_user_by_id(args.user):
        raise SystemExit(f"User '{args.user}' does not exist")
    svc = SwapService(store)
    incoming = svc.list_incoming(args.user)
    outgoing = svc.list_outgoing(args.user)
    print(f"Incoming (pending): {len(incoming)}")
    for request in incoming:
        print(_line(request))
    print(f"Outgoing: {len(outgoing)}")
    for request in outgoing:
        print(_line(request))


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
