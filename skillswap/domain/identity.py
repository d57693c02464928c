"""Identity of the acting user and the admin authorization policy."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable


@dataclass(frozen=True)
class Identity:
    """What the external identity provider tells us about the current user."""

    clerk_id: str
    email: str
    name: str = ""


AdminPolicy = Callable[[Identity], bool]


def email_allowlist_policy(emails: Iterable[str]) -> AdminPolicy:
    """Build a policy granting admin rights to identities whose e-mail is in the allow-list."""
    allowed = frozenset((e or "").strip().lower() for e in emails if (e or "").strip())

    def _is_admin(identity: Identity) -> bool:
        email = (identity.email or "").strip().lower()
        return bool(email) and email in allowed

    return _is_admin
