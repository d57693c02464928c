"""
Moderation use cases: admin checks, banning users, dashboard statistics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from skillswap.core.config import get_settings
from skillswap.domain.identity import AdminPolicy, Identity, email_allowlist_policy
from skillswap.domain.models import AdminAction, AdminActionType, SwapStatus, User, UserUpdate
from skillswap.repositories.store import SkillSwapStore, get_store

logger = logging.getLogger("skillswap.admin")

DEFAULT_BAN_REASON = "Inappropriate behavior"
DEFAULT_UNBAN_REASON = "Ban lifted"


class AdminError(Exception):
    """Base exception for moderation workflows."""


class AdminPermissionError(AdminError):
    def __init__(self, identity: Identity):
        super().__init__(f"{identity.email or identity.clerk_id} is not an admin")
        self.identity = identity


@dataclass
class AdminStats:
    total_users: int
    active_users: int
    banned_users: int
    total_swaps: int
    pending_swaps: int
    accepted_swaps: int
    feedback_count: int


@dataclass
class AdminService:
    """Moderation actions guarded by an injected admin policy."""

    store: Optional[SkillSwapStore] = None
    policy: Optional[AdminPolicy] = None

    def __post_init__(self):
        if self.store is None:
            self.store = get_store()
        if self.policy is None:
            self.policy = email_allowlist_policy(get_settings().admin_emails)

    def is_admin(self, identity: Identity) -> bool:
        return bool(self.policy(identity))

    def require_admin(self, identity: Identity) -> Identity:
        if not self.is_admin(identity):
            logger.warning("admin access denied for %s", identity.email or identity.clerk_id)
            raise AdminPermissionError(identity)
        return identity

    def set_banned(self, admin: Identity, user_id: str, banned: bool, reason: str | None = None) -> Optional[User]:
        self.require_admin(admin)
        user = self.store.update_user(user_id, UserUpdate(is_banned=banned))
        if user is None:
            return None
        self.store.create_admin_action(
            type=AdminActionType.USER_BANNED if banned else AdminActionType.USER_UNBANNED,
            target_id=user_id,
            admin_id=admin.clerk_id,
            reason=(reason or "").strip() or (DEFAULT_BAN_REASON if banned else DEFAULT_UNBAN_REASON),
        )
        logger.info("user %s %s by %s", user_id, "banned" if banned else "unbanned", admin.email)
        return user

    def recent_actions(self, limit: int | None = None) -> list[AdminAction]:
        actions = sorted(self.store.get_admin_actions(), key=lambda a: a.timestamp, reverse=True)
        return actions[:limit] if limit is not None else actions

    def stats(self) -> AdminStats:
        users = self.store.get_users()
        requests = self.store.get_swap_requests()
        banned = sum(1 for u in users if u.banned)
        return AdminStats(
            total_users=len(users),
            active_users=len(users) - banned,
            banned_users=banned,
            total_swaps=len(requests),
            pending_swaps=sum(1 for r in requests if r.status is SwapStatus.PENDING),
            accepted_swaps=sum(1 for r in requests if r.status is SwapStatus.ACCEPTED),
            feedback_count=len(self.store.get_feedback()),
        )
