from __future__ import annotations

import itertools
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Make the skillswap package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from skillswap.core import config as core_config  # noqa: E402
from skillswap.domain.identity import Identity, email_allowlist_policy  # noqa: E402
from skillswap.domain.models import AdminActionType  # noqa: E402
from skillswap.repositories.storage import MemoryStorage  # noqa: E402
from skillswap.repositories.store import SkillSwapStore  # noqa: E402
from skillswap.services.admin_service import AdminPermissionError, AdminService  # noqa: E402
from skillswap.services.swap_service import SwapService  # noqa: E402

ADMIN = Identity(clerk_id="admin_1", email="Admin@SkillSwap.com")
MEMBER = Identity(clerk_id="user_1", email="alice@example.com")


@pytest.fixture()
def store():
    ticks = itertools.count()
    t0 = datetime(2024, 7, 1, tzinfo=timezone.utc)
    store = SkillSwapStore(MemoryStorage(), clock=lambda: t0 + timedelta(minutes=next(ticks)))
    store.initialize_data()
    return store


@pytest.fixture()
def svc(store):
    return AdminService(store, email_allowlist_policy(["admin@skillswap.com"]))


def test_allowlist_policy_is_case_insensitive():
    policy = email_allowlist_policy([" Admin@SkillSwap.com ", ""])
    assert policy(ADMIN) is True
    assert policy(MEMBER) is False
    assert policy(Identity(clerk_id="x", email="")) is False


def test_default_policy_comes_from_settings(store, monkeypatch):
    monkeypatch.setenv("ADMIN_EMAILS", "mod@example.com, boss@example.com")
    core_config.get_settings.cache_clear()
    try:
        svc = AdminService(store)
        assert svc.is_admin(Identity(clerk_id="m", email="BOSS@example.com"))
        assert not svc.is_admin(ADMIN)
    finally:
        core_config.get_settings.cache_clear()


def test_custom_policy_is_injected(store):
    svc = AdminService(store, policy=lambda identity: identity.clerk_id.startswith("staff_"))
    assert svc.is_admin(Identity(clerk_id="staff_9", email="x@example.com"))
    assert not svc.is_admin(ADMIN)


def test_ban_and_unban_record_admin_actions(svc, store):
    banned = svc.set_banned(ADMIN, "2", True)
    assert banned.is_banned is True
    unbanned = svc.set_banned(ADMIN, "2", False, reason="appeal accepted")
    assert unbanned.is_banned is False

    actions = store.get_admin_actions()
    assert [a.type for a in actions] == [AdminActionType.USER_BANNED, AdminActionType.USER_UNBANNED]
    assert [a.reason for a in actions] == ["Inappropriate behavior", "appeal accepted"]
    assert all(a.target_id == "2" and a.admin_id == "admin_1" for a in actions)
    assert [a.id for a in svc.recent_actions()] == [actions[1].id, actions[0].id]
    assert [a.id for a in svc.recent_actions(limit=1)] == [actions[1].id]


def test_ban_requires_admin(svc, store):
    with pytest.raises(AdminPermissionError):
        svc.set_banned(MEMBER, "2", True)
    assert store.get_user_by_id("2").is_banned is None
    assert store.get_admin_actions() == []


def test_ban_unknown_user_returns_none_without_action(svc, store):
    assert svc.set_banned(ADMIN, "404", True) is None
    assert store.get_admin_actions() == []


def test_stats(svc, store):
    swaps = SwapService(store)
    alice, bob, carol = store.get_users()
    first = swaps.create_request(alice, bob, "React", "Python")
    swaps.create_request(carol, alice, "Figma", "JavaScript")
    swaps.create_request(bob, carol, "Python", "Figma")
    swaps.respond(first.id, "accepted")
    swaps.submit_feedback(first.id, alice.id, 5)
    svc.set_banned(ADMIN, carol.id, True)

    stats = svc.stats()

    assert stats.total_users == 3
    assert stats.active_users == 2
    assert stats.banned_users == 1
    assert stats.total_swaps == 3
    assert stats.pending_swaps == 2
    assert stats.accepted_swaps == 1
    assert stats.feedback_count == 1
