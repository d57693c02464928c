from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the skillswap package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from skillswap.domain.identity import Identity, email_allowlist_policy  # noqa: E402
from skillswap.domain.models import ProfileUpdate, UserUpdate  # noqa: E402
from skillswap.repositories.storage import MemoryStorage  # noqa: E402
from skillswap.repositories.store import SkillSwapStore  # noqa: E402
from skillswap.services.admin_service import AdminService  # noqa: E402
from skillswap.services.user_service import ProfileEditError, UserService, normalize_skills  # noqa: E402


@pytest.fixture()
def store():
    store = SkillSwapStore(MemoryStorage())
    store.initialize_data()
    return store


@pytest.fixture()
def svc(store):
    return UserService(store)


def test_ensure_user_creates_once(svc, store):
    identity = Identity(clerk_id="user_42", email="dana@example.com")
    first = svc.ensure_user(identity)
    second = svc.ensure_user(identity)
    assert first == second
    assert first.name == "dana"
    assert first.skills_offered == () and first.is_public and first.is_active
    assert len(store.get_users()) == 4


def test_ensure_user_returns_seeded_profile(svc):
    user = svc.ensure_user(Identity(clerk_id="sample_2", email="bob@example.com", name="Bobby"))
    assert user.id == "2"
    assert user.name == "Bob Smith"


def test_normalize_skills():
    assert normalize_skills([" Python", "", "Go ", "Python", "  "]) == ("Python", "Go")


def test_update_profile_cleans_input(svc):
    updated = svc.update_profile(
        "1",
        ProfileUpdate(skills_offered=["Rust ", "Rust", ""], location="  ", availability=" Mornings ", is_public=False),
    )
    assert updated.skills_offered == ("Rust",)
    assert updated.location is None
    assert updated.availability == "Mornings"
    assert updated.is_public is False
    assert updated.skills_wanted == ("Python", "Machine Learning")
    assert svc.update_profile("missing", ProfileUpdate(name="x")) is None


def test_add_and_remove_skill(svc):
    user = svc.add_skill("3", "offered", " CSS ")
    assert user.skills_offered[-1] == "CSS"
    again = svc.add_skill("3", "offered", "CSS")
    assert again.skills_offered.count("CSS") == 1
    unchanged = svc.add_skill("3", "wanted", "   ")
    assert unchanged.skills_wanted == ("Frontend Development", "CSS")
    removed = svc.remove_skill("3", "wanted", "CSS")
    assert removed.skills_wanted == ("Frontend Development",)
    assert svc.add_skill("missing", "offered", "x") is None
    with pytest.raises(ValueError):
        svc.add_skill("3", "taught", "x")


@pytest.mark.parametrize(
    "term, expected",
    [
        ("python", ["1", "2"]),
        ("  REACT ", ["1", "2"]),
        ("austin", ["3"]),
        ("carol", ["3"]),
        ("cobol", []),
        ("", ["1", "2", "3"]),
        (None, ["1", "2", "3"]),
    ],
)
def test_search_matches_name_location_and_skills(svc, term, expected):
    assert [u.id for u in svc.search(term)] == expected


def test_search_hides_private_banned_and_viewer(svc, store):
    svc.update_profile("1", ProfileUpdate(is_public=False))
    store.update_user("2", UserUpdate(is_banned=True))
    assert [u.id for u in svc.search("")] == ["3"]
    assert svc.search("", viewer_id="3") == []


@pytest.mark.parametrize("update", [UserUpdate(is_banned=False, name="Bob"), UserUpdate(is_active=False)])
def test_profile_edit_cannot_touch_moderation_flags(svc, store, update):
    admin = Identity(clerk_id="admin_1", email="admin@skillswap.com")
    AdminService(store, email_allowlist_policy(["admin@skillswap.com"])).set_banned(admin, "2", True)

    with pytest.raises(ProfileEditError):
        svc.update_profile("2", update)

    user = store.get_user_by_id("2")
    assert user.is_banned is True
    assert user.is_active is True
    assert user.name == "Bob Smith"
    assert [a.type.value for a in store.get_admin_actions()] == ["user_banned"]


def test_profile_edit_accepts_plain_profile_fields_from_a_user_update(svc):
    updated = svc.update_profile("2", UserUpdate(name="Robert"))
    assert updated.name == "Robert"
