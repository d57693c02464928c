"""
Profile use cases: onboarding from an identity, editing skills, searching.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from skillswap.domain.identity import Identity
from skillswap.domain.models import ProfileUpdate, User, UserUpdate
from skillswap.repositories.store import SkillSwapStore, get_store

logger = logging.getLogger("skillswap.users")

SKILL_KINDS = ("offered", "wanted")
PROFILE_FIELDS = frozenset(
    ("name", "location", "profile_picture", "availability", "skills_offered", "skills_wanted", "is_public")
)


class ProfileEditError(ValueError):
    """Raised when a profile edit touches fields reserved for moderation."""


def normalize_skills(values: Iterable[str]) -> tuple[str, ...]:
    """Trim, drop blanks and repeated entries, keep first-seen order."""
    seen: set[str] = set()
    result = []
    for value in values or ():
        skill = (value or "").strip()
        if not skill or skill in seen:
            continue
        seen.add(skill)
        result.append(skill)
    return tuple(result)


class UserService:
    def __init__(self, store: SkillSwapStore | None = None) -> None:
        self.store = store or get_store()

    def ensure_user(self, identity: Identity) -> User:
        """Return the profile linked to the identity, creating an empty one on first visit."""
        existing = self.store.get_user_by_clerk_id(identity.clerk_id)
        if existing:
            return existing
        name = (identity.name or "").strip() or (identity.email or "").split("@", 1)[0]
        return self.store.create_user(email=identity.email, clerk_id=identity.clerk_id, name=name)

    def update_profile(self, user_id: str, update: ProfileUpdate) -> Optional[User]:
        """Self-service edit; ban and activity flags only change through AdminService."""
        changes = update.changes()
        blocked = sorted(set(changes) - PROFILE_FIELDS)
        if blocked:
            raise ProfileEditError(f"Profile edits cannot change {', '.join(blocked)}")
        for field_name in ("skills_offered", "skills_wanted"):
            if field_name in changes:
                changes[field_name] = normalize_skills(changes[field_name])
        for field_name in ("location", "availability"):
            if field_name in changes and changes[field_name] is not None:
                changes[field_name] = changes[field_name].strip()
        if changes.get("location") == "":
            changes["location"] = None
        return self.store.update_user(user_id, UserUpdate(**changes))

    def add_skill(self, user_id: str, kind: str, skill: str) -> Optional[User]:
        field_name = self._skill_field(kind)
        user = self.store.get_user_by_id(user_id)
        if user is None:
            return None
        value = (skill or "").strip()
        if not value:
            logger.warning("ignoring blank %s skill for user %s", kind, user_id)
            return user
        skills = normalize_skills(getattr(user, field_name) + (value,))
        return self.store.update_user(user_id, UserUpdate(**{field_name: skills}))

    def remove_skill(self, user_id: str, kind: str, skill: str) -> Optional[User]:
        field_name = self._skill_field(kind)
        user = self.store.get_user_by_id(user_id)
        if user is None:
            return None
        value = (skill or "").strip()
        skills = tuple(s for s in getattr(user, field_name) if s != value)
        return self.store.update_user(user_id, UserUpdate(**{field_name: skills}))

    def search(self, term: str | None, *, viewer_id: str | None = None) -> list[User]:
        """Case-insensitive match on name, location and skills among visible profiles."""
        candidates = [
            u for u in self.store.get_users() if u.is_public and not u.banned and u.id != viewer_id
        ]
        needle = (term or "").strip().lower()
        if not needle:
            return candidates
        return [u for u in candidates if _matches(u, needle)]

    @staticmethod
    def _skill_field(kind: str) -> str:
        if kind not in SKILL_KINDS:
            raise ValueError(f"kind must be one of {SKILL_KINDS}, got {kind!r}")
        return f"skills_{kind}"


def _matches(user: User, needle: str) -> bool:
    if needle in user.name.lower():
        return True
    if user.location and needle in user.location.lower():
        return True
    return any(needle in s.lower() for s in user.skills_offered + user.skills_wanted)
