"""
SkillSwapStore: the collaborator-facing persistence surface.

Wraps the four collections (users, swap requests, feedback, admin actions)
over one storage port. Referential integrity between collections is the
caller's responsibility.
"""
from __future__ import annotations

import logging
from datetime import datetime
from functools import lru_cache
from typing import Callable, Iterable, Optional

from skillswap.core.config import get_settings
from skillswap.core.utils import new_id, utcnow
from skillswap.domain.models import (
    AdminAction,
    AdminActionType,
    Feedback,
    SwapRequest,
    SwapRequestUpdate,
    SwapStatus,
    User,
    UserUpdate,
)

from .collection import Collection
from .storage import StoragePort, build_storage

logger = logging.getLogger("skillswap.store")

USERS_KEY = "skill_swap_users"
SWAP_REQUESTS_KEY = "skill_swap_requests"
FEEDBACK_KEY = "skill_swap_feedback"
ADMIN_ACTIONS_KEY = "skill_swap_admin_actions"

_SAMPLE_USERS = (
    {
        "id": "1",
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "location": "New York, NY",
        "skills_offered": ("JavaScript", "React", "Node.js"),
        "skills_wanted": ("Python", "Machine Learning"),
        "availability": "Weekends and evenings",
        "clerk_id": "sample_1",
    },
    {
        "id": "2",
        "name": "Bob Smith",
        "email": "bob@example.com",
        "location": "San Francisco, CA",
        "skills_offered": ("Python", "Django", "PostgreSQL"),
        "skills_wanted": ("React", "TypeScript"),
        "availability": "Flexible schedule",
        "clerk_id": "sample_2",
    },
    {
        "id": "3",
        "name": "Carol Davis",
        "email": "carol@example.com",
        "location": "Austin, TX",
        "skills_offered": ("UI/UX Design", "Figma", "Adobe Creative Suite"),
        "skills_wanted": ("Frontend Development", "CSS"),
        "availability": "Mornings preferred",
        "clerk_id": "sample_3",
    },
)


def sample_users(now: datetime | None = None) -> list[User]:
    """Demo profiles written into an empty users collection."""
    created = now or utcnow()
    return [User(created_at=created, is_public=True, is_active=True, **data) for data in _SAMPLE_USERS]


class SkillSwapStore:
    """CRUD helpers over the four SkillSwap collections."""

    def __init__(
        self,
        storage: StoragePort,
        *,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
        seed_users: Iterable[User] | None = None,
    ) -> None:
        self.storage = storage
        id_factory = id_factory or new_id
        clock = clock or utcnow
        seed = list(seed_users) if seed_users is not None else None
        common = {"id_factory": id_factory, "clock": clock}
        self.users = Collection(
            storage,
            USERS_KEY,
            User,
            initial=(lambda: list(seed)) if seed is not None else (lambda: sample_users(clock())),
            **common,
        )
        self.swap_requests = Collection(storage, SWAP_REQUESTS_KEY, SwapRequest, **common)
        self.feedback = Collection(storage, FEEDBACK_KEY, Feedback, **common)
        self.admin_actions = Collection(storage, ADMIN_ACTIONS_KEY, AdminAction, **common)
        self._clock = clock

    def initialize_data(self) -> None:
        """Seed missing collections; existing data is never overwritten."""
        for collection in (self.users, self.swap_requests, self.feedback, self.admin_actions):
            collection.initialize()

    # -------------------------- users --------------------------
    def get_users(self) -> list[User]:
        return self.users.get_all()

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get_by_id(user_id)

    def get_user_by_clerk_id(self, clerk_id: str) -> Optional[User]:
        for user in self.users.get_all():
            if user.clerk_id == clerk_id:
                return user
        return None

    def create_user(
        self,
        *,
        email: str,
        clerk_id: str,
        name: str,
        availability: str = "",
        skills_offered: Iterable[str] = (),
        skills_wanted: Iterable[str] = (),
        location: str | None = None,
        profile_picture: str | None = None,
        is_public: bool = True,
        is_active: bool = True,
        is_banned: bool | None = None,
    ) -> User:
        user = self.users.create(
            email=email,
            clerk_id=clerk_id,
            name=name,
            availability=availability,
            skills_offered=tuple(skills_offered),
            skills_wanted=tuple(skills_wanted),
            location=location,
            profile_picture=profile_picture,
            is_public=is_public,
            is_active=is_active,
            is_banned=is_banned,
        )
        logger.info("created user %s (%s)", user.id, user.email)
        return user

    def update_user(self, user_id: str, update: UserUpdate) -> Optional[User]:
        return self.users.update(user_id, update)

    # -------------------------- swap requests --------------------------
    def get_swap_requests(self) -> list[SwapRequest]:
        return self.swap_requests.get_all()

    def get_swap_request_by_id(self, request_id: str) -> Optional[SwapRequest]:
        return self.swap_requests.get_by_id(request_id)

    def create_swap_request(
        self,
        *,
        from_user_id: str,
        to_user_id: str,
        from_user_name: str,
        to_user_name: str,
        skill_offered: str,
        skill_wanted: str,
        message: str = "",
        status: SwapStatus | str = SwapStatus.PENDING,
    ) -> SwapRequest:
        return self.swap_requests.create(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            from_user_name=from_user_name,
            to_user_name=to_user_name,
            skill_offered=skill_offered,
            skill_wanted=skill_wanted,
            message=message,
            status=status,
        )

    def update_swap_request(self, request_id: str, update: SwapRequestUpdate) -> Optional[SwapRequest]:
        return self.swap_requests.update(request_id, update)

    # -------------------------- feedback --------------------------
    def get_feedback(self) -> list[Feedback]:
        return self.feedback.get_all()

    def create_feedback(
        self,
        *,
        swap_request_id: str,
        from_user_id: str,
        to_user_id: str,
        rating: int,
        comment: str | None = None,
    ) -> Feedback:
        return self.feedback.create(
            swap_request_id=swap_request_id,
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            rating=rating,
            comment=comment,
        )

    # -------------------------- admin actions --------------------------
    def get_admin_actions(self) -> list[AdminAction]:
        return self.admin_actions.get_all()

    def create_admin_action(
        self,
        *,
        type: AdminActionType | str,
        target_id: str,
        admin_id: str,
        reason: str,
        timestamp: datetime | None = None,
    ) -> AdminAction:
        now = self._clock()
        return self.admin_actions.create(
            now=now,
            type=type,
            target_id=target_id,
            admin_id=admin_id,
            reason=reason,
            timestamp=timestamp or now,
        )


@lru_cache
def get_store() -> SkillSwapStore:
    """Process-wide store built from Settings and initialized on first use."""
    settings = get_settings()
    store = SkillSwapStore(
        build_storage(settings),
        seed_users=None if settings.seed_sample_users else (),
    )
    store.initialize_data()
    return store
