"""
Record types persisted by the SkillSwap store.

Records are immutable: updates build a replacement through an explicit update
command (UserUpdate, SwapRequestUpdate). Serialized dictionaries use the
camelCase keys of the original browser storage layout.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from skillswap.core.utils import from_iso, to_iso


class SwapStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


class AdminActionType(str, Enum):
    USER_BANNED = "user_banned"
    USER_UNBANNED = "user_unbanned"
    DELETE_SKILL = "delete_skill"
    DELETE_SWAP = "delete_swap"


class _Unset:
    """Marker for update-command fields the caller did not provide."""

    _instance: Optional["_Unset"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def _skills(values) -> tuple[str, ...]:
    return tuple(str(v) for v in (values or ()))


# -------------------------- records --------------------------
@dataclass(frozen=True)
class User:
    id: str
    email: str
    clerk_id: str
    name: str
    created_at: datetime
    availability: str = ""
    skills_offered: tuple[str, ...] = ()
    skills_wanted: tuple[str, ...] = ()
    location: Optional[str] = None
    profile_picture: Optional[str] = None
    is_public: bool = True
    is_active: bool = True
    is_banned: Optional[bool] = None

    def __post_init__(self):
        object.__setattr__(self, "skills_offered", _skills(self.skills_offered))
        object.__setattr__(self, "skills_wanted", _skills(self.skills_wanted))

    @property
    def banned(self) -> bool:
        return bool(self.is_banned)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "skillsOffered": list(self.skills_offered),
            "skillsWanted": list(self.skills_wanted),
            "availability": self.availability,
            "isPublic": self.is_public,
            "isActive": self.is_active,
            "createdAt": to_iso(self.created_at),
            "clerkId": self.clerk_id,
        }
        if self.location is not None:
            data["location"] = self.location
        if self.profile_picture is not None:
            data["profilePicture"] = self.profile_picture
        if self.is_banned is not None:
            data["isBanned"] = self.is_banned
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=str(data["id"]),
            email=data.get("email") or "",
            clerk_id=data.get("clerkId") or "",
            name=data.get("name") or "",
            created_at=from_iso(data["createdAt"]),
            availability=data.get("availability") or "",
            skills_offered=data.get("skillsOffered") or (),
            skills_wanted=data.get("skillsWanted") or (),
            location=data.get("location"),
            profile_picture=data.get("profilePicture"),
            is_public=bool(data.get("isPublic", True)),
            is_active=bool(data.get("isActive", True)),
            is_banned=data.get("isBanned"),
        )


@dataclass(frozen=True)
class SwapRequest:
    id: str
    from_user_id: str
    to_user_id: str
    from_user_name: str
    to_user_name: str
    skill_offered: str
    skill_wanted: str
    message: str
    created_at: datetime
    updated_at: datetime
    status: SwapStatus = SwapStatus.PENDING

    def __post_init__(self):
        object.__setattr__(self, "status", SwapStatus(self.status))

    def counterpart(self, user_id: str) -> Optional[str]:
        if user_id == self.from_user_id:
            return self.to_user_id
        if user_id == self.to_user_id:
            return self.from_user_id
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "fromUserId": self.from_user_id,
            "toUserId": self.to_user_id,
            "fromUserName": self.from_user_name,
            "toUserName": self.to_user_name,
            "skillOffered": self.skill_offered,
            "skillWanted": self.skill_wanted,
            "message": self.message,
            "status": self.status.value,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SwapRequest":
        return cls(
            id=str(data["id"]),
            from_user_id=str(data["fromUserId"]),
            to_user_id=str(data["toUserId"]),
            from_user_name=data.get("fromUserName") or "",
            to_user_name=data.get("toUserName") or "",
            skill_offered=data.get("skillOffered") or "",
            skill_wanted=data.get("skillWanted") or "",
            message=data.get("message") or "",
            status=data.get("status") or SwapStatus.PENDING,
            created_at=from_iso(data["createdAt"]),
            updated_at=from_iso(data.get("updatedAt") or data["createdAt"]),
        )


@dataclass(frozen=True)
class Feedback:
    id: str
    swap_request_id: str
    from_user_id: str
    to_user_id: str
    rating: int
    created_at: datetime
    comment: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "swapRequestId": self.swap_request_id,
            "fromUserId": self.from_user_id,
            "toUserId": self.to_user_id,
            "rating": self.rating,
            "createdAt": to_iso(self.created_at),
        }
        if self.comment is not None:
            data["comment"] = self.comment
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Feedback":
        return cls(
            id=str(data["id"]),
            swap_request_id=str(data["swapRequestId"]),
            from_user_id=str(data["fromUserId"]),
            to_user_id=str(data["toUserId"]),
            rating=data["rating"],
            comment=data.get("comment"),
            created_at=from_iso(data["createdAt"]),
        )


@dataclass(frozen=True)
class AdminAction:
    id: str
    type: AdminActionType
    target_id: str
    admin_id: str
    reason: str
    timestamp: datetime
    created_at: datetime

    def __post_init__(self):
        object.__setattr__(self, "type", AdminActionType(self.type))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "targetId": self.target_id,
            "adminId": self.admin_id,
            "reason": self.reason,
            "timestamp": to_iso(self.timestamp),
            "createdAt": to_iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AdminAction":
        created = data.get("createdAt") or data["timestamp"]
        return cls(
            id=str(data["id"]),
            type=data["type"],
            target_id=str(data["targetId"]),
            admin_id=str(data["adminId"]),
            reason=data.get("reason") or "",
            timestamp=from_iso(data.get("timestamp") or created),
            created_at=from_iso(created),
        )


# -------------------------- update commands --------------------------
@dataclass(frozen=True)
class _UpdateCommand:
    def changes(self) -> dict:
        """Fields the caller actually set, ready for dataclasses.replace."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}

    def apply(self, record):
        return replace(record, **self.changes())


@dataclass(frozen=True)
class UserUpdate(_UpdateCommand):
    """Mutable profile and moderation fields of a User."""

    name: Any = UNSET
    location: Any = UNSET
    profile_picture: Any = UNSET
    availability: Any = UNSET
    skills_offered: Any = UNSET
    skills_wanted: Any = UNSET
    is_public: Any = UNSET
    is_active: Any = UNSET
    is_banned: Any = UNSET


@dataclass(frozen=True)
class ProfileUpdate(_UpdateCommand):
    """Fields a user may edit on their own profile; moderation flags are excluded."""

    name: Any = UNSET
    location: Any = UNSET
    profile_picture: Any = UNSET
    availability: Any = UNSET
    skills_offered: Any = UNSET
    skills_wanted: Any = UNSET
    is_public: Any = UNSET


@dataclass(frozen=True)
class SwapRequestUpdate(_UpdateCommand):
    """Mutable fields of a SwapRequest; participants and skills are fixed."""

    status: Any = UNSET
    message: Any = UNSET

    def changes(self) -> dict:
        data = super().changes()
        if "status" in data:
            data["status"] = SwapStatus(data["status"])
        return data

