"""
Swap-request workflow: create, respond, list and leave feedback.

A request starts as pending and moves to accepted or rejected through
respond(). "completed" is only reachable through the store's generic
update_swap_request path.
"""
from __future__ import annotations

import logging
from typing import Optional

from skillswap.domain.models import Feedback, SwapRequest, SwapRequestUpdate, SwapStatus, User
from skillswap.repositories.store import SkillSwapStore, get_store

logger = logging.getLogger("skillswap.swaps")

RESPONSE_DECISIONS = frozenset({SwapStatus.ACCEPTED, SwapStatus.REJECTED})
MIN_RATING = 1
MAX_RATING = 5


class SwapError(Exception):
    """Base exception for the swap workflow."""


class InvalidDecisionError(SwapError):
    """Raised when respond() gets something other than accepted/rejected."""


class InvalidTransitionError(SwapError):
    """Raised when responding to a request that is no longer pending."""

    def __init__(self, request_id: str, status: SwapStatus):
        super().__init__(f"Swap request {request_id} is {status.value}, not pending")
        self.request_id = request_id
        self.status = status


class InvalidFeedbackError(SwapError):
    pass


class SwapService:
    """Drives swap requests through their lifecycle."""

    def __init__(self, store: SkillSwapStore | None = None) -> None:
        self.store = store or get_store()

    def create_request(
        self,
        from_user: User,
        to_user: User,
        skill_offered: str,
        skill_wanted: str,
        message: str = "",
    ) -> SwapRequest:
        # self-swaps, duplicates and skill membership are left to the caller
        request = self.store.create_swap_request(
            from_user_id=from_user.id,
            to_user_id=to_user.id,
            from_user_name=from_user.name,
            to_user_name=to_user.name,
            skill_offered=skill_offered,
            skill_wanted=skill_wanted,
            message=message,
            status=SwapStatus.PENDING,
        )
        logger.info("swap request %s created: %s -> %s", request.id, from_user.id, to_user.id)
        return request

    def respond(self, request_id: str, decision: SwapStatus | str) -> Optional[SwapRequest]:
        try:
            status = SwapStatus(decision)
        except ValueError:
            raise InvalidDecisionError(f"Unknown decision {decision!r}") from None
        if status not in RESPONSE_DECISIONS:
            raise InvalidDecisionError(f"Decision must be accepted or rejected, got {status.value!r}")
        current = self.store.get_swap_request_by_id(request_id)
        if current is None:
            return None
        if current.status is not SwapStatus.PENDING:
            raise InvalidTransitionError(request_id, current.status)
        updated = self.store.update_swap_request(request_id, SwapRequestUpdate(status=status))
        logger.info("swap request %s %s", request_id, status.value)
        return updated

    def list_incoming(self, user_id: str) -> list[SwapRequest]:
        return self.store.swap_requests.find(
            lambda r: r.to_user_id == user_id and r.status is SwapStatus.PENDING
        )

    def list_outgoing(self, user_id: str) -> list[SwapRequest]:
        return self.store.swap_requests.find(lambda r: r.from_user_id == user_id)

    # -------------------------------------- feedback --------------------------------------
    def submit_feedback(
        self,
        request_id: str,
        from_user_id: str,
        rating: int,
        comment: str | None = None,
    ) -> Optional[Feedback]:
        """Rate the other party of a swap. Returns None when the request does not exist."""
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise InvalidFeedbackError("Rating must be an integer")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise InvalidFeedbackError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
        request = self.store.get_swap_request_by_id(request_id)
        if request is None:
            return None
        to_user_id = request.counterpart(from_user_id)
        if to_user_id is None:
            raise InvalidFeedbackError(f"User {from_user_id} is not part of swap request {request_id}")
        text = (comment or "").strip() or None
        feedback = self.store.create_feedback(
            swap_request_id=request_id,
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            rating=rating,
            comment=text,
        )
        logger.info("feedback %s left on swap request %s", feedback.id, request_id)
        return feedback

    def feedback_for_user(self, user_id: str) -> list[Feedback]:
        return self.store.feedback.find(lambda f: f.to_user_id == user_id)

    def average_rating(self, user_id: str) -> Optional[float]:
        ratings = [f.rating for f in self.feedback_for_user(user_id)]
        if not ratings:
            return None
        return sum(ratings) / len(ratings)
