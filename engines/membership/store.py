"""
GymTastic Membership — Membership Storage
===========================================
`get` never fails for unknown users: it returns an empty state.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Protocol

from core.errors import MembershipPersistenceError
from engines.membership.state import MembershipState

logger = logging.getLogger("gymtastic.membership")


class MembershipStore(Protocol):
    def get(self, user_id: str) -> MembershipState:
        ...  # pragma: no cover

    def save(self, state: MembershipState) -> None:
        ...  # pragma: no cover


class InMemoryMembershipStore:
    def __init__(self) -> None:
        self._states: Dict[str, MembershipState] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> MembershipState:
        with self._lock:
            return self._states.get(user_id) or MembershipState.empty(user_id)

    def save(self, state: MembershipState) -> None:
        with self._lock:
            self._states[state.user_id] = state
        logger.debug(f"Membership saved for {state.user_id}: plan_end={state.plan_end}")


class DbMembershipStore:
    """Membership rows in `gym_memberships`, keyed by user_id."""

    def get(self, user_id: str) -> MembershipState:
        from django.db import DatabaseError

        from engines.membership.models import Membership

        try:
            row = Membership.objects.filter(user_id=user_id).first()
        except DatabaseError as exc:
            raise MembershipPersistenceError(
                f"Could not read membership for {user_id}: {exc}"
            ) from exc
        if row is None:
            return MembershipState.empty(user_id)
        return row.to_state()

    def save(self, state: MembershipState) -> None:
        from django.db import DatabaseError

        from engines.membership.models import Membership

        try:
            Membership.from_state(state).save()
        except DatabaseError as exc:
            raise MembershipPersistenceError(
                f"Could not save membership for {state.user_id}: {exc}"
            ) from exc
        logger.debug(f"Membership saved for {state.user_id}: plan_end={state.plan_end}")
