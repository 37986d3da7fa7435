"""
GymTastic Membership — Public API
===================================
"""

from engines.membership.policy import MembershipPolicy
from engines.membership.state import MembershipState
from engines.membership.store import (
    DbMembershipStore,
    InMemoryMembershipStore,
    MembershipStore,
)

__all__ = [
    "MembershipState",
    "MembershipPolicy",
    "MembershipStore",
    "InMemoryMembershipStore",
    "DbMembershipStore",
]
