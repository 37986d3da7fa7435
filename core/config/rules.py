"""
GymTastic Core Config — Admin-Configurable Rules
==================================================
Doctrine: No hardcoded business thresholds in engine logic.

The renewal window, checkout timeout and fallback plan duration come
from configuration (Django settings in production, an in-memory store
in tests), never from constants buried in the engines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

DEFAULT_RENEWAL_THRESHOLD_DAYS = 3
DEFAULT_CHECKOUT_TIMEOUT_SECONDS = 30.0
DEFAULT_PLAN_DURATION_DAYS = 30


# ══════════════════════════════════════════════════════════════
# MEMBERSHIP RULES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class MembershipRules:
    """
    Renewal policy parameters.

    A user holding an active plan may buy a new one only when the
    remaining days are <= renewal_threshold_days.
    """

    renewal_threshold_days: int = DEFAULT_RENEWAL_THRESHOLD_DAYS
    default_plan_duration_days: int = DEFAULT_PLAN_DURATION_DAYS

    def __post_init__(self) -> None:
        if self.renewal_threshold_days < 0:
            raise ValueError(
                f"renewal_threshold_days must be >= 0, got {self.renewal_threshold_days}."
            )
        if self.default_plan_duration_days <= 0:
            raise ValueError(
                f"default_plan_duration_days must be > 0, got {self.default_plan_duration_days}."
            )


# ══════════════════════════════════════════════════════════════
# CHECKOUT RULES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CheckoutRules:
    """Checkout execution limits. None disables the timeout."""

    timeout_seconds: Optional[float] = DEFAULT_CHECKOUT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be > 0 or None, got {self.timeout_seconds}."
            )


# ══════════════════════════════════════════════════════════════
# CONFIG STORE PROTOCOL
# ══════════════════════════════════════════════════════════════

class ConfigStore(Protocol):
    """
    Protocol for rule storage.

    Implementations may back this with Django settings, a database,
    or memory.
    """

    def get_membership_rules(self) -> MembershipRules:
        ...  # pragma: no cover

    def get_checkout_rules(self) -> CheckoutRules:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IN-MEMORY CONFIG STORE (for testing / bootstrap)
# ══════════════════════════════════════════════════════════════

class InMemoryConfigStore:
    """Simple in-memory config store for testing and bootstrap."""

    def __init__(
        self,
        membership: MembershipRules | None = None,
        checkout: CheckoutRules | None = None,
    ) -> None:
        self._membership = membership or MembershipRules()
        self._checkout = checkout or CheckoutRules()

    def set_membership_rules(self, rules: MembershipRules) -> None:
        self._membership = rules

    def set_checkout_rules(self, rules: CheckoutRules) -> None:
        self._checkout = rules

    def get_membership_rules(self) -> MembershipRules:
        return self._membership

    def get_checkout_rules(self) -> CheckoutRules:
        return self._checkout


# ══════════════════════════════════════════════════════════════
# SETTINGS-BACKED STORE (Django)
# ══════════════════════════════════════════════════════════════

def rules_from_mapping(values: Mapping[str, Any]) -> tuple[MembershipRules, CheckoutRules]:
    """Build rules from a GYMTASTIC_CORE style mapping; missing keys use defaults."""
    timeout = values.get("CHECKOUT_TIMEOUT_SECONDS", DEFAULT_CHECKOUT_TIMEOUT_SECONDS)
    membership = MembershipRules(
        renewal_threshold_days=int(
            values.get("RENEWAL_THRESHOLD_DAYS", DEFAULT_RENEWAL_THRESHOLD_DAYS)
        ),
        default_plan_duration_days=int(
            values.get("DEFAULT_PLAN_DURATION_DAYS", DEFAULT_PLAN_DURATION_DAYS)
        ),
    )
    checkout = CheckoutRules(
        timeout_seconds=None if timeout in (None, "", 0, "0") else float(timeout),
    )
    return membership, checkout


class SettingsConfigStore:
    """Reads rules from `settings.GYMTASTIC_CORE` on every call."""

    setting_name = "GYMTASTIC_CORE"

    def _values(self) -> Mapping[str, Any]:
        from django.conf import settings

        return getattr(settings, self.setting_name, {}) or {}

    def get_membership_rules(self) -> MembershipRules:
        return rules_from_mapping(self._values())[0]

    def get_checkout_rules(self) -> CheckoutRules:
        return rules_from_mapping(self._values())[1]
