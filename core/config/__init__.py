"""
GymTastic Core Config — Public API
====================================
Admin-configurable rules (renewal window, checkout timeout).
Doctrine: No hardcoded business thresholds in engine logic.
"""

from core.config.rules import (
    CheckoutRules,
    ConfigStore,
    InMemoryConfigStore,
    MembershipRules,
    SettingsConfigStore,
    rules_from_mapping,
)

__all__ = [
    "MembershipRules",
    "CheckoutRules",
    "ConfigStore",
    "InMemoryConfigStore",
    "SettingsConfigStore",
    "rules_from_mapping",
]
