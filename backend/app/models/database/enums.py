"""Centralized enum definitions for database models.

All status and type enums should be defined here for consistency.
"""

from enum import Enum


# =============================================================================
# Vocabulary Enums
# =============================================================================


class WordType(str, Enum):
    """Stored word classification.

    There is deliberately no UNKNOWN member: a word is unknown when the
    user has no row for it, and marking a word unknown deletes its row.
    """

    KNOWN = "known"
    TRACKING = "tracking"
    IGNORED = "ignored"


# =============================================================================
# Account Enums
# =============================================================================


class AccountType(str, Enum):
    """Plan a user is on."""

    FREE = "free"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


class SubscriptionStatus(str, Enum):
    """State of a paid plan. Free accounts have none."""

    ACTIVE = "active"
    CANCELED = "canceled"
    EXPIRED = "expired"
