"""Application-wide constants.

This module centralizes magic numbers and lookup tables that are used
across multiple modules. For environment-specific configuration, see
config.py.
"""

import enum

# =============================================================================
# Currency
# =============================================================================

# Reporting currency for every monetary aggregate
REPORTING_CURRENCY: str = "USD"

# Units of currency per 1 USD. Fixed approximations, not live FX rates.
DEFAULT_CURRENCY_RATES: dict[str, float] = {
    "GHS": 14,
    "NGN": 1600,
    "XOF": 600,
    "XAF": 600,
    "EUR": 0.92,
    "GBP": 0.79,
}

# =============================================================================
# Roles and statuses
# =============================================================================

ROLE_ADMIN: str = "admin"
ROLE_AFFILIATE: str = "affiliate"
ROLE_LEARNER: str = "learner"

USER_STATUS_ACTIVE: str = "active"
USER_STATUS_SUSPENDED: str = "suspended"
USER_STATUS_PENDING: str = "pending"

PAYMENT_STATUS_COMPLETED: str = "completed"
PAYMENT_TYPE_REFERRAL_MEMBERSHIP: str = "referral_membership"

COMMISSION_STATUS_PENDING: str = "pending"

SUCCESSFUL_REFERRAL_STATUSES: frozenset[str] = frozenset({"completed", "converted"})

# =============================================================================
# Analytics
# =============================================================================


class PartialDataPolicy(str, enum.Enum):
    """What to do when one of the record-set queries fails."""

    SILENT_ZERO = "silent_zero"  # Log, substitute an empty set, keep serving
    FAIL_FAST = "fail_fast"  # Abort the request with a 502


UNKNOWN_COUNTRY: str = "Unknown"
UNKNOWN_MEMBERSHIP: str = "unknown"

# Monday-first, matches datetime.weekday()
WEEKDAY_LABELS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

HOURS_PER_DAY: int = 24

# Newest profiles shown on the dashboard
RECENT_USERS_LIMIT: int = 5
