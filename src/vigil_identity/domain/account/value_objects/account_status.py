from enum import Enum


class AccountStatus(str, Enum):
    """Soft lifecycle of an account. Only active accounts may authenticate."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
