from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for authorization."""

    ADMIN = "ADMIN"
    USER = "USER"


class UserKind(str, Enum):
    """Closed set of account variants sharing the users table."""

    EMPLOYEE = "EMPLOYEE"
    CLIENT = "CLIENT"


class CarStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    UNAVAILABLE = "UNAVAILABLE"


class RevenueReason(str, Enum):
    """Why a signed delta was applied to a branch revenue."""

    RESERVATION_CREATED = "RESERVATION_CREATED"
    RESERVATION_EDITED = "RESERVATION_EDITED"
    RESERVATION_CANCELLED = "RESERVATION_CANCELLED"
    RETURN_UPCHARGE = "RETURN_UPCHARGE"
