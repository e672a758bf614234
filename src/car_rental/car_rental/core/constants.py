"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MONEY_QUANTUM = Decimal("0.01")

CROSS_LOCATION_CHARGE = Decimal("100.00")
BRANCH_HANDOVER_GRACE_DAYS = 1

FREE_CANCELLATION_DAYS = 2
LATE_CANCELLATION_REFUND_RATE = Decimal("0.80")

MIN_CAR_PRICE = Decimal("1.00")
MAX_CAR_PRICE = Decimal("10000.00")
MAX_RESERVATION_PRICE = Decimal("100000.00")
MAX_UPCHARGE = Decimal("10000.00")

MIN_PASSWORD_LENGTH = 6
