"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_TIMEZONE = "UTC"
PRICE_QUANTUM = Decimal("0.01")
ZERO_AMOUNT = Decimal("0")
