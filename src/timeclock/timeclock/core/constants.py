"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_BUSINESS_TIMEZONE = "Asia/Manila"
DEFAULT_CURRENCY_SYMBOL = "₱"
DEFAULT_TABLE_DAYS = 7

MINUTES_PER_HOUR = 60

# Manual payments are stamped at noon of the chosen day.
PAYMENT_STAMP_HOUR = 12

INVOICE_NUMBER_PREFIX = "INV-"
PASSKEY_LENGTH = 4

# Admin quick entry: full-day preset.
DEFAULT_SHIFT_START = "09:00"
DEFAULT_SHIFT_END = "17:00"
