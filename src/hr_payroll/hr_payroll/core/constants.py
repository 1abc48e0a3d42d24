"""Constants and statutory defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Amounts are whole VND.
"""

MINUTES_PER_DAY = 24 * 60

DEFAULT_LATE_GRACE_MINUTES = 0
DEFAULT_HOURS_PER_DAY = 8
DEFAULT_LUNCH_START = "12:00"
DEFAULT_LUNCH_END = "13:30"

DEFAULT_SHIFT_NAME_1 = "Ca 1"
DEFAULT_SHIFT_NAME_2 = "Ca 2"

# Giảm trừ gia cảnh (thuế TNCN)
DEFAULT_PERSONAL_DEDUCTION = 11_000_000
DEFAULT_DEPENDENT_DEDUCTION = 4_400_000

# BHXH 8% + BHYT 1.5% + BHTN 1%, capped at 20x base wage
DEFAULT_INSURANCE_RATE = 0.105
DEFAULT_INSURANCE_CAP_BASE = 46_800_000

DEFAULT_OT_WEEKDAY = 1.5
DEFAULT_OT_WEEKEND = 2.0
DEFAULT_OT_HOLIDAY = 3.0

# datetime.weekday(): Monday=0 ... Sunday=6
DEFAULT_WEEKEND_DAYS = (6,)

# (upper bound of taxable income, rate); None = no upper bound
DEFAULT_TAX_BRACKETS = (
    (5_000_000, 0.05),
    (10_000_000, 0.10),
    (18_000_000, 0.15),
    (32_000_000, 0.20),
    (52_000_000, 0.25),
    (80_000_000, 0.30),
    (None, 0.35),
)
