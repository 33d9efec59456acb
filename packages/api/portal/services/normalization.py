# This project was developed with assistance from AI tools.
"""Income and grade normalization.

Pure functions turning the values applicants enter (income bracket labels,
percentage grades) into the numbers stored on the financial and academic
records.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

INCOME_RANGES = [
    "Below 100,000",
    "100,000-200,000",
    "200,000-300,000",
    "300,000-400,000",
    "400,000-500,000",
    "Above 500,000",
]

# Representative values for the open-ended brackets
_BELOW_FLOOR_VALUE = 50_000.0
_ABOVE_CEILING_VALUE = 750_000.0

# (minimum percentage, GWA); first match wins
_GWA_SCALE: list[tuple[float, float]] = [
    (96, 1.00),
    (94, 1.25),
    (92, 1.50),
    (89, 1.75),
    (87, 2.00),
    (84, 2.25),
    (82, 2.50),
    (79, 2.75),
    (75, 3.00),
]
FAILING_GWA = 5.00

GWA_FORMAT_PERCENTAGE = "percentage"
GWA_FORMAT_GWA = "gwa"


def _digits(text: str) -> str:
    return re.sub(r"\D", "", text)


def parse_income_range(text: str | None) -> float:
    """Map an income bracket label to a representative annual income.

    "Below ..." -> 50,000, "Above ..." -> 750,000, "a-b" -> midpoint,
    otherwise the digits read as a number. Unparseable input yields 0.
    """
    if not text:
        return 0.0
    if "Below" in text:
        return _BELOW_FLOOR_VALUE
    if "Above" in text:
        return _ABOVE_CEILING_VALUE
    if "-" in text:
        low, _, high = text.partition("-")
        low_digits, high_digits = _digits(low), _digits(high)
        if not low_digits or not high_digits:
            return 0.0
        return (int(low_digits) + int(high_digits)) / 2
    digits = _digits(text)
    return float(digits) if digits else 0.0


def percentage_to_gwa(percentage: float) -> float:
    """Convert a 0-100 percentage grade to the 1.00-5.00 GWA scale (1.00 best)."""
    percentage = float(percentage)
    if math.isnan(percentage):
        return FAILING_GWA
    clamped = max(0.0, min(100.0, percentage))
    for minimum, gwa in _GWA_SCALE:
        if clamped >= minimum:
            return gwa
    return FAILING_GWA


def normalize_gwa(value: float, input_format: str = GWA_FORMAT_GWA) -> float:
    """Return the GWA to store for a grade entered in ``input_format``."""
    if input_format == GWA_FORMAT_PERCENTAGE:
        return percentage_to_gwa(value)
    return float(value)


def monthly_from_annual(annual: float) -> Decimal:
    """Monthly equivalent of an annual income, rounded to centavos."""
    return (Decimal(str(annual)) / 12).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

