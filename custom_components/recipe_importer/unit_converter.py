"""Unit conversion utilities for recipe ingredients."""
from __future__ import annotations

import math
import re

from .models.recipe import MetricQuantity

# Volume conversions to milliliters (ml)
VOLUME_TO_ML = {
    # Imperial/US
    "fl oz": 29.57,
    "fl. oz": 29.57,
    "floz": 29.57,
    "fl.oz": 29.57,
    "cup": 236.59,
    "pint": 473.18,
    "pt": 473.18,
    "quart": 946.35,
    "qt": 946.35,
    "gallon": 3785.41,
    "gal": 3785.41,
    "tbsp": 15,
    "tablespoon": 15,
    "tsp": 5,
    "teaspoon": 5,
    # Metric (scaled)
    "l": 1000,
    "liter": 1000,
    "litre": 1000,
}

# Weight conversions to grams (g)
WEIGHT_TO_G = {
    # Imperial/US
    "oz": 28.35,
    "ounce": 28.35,
    "lb": 453.59,
    "pound": 453.59,
    "lbs": 453.59,
    # Metric (scaled)
    "kg": 1000,
}

# Per-item pack sizes inside a unit string, e.g. "x 400g cans", "(500ml)"
_PACK_PREFIX = r"(?:x\s*|^\s*|\(\s*)(\d+(?:\.\d+)?)\s*"
PACK_SIZE_PATTERNS = (
    (re.compile(_PACK_PREFIX + r"g\b"), 1, "g"),
    (re.compile(_PACK_PREFIX + r"ml\b"), 1, "ml"),
    (re.compile(_PACK_PREFIX + r"kg\b"), 1000, "g"),
)


def normalize_unit(unit: str) -> str:
    """Lowercase and trim a unit and drop one plural 's'.

    Examples:
        >>> normalize_unit(' Cups ')
        'cup'
        >>> normalize_unit('LBS')
        'lb'
    """
    normalized = unit.lower().strip()
    if normalized.endswith("s"):
        normalized = normalized[:-1]
    return normalized


def to_metric(amount: float, unit: str) -> MetricQuantity:
    """
    Convert an imperial or ad-hoc quantity to grams or milliliters.

    Args:
        amount: The numeric amount
        unit: The unit string (e.g., 'cups', 'oz', 'lb', 'x 400g cans')

    Returns:
        MetricQuantity in 'g' or 'ml'. If the unit is not convertible
        (counts, 'pinch', 'g' itself), the input is returned unchanged.

    Examples:
        >>> to_metric(1, 'cup')
        MetricQuantity(amount=236.59, unit='ml')
        >>> to_metric(2, 'kg')
        MetricQuantity(amount=2000.0, unit='g')
        >>> to_metric(2, 'x 400g cans')
        MetricQuantity(amount=800.0, unit='g')
    """
    if not unit:
        return MetricQuantity(amount=amount, unit="")

    normalized = normalize_unit(unit)

    if normalized in VOLUME_TO_ML:
        return MetricQuantity(amount=amount * VOLUME_TO_ML[normalized], unit="ml")

    if normalized in WEIGHT_TO_G:
        return MetricQuantity(amount=amount * WEIGHT_TO_G[normalized], unit="g")

    for pattern, scale, metric_unit in PACK_SIZE_PATTERNS:
        match = pattern.search(normalized)
        if match:
            per_item = float(match.group(1)) * scale
            return MetricQuantity(amount=amount * per_item, unit=metric_unit)

    # Return original if no conversion applies
    return MetricQuantity(amount=amount, unit=unit)


def is_converted(unit: str, metric: MetricQuantity) -> bool:
    """Whether a conversion result is worth showing next to the original."""
    return metric.unit != unit


def _format_grouped(value: float) -> str:
    """Up to 2 decimals with thousands separators, trailing zeros removed."""
    return f"{value:,.2f}".rstrip('0').rstrip('.')


def format_metric(amount: float, unit: str) -> str:
    """
    Format a metric amount for display.

    Grams and milliliters of 1000 or more are shown as kg and L. Otherwise
    amounts of 10 or more are rounded to whole numbers and smaller amounts
    keep one decimal.

    Examples:
        >>> format_metric(236.59, 'ml')
        '237 ml'
        >>> format_metric(2000, 'g')
        '2 kg'
        >>> format_metric(7.5, 'ml')
        '7.5 ml'
    """
    if unit == "g" and amount >= 1000:
        return f"{_format_grouped(amount / 1000)} kg"
    if unit == "ml" and amount >= 1000:
        return f"{_format_grouped(amount / 1000)} L"

    if amount >= 10:
        formatted = str(math.floor(amount + 0.5))
    else:
        formatted = f"{amount:.1f}".rstrip('0').rstrip('.')

    return f"{formatted} {unit}" if unit else formatted


def format_quantity(quantity: float | int | None) -> str:
    """
    Format quantity to remove unnecessary decimals.

    Args:
        quantity: The numeric quantity (can be int, float, or None)

    Returns:
        Formatted string (empty string if quantity is None)

    Examples:
        >>> format_quantity(2.0)
        '2'
        >>> format_quantity(2.5)
        '2.5'
        >>> format_quantity(1.333)
        '1.33'
    """
    if quantity is None:
        return ""

    # If it's a whole number, return without decimals
    if quantity == int(quantity):
        return str(int(quantity))

    # Otherwise, return with up to 2 decimal places, removing trailing zeros
    return f"{quantity:.2f}".rstrip('0').rstrip('.')
