"""
Ingredient Line Parser.

Splits a single free-text ingredient line into amount, unit and name.
Supported layouts:
- Quantity first: "2¾ oz Salted Butter", "14 fl oz Whole Milk", "250g flour"
- Quantity last: "Cauliflower 1", "Milk 200 ml", "Flour 1 ½ cups"
- Anything else: the whole line is the name ("Salt", "Pepper to taste")
"""
from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from fractions import Fraction

from ..models.recipe import ParsedIngredient

_LOGGER = logging.getLogger(__name__)

# Unicode fraction glyphs and the '?' left behind by mis-decoded ½
FRACTION_DECIMALS = {
    "¼": ".25",
    "½": ".5",
    "¾": ".75",
    "⅓": ".33",
    "⅔": ".66",
    "⅛": ".125",
    "?": ".5",
}

KNOWN_UNITS = frozenset({
    "fl oz", "floz", "fl.oz", "oz", "lb", "lbs", "cup", "cups", "tbsp",
    "tsp", "g", "kg", "ml", "l", "liter", "pint", "quart", "gal",
})

_QUANTITY_CHARS = r"\d./?¼½¾⅓⅔⅛"
_UNIT_WORDS = r"[A-Za-z.]+(?:\s+[A-Za-z.]+)?"

# Whitespace inside a quantity run only ever sits between quantity characters
_QUANTITY_RUN = rf"[{_QUANTITY_CHARS}](?:[{_QUANTITY_CHARS}]|\s+(?=[{_QUANTITY_CHARS}]))*"

QUANTITY_FIRST_PATTERN = re.compile(
    rf"^({_QUANTITY_RUN})\s*({_UNIT_WORDS})\s+(.+)$")
# Matched against the reversed line: '[unit] <quantity> <name>' read backwards
QUANTITY_LAST_REVERSED_PATTERN = re.compile(
    rf"^(?:({_UNIT_WORDS})\s*)?({_QUANTITY_RUN})\s+(.+)$", re.DOTALL)

MULTI_WORD_UNIT_PATTERN = re.compile(r"^fl\.? oz\b", re.IGNORECASE)

# '-', '*', '•' and '•' as it looks after a UTF-8/cp1252 mix-up
BULLET_PATTERN = re.compile(r"^\s*(?:[-*•]|â€¢)\s*")


def clean_ingredient_line(line: str) -> str:
    """Strip one leading bullet marker and surrounding whitespace."""
    return BULLET_PATTERN.sub("", line, count=1).strip()


def _normalize_unit_token(token: str) -> str:
    """Lowercase a unit token, drop dots and one plural 's'."""
    token = token.lower().replace(".", "")
    if token.endswith("s"):
        token = token[:-1]
    return token


def is_known_unit(token: str) -> bool:
    """Check whether a token is a unit the parser recognises."""
    return _normalize_unit_token(token) in KNOWN_UNITS


def _parse_number(token: str) -> float | None:
    """Parse a decimal or a simple 'a/b' fraction."""
    try:
        if "/" in token:
            value = float(Fraction(token))
        else:
            value = float(token)
    except (ValueError, ZeroDivisionError, OverflowError):
        return None
    return value if math.isfinite(value) else None


def parse_quantity(quantity_run: str) -> float:
    """Convert a captured quantity run into a number.

    Unicode fractions become decimals (2¾ -> 2.75) and '?' counts as a
    half. A run with inner whitespace is a mixed number whose parts are
    summed (2 ½ -> 2.5, 2 3/4 -> 2.75).

    Args:
        quantity_run: Raw quantity text, e.g. '2¾', '1 ½', '0.25'

    Returns:
        The parsed amount, or 0.0 if the run is not a finite number
    """
    text = quantity_run.strip()
    for glyph, decimal in FRACTION_DECIMALS.items():
        text = text.replace(glyph, decimal)

    tokens = text.split()
    if len(tokens) > 1:
        values = [_parse_number(token) for token in tokens]
        if all(value is not None for value in values):
            total = sum(values)
            if math.isfinite(total):
                return total

    value = _parse_number(text)
    if value is None:
        _LOGGER.debug("Could not parse quantity '%s'", quantity_run)
        return 0.0
    return value


def split_unit_and_name(unit_span: str, name: str) -> tuple[str, str]:
    """Decide where the unit ends when the unit regex captured two words.

    The unit pattern greedily takes up to two words, so '2 oz Salted Butter'
    first yields unit 'oz Salted'. Only 'fl oz' style units may really span
    two words; otherwise a known first word is the unit and the rest goes
    back to the name. Unknown words are kept as the regex split them.

    Args:
        unit_span: The captured unit text, one or two words
        name: The captured remainder of the line

    Returns:
        Tuple of (unit, name)
    """
    words = unit_span.split()
    if len(words) < 2:
        return unit_span, name

    combined = f"{' '.join(words)} {name}"

    match = MULTI_WORD_UNIT_PATTERN.match(combined)
    if match:
        return match.group(0), combined[match.end():].strip()

    # The first word of the combined span is the first captured unit token
    first_word = words[0]
    if is_known_unit(first_word):
        return first_word, combined[len(first_word):].strip()

    return unit_span, name


def _match_quantity_first(line: str, order_index: int) -> ParsedIngredient | None:
    """Match '<quantity> <unit> <name>'."""
    match = QUANTITY_FIRST_PATTERN.match(line)
    if not match:
        return None

    quantity_run, unit_span, name = match.groups()
    unit, name = split_unit_and_name(unit_span, name.strip())

    return ParsedIngredient(
        name=name.strip(),
        amount=parse_quantity(quantity_run),
        unit=unit.strip(),
        order_index=order_index,
    )


def _match_quantity_last(line: str, order_index: int) -> ParsedIngredient | None:
    """Match '<name> <quantity> [unit]'."""
    match = QUANTITY_LAST_REVERSED_PATTERN.match(line[::-1])
    if not match:
        return None

    unit, quantity_run, name = (
        (group or "")[::-1] for group in match.groups())

    return ParsedIngredient(
        name=name.strip(),
        amount=parse_quantity(quantity_run),
        unit=unit.strip(),
        order_index=order_index,
    )


# Tried in order, first structural match wins
INGREDIENT_MATCHERS: tuple[Callable[[str, int], ParsedIngredient | None], ...] = (
    _match_quantity_first,
    _match_quantity_last,
)


def parse_ingredient_line(line: str, order_index: int = 0) -> ParsedIngredient:
    """Parse one ingredient line into a ParsedIngredient.

    Never raises: a line that fits neither layout becomes the ingredient
    name with amount 0 and no unit.

    Args:
        line: The raw ingredient line, optionally starting with a bullet
        order_index: Position of the ingredient within its recipe

    Returns:
        The parsed ingredient
    """
    clean = clean_ingredient_line(line)

    for matcher in INGREDIENT_MATCHERS:
        ingredient = matcher(clean, order_index)
        if ingredient is not None:
            _LOGGER.debug("Parsed '%s' with %s: amount=%s, unit='%s', name='%s'",
                          clean, matcher.__name__, ingredient.amount,
                          ingredient.unit, ingredient.name)
            return ingredient

    _LOGGER.debug("No quantity found in '%s', keeping it as the name", clean)
    return ParsedIngredient(name=clean, amount=0.0, unit="", order_index=order_index)
