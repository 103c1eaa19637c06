"""
Recipe Splitter.

Partitions one pasted or uploaded text blob into per-recipe chunks.
"""
from __future__ import annotations

import logging
import re

_LOGGER = logging.getLogger(__name__)

# A line of three or more '=' characters is the authoritative separator
DELIMITER_PATTERN = re.compile(r"^={3,}[ \t]*$", re.MULTILINE)

TITLE_LINE_PATTERN = re.compile(r"^title:", re.MULTILINE | re.IGNORECASE)
BEFORE_TITLE_PATTERN = re.compile(r"(?=^title:)", re.MULTILINE | re.IGNORECASE)


def normalize_newlines(text: str) -> str:
    """Convert Windows and old Mac line endings to '\\n'."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_recipes(raw: str) -> list[str]:
    """Split raw text into one chunk per recipe.

    Explicit '====' delimiter lines win. Without them, text containing more
    than one 'Title:' line is split right before each of those lines.
    Anything else is a single recipe.

    Args:
        raw: The raw recipe text

    Returns:
        Trimmed, non-empty recipe chunks in input order
    """
    if not raw:
        return []

    text = normalize_newlines(raw)

    if DELIMITER_PATTERN.search(text):
        chunks = DELIMITER_PATTERN.split(text)
        strategy = "delimiter"
    elif len(TITLE_LINE_PATTERN.findall(text)) > 1:
        chunks = BEFORE_TITLE_PATTERN.split(text)
        strategy = "title"
    else:
        chunks = [text]
        strategy = "single"

    result = [chunk.strip() for chunk in chunks if chunk.strip()]
    _LOGGER.debug("Split input into %d chunks (strategy: %s)",
                  len(result), strategy)
    return result
