"""
Base Recipe Parser.

This module defines the base interface that all recipe parsers must implement.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from ..models.recipe import ParsedRecipe


class BaseRecipeParser(ABC):
    """Abstract base class for recipe parsers.

    All recipe parsers must implement the parse_recipe method to convert
    one chunk of raw text into a ParsedRecipe.
    """

    @abstractmethod
    def parse_recipe(self, text: str) -> ParsedRecipe:
        """Parse recipe information from a single recipe chunk.

        Args:
            text: The raw text of one recipe

        Returns:
            A ParsedRecipe. Missing fields fall back to their defaults;
            an empty title means no recipe was found.
        """
        pass
