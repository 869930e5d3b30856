"""Cuisine tag lookups."""

from dataclasses import dataclass
from typing import Protocol

DEFAULT_CUISINES = (
    "Italian",
    "Mexican",
    "Chinese",
    "Japanese",
    "Thai",
    "Indian",
    "American",
    "Mediterranean",
    "Korean",
    "Vietnamese",
    "French",
    "Greek",
    "Spanish",
    "Middle Eastern",
    "Comfort Food",
    "Healthy",
    "BBQ",
    "Seafood",
    "Vegetarian",
    "Vegan",
)


class CuisineRepository(Protocol):
    """Persistence interface for cuisine tags."""

    def list_names(self) -> list[str]:
        """Return the stored tag names."""


@dataclass
class CuisineService:
    """Provides the cuisine tags offered when logging a meal."""

    repository: CuisineRepository

    def list_cuisines(self) -> list[str]:
        """Return sorted tag names, or the built-in tags when none are stored."""
        names = {name for name in self.repository.list_names() if name}
        if not names:
            return sorted(DEFAULT_CUISINES, key=str.casefold)
        return sorted(names, key=str.casefold)
