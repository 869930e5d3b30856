"""Fuzzy search helpers."""

from collections.abc import Callable, Sequence
from typing import TypeVar

from rapidfuzz import fuzz, process, utils

T = TypeVar("T")


def fuzzy_search(
    query: str,
    items: Sequence[T],
    keys: Callable[[T], list[str]],
    threshold: float,
    limit: int,
) -> list[T]:
    """Return items whose best-matching key scores at least the threshold.

    Results are ordered by score, ties keeping their original order.
    """
    scored: list[tuple[float, int, T]] = []
    for index, item in enumerate(items):
        choices = [value for value in keys(item) if value]
        if not choices:
            continue
        match = process.extractOne(
            query,
            choices,
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            score_cutoff=threshold,
        )
        if match is None:
            continue
        _, score, _ = match
        scored.append((score, index, item))
    scored.sort(key=lambda entry: (-entry[0], entry[1]))
    return [item for _, _, item in scored[:limit]]
