"""Approximate string index over rules (or vendor table entries).

Scores are dissimilarities in ``[0, 1]``: 0 is a perfect match, 1 is no
overlap. A short query is compared against the best-aligned substring of a
key (``partial_ratio``) so that ``"SHELL"`` matches ``"SHELL OIL"``; a query
longer than the key falls back to a plain ``ratio``.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from rapidfuzz import fuzz


@dataclass(frozen=True)
class FuzzyHit:
    item: Any
    score: float
    key: str


def dissimilarity(query: str, key: str) -> float:
    if not query or not key:
        return 1.0
    if len(query) <= len(key):
        similarity = fuzz.partial_ratio(query, key)
    else:
        similarity = fuzz.ratio(query, key)
    return round(1.0 - similarity / 100.0, 4)


class RuleIndex:
    """Index items under one or more text keys and rank them against a query."""

    def __init__(self, items: Sequence[Any], keys: Callable[[Any], Iterable[str | None]]):
        self._entries: list[tuple[Any, list[str]]] = []
        for item in items:
            item_keys = [k.strip().upper() for k in keys(item) if k and k.strip()]
            if item_keys:
                self._entries.append((item, item_keys))

    def __len__(self) -> int:
        return len(self._entries)

    def search(self, query: str) -> list[FuzzyHit]:
        """All items ranked by their best key score, closest first.

        Ties keep insertion order, so caller priority is preserved.
        """
        query = (query or "").strip().upper()
        if not query:
            return []

        hits = []
        for item, item_keys in self._entries:
            best_key = min(item_keys, key=lambda k: dissimilarity(query, k))
            hits.append(FuzzyHit(item=item, score=dissimilarity(query, best_key), key=best_key))
        hits.sort(key=lambda hit: hit.score)
        return hits

    def best(self, query: str, threshold: float) -> FuzzyHit | None:
        """Closest item, only if its score is strictly below ``threshold``."""
        hits = self.search(query)
        if hits and hits[0].score < threshold:
            return hits[0]
        return None
