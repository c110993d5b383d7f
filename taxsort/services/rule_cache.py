"""Read-through cache of resolved rule sets, keyed by user id.

Entries expire after ``ttl_seconds``. Every rule write must call
``invalidate`` for the affected user (or for everyone, when global rules
change); the cache never refreshes itself on writes.
"""

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import structlog

from taxsort.schemas.classification_rule import Rule

logger = structlog.get_logger()


@dataclass(frozen=True)
class RuleSet:
    """A user's own rules plus the global rules in effect for them."""

    user_rules: tuple[Rule, ...] = ()
    global_rules: tuple[Rule, ...] = ()
    use_global_rules: bool = True
    disabled_global_ids: frozenset[int] = field(default_factory=frozenset)

    @property
    def rules(self) -> list[Rule]:
        """Matching order: user rules first, then effective global rules."""
        return [*self.user_rules, *self.global_rules]


@dataclass
class _Entry:
    rule_set: RuleSet
    loaded_at: float


class RuleCache:
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    async def get(self, user_id: str, load: Callable[[], Awaitable[RuleSet]]) -> RuleSet:
        """Return the cached rule set, calling ``load`` on a miss or after expiry."""
        entry = self._entries.get(user_id)
        if entry is not None and (self._clock() - entry.loaded_at) < self.ttl_seconds:
            return entry.rule_set

        rule_set = await load()
        self._entries[user_id] = _Entry(rule_set=rule_set, loaded_at=self._clock())
        return rule_set

    def invalidate(self, user_id: str | None = None) -> None:
        """Drop one user's entry, or every entry when ``user_id`` is None."""
        if user_id is None:
            self._entries.clear()
        else:
            self._entries.pop(user_id, None)
        logger.debug("rule_cache_invalidated", user_id=user_id or "*")

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._entries
