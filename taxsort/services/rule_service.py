"""Classification rule service.

Resolves the effective rule set for a user (own rules + global rules) and
manages rule CRUD, global-rule opt-outs and seeding of system rules.
"""

import asyncio
from collections import Counter

import structlog

from taxsort.core.exceptions import AlreadyExistsError, ForbiddenError, NotFoundError, ValidationError
from taxsort.models.classification_rule import GLOBAL_OWNER
from taxsort.schemas.classification_rule import (
    GlobalRuleSettings,
    GlobalRuleStatus,
    Rule,
    RuleCreate,
    RuleDraft,
    RuleSource,
    RuleStats,
    RuleUpdate,
)
from taxsort.services.categories import resolve_category
from taxsort.services.default_vendors import GLOBAL_RULE_SEEDS
from taxsort.services.rule_cache import RuleCache, RuleSet
from taxsort.services.rule_store import RuleStore

logger = structlog.get_logger()


class RuleResolver:
    """Merge a user's private rules with the shared global rules."""

    def __init__(self, store: RuleStore):
        self.store = store

    async def resolve(self, user_id: str) -> RuleSet:
        user_rules, global_settings, disabled_ids, global_rules = await asyncio.gather(
            self.store.list_user_rules(user_id),
            self.store.get_global_settings(user_id),
            self.store.list_disabled_global_rule_ids(user_id),
            self.store.list_global_rules(),
        )

        if global_settings.use_global_rules:
            effective = tuple(r for r in global_rules if r.id not in disabled_ids)
        else:
            effective = ()

        logger.info(
            "rules_resolved",
            user_id=user_id,
            user_rules=len(user_rules),
            global_rules=len(effective),
            use_global_rules=global_settings.use_global_rules,
        )
        return RuleSet(
            user_rules=tuple(user_rules),
            global_rules=effective,
            use_global_rules=global_settings.use_global_rules,
            disabled_global_ids=frozenset(disabled_ids),
        )


class RuleService:
    def __init__(self, store: RuleStore, cache: RuleCache):
        self.store = store
        self.cache = cache

    async def get_rule_set(self, user_id: str) -> RuleSet:
        """Effective rules for a user, through the cache."""
        return await self.cache.get(user_id, lambda: RuleResolver(self.store).resolve(user_id))

    # ── CRUD ───────────────────────────────────────────

    async def list_rules(self, user_id: str) -> list[Rule]:
        return await self.store.list_user_rules(user_id, include_inactive=True)

    async def create_rule(self, data: RuleCreate, user_id: str) -> Rule:
        """Save a manual rule. The pattern is stored upper-cased."""
        _validate_amount_bounds(data.amount_min, data.amount_max)

        draft = RuleDraft(
            **data.model_dump(exclude={"category"}),
            category=resolve_category(data.category) or data.category,
            user_id=user_id,
            source=RuleSource.MANUAL,
        )
        rule = await self.store.upsert_rule(draft)
        if rule is None:
            raise AlreadyExistsError("ClassificationRule")

        self.cache.invalidate(user_id)
        logger.info("rule_created", user_id=user_id, rule_id=rule.id, pattern=rule.pattern)
        return rule

    async def update_rule(self, rule_id: int, data: RuleUpdate, user_id: str) -> Rule:
        rule = await self._get_user_rule(rule_id, user_id)
        fields = data.model_dump(mode="json", exclude_unset=True)
        if "category" in fields and fields["category"]:
            fields["category"] = resolve_category(fields["category"]) or fields["category"]

        _validate_amount_bounds(
            fields.get("amount_min", rule.amount_min),
            fields.get("amount_max", rule.amount_max),
        )

        updated = await self.store.update_rule(rule_id, fields)
        if updated is None:
            raise AlreadyExistsError("ClassificationRule")

        self.cache.invalidate(user_id)
        return updated

    async def delete_rule(self, rule_id: int, user_id: str) -> None:
        await self._get_user_rule(rule_id, user_id)
        await self.store.delete_rule(rule_id)
        self.cache.invalidate(user_id)
        logger.info("rule_deleted", user_id=user_id, rule_id=rule_id)

    async def record_match(self, rule_id: int, user_id: str) -> None:
        """Bump a rule's usage counter, which drives matching priority.

        Callers may count hits on their own rules and on global rules.
        """
        rule = await self.store.get_rule(rule_id)
        if rule is None:
            raise NotFoundError("ClassificationRule")
        if rule.user_id != user_id and not rule.is_global:
            raise ForbiddenError()
        await self.store.increment_match_count(rule_id)
        self.cache.invalidate(user_id)

    async def get_stats(self, user_id: str) -> RuleStats:
        rules = await self.store.list_user_rules(user_id, include_inactive=True)
        by_source = Counter(rule.source.value for rule in rules)
        return RuleStats(
            total_rules=len(rules),
            total_matches=sum(rule.match_count for rule in rules),
            rules_by_source=dict(by_source),
        )

    # ── Global rules ───────────────────────────────────

    async def get_global_settings(self, user_id: str) -> GlobalRuleSettings:
        return await self.store.get_global_settings(user_id)

    async def toggle_global_rules(self, user_id: str, enabled: bool) -> GlobalRuleSettings:
        result = await self.store.set_global_settings(user_id, enabled)
        self.cache.invalidate(user_id)
        logger.info("global_rules_toggled", user_id=user_id, enabled=enabled)
        return result

    async def disable_global_rule(self, user_id: str, rule_id: int) -> None:
        await self._get_global_rule(rule_id)
        await self.store.disable_global_rule(user_id, rule_id)
        self.cache.invalidate(user_id)

    async def enable_global_rule(self, user_id: str, rule_id: int) -> None:
        await self._get_global_rule(rule_id)
        await self.store.enable_global_rule(user_id, rule_id)
        self.cache.invalidate(user_id)

    async def list_global_rules_with_status(self, user_id: str) -> list[GlobalRuleStatus]:
        global_rules, disabled_ids = await asyncio.gather(
            self.store.list_global_rules(),
            self.store.list_disabled_global_rule_ids(user_id),
        )
        return [
            GlobalRuleStatus(**rule.model_dump(), is_enabled=rule.id not in disabled_ids)
            for rule in global_rules
        ]

    async def seed_global_rules(self) -> int:
        """Insert the system global rules that are not present yet."""
        created = 0
        for seed in GLOBAL_RULE_SEEDS:
            rule = await self.store.upsert_rule(
                RuleDraft(
                    user_id=GLOBAL_OWNER,
                    name=seed.name,
                    pattern=seed.pattern,
                    category=seed.category,
                    subcategory=seed.subcategory,
                    confidence=seed.confidence,
                    source=RuleSource.SYSTEM,
                    is_global=True,
                    global_vote_count=seed.vote_count,
                )
            )
            if rule is not None:
                created += 1

        if created:
            self.cache.invalidate()
        logger.info("global_rules_seeded", created=created, total=len(GLOBAL_RULE_SEEDS))
        return created

    # ── Helpers ─────────────────────────────────────────

    async def _get_user_rule(self, rule_id: int, user_id: str) -> Rule:
        """Fetch a rule and verify ownership."""
        rule = await self.store.get_rule(rule_id)
        if rule is None:
            raise NotFoundError("ClassificationRule")
        if rule.user_id != user_id:
            raise ForbiddenError()
        return rule

    async def _get_global_rule(self, rule_id: int) -> Rule:
        rule = await self.store.get_rule(rule_id)
        if rule is None or not rule.is_global:
            raise NotFoundError("Global rule")
        return rule


def _validate_amount_bounds(amount_min: float | None, amount_max: float | None) -> None:
    if amount_min is not None and amount_min < 0:
        raise ValidationError("amount_min must be zero or positive")
    if amount_max is not None and amount_max < 0:
        raise ValidationError("amount_max must be zero or positive")
    if amount_min is not None and amount_max is not None and amount_min > amount_max:
        raise ValidationError("amount_min must not exceed amount_max")
