"""Persistence boundary for rules, global-rule settings and transaction write-back."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from taxsort.models.classification_rule import (
    ClassificationRule,
    DisabledGlobalRule,
    UserGlobalRuleSettings,
)
from taxsort.models.transaction import Transaction
from taxsort.schemas.classification_rule import (
    AmountDirection,
    GlobalRuleSettings,
    Rule,
    RuleDraft,
)

logger = structlog.get_logger()

_RULE_UNIQUE_COLUMNS = ["user_id", "pattern", "amount_direction"]


class RuleStore(ABC):
    """Data access consumed by the matchers, the resolver and the AI classifier."""

    # ── Reads used by classification ───────────────

    @abstractmethod
    async def list_user_rules(self, user_id: str, include_inactive: bool = False) -> list[Rule]:
        """A user's own rules, most used first."""

    @abstractmethod
    async def list_global_rules(self) -> list[Rule]:
        """Active shared rules, most voted first."""

    @abstractmethod
    async def get_global_settings(self, user_id: str) -> GlobalRuleSettings:
        """Global-rule master switch. Defaults to enabled."""

    @abstractmethod
    async def list_disabled_global_rule_ids(self, user_id: str) -> set[int]:
        """Ids of global rules the user opted out of."""

    @abstractmethod
    async def find_rule(self, user_id: str, pattern: str, direction: AmountDirection) -> Rule | None:
        """Look up a rule by its unique key."""

    # ── Writes ─────────────────────────────────────

    @abstractmethod
    async def upsert_rule(self, draft: RuleDraft) -> Rule | None:
        """Insert a rule. Returns None when ``(user_id, pattern, amount_direction)`` already exists."""

    @abstractmethod
    async def update_transaction(self, transaction_id: str, fields: dict[str, Any]) -> bool:
        """Write classification fields onto a transaction. Returns False if it is unknown."""

    async def checkpoint(self) -> None:
        """Make the writes so far durable. Long runs call this between batches."""

    # ── Rule management ────────────────────────────

    @abstractmethod
    async def get_rule(self, rule_id: int) -> Rule | None: ...

    @abstractmethod
    async def update_rule(self, rule_id: int, fields: dict[str, Any]) -> Rule | None:
        """Apply fields to a rule. Returns None if the change collides with another rule."""

    @abstractmethod
    async def delete_rule(self, rule_id: int) -> None: ...

    @abstractmethod
    async def increment_match_count(self, rule_id: int, by: int = 1) -> None: ...

    @abstractmethod
    async def set_global_settings(self, user_id: str, use_global_rules: bool) -> GlobalRuleSettings: ...

    @abstractmethod
    async def disable_global_rule(self, user_id: str, rule_id: int) -> None:
        """Opt a user out of one global rule. Disabling twice is a no-op."""

    @abstractmethod
    async def enable_global_rule(self, user_id: str, rule_id: int) -> None: ...


class SqlRuleStore(RuleStore):
    """RuleStore backed by an SQLAlchemy async session.

    An ``AsyncSession`` cannot run statements concurrently, so calls are
    serialized; callers may still ``gather`` store operations. Per-item writes
    run in a savepoint so a failed statement leaves the transaction usable.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self._lock = asyncio.Lock()

    async def list_user_rules(self, user_id: str, include_inactive: bool = False) -> list[Rule]:
        query = select(ClassificationRule).where(
            ClassificationRule.user_id == user_id,
            ClassificationRule.is_global.is_(False),
        )
        if not include_inactive:
            query = query.where(ClassificationRule.is_active.is_(True))
        query = query.order_by(ClassificationRule.match_count.desc(), ClassificationRule.id)

        async with self._lock:
            result = await self.db.execute(query)
            return [Rule.model_validate(row) for row in result.scalars().all()]

    async def list_global_rules(self) -> list[Rule]:
        async with self._lock:
            result = await self.db.execute(
                select(ClassificationRule)
                .where(
                    ClassificationRule.is_global.is_(True),
                    ClassificationRule.is_active.is_(True),
                )
                .order_by(ClassificationRule.global_vote_count.desc(), ClassificationRule.id)
            )
            return [Rule.model_validate(row) for row in result.scalars().all()]

    async def get_global_settings(self, user_id: str) -> GlobalRuleSettings:
        async with self._lock:
            row = await self._get_settings_row(user_id)
        if row is None:
            return GlobalRuleSettings()
        return GlobalRuleSettings(use_global_rules=row.use_global_rules)

    async def list_disabled_global_rule_ids(self, user_id: str) -> set[int]:
        async with self._lock:
            result = await self.db.execute(
                select(DisabledGlobalRule.rule_id).where(DisabledGlobalRule.user_id == user_id)
            )
            return set(result.scalars().all())

    async def find_rule(self, user_id: str, pattern: str, direction: AmountDirection) -> Rule | None:
        async with self._lock:
            result = await self.db.execute(
                select(ClassificationRule).where(
                    ClassificationRule.user_id == user_id,
                    ClassificationRule.pattern == pattern.upper(),
                    ClassificationRule.amount_direction == AmountDirection(direction).value,
                )
            )
            row = result.scalar_one_or_none()
        return Rule.model_validate(row) if row else None

    async def upsert_rule(self, draft: RuleDraft) -> Rule | None:
        values = draft.model_dump(mode="json")
        insert = sqlite_insert if self.db.bind.dialect.name == "sqlite" else pg_insert
        stmt = (
            insert(ClassificationRule)
            .values(**values)
            .on_conflict_do_nothing(index_elements=_RULE_UNIQUE_COLUMNS)
            .returning(ClassificationRule.id)
        )

        async with self._lock:
            async with self.db.begin_nested():
                result = await self.db.execute(stmt)
                rule_id = result.scalar_one_or_none()
            if rule_id is None:
                logger.info(
                    "rule_insert_conflict",
                    user_id=draft.user_id,
                    pattern=draft.pattern,
                    amount_direction=values["amount_direction"],
                )
                return None
            row = await self.db.get(ClassificationRule, rule_id)
            return Rule.model_validate(row)

    async def update_transaction(self, transaction_id: str, fields: dict[str, Any]) -> bool:
        async with self._lock:
            async with self.db.begin_nested():
                result = await self.db.execute(
                    update(Transaction).where(Transaction.id == transaction_id).values(**fields)
                )
        return result.rowcount > 0

    async def checkpoint(self) -> None:
        async with self._lock:
            await self.db.commit()

    async def get_rule(self, rule_id: int) -> Rule | None:
        async with self._lock:
            row = await self.db.get(ClassificationRule, rule_id, populate_existing=True)
        return Rule.model_validate(row) if row else None

    async def update_rule(self, rule_id: int, fields: dict[str, Any]) -> Rule | None:
        async with self._lock:
            row = await self.db.get(ClassificationRule, rule_id)
            if row is None:
                return None

            pattern = fields.get("pattern", row.pattern)
            direction = fields.get("amount_direction", row.amount_direction)
            clash = await self.db.execute(
                select(ClassificationRule.id).where(
                    ClassificationRule.user_id == row.user_id,
                    ClassificationRule.pattern == pattern,
                    ClassificationRule.amount_direction == direction,
                    ClassificationRule.id != rule_id,
                )
            )
            if clash.first() is not None:
                logger.info("rule_update_conflict", rule_id=rule_id, pattern=pattern)
                return None

            for key, value in fields.items():
                setattr(row, key, value)
            await self.db.flush()
            await self.db.refresh(row)
            return Rule.model_validate(row)

    async def delete_rule(self, rule_id: int) -> None:
        async with self._lock:
            await self.db.execute(delete(DisabledGlobalRule).where(DisabledGlobalRule.rule_id == rule_id))
            await self.db.execute(delete(ClassificationRule).where(ClassificationRule.id == rule_id))

    async def increment_match_count(self, rule_id: int, by: int = 1) -> None:
        async with self._lock:
            await self.db.execute(
                update(ClassificationRule)
                .where(ClassificationRule.id == rule_id)
                .values(match_count=ClassificationRule.match_count + by)
                .execution_options(synchronize_session="fetch")
            )

    async def set_global_settings(self, user_id: str, use_global_rules: bool) -> GlobalRuleSettings:
        async with self._lock:
            row = await self._get_settings_row(user_id)
            if row is None:
                row = UserGlobalRuleSettings(user_id=user_id, use_global_rules=use_global_rules)
                self.db.add(row)
            else:
                row.use_global_rules = use_global_rules
            await self.db.flush()
        return GlobalRuleSettings(use_global_rules=use_global_rules)

    async def disable_global_rule(self, user_id: str, rule_id: int) -> None:
        insert = sqlite_insert if self.db.bind.dialect.name == "sqlite" else pg_insert
        async with self._lock:
            await self.db.execute(
                insert(DisabledGlobalRule)
                .values(user_id=user_id, rule_id=rule_id)
                .on_conflict_do_nothing(index_elements=["user_id", "rule_id"])
            )

    async def enable_global_rule(self, user_id: str, rule_id: int) -> None:
        async with self._lock:
            await self.db.execute(
                delete(DisabledGlobalRule).where(
                    DisabledGlobalRule.user_id == user_id,
                    DisabledGlobalRule.rule_id == rule_id,
                )
            )

    # ── Helpers ─────────────────────────────────────

    async def _get_settings_row(self, user_id: str) -> UserGlobalRuleSettings | None:
        result = await self.db.execute(
            select(UserGlobalRuleSettings).where(UserGlobalRuleSettings.user_id == user_id)
        )
        return result.scalar_one_or_none()
