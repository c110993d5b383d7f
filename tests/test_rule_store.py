"""SqlRuleStore tests against an in-memory SQLite database."""

import asyncio
import datetime
import typing

import pytest
from sqlalchemy import Date
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taxsort.models import Base, Transaction
from taxsort.models.classification_rule import GLOBAL_OWNER
from taxsort.schemas.classification_rule import AmountDirection, PatternType, RuleDraft, RuleSource
from taxsort.services.rule_store import SqlRuleStore

USER_ID = "user-1"


@pytest.fixture
async def db_session():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def sql_store(db_session):
    return SqlRuleStore(db_session)


def draft(pattern="ACME", **fields) -> RuleDraft:
    fields.setdefault("user_id", USER_ID)
    fields.setdefault("category", "Office Expenses")
    return RuleDraft(pattern=pattern, **fields)


@pytest.mark.asyncio
async def test_upsert_returns_stored_rule(sql_store):
    rule = await sql_store.upsert_rule(
        draft("acme", pattern_type=PatternType.STARTS_WITH, amount_min=10, amount_max=99.5)
    )

    assert rule.id is not None
    assert rule.pattern == "ACME"
    assert rule.pattern_type == PatternType.STARTS_WITH
    assert rule.amount_direction == AmountDirection.ANY
    assert rule.amount_max == 99.5
    assert rule.is_active is True
    assert rule.match_count == 0
    assert rule.created_at is not None


@pytest.mark.asyncio
async def test_upsert_conflict_is_a_no_op(sql_store):
    first = await sql_store.upsert_rule(draft(category="Advertising"))
    second = await sql_store.upsert_rule(draft(category="Travel"))

    assert second is None
    assert (await sql_store.get_rule(first.id)).category == "Advertising"


@pytest.mark.asyncio
async def test_concurrent_upserts_store_one_rule(sql_store):
    results = await asyncio.gather(*(sql_store.upsert_rule(draft()) for _ in range(3)))

    assert sum(r is not None for r in results) == 1
    assert len(await sql_store.list_user_rules(USER_ID)) == 1


@pytest.mark.asyncio
async def test_direction_is_part_of_the_key(sql_store):
    await sql_store.upsert_rule(draft(amount_direction=AmountDirection.NEGATIVE))
    positive = await sql_store.upsert_rule(draft(amount_direction=AmountDirection.POSITIVE, category="Other Income"))

    assert positive is not None
    found = await sql_store.find_rule(USER_ID, "acme", AmountDirection.POSITIVE)
    assert found.id == positive.id
    assert await sql_store.find_rule(USER_ID, "ACME", AmountDirection.ANY) is None


@pytest.mark.asyncio
async def test_user_rules_ordered_by_usage(sql_store):
    first = await sql_store.upsert_rule(draft("FIRST"))
    second = await sql_store.upsert_rule(draft("SECOND"))
    await sql_store.increment_match_count(second.id, by=3)

    rules = await sql_store.list_user_rules(USER_ID)

    assert [r.id for r in rules] == [second.id, first.id]
    assert (await sql_store.get_rule(second.id)).match_count == 3


@pytest.mark.asyncio
async def test_inactive_and_global_rules_are_separated(sql_store):
    active = await sql_store.upsert_rule(draft("ACTIVE"))
    inactive = await sql_store.upsert_rule(draft("INACTIVE"))
    await sql_store.update_rule(inactive.id, {"is_active": False})
    global_rule = await sql_store.upsert_rule(
        draft("STARBUCKS", user_id=GLOBAL_OWNER, is_global=True, source=RuleSource.SYSTEM, category="Meals")
    )

    assert [r.id for r in await sql_store.list_user_rules(USER_ID)] == [active.id]
    assert {r.id for r in await sql_store.list_user_rules(USER_ID, include_inactive=True)} == {
        active.id,
        inactive.id,
    }
    assert [r.id for r in await sql_store.list_global_rules()] == [global_rule.id]


@pytest.mark.asyncio
async def test_update_rule_rejects_key_collision(sql_store):
    await sql_store.upsert_rule(draft("ACME"))
    other = await sql_store.upsert_rule(draft("BETA"))

    assert await sql_store.update_rule(other.id, {"pattern": "ACME"}) is None

    updated = await sql_store.update_rule(other.id, {"pattern": "GAMMA", "pattern_type": "exact"})
    assert updated.pattern == "GAMMA"
    assert updated.pattern_type == PatternType.EXACT


@pytest.mark.asyncio
async def test_global_settings_and_opt_outs(sql_store):
    rule = await sql_store.upsert_rule(
        draft("STARBUCKS", user_id=GLOBAL_OWNER, is_global=True, category="Meals")
    )

    assert (await sql_store.get_global_settings(USER_ID)).use_global_rules is True
    await sql_store.set_global_settings(USER_ID, False)
    assert (await sql_store.get_global_settings(USER_ID)).use_global_rules is False
    await sql_store.set_global_settings(USER_ID, True)
    assert (await sql_store.get_global_settings(USER_ID)).use_global_rules is True

    await sql_store.disable_global_rule(USER_ID, rule.id)
    await sql_store.disable_global_rule(USER_ID, rule.id)
    assert await sql_store.list_disabled_global_rule_ids(USER_ID) == {rule.id}
    assert await sql_store.list_disabled_global_rule_ids("someone-else") == set()

    await sql_store.enable_global_rule(USER_ID, rule.id)
    assert await sql_store.list_disabled_global_rule_ids(USER_ID) == set()


@pytest.mark.asyncio
async def test_delete_rule_clears_opt_outs(sql_store):
    rule = await sql_store.upsert_rule(
        draft("STARBUCKS", user_id=GLOBAL_OWNER, is_global=True, category="Meals")
    )
    await sql_store.disable_global_rule(USER_ID, rule.id)

    await sql_store.delete_rule(rule.id)

    assert await sql_store.get_rule(rule.id) is None
    assert await sql_store.list_disabled_global_rule_ids(USER_ID) == set()


@pytest.mark.asyncio
async def test_update_transaction(sql_store, db_session):
    db_session.add(Transaction(id="t1", user_id=USER_ID, description="BLIMP CO", amount=-250.0))
    await db_session.flush()

    updated = await sql_store.update_transaction(
        "t1",
        {"category": "Advertising", "classification_source": "gemini_api", "classification_confidence": 0.9},
    )
    missing = await sql_store.update_transaction("nope", {"category": "Advertising"})

    assert updated is True
    assert missing is False
    row = await db_session.get(Transaction, "t1", populate_existing=True)
    assert row.category == "Advertising"
    assert row.classification_confidence == 0.9


@pytest.mark.asyncio
async def test_failed_write_does_not_lose_later_writes(sql_store, db_session):
    db_session.add_all([
        Transaction(id="t1", user_id=USER_ID, description="BLIMP CO", amount=-250.0),
        Transaction(id="t2", user_id=USER_ID, description="CORNER BISTRO", amount=-64.2),
    ])
    await db_session.flush()

    with pytest.raises(IntegrityError):
        await sql_store.update_transaction("t1", {"category": "Advertising", "amount": None})
    assert await sql_store.update_transaction("t2", {"category": "Meals"}) is True
    rule = await sql_store.upsert_rule(draft("CORNER BISTRO", category="Meals"))
    await sql_store.checkpoint()

    assert rule is not None
    first = await db_session.get(Transaction, "t1", populate_existing=True)
    second = await db_session.get(Transaction, "t2", populate_existing=True)
    assert first.category is None
    assert first.amount == -250.0
    assert second.category == "Meals"
    assert await sql_store.find_rule(USER_ID, "CORNER BISTRO", AmountDirection.ANY) is not None


@pytest.mark.asyncio
async def test_transaction_date_column(db_session):
    assert typing.get_args(Transaction.__annotations__["date"]) == (datetime.date | None,)
    assert isinstance(Transaction.__table__.c.date.type, Date)

    db_session.add(Transaction(id="t1", user_id=USER_ID, amount=-5.0, date=datetime.date(2024, 3, 1)))
    await db_session.flush()

    row = await db_session.get(Transaction, "t1", populate_existing=True)
    assert row.date == datetime.date(2024, 3, 1)
