"""Shared test fixtures."""

import itertools
import os
from collections import Counter
from typing import Any

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("GEMINI_API_KEY", "")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from taxsort.api.deps import get_batch_classifier, get_classification_client, get_rule_store  # noqa: E402
from taxsort.main import app  # noqa: E402
from taxsort.schemas.classification import AIRequest, AIResponse  # noqa: E402
from taxsort.schemas.classification_rule import (  # noqa: E402
    AmountDirection,
    GlobalRuleSettings,
    Rule,
    RuleDraft,
)
from taxsort.services.batch_classifier import BatchClassifier  # noqa: E402
from taxsort.services.classification_client import ClassificationClient  # noqa: E402
from taxsort.services.rule_cache import RuleCache  # noqa: E402
from taxsort.services.rule_store import RuleStore  # noqa: E402


class FakeRuleStore(RuleStore):
    """In-memory RuleStore with the same ordering and uniqueness rules as the SQL one."""

    def __init__(self):
        self.rules: dict[int, Rule] = {}
        self.settings: dict[str, bool] = {}
        self.disabled: set[tuple[str, int]] = set()
        self.transactions: dict[str, dict[str, Any]] = {}
        self.failing_transactions: set[str] = set()
        self.calls: Counter = Counter()
        self._ids = itertools.count(1)

    def add_rule(self, **fields) -> Rule:
        fields.setdefault("category", "Office Expenses")
        rule = Rule(id=next(self._ids), **fields)
        self.rules[rule.id] = rule
        return rule

    async def list_user_rules(self, user_id: str, include_inactive: bool = False) -> list[Rule]:
        self.calls["list_user_rules"] += 1
        rules = [
            r for r in self.rules.values()
            if r.user_id == user_id and not r.is_global and (include_inactive or r.is_active)
        ]
        return sorted(rules, key=lambda r: (-r.match_count, r.id))

    async def list_global_rules(self) -> list[Rule]:
        rules = [r for r in self.rules.values() if r.is_global and r.is_active]
        return sorted(rules, key=lambda r: (-r.global_vote_count, r.id))

    async def get_global_settings(self, user_id: str) -> GlobalRuleSettings:
        return GlobalRuleSettings(use_global_rules=self.settings.get(user_id, True))

    async def list_disabled_global_rule_ids(self, user_id: str) -> set[int]:
        return {rule_id for owner, rule_id in self.disabled if owner == user_id}

    async def find_rule(self, user_id: str, pattern: str, direction: AmountDirection) -> Rule | None:
        for rule in self.rules.values():
            if (
                rule.user_id == user_id
                and rule.pattern == pattern.upper()
                and rule.amount_direction == AmountDirection(direction)
            ):
                return rule
        return None

    async def upsert_rule(self, draft: RuleDraft) -> Rule | None:
        if await self.find_rule(draft.user_id, draft.pattern, draft.amount_direction) is not None:
            return None
        return self.add_rule(**draft.model_dump())

    async def update_transaction(self, transaction_id: str, fields: dict[str, Any]) -> bool:
        if transaction_id in self.failing_transactions:
            raise RuntimeError("database unavailable")
        self.transactions.setdefault(transaction_id, {}).update(fields)
        return True

    async def checkpoint(self) -> None:
        self.calls["checkpoint"] += 1

    async def get_rule(self, rule_id: int) -> Rule | None:
        return self.rules.get(rule_id)

    async def update_rule(self, rule_id: int, fields: dict[str, Any]) -> Rule | None:
        rule = self.rules.get(rule_id)
        if rule is None:
            return None
        updated = Rule.model_validate({**rule.model_dump(), **fields})
        clash = await self.find_rule(updated.user_id, updated.pattern, updated.amount_direction)
        if clash is not None and clash.id != rule_id:
            return None
        self.rules[rule_id] = updated
        return updated

    async def delete_rule(self, rule_id: int) -> None:
        self.rules.pop(rule_id, None)
        self.disabled = {(owner, rid) for owner, rid in self.disabled if rid != rule_id}

    async def increment_match_count(self, rule_id: int, by: int = 1) -> None:
        rule = self.rules[rule_id]
        self.rules[rule_id] = rule.model_copy(update={"match_count": rule.match_count + by})

    async def set_global_settings(self, user_id: str, use_global_rules: bool) -> GlobalRuleSettings:
        self.settings[user_id] = use_global_rules
        return GlobalRuleSettings(use_global_rules=use_global_rules)

    async def disable_global_rule(self, user_id: str, rule_id: int) -> None:
        self.disabled.add((user_id, rule_id))

    async def enable_global_rule(self, user_id: str, rule_id: int) -> None:
        self.disabled.discard((user_id, rule_id))


class FakeClassificationClient(ClassificationClient):
    """Records requests and answers with ``responder(request)``.

    A responder may return an ``AIResponse`` or an exception to raise.
    """

    def __init__(self, responder=None):
        self.requests: list[AIRequest] = []
        self.responder = responder or (lambda request: AIResponse(success=True, results=[]))

    async def classify(self, request: AIRequest) -> AIResponse:
        self.requests.append(request)
        result = self.responder(request)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def store():
    return FakeRuleStore()


@pytest.fixture
def ai_client():
    return FakeClassificationClient()


@pytest.fixture
def cache():
    return RuleCache(ttl_seconds=300)


@pytest.fixture
async def client(store, ai_client):
    """Async test client for the FastAPI app, backed by the in-memory store."""
    app.state.rule_cache = RuleCache(ttl_seconds=300)
    app.state.batch_runs = {}
    app.dependency_overrides[get_rule_store] = lambda: store
    app.dependency_overrides[get_classification_client] = lambda: ai_client
    app.dependency_overrides[get_batch_classifier] = lambda: BatchClassifier(store, ai_client, batch_delay=0)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-User-Id": "user-1"},
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
