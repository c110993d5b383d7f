"""Batched AI classification tests: batching, failures, progress and rule learning."""

import pydantic
import pytest

from taxsort.core.exceptions import ClassificationServiceError, ValidationError
from taxsort.schemas.classification import AIResponse, AIResultItem
from taxsort.schemas.classification_rule import AmountDirection, PatternType, RuleSource
from taxsort.schemas.transaction import TransactionIn
from taxsort.services.batch_classifier import BatchClassifier, is_ambiguous_vendor, request_type

USER_ID = "user-1"


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def txn(txn_id, amount=-10.0, description="ACME SUPPLY", **fields) -> TransactionIn:
    return TransactionIn(id=txn_id, amount=amount, description=description, **fields)


def answer_all(category="Office Expenses", vendor=None, confidence=0.9):
    def responder(request):
        return AIResponse(
            success=True,
            results=[
                AIResultItem(id=t.id, category=category, vendor=vendor, confidence=confidence)
                for t in request.transactions
            ],
        )

    return responder


def answer_by_id(answers: dict[str, dict]):
    def responder(request):
        return AIResponse(
            success=True,
            results=[AIResultItem(id=t.id, **answers[t.id]) for t in request.transactions if t.id in answers],
        )

    return responder


def make_classifier(store, ai_client, **kwargs) -> BatchClassifier:
    kwargs.setdefault("batch_size", 200)
    kwargs.setdefault("batch_delay", 0)
    kwargs.setdefault("min_rule_confidence", 0.75)
    kwargs.setdefault("sleep", SleepRecorder())
    return BatchClassifier(store, ai_client, **kwargs)


# ── Batching ───────────────────────────────────────


@pytest.mark.asyncio
async def test_thousand_transactions_run_in_five_batches_with_four_pauses(store, ai_client):
    ai_client.responder = answer_all()
    sleep = SleepRecorder()
    classifier = make_classifier(store, ai_client, batch_size=200, batch_delay=4.5, sleep=sleep)

    result = await classifier.run([txn(f"t{i}") for i in range(1000)], USER_ID)

    assert [len(r.transactions) for r in ai_client.requests] == [200] * 5
    assert sleep.delays == [4.5] * 4
    assert result.progress.total_batches == 5
    assert result.progress.current_batch == 5
    assert result.progress.classified == 1000
    assert result.progress.failed == 0
    assert result.progress.is_running is False
    assert len(result.results) == 1000
    assert store.calls["checkpoint"] == 5


@pytest.mark.asyncio
async def test_request_carries_text_amount_and_direction(store, ai_client):
    classifier = make_classifier(store, ai_client)

    await classifier.run(
        [txn("t1", -12.5, description=None, payee="Acme"), txn("t2", 40.0, description="CLIENT PAYMENT")],
        USER_ID,
    )

    request = ai_client.requests[0]
    assert request.user_id == USER_ID
    assert [(t.id, t.description, t.amount, t.type) for t in request.transactions] == [
        ("t1", "Acme", -12.5, "DEBIT"),
        ("t2", "CLIENT PAYMENT", 40.0, "CREDIT"),
    ]


def test_request_type_prefers_explicit_tag():
    assert request_type(txn("t1", -5, type="income")) == "CREDIT"
    assert request_type(txn("t2", 5, type="expense")) == "DEBIT"
    assert request_type(txn("t3", 0)) == "CREDIT"
    assert request_type(txn("t4", -1)) == "DEBIT"


@pytest.mark.asyncio
async def test_failed_batch_does_not_stop_the_run(store, ai_client):
    def responder(request):
        if request.transactions[0].id == "t2":
            return ClassificationServiceError("rate limited")
        return answer_all()(request)

    ai_client.responder = responder
    classifier = make_classifier(store, ai_client, batch_size=2)

    result = await classifier.run([txn(f"t{i}") for i in range(6)], USER_ID)

    assert len(ai_client.requests) == 3
    assert result.progress.classified == 4
    assert result.progress.failed == 2
    assert {r.id for r in result.results} == {"t0", "t1", "t4", "t5"}


@pytest.mark.asyncio
async def test_unsuccessful_response_fails_the_batch(store, ai_client):
    ai_client.responder = lambda request: AIResponse(success=False, error="quota exceeded")
    classifier = make_classifier(store, ai_client)

    result = await classifier.run([txn("t1"), txn("t2")], USER_ID)

    assert result.progress.failed == 2
    assert result.progress.classified == 0
    assert store.transactions == {}


@pytest.mark.asyncio
async def test_run_requires_user_and_transactions(store, ai_client):
    classifier = make_classifier(store, ai_client)

    with pytest.raises(ValidationError):
        await classifier.run([], USER_ID)
    with pytest.raises(ValidationError):
        await classifier.run([txn("t1")], "")
    assert ai_client.requests == []


# ── Validation and write-back ──────────────────────


@pytest.mark.asyncio
async def test_unknown_category_is_rejected(store, ai_client):
    ai_client.responder = answer_by_id({
        "t1": {"category": "SPACESHIP_FUEL", "confidence": 0.9},
        "t2": {"category": "OFFICE_EXPENSES", "confidence": 0.9},
    })
    classifier = make_classifier(store, ai_client)

    result = await classifier.run([txn("t1"), txn("t2")], USER_ID)

    assert result.progress.rejected == 1
    assert result.progress.classified == 1
    assert "t1" not in store.transactions
    assert store.transactions["t2"]["category"] == "Office Expenses"


@pytest.mark.asyncio
async def test_write_back_fields(store, ai_client):
    ai_client.responder = answer_by_id({
        "t1": {"category": "Meals", "subcategory": "Client Lunch", "vendor": "Bistro", "confidence": 0.7},
    })
    classifier = make_classifier(store, ai_client)

    await classifier.run([txn("t1")], USER_ID, save_rules=False)

    assert store.transactions["t1"] == {
        "category": "Meals",
        "subcategory": "Client Lunch",
        "vendor_name": "Bistro",
        "classification_source": "gemini_api",
        "classification_confidence": 0.7,
    }


@pytest.mark.asyncio
async def test_neutral_category_marks_transfer(store, ai_client):
    ai_client.responder = answer_all(category="TRANSFER_BETWEEN_ACCOUNTS")
    classifier = make_classifier(store, ai_client)

    await classifier.run([txn("t1", 500.0, description="ONLINE TRANSFER FROM SAVINGS")], USER_ID)

    assert store.transactions["t1"]["category"] == "Transfer Between Accounts"
    assert store.transactions["t1"]["type"] == "transfer"


@pytest.mark.asyncio
async def test_write_back_failure_counts_as_failed(store, ai_client):
    store.failing_transactions.add("t1")
    ai_client.responder = answer_all()
    classifier = make_classifier(store, ai_client)

    result = await classifier.run([txn("t1"), txn("t2")], USER_ID)

    assert result.progress.failed == 1
    assert result.progress.classified == 1
    assert [r.id for r in result.results] == ["t2"]


@pytest.mark.asyncio
async def test_duplicate_and_foreign_result_ids_are_ignored(store, ai_client):
    ai_client.responder = lambda request: AIResponse(
        success=True,
        results=[
            AIResultItem(id="t1", category="Meals", confidence=0.9),
            AIResultItem(id="t1", category="Travel", confidence=0.9),
            AIResultItem(id="ghost", category="Meals", confidence=0.9),
        ],
    )
    classifier = make_classifier(store, ai_client)

    result = await classifier.run([txn("t1")], USER_ID)

    assert result.progress.classified == 1
    assert store.transactions["t1"]["category"] == "Meals"
    assert list(store.transactions) == ["t1"]


@pytest.mark.asyncio
async def test_confidence_is_clamped(store, ai_client):
    ai_client.responder = answer_all(confidence=1.7)
    classifier = make_classifier(store, ai_client)

    result = await classifier.run([txn("t1")], USER_ID, save_rules=False)

    assert result.results[0].confidence == 1.0


# ── Progress and cancellation ──────────────────────


@pytest.mark.asyncio
async def test_progress_snapshots(store, ai_client):
    ai_client.responder = answer_all()
    snapshots = []
    classifier = make_classifier(store, ai_client, batch_size=2, on_progress=snapshots.append)

    await classifier.run([txn(f"t{i}") for i in range(5)], USER_ID)

    first, last = snapshots[0], snapshots[-1]
    assert first.is_running is True
    assert first.total_batches == 3
    assert first.current_batch == 0
    assert last.is_running is False
    assert last.classified == 5
    assert [s.current_batch for s in snapshots] == sorted(s.current_batch for s in snapshots)
    assert first.classified == 0
    assert classifier.progress is last

    with pytest.raises(pydantic.ValidationError):
        last.classified = 0


@pytest.mark.asyncio
async def test_cancel_stops_before_next_batch(store, ai_client):
    ai_client.responder = answer_all()

    def on_progress(progress):
        if progress.current_batch == 1 and progress.classified:
            classifier.cancel()

    sleep = SleepRecorder()
    classifier = make_classifier(
        store, ai_client, batch_size=2, batch_delay=4.5, sleep=sleep, on_progress=on_progress
    )

    result = await classifier.run([txn(f"t{i}") for i in range(6)], USER_ID)

    assert result.cancelled is True
    assert sleep.delays == []
    assert len(ai_client.requests) == 1
    assert result.progress.classified == 2
    assert result.progress.is_running is False


@pytest.mark.asyncio
async def test_cancel_during_pause_skips_remaining_batches(store, ai_client):
    ai_client.responder = answer_all()

    async def sleep(seconds):
        classifier.cancel()

    classifier = make_classifier(store, ai_client, batch_size=2, sleep=sleep)

    result = await classifier.run([txn(f"t{i}") for i in range(4)], USER_ID)

    assert result.cancelled is True
    assert len(ai_client.requests) == 1
    assert store.calls["checkpoint"] == 1


@pytest.mark.asyncio
async def test_cancel_while_idle_is_ignored(store, ai_client):
    ai_client.responder = answer_all()
    classifier = make_classifier(store, ai_client, batch_size=2)

    classifier.cancel()
    result = await classifier.run([txn(f"t{i}") for i in range(4)], USER_ID)

    assert result.cancelled is False
    assert len(ai_client.requests) == 2


# ── Rule learning ──────────────────────────────────


@pytest.mark.asyncio
async def test_same_vendor_in_both_directions_learns_two_rules(store, ai_client):
    ai_client.responder = answer_by_id({
        "t1": {"vendor": "Acme", "category": "Office Expenses", "confidence": 0.8},
        "t2": {"vendor": "Acme", "category": "Other Income", "confidence": 0.9},
    })
    classifier = make_classifier(store, ai_client)

    result = await classifier.run(
        [txn("t1", -150.0, "ACME SUPPLY"), txn("t2", 300.0, "ACME PAYMENT")], USER_ID
    )

    assert result.progress.rules_created == 2
    expense_rule = await store.find_rule(USER_ID, "ACME", AmountDirection.NEGATIVE)
    income_rule = await store.find_rule(USER_ID, "ACME", AmountDirection.POSITIVE)
    assert expense_rule.category == "Office Expenses"
    assert income_rule.category == "Other Income"
    assert expense_rule.pattern_type == PatternType.CONTAINS
    assert expense_rule.source == RuleSource.GEMINI_API
    assert expense_rule.vendor_name == "Acme"


@pytest.mark.asyncio
async def test_ambiguous_vendor_never_learns_a_rule(store, ai_client):
    ai_client.responder = answer_all(vendor="WALMART", confidence=0.9)
    classifier = make_classifier(store, ai_client)

    result = await classifier.run([txn("t1", -80.0, "WALMART SUPERCENTER")], USER_ID)

    assert result.progress.classified == 1
    assert result.progress.rules_created == 0
    assert store.rules == {}


@pytest.mark.asyncio
async def test_low_confidence_or_missing_vendor_learns_nothing(store, ai_client):
    ai_client.responder = answer_by_id({
        "t1": {"vendor": "Acme", "category": "Office Expenses", "confidence": 0.6},
        "t2": {"vendor": None, "category": "Office Expenses", "confidence": 0.95},
    })
    classifier = make_classifier(store, ai_client)

    result = await classifier.run([txn("t1"), txn("t2")], USER_ID)

    assert result.progress.rules_created == 0


@pytest.mark.asyncio
async def test_existing_rule_is_not_duplicated(store, ai_client):
    store.add_rule(user_id=USER_ID, pattern="ACME", amount_direction=AmountDirection.NEGATIVE)
    ai_client.responder = answer_all(vendor="Acme", confidence=0.9)
    classifier = make_classifier(store, ai_client)

    result = await classifier.run([txn("t1")], USER_ID)

    assert result.progress.rules_created == 0
    assert len(store.rules) == 1


@pytest.mark.asyncio
async def test_most_confident_result_wins_per_vendor(store, ai_client):
    ai_client.responder = answer_by_id({
        "t1": {"vendor": "Acme", "category": "Office Expenses", "confidence": 0.8},
        "t2": {"vendor": "acme", "category": "SUPPLIES", "confidence": 0.95},
    })
    classifier = make_classifier(store, ai_client)

    result = await classifier.run([txn("t1"), txn("t2")], USER_ID)

    assert result.progress.rules_created == 1
    rule = await store.find_rule(USER_ID, "ACME", AmountDirection.NEGATIVE)
    assert rule.category == "Supplies (Not Inventory)"


@pytest.mark.asyncio
async def test_save_rules_off_learns_nothing(store, ai_client):
    ai_client.responder = answer_all(vendor="Acme", confidence=0.9)
    classifier = make_classifier(store, ai_client)

    result = await classifier.run([txn("t1")], USER_ID, save_rules=False)

    assert result.progress.rules_created == 0
    assert store.rules == {}


@pytest.mark.parametrize(
    "vendor, expected",
    [
        ("WALMART", True),
        ("Walmart Supercenter", True),
        ("SHELL", True),
        ("BP", True),
        ("SHELLFISH SHACK", False),
        ("TARGETED ADS", False),
        ("BPX ENERGY", False),
    ],
)
def test_is_ambiguous_vendor(vendor, expected):
    assert is_ambiguous_vendor(vendor) is expected
