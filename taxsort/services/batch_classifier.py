"""Batched AI classification with rate limiting and rule learning.

Transactions are sent to the external service in fixed-size batches, strictly
one after another, with a pause between batches to stay under the service's
rate limit. Each step produces a new immutable ``BatchProgress`` snapshot.

A failing batch only fails its own transactions; the run continues. Results
with an unknown category are dropped. High-confidence results teach new
``contains`` rules so the same vendor is matched locally next time.
"""

import asyncio
import math
import re
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field

import structlog

from taxsort.config import settings
from taxsort.core.exceptions import ClassificationServiceError, ValidationError
from taxsort.schemas.classification import (
    AIRequest,
    AIRequestItem,
    AIResultItem,
    BatchProgress,
    BatchRunResult,
    ClassificationSource,
)
from taxsort.schemas.classification_rule import AmountDirection, PatternType, RuleDraft, RuleSource
from taxsort.schemas.transaction import TransactionIn
from taxsort.services.categories import is_neutral_category, resolve_category
from taxsort.services.classification_client import ClassificationClient
from taxsort.services.default_vendors import AMBIGUOUS_VENDORS
from taxsort.services.rule_matcher import transaction_direction
from taxsort.services.rule_store import RuleStore

logger = structlog.get_logger()

_AMBIGUOUS_VENDOR_RE = re.compile(
    "|".join(
        rf"(?<![A-Z0-9]){re.escape(name)}(?![A-Z0-9])"
        for name in sorted(AMBIGUOUS_VENDORS, key=len, reverse=True)
    )
)


def is_ambiguous_vendor(vendor: str) -> bool:
    """True if the vendor name contains an excluded vendor as a whole word."""
    return _AMBIGUOUS_VENDOR_RE.search(vendor.upper()) is not None


def request_type(transaction: TransactionIn) -> str:
    """CREDIT/DEBIT from an explicit income/expense tag, else from the sign."""
    if transaction.type == "income":
        return "CREDIT"
    if transaction.type == "expense":
        return "DEBIT"
    return "CREDIT" if transaction.amount >= 0 else "DEBIT"


@dataclass
class _BatchOutcome:
    classified: int = 0
    failed: int = 0
    rejected: int = 0
    rules_created: int = 0
    accepted: list[AIResultItem] = field(default_factory=list)


class BatchClassifier:
    """Idle -> Running(batch 1..N) -> Idle."""

    def __init__(
        self,
        store: RuleStore,
        client: ClassificationClient,
        batch_size: int | None = None,
        batch_delay: float | None = None,
        min_rule_confidence: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_progress: Callable[[BatchProgress], None] | None = None,
    ):
        self.store = store
        self.client = client
        self.batch_size = batch_size or settings.ai_batch_size
        self.batch_delay = settings.ai_batch_delay_seconds if batch_delay is None else batch_delay
        self.min_rule_confidence = (
            settings.rule_learning_min_confidence if min_rule_confidence is None else min_rule_confidence
        )
        self._sleep = sleep
        self._on_progress = on_progress
        self._cancel_requested = False
        self.progress = BatchProgress()

    def cancel(self) -> None:
        """Stop before the next batch. A batch already in flight completes."""
        if self.progress.is_running:
            self._cancel_requested = True

    async def run(
        self,
        transactions: Sequence[TransactionIn],
        user_id: str,
        save_rules: bool = True,
    ) -> BatchRunResult:
        if not user_id:
            raise ValidationError("user_id is required")
        if not transactions:
            raise ValidationError("No transactions to classify")
        if self.progress.is_running:
            raise RuntimeError("A classification run is already in progress")

        total_batches = math.ceil(len(transactions) / self.batch_size)
        self._cancel_requested = False
        progress = self._publish(BatchProgress(is_running=True, total_batches=total_batches))
        accepted: list[AIResultItem] = []
        cancelled = False

        logger.info(
            "ai_classification_started",
            user_id=user_id,
            transactions=len(transactions),
            total_batches=total_batches,
        )

        try:
            for index in range(total_batches):
                if self._cancel_requested:
                    cancelled = True
                    break
                if index > 0:
                    await self._sleep(self.batch_delay)
                    if self._cancel_requested:
                        cancelled = True
                        break

                batch = transactions[index * self.batch_size : (index + 1) * self.batch_size]
                progress = self._publish(progress.model_copy(update={"current_batch": index + 1}))

                outcome = await self._process_batch(batch, user_id, index + 1, save_rules)
                await self.store.checkpoint()
                accepted.extend(outcome.accepted)
                progress = self._publish(
                    progress.model_copy(
                        update={
                            "classified": progress.classified + outcome.classified,
                            "failed": progress.failed + outcome.failed,
                            "rejected": progress.rejected + outcome.rejected,
                            "rules_created": progress.rules_created + outcome.rules_created,
                        }
                    )
                )
        finally:
            progress = self._publish(progress.model_copy(update={"is_running": False}))
            self._cancel_requested = False

        logger.info(
            "ai_classification_finished",
            user_id=user_id,
            classified=progress.classified,
            failed=progress.failed,
            rejected=progress.rejected,
            rules_created=progress.rules_created,
            cancelled=cancelled,
        )
        return BatchRunResult(progress=progress, results=accepted, cancelled=cancelled)

    # ── Batch steps ────────────────────────────────────

    async def _process_batch(
        self,
        batch: Sequence[TransactionIn],
        user_id: str,
        batch_number: int,
        save_rules: bool,
    ) -> _BatchOutcome:
        request = AIRequest(
            transactions=[
                AIRequestItem(id=t.id, description=t.text, amount=t.amount, type=request_type(t))
                for t in batch
            ],
            user_id=user_id,
        )
        logger.info("ai_batch_started", user_id=user_id, batch=batch_number, size=len(batch))

        try:
            response = await self.client.classify(request)
            if not response.success:
                raise ClassificationServiceError(response.error or "classification service reported failure")
        except Exception as e:
            logger.error(
                "ai_classification_batch_failed",
                user_id=user_id,
                batch=batch_number,
                error=str(e),
            )
            return _BatchOutcome(failed=len(batch))

        outcome = _BatchOutcome()
        pairs = self._validate(batch, response.results, outcome)

        written = await asyncio.gather(*(self._write_back(txn, item) for txn, item in pairs))
        stored = [pair for pair, ok in zip(pairs, written) if ok]
        outcome.classified = len(stored)
        outcome.failed = len(pairs) - len(stored)
        outcome.accepted = [item for _, item in stored]

        if save_rules and stored:
            outcome.rules_created = await self._learn_rules(stored, user_id)
        return outcome

    def _validate(
        self,
        batch: Sequence[TransactionIn],
        results: Sequence[AIResultItem],
        outcome: _BatchOutcome,
    ) -> list[tuple[TransactionIn, AIResultItem]]:
        """Keep one result per known transaction id, with a canonical category."""
        by_id = {t.id: t for t in batch}
        seen: set[str] = set()
        pairs = []
        for item in results:
            txn = by_id.get(item.id)
            if txn is None or item.id in seen:
                continue
            seen.add(item.id)

            category = resolve_category(item.category)
            if category is None:
                outcome.rejected += 1
                logger.debug("ai_category_rejected", transaction_id=item.id, category=item.category)
                continue
            confidence = min(max(item.confidence, 0.0), 1.0)
            pairs.append((txn, item.model_copy(update={"category": category, "confidence": confidence})))
        return pairs

    async def _write_back(self, transaction: TransactionIn, item: AIResultItem) -> bool:
        fields = {
            "category": item.category,
            "subcategory": item.subcategory,
            "vendor_name": item.vendor,
            "classification_source": ClassificationSource.GEMINI_API.value,
            "classification_confidence": item.confidence,
        }
        if is_neutral_category(item.category):
            fields["type"] = "transfer"

        try:
            await self.store.update_transaction(transaction.id, fields)
        except Exception as e:
            logger.warning("ai_writeback_failed", transaction_id=transaction.id, error=str(e))
            return False
        return True

    async def _learn_rules(
        self,
        pairs: Sequence[tuple[TransactionIn, AIResultItem]],
        user_id: str,
    ) -> int:
        """Create ``contains`` rules from confident results, one per (vendor, direction)."""
        candidates: dict[tuple[str, AmountDirection], AIResultItem] = {}
        for txn, item in pairs:
            if item.confidence < self.min_rule_confidence or not item.vendor:
                continue
            pattern = item.vendor.strip().upper()
            if is_ambiguous_vendor(pattern):
                continue
            key = (pattern, transaction_direction(txn.amount))
            current = candidates.get(key)
            if current is None or item.confidence > current.confidence:
                candidates[key] = item

        created = 0
        for (pattern, direction), item in candidates.items():
            try:
                if await self.store.find_rule(user_id, pattern, direction) is not None:
                    continue
                rule = await self.store.upsert_rule(
                    RuleDraft(
                        user_id=user_id,
                        pattern=pattern,
                        pattern_type=PatternType.CONTAINS,
                        vendor_name=item.vendor,
                        category=item.category,
                        subcategory=item.subcategory,
                        confidence=item.confidence,
                        amount_direction=direction,
                        source=RuleSource.GEMINI_API,
                    )
                )
            except Exception as e:
                logger.warning("ai_rule_create_failed", user_id=user_id, pattern=pattern, error=str(e))
                continue

            if rule is not None:
                created += 1
                logger.info(
                    "ai_rule_created",
                    user_id=user_id,
                    rule_id=rule.id,
                    pattern=pattern,
                    amount_direction=direction.value,
                    category=rule.category,
                )
        return created

    def _publish(self, progress: BatchProgress) -> BatchProgress:
        self.progress = progress
        if self._on_progress is not None:
            self._on_progress(progress)
        return progress
