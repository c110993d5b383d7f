"""Transaction classification pipeline.

Three layers, first hit wins:

1. the user's rules (own rules, then global rules in effect for the user),
2. the built-in vendor table,
3. the external AI classifier, for whatever is still unclassified.

Anything no layer can place is flagged for manual review.
"""

from collections import Counter
from collections.abc import Sequence

import structlog

from taxsort.config import settings
from taxsort.core.exceptions import ValidationError
from taxsort.schemas.classification import (
    ClassificationResponse,
    ClassificationResult,
    ClassificationSource,
    ClassificationStats,
    ClassifiedTransaction,
)
from taxsort.schemas.classification_rule import Rule
from taxsort.schemas.transaction import TransactionIn
from taxsort.services.batch_classifier import BatchClassifier
from taxsort.services.description_normalizer import clean_description, extract_vendor
from taxsort.services.rule_cache import RuleCache
from taxsort.services.rule_matcher import match_default_vendors, match_user_rules
from taxsort.services.rule_service import RuleService
from taxsort.services.rule_store import RuleStore

logger = structlog.get_logger()


class ClassificationService:
    def __init__(
        self,
        store: RuleStore,
        cache: RuleCache,
        batch_classifier: BatchClassifier | None = None,
    ):
        self.store = store
        self.cache = cache
        self.rules = RuleService(store, cache)
        self.batch_classifier = batch_classifier

    # ── Public API ─────────────────────────────────────

    async def classify(
        self,
        transactions: Sequence[TransactionIn],
        user_id: str,
        skip_ai: bool = False,
        save_rules: bool = True,
    ) -> ClassificationResponse:
        """Classify transactions locally, then send the leftovers to the AI classifier."""
        if not user_id:
            raise ValidationError("user_id is required")
        if not transactions:
            raise ValidationError("No transactions to classify")

        rule_set = await self.rules.get_rule_set(user_id)
        rules = rule_set.rules
        results = [
            ClassifiedTransaction(transaction=t, classification=self.classify_one(t, rules))
            for t in transactions
        ]

        local_stats = _stats(results)
        logger.info(
            "local_classification_done",
            user_id=user_id,
            total=local_stats.total,
            by_user_rules=local_stats.classified_by_user_rules,
            by_default_vendors=local_stats.classified_by_default_vendors,
            unclassified=local_stats.unclassified,
        )

        unclassified = [r.transaction for r in results if _is_unclassified(r)]
        if skip_ai or not unclassified or self.batch_classifier is None:
            return _response(results)

        run = await self.batch_classifier.run(unclassified, user_id, save_rules=save_rules)
        if run.progress.rules_created:
            self.cache.invalidate(user_id)

        ai_results = {item.id: item for item in run.results}
        merged = []
        for result in results:
            item = ai_results.get(result.transaction.id) if _is_unclassified(result) else None
            if item is not None:
                result = ClassifiedTransaction(
                    transaction=result.transaction,
                    classification=ClassificationResult(
                        category=item.category,
                        subcategory=item.subcategory,
                        vendor=item.vendor or result.classification.vendor,
                        confidence=item.confidence,
                        source=ClassificationSource.GEMINI_API,
                        needs_review=item.confidence < settings.review_threshold,
                    ),
                )
            merged.append(result)
        return _response(merged)

    @staticmethod
    def classify_one(transaction: TransactionIn, rules: Sequence[Rule]) -> ClassificationResult:
        """Run the local layers (user rules, then vendor table) on one transaction."""
        text = transaction.text
        if not text:
            return ClassificationResult(source=ClassificationSource.UNCLASSIFIED, needs_review=True)

        cleaned = clean_description(text)
        vendor = extract_vendor(cleaned)

        match = match_user_rules(
            cleaned,
            vendor,
            transaction.amount,
            rules,
            fuzzy_threshold=settings.fuzzy_threshold,
            review_threshold=settings.review_threshold,
        ) or match_default_vendors(
            cleaned,
            vendor,
            transaction.amount,
            fuzzy_threshold=settings.fuzzy_threshold,
            review_threshold=settings.review_threshold,
        )
        if match is not None:
            return match

        return ClassificationResult(
            vendor=vendor or None,
            source=ClassificationSource.UNCLASSIFIED,
            needs_review=True,
        )


# ── Helpers ─────────────────────────────────────────


def _is_unclassified(result: ClassifiedTransaction) -> bool:
    return result.classification.source == ClassificationSource.UNCLASSIFIED


def _stats(results: Sequence[ClassifiedTransaction]) -> ClassificationStats:
    by_source = Counter(r.classification.source for r in results)
    return ClassificationStats(
        total=len(results),
        classified_by_user_rules=by_source[ClassificationSource.USER_RULE],
        classified_by_default_vendors=by_source[ClassificationSource.DEFAULT_VENDOR],
        classified_by_ai=by_source[ClassificationSource.GEMINI_API],
        unclassified=by_source[ClassificationSource.UNCLASSIFIED],
    )


def _response(results: list[ClassifiedTransaction]) -> ClassificationResponse:
    return ClassificationResponse(
        results=results,
        stats=_stats(results),
        needs_manual_review=[r for r in results if r.classification.needs_review],
    )
