"""Rule matching: user/global rules and the built-in vendor table.

Both matchers run two passes. The exact pass compares patterns literally and
short-circuits on the first hit; the fuzzy pass only runs when nothing matched
literally and ranks candidates with ``RuleIndex``. Every candidate is gated by
``rule_matches_amount`` first, so a rule never matches a transaction whose
sign or size contradicts it, however close the text is.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import lru_cache

from taxsort.schemas.classification import ClassificationResult, ClassificationSource
from taxsort.schemas.classification_rule import AmountDirection, PatternType, Rule
from taxsort.services.categories import get_category_value, is_income_category
from taxsort.services.default_vendors import DEFAULT_VENDORS, VendorEntry
from taxsort.services.rule_index import RuleIndex

USER_RULE_EXACT_CONFIDENCE = 1.0
USER_RULE_FUZZY_CONFIDENCE = 0.85
DEFAULT_VENDOR_EXACT_CONFIDENCE = 0.9
DEFAULT_VENDOR_FUZZY_CONFIDENCE = 0.75
FUZZY_THRESHOLD = 0.3
REVIEW_THRESHOLD = 0.5


def transaction_direction(amount: float) -> AmountDirection:
    """Zero counts as positive."""
    return AmountDirection.POSITIVE if amount >= 0 else AmountDirection.NEGATIVE


def rule_matches_amount(rule: Rule, amount: float) -> bool:
    """Check a rule's direction and ``[amount_min, amount_max]`` bounds against a signed amount."""
    if rule.amount_direction != AmountDirection.ANY and rule.amount_direction != transaction_direction(amount):
        return False

    magnitude = abs(amount)
    if rule.amount_min is not None and magnitude < rule.amount_min:
        return False
    if rule.amount_max is not None and magnitude > rule.amount_max:
        return False
    return True


_PATTERN_MATCHERS: dict[PatternType, Callable[[str, str], bool]] = {
    PatternType.EXACT: lambda text, pattern: text == pattern,
    PatternType.CONTAINS: lambda text, pattern: pattern in text,
    PatternType.STARTS_WITH: lambda text, pattern: text.startswith(pattern),
}


def pattern_matches(pattern_type: PatternType, text: str, pattern: str) -> bool:
    return _PATTERN_MATCHERS[pattern_type](text, pattern.upper())


def _result(
    category: str,
    subcategory: str | None,
    vendor: str | None,
    confidence: float,
    source: ClassificationSource,
    review_threshold: float,
    rule_id: int | None = None,
) -> ClassificationResult:
    confidence = round(confidence, 4)
    return ClassificationResult(
        category=category,
        subcategory=subcategory,
        vendor=vendor,
        confidence=confidence,
        source=source,
        needs_review=confidence < review_threshold,
        rule_id=rule_id,
    )


# ── User and global rules ──────────────────────────


def match_user_rules(
    cleaned: str,
    vendor: str,
    amount: float,
    rules: Sequence[Rule],
    fuzzy_threshold: float = FUZZY_THRESHOLD,
    review_threshold: float = REVIEW_THRESHOLD,
) -> ClassificationResult | None:
    """Match against rules in priority order (caller sorts them)."""
    if not cleaned or not rules:
        return None

    candidates = [r for r in rules if r.is_active and rule_matches_amount(r, amount)]

    for rule in candidates:
        if pattern_matches(rule.pattern_type, cleaned, rule.pattern):
            return _result(
                rule.category,
                rule.subcategory,
                rule.vendor_name or vendor,
                USER_RULE_EXACT_CONFIDENCE,
                ClassificationSource.USER_RULE,
                review_threshold,
                rule_id=rule.id,
            )

    if not vendor:
        return None

    index = RuleIndex(candidates, keys=lambda r: (r.pattern, r.vendor_name))
    hit = index.best(vendor, fuzzy_threshold)
    if hit is None:
        return None

    rule = hit.item
    return _result(
        rule.category,
        rule.subcategory,
        rule.vendor_name or vendor,
        USER_RULE_FUZZY_CONFIDENCE * (1 - hit.score),
        ClassificationSource.USER_RULE,
        review_threshold,
        rule_id=rule.id,
    )


# ── Built-in vendor table ──────────────────────────


@dataclass(frozen=True)
class VendorCandidate:
    pattern: str
    entry: VendorEntry
    direction: AmountDirection


def vendor_direction(entry: VendorEntry) -> AmountDirection:
    """Income categories imply money in; everything else is an expense."""
    return AmountDirection.POSITIVE if is_income_category(entry.category) else AmountDirection.NEGATIVE


@lru_cache(maxsize=None)
def _vendor_candidates(direction: AmountDirection) -> tuple[VendorCandidate, ...]:
    candidates = [
        VendorCandidate(pattern=pattern, entry=entry, direction=vendor_direction(entry))
        for pattern, entry in DEFAULT_VENDORS.items()
    ]
    candidates.sort(key=lambda c: len(c.pattern), reverse=True)
    return tuple(c for c in candidates if c.direction == direction)


@lru_cache(maxsize=None)
def _vendor_index(direction: AmountDirection) -> RuleIndex:
    return RuleIndex(_vendor_candidates(direction), keys=lambda c: (c.pattern, c.entry.vendor))


def _vendor_result(
    candidate: VendorCandidate, confidence: float, review_threshold: float
) -> ClassificationResult:
    return _result(
        get_category_value(candidate.entry.category),
        candidate.entry.subcategory,
        candidate.entry.vendor,
        confidence,
        ClassificationSource.DEFAULT_VENDOR,
        review_threshold,
    )


def match_default_vendors(
    cleaned: str,
    vendor: str,
    amount: float,
    fuzzy_threshold: float = FUZZY_THRESHOLD,
    review_threshold: float = REVIEW_THRESHOLD,
) -> ClassificationResult | None:
    """Match against the built-in vendor table, longest pattern first."""
    if not cleaned:
        return None

    direction = transaction_direction(amount)

    for candidate in _vendor_candidates(direction):
        if candidate.pattern in cleaned:
            return _vendor_result(candidate, DEFAULT_VENDOR_EXACT_CONFIDENCE, review_threshold)

    if not vendor:
        return None

    hit = _vendor_index(direction).best(vendor, fuzzy_threshold)
    if hit is None:
        return None
    return _vendor_result(
        hit.item, DEFAULT_VENDOR_FUZZY_CONFIDENCE * (1 - hit.score), review_threshold
    )
