"""Classification pipeline schemas: results, stats, AI wire format and batch progress."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from taxsort.schemas.transaction import TransactionIn


class ClassificationSource(str, Enum):
    USER_RULE = "user_rule"
    DEFAULT_VENDOR = "default_vendor"
    GEMINI_API = "gemini_api"
    MANUAL = "manual"
    UNCLASSIFIED = "unclassified"


class ClassificationResult(BaseModel):
    category: str | None = None
    subcategory: str | None = None
    vendor: str | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    source: ClassificationSource = ClassificationSource.UNCLASSIFIED
    needs_review: bool = True
    rule_id: int | None = None


class ClassifiedTransaction(BaseModel):
    transaction: TransactionIn
    classification: ClassificationResult


class ClassificationStats(BaseModel):
    total: int = 0
    classified_by_user_rules: int = 0
    classified_by_default_vendors: int = 0
    classified_by_ai: int = 0
    unclassified: int = 0


class ClassificationResponse(BaseModel):
    results: list[ClassifiedTransaction]
    stats: ClassificationStats
    needs_manual_review: list[ClassifiedTransaction]


class ClassifyRequest(BaseModel):
    transactions: list[TransactionIn]
    skip_ai: bool = False
    save_rules: bool = True


# ── AI service wire format ─────────────────────────


class AIRequestItem(BaseModel):
    id: str
    description: str
    amount: float
    type: Literal["CREDIT", "DEBIT"]


class AIRequest(BaseModel):
    transactions: list[AIRequestItem]
    user_id: str


class AIResultItem(BaseModel):
    id: str
    category: str | None = None
    subcategory: str | None = None
    vendor: str | None = None
    confidence: float = 0.5
    reasoning: str | None = None

    model_config = {"coerce_numbers_to_str": True}


class AIResponse(BaseModel):
    success: bool
    results: list[AIResultItem] = []
    error: str | None = None


# ── Batch run ──────────────────────────────────────


class BatchProgress(BaseModel):
    """Immutable snapshot of a batch classification run."""

    is_running: bool = False
    current_batch: int = 0
    total_batches: int = 0
    classified: int = 0
    failed: int = 0
    rules_created: int = 0
    rejected: int = 0

    model_config = {"frozen": True}


class BatchRunResult(BaseModel):
    progress: BatchProgress
    results: list[AIResultItem]
    cancelled: bool = False


class AIBatchRequest(BaseModel):
    transactions: list[TransactionIn]
    save_rules: bool = True
