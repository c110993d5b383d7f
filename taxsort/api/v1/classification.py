"""Classification API routes."""

from fastapi import APIRouter, Depends

from taxsort.api.deps import (
    get_batch_classifier,
    get_batch_runs,
    get_current_user_id,
    get_rule_cache,
    get_rule_store,
)
from taxsort.core.exceptions import ConflictError
from taxsort.schemas.classification import (
    AIBatchRequest,
    BatchProgress,
    BatchRunResult,
    ClassificationResponse,
    ClassifyRequest,
)
from taxsort.services.batch_classifier import BatchClassifier
from taxsort.services.classification_service import ClassificationService
from taxsort.services.rule_cache import RuleCache
from taxsort.services.rule_store import RuleStore

router = APIRouter()


def _register_run(runs: dict[str, BatchClassifier], user_id: str, batch_classifier: BatchClassifier) -> None:
    current = runs.get(user_id)
    if current is not None and current.progress.is_running:
        raise ConflictError("A classification run is already in progress")
    runs[user_id] = batch_classifier


@router.post("/classify", response_model=ClassificationResponse)
async def classify_transactions(
    data: ClassifyRequest,
    user_id: str = Depends(get_current_user_id),
    store: RuleStore = Depends(get_rule_store),
    cache: RuleCache = Depends(get_rule_cache),
    batch_classifier: BatchClassifier = Depends(get_batch_classifier),
    runs: dict[str, BatchClassifier] = Depends(get_batch_runs),
):
    """Classify transactions: user rules, vendor table, then AI for the rest."""
    if not data.skip_ai:
        _register_run(runs, user_id, batch_classifier)
    service = ClassificationService(store, cache, batch_classifier)
    return await service.classify(
        data.transactions,
        user_id,
        skip_ai=data.skip_ai,
        save_rules=data.save_rules,
    )


@router.post("/ai-batch", response_model=BatchRunResult)
async def run_ai_batch(
    data: AIBatchRequest,
    user_id: str = Depends(get_current_user_id),
    cache: RuleCache = Depends(get_rule_cache),
    batch_classifier: BatchClassifier = Depends(get_batch_classifier),
    runs: dict[str, BatchClassifier] = Depends(get_batch_runs),
):
    """Send transactions straight to the AI classifier and write results back."""
    _register_run(runs, user_id, batch_classifier)
    result = await batch_classifier.run(data.transactions, user_id, save_rules=data.save_rules)
    if result.progress.rules_created:
        cache.invalidate(user_id)
    return result


@router.get("/ai-batch/progress", response_model=BatchProgress)
async def get_ai_batch_progress(
    user_id: str = Depends(get_current_user_id),
    runs: dict[str, BatchClassifier] = Depends(get_batch_runs),
):
    """Progress of the caller's current or most recent AI run."""
    current = runs.get(user_id)
    return current.progress if current is not None else BatchProgress()


@router.post("/ai-batch/cancel", response_model=BatchProgress)
async def cancel_ai_batch(
    user_id: str = Depends(get_current_user_id),
    runs: dict[str, BatchClassifier] = Depends(get_batch_runs),
):
    """Stop the caller's AI run before its next batch. Ignored when nothing is running."""
    current = runs.get(user_id)
    if current is None:
        return BatchProgress()
    current.cancel()
    return current.progress
