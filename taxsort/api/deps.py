"""Shared API dependencies."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taxsort.core.database import get_db
from taxsort.core.security import get_current_user_id
from taxsort.services.batch_classifier import BatchClassifier
from taxsort.services.classification_client import ClassificationClient, get_classification_client
from taxsort.services.rule_cache import RuleCache
from taxsort.services.rule_store import RuleStore, SqlRuleStore


async def get_rule_store(db: AsyncSession = Depends(get_db)) -> RuleStore:
    return SqlRuleStore(db)


def get_rule_cache(request: Request) -> RuleCache:
    """The application-wide rule cache created in ``taxsort.main``."""
    return request.app.state.rule_cache


def get_batch_runs(request: Request) -> dict[str, BatchClassifier]:
    """Latest batch classifier per user, kept after the run ends so its final progress stays readable."""
    return request.app.state.batch_runs


def get_batch_classifier(
    store: RuleStore = Depends(get_rule_store),
    client: ClassificationClient = Depends(get_classification_client),
) -> BatchClassifier:
    return BatchClassifier(store, client)


__all__ = [
    "get_db",
    "get_current_user_id",
    "get_rule_store",
    "get_rule_cache",
    "get_classification_client",
    "get_batch_runs",
    "get_batch_classifier",
]
