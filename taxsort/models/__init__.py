"""SQLAlchemy models."""

from taxsort.models.base import Base
from taxsort.models.classification_rule import (
    ClassificationRule,
    DisabledGlobalRule,
    UserGlobalRuleSettings,
)
from taxsort.models.transaction import Transaction

__all__ = [
    "Base",
    "ClassificationRule",
    "UserGlobalRuleSettings",
    "DisabledGlobalRule",
    "Transaction",
]
