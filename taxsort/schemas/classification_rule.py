"""Classification rule schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class PatternType(str, Enum):
    EXACT = "exact"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"


class AmountDirection(str, Enum):
    ANY = "any"
    POSITIVE = "positive"
    NEGATIVE = "negative"


class RuleSource(str, Enum):
    MANUAL = "manual"
    GEMINI_API = "gemini_api"
    SYSTEM = "system"


class RuleCreate(BaseModel):
    pattern: str = Field(min_length=1, max_length=500)
    pattern_type: PatternType = PatternType.CONTAINS
    name: str | None = None
    vendor_name: str | None = None
    category: str = Field(min_length=1)
    subcategory: str | None = None
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    amount_direction: AmountDirection = AmountDirection.ANY
    amount_min: float | None = None
    amount_max: float | None = None

    @field_validator("pattern")
    @classmethod
    def _upper_pattern(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("pattern must not be blank")
        return value


class RuleDraft(RuleCreate):
    """A rule ready to be written to the store."""

    user_id: str
    source: RuleSource = RuleSource.MANUAL
    is_global: bool = False
    global_vote_count: int = 0


class RuleUpdate(BaseModel):
    pattern: str | None = None
    pattern_type: PatternType | None = None
    name: str | None = None
    vendor_name: str | None = None
    category: str | None = Field(default=None, min_length=1)
    subcategory: str | None = None
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    amount_direction: AmountDirection | None = None
    amount_min: float | None = None
    amount_max: float | None = None
    is_active: bool | None = None

    @field_validator(
        "pattern", "pattern_type", "category", "confidence", "amount_direction", "is_active", mode="before"
    )
    @classmethod
    def _not_null(cls, value):
        # Omit a field to leave it unchanged; these columns have no null state.
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("pattern")
    @classmethod
    def _upper_pattern(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("pattern must not be blank")
        return value


class Rule(BaseModel):
    id: int
    user_id: str
    name: str | None = None
    pattern: str
    pattern_type: PatternType = PatternType.CONTAINS
    vendor_name: str | None = None
    category: str
    subcategory: str | None = None
    confidence: float = 1.0
    amount_direction: AmountDirection = AmountDirection.ANY
    amount_min: float | None = None
    amount_max: float | None = None
    source: RuleSource = RuleSource.MANUAL
    is_active: bool = True
    is_global: bool = False
    global_vote_count: int = 0
    match_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class GlobalRuleStatus(Rule):
    is_enabled: bool


class GlobalRuleSettings(BaseModel):
    use_global_rules: bool = True


class RuleStats(BaseModel):
    total_rules: int
    total_matches: int
    rules_by_source: dict[str, int]
