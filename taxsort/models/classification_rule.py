"""Classification rule models: user and global rules plus per-user global settings."""

from sqlalchemy import Boolean, Float, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from taxsort.models.base import Base, TimestampMixin

GLOBAL_OWNER = "GLOBAL"


class ClassificationRule(Base, TimestampMixin):
    """A pattern -> category mapping.

    ``pattern`` is stored upper-cased. A rule only applies to transactions whose
    signed amount satisfies ``amount_direction`` and the optional
    ``amount_min``/``amount_max`` bounds (compared on the absolute amount).
    Global rules are owned by ``GLOBAL_OWNER`` and shared across users.
    """

    __tablename__ = "classification_rules"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    pattern: Mapped[str] = mapped_column(String(500), nullable=False)
    pattern_type: Mapped[str] = mapped_column(
        String(20), default="contains"
    )  # exact, contains, starts_with
    vendor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    subcategory: Mapped[str | None] = mapped_column(String(255), nullable=True)
    confidence: Mapped[float] = mapped_column(Float, default=1.0)
    amount_direction: Mapped[str] = mapped_column(
        String(10), default="any", nullable=False
    )  # any, positive, negative
    amount_min: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    amount_max: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    source: Mapped[str] = mapped_column(
        String(20), default="manual"
    )  # manual, gemini_api, system
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_global: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    global_vote_count: Mapped[int] = mapped_column(Integer, default=0)
    match_count: Mapped[int] = mapped_column(Integer, default=0)

    __table_args__ = (
        UniqueConstraint(
            "user_id", "pattern", "amount_direction",
            name="uq_classification_rules_user_pattern_direction",
        ),
    )


class UserGlobalRuleSettings(Base, TimestampMixin):
    __tablename__ = "user_global_rule_settings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    use_global_rules: Mapped[bool] = mapped_column(Boolean, default=True)


class DisabledGlobalRule(Base, TimestampMixin):
    __tablename__ = "user_disabled_global_rules"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    rule_id: Mapped[int] = mapped_column(
        ForeignKey("classification_rules.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "rule_id", name="uq_disabled_global_rules_user_rule"),
    )
