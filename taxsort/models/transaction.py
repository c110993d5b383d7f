"""Transaction model.

Rows are written by the statement import pipeline; this service only reads
them and writes classification fields back.
"""

import datetime

from sqlalchemy import Date, Float, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from taxsort.models.base import Base, TimestampMixin


class Transaction(Base, TimestampMixin):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    payee: Mapped[str | None] = mapped_column(String(255), nullable=True)
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    type: Mapped[str | None] = mapped_column(String(20), nullable=True)  # income, expense, transfer
    category: Mapped[str | None] = mapped_column(String(255), nullable=True)
    subcategory: Mapped[str | None] = mapped_column(String(255), nullable=True)
    vendor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    classification_source: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )  # user_rule, default_vendor, gemini_api, manual
    classification_confidence: Mapped[float | None] = mapped_column(Float, nullable=True)

    __table_args__ = (
        Index("idx_transactions_user_date", "user_id", "date"),
    )
