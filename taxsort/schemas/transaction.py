"""Transaction schemas."""

import datetime

from pydantic import BaseModel


class TransactionIn(BaseModel):
    """A transaction handed over by the import pipeline."""

    id: str
    description: str | None = None
    amount: float
    date: datetime.date | None = None
    payee: str | None = None
    type: str | None = None  # income, expense, transfer

    model_config = {"from_attributes": True, "coerce_numbers_to_str": True}

    @property
    def text(self) -> str:
        """Description, falling back to the payee."""
        return (self.description or self.payee or "").strip()
