"""Finance entry model."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class FinanceEntry(BaseModel):
    """Income (positive amount) or expense (negative amount)."""

    id: str = Field(..., description="Unique entry identifier (UUID v4)")
    date: date
    title: str
    amount: float
    category: Optional[str] = None
