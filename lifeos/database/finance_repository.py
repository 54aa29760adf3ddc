"""Repository for FinanceEntry database operations."""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from lifeos.database.store import Store, FINANCE_ENTRIES
from lifeos.models.finance import FinanceEntry

logger = logging.getLogger(__name__)


class FinanceRepository:
    def __init__(self, db: Session):
        self.db = db
        self.store = Store(db)

    def get_by_date(self, day: date) -> List[FinanceEntry]:
        return self.store.get_all_by_index(FINANCE_ENTRIES, "by-date", day)

    def get(self, entry_id: str) -> Optional[FinanceEntry]:
        return self.store.get(FINANCE_ENTRIES, entry_id)

    def create(self, entry: FinanceEntry) -> FinanceEntry:
        if self.get(entry.id) is not None:
            raise ValueError(f"Finance entry {entry.id} already exists")
        self.store.put(FINANCE_ENTRIES, entry)
        logger.debug(f"Created finance entry {entry.id} on {entry.date}: {entry.amount}")
        return entry

    def update(self, entry: FinanceEntry) -> FinanceEntry:
        if self.get(entry.id) is None:
            raise ValueError(f"Finance entry {entry.id} not found")
        self.store.put(FINANCE_ENTRIES, entry)
        return entry

    def delete(self, entry_id: str) -> bool:
        return self.store.delete(FINANCE_ENTRIES, entry_id)

    def get_all(self) -> List[FinanceEntry]:
        return self.store.get_all(FINANCE_ENTRIES)

    def get_by_date_range(self, start: date, end: date) -> List[FinanceEntry]:
        return self.store.get_range_by_index(FINANCE_ENTRIES, "by-date", start, end)

    def total_for_date(self, day: date) -> float:
        return sum(entry.amount for entry in self.get_by_date(day))

    def total_for_date_range(self, start: date, end: date) -> float:
        return sum(entry.amount for entry in self.get_by_date_range(start, end))
