"""Repository for DailyRecord database operations."""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from lifeos.database.store import Store, DAILY_RECORDS
from lifeos.models.daily_record import DailyRecord


class DailyRecordRepository:
    def __init__(self, db: Session):
        self.db = db
        self.store = Store(db)

    def get_by_date(self, day: date) -> Optional[DailyRecord]:
        return self.store.get(DAILY_RECORDS, day)

    def upsert(self, record: DailyRecord) -> DailyRecord:
        self.store.put(DAILY_RECORDS, record)
        return record

    def delete(self, day: date) -> bool:
        return self.store.delete(DAILY_RECORDS, day)

    def get_all(self) -> List[DailyRecord]:
        return self.store.get_all(DAILY_RECORDS)

    def get_by_date_range(self, start: date, end: date) -> List[DailyRecord]:
        return self.store.get_range_by_index(DAILY_RECORDS, "by-date", start, end)

    def exists(self, day: date) -> bool:
        return self.get_by_date(day) is not None
