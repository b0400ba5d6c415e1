# core/ledger.py

import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from habitflow.core.models import CheckRecord, ValidationError, new_id

logger = logging.getLogger(__name__)

CheckKey = Tuple[str, str]


class CheckLedger:
    """
    Журнал отметок: (habit_id, date) -> CheckRecord

    На одну пару (привычка, дата) приходится не больше одной записи.
    Порядок вставки сохраняется.
    """

    def __init__(self):
        self._records: Dict[CheckKey, CheckRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: CheckKey) -> bool:
        return key in self._records

    def get(self, habit_id: str, day: str) -> Optional[CheckRecord]:
        return self._records.get((habit_id, day))

    def add(self, habit_id: str, day: str, completed_at: Optional[datetime] = None) -> CheckRecord:
        """Добавить выполненную отметку"""
        record = CheckRecord(
            check_id=new_id(),
            habit_id=habit_id,
            date=day,
            completed=True,
            completed_at=(completed_at or datetime.now()).isoformat()
        )
        self.insert(record)
        return record

    def insert(self, record: CheckRecord) -> None:
        """Вставить готовую запись (восстановление состояния, демо-данные)"""
        key = (record.habit_id, record.date)
        if key in self._records:
            raise ValidationError(f"Дублирующая отметка {record.habit_id} за {record.date}")
        self._records[key] = record

    def remove(self, habit_id: str, day: str) -> Optional[CheckRecord]:
        return self._records.pop((habit_id, day), None)

    def toggle(self, habit_id: str, day: str, completed_at: Optional[datetime] = None) -> Tuple[bool, CheckRecord]:
        """
        Переключить отметку.

        Возвращает (checked, record): checked=True, если запись добавлена,
        False, если существующая запись удалена.
        """
        existing = self.remove(habit_id, day)
        if existing is not None:
            return False, existing
        return True, self.add(habit_id, day, completed_at)

    def records_for(self, habit_id: str) -> List[CheckRecord]:
        return [r for (hid, _), r in self._records.items() if hid == habit_id]

    def remove_habit(self, habit_id: str) -> int:
        """Каскадное удаление всех отметок привычки"""
        keys = [key for key in self._records if key[0] == habit_id]
        for key in keys:
            del self._records[key]
        return len(keys)

    def all_records(self) -> List[CheckRecord]:
        return list(self._records.values())

    def clear(self) -> None:
        self._records.clear()
