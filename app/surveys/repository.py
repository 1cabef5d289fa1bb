"""Survey record store backed by a durable key-value slot"""
import asyncio
import json
import logging
from typing import List
from pydantic import TypeAdapter, ValidationError

from app.db.repository import KeyValueSlot
from app.surveys.exceptions import (
    DuplicateSurveyRecordException,
    MalformedSurveyDataError,
)
from app.surveys.models import SurveyRecord
from app.surveys.seed import seed_records

logger = logging.getLogger(__name__)

STORAGE_KEY = "iv_survey_responses"
BACKUP_SUFFIX = ".malformed"

_record_list = TypeAdapter(List[SurveyRecord])


class SurveyRecordStore:
    """
    Append-only, newest-first collection of survey records.

    The list lives in process memory and the whole list is written back to
    the slot on every append. Index 0 is always the most recent record.
    """

    def __init__(self, slot: KeyValueSlot):
        self.slot = slot
        self._records: List[SurveyRecord] = []
        self._lock = asyncio.Lock()

    @property
    def records(self) -> List[SurveyRecord]:
        """Snapshot of the current records, newest first"""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    async def load(self) -> List[SurveyRecord]:
        """
        Load records from the slot into memory.

        An empty slot yields the seed records (not persisted until the first
        append).

        Raises:
            MalformedSurveyDataError: stored value isn't a valid record list
        """
        raw = await self.slot.read()
        if raw is None:
            self._records = seed_records()
            return self.records

        try:
            self._records = _record_list.validate_python(json.loads(raw))
        except json.JSONDecodeError as e:
            await self._back_up(raw)
            raise MalformedSurveyDataError(self.slot.key, f"invalid JSON: {e}") from e
        except ValidationError as e:
            await self._back_up(raw)
            raise MalformedSurveyDataError(
                self.slot.key, f"{e.error_count()} validation error(s)"
            ) from e

        return self.records

    @property
    def backup_slot(self) -> KeyValueSlot:
        """Slot holding the last unparseable value found under the main key"""
        return KeyValueSlot(self.slot.session_factory, f"{self.slot.key}{BACKUP_SUFFIX}")

    async def _back_up(self, raw: str) -> None:
        # Keep the original payload recoverable before any append overwrites it
        await self.backup_slot.write(raw)
        logger.warning("Copied malformed survey data to '%s'", self.backup_slot.key)

    def use(self, records: List[SurveyRecord]) -> None:
        """Replace the in-memory records without touching the slot"""
        self._records = list(records)

    async def append(self, record: SurveyRecord) -> List[SurveyRecord]:
        """
        Prepend a record and persist the full collection.

        Returns:
            The updated record list, newest first

        Raises:
            DuplicateSurveyRecordException: a record with this id is stored
        """
        async with self._lock:
            if any(r.id == record.id for r in self._records):
                raise DuplicateSurveyRecordException(record.id)

            updated = [record, *self._records]
            await self.slot.write(self._serialize(updated))
            self._records = updated

        logger.info("Stored survey record %s (%s), %d total", record.id, record.department.value, len(updated))
        return self.records

    @staticmethod
    def _serialize(records: List[SurveyRecord]) -> str:
        return json.dumps([r.to_storage() for r in records], ensure_ascii=False)
