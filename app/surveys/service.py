"""Survey service layer for business logic"""
import logging
from typing import List, Optional
from uuid import uuid4

from app.surveys.exceptions import MalformedSurveyDataError
from app.surveys.models import SurveyRecord
from app.surveys.repository import SurveyRecordStore
from app.surveys.schemas import CreateSurveyRequest, SummaryView
from app.surveys.seed import seed_records
from app.surveys.summary import summarize
from app.utils.timezone import utc_now_iso

logger = logging.getLogger(__name__)


class SurveyService:
    """Service layer for survey business logic"""

    def __init__(self, store: SurveyRecordStore):
        self.store = store

    async def load_records(self) -> List[SurveyRecord]:
        """
        Load the store, falling back to the seed records if the stored data
        can't be parsed.
        """
        try:
            records = await self.store.load()
        except MalformedSurveyDataError as e:
            logger.warning("%s; falling back to seed records", e)
            self.store.use(seed_records())
            return self.store.records

        logger.info("Loaded %d survey records", len(records))
        return records

    async def submit(self, request: CreateSurveyRequest) -> SurveyRecord:
        """
        Create a record from a form submission and store it.

        The id and timestamp are assigned here, once; the record is never
        modified afterwards.
        """
        record = SurveyRecord(
            id=str(uuid4()),
            timestamp=utc_now_iso(),
            **request.model_dump(),
        )
        await self.store.append(record)
        return record

    def list_records(self) -> List[SurveyRecord]:
        """All records, newest first"""
        return self.store.records

    def get_summary(self) -> Optional[SummaryView]:
        """Dashboard summary, or None when there are no records"""
        return summarize(self.store.records)
