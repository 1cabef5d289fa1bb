import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from dotenv import load_dotenv
load_dotenv()

from app.analysis.client import NarrativeAnalysisClient
from app.analysis.tracker import AnalysisTracker
from app.db.postgres import async_session, init_db
from app.db.repository import KeyValueSlot
from app.surveys.repository import STORAGE_KEY, SurveyRecordStore
from app.surveys.router import router as surveys_router
from app.surveys.service import SurveyService

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the record store and analysis slot, load persisted records."""
    await init_db()

    store = SurveyRecordStore(KeyValueSlot(async_session, os.getenv("SURVEY_STORAGE_KEY", STORAGE_KEY)))
    await SurveyService(store).load_records()
    app.state.survey_store = store

    client = NarrativeAnalysisClient()
    app.state.analysis_tracker = AnalysisTracker(client)
    logger.info("IV-Care feedback service started")

    yield

    await client.close()


app = FastAPI(title="IV-Care Feedback", lifespan=lifespan)

app.include_router(surveys_router)

@app.get("/health")
def health():
    return {"status": "ok"}
