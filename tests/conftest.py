import os

# Must be set before app.db.postgres builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app.db.postgres import Base
from app.db import models  # noqa: F401  (registers kv_store)
from app.db.repository import KeyValueSlot
from app.analysis.client import NarrativeAnalysisClient
from app.analysis.tracker import AnalysisTracker
from app.surveys.dependencies import get_analysis_tracker, get_survey_store
from app.surveys.models import (
    Department,
    InjectionSite,
    NeedleSize,
    PatientAgeGroup,
    SurveyRecord,
)
from app.surveys.repository import STORAGE_KEY, SurveyRecordStore


@pytest.fixture(scope="function")
async def session_factory():
    """In-memory SQLite database, fresh for each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def slot(session_factory):
    """Key-value slot the survey store persists into."""
    return KeyValueSlot(session_factory, STORAGE_KEY)


@pytest.fixture
def store(slot):
    """Empty (unloaded) record store."""
    return SurveyRecordStore(slot)


@pytest.fixture
def record_factory():
    """Build SurveyRecords with sensible defaults."""
    counter = {"n": 0}

    def make(**overrides) -> SurveyRecord:
        counter["n"] += 1
        fields = dict(
            id=f"rec-{counter['n']}",
            timestamp=f"2024-05-01T08:00:{counter['n']:02d}.000Z",
            department=Department.GENERAL,
            experience_years=3,
            recommender=None,
            patient_age_group=PatientAgeGroup.ADULT,
            injection_site=InjectionSite.FOREARM,
            needle_size=NeedleSize.G22,
            confidence_level=3,
            technique_rating=3,
            equipment_quality=3,
            patient_cooperation=3,
            pain_management=3,
            environment_stress=3,
            top_challenges=[],
            feedback_text="",
        )
        fields.update(overrides)
        return SurveyRecord(**fields)

    return make


@pytest.fixture
def mock_analysis_client():
    """Analysis client whose network call is mocked out."""
    client = NarrativeAnalysisClient(api_key="test-key", model="test-model", timeout=1.0)
    client._complete = AsyncMock()
    return client


@pytest.fixture
def tracker(mock_analysis_client):
    return AnalysisTracker(mock_analysis_client)


@pytest.fixture(scope="function")
async def client(store, tracker):
    """Create a test client with overridden dependencies."""
    await store.load()

    app.dependency_overrides[get_survey_store] = lambda: store
    app.dependency_overrides[get_analysis_tracker] = lambda: tracker

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
