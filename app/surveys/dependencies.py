"""FastAPI dependencies for app-scoped survey objects"""
from fastapi import Depends, Request

from app.analysis.tracker import AnalysisTracker
from app.surveys.repository import SurveyRecordStore
from app.surveys.service import SurveyService


def get_survey_store(request: Request) -> SurveyRecordStore:
    """Record store owned by the application (created at startup)"""
    return request.app.state.survey_store


def get_analysis_tracker(request: Request) -> AnalysisTracker:
    """Analysis slot owned by the application (created at startup)"""
    return request.app.state.analysis_tracker


def get_survey_service(store: SurveyRecordStore = Depends(get_survey_store)) -> SurveyService:
    return SurveyService(store)
