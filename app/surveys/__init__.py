from app.surveys.repository import SurveyRecordStore
from app.surveys.service import SurveyService
from app.surveys.models import SurveyRecord

__all__ = ["SurveyRecordStore", "SurveyService", "SurveyRecord"]
