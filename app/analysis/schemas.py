"""Narrative analysis Pydantic schemas"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.surveys.models import SurveyRecord


class NarrativeAnalysis(BaseModel):
    """Narrative summary returned by the text-generation service"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    summary: str
    key_issues: List[str]  # 3-5 expected, not enforced
    recommendations: List[str]  # 3-5 expected, not enforced


FALLBACK_ANALYSIS = NarrativeAnalysis(
    summary="目前無法進行 AI 深度分析，請檢查網路連線或稍後再試。",
    key_issues=["數據分析中斷"],
    recommendations=["建議手動檢視臨床回饋內容"],
)


class AnalysisContextItem(BaseModel):
    """Record reduced to what the analysis needs; no ids or timestamps"""
    dept: str
    exp: int
    patient: str
    site: str
    needle: str
    conf: int
    challenges: List[str]
    text: str

    @classmethod
    def from_record(cls, record: SurveyRecord) -> "AnalysisContextItem":
        return cls(
            dept=record.department.value,
            exp=record.experience_years,
            patient=record.patient_age_group.value,
            site=record.injection_site.value,
            needle=record.needle_size.value,
            conf=record.confidence_level,
            challenges=list(record.top_challenges),
            text=record.feedback_text,
        )


class AnalysisState(str, Enum):
    """State of the single in-flight analysis slot"""
    IDLE = "idle"
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


class AnalysisStatus(BaseModel):
    """Analysis slot status"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    state: AnalysisState
    result: Optional[NarrativeAnalysis] = None
    accepted: bool = True  # False when a request was ignored because one is pending
    record_count: Optional[int] = None
