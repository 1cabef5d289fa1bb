"""Survey Pydantic schemas"""
from typing import List, Dict
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.surveys.models import (
    Department,
    InjectionSite,
    NeedleSize,
    PatientAgeGroup,
    SurveyFields,
    SurveyRecord,
)


class CreateSurveyRequest(SurveyFields):
    """Form submission; defaults match the blank form"""
    department: Department = Department.GENERAL
    patient_age_group: PatientAgeGroup = PatientAgeGroup.ADULT
    injection_site: InjectionSite = InjectionSite.FOREARM
    needle_size: NeedleSize = NeedleSize.G22
    confidence_level: int = Field(3, ge=1, le=5)
    technique_rating: int = Field(3, ge=1, le=5)
    equipment_quality: int = Field(3, ge=1, le=5)
    patient_cooperation: int = Field(3, ge=1, le=5)
    pain_management: int = Field(3, ge=1, le=5)
    environment_stress: int = Field(3, ge=1, le=5)


class SurveyListResponse(BaseModel):
    """All stored records, newest first"""
    records: List[SurveyRecord]
    count: int


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileAxis(CamelModel):
    """One spoke of the five-axis performance profile"""
    axis: str  # confidence | equipment | technique | painManagement | cooperation
    label: str  # display label
    value: float  # mean rating
    full_mark: int = 5


class ChallengeCount(CamelModel):
    """How often a challenge label was reported"""
    name: str
    count: int


class SummaryView(CamelModel):
    """Dashboard summary derived from the record list"""
    total: int
    department_counts: Dict[Department, int]
    performance_profile: List[ProfileAxis]
    site_averages: Dict[InjectionSite, float]
    challenge_frequency: List[ChallengeCount]  # count descending
    avg_confidence: float
