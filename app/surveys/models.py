"""Survey record model and clinical choice sets"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.surveys.validators import parse_int_or_default


class Department(str, Enum):
    """Hospital unit the nurse works in"""
    ER = "急診室"
    ICU = "加護病房"
    GENERAL = "一般病房"
    OR = "手術室"
    OUTPATIENT = "門診"


class PatientAgeGroup(str, Enum):
    NEONATE = "新生兒"
    CHILD = "兒童"
    ADULT = "成人"
    ELDERLY = "高齡者"


class InjectionSite(str, Enum):
    DORSUM = "手背"
    FOREARM = "前臂"
    ACF = "肘窩 (ACF)"
    FOOT = "足部"
    OTHER = "其他"


class NeedleSize(str, Enum):
    G18 = "18G"
    G20 = "20G"
    G22 = "22G"
    G24 = "24G"
    SAFETY = "Safety Needle"


# Options offered on the submission form; the vocabulary itself is open
CHALLENGE_OPTIONS = [
    "血管脆弱/過細",
    "患者極度不配合",
    "光線不足",
    "設備短缺/品質不良",
    "時間壓力緊迫",
    "水腫導致定位困難",
    "反覆置管困難",
    "穿刺點選擇受限",
]


def rating_field(**kwargs):
    """1-5 Likert field"""
    return Field(..., ge=1, le=5, **kwargs)


class SurveyFields(BaseModel):
    """Fields shared by stored records and submission requests"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    department: Department
    experience_years: int = 0
    recommender: Optional[str] = None
    patient_age_group: PatientAgeGroup
    injection_site: InjectionSite
    needle_size: NeedleSize
    confidence_level: int = rating_field()
    technique_rating: int = rating_field()
    equipment_quality: int = rating_field()
    patient_cooperation: int = rating_field()
    pain_management: int = rating_field()
    environment_stress: int = rating_field()
    top_challenges: List[str] = Field(default_factory=list)
    feedback_text: str = ""

    @field_validator("experience_years", mode="before")
    @classmethod
    def _coerce_experience_years(cls, value):
        return parse_int_or_default(value).value

    @field_validator("recommender", mode="before")
    @classmethod
    def _blank_recommender_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("top_challenges")
    @classmethod
    def _dedupe_challenges(cls, value: List[str]) -> List[str]:
        # Set semantics, insertion order kept for display; blank labels dropped
        return list(dict.fromkeys(c.strip() for c in value if c.strip()))


class SurveyRecord(SurveyFields):
    """
    One clinical IV feedback submission.

    Immutable once created. Serialized with camelCase keys and the Chinese
    enum literals so previously persisted data loads unchanged.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: str

    def to_storage(self) -> dict:
        """JSON-ready dict in the persisted shape"""
        return self.model_dump(mode="json", by_alias=True)
