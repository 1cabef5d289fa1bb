"""Example records shown on first run, before anything is persisted"""
from typing import List
from app.surveys.models import (
    Department,
    InjectionSite,
    NeedleSize,
    PatientAgeGroup,
    SurveyRecord,
)
from app.utils.timezone import utc_now_iso


def seed_records() -> List[SurveyRecord]:
    """Build the two built-in example records, stamped with the current time."""
    now = utc_now_iso()
    return [
        SurveyRecord(
            id="1",
            timestamp=now,
            department=Department.ER,
            experience_years=5,
            recommender="林曉華、陳大明",
            patient_age_group=PatientAgeGroup.ADULT,
            injection_site=InjectionSite.FOREARM,
            needle_size=NeedleSize.G22,
            confidence_level=4,
            technique_rating=5,
            equipment_quality=3,
            patient_cooperation=2,
            pain_management=4,
            environment_stress=5,
            top_challenges=["血管脆弱", "光線不足"],
            feedback_text="急診室環境嘈雜，有時候很難跟患者進行有效溝通。",
        ),
        SurveyRecord(
            id="2",
            timestamp=now,
            department=Department.ICU,
            experience_years=10,
            recommender="王小美",
            patient_age_group=PatientAgeGroup.ADULT,
            injection_site=InjectionSite.DORSUM,
            needle_size=NeedleSize.G20,
            confidence_level=5,
            technique_rating=5,
            equipment_quality=4,
            patient_cooperation=5,
            pain_management=5,
            environment_stress=2,
            top_challenges=["患者水腫"],
            feedback_text="重症患者的血管通常非常具挑戰性。",
        ),
    ]
