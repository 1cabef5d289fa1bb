"""Dashboard aggregation over survey records"""
from collections import Counter
from typing import Dict, List, Optional, Sequence
from app.surveys.models import Department, InjectionSite, SurveyRecord
from app.surveys.schemas import ChallengeCount, ProfileAxis, SummaryView


# (axis key, display label, record attribute); position is meaningful on the radar chart
PROFILE_AXES = [
    ("confidence", "自信心", "confidence_level"),
    ("equipment", "器材滿意", "equipment_quality"),
    ("technique", "成功率", "technique_rating"),
    ("painManagement", "痛控", "pain_management"),
    ("cooperation", "配合度", "patient_cooperation"),
]

PROFILE_FULL_MARK = 5


def _mean(records: Sequence[SurveyRecord], attr: str) -> float:
    return sum(getattr(r, attr) for r in records) / len(records)


def department_counts(records: Sequence[SurveyRecord]) -> Dict[Department, int]:
    """Count records per department, only for departments that occur"""
    counts: Dict[Department, int] = {}
    for record in records:
        counts[record.department] = counts.get(record.department, 0) + 1
    return counts


def performance_profile(records: Sequence[SurveyRecord]) -> List[ProfileAxis]:
    """Mean of each profile axis, in fixed axis order"""
    return [
        ProfileAxis(axis=axis, label=label, value=_mean(records, attr), full_mark=PROFILE_FULL_MARK)
        for axis, label, attr in PROFILE_AXES
    ]


def site_averages(records: Sequence[SurveyRecord]) -> Dict[InjectionSite, float]:
    """Mean technique rating per injection site, over that site's records only"""
    totals: Dict[InjectionSite, int] = {}
    counts: Dict[InjectionSite, int] = {}
    for record in records:
        site = record.injection_site
        totals[site] = totals.get(site, 0) + record.technique_rating
        counts[site] = counts.get(site, 0) + 1
    return {site: totals[site] / counts[site] for site in totals}


def challenge_frequency(records: Sequence[SurveyRecord]) -> List[ChallengeCount]:
    """Occurrences of each challenge label, most frequent first"""
    counter = Counter(c for record in records for c in record.top_challenges)
    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(counter.items(), key=lambda item: item[1], reverse=True)
    return [ChallengeCount(name=name, count=count) for name, count in ranked]


def summarize(records: Sequence[SurveyRecord]) -> Optional[SummaryView]:
    """
    Compute the dashboard summary for a list of records.

    Args:
        records: Survey records in any order

    Returns:
        SummaryView, or None when there are no records (means are undefined)
    """
    if not records:
        return None

    return SummaryView(
        total=len(records),
        department_counts=department_counts(records),
        performance_profile=performance_profile(records),
        site_averages=site_averages(records),
        challenge_frequency=challenge_frequency(records),
        avg_confidence=_mean(records, "confidence_level"),
    )
