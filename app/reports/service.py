from typing import List
from datetime import datetime
import pandas as pd
from io import BytesIO
from app.surveys.models import SurveyRecord
from app.utils.timezone import local_today

# Column order of the feedback export
CSV_COLUMNS = ["ID", "時間", "單位", "年資", "推薦人", "病患族群", "部位", "針頭", "自信度", "成功率", "困難", "回饋"]

CHALLENGE_SEPARATOR = "|"
NO_RECOMMENDER = "無"


def to_row(record: SurveyRecord) -> dict:
    """Flatten a survey record into one export row."""
    return {
        'ID': record.id,
        '時間': record.timestamp,
        '單位': record.department.value,
        '年資': record.experience_years,
        '推薦人': record.recommender or NO_RECOMMENDER,
        '病患族群': record.patient_age_group.value,
        '部位': record.injection_site.value,
        '針頭': record.needle_size.value,
        '自信度': record.confidence_level,
        '成功率': record.technique_rating,
        '困難': CHALLENGE_SEPARATOR.join(record.top_challenges),
        '回饋': record.feedback_text.replace("\r\n", "\n").replace("\n", " "),
    }


class SurveyExportService:
    """Service for exporting survey records"""

    def generate_csv(self, records: List[SurveyRecord]) -> BytesIO:
        """Generate a UTF-8 (with BOM) CSV file from survey records"""
        df = pd.DataFrame([to_row(r) for r in records], columns=CSV_COLUMNS)
        buffer = BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        return buffer

    def export_filename(self, now: datetime | None = None) -> str:
        """Download filename with the local date embedded"""
        return f"IV_Care_Feedback_{local_today(now).isoformat()}.csv"
