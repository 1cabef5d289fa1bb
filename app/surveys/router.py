"""Survey REST API endpoints"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from app.analysis.schemas import AnalysisStatus
from app.analysis.tracker import AnalysisTracker
from app.reports.service import SurveyExportService
from app.surveys.dependencies import get_analysis_tracker, get_survey_service
from app.surveys.exceptions import NoSurveyDataException
from app.surveys.models import SurveyRecord
from app.surveys.schemas import CreateSurveyRequest, SummaryView, SurveyListResponse
from app.surveys.service import SurveyService


router = APIRouter(
    prefix="/surveys",
    tags=["surveys"],
)


@router.post("/", response_model=SurveyRecord, status_code=status.HTTP_201_CREATED)
async def submit_survey(
    request: CreateSurveyRequest,
    service: SurveyService = Depends(get_survey_service),
):
    """
    Submit IV injection feedback.

    Non-numeric or negative experience years are stored as 0.
    Ratings must be 1-5.
    """
    return await service.submit(request)


@router.get("/", response_model=SurveyListResponse)
async def list_surveys(
    service: SurveyService = Depends(get_survey_service),
):
    """List all survey records, newest first."""
    records = service.list_records()
    return SurveyListResponse(records=records, count=len(records))


@router.get("/summary", response_model=SummaryView)
async def get_summary(
    service: SurveyService = Depends(get_survey_service),
):
    """
    Dashboard summary statistics.

    Returns 404 when there are no records, since averages are undefined.
    """
    summary = service.get_summary()
    if summary is None:
        raise NoSurveyDataException()
    return summary


@router.get("/export")
async def export_surveys(
    service: SurveyService = Depends(get_survey_service),
):
    """Download all records as CSV (UTF-8 with BOM)."""
    exporter = SurveyExportService()
    csv_buffer = exporter.generate_csv(service.list_records())
    filename = exporter.export_filename()
    return StreamingResponse(csv_buffer, media_type="text/csv; charset=utf-8", headers={"Content-Disposition": f"attachment; filename={filename}"})


@router.post("/analysis", response_model=AnalysisStatus)
async def run_analysis(
    service: SurveyService = Depends(get_survey_service),
    tracker: AnalysisTracker = Depends(get_analysis_tracker),
):
    """
    Run narrative analysis over all records.

    Only one analysis runs at a time; while one is pending the request is
    not started and the response has accepted=false. Failures return the
    fallback analysis with state=failed. Returns 404 when there are no
    records to analyze.
    """
    records = service.list_records()
    if not records:
        raise NoSurveyDataException()
    return await tracker.run(records)


@router.get("/analysis", response_model=AnalysisStatus)
async def get_analysis(
    tracker: AnalysisTracker = Depends(get_analysis_tracker),
):
    """Current narrative analysis status and latest result."""
    return tracker.status()
