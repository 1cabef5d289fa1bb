"""Single-slot tracker for in-flight narrative analysis requests"""
import logging
from typing import Optional, Sequence

from app.analysis.client import NarrativeAnalysisClient, NarrativeAnalysisError
from app.analysis.schemas import (
    FALLBACK_ANALYSIS,
    AnalysisState,
    AnalysisStatus,
    NarrativeAnalysis,
)
from app.surveys.models import SurveyRecord

logger = logging.getLogger(__name__)


class AnalysisTracker:
    """
    Serializes analysis requests through one slot.

    idle -> pending -> done | failed. While pending, further ``run`` calls
    are ignored and report the pending status instead of starting a request.
    """

    def __init__(self, client: NarrativeAnalysisClient):
        self.client = client
        self.state = AnalysisState.IDLE
        self.result: Optional[NarrativeAnalysis] = None
        self.record_count: Optional[int] = None

    def status(self, accepted: bool = True) -> AnalysisStatus:
        return AnalysisStatus(
            state=self.state,
            result=self.result,
            accepted=accepted,
            record_count=self.record_count,
        )

    @property
    def is_pending(self) -> bool:
        return self.state == AnalysisState.PENDING

    async def run(self, records: Sequence[SurveyRecord]) -> AnalysisStatus:
        """
        Run an analysis unless one is already in flight.

        Failures never propagate: the slot ends up ``failed`` with the
        fallback analysis as its result.
        """
        if self.is_pending:
            logger.info("Analysis already in progress, ignoring request")
            return self.status(accepted=False)

        # No await between the check above and this assignment
        self.state = AnalysisState.PENDING
        self.record_count = len(records)
        logger.info("Starting narrative analysis over %d records", len(records))

        try:
            self.result = await self.client.generate(records)
            self.state = AnalysisState.DONE
            logger.info("Narrative analysis finished")
        except NarrativeAnalysisError:
            logger.exception("Narrative analysis failed, using fallback")
            self.result = FALLBACK_ANALYSIS
            self.state = AnalysisState.FAILED
        except BaseException:
            # Cancelled mid-flight; free the slot before propagating
            self.result = FALLBACK_ANALYSIS
            self.state = AnalysisState.FAILED
            raise

        return self.status()
