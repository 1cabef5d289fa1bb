from app.analysis.client import NarrativeAnalysisClient
from app.analysis.tracker import AnalysisTracker
from app.analysis.schemas import FALLBACK_ANALYSIS, NarrativeAnalysis

__all__ = ["NarrativeAnalysisClient", "AnalysisTracker", "FALLBACK_ANALYSIS", "NarrativeAnalysis"]
