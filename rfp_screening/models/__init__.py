from .enums import Decision, DecisionScheme, ExtractionSource
from .errors import ScreeningInputError
from .profile import CompanyProfile
from .requirements import ExtractedRequirements
from .schemas import AnalysisResult, MatchResult, ScoreBreakdown

__all__ = [
    "AnalysisResult",
    "CompanyProfile",
    "Decision",
    "DecisionScheme",
    "ExtractedRequirements",
    "ExtractionSource",
    "MatchResult",
    "ScoreBreakdown",
    "ScreeningInputError",
]
