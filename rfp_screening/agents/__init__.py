from .base_agent import BaseAgent
from .extraction_agent import ExtractionAgent
from .scoring_agent import ScoringAgent
from .decision_agent import DecisionAgent
from .narration_agent import NarrationAgent

__all__ = [
    "BaseAgent",
    "ExtractionAgent",
    "ScoringAgent",
    "DecisionAgent",
    "NarrationAgent",
]
