"""
S3 — Decision Agent
Responsibility: Combine the dimension scores into a total, classify it with
the requested threshold table, and split the gaps into missing and fillable.
"""

from __future__ import annotations

import logging

from rfp_screening.agents.base_agent import BaseAgent
from rfp_screening.models.enums import StageName, ScreeningStatus
from rfp_screening.models.state import ScreeningState
from rfp_screening.rules import DecisionRules

logger = logging.getLogger(__name__)


class DecisionAgent(BaseAgent):
    name = StageName.S3_DECISION

    def __init__(self, rules: DecisionRules | None = None):
        self.rules = rules or DecisionRules()

    def _real_process(self, state: ScreeningState) -> ScreeningState:
        result = self.rules.evaluate(state.dimension_scores, state.scheme)

        state.match_result = result
        state.status = ScreeningStatus.DECIDED

        logger.info(
            f"[S3] Decision: {result.decision.value} | "
            f"score={result.total_score:.1f} | "
            f"missing={len(result.missing_requirements)} | "
            f"fillable={len(result.fillable_gaps)}"
        )
        return state
