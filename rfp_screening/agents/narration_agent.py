"""
S4 — Narration Agent
Responsibility: Render the decision as a readable report. The report is
deterministic; LLM polish is applied only when enabled and configured.
"""

from __future__ import annotations

import logging

from rfp_screening.agents.base_agent import BaseAgent
from rfp_screening.config import get_settings
from rfp_screening.models.enums import StageName, ScreeningStatus
from rfp_screening.models.state import ScreeningState
from rfp_screening.services.narration_service import polish_analysis, render_analysis

logger = logging.getLogger(__name__)


class NarrationAgent(BaseAgent):
    name = StageName.S4_NARRATION

    def _real_process(self, state: ScreeningState) -> ScreeningState:
        report = render_analysis(state.match_result, state.profile.company_name)

        if state.use_llm_narration and get_settings().llm_configured:
            report = polish_analysis(report, state.match_result)

        state.analysis = report
        state.status = ScreeningStatus.COMPLETED
        logger.debug(f"[S4] Report ({len(report)} chars):\n{report}")
        return state
