"""
S1 — Requirement Extraction Agent
Responsibility: Turn raw RFP text into an ExtractedRequirements record,
using the LLM when enabled and the deterministic extractor otherwise.
"""

from __future__ import annotations

import logging

from rfp_screening.agents.base_agent import BaseAgent
from rfp_screening.config import get_settings
from rfp_screening.models.enums import StageName, ScreeningStatus
from rfp_screening.models.state import ScreeningState
from rfp_screening.services.extraction_service import extract_requirements

logger = logging.getLogger(__name__)


class ExtractionAgent(BaseAgent):
    name = StageName.S1_EXTRACTION

    def _real_process(self, state: ScreeningState) -> ScreeningState:
        use_llm = state.use_llm_extraction and get_settings().llm_configured

        requirements, source = extract_requirements(state.rfp_text, use_llm=use_llm)

        state.requirements = requirements
        state.extraction_source = source
        state.status = ScreeningStatus.EXTRACTED

        logger.info(
            f"[S1] Extracted via {source.value}: "
            f"location={requirements.location.as_query() or '<none>'} | "
            f"services={requirements.services} | "
            f"certifications={requirements.certifications}"
        )
        return state
