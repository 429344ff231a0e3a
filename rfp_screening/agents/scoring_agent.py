"""
S2 — Dimension Scoring Agent
Responsibility: Score the extracted requirements against the company profile
on the four dimensions. Each scorer is independent and returns its own
unmatched items.
"""

from __future__ import annotations

import logging

from rfp_screening.agents.base_agent import BaseAgent
from rfp_screening.models.enums import Dimension, StageName, ScreeningStatus
from rfp_screening.models.state import ScreeningState
from rfp_screening.rules import (
    CertificationRules,
    GeographicRules,
    InsuranceRules,
    ScoringConfig,
    ServicesRules,
)
from rfp_screening.rules.rules_config import DEFAULT_SCORING_CONFIG

logger = logging.getLogger(__name__)


class ScoringAgent(BaseAgent):
    name = StageName.S2_SCORING

    def __init__(self, config: ScoringConfig | None = None):
        config = config or DEFAULT_SCORING_CONFIG
        self.geographic = GeographicRules(config.geographic)
        self.insurance = InsuranceRules(config.insurance)
        self.services = ServicesRules()
        self.certifications = CertificationRules(config.certifications)

    def _real_process(self, state: ScreeningState) -> ScreeningState:
        required = state.requirements
        profile = state.profile

        state.dimension_scores = {
            Dimension.GEOGRAPHIC.value: self.geographic.score(required.location, profile),
            Dimension.INSURANCE.value: self.insurance.score(required.insurance, profile.insurance),
            Dimension.SERVICES.value: self.services.score(required.services, profile.services),
            Dimension.CERTIFICATIONS.value: self.certifications.score(required, profile),
        }
        state.status = ScreeningStatus.SCORED

        for dim, result in state.dimension_scores.items():
            logger.info(
                f"[S2] {dim}: {result.score:.1f}%"
                + (f" | unmatched={result.unmatched}" if result.unmatched else "")
            )
        return state
