"""
Geographic Rules — is the RFP site inside the company's service radius?
"""

from __future__ import annotations

import logging

from rfp_screening.models.enums import GapCategory
from rfp_screening.models.profile import CompanyProfile
from rfp_screening.models.requirements import LocationRequirement
from rfp_screening.models.schemas import DimensionScore, RequirementGap
from rfp_screening.rules.distance_rules import (
    calculate_distance,
    estimate_driving_time,
    format_distance,
)
from rfp_screening.rules.rules_config import DEFAULT_SCORING_CONFIG, GeographicConfig

logger = logging.getLogger(__name__)


class GeographicRules:
    """Scores the RFP location against the profile's service radius."""

    def __init__(self, config: GeographicConfig | None = None):
        self.config = config or DEFAULT_SCORING_CONFIG.geographic

    def score(self, required: LocationRequirement, profile: CompanyProfile) -> DimensionScore:
        if not required.specified:
            return DimensionScore(score=100.0)

        radius = profile.basics.service_radius
        if radius is None:
            logger.debug("[geo] No service radius configured — scoring as in range")
            return DimensionScore(score=self.config.no_radius_score)

        rfp_location = required.as_query()
        company_location = profile.location_string()
        distance = calculate_distance(rfp_location, company_location)

        if distance is None:
            logger.debug(
                f"[geo] Distance unresolvable between '{rfp_location}' and "
                f"'{company_location}' — scoring {self.config.unknown_distance_score}"
            )
            return DimensionScore(score=self.config.unknown_distance_score)

        logger.debug(f"[geo] {rfp_location} is {distance:.1f} mi from {company_location} (radius {radius})")

        if distance <= radius:
            return DimensionScore(score=self.config.in_radius_score, distance_miles=distance)

        item = (
            f"Location {format_distance(distance)} away "
            f"(~{estimate_driving_time(distance)} drive) exceeds "
            f"{radius:g}-mile service radius"
        )
        return DimensionScore(
            score=self.config.out_of_radius_score,
            unmatched=[rfp_location],
            gaps=[RequirementGap(
                category=GapCategory.GEOGRAPHIC,
                item=item,
                detail=f"{distance:.1f} miles",
            )],
            distance_miles=distance,
        )
