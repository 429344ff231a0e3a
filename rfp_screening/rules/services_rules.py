"""
Services Rules — map free-text service requirements onto capability flags.

A requirement matches when a keyword in SERVICE_KEYWORDS, or the name of a
capability flag itself, appears in it and the resolved flag is True.
"""

from __future__ import annotations

import logging

from rfp_screening.models.enums import GapCategory
from rfp_screening.models.profile import ProfileServices
from rfp_screening.models.schemas import DimensionScore, RequirementGap

logger = logging.getLogger(__name__)


# keyword → ProfileServices field
SERVICE_KEYWORDS: dict[str, str] = {
    "building": "building_exterior",
    "exterior": "building_exterior",
    "concrete": "concrete",
    "parking": "parking_structure",
    "garage": "parking_structure",
    "graffiti": "graffiti",
    "emergency": "emergency247",
    "24/7": "emergency247",
    "oil": "oil_stain",
    "stain": "oil_stain",
    "gum": "gum_removal",
    "drive-through": "drive_through",
    "drive through": "drive_through",
    "awning": "awnings",
    "canopy": "awnings",
    "dumpster": "dumpster_areas",
    "trash": "dumpster_areas",
    "sidewalk": "sidewalks",
    "walkway": "sidewalks",
    "brick": "brick_cleaning",
    "masonry": "brick_cleaning",
    "rust": "rust_removal",
    "fleet": "fleet_washing",
    "vehicle": "fleet_washing",
    "truck": "fleet_washing",
    "solar": "solar_panels",
    "panel": "solar_panels",
    "window": "windows",
    "glass": "windows",
    "roof": "roof_cleaning",
    "deck": "deck_cleaning",
    "patio": "deck_cleaning",
    "fence": "fence_cleaning",
}


def dedupe(items: list[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for item in items:
        key = item.strip().lower()
        if key and key not in seen:
            seen.add(key)
            result.append(item)
    return result


def _field_variants(field_name: str) -> tuple[str, ...]:
    return (field_name.replace("_", " "), field_name.replace("_", ""))


class ServicesRules:
    """Scores required services against the profile's capability flags."""

    def __init__(self, keywords: dict[str, str] | None = None):
        self.keywords = keywords or SERVICE_KEYWORDS

    def resolve(self, requirement: str, services: ProfileServices) -> bool:
        text = requirement.lower()

        for keyword, field_name in self.keywords.items():
            if keyword in text and getattr(services, field_name, None) is True:
                return True

        for field_name, offered in services:
            if offered is not True:
                continue
            for variant in _field_variants(field_name):
                if variant in text or text in variant:
                    return True
        return False

    def score(self, required: list[str], services: ProfileServices) -> DimensionScore:
        required = dedupe(required)
        if not required:
            return DimensionScore(score=100.0)

        matched = 0
        unmatched: list[str] = []
        for requirement in required:
            if self.resolve(requirement, services):
                matched += 1
            else:
                unmatched.append(requirement)

        score = matched / len(required) * 100
        logger.debug(f"[services] {matched}/{len(required)} matched, unmatched={unmatched}")
        return DimensionScore(
            score=score,
            unmatched=unmatched,
            gaps=[
                RequirementGap(category=GapCategory.SERVICES, item=item)
                for item in unmatched
            ],
        )
