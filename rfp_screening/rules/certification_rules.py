"""
Certification Rules — certifications, equipment and operational readiness.

Everything the RFP demands beyond location, insurance and service lines is
scored here as one item list:

  * certifications: full match, half credit for recognised standards the
    profile cannot model (ISO), or unmatched
  * equipment and operational items: full match or unmatched

score = (full + partial_credit × partial) / items × 100, 100 with no items.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Optional

from rfp_screening.models.enums import GapCategory, OshaLevel
from rfp_screening.models.profile import CompanyProfile, ProfileCertifications
from rfp_screening.models.requirements import ExtractedRequirements
from rfp_screening.models.schemas import DimensionScore, RequirementGap
from rfp_screening.rules.rules_config import CertificationConfig, DEFAULT_SCORING_CONFIG
from rfp_screening.rules.services_rules import dedupe

logger = logging.getLogger(__name__)


# keyword → ProfileCertifications field
CERT_KEYWORDS: dict[str, str] = {
    "business license": "business_license",
    "contractor": "contractor_license",
    "contractors": "contractor_license",
    "epa": "epa_compliant",
    "environmental": "epa_compliant",
    "safety": "osha_level",
    "prevailing": "prevailing_wage",
    "prevailing wage": "prevailing_wage",
    "davis bacon": "prevailing_wage",
    "davis-bacon": "prevailing_wage",
    "sam": "sam_registration",
    "sam.gov": "sam_registration",
    "cage": "cage_code",
    "duns": "duns_number",
    "d-u-n-s": "duns_number",
    "small business": "small_business",
    "sbe": "small_business",
    "minority": "minority_owned",
    "mbe": "minority_owned",
    "woman": "woman_owned",
    "women": "woman_owned",
    "wbe": "woman_owned",
    "veteran": "veteran_owned",
    "vbe": "veteran_owned",
    "dvbe": "veteran_owned",
    "hubzone": "hub_zone",
    "hub zone": "hub_zone",
}


def term_pattern(term: str) -> re.Pattern:
    """Whole-word pattern for *term* ("epa" must not hit "separate")."""
    return re.compile(rf"(?<![a-z0-9]){re.escape(term.lower())}(?![a-z0-9])")


def contains_term(text: str, term: str) -> bool:
    return term_pattern(term).search(text.lower()) is not None


class CertMatch(str, Enum):
    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


def _held(value) -> Optional[bool]:
    """True when held, False when explicitly not held, None when absent."""
    if value is None:
        return None
    if isinstance(value, OshaLevel):
        return value != OshaLevel.NONE
    if isinstance(value, str):
        return bool(value.strip()) or None
    return bool(value)


class CertificationRules:
    """Scores certification, equipment and operational requirements."""

    def __init__(
        self,
        config: CertificationConfig | None = None,
        keywords: dict[str, str] | None = None,
    ):
        self.config = config or DEFAULT_SCORING_CONFIG.certifications
        self.keywords = keywords or CERT_KEYWORDS
        self._patterns = [(term_pattern(k), f) for k, f in self.keywords.items()]

    # ── Certifications ───────────────────────────────────

    def match_certification(self, requirement: str, certs: ProfileCertifications) -> CertMatch:
        text = requirement.lower()

        if contains_term(text, "osha"):
            return self._match_osha(text, certs.osha_level)

        for pattern, field_name in self._patterns:
            if not pattern.search(text):
                continue
            held = _held(getattr(certs, field_name, None))
            if held is True:
                return CertMatch.FULL
            if held is False:
                return CertMatch.NONE

        if any(contains_term(text, term) for term in self.config.unverifiable_terms):
            return CertMatch.PARTIAL
        return CertMatch.NONE

    def requirement_key(self, requirement: str) -> str:
        """
        Profile field a certification requirement resolves to, so synonyms
        ("prevailing wage" / "davis-bacon") count once. OSHA levels and
        unrecognised terms key on their own text.
        """
        text = requirement.lower().strip()
        if contains_term(text, "osha"):
            return text
        for pattern, field_name in self._patterns:
            if pattern.search(text):
                return field_name
        return text

    def distinct_certifications(self, certifications: list[str]) -> list[str]:
        """First requirement per resolved field, in order."""
        seen: set[str] = set()
        distinct: list[str] = []
        for requirement in dedupe(list(certifications)):
            key = self.requirement_key(requirement)
            if key in seen:
                continue
            seen.add(key)
            distinct.append(requirement)
        return distinct

    @staticmethod
    def _match_osha(text: str, level: Optional[OshaLevel]) -> CertMatch:
        if level is None or level == OshaLevel.NONE:
            return CertMatch.NONE
        if "30" in text:
            return CertMatch.FULL if level == OshaLevel.THIRTY_HOUR else CertMatch.NONE
        # a 30-hour card covers a 10-hour requirement
        return CertMatch.FULL

    # ── Equipment / operational ──────────────────────────

    @staticmethod
    def equipment_items(required: ExtractedRequirements, profile: CompanyProfile) -> list[tuple[str, bool]]:
        req = required.equipment
        equipment = profile.equipment
        items: list[tuple[str, bool]] = []
        if req.min_psi:
            items.append((f"{req.min_psi} PSI minimum pressure", equipment.max_psi >= req.min_psi))
        if req.hot_water:
            items.append(("Hot water capability", equipment.hot_water.capable is True))
        if req.water_recovery:
            items.append(("Water recovery system", equipment.water_recovery is True))
        if req.aerial_lift:
            items.append(("Aerial lift access", equipment.aerial_lift is True))
        return items

    @staticmethod
    def operational_items(required: ExtractedRequirements, profile: CompanyProfile) -> list[tuple[str, bool]]:
        req = required.operational
        ops = profile.operational
        response_time = ops.emergency_response_time
        items: list[tuple[str, bool]] = []
        if req.night_work:
            items.append(("Night work availability", ops.night_work is True))
        if req.weekend_work:
            items.append(("Weekend work availability", ops.weekend_work is True))
        if req.emergency_response:
            items.append((
                "Emergency response capability",
                response_time is not None or profile.services.emergency247 is True,
            ))
        if req.max_response_time is not None:
            items.append((
                f"Emergency response within {req.max_response_time:g} hours",
                response_time is not None and response_time <= req.max_response_time,
            ))
        return items

    # ── Scoring ──────────────────────────────────────────

    def score(self, required: ExtractedRequirements, profile: CompanyProfile) -> DimensionScore:
        full = 0
        partial = 0
        total = 0
        gaps: list[RequirementGap] = []

        for requirement in self.distinct_certifications(required.certifications):
            total += 1
            result = self.match_certification(requirement, profile.certifications)
            if result == CertMatch.FULL:
                full += 1
            elif result == CertMatch.PARTIAL:
                partial += 1
            else:
                gaps.append(RequirementGap(category=GapCategory.CERTIFICATIONS, item=requirement))

        for category, items in (
            (GapCategory.EQUIPMENT, self.equipment_items(required, profile)),
            (GapCategory.OPERATIONAL, self.operational_items(required, profile)),
        ):
            for item, met in items:
                total += 1
                if met:
                    full += 1
                else:
                    gaps.append(RequirementGap(category=category, item=item))

        if total == 0:
            return DimensionScore(score=100.0)

        score = (full + self.config.partial_credit * partial) / total * 100
        logger.debug(
            f"[certifications] full={full} partial={partial} total={total} → {score:.1f}%"
        )
        return DimensionScore(
            score=score,
            unmatched=[g.item for g in gaps],
            gaps=gaps,
        )
