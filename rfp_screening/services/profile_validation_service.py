"""
Profile Validation Service — how complete is a company profile?

Completeness only looks at whether a field is filled in, so an explicit
``False`` counts as answered while ``None`` does not.
"""

from __future__ import annotations

import logging

from rfp_screening.models.enums import OshaLevel
from rfp_screening.models.profile import CompanyProfile
from rfp_screening.models.schemas import (
    MissingField,
    ProfileValidationResult,
    SectionScores,
)

logger = logging.getLogger(__name__)

SECTION_WEIGHTS: dict[str, float] = {
    "basics": 0.30,
    "insurance": 0.25,
    "services": 0.15,
    "equipment": 0.15,
    "certifications": 0.10,
    "operational": 0.05,
}

BASICS_FIELDS = (
    "company_name", "address", "city", "state", "zip",
    "year_established", "entity_type", "ein", "employees", "service_radius",
)

# services whose RFPs are scarce enough to be worth a bump in the estimate
SPECIALIZED_SERVICES = ("graffiti", "emergency247", "solar_panels", "roof_cleaning")

TARGET_SERVICE_COUNT = 5
MAX_SUGGESTIONS = 5


def _has_osha(profile: CompanyProfile) -> bool:
    level = profile.certifications.osha_level
    return level is not None and level != OshaLevel.NONE


class ProfileValidationService:
    """Scores profile completeness and suggests what to fill in next."""

    # ── Section scores ───────────────────────────────────

    def section_scores(self, profile: CompanyProfile) -> SectionScores:
        basics = profile.basics
        filled = sum(1 for name in BASICS_FIELDS if getattr(basics, name))

        ins = profile.insurance
        insurance = 0
        if ins.general_liability.amount:
            insurance += 40
        if ins.workers_comp.has_it is not None:
            insurance += 30
        if ins.commercial_auto.amount:
            insurance += 20
        if ins.umbrella.amount:
            insurance += 5
        if ins.professional.amount:
            insurance += 5

        services = min(100.0, len(profile.services.offered()) / TARGET_SERVICE_COUNT * 100)

        eq = profile.equipment
        equipment = sum((
            20 if eq.hot_water.capable is not None else 0,
            10 if eq.hot_water.psi else 0,
            20 if eq.cold_water.capable is not None else 0,
            10 if eq.cold_water.psi else 0,
            10 if eq.water_recovery is not None else 0,
            10 if eq.number_of_trucks else 0,
            10 if eq.surface_cleaners is not None else 0,
            10 if eq.epa_approved_chemicals is not None else 0,
        ))

        certs = profile.certifications
        certifications = sum((
            30 if certs.business_license is not None else 0,
            20 if certs.contractor_license is not None else 0,
            20 if certs.epa_compliant is not None else 0,
            20 if _has_osha(profile) else 0,
            10 if certs.sam_registration is not None else 0,
        ))

        ops = profile.operational
        operational = sum((
            20 if ops.night_work is not None else 0,
            20 if ops.weekend_work is not None else 0,
            30 if ops.emergency_response_time is not None else 0,
            30 if ops.payment_terms_required else 0,
        ))

        return SectionScores(
            basics=filled / len(BASICS_FIELDS) * 100,
            insurance=insurance,
            services=services,
            equipment=equipment,
            certifications=certifications,
            operational=operational,
        )

    def completeness(self, profile: CompanyProfile) -> int:
        scores = self.section_scores(profile)
        overall = sum(getattr(scores, section) * weight for section, weight in SECTION_WEIGHTS.items())
        return round(overall)

    # ── Missing / suggestions ────────────────────────────

    @staticmethod
    def critical_missing(profile: CompanyProfile) -> list[MissingField]:
        basics = profile.basics
        missing: list[MissingField] = []

        for field_name, label in (
            ("company_name", "Company Name"),
            ("address", "Business Address"),
            ("city", "City"),
            ("state", "State"),
            ("zip", "ZIP Code"),
            ("service_radius", "Service Radius"),
        ):
            if not getattr(basics, field_name):
                missing.append(MissingField(section="basics", field=field_name, label=label))

        if not profile.insurance.general_liability.amount:
            missing.append(MissingField(
                section="insurance", field="general_liability", label="General Liability Coverage",
            ))
        if profile.insurance.workers_comp.has_it is None:
            missing.append(MissingField(
                section="insurance", field="workers_comp", label="Workers Compensation Status",
            ))
        if not profile.services.offered():
            missing.append(MissingField(section="services", field="any", label="At least one service"))
        if profile.certifications.business_license is None:
            missing.append(MissingField(
                section="certifications", field="business_license", label="Business License Status",
            ))
        return missing

    def suggestions(self, profile: CompanyProfile, completeness: int | None = None) -> list[str]:
        if completeness is None:
            completeness = self.completeness(profile)
        suggestions: list[str] = []

        if not profile.basics.service_radius:
            suggestions.append("Set your service radius to unlock location-based RFP matching")
        if not profile.insurance.general_liability.amount:
            suggestions.append(
                "Add your General Liability coverage amount - this is required for most RFPs"
            )
        offered = len(profile.services.offered())
        if offered < TARGET_SERVICE_COUNT:
            suggestions.append(
                f"Add {TARGET_SERVICE_COUNT - offered} more services to expand your RFP opportunities"
            )
        if not profile.equipment.hot_water.capable and not profile.equipment.cold_water.capable:
            suggestions.append("Specify your pressure washing equipment capabilities")
        if not profile.certifications.sam_registration:
            suggestions.append("Register on SAM.gov to access federal government contracts")
        if not _has_osha(profile):
            suggestions.append("Consider OSHA certification to qualify for more commercial RFPs")
        if not profile.operational.emergency_response_time:
            suggestions.append("Add emergency response capability to qualify for 24/7 service RFPs")

        if completeness < 50:
            suggestions.insert(0, "Complete at least 50% of your profile to get accurate RFP matches")
        elif completeness < 80:
            suggestions.append("Complete your profile to 80% for optimal RFP matching accuracy")

        return suggestions[:MAX_SUGGESTIONS]

    @staticmethod
    def estimate_unlocked_rfps(profile: CompanyProfile, completeness: int) -> int:
        """Rough count of RFPs the profile could qualify for."""
        estimate = 0
        if profile.company_name and profile.insurance.general_liability.amount:
            estimate += 100
        if profile.basics.service_radius:
            estimate += 50
        if profile.certifications.sam_registration:
            estimate += 200
        if any(getattr(profile.services, name) for name in SPECIALIZED_SERVICES):
            estimate += 75
        if profile.equipment.hot_water.capable and profile.equipment.water_recovery:
            estimate += 50
        return round(estimate * completeness / 100)

    # ── Entry point ──────────────────────────────────────

    def validate(self, profile: CompanyProfile) -> ProfileValidationResult:
        completeness = self.completeness(profile)
        result = ProfileValidationResult(
            completeness=completeness,
            section_scores=self.section_scores(profile),
            missing_critical=self.critical_missing(profile),
            suggestions=self.suggestions(profile, completeness),
            unlocked_rfps=self.estimate_unlocked_rfps(profile, completeness),
        )
        logger.info(
            f"[PROFILE] '{profile.company_name or '<unnamed>'}' completeness={completeness}% "
            f"critical_missing={len(result.missing_critical)}"
        )
        return result
