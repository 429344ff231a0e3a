"""
Proposal Service — first-draft proposal sections for an RFP worth bidding.

With an LLM configured the draft is written by the model and checked against
REQUIRED_KEYS; otherwise, or on any failure, a template is filled in from the
company profile. The template states only what the profile records.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from rfp_screening.config import get_settings
from rfp_screening.models.enums import ExtractionSource, OshaLevel
from rfp_screening.models.errors import ScreeningInputError
from rfp_screening.models.profile import CompanyProfile
from rfp_screening.models.schemas import AnalysisResult, ProposalDraft
from rfp_screening.services.llm_service import (
    check_schema,
    llm_text_call,
    parse_json_object,
)

logger = logging.getLogger(__name__)

_PROMPT_PATH = Path(__file__).resolve().parent.parent / "prompts" / "proposal_prompt.txt"

REQUIRED_KEYS: dict[str, type] = {
    "cover_letter": str,
    "executive_summary": str,
    "technical_approach": str,
    "pricing": str,
    "why_choose_us": str,
}


def _money(amount: Optional[float]) -> str:
    return f"${amount:,.0f}" if amount else ""


def _service_label(field_name: str) -> str:
    if field_name == "emergency247":
        return "24/7 emergency service"
    return field_name.replace("_", " ")


class ProposalService:
    """Builds ProposalDraft objects for a screened RFP."""

    def generate(
        self,
        rfp_text: str,
        profile: CompanyProfile,
        analysis: AnalysisResult | None = None,
        use_llm: bool | None = None,
    ) -> ProposalDraft:
        if not isinstance(rfp_text, str) or not rfp_text.strip():
            raise ScreeningInputError("RFP text is required to draft a proposal")
        if not profile.company_name:
            raise ScreeningInputError("Company profile has no company name")

        settings = get_settings()
        if use_llm is None:
            use_llm = settings.llm_configured
        if use_llm and settings.llm_configured:
            draft = self._generate_llm(rfp_text, profile, analysis)
            if draft is not None:
                return draft
        return self.template(profile, analysis)

    # ── LLM path ─────────────────────────────────────────

    def _generate_llm(
        self,
        rfp_text: str,
        profile: CompanyProfile,
        analysis: AnalysisResult | None,
    ) -> ProposalDraft | None:
        summary = "No screening result supplied."
        if analysis is not None:
            summary = (
                f"Decision: {analysis.decision.value}\nScore: {analysis.score}%\n"
                f"Missing: {', '.join(analysis.missing_requirements) or 'none'}"
            )
        try:
            prompt = (
                _PROMPT_PATH.read_text(encoding="utf-8")
                .replace("{profile}", json.dumps(profile.model_dump(mode="json", exclude_none=True), indent=2))
                .replace("{analysis}", summary)
                .replace("{rfp_text}", rfp_text[:10_000])
            )
            data = parse_json_object(llm_text_call(prompt))
            check_schema(data, REQUIRED_KEYS)
        except Exception as exc:
            logger.warning(f"[PROPOSAL] LLM draft failed, using template: {exc}")
            return None

        if not all(data[key].strip() for key in REQUIRED_KEYS):
            logger.warning("[PROPOSAL] LLM draft has empty sections, using template")
            return None
        return ProposalDraft(**{key: data[key] for key in REQUIRED_KEYS}, generated_by=ExtractionSource.LLM)

    # ── Template path ────────────────────────────────────

    @staticmethod
    def template(profile: CompanyProfile, analysis: AnalysisResult | None = None) -> ProposalDraft:
        basics = profile.basics
        name = profile.company_name
        where = ", ".join(part for part in (basics.city, basics.state) if part) or "our service area"
        services = [_service_label(s) for s in profile.services.offered()]
        years = ""
        if basics.year_established:
            years = f" since {basics.year_established}"

        cover_letter = (
            "Dear Selection Committee,\n\n"
            f"{name} is pleased to submit this proposal for your pressure washing "
            f"requirements. We have served {where}{years} and have reviewed your RFP "
            "in detail.\n\n"
            "We look forward to the opportunity to demonstrate our capabilities."
        )

        highlights = []
        if services:
            highlights.append(f"• Services: {', '.join(services)}")
        gl = _money(profile.insurance.general_liability.amount)
        if gl:
            highlights.append(f"• General Liability coverage of {gl}")
        if profile.insurance.workers_comp.has_it:
            highlights.append("• Workers compensation coverage in force")
        if basics.service_radius:
            highlights.append(f"• Service radius of {basics.service_radius:g} miles from {where}")
        executive_summary = f"{name} proposes to deliver the requested services."
        if highlights:
            executive_summary += "\n\n" + "\n".join(highlights)
        if analysis is not None:
            executive_summary += f"\n\nScreening match: {analysis.score}%."

        eq = profile.equipment
        equipment_lines = []
        if eq.max_psi:
            equipment_lines.append(f"   - Equipment rated up to {eq.max_psi} PSI")
        if eq.hot_water.capable:
            equipment_lines.append("   - Hot water units for grease and oil removal")
        if eq.water_recovery:
            equipment_lines.append("   - Water recovery for runoff control")
        if eq.number_of_trucks:
            equipment_lines.append(f"   - {eq.number_of_trucks} equipped service trucks")
        technical_approach = "\n".join([
            "1. Site assessment and condition survey",
            "2. Cleaning plan and schedule that minimises disruption",
            "3. Execution",
            *equipment_lines,
            "4. Inspection, photo documentation and client sign-off",
        ])

        terms = profile.operational.payment_terms_required
        pricing = "Pricing will be provided per site after the walkthrough."
        if profile.operational.minimum_contract:
            pricing += f" Minimum contract value: {_money(profile.operational.minimum_contract)}."
        if terms:
            pricing += f" Payment terms: {terms.value}."

        reasons = []
        certs = profile.certifications
        if certs.osha_level and certs.osha_level != OshaLevel.NONE:
            reasons.append(f"• OSHA {certs.osha_level.value} trained crews")
        if certs.epa_compliant:
            reasons.append("• EPA-compliant cleaning practices")
        if profile.operational.emergency_response_time:
            reasons.append(
                f"• Emergency response within {profile.operational.emergency_response_time:g} hours"
            )
        if profile.operational.night_work or profile.operational.weekend_work:
            reasons.append("• Night and weekend scheduling available")
        why_choose_us = f"Why {name}:"
        if reasons:
            why_choose_us += "\n\n" + "\n".join(reasons)

        return ProposalDraft(
            cover_letter=cover_letter,
            executive_summary=executive_summary,
            technical_approach=technical_approach,
            pricing=pricing,
            why_choose_us=why_choose_us,
            generated_by=ExtractionSource.DETERMINISTIC,
        )
