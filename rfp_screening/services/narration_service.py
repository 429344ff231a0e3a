"""
Narration Service — renders a MatchResult as a plain-text screening report.

render_analysis() is pure: identical inputs give identical text. When
narration polish is enabled, polish_analysis() asks the LLM to reword the
report and keeps the deterministic text on any failure.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rfp_screening.models.enums import Decision
from rfp_screening.models.schemas import MatchResult, ScoreBreakdown
from rfp_screening.rules.distance_rules import estimate_driving_time, format_distance
from rfp_screening.services.llm_service import (
    check_schema,
    llm_text_call,
    parse_json_object,
)

logger = logging.getLogger(__name__)

_PROMPT_PATH = Path(__file__).resolve().parent.parent / "prompts" / "narration_prompt.txt"

RECOMMENDATIONS: dict[Decision, str] = {
    Decision.GO: (
        "PROCEED WITH PROPOSAL. Your company is well-positioned for this opportunity."
    ),
    Decision.MAYBE: (
        "PROCEED WITH CAUTION. Consider addressing the gaps identified or "
        "partnering to strengthen your proposal."
    ),
    Decision.NO_GO: (
        "DO NOT PROCEED. The requirements significantly exceed current capabilities."
    ),
    Decision.HIGH_CONFIDENCE_GO: (
        "PROCEED WITH PROPOSAL. This opportunity is a strong fit; prioritise it."
    ),
    Decision.MEDIUM_CONFIDENCE_GO: (
        "PROCEED WITH PROPOSAL. Close the listed gaps before submission."
    ),
    Decision.LOW_CONFIDENCE_GO: (
        "PROCEED WITH CAUTION. Bid only if the gaps can be closed or covered by a partner."
    ),
    Decision.NO_GO_FOUR_TIER: (
        "DO NOT PROCEED. The requirements significantly exceed current capabilities."
    ),
}


def _pct(value: float) -> str:
    return f"{value:.0f}%" if float(value).is_integer() else f"{value:.1f}%"


def _geographic_phrase(score: float, distance_miles: Optional[float]) -> str:
    if score >= 100:
        phrase = "Within service area"
    elif score == 50:
        return "Location could not be verified"
    else:
        phrase = "Outside service area"
    if distance_miles is not None:
        phrase += (
            f" ({format_distance(distance_miles)}, "
            f"~{estimate_driving_time(distance_miles)} drive)"
        )
    return phrase


def _breakdown_lines(breakdown: ScoreBreakdown, distance_miles: Optional[float]) -> list[str]:
    return [
        f"• Geographic Match: {_pct(breakdown.geographic)} - "
        f"{_geographic_phrase(breakdown.geographic, distance_miles)}",
        f"• Insurance Match: {_pct(breakdown.insurance)} - "
        f"{'All requirements met' if breakdown.insurance >= 100 else 'Some gaps in coverage'}",
        f"• Services Match: {_pct(breakdown.services)} - "
        f"{'All services offered' if breakdown.services >= 100 else 'Some services not offered'}",
        f"• Certifications Match: {_pct(breakdown.certifications)} - "
        f"{'All certifications held' if breakdown.certifications >= 100 else 'Some certifications missing'}",
    ]


def render_analysis(result: MatchResult, company_name: str = "") -> str:
    """Build the human-readable report for one screening result."""
    name = company_name.strip() or "your company"
    lines = [
        f"Based on {name}'s profile, this RFP shows a {result.total_score:.1f}% match.",
        "",
        "Score Breakdown:",
        *_breakdown_lines(result.breakdown, result.distance_miles),
        "",
    ]

    if result.missing_requirements:
        lines.append("Missing Requirements:")
        lines.extend(f"• {item}" for item in result.missing_requirements)
        lines.append("")

    if result.fillable_gaps:
        lines.append("Easily Addressable Gaps:")
        lines.extend(f"• {item}" for item in result.fillable_gaps)
        lines.append("")

    lines.append(f"Recommendation: {RECOMMENDATIONS[result.decision]}")
    return "\n".join(lines)


REQUIRED_KEYS: dict[str, type] = {"analysis": str}


def polish_analysis(report: str, result: MatchResult) -> str:
    """Optional LLM rewording; returns *report* unchanged on any failure."""
    try:
        prompt = (
            _PROMPT_PATH.read_text(encoding="utf-8")
            .replace("{decision}", result.decision.value)
            .replace("{score}", f"{result.total_score:.1f}")
            .replace("{report}", report)
        )
        data = parse_json_object(llm_text_call(prompt))
        check_schema(data, REQUIRED_KEYS)
    except Exception as exc:
        logger.warning(f"[S4] Narration polish failed, keeping deterministic report: {exc}")
        return report

    polished = data["analysis"].strip()
    if not polished:
        logger.warning("[S4] Narration polish returned empty text — keeping deterministic report")
        return report
    return polished
