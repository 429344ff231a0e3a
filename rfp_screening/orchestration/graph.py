"""
LangGraph State Machine — 4-stage RFP screening pipeline.

    S1 extraction → S2 scoring → S3 decision → S4 narration → END

All nodes delegate to agent.process(state), which returns an updated
state dict that LangGraph merges automatically. The pipeline is linear:
every stage runs for every RFP and no stage short-circuits the rest.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from langgraph.graph import END, StateGraph
from pydantic import ValidationError

from rfp_screening.agents import (
    DecisionAgent,
    ExtractionAgent,
    NarrationAgent,
    ScoringAgent,
)
from rfp_screening.config import get_settings
from rfp_screening.models.enums import DecisionScheme
from rfp_screening.models.errors import ScreeningInputError
from rfp_screening.models.profile import CompanyProfile
from rfp_screening.models.schemas import AnalysisResult
from rfp_screening.models.state import ScreeningState
from rfp_screening.utils.hashing import sha256_hash, short_hash

logger = logging.getLogger(__name__)

# ── Instantiate agents (singletons for the graph) ────────

_s1 = ExtractionAgent()
_s2 = ScoringAgent()
_s3 = DecisionAgent()
_s4 = NarrationAgent()


# ── Build the graph ──────────────────────────────────────

def build_graph():
    """
    Construct and compile the screening state machine.
    Returns a compiled graph ready to invoke.
    """
    graph = StateGraph(dict)

    graph.add_node("s1_extraction", _s1.process)
    graph.add_node("s2_scoring", _s2.process)
    graph.add_node("s3_decision", _s3.process)
    graph.add_node("s4_narration", _s4.process)

    graph.set_entry_point("s1_extraction")
    graph.add_edge("s1_extraction", "s2_scoring")
    graph.add_edge("s2_scoring", "s3_decision")
    graph.add_edge("s3_decision", "s4_narration")
    graph.add_edge("s4_narration", END)

    return graph.compile()


_compiled_graph = None


def get_graph():
    global _compiled_graph
    if _compiled_graph is None:
        _compiled_graph = build_graph()
    return _compiled_graph


# ── Input validation ─────────────────────────────────────

def validate_inputs(
    rfp_text: Any,
    profile: Union[CompanyProfile, dict[str, Any], None],
) -> CompanyProfile:
    """Reject unusable input before any scoring is attempted."""
    if not isinstance(rfp_text, str):
        raise ScreeningInputError(f"RFP text must be a string, got {type(rfp_text).__name__}")
    if not rfp_text.strip():
        raise ScreeningInputError("RFP text is empty")

    if profile is None:
        raise ScreeningInputError("Company profile is required")
    if not isinstance(profile, CompanyProfile):
        try:
            profile = CompanyProfile.model_validate(profile)
        except ValidationError as exc:
            raise ScreeningInputError(f"Invalid company profile: {exc.error_count()} errors") from exc

    if not profile.company_name:
        raise ScreeningInputError("Company profile has no company name")
    return profile


def _resolve_scheme(scheme: Union[DecisionScheme, str, None]) -> DecisionScheme:
    if scheme is None:
        scheme = get_settings().decision_scheme
    try:
        return DecisionScheme(scheme)
    except ValueError as exc:
        raise ScreeningInputError(f"Unknown decision scheme: {scheme}") from exc


# ── Entry point ──────────────────────────────────────────

def run_screening(
    rfp_text: str,
    profile: Union[CompanyProfile, dict[str, Any]],
    scheme: Union[DecisionScheme, str, None] = None,
    use_llm: bool | None = None,
) -> AnalysisResult:
    """
    Screen one RFP against one company profile.

    Raises ScreeningInputError for empty / non-string RFP text, an invalid
    profile, or a profile with no company name. Nothing else raises: LLM
    failures fall back to the deterministic path inside the stages.
    """
    company = validate_inputs(rfp_text, profile)
    resolved_scheme = _resolve_scheme(scheme)

    settings = get_settings()
    initial = ScreeningState(
        rfp_text=rfp_text,
        rfp_hash=sha256_hash(rfp_text),
        profile=company,
        scheme=resolved_scheme,
        use_llm_extraction=settings.use_llm_extraction if use_llm is None else use_llm,
        use_llm_narration=settings.use_llm_narration if use_llm is None else use_llm,
    )
    initial.add_audit("ORCHESTRATION", "received", f"rfp_hash={short_hash(rfp_text)}")

    logger.info(
        f"Screening RFP {short_hash(rfp_text)} ({len(rfp_text)} chars) for "
        f"'{company.company_name}' [{resolved_scheme.value}]"
    )

    final = ScreeningState(**get_graph().invoke(initial.model_dump()))
    match = final.match_result

    return AnalysisResult(
        decision=match.decision,
        score=round(match.total_score),
        total_score=match.total_score,
        breakdown=match.breakdown,
        missing_requirements=match.missing_requirements,
        fillable_gaps=match.fillable_gaps,
        analysis=final.analysis,
        scheme=match.scheme,
        extraction_source=final.extraction_source,
        requirements=final.requirements,
        rfp_hash=final.rfp_hash,
    )
