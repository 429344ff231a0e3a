"""
API routes — thin HTTP layer that delegates to the orchestration and services.

Routes:
  GET  /health                     → API health check
  POST /api/screening/analyze      → Screen an RFP (inline profile or company_id)
  POST /api/screening/extract      → Requirements only, no scoring
  POST /api/screening/benchmark    → Run labelled cases against a profile
  POST /api/profile/validate       → Profile completeness report
  POST /api/proposal/generate      → First-draft proposal sections
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from rfp_screening.config import get_settings
from rfp_screening.data.sample_rfps import BENCHMARK_CASES
from rfp_screening.models.enums import DecisionScheme, ExtractionSource
from rfp_screening.models.errors import ScreeningInputError
from rfp_screening.models.profile import CompanyProfile
from rfp_screening.models.requirements import ExtractedRequirements
from rfp_screening.models.schemas import (
    AnalysisResult,
    BenchmarkCase,
    BenchmarkReport,
    ProfileValidationResult,
    ProposalDraft,
)
from rfp_screening.orchestration.graph import run_screening
from rfp_screening.persistence.profile_repository import (
    ProfileRepository,
    build_profile_repository,
)
from rfp_screening.services.benchmark_service import BenchmarkService
from rfp_screening.services.extraction_service import extract_requirements
from rfp_screening.services.profile_validation_service import ProfileValidationService
from rfp_screening.services.proposal_service import ProposalService

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
screening_router = APIRouter()
profile_router = APIRouter()
proposal_router = APIRouter()

_repository: ProfileRepository | None = None


def get_profile_repository() -> ProfileRepository:
    global _repository
    if _repository is None:
        _repository = build_profile_repository()
    return _repository


# ── Request / response schemas ───────────────────────────

class ProfileSource(BaseModel):
    profile: Optional[CompanyProfile] = None
    company_id: Optional[str] = None


class AnalyzeRequest(ProfileSource):
    rfp_text: str
    scheme: Optional[DecisionScheme] = None
    use_llm: Optional[bool] = None


class ExtractRequest(BaseModel):
    rfp_text: str
    use_llm: Optional[bool] = None


class ExtractResponse(BaseModel):
    requirements: ExtractedRequirements
    extraction_source: ExtractionSource


class BenchmarkRequest(ProfileSource):
    cases: list[BenchmarkCase] = Field(default_factory=list)
    scheme: DecisionScheme = DecisionScheme.THREE_TIER


class ProposalRequest(ProfileSource):
    rfp_text: str
    analysis: Optional[AnalysisResult] = None
    use_llm: Optional[bool] = None


def _resolve_profile(body: ProfileSource, repository: ProfileRepository) -> CompanyProfile:
    if body.profile is not None:
        return body.profile
    if body.company_id:
        profile = repository.get_profile(body.company_id)
        if profile is None:
            raise HTTPException(status_code=404, detail=f"No profile for company_id '{body.company_id}'")
        return profile
    raise HTTPException(status_code=400, detail="Provide either 'profile' or 'company_id'")


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check():
    settings = get_settings()
    return {
        "status": "ok",
        "llm_configured": settings.llm_configured,
        "decision_scheme": settings.decision_scheme,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Screening ────────────────────────────────────────────

@screening_router.post("/analyze", response_model=AnalysisResult)
def analyze_rfp(
    body: AnalyzeRequest,
    repository: ProfileRepository = Depends(get_profile_repository),
):
    profile = _resolve_profile(body, repository)
    try:
        return run_screening(body.rfp_text, profile, scheme=body.scheme, use_llm=body.use_llm)
    except ScreeningInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@screening_router.post("/extract", response_model=ExtractResponse)
def extract(body: ExtractRequest):
    if not body.rfp_text.strip():
        raise HTTPException(status_code=400, detail="RFP text is empty")
    requirements, source = extract_requirements(body.rfp_text, use_llm=body.use_llm)
    return ExtractResponse(requirements=requirements, extraction_source=source)


@screening_router.post("/benchmark", response_model=BenchmarkReport)
def benchmark(
    body: BenchmarkRequest,
    repository: ProfileRepository = Depends(get_profile_repository),
):
    profile = _resolve_profile(body, repository)
    cases = body.cases or BENCHMARK_CASES
    try:
        return BenchmarkService().run(cases, profile, scheme=body.scheme)
    except ScreeningInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


# ── Profile ──────────────────────────────────────────────

@profile_router.post("/validate", response_model=ProfileValidationResult)
def validate_profile(body: CompanyProfile):
    return ProfileValidationService().validate(body)


# ── Proposal ─────────────────────────────────────────────

@proposal_router.post("/generate", response_model=ProposalDraft)
def generate_proposal(
    body: ProposalRequest,
    repository: ProfileRepository = Depends(get_profile_repository),
):
    profile = _resolve_profile(body, repository)
    try:
        return ProposalService().generate(body.rfp_text, profile, body.analysis, use_llm=body.use_llm)
    except ScreeningInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
