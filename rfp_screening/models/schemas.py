"""
Reusable data schemas for the screening pipeline.
Each schema represents a clearly-bounded data object produced by one stage.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field

from .enums import Decision, DecisionScheme, ExtractionSource, GapCategory
from .requirements import ExtractedRequirements


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── S2 Scoring ───────────────────────────────────────────


class RequirementGap(BaseModel):
    """One requirement the profile does not satisfy."""
    category: GapCategory
    item: str
    detail: str = ""  # e.g. current coverage, distance
    fillable: bool = False

    @property
    def label(self) -> str:
        return f"{self.category.label}: {self.item}"


class DimensionScore(BaseModel):
    """Score for one dimension plus the requirement strings that failed."""
    score: float = 100.0  # 0-100
    unmatched: list[str] = []
    gaps: list[RequirementGap] = []
    distance_miles: Optional[float] = None  # geographic only


class ScoreBreakdown(BaseModel):
    geographic: float = 100.0
    insurance: float = 100.0
    services: float = 100.0
    certifications: float = 100.0

    def mean(self) -> float:
        return (self.geographic + self.insurance + self.services + self.certifications) / 4


# ── S3 Decision ──────────────────────────────────────────


class MatchResult(BaseModel):
    total_score: float = 0.0
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    missing_requirements: list[str] = []
    fillable_gaps: list[str] = []
    gaps: list[RequirementGap] = []
    decision: Decision = Decision.NO_GO
    scheme: DecisionScheme = DecisionScheme.THREE_TIER
    distance_miles: Optional[float] = None


# ── Final result ─────────────────────────────────────────


class AnalysisResult(BaseModel):
    """What the result consumer (UI or batch caller) receives."""
    decision: Decision
    score: int  # rounded total
    total_score: float
    breakdown: ScoreBreakdown
    missing_requirements: list[str] = []
    fillable_gaps: list[str] = []
    analysis: str = ""
    scheme: DecisionScheme = DecisionScheme.THREE_TIER
    extraction_source: ExtractionSource = ExtractionSource.DETERMINISTIC
    requirements: ExtractedRequirements = Field(default_factory=ExtractedRequirements)
    rfp_hash: str = ""
    analyzed_at: datetime = Field(default_factory=_utcnow)


# ── Proposal generation ──────────────────────────────────


class ProposalDraft(BaseModel):
    cover_letter: str = ""
    executive_summary: str = ""
    technical_approach: str = ""
    pricing: str = ""
    why_choose_us: str = ""
    generated_by: ExtractionSource = ExtractionSource.DETERMINISTIC


# ── Profile validation ───────────────────────────────────


class MissingField(BaseModel):
    section: str
    field: str
    label: str


class SectionScores(BaseModel):
    basics: float = 0.0
    insurance: float = 0.0
    services: float = 0.0
    equipment: float = 0.0
    certifications: float = 0.0
    operational: float = 0.0


class ProfileValidationResult(BaseModel):
    completeness: int = 0  # 0-100
    section_scores: SectionScores = Field(default_factory=SectionScores)
    missing_critical: list[MissingField] = []
    suggestions: list[str] = []
    unlocked_rfps: int = 0


# ── Benchmark harness ────────────────────────────────────


class ScoreRange(BaseModel):
    min: float = 0.0
    max: float = 100.0


class BenchmarkCase(BaseModel):
    """A labelled RFP with the outcome the engine is expected to produce."""
    case_id: str
    name: str
    content: str
    expected_score: ScoreRange = Field(default_factory=ScoreRange)
    expected_decision: Optional[Decision] = None
    expected_geographic: Optional[float] = None
    expected_insurance: Optional[float] = None
    expected_services: Optional[float] = None
    expected_certifications: Optional[float] = None
    notes: str = ""


class BenchmarkCaseResult(BaseModel):
    case_id: str
    name: str
    passed: bool
    score: int
    decision: Decision
    breakdown: ScoreBreakdown
    failures: list[str] = []


class BenchmarkReport(BaseModel):
    results: list[BenchmarkCaseResult] = []
    passed: int = 0
    total: int = 0

    @property
    def accuracy(self) -> float:
        return (self.passed / self.total * 100) if self.total else 0.0


# ── Audit Trail ──────────────────────────────────────────


class AuditEntry(BaseModel):
    timestamp: datetime = Field(default_factory=_utcnow)
    stage: str
    action: str
    details: str = ""
    state_version: int = 0
