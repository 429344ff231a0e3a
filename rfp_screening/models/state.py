"""
LangGraph shared state — the single object that flows through every stage.

Design rules:
  1. Each field is "owned" by one stage (see comments).
  2. Stages may READ any field but should only WRITE to their owned fields.
  3. One state object per analysis; nothing is shared between runs.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .enums import DecisionScheme, ExtractionSource, ScreeningStatus
from .profile import CompanyProfile
from .requirements import ExtractedRequirements
from .schemas import AuditEntry, DimensionScore, MatchResult


class ScreeningState(BaseModel):
    """The state passed through every LangGraph node."""

    # ── Pipeline control ─────────────────────────────────
    status: ScreeningStatus = ScreeningStatus.RECEIVED
    current_stage: str = ""
    error_message: str = ""
    state_version: int = 0

    # ── Inputs (owner: orchestration) ────────────────────
    rfp_text: str = ""
    rfp_hash: str = ""
    profile: CompanyProfile = Field(default_factory=CompanyProfile)
    scheme: DecisionScheme = DecisionScheme.THREE_TIER
    use_llm_extraction: bool = False
    use_llm_narration: bool = False

    # ── S1 Extraction (owner: S1) ────────────────────────
    requirements: ExtractedRequirements = Field(default_factory=ExtractedRequirements)
    extraction_source: ExtractionSource = ExtractionSource.DETERMINISTIC

    # ── S2 Scoring (owner: S2) ───────────────────────────
    dimension_scores: dict[str, DimensionScore] = Field(default_factory=dict)

    # ── S3 Decision (owner: S3) ──────────────────────────
    match_result: MatchResult = Field(default_factory=MatchResult)

    # ── S4 Narration (owner: S4) ─────────────────────────
    analysis: str = ""

    # ── Audit trail (append-only) ────────────────────────
    audit_trail: list[AuditEntry] = Field(default_factory=list)

    def add_audit(self, stage: str, action: str, details: str = "") -> None:
        self.state_version += 1
        self.audit_trail.append(
            AuditEntry(
                stage=stage,
                action=action,
                details=details,
                state_version=self.state_version,
            )
        )
