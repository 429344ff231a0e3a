"""
Decision Rules — combine the four dimension scores into a GO/NO-GO call.

total = unweighted mean of geographic, insurance, services, certifications.
The same total is classified through whichever threshold table the caller
selects (three-tier GO/MAYBE/NO-GO or four-tier confidence bands).
"""

from __future__ import annotations

import logging

from rfp_screening.models.enums import Decision, DecisionScheme, Dimension, GapCategory
from rfp_screening.models.schemas import (
    DimensionScore,
    MatchResult,
    RequirementGap,
    ScoreBreakdown,
)
from rfp_screening.rules.certification_rules import contains_term
from rfp_screening.rules.rules_config import (
    DEFAULT_SCORING_CONFIG,
    FillableConfig,
    ThresholdConfig,
)

logger = logging.getLogger(__name__)


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


class DecisionRules:
    """Aggregates dimension scores, classifies, and separates fillable gaps."""

    def __init__(
        self,
        thresholds: ThresholdConfig | None = None,
        fillable: FillableConfig | None = None,
    ):
        self.thresholds = thresholds or DEFAULT_SCORING_CONFIG.thresholds
        self.fillable = fillable or DEFAULT_SCORING_CONFIG.fillable

    # ── Classification ───────────────────────────────────

    def table_for(self, scheme: DecisionScheme) -> dict[str, float]:
        if scheme == DecisionScheme.FOUR_TIER:
            return self.thresholds.four_tier
        return self.thresholds.three_tier

    def classify(self, total_score: float, scheme: DecisionScheme = DecisionScheme.THREE_TIER) -> Decision:
        table = self.table_for(scheme)
        for name, minimum in sorted(table.items(), key=lambda kv: kv[1], reverse=True):
            if total_score >= minimum:
                return Decision(name)
        # below every threshold: lowest tier
        return Decision(min(table.items(), key=lambda kv: kv[1])[0])

    # ── Gaps ─────────────────────────────────────────────

    def is_fillable(self, gap: RequirementGap) -> bool:
        return any(
            contains_term(gap.item, term)
            for term in self.fillable.terms_for(gap.category.value)
        )

    # ── Aggregate ────────────────────────────────────────

    def evaluate(
        self,
        scores: dict[str, DimensionScore],
        scheme: DecisionScheme = DecisionScheme.THREE_TIER,
    ) -> MatchResult:
        breakdown = ScoreBreakdown(**{
            dim.value: _clamp(scores[dim.value].score) if dim.value in scores else 100.0
            for dim in Dimension
        })
        total = _clamp(breakdown.mean())

        gaps: list[RequirementGap] = []
        seen: set[str] = set()
        for dim in Dimension:
            dim_score = scores.get(dim.value)
            if dim_score is None:
                continue
            for gap in dim_score.gaps:
                if gap.label in seen:
                    continue
                seen.add(gap.label)
                gaps.append(gap.model_copy(update={"fillable": self.is_fillable(gap)}))

        missing = [g.label for g in gaps]
        fillable = [g.label for g in gaps if g.fillable]
        decision = self.classify(total, scheme)

        geo = scores.get(Dimension.GEOGRAPHIC.value)
        logger.debug(
            f"[decision] total={total:.1f} scheme={scheme.value} → {decision.value} "
            f"({len(missing)} missing, {len(fillable)} fillable)"
        )
        return MatchResult(
            total_score=total,
            breakdown=breakdown,
            missing_requirements=missing,
            fillable_gaps=fillable,
            gaps=gaps,
            decision=decision,
            scheme=scheme,
            distance_miles=geo.distance_miles if geo else None,
        )
