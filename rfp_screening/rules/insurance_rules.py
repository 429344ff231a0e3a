"""
Insurance Rules — weighted-point comparison of required vs held coverage.

General Liability 40 pts, Workers Comp 30, Commercial Auto 20, Umbrella 5,
Professional 5. Only the policies the RFP names count toward the total;
under-insured GL and auto policies earn proportional credit up to a cap.
"""

from __future__ import annotations

import logging
from typing import Optional

from rfp_screening.models.enums import GapCategory
from rfp_screening.models.profile import ProfileInsurance
from rfp_screening.models.requirements import InsuranceRequirement
from rfp_screening.models.schemas import DimensionScore, RequirementGap
from rfp_screening.rules.rules_config import DEFAULT_SCORING_CONFIG, InsuranceConfig

logger = logging.getLogger(__name__)


def _money(amount: float) -> str:
    return f"${amount:,.0f}"


class InsuranceRules:
    """Scores insurance requirements against the profile's policies."""

    def __init__(self, config: InsuranceConfig | None = None):
        self.config = config or DEFAULT_SCORING_CONFIG.insurance

    def score(self, required: InsuranceRequirement, actual: ProfileInsurance) -> DimensionScore:
        cfg = self.config

        if not required.specified:
            return DimensionScore(score=self._baseline(actual))

        total = 0.0
        earned = 0.0
        gaps: list[RequirementGap] = []
        unmatched: list[str] = []

        # ── General Liability ────────────────────────────
        if required.general_liability is not None:
            total += cfg.general_liability_points
            points, gap = self._amount_points(
                "General Liability",
                required.general_liability,
                actual.general_liability.amount,
                cfg.general_liability_points,
                cfg.general_liability_partial_cap,
            )
            earned += points
            if gap:
                gaps.append(gap)

        # ── Workers Compensation ─────────────────────────
        if required.workers_comp is not None:
            total += cfg.workers_comp_points
            if actual.workers_comp.has_it == required.workers_comp:
                earned += cfg.workers_comp_points
            else:
                gaps.append(RequirementGap(
                    category=GapCategory.INSURANCE,
                    item="Workers Compensation required",
                    detail="no workers compensation policy on file",
                ))

        # ── Commercial Auto ──────────────────────────────
        if required.commercial_auto is not None:
            total += cfg.commercial_auto_points
            points, gap = self._amount_points(
                "Commercial Auto",
                required.commercial_auto,
                actual.commercial_auto.amount,
                cfg.commercial_auto_points,
                cfg.commercial_auto_partial_cap,
            )
            earned += points
            if gap:
                gaps.append(gap)

        # ── Umbrella / Professional (all-or-nothing) ─────
        for name, req_amount, held, points in (
            ("Umbrella", required.umbrella, actual.umbrella.amount, cfg.umbrella_points),
            ("Professional Liability", required.professional, actual.professional.amount,
             cfg.professional_points),
        ):
            if req_amount is None:
                continue
            total += points
            if held and held >= req_amount:
                earned += points
            else:
                gaps.append(self._shortfall_gap(name, req_amount, held))

        unmatched = [g.item for g in gaps]
        score = (earned / total) * 100 if total > 0 else 100.0
        logger.debug(f"[insurance] earned {earned:.1f}/{total:.0f} points → {score:.1f}%")
        return DimensionScore(score=score, unmatched=unmatched, gaps=gaps)

    # ── Helpers ──────────────────────────────────────────

    def _baseline(self, actual: ProfileInsurance) -> float:
        """Flat 100-point heuristic when the RFP names no insurance."""
        cfg = self.config
        earned = 0.0
        if actual.general_liability.amount:
            earned += cfg.baseline_general_liability
        if actual.workers_comp.has_it:
            earned += cfg.baseline_workers_comp
        if actual.commercial_auto.amount:
            earned += cfg.baseline_commercial_auto
        return earned

    @staticmethod
    def _amount_points(
        name: str,
        required: float,
        held: Optional[float],
        full_points: float,
        partial_cap: float,
    ) -> tuple[float, Optional[RequirementGap]]:
        if held and held >= required:
            return full_points, None
        points = 0.0
        if held and required > 0:
            points = min(partial_cap, (held / required) * full_points)
        return points, InsuranceRules._shortfall_gap(name, required, held)

    @staticmethod
    def _shortfall_gap(name: str, required: float, held: Optional[float]) -> RequirementGap:
        item = f"{name}: {_money(required)} required"
        if held:
            item += f" (have {_money(held)})"
        return RequirementGap(
            category=GapCategory.INSURANCE,
            item=item,
            detail=_money(held) if held else "no coverage on file",
        )
