"""
Rules Config — point weights, thresholds and allow-lists used by the scorers.

The defaults here are the production values. Callers may pass a modified
copy to any rules class (tests do this to probe boundaries); nothing reads
configuration from a remote store at scoring time.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ── Config models ────────────────────────────────────────

class GeographicConfig(BaseModel):
    """Geographic scoring policy."""
    in_radius_score: float = 100.0
    out_of_radius_score: float = 0.0
    unknown_distance_score: float = 50.0  # unresolvable address, not a violation
    no_radius_score: float = 100.0


class InsuranceConfig(BaseModel):
    """Insurance point system. Only policies the RFP mentions are counted."""
    general_liability_points: float = 40.0
    general_liability_partial_cap: float = 20.0
    workers_comp_points: float = 30.0
    commercial_auto_points: float = 20.0
    commercial_auto_partial_cap: float = 10.0
    umbrella_points: float = 5.0
    professional_points: float = 5.0
    # Flat heuristic used when the RFP names no insurance at all (out of 100)
    baseline_general_liability: float = 50.0
    baseline_workers_comp: float = 30.0
    baseline_commercial_auto: float = 20.0


class CertificationConfig(BaseModel):
    """Certification / equipment / operational readiness scoring."""
    partial_credit: float = 0.5
    # Recognised standards the profile cannot model; they earn partial credit
    unverifiable_terms: list[str] = ["iso"]


class FillableConfig(BaseModel):
    """Gaps obtainable without new core capability, per category."""
    insurance: list[str] = ["umbrella", "professional"]
    certifications: list[str] = [
        "business license",
        "sam registration",
        "sam.gov",
        "sam",
        "cage code",
        "cage",
    ]
    operational: list[str] = ["night", "weekend"]

    def terms_for(self, category: str) -> list[str]:
        return list(getattr(self, category, []) or [])


class ThresholdConfig(BaseModel):
    """Minimum total score per decision tier."""
    three_tier: dict[str, float] = {
        "GO": 75.0,
        "MAYBE": 50.0,
        "NO-GO": 0.0,
    }
    four_tier: dict[str, float] = {
        "HIGH_CONFIDENCE_GO": 90.0,
        "MEDIUM_CONFIDENCE_GO": 70.0,
        "LOW_CONFIDENCE_GO": 50.0,
        "NO_GO": 0.0,
    }


class ScoringConfig(BaseModel):
    geographic: GeographicConfig = Field(default_factory=GeographicConfig)
    insurance: InsuranceConfig = Field(default_factory=InsuranceConfig)
    certifications: CertificationConfig = Field(default_factory=CertificationConfig)
    fillable: FillableConfig = Field(default_factory=FillableConfig)
    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)


DEFAULT_SCORING_CONFIG = ScoringConfig()
