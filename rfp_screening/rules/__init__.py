"""
Rules — the deterministic scoring layer.

Agents import the scorers from this package:
    from rfp_screening.rules import GeographicRules, InsuranceRules, ...
"""

from .certification_rules import CertificationRules
from .decision_rules import DecisionRules
from .distance_rules import calculate_distance, is_within_radius
from .geographic_rules import GeographicRules
from .insurance_rules import InsuranceRules
from .rules_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .services_rules import ServicesRules

__all__ = [
    "CertificationRules",
    "DecisionRules",
    "GeographicRules",
    "InsuranceRules",
    "ServicesRules",
    "ScoringConfig",
    "DEFAULT_SCORING_CONFIG",
    "calculate_distance",
    "is_within_radius",
]
