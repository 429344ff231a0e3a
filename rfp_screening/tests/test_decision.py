"""
Tests: aggregation, threshold tables and fillable-gap separation.

Run with:
    pytest rfp_screening/tests/test_decision.py -v
"""

import pytest

from rfp_screening.models.enums import Decision, DecisionScheme, GapCategory
from rfp_screening.models.schemas import DimensionScore, RequirementGap
from rfp_screening.rules import DecisionRules


def _gap(category: GapCategory, item: str) -> RequirementGap:
    return RequirementGap(category=category, item=item)


class TestClassification:
    @pytest.mark.parametrize("total,expected", [
        (100, Decision.GO),
        (75, Decision.GO),
        (74.99, Decision.MAYBE),
        (50, Decision.MAYBE),
        (49.9, Decision.NO_GO),
        (0, Decision.NO_GO),
    ])
    def test_three_tier(self, total, expected):
        assert DecisionRules().classify(total, DecisionScheme.THREE_TIER) == expected

    @pytest.mark.parametrize("total,expected", [
        (90, Decision.HIGH_CONFIDENCE_GO),
        (89.9, Decision.MEDIUM_CONFIDENCE_GO),
        (70, Decision.MEDIUM_CONFIDENCE_GO),
        (50, Decision.LOW_CONFIDENCE_GO),
        (10, Decision.NO_GO_FOUR_TIER),
    ])
    def test_four_tier(self, total, expected):
        assert DecisionRules().classify(total, DecisionScheme.FOUR_TIER) == expected

    def test_four_tier_no_go_serialises_with_underscore(self):
        assert DecisionRules().classify(10, DecisionScheme.FOUR_TIER).value == "NO_GO"
        assert DecisionRules().classify(10, DecisionScheme.THREE_TIER).value == "NO-GO"


class TestEvaluate:
    def test_out_of_area_but_otherwise_perfect(self):
        # one dimension at 0 and three at 100 is a mean of 75, not a veto
        scores = {
            "geographic": DimensionScore(
                score=0,
                gaps=[_gap(GapCategory.GEOGRAPHIC, "Location 52 miles away exceeds 40-mile service radius")],
                distance_miles=52.0,
            ),
            "insurance": DimensionScore(score=100),
            "services": DimensionScore(score=100),
            "certifications": DimensionScore(score=100),
        }
        result = DecisionRules().evaluate(scores)
        assert result.total_score == pytest.approx(75.0)
        assert result.decision == Decision.GO
        assert result.distance_miles == 52.0
        assert len(result.missing_requirements) == 1
        assert result.missing_requirements[0].startswith("Geographic: ")
        assert result.fillable_gaps == []

    def test_missing_dimension_counts_as_satisfied(self):
        result = DecisionRules().evaluate({"services": DimensionScore(score=0)})
        assert result.breakdown.geographic == 100
        assert result.breakdown.services == 0
        assert result.total_score == pytest.approx(75.0)

    def test_scores_are_clamped(self):
        result = DecisionRules().evaluate({
            "geographic": DimensionScore(score=140),
            "insurance": DimensionScore(score=-20),
        })
        assert result.breakdown.geographic == 100
        assert result.breakdown.insurance == 0

    def test_fillable_gaps_are_subset_of_missing(self):
        scores = {
            "insurance": DimensionScore(score=50, gaps=[
                _gap(GapCategory.INSURANCE, "Umbrella: $2,000,000 required"),
                _gap(GapCategory.INSURANCE, "General Liability: $5,000,000 required (have $2,000,000)"),
            ]),
            "certifications": DimensionScore(score=0, gaps=[
                _gap(GapCategory.CERTIFICATIONS, "sam registration"),
                _gap(GapCategory.CERTIFICATIONS, "cage code"),
                _gap(GapCategory.CERTIFICATIONS, "epa"),
                _gap(GapCategory.OPERATIONAL, "Night work availability"),
                _gap(GapCategory.EQUIPMENT, "Aerial lift access"),
            ]),
        }
        result = DecisionRules().evaluate(scores)

        assert set(result.fillable_gaps) <= set(result.missing_requirements)
        assert result.fillable_gaps == [
            "Insurance: Umbrella: $2,000,000 required",
            "Certifications: sam registration",
            "Certifications: cage code",
            "Operational: Night work availability",
        ]
        assert "Equipment: Aerial lift access" in result.missing_requirements
        assert "Certifications: epa" in result.missing_requirements

    def test_duplicate_gaps_listed_once(self):
        scores = {
            "services": DimensionScore(score=0, gaps=[
                _gap(GapCategory.SERVICES, "fleet washing"),
                _gap(GapCategory.SERVICES, "fleet washing"),
            ]),
        }
        result = DecisionRules().evaluate(scores)
        assert result.missing_requirements == ["Services: fleet washing"]

    def test_four_tier_evaluation(self):
        scores = {"certifications": DimensionScore(score=60)}
        result = DecisionRules().evaluate(scores, DecisionScheme.FOUR_TIER)
        assert result.total_score == pytest.approx(90.0)
        assert result.decision == Decision.HIGH_CONFIDENCE_GO
        assert result.scheme == DecisionScheme.FOUR_TIER
