"""
Tests: full screening flow through the LangGraph state machine.

Run with:
    pytest rfp_screening/tests/test_pipeline.py -v
"""

import pytest

from rfp_screening.data.sample_rfps import SAMPLE_RFPS
from rfp_screening.models.enums import Decision, DecisionScheme, ExtractionSource, ScreeningStatus
from rfp_screening.models.errors import ScreeningInputError
from rfp_screening.models.state import ScreeningState
from rfp_screening.orchestration.graph import get_graph, run_screening


class TestHappyPath:
    def test_local_full_match(self, reference_profile):
        result = run_screening(SAMPLE_RFPS["glendale-city-hall"], reference_profile)

        assert result.decision == Decision.GO
        assert result.score == 100
        assert result.missing_requirements == []
        assert result.extraction_source == ExtractionSource.DETERMINISTIC
        assert result.analysis.startswith("Based on HydroJet Pros's profile")
        assert len(result.rfp_hash) == 64

    def test_score_is_rounded_total(self, reference_profile):
        result = run_screening(SAMPLE_RFPS["santa-monica-parking"], reference_profile)
        assert result.score == round(result.total_score)
        assert result.total_score == pytest.approx(result.breakdown.mean())

    def test_same_input_same_result(self, reference_profile):
        text = SAMPLE_RFPS["burbank-airport"]
        first = run_screening(text, reference_profile)
        second = run_screening(text, reference_profile)
        assert first.model_dump(exclude={"analyzed_at"}) == second.model_dump(exclude={"analyzed_at"})

    def test_out_of_area_is_one_quarter_of_total(self, reference_profile):
        result = run_screening(SAMPLE_RFPS["riverside-transit"], reference_profile)

        assert result.breakdown.geographic == 0
        assert result.total_score == pytest.approx(75.0)
        assert result.decision == Decision.GO
        assert any(item.startswith("Geographic: Location") for item in result.missing_requirements)
        assert "Outside service area" in result.analysis

    def test_poor_fit_is_no_go(self, reference_profile):
        result = run_screening(SAMPLE_RFPS["san-francisco-civic-center"], reference_profile)

        assert result.decision == Decision.NO_GO
        assert set(result.fillable_gaps) <= set(result.missing_requirements)
        assert "Certifications: sam registration" in result.fillable_gaps
        assert "DO NOT PROCEED" in result.analysis

    def test_city_only_location_resolves(self, reference_profile):
        text = (
            "Location: Monterey Park, CA\n"
            "Services: Pressure washing of shopping center\n"
            "Requirements: $1M insurance"
        )
        result = run_screening(text, reference_profile)

        assert result.requirements.location.zip is None
        assert result.breakdown.geographic == 100
        assert result.decision == Decision.GO

    def test_synonym_certifications_count_once(self, reference_profile):
        result = run_screening(
            "Davis-Bacon prevailing wage applies. SAM registration required.", reference_profile
        )

        assert result.breakdown.certifications == 50
        cert_gaps = [m for m in result.missing_requirements if m.startswith("Certifications:")]
        assert cert_gaps == ["Certifications: sam registration"]

    def test_four_tier_scheme(self, reference_profile):
        result = run_screening(
            SAMPLE_RFPS["glendale-city-hall"], reference_profile, scheme="four_tier"
        )
        assert result.scheme == DecisionScheme.FOUR_TIER
        assert result.decision == Decision.HIGH_CONFIDENCE_GO

    def test_scheme_from_settings(self, monkeypatch, reference_profile):
        from rfp_screening.config import get_settings

        monkeypatch.setenv("DECISION_SCHEME", "four_tier")
        get_settings.cache_clear()
        result = run_screening(SAMPLE_RFPS["glendale-city-hall"], reference_profile)
        assert result.scheme == DecisionScheme.FOUR_TIER

    def test_llm_requested_without_credential(self, reference_profile):
        result = run_screening(SAMPLE_RFPS["glendale-city-hall"], reference_profile, use_llm=True)
        assert result.extraction_source == ExtractionSource.DETERMINISTIC
        assert result.decision == Decision.GO

    def test_camel_case_profile_dict(self):
        profile = {
            "basics": {"companyName": "Dict Wash", "zip": "91201", "serviceRadius": 40},
            "insurance": {"generalLiability": {"amount": 1000000}, "workersComp": {"hasIt": True}},
            "services": {"sidewalks": True, "gumRemoval": True},
        }
        result = run_screening(SAMPLE_RFPS["monterey-park-sidewalks"], profile)
        assert result.breakdown.geographic == 100
        assert result.breakdown.insurance == 100
        assert result.breakdown.services == 100


class TestInputValidation:
    @pytest.mark.parametrize("text", ["", "   \n ", None, 123])
    def test_unusable_rfp_text(self, reference_profile, text):
        with pytest.raises(ScreeningInputError):
            run_screening(text, reference_profile)

    def test_missing_profile(self):
        with pytest.raises(ScreeningInputError):
            run_screening("General Liability $1M", None)

    def test_invalid_profile(self):
        with pytest.raises(ScreeningInputError):
            run_screening("General Liability $1M", {"basics": {"serviceRadius": "far"}})

    def test_profile_without_company_name(self):
        with pytest.raises(ScreeningInputError, match="company name"):
            run_screening("General Liability $1M", {"basics": {"zip": "91201"}})

    def test_unknown_scheme(self, reference_profile):
        with pytest.raises(ScreeningInputError, match="scheme"):
            run_screening("General Liability $1M", reference_profile, scheme="five_tier")

    def test_input_error_is_a_value_error(self, reference_profile):
        with pytest.raises(ValueError):
            run_screening("", reference_profile)


class TestGraph:
    def test_every_stage_runs_and_audits(self, reference_profile):
        state = ScreeningState(rfp_text=SAMPLE_RFPS["burbank-airport"], profile=reference_profile)
        state.add_audit("ORCHESTRATION", "received")

        final = ScreeningState(**get_graph().invoke(state.model_dump()))

        assert final.status == ScreeningStatus.COMPLETED
        assert [entry.stage for entry in final.audit_trail] == [
            "ORCHESTRATION",
            "S1_EXTRACTION",
            "S2_SCORING",
            "S3_DECISION",
            "S4_NARRATION",
        ]
        assert [entry.state_version for entry in final.audit_trail] == [1, 2, 3, 4, 5]
        assert set(final.dimension_scores) == {
            "geographic", "insurance", "services", "certifications",
        }
        assert final.analysis
