"""
Tests: deterministic requirement extraction and the LLM fallback path.

Run with:
    pytest rfp_screening/tests/test_extraction.py -v
"""

import json

import pytest

from rfp_screening.models.enums import ExtractionSource
from rfp_screening.models.requirements import ExtractedRequirements
from rfp_screening.services import extraction_service
from rfp_screening.services.extraction_service import (
    LLMRequirementExtractor,
    RequirementExtractor,
    extract_requirements,
)
from rfp_screening.services.llm_service import LLMUnavailableError


@pytest.fixture
def extractor():
    return RequirementExtractor()


class TestInsurance:
    @pytest.mark.parametrize("text,expected", [
        ("General Liability insurance of $1M minimum", 1_000_000),
        ("General liability: $2,500,000 per occurrence", 2_500_000),
        ("general liability coverage $500k", 500_000),
        ("General Liability limits of $1.5 million", 1_500_000),
    ])
    def test_general_liability_amounts(self, extractor, text, expected):
        assert extractor.extract(text).insurance.general_liability == expected

    def test_bare_dollar_amount_is_not_scaled(self, extractor):
        # "m" in "minimum" is not a million suffix
        result = extractor.extract("General Liability $1 minimum per claim")
        assert result.insurance.general_liability == 1

    @pytest.mark.parametrize("text", [
        "Workers comp required",
        "Proof of workers' compensation insurance",
        "Workman's compensation certificate",
    ])
    def test_workers_comp_phrases(self, extractor, text):
        assert extractor.extract(text).insurance.workers_comp is True

    def test_other_policies(self, extractor):
        result = extractor.extract(
            "Commercial auto liability $1M. Umbrella policy $2M. "
            "Professional liability $500k."
        )
        assert result.insurance.commercial_auto == 1_000_000
        assert result.insurance.umbrella == 2_000_000
        assert result.insurance.professional == 500_000

    def test_no_insurance_mentioned(self, extractor):
        assert not extractor.extract("Quarterly plaza cleaning.").insurance.specified


class TestLocation:
    def test_zip_code(self, extractor):
        assert extractor.extract("Site: 613 E Broadway, Glendale, CA 91206").location.zip == "91206"

    def test_zip_plus_four_truncated(self, extractor):
        assert extractor.extract("Glendale, CA 91201-1234").location.zip == "91201"

    def test_city_kept_alongside_zip(self, extractor):
        location = extractor.extract("Site: 613 E Broadway, Glendale, CA 91206").location
        assert location.zip == "91206"
        assert location.city == "Glendale"

    def test_city_without_zip(self, extractor):
        location = extractor.extract("Location: Monterey Park, CA").location
        assert location.zip is None
        assert location.city == "Monterey Park"
        assert location.as_query() == "Monterey Park, CA"

    def test_dollar_amount_is_not_a_zip(self, extractor):
        result = extractor.extract("Budget not to exceed $50000 for Pasadena work")
        assert result.location.zip is None
        assert result.location.city == "Pasadena"

    def test_comma_grouped_amount_is_not_a_zip(self, extractor):
        assert extractor.extract("General liability $1,000,000").location.zip is None

    def test_gazetteer_alias(self, extractor):
        location = extractor.extract("Plaza cleaning in Downtown LA").location
        assert location.city == "Los Angeles"
        assert location.state == "CA"

    def test_no_location(self, extractor):
        assert not extractor.extract("Exterior cleaning services").location.specified


class TestServicesAndCertifications:
    def test_service_terms(self, extractor):
        result = extractor.extract("Scope: graffiti removal and sidewalk cleaning downtown.")
        assert result.services == ["graffiti removal", "sidewalk cleaning"]

    def test_generic_pressure_washing_not_a_service(self, extractor):
        assert extractor.extract("Pressure washing services for the city").services == []

    def test_osha_level(self, extractor):
        assert extractor.extract("OSHA 30-hour supervisor").certifications == ["osha 30-hour"]
        assert extractor.extract("10-hour OSHA card").certifications == ["osha 10-hour"]

    def test_osha_without_level(self, extractor):
        assert extractor.extract("OSHA compliant crews").certifications == ["osha"]

    def test_iso_standard(self, extractor):
        assert extractor.extract("ISO 9001 quality management").certifications == ["iso 9001"]

    def test_epa_whole_word_only(self, extractor):
        assert "epa" not in extractor.extract("Separate crews for each site").certifications
        assert "epa" in extractor.extract("Operations must be EPA compliant").certifications

    def test_registration_terms(self, extractor):
        certs = extractor.extract("SAM registration and CAGE code required").certifications
        assert "sam registration" in certs
        assert "cage code" in certs

    def test_synonym_terms_are_all_extracted(self, extractor):
        certs = extractor.extract("Davis-Bacon prevailing wage applies. SAM registration required.").certifications
        assert certs == ["prevailing wage", "davis-bacon", "sam registration"]


class TestEquipmentAndOperational:
    def test_psi_and_hot_water(self, extractor):
        equipment = extractor.extract("Hot water equipment rated 3000 PSI").equipment
        assert equipment.min_psi == 3000
        assert equipment.hot_water is True

    def test_comma_grouped_psi(self, extractor):
        assert extractor.extract("Pressure washers of minimum 4,000 psi").equipment.min_psi == 4000

    def test_zero_psi_left_absent(self, extractor):
        assert extractor.extract("Rated 000 psi").equipment.min_psi is None

    def test_reclamation_and_lift(self, extractor):
        equipment = extractor.extract("Water reclamation required; boom lift access").equipment
        assert equipment.water_recovery is True
        assert equipment.aerial_lift is True

    def test_schedule_flags(self, extractor):
        operational = extractor.extract("After hours and weekend work; 24/7 call-outs").operational
        assert operational.night_work is True
        assert operational.weekend_work is True
        assert operational.emergency_response is True

    def test_response_time(self, extractor):
        assert extractor.extract("Emergency response within 2 hours").operational.max_response_time == 2
        assert extractor.extract("Response time of 1.5 hrs").operational.max_response_time == 1.5


class TestRobustness:
    @pytest.mark.parametrize("text", ["", "   ", None, 42])
    def test_unusable_input_gives_empty_requirements(self, extractor, text):
        assert extractor.extract(text) == ExtractedRequirements()

    def test_extraction_is_idempotent(self, extractor):
        text = "General Liability $2M, OSHA 10-hour, Glendale CA 91201, parking garage"
        assert extractor.extract(text) == extractor.extract(text)


class TestLLMFallback:
    @pytest.fixture
    def llm_on(self, monkeypatch, llm_settings):
        monkeypatch.setattr(extraction_service, "get_settings", lambda: llm_settings)

    def test_no_credential_uses_deterministic(self):
        _, source = extract_requirements("General Liability $1M", use_llm=True)
        assert source == ExtractionSource.DETERMINISTIC

    @pytest.mark.parametrize("reply", [
        "I could not find any requirements.",
        json.dumps({"location": {}, "services": []}),
        json.dumps({
            "location": {}, "insurance": {}, "services": "fleet washing",
            "certifications": [], "equipment": {}, "operational": {},
        }),
    ])
    def test_bad_reply_falls_back(self, monkeypatch, llm_on, reply):
        monkeypatch.setattr(extraction_service, "llm_text_call", lambda prompt: reply)
        requirements, source = LLMRequirementExtractor().extract_with_source(
            "General Liability $1M"
        )
        assert source == ExtractionSource.DETERMINISTIC
        assert requirements.insurance.general_liability == 1_000_000

    def test_transport_error_falls_back(self, monkeypatch, llm_on):
        def _fail(prompt):
            raise LLMUnavailableError("timeout")

        monkeypatch.setattr(extraction_service, "llm_text_call", _fail)
        _, source = LLMRequirementExtractor().extract_with_source("Workers comp required")
        assert source == ExtractionSource.DETERMINISTIC

    def test_valid_reply_is_used(self, monkeypatch, llm_on):
        reply = "```json\n" + json.dumps({
            "location": {"zip": "91201"},
            "insurance": {"general_liability": 2000000},
            "services": ["fleet washing"],
            "certifications": [],
            "equipment": {},
            "operational": {},
        }) + "\n```"
        monkeypatch.setattr(extraction_service, "llm_text_call", lambda prompt: reply)

        requirements, source = extract_requirements("any text", use_llm=True)
        assert source == ExtractionSource.LLM
        assert requirements.location.zip == "91201"
        assert requirements.services == ["fleet washing"]
        assert requirements.insurance.general_liability == 2_000_000
