"""
Tests: profile completeness, critical fields and suggestions.

Run with:
    pytest rfp_screening/tests/test_profile_validation.py -v
"""

from rfp_screening.models.profile import (
    CompanyProfile,
    ProfileBasics,
    ProfileOperational,
    ProfileServices,
)
from rfp_screening.services.profile_validation_service import ProfileValidationService


class TestEmptyProfile:
    def test_nothing_filled_in(self):
        result = ProfileValidationService().validate(CompanyProfile())

        assert result.completeness == 0
        assert result.unlocked_rfps == 0
        assert len(result.missing_critical) == 10
        assert result.suggestions[0].startswith("Complete at least 50%")
        assert len(result.suggestions) == 5

    def test_critical_fields_named(self):
        fields = {
            (m.section, m.field)
            for m in ProfileValidationService.critical_missing(CompanyProfile())
        }
        assert ("basics", "company_name") in fields
        assert ("insurance", "workers_comp") in fields
        assert ("services", "any") in fields
        assert ("certifications", "business_license") in fields


class TestReferenceProfile:
    def test_nearly_complete(self, reference_profile):
        result = ProfileValidationService().validate(reference_profile)

        assert result.completeness >= 97
        assert result.missing_critical == []
        assert result.suggestions == [
            "Register on SAM.gov to access federal government contracts"
        ]
        assert result.section_scores.basics == 100
        assert result.section_scores.insurance == 90

    def test_unlocked_estimate_scales_with_completeness(self, reference_profile):
        service = ProfileValidationService()
        assert service.estimate_unlocked_rfps(reference_profile, 100) == 225
        assert service.estimate_unlocked_rfps(reference_profile, 0) == 0


class TestSectionScores:
    def test_explicit_false_counts_as_answered(self):
        profile = CompanyProfile(operational=ProfileOperational(night_work=False, weekend_work=False))
        assert ProfileValidationService().section_scores(profile).operational == 40

    def test_services_capped_at_target(self):
        profile = CompanyProfile(services=ProfileServices(
            sidewalks=True, concrete=True, graffiti=True, oil_stain=True,
            gum_removal=True, awnings=True, windows=False,
        ))
        assert ProfileValidationService().section_scores(profile).services == 100

    def test_basics_fraction(self):
        profile = CompanyProfile(basics=ProfileBasics(company_name="A", city="Glendale"))
        assert ProfileValidationService().section_scores(profile).basics == 20

    def test_mid_completeness_suggests_80_percent(self, reference_profile):
        profile = reference_profile.model_copy(deep=True)
        profile.services = ProfileServices()
        profile.operational = ProfileOperational()
        profile.certifications.sam_registration = True
        # 30 + 22.5 + 0 + 15 + 10 + 0 = 77.5
        service = ProfileValidationService()
        assert service.completeness(profile) == 78
        assert service.suggestions(profile)[-1].startswith("Complete your profile to 80%")
