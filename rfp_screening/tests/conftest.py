"""Shared fixtures: deterministic settings and reference profiles."""

import pytest

from rfp_screening.config import Settings, get_settings
from rfp_screening.data.sample_rfps import REFERENCE_PROFILE
from rfp_screening.models.profile import (
    CompanyProfile,
    CoveragePolicy,
    ProfileBasics,
    ProfileInsurance,
    WorkersCompPolicy,
)


@pytest.fixture(autouse=True)
def deterministic_settings(monkeypatch):
    """No LLM credential and default flags, whatever the local .env says."""
    monkeypatch.setenv("GROQ_API_KEY", "")
    monkeypatch.setenv("USE_LLM_EXTRACTION", "false")
    monkeypatch.setenv("USE_LLM_NARRATION", "false")
    monkeypatch.setenv("DECISION_SCHEME", "three_tier")
    monkeypatch.setenv("PROFILE_STORE_BACKEND", "memory")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def llm_settings():
    """Settings with a usable-looking credential (the call itself is patched)."""
    return Settings(groq_api_key="test-key")


@pytest.fixture
def reference_profile() -> CompanyProfile:
    return REFERENCE_PROFILE.model_copy(deep=True)


@pytest.fixture
def glendale_profile() -> CompanyProfile:
    """Glendale company, 40-mile radius, GL $2M, workers comp, auto $1M."""
    return CompanyProfile(
        basics=ProfileBasics(company_name="Glendale Wash Co", city="Glendale", state="CA",
                             zip="91201", service_radius=40),
        insurance=ProfileInsurance(
            general_liability=CoveragePolicy(amount=2_000_000),
            workers_comp=WorkersCompPolicy(has_it=True),
            commercial_auto=CoveragePolicy(amount=1_000_000),
        ),
    )
