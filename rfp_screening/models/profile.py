"""
Company capability profile — the bidder's side of every comparison.

Profiles are built incrementally, so every field is optional: ``None`` means
"not filled in yet" and is kept distinct from an explicit ``False`` / ``0``.
Field names are snake_case; the camelCase names used by the profile editor
(``companyName``, ``serviceRadius``, ``hasIt`` ...) are accepted as aliases.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import EntityType, OshaLevel, PaymentTerms

_ADDRESS_ZIP_RE = re.compile(r"\b\d{5}(?:-\d{4})?\b")


class _ProfileModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ── Basics ───────────────────────────────────────────────


class ProfileBasics(_ProfileModel):
    company_name: Optional[str] = None
    dba_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    year_established: Optional[int] = None
    entity_type: Optional[EntityType] = None
    ein: Optional[str] = None
    employees: Optional[int] = None
    crews: Optional[int] = None
    service_radius: Optional[float] = None  # miles


# ── Insurance ────────────────────────────────────────────


class CoveragePolicy(_ProfileModel):
    amount: Optional[float] = None
    carrier: Optional[str] = None
    expiry: Optional[str] = None


class WorkersCompPolicy(_ProfileModel):
    has_it: Optional[bool] = None
    carrier: Optional[str] = None
    expiry: Optional[str] = None


class ProfileInsurance(_ProfileModel):
    general_liability: CoveragePolicy = Field(default_factory=CoveragePolicy)
    workers_comp: WorkersCompPolicy = Field(default_factory=WorkersCompPolicy)
    commercial_auto: CoveragePolicy = Field(default_factory=CoveragePolicy)
    umbrella: CoveragePolicy = Field(default_factory=CoveragePolicy)
    professional: CoveragePolicy = Field(default_factory=CoveragePolicy)


# ── Services ─────────────────────────────────────────────


class ProfileServices(_ProfileModel):
    building_exterior: Optional[bool] = None
    concrete: Optional[bool] = None
    parking_structure: Optional[bool] = None
    graffiti: Optional[bool] = None
    emergency247: Optional[bool] = None
    oil_stain: Optional[bool] = None
    gum_removal: Optional[bool] = None
    drive_through: Optional[bool] = None
    awnings: Optional[bool] = None
    dumpster_areas: Optional[bool] = None
    sidewalks: Optional[bool] = None
    brick_cleaning: Optional[bool] = None
    graffiti_removal: Optional[bool] = None
    rust_removal: Optional[bool] = None
    fleet_washing: Optional[bool] = None
    solar_panels: Optional[bool] = None
    windows: Optional[bool] = None
    roof_cleaning: Optional[bool] = None
    deck_cleaning: Optional[bool] = None
    fence_cleaning: Optional[bool] = None

    def offered(self) -> list[str]:
        """Names of the capability flags explicitly set to True."""
        return [name for name, value in self if value is True]


# ── Equipment ────────────────────────────────────────────


class HotWaterUnit(_ProfileModel):
    capable: Optional[bool] = None
    max_temp: Optional[float] = None
    psi: Optional[int] = None


class ColdWaterUnit(_ProfileModel):
    capable: Optional[bool] = None
    psi: Optional[int] = None


class ProfileEquipment(_ProfileModel):
    hot_water: HotWaterUnit = Field(default_factory=HotWaterUnit)
    cold_water: ColdWaterUnit = Field(default_factory=ColdWaterUnit)
    water_recovery: Optional[bool] = None
    number_of_trucks: Optional[int] = None
    aerial_lift: Optional[bool] = None
    surface_cleaners: Optional[bool] = None
    chemical_system: Optional[bool] = None
    epa_approved_chemicals: Optional[bool] = None

    @property
    def max_psi(self) -> int:
        return max(self.hot_water.psi or 0, self.cold_water.psi or 0)


# ── Certifications ───────────────────────────────────────


class ProfileCertifications(_ProfileModel):
    business_license: Optional[bool] = None
    contractor_license: Optional[bool] = None
    epa_compliant: Optional[bool] = None
    osha_level: Optional[OshaLevel] = None
    prevailing_wage: Optional[bool] = None
    sam_registration: Optional[bool] = None
    cage_code: Optional[str] = None
    duns_number: Optional[str] = None
    small_business: Optional[bool] = None
    minority_owned: Optional[bool] = None
    woman_owned: Optional[bool] = None
    veteran_owned: Optional[bool] = None
    hub_zone: Optional[bool] = None


# ── Operational ──────────────────────────────────────────


class ProfileOperational(_ProfileModel):
    night_work: Optional[bool] = None
    weekend_work: Optional[bool] = None
    holiday_work: Optional[bool] = None
    minimum_contract: Optional[float] = None
    max_simultaneous_jobs: Optional[int] = None
    emergency_response_time: Optional[float] = None  # hours
    payment_terms_required: Optional[PaymentTerms] = None


# ── Aggregate ────────────────────────────────────────────


class CompanyProfile(_ProfileModel):
    """The full capability record read by the scorers."""

    company_id: Optional[str] = None
    basics: ProfileBasics = Field(default_factory=ProfileBasics)
    insurance: ProfileInsurance = Field(default_factory=ProfileInsurance)
    services: ProfileServices = Field(default_factory=ProfileServices)
    equipment: ProfileEquipment = Field(default_factory=ProfileEquipment)
    certifications: ProfileCertifications = Field(default_factory=ProfileCertifications)
    operational: ProfileOperational = Field(default_factory=ProfileOperational)

    @property
    def company_name(self) -> str:
        return (self.basics.company_name or "").strip()

    def location_string(self) -> str:
        """
        ZIP when known (from ``basics.zip`` or the street address), otherwise
        "city, state". Empty when none of these is set.
        """
        if self.basics.zip:
            return self.basics.zip
        # last match: a five-digit street number can precede the ZIP
        address_zips = _ADDRESS_ZIP_RE.findall(self.basics.address or "")
        if address_zips:
            return address_zips[-1][:5]
        if self.basics.city:
            return f"{self.basics.city}, {self.basics.state or ''}".strip().rstrip(",")
        return ""
