"""
Requirements parsed out of an RFP.

Mirrors the profile shape, but every field is a *demand* rather than a
capability. ``None`` / empty list means the RFP did not state that
requirement, which scores as satisfied.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class LocationRequirement(_FrozenModel):
    city: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None
    zip: Optional[str] = None

    @property
    def specified(self) -> bool:
        return bool(self.zip or self.city)

    def as_query(self) -> str:
        """ZIP when known, otherwise "city, state"."""
        if self.zip:
            return self.zip
        if self.city:
            return f"{self.city}, {self.state or 'CA'}"
        return ""


class InsuranceRequirement(_FrozenModel):
    general_liability: Optional[float] = None
    workers_comp: Optional[bool] = None
    commercial_auto: Optional[float] = None
    umbrella: Optional[float] = None
    professional: Optional[float] = None

    @property
    def specified(self) -> bool:
        return any(value is not None for _, value in self)


class EquipmentRequirement(_FrozenModel):
    min_psi: Optional[int] = None
    hot_water: Optional[bool] = None
    water_recovery: Optional[bool] = None
    aerial_lift: Optional[bool] = None


class OperationalRequirement(_FrozenModel):
    night_work: Optional[bool] = None
    weekend_work: Optional[bool] = None
    emergency_response: Optional[bool] = None
    max_response_time: Optional[float] = None  # hours


class ExtractedRequirements(_FrozenModel):
    """Structured requirement set produced once per analysis."""

    location: LocationRequirement = Field(default_factory=LocationRequirement)
    insurance: InsuranceRequirement = Field(default_factory=InsuranceRequirement)
    services: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    equipment: EquipmentRequirement = Field(default_factory=EquipmentRequirement)
    operational: OperationalRequirement = Field(default_factory=OperationalRequirement)
