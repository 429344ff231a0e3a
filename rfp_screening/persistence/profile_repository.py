"""
Profile Repository — read-only access to stored company profiles.

The screening core never writes profiles; the editing workflow that does is
outside this package. The in-memory store exists for the CLI, tests and the
default API configuration.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from rfp_screening.config import get_settings
from rfp_screening.models.profile import CompanyProfile

logger = logging.getLogger(__name__)


class ProfileRepository(ABC):
    """Supplies a CompanyProfile by company id."""

    @abstractmethod
    def get_profile(self, company_id: str) -> CompanyProfile | None:
        ...


class InMemoryProfileRepository(ProfileRepository):
    def __init__(self, profiles: list[CompanyProfile] | None = None):
        self._profiles: dict[str, CompanyProfile] = {}
        for profile in profiles or []:
            self.add_profile(profile)

    def add_profile(self, profile: CompanyProfile) -> None:
        if not profile.company_id:
            raise ValueError("profile has no company_id")
        self._profiles[profile.company_id] = profile.model_copy(deep=True)

    def get_profile(self, company_id: str) -> CompanyProfile | None:
        profile = self._profiles.get(company_id)
        return profile.model_copy(deep=True) if profile else None


class MongoProfileRepository(ProfileRepository):
    """Reads profiles from a MongoDB collection keyed by ``company_id``."""

    def __init__(self, collection: Any = None):
        if collection is None:
            from rfp_screening.persistence.mongo_client import MongoClient

            settings = get_settings()
            collection = MongoClient().get_collection(settings.profile_collection)
        self._collection = collection

    def get_profile(self, company_id: str) -> CompanyProfile | None:
        doc = self._collection.find_one({"company_id": company_id})
        if doc is None:
            logger.info(f"[PROFILE] No stored profile for company_id={company_id}")
            return None
        doc.pop("_id", None)
        try:
            return CompanyProfile.model_validate(doc)
        except ValidationError as exc:
            logger.warning(f"[PROFILE] Stored profile {company_id} failed validation: {exc}")
            return None


def build_profile_repository() -> ProfileRepository:
    """Select the store from settings.profile_store_backend."""
    backend = get_settings().profile_store_backend
    if backend == "mongo":
        return MongoProfileRepository()
    if backend != "memory":
        raise ValueError(f"Unknown profile store backend: {backend}")

    from rfp_screening.data.sample_rfps import REFERENCE_PROFILE

    return InMemoryProfileRepository([REFERENCE_PROFILE])
