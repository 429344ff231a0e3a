"""Persistence — MongoClient, ProfileRepository."""

from rfp_screening.persistence.mongo_client import MongoClient
from rfp_screening.persistence.profile_repository import (
    InMemoryProfileRepository,
    MongoProfileRepository,
    ProfileRepository,
    build_profile_repository,
)

__all__ = [
    "MongoClient",
    "ProfileRepository",
    "InMemoryProfileRepository",
    "MongoProfileRepository",
    "build_profile_repository",
]
