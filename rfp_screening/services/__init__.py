"""Services — ProfileValidationService, ProposalService, BenchmarkService."""

from rfp_screening.services.benchmark_service import BenchmarkService
from rfp_screening.services.profile_validation_service import ProfileValidationService
from rfp_screening.services.proposal_service import ProposalService

__all__ = ["BenchmarkService", "ProfileValidationService", "ProposalService"]
