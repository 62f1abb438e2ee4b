from aid_service.models.campaign import Campaign
from aid_service.models.claim import Claim, CLAIM_LIFECYCLE
from aid_service.models.verification_session import VerificationSession

__all__ = ["Campaign", "Claim", "CLAIM_LIFECYCLE", "VerificationSession"]
