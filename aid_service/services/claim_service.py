"""
Claim Service — Aid Service
Owns the claim lifecycle. Each transition is one transaction:

    requested -> verified -> approved -> disbursed -> archived

No step can be skipped or undone.
"""

import logging
from decimal import Decimal
from sqlalchemy.orm import joinedload
from aid_service.audit import emit_audit
from aid_service.extensions import transaction
from aid_service.errors import NotFound, InvalidTransition
from aid_service.models.campaign import Campaign
from aid_service.models.claim import Claim, CLAIM_LIFECYCLE
from aid_service.utils.time import utcnow

logger = logging.getLogger(__name__)

# Each status may only advance to the next one in the lifecycle
VALID_TRANSITIONS = {
    current: {following}
    for current, following in zip(CLAIM_LIFECYCLE, CLAIM_LIFECYCLE[1:])
}
VALID_TRANSITIONS[CLAIM_LIFECYCLE[-1]] = set()


class ClaimService:
    def __init__(self, session, audit_sink=None):
        self.session = session
        self.audit_sink = audit_sink

    def create(self, campaign_id, amount, recipient_ref, evidence_ref=None):
        """
        File a claim against an existing campaign.
        The campaign lookup happens before anything is written.
        """
        with transaction(self.session):
            if self.session.get(Campaign, campaign_id) is None:
                raise NotFound("Campaign not found")

            claim = Claim(
                campaign_id=campaign_id,
                amount=Decimal(str(amount)),
                recipient_ref=recipient_ref,
                evidence_ref=evidence_ref,
                status="requested",
            )
            self.session.add(claim)

        emit_audit(self.audit_sink, "Claim created", claim.id)
        return claim

    def find_all(self):
        return (
            self.session.query(Claim)
            .options(joinedload(Claim.campaign))
            .order_by(Claim.created_at)
            .all()
        )

    def find_one(self, claim_id):
        claim = (
            self.session.query(Claim)
            .options(joinedload(Claim.campaign))
            .filter_by(id=claim_id)
            .first()
        )
        if claim is None:
            raise NotFound("Claim not found")
        return claim

    def verify(self, claim_id):
        return self._transition(claim_id, "requested", "verified", "Claim verified")

    def approve(self, claim_id):
        return self._transition(claim_id, "verified", "approved", "Claim approved")

    def disburse(self, claim_id):
        return self._transition(claim_id, "approved", "disbursed", "Claim disbursed")

    def archive(self, claim_id):
        return self._transition(claim_id, "disbursed", "archived", "Claim archived")

    def _transition(self, claim_id, from_status, to_status, audit_event):
        if to_status not in VALID_TRANSITIONS.get(from_status, set()):
            raise InvalidTransition(from_status, to_status)

        with transaction(self.session):
            # SELECT ... FOR UPDATE holds the row until commit on databases that support it
            claim = (
                self.session.query(Claim)
                .filter_by(id=claim_id)
                .with_for_update()
                .first()
            )
            if claim is None:
                raise NotFound("Claim not found")
            if claim.status != from_status:
                raise InvalidTransition(claim.status, to_status)

            # Compare-and-set: a concurrent writer that got here first leaves zero rows to update
            updated = (
                self.session.query(Claim)
                .filter(Claim.id == claim_id, Claim.status == from_status)
                .update(
                    {Claim.status: to_status, Claim.updated_at: utcnow()},
                    synchronize_session=False,
                )
            )
            if updated != 1:
                self.session.refresh(claim)
                logger.info("Lost transition race on claim %s (now %s)", claim_id, claim.status)
                raise InvalidTransition(claim.status, to_status)

        # Committed; the expired instance reloads with the new status
        self.session.refresh(claim)
        emit_audit(self.audit_sink, audit_event, claim_id)
        return claim
