"""
Claim Model — Aid Service
Status: requested -> verified -> approved -> disbursed -> archived
"""

import uuid
from aid_service.extensions import db
from aid_service.utils.time import utcnow, isoformat

CLAIM_LIFECYCLE = ("requested", "verified", "approved", "disbursed", "archived")


class Claim(db.Model):
    __tablename__ = "claims"

    id = db.Column(db.String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    campaign_id = db.Column(
        db.String(64),
        db.ForeignKey("campaigns.id"),
        nullable=False,
        index=True
    )
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    recipient_ref = db.Column(db.String(255), nullable=False)
    evidence_ref = db.Column(db.String(255), nullable=True)
    status = db.Column(
        db.Enum(*CLAIM_LIFECYCLE, name="claim_status"),
        nullable=False,
        default="requested"
    )
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    campaign = db.relationship("Campaign", back_populates="claims")

    def to_dict(self, include_campaign=True):
        data = {
            "id":           self.id,
            "campaignId":   self.campaign_id,
            "amount":       float(self.amount),
            "recipientRef": self.recipient_ref,
            "evidenceRef":  self.evidence_ref,
            "status":       self.status,
            "createdAt":    isoformat(self.created_at),
            "updatedAt":    isoformat(self.updated_at),
        }
        if include_campaign:
            data["campaign"] = self.campaign.to_dict() if self.campaign else None
        return data
