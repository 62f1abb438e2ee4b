"""
Campaign Model — Aid Service
An aid package: a funding pool that claims are filed against.
Status: active | draft | closed
"""

import uuid
from aid_service.extensions import db
from aid_service.utils.time import utcnow, isoformat

CAMPAIGN_STATUSES = ("active", "draft", "closed")


class Campaign(db.Model):
    __tablename__ = "campaigns"

    id = db.Column(db.String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    status = db.Column(
        db.Enum(*CAMPAIGN_STATUSES, name="campaign_status"),
        nullable=False,
        default="draft"
    )
    budget = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    # "metadata" is reserved on declarative classes
    details = db.Column("metadata", db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    claims = db.relationship("Claim", back_populates="campaign", lazy=True)

    def to_dict(self):
        return {
            "id":        self.id,
            "name":      self.name,
            "status":    self.status,
            "budget":    float(self.budget) if self.budget is not None else 0.0,
            "metadata":  self.details or {},
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
