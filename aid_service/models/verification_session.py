"""
VerificationSession Model — Aid Service
One OTP challenge sent to an email address or phone number.
Status: pending | completed  ("expired" is derived from expires_at, never stored)
"""

import uuid
from aid_service.extensions import db
from aid_service.utils.time import utcnow, as_utc, isoformat

VERIFICATION_CHANNELS = ("email", "phone")
VERIFICATION_STATUSES = ("pending", "completed")


class VerificationSession(db.Model):
    __tablename__ = "verification_sessions"

    id = db.Column(db.String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    channel = db.Column(
        db.Enum(*VERIFICATION_CHANNELS, name="verification_channel"),
        nullable=False
    )
    identifier = db.Column(db.String(255), nullable=False, index=True)
    code = db.Column(db.String(8), nullable=False)
    status = db.Column(
        db.Enum(*VERIFICATION_STATUSES, name="verification_status"),
        nullable=False,
        default="pending"
    )
    resend_count = db.Column(db.Integer, nullable=False, default=0)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def is_expired(self, now):
        return self.status == "pending" and now >= as_utc(self.expires_at)

    def to_dict(self):
        # The code never leaves the service
        return {
            "sessionId":   self.id,
            "channel":     self.channel,
            "status":      self.status,
            "resendCount": self.resend_count,
            "expiresAt":   isoformat(self.expires_at),
        }
