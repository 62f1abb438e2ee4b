"""
Verification Service — Aid Service
OTP sessions for proving control of an email address or phone number.

    start    -> pending (code issued, expires after the TTL)
    resend   -> pending (fresh code + expiry, resend_count + 1, capped)
    complete -> completed (terminal, code matched before expiry)

Expiry is evaluated lazily when a code is checked; expired rows are left in place.
"""

import hmac
import logging
import secrets
from datetime import timedelta
from aid_service.audit import emit_audit
from aid_service.extensions import transaction
from aid_service.errors import (
    NotFound,
    AlreadyCompleted,
    SessionExpired,
    InvalidCode,
    ResendLimitExceeded,
)
from aid_service.models.verification_session import VerificationSession
from aid_service.notifications import mask_identifier
from aid_service.utils.time import utcnow

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=10)
DEFAULT_MAX_RESENDS = 3
DEFAULT_CODE_LENGTH = 6


def generate_code(length=DEFAULT_CODE_LENGTH):
    return "".join(secrets.choice("0123456789") for _ in range(length))


class VerificationService:
    def __init__(
        self,
        session,
        notifier=None,
        audit_sink=None,
        ttl=DEFAULT_TTL,
        max_resends=DEFAULT_MAX_RESENDS,
        code_length=DEFAULT_CODE_LENGTH,
        clock=utcnow,
    ):
        self.session = session
        self.notifier = notifier
        self.audit_sink = audit_sink
        self.ttl = ttl
        self.max_resends = max_resends
        self.code_length = code_length
        self.clock = clock

    def start(self, channel, identifier):
        code = generate_code(self.code_length)
        verification = VerificationSession(
            channel=channel,
            identifier=identifier,
            code=code,
            status="pending",
            resend_count=0,
            expires_at=self.clock() + self.ttl,
        )
        with transaction(self.session):
            self.session.add(verification)

        emit_audit(self.audit_sink, "Verification started", verification.id)
        self._dispatch(verification, code)
        return verification

    def complete(self, session_id, code):
        """
        Consume the session's code. Checks run in order: exists, not
        completed, not expired, code matches. Only one caller can win the
        pending -> completed update.
        """
        with transaction(self.session):
            verification = self._lock(session_id)

            if verification.status == "completed":
                raise AlreadyCompleted()
            if verification.is_expired(self.clock()):
                raise SessionExpired()
            if not hmac.compare_digest(verification.code.encode(), code.encode()):
                raise InvalidCode()

            updated = (
                self.session.query(VerificationSession)
                .filter(
                    VerificationSession.id == session_id,
                    VerificationSession.status == "pending",
                    VerificationSession.code == code,
                )
                .update(
                    {
                        VerificationSession.status: "completed",
                        VerificationSession.updated_at: self.clock(),
                    },
                    synchronize_session=False,
                )
            )
            if updated != 1:
                # Completed or re-issued by a concurrent request
                self.session.refresh(verification)
                if verification.status == "completed":
                    raise AlreadyCompleted()
                raise InvalidCode()

        self.session.refresh(verification)
        emit_audit(self.audit_sink, "Verification completed", session_id)
        return verification

    def resend(self, session_id):
        code = generate_code(self.code_length)

        with transaction(self.session):
            verification = self._lock(session_id)

            if verification.status == "completed":
                raise AlreadyCompleted()
            if verification.resend_count >= self.max_resends:
                raise ResendLimitExceeded()

            # Increment in SQL so concurrent resends cannot lose a count
            updated = (
                self.session.query(VerificationSession)
                .filter(
                    VerificationSession.id == session_id,
                    VerificationSession.status == "pending",
                    VerificationSession.resend_count < self.max_resends,
                )
                .update(
                    {
                        VerificationSession.code: code,
                        VerificationSession.expires_at: self.clock() + self.ttl,
                        VerificationSession.resend_count: VerificationSession.resend_count + 1,
                        VerificationSession.updated_at: self.clock(),
                    },
                    synchronize_session=False,
                )
            )
            if updated != 1:
                self.session.refresh(verification)
                if verification.status == "completed":
                    raise AlreadyCompleted()
                raise ResendLimitExceeded()

        self.session.refresh(verification)
        emit_audit(self.audit_sink, "Verification code resent", session_id)
        self._dispatch(verification, code)
        return verification

    def _lock(self, session_id):
        verification = (
            self.session.query(VerificationSession)
            .filter_by(id=session_id)
            .with_for_update()
            .first()
        )
        if verification is None:
            raise NotFound("Verification session not found")
        return verification

    def _dispatch(self, verification, code):
        if self.notifier is None:
            return
        try:
            self.notifier.send_code(verification.channel, verification.identifier, code)
        except Exception:
            logger.warning(
                "Could not deliver code for session %s to %s",
                verification.id,
                mask_identifier(verification.identifier),
                exc_info=True,
            )
