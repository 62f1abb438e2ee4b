"""
Request validation — Aid Service
Bodies are checked here, before any service is called.
Limits mirror the column sizes the values are written to.
"""

import math
import re
from decimal import Decimal
from aid_service.errors import ValidationError
from aid_service.models.campaign import CAMPAIGN_STATUSES
from aid_service.models.verification_session import VERIFICATION_CHANNELS

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')
CODE_REGEX = re.compile(r'[0-9]{4,8}')

MAX_STRING_LENGTH = 255
# Numeric(12, 2): ten integer digits, two decimal places
MAX_AMOUNT = Decimal("10000000000")
AMOUNT_PLACES = 2

CLAIM_FIELDS = {"campaignId", "amount", "recipientRef", "evidenceRef"}
CAMPAIGN_FIELDS = {"name", "status", "budget", "metadata"}
START_FIELDS = {"channel", "email", "phone"}
COMPLETE_FIELDS = {"sessionId", "code"}
RESEND_FIELDS = {"sessionId"}


def _check_length(field, value):
    if len(value) > MAX_STRING_LENGTH:
        raise ValidationError(f"{field} must be at most {MAX_STRING_LENGTH} characters")
    return value


def _require_string(data, field, message=None):
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message or f"{field} must be a non-empty string")
    return _check_length(field, value)


def _optional_string(data, field):
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return _check_length(field, value)


def _money(data, field, default=None):
    value = data.get(field, default)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number")
    if value < 0:
        raise ValidationError(f"{field} must not be less than 0")

    amount = Decimal(str(value))
    if amount.as_tuple().exponent < -AMOUNT_PLACES:
        raise ValidationError(f"{field} must have at most {AMOUNT_PLACES} decimal places")
    if amount >= MAX_AMOUNT:
        raise ValidationError(f"{field} must be less than {MAX_AMOUNT}")
    return amount


def _require_object(data, allowed):
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValidationError(f"Unexpected fields: {', '.join(unknown)}")
    return data


def parse_create_claim(data):
    data = _require_object(data, CLAIM_FIELDS)
    return {
        "campaign_id":   _require_string(data, "campaignId"),
        "amount":        _money(data, "amount"),
        "recipient_ref": _require_string(data, "recipientRef"),
        "evidence_ref":  _optional_string(data, "evidenceRef"),
    }


def parse_create_campaign(data):
    data = _require_object(data, CAMPAIGN_FIELDS)
    status = data.get("status", "draft")
    if status not in CAMPAIGN_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(CAMPAIGN_STATUSES)}")

    metadata = data.get("metadata")
    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, dict):
        raise ValidationError("metadata must be an object")

    return {
        "name":     _require_string(data, "name"),
        "status":   status,
        "budget":   _money(data, "budget", default=0),
        "metadata": metadata,
    }


def parse_start_verification(data):
    """Returns (channel, identifier); the identifier field depends on the channel."""
    data = _require_object(data, START_FIELDS)
    channel = data.get("channel")
    if channel not in VERIFICATION_CHANNELS:
        raise ValidationError(f"channel must be one of: {', '.join(VERIFICATION_CHANNELS)}")

    if channel == "email":
        email = _require_string(data, "email", "email is required when channel is email")
        if not EMAIL_REGEX.fullmatch(email):
            raise ValidationError("email must be a valid email address")
        return channel, email

    phone = _require_string(data, "phone", "phone is required when channel is phone")
    return channel, phone


def parse_complete_verification(data):
    data = _require_object(data, COMPLETE_FIELDS)
    session_id = _require_string(data, "sessionId")
    code = data.get("code")
    if not isinstance(code, str) or not CODE_REGEX.fullmatch(code):
        raise ValidationError("code must contain only digits and be 4 to 8 characters long")
    return session_id, code


def parse_resend_verification(data):
    data = _require_object(data, RESEND_FIELDS)
    return _require_string(data, "sessionId")
