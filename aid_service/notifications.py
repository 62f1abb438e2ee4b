"""
Notification dispatch — Aid Service
Delivers one-time codes to an email address or phone number.
"""

import logging
import requests

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    pass


def mask_identifier(identifier):
    if "@" in identifier:
        local, _, domain = identifier.partition("@")
        return f"{local[:1]}***@{domain}"
    if len(identifier) <= 4:
        return "***"
    return f"***{identifier[-4:]}"


class Notifier:
    def send_code(self, channel, identifier, code):
        raise NotImplementedError


class LoggingNotifier(Notifier):
    """Development notifier: records that a code went out, without the code."""

    def send_code(self, channel, identifier, code):
        logger.info("Verification code issued via %s to %s", channel, mask_identifier(identifier))


class WebhookNotifier(Notifier):
    """
    Hands the code to an external delivery service (email/SMS gateway).
    The timeout bounds how long a session request can wait on delivery.
    """

    def __init__(self, url, timeout=2.0):
        self.url = url
        self.timeout = timeout

    def send_code(self, channel, identifier, code):
        try:
            response = requests.post(
                self.url,
                json={"channel": channel, "to": identifier, "code": code},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NotificationError(f"Delivery request failed: {e}") from e

        if response.status_code >= 300:
            raise NotificationError(
                f"Delivery service returned {response.status_code}: {response.text}"
            )


def build_notifier(config):
    url = config.get("NOTIFY_WEBHOOK_URL")
    if url:
        return WebhookNotifier(url, timeout=config.get("NOTIFY_TIMEOUT_SEC", 2.0))
    return LoggingNotifier()
