"""
Audit hooks — Aid Service
Sinks receive (event, entity_id) pairs after a successful write.
Emission is best-effort: a failing sink never fails the caller.
"""

import logging

logger = logging.getLogger(__name__)


class AuditSink:
    def record(self, event, entity_id):
        raise NotImplementedError


class LoggingAuditSink(AuditSink):
    def __init__(self, log=None):
        self.log = log or logger

    def record(self, event, entity_id):
        self.log.info("Audit: %s for %s", event, entity_id)


def emit_audit(sink, event, entity_id):
    if sink is None:
        return
    try:
        sink.record(event, entity_id)
    except Exception:
        logger.warning("Audit sink failed for %s (%s)", entity_id, event, exc_info=True)
