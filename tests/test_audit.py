import unittest
from aid_service.audit import LoggingAuditSink, emit_audit


class TestAudit(unittest.TestCase):
    def test_logging_sink(self):
        with self.assertLogs("aid_service.audit", level="INFO") as logs:
            LoggingAuditSink().record("Claim approved", "claim-1")
        self.assertIn("Audit: Claim approved for claim-1", logs.output[0])

    def test_emit_swallows_sink_errors(self):
        class BrokenSink:
            def record(self, event, entity_id):
                raise RuntimeError("boom")

        with self.assertLogs("aid_service.audit", level="WARNING"):
            emit_audit(BrokenSink(), "Claim created", "claim-1")

    def test_emit_without_sink(self):
        emit_audit(None, "Claim created", "claim-1")


if __name__ == "__main__":
    unittest.main()
