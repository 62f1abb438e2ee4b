import unittest
from decimal import Decimal
from aid_service.errors import InvalidTransition, NotFound
from aid_service.extensions import db
from aid_service.models import Claim, CLAIM_LIFECYCLE
from tests.helpers import AppTestCase, FileDatabaseTestCase

OPERATIONS = {
    "verify": ("requested", "verified"),
    "approve": ("verified", "approved"),
    "disburse": ("approved", "disbursed"),
    "archive": ("disbursed", "archived"),
}


class TestClaimService(AppTestCase):
    def setUp(self):
        super().setUp()
        self.claims = self.service("claims")
        self.campaign = self.make_campaign()

    def test_create_stores_decimal_amount(self):
        claim = self.claims.create(self.campaign.id, Decimal("12.50"), "rec-9")
        self.assertEqual(claim.status, "requested")
        self.assertEqual(claim.amount, Decimal("12.50"))

    def test_create_unknown_campaign(self):
        with self.assertRaises(NotFound):
            self.claims.create("missing", Decimal("1"), "rec")
        self.assertEqual(db.session.query(Claim).count(), 0)

    def test_only_the_next_step_is_allowed(self):
        for status in CLAIM_LIFECYCLE:
            for operation, (required, target) in OPERATIONS.items():
                claim = self.make_claim(self.campaign, status=status)
                with self.subTest(status=status, operation=operation):
                    if status == required:
                        updated = getattr(self.claims, operation)(claim.id)
                        self.assertEqual(updated.status, target)
                    else:
                        with self.assertRaises(InvalidTransition) as ctx:
                            getattr(self.claims, operation)(claim.id)
                        self.assertEqual(ctx.exception.current, status)
                        self.assertEqual(ctx.exception.target, target)
                        self.assertEqual(self.claims.find_one(claim.id).status, status)

    def test_no_going_back(self):
        claim = self.make_claim(self.campaign, status="approved")
        with self.assertRaises(InvalidTransition):
            self.claims.verify(claim.id)
        with self.assertRaises(InvalidTransition):
            self.claims.approve(claim.id)

    def test_failed_transition_emits_no_audit(self):
        claim = self.make_claim(self.campaign, status="requested")
        with self.assertRaises(InvalidTransition):
            self.claims.disburse(claim.id)
        self.assertEqual(self.audit.events, [])

    def test_audit_sink_failure_does_not_fail_transition(self):
        class BrokenSink:
            def record(self, event, entity_id):
                raise RuntimeError("sink offline")

        self.claims.audit_sink = BrokenSink()
        claim = self.make_claim(self.campaign, status="requested")
        self.assertEqual(self.claims.verify(claim.id).status, "verified")


class TestConcurrentApprove(FileDatabaseTestCase):
    def test_only_one_approve_wins(self):
        campaign = self.make_campaign()
        claim_id = self.make_claim(campaign, status="verified").id
        claims = self.service("claims")

        outcomes = self.run_concurrently(lambda: claims.approve(claim_id), 2)

        self.assertEqual(sorted(name for name, _ in outcomes), ["InvalidTransition", "ok"])
        rejected = [e for name, e in outcomes if name == "InvalidTransition"][0]
        self.assertEqual(rejected.current, "approved")
        self.assertEqual(claims.find_one(claim_id).status, "approved")
        self.assertEqual(self.audit.events, [("Claim approved", claim_id)])


if __name__ == "__main__":
    unittest.main()
