import os
import shutil
import tempfile
import threading
import unittest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from aid_service import create_app
from aid_service.extensions import db
from aid_service.models import Campaign, Claim, VerificationSession

BASE = "/api/v1"


class FakeNotifier:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    def send_code(self, channel, identifier, code):
        if self.fail:
            raise RuntimeError("gateway down")
        self.sent.append((channel, identifier, code))

    @property
    def last_code(self):
        return self.sent[-1][2]


class RecordingAuditSink:
    def __init__(self):
        self.events = []

    def record(self, event, entity_id):
        self.events.append((event, entity_id))


class FrozenClock:
    def __init__(self, now=None):
        self.now = now or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class AppTestCase(unittest.TestCase):
    config = {}

    def setUp(self):
        self.notifier = FakeNotifier()
        self.audit = RecordingAuditSink()
        self.clock = FrozenClock()
        test_config = {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "API_KEY": "",
        }
        test_config.update(self.config)
        self.app = create_app(
            test_config,
            audit_sink=self.audit,
            notifier=self.notifier,
            clock=self.clock,
        )
        self.ctx = self.app.app_context()
        self.ctx.push()
        db.create_all()
        self.client = self.app.test_client()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.ctx.pop()

    def service(self, name):
        return self.app.extensions["aid_service"][name]

    # --- Fixtures written straight to the store ------------------------

    def make_campaign(self, status="active", **fields):
        campaign = Campaign(name=fields.pop("name", "Flood Relief"), status=status, budget=Decimal("1000"), **fields)
        db.session.add(campaign)
        db.session.commit()
        return campaign

    def make_claim(self, campaign, status="requested", amount="100.00", recipient_ref="rec-1"):
        claim = Claim(
            campaign_id=campaign.id,
            amount=Decimal(amount),
            recipient_ref=recipient_ref,
            status=status,
        )
        db.session.add(claim)
        db.session.commit()
        return claim

    def make_session(self, code="123456", resend_count=0, status="pending", expires_in=timedelta(minutes=10)):
        session = VerificationSession(
            channel="email",
            identifier="user@example.com",
            code=code,
            status=status,
            resend_count=resend_count,
            expires_at=self.clock() + expires_in,
        )
        db.session.add(session)
        db.session.commit()
        return session


class FileDatabaseTestCase(AppTestCase):
    """Runs on a file database so each thread gets its own connection."""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.config = {
            "SQLALCHEMY_DATABASE_URI": "sqlite:///" + os.path.join(self.tmpdir, "race.db"),
            "SQLALCHEMY_ENGINE_OPTIONS": {"connect_args": {"timeout": 30}},
        }
        super().setUp()

    def tearDown(self):
        super().tearDown()
        with self.app.app_context():
            for engine in db.engines.values():
                engine.dispose()
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def run_concurrently(self, call, count):
        """
        Start `count` threads, each in its own app context, released together.
        Returns one (outcome, error) pair per thread: outcome is "ok" or the
        exception class name.
        """
        barrier = threading.Barrier(count)
        outcomes = []
        lock = threading.Lock()

        def worker():
            with self.app.app_context():
                barrier.wait()
                try:
                    call()
                    result = ("ok", None)
                except Exception as e:
                    result = (type(e).__name__, e)
                finally:
                    db.session.remove()
                with lock:
                    outcomes.append(result)

        threads = [threading.Thread(target=worker) for _ in range(count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)

        db.session.expire_all()
        return outcomes
