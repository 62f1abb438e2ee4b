"""
Aid Service — Flask application
Campaigns, the claim lifecycle and OTP identity verification.
"""

import logging
from datetime import datetime, timedelta, timezone
import click
from flask import Flask, jsonify
from flasgger import Swagger
from sqlalchemy import text
from werkzeug.exceptions import HTTPException
from aid_service import auth
from aid_service.audit import LoggingAuditSink
from aid_service.config import Config
from aid_service.errors import ServiceError
from aid_service.extensions import db
from aid_service.notifications import build_notifier
from aid_service.services.campaign_service import CampaignService
from aid_service.services.claim_service import ClaimService
from aid_service.services.verification_service import VerificationService

logger = logging.getLogger(__name__)


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%d-%m-%Y %H:%M:%S",
    )


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description, "error_code": e.name.upper().replace(" ", "_")}), e.code

    @app.errorhandler(500)
    def handle_unexpected_error(e):
        original = getattr(e, "original_exception", None) or e
        logger.error("Unhandled error", exc_info=original)
        return jsonify({"error": "Internal server error", "error_code": "INTERNAL_ERROR"}), 500


def register_services(app, audit_sink=None, notifier=None, clock=None):
    audit_sink = audit_sink or LoggingAuditSink()
    notifier = notifier or build_notifier(app.config)

    verification_options = {
        "ttl": timedelta(minutes=app.config["OTP_TTL_MINUTES"]),
        "max_resends": app.config["OTP_MAX_RESENDS"],
        "code_length": app.config["OTP_CODE_LENGTH"],
    }
    if clock is not None:
        verification_options["clock"] = clock

    app.extensions["aid_service"] = {
        "campaigns": CampaignService(db.session),
        "claims": ClaimService(db.session, audit_sink=audit_sink),
        "verification": VerificationService(
            db.session,
            notifier=notifier,
            audit_sink=audit_sink,
            **verification_options,
        ),
    }


def register_commands(app):
    @app.cli.command("init-db")
    def init_db_command():
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("seed-demo")
    def seed_demo_command():
        """Insert demo campaigns and claims."""
        from aid_service.seed import seed_demo

        campaigns, claims = seed_demo(db.session)
        click.echo(f"Seeded {len(campaigns)} campaigns and {len(claims)} claims.")


def create_app(test_config=None, audit_sink=None, notifier=None, clock=None):
    app = Flask(__name__)

    # Configuration
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    configure_logging(app.config["LOG_LEVEL"])

    # Initialize Extensions
    db.init_app(app)
    auth.init_app(app)

    Swagger(app, config={
        "headers": [],
        "specs": [
            {
                "endpoint": "apispec_1",
                "route": "/apispec_1.json",
                "rule_filter": lambda rule: True,
                "model_filter": lambda tag: True,
            }
        ],
        "static_url_path": "/flasgger_static",
        "swagger_ui": True,
        "specs_route": "/apidocs/",
    })

    register_services(app, audit_sink=audit_sink, notifier=notifier, clock=clock)
    register_error_handlers(app)
    register_commands(app)

    # Register Blueprints
    prefix = app.config["API_PREFIX"].rstrip("/")

    from aid_service.routes.campaigns import campaigns_bp
    app.register_blueprint(campaigns_bp, url_prefix=f"{prefix}/campaigns")

    from aid_service.routes.claims import claims_bp
    app.register_blueprint(claims_bp, url_prefix=f"{prefix}/claims")

    from aid_service.routes.verification import verification_bp
    app.register_blueprint(verification_bp, url_prefix=f"{prefix}/verification")

    @app.route("/health")
    @auth.public
    def health():
        try:
            db.session.execute(text("SELECT 1"))
            return jsonify({
                "service": "aid-service",
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }), 200
        except Exception:
            logger.warning("Health check failed", exc_info=True)
            return jsonify({"service": "aid-service", "status": "unhealthy"}), 503

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000)
