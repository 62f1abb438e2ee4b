"""
Demo data — Aid Service
Idempotent: rows that already exist are left as they are.
"""

import logging
from decimal import Decimal
from aid_service.extensions import transaction
from aid_service.models.campaign import Campaign
from aid_service.models.claim import Claim

logger = logging.getLogger(__name__)

DEMO_CAMPAIGNS = [
    {
        "id": "demo-campaign-1",
        "name": "Emergency Relief Fund 2026",
        "status": "active",
        "budget": Decimal("50000.00"),
        "details": {
            "description": "Disaster relief campaign for affected communities",
            "region": "West Africa",
        },
    },
    {
        "id": "demo-campaign-2",
        "name": "Medical Aid Initiative",
        "status": "draft",
        "budget": Decimal("75000.00"),
        "details": {
            "description": "Healthcare access program for underserved areas",
            "region": "South Africa",
        },
    },
]

DEMO_CLAIMS = [
    {
        "id": "demo-claim-1",
        "campaign_id": "demo-campaign-1",
        "status": "approved",
        "amount": Decimal("5000.00"),
        "recipient_ref": "household-flood-025",
        "evidence_ref": "relief-supplies-manifest",
    },
    {
        "id": "demo-claim-2",
        "campaign_id": "demo-campaign-1",
        "status": "requested",
        "amount": Decimal("3500.00"),
        "recipient_ref": "shelter-site-015",
        "evidence_ref": None,
    },
    {
        "id": "demo-claim-3",
        "campaign_id": "demo-campaign-2",
        "status": "disbursed",
        "amount": Decimal("8000.00"),
        "recipient_ref": "mobile-clinic-north",
        "evidence_ref": "clinic-operations-report",
    },
]


def _upsert(session, model, rows):
    created = []
    for row in rows:
        if session.get(model, row["id"]) is None:
            session.add(model(**row))
            created.append(row["id"])
    # Flush so claims see the campaigns added in the same transaction
    session.flush()
    return created


def seed_demo(session):
    with transaction(session):
        campaigns = _upsert(session, Campaign, DEMO_CAMPAIGNS)
        claims = _upsert(session, Claim, DEMO_CLAIMS)

    logger.info("Seeded campaigns: %s", campaigns or "none (already present)")
    logger.info("Seeded claims: %s", claims or "none (already present)")
    return campaigns, claims
