"""
Campaign Service — Aid Service
Registry of aid packages. Budgets are recorded, not enforced.
"""

from decimal import Decimal
from aid_service.extensions import transaction
from aid_service.errors import NotFound
from aid_service.models.campaign import Campaign


class CampaignService:
    def __init__(self, session):
        self.session = session

    def create(self, name, status="draft", budget=0, metadata=None):
        campaign = Campaign(
            name=name,
            status=status,
            budget=Decimal(str(budget)),
            details=metadata or {},
        )
        with transaction(self.session):
            self.session.add(campaign)
        return campaign

    def find_all(self):
        return self.session.query(Campaign).order_by(Campaign.created_at.desc()).all()

    def find_one(self, campaign_id):
        campaign = self.session.get(Campaign, campaign_id)
        if campaign is None:
            raise NotFound("Campaign not found")
        return campaign
