from flask import Blueprint, request, jsonify
from aid_service.routes import get_service
from aid_service.validators import parse_create_campaign

campaigns_bp = Blueprint('campaigns', __name__)


@campaigns_bp.route('', methods=['POST'])
def create_campaign():
    """
    Create an aid campaign
    ---
    tags:
      - Campaigns
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - name
          properties:
            name:
              type: string
            status:
              type: string
              enum: [active, draft, closed]
            budget:
              type: number
              minimum: 0
            metadata:
              type: object
    responses:
      201:
        description: Campaign created
      400:
        description: Invalid input
    """
    fields = parse_create_campaign(request.get_json(silent=True))
    campaign = get_service('campaigns').create(**fields)
    return jsonify(campaign.to_dict()), 201


@campaigns_bp.route('', methods=['GET'])
def list_campaigns():
    """
    List campaigns
    ---
    tags:
      - Campaigns
    responses:
      200:
        description: List of campaigns
    """
    campaigns = get_service('campaigns').find_all()
    return jsonify([c.to_dict() for c in campaigns]), 200


@campaigns_bp.route('/<campaign_id>', methods=['GET'])
def get_campaign(campaign_id):
    """
    Get a campaign by ID
    ---
    tags:
      - Campaigns
    parameters:
      - in: path
        name: campaign_id
        required: true
        type: string
    responses:
      200:
        description: Campaign details
      404:
        description: Campaign not found
    """
    campaign = get_service('campaigns').find_one(campaign_id)
    return jsonify(campaign.to_dict()), 200
