from flask import Blueprint, request, jsonify
from aid_service.routes import get_service
from aid_service.validators import parse_create_claim

claims_bp = Blueprint('claims', __name__)


@claims_bp.route('', methods=['POST'])
def create_claim():
    """
    Create a new claim against a campaign
    ---
    tags:
      - Claims
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - campaignId
            - amount
            - recipientRef
          properties:
            campaignId:
              type: string
            amount:
              type: number
              minimum: 0
            recipientRef:
              type: string
            evidenceRef:
              type: string
    responses:
      201:
        description: Claim created in requested status
      400:
        description: Invalid input
      404:
        description: Campaign not found
    """
    fields = parse_create_claim(request.get_json(silent=True))
    claim = get_service('claims').create(**fields)
    return jsonify(claim.to_dict()), 201


@claims_bp.route('', methods=['GET'])
def list_claims():
    """
    Get all claims
    ---
    tags:
      - Claims
    responses:
      200:
        description: List of claims with their campaigns
    """
    claims = get_service('claims').find_all()
    return jsonify([c.to_dict() for c in claims]), 200


@claims_bp.route('/<claim_id>', methods=['GET'])
def get_claim(claim_id):
    """
    Get a claim by ID
    ---
    tags:
      - Claims
    parameters:
      - in: path
        name: claim_id
        required: true
        type: string
    responses:
      200:
        description: Claim details
      404:
        description: Claim not found
    """
    claim = get_service('claims').find_one(claim_id)
    return jsonify(claim.to_dict()), 200


@claims_bp.route('/<claim_id>/verify', methods=['POST'])
def verify_claim(claim_id):
    """
    Verify a claim (requested -> verified)
    ---
    tags:
      - Claims
    parameters:
      - in: path
        name: claim_id
        required: true
        type: string
    responses:
      200:
        description: Claim verified
      400:
        description: Invalid transition
      404:
        description: Claim not found
    """
    claim = get_service('claims').verify(claim_id)
    return jsonify(claim.to_dict()), 200


@claims_bp.route('/<claim_id>/approve', methods=['POST'])
def approve_claim(claim_id):
    """
    Approve a claim (verified -> approved)
    ---
    tags:
      - Claims
    parameters:
      - in: path
        name: claim_id
        required: true
        type: string
    responses:
      200:
        description: Claim approved
      400:
        description: Invalid transition
      404:
        description: Claim not found
    """
    claim = get_service('claims').approve(claim_id)
    return jsonify(claim.to_dict()), 200


@claims_bp.route('/<claim_id>/disburse', methods=['POST'])
def disburse_claim(claim_id):
    """
    Disburse a claim (approved -> disbursed)
    ---
    tags:
      - Claims
    parameters:
      - in: path
        name: claim_id
        required: true
        type: string
    responses:
      200:
        description: Claim disbursed
      400:
        description: Invalid transition
      404:
        description: Claim not found
    """
    claim = get_service('claims').disburse(claim_id)
    return jsonify(claim.to_dict()), 200


@claims_bp.route('/<claim_id>/archive', methods=['PATCH'])
def archive_claim(claim_id):
    """
    Archive a claim (disbursed -> archived)
    ---
    tags:
      - Claims
    parameters:
      - in: path
        name: claim_id
        required: true
        type: string
    responses:
      200:
        description: Claim archived
      400:
        description: Invalid transition
      404:
        description: Claim not found
    """
    claim = get_service('claims').archive(claim_id)
    return jsonify(claim.to_dict()), 200
