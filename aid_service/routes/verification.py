from flask import Blueprint, request, jsonify
from aid_service.routes import get_service
from aid_service.validators import (
    parse_start_verification,
    parse_complete_verification,
    parse_resend_verification,
)

verification_bp = Blueprint('verification', __name__)


@verification_bp.route('/start', methods=['POST'])
def start_verification():
    """
    Send a one-time code to an email address or phone number
    ---
    tags:
      - Verification
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - channel
          properties:
            channel:
              type: string
              enum: [email, phone]
            email:
              type: string
              description: Required when channel is email
            phone:
              type: string
              description: Required when channel is phone
    responses:
      200:
        description: Verification started; the code is delivered out of band
      400:
        description: Invalid channel or missing identifier
    """
    channel, identifier = parse_start_verification(request.get_json(silent=True))
    session = get_service('verification').start(channel, identifier)
    return jsonify({
        'sessionId': session.id,
        'channel': session.channel,
        'expiresAt': session.to_dict()['expiresAt'],
        'message': f'Verification code sent via {session.channel}.',
    }), 200


@verification_bp.route('/complete', methods=['POST'])
def complete_verification():
    """
    Complete verification with the code received
    ---
    tags:
      - Verification
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - sessionId
            - code
          properties:
            sessionId:
              type: string
            code:
              type: string
              pattern: '^[0-9]{4,8}$'
    responses:
      200:
        description: Verification completed
      400:
        description: Invalid, expired or reused code
      404:
        description: Verification session not found
    """
    session_id, code = parse_complete_verification(request.get_json(silent=True))
    session = get_service('verification').complete(session_id, code)
    return jsonify({
        'sessionId': session.id,
        'verified': True,
        'message': 'Verification completed successfully.',
    }), 200


@verification_bp.route('/resend', methods=['POST'])
def resend_verification():
    """
    Issue a fresh code for a pending session
    ---
    tags:
      - Verification
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - sessionId
          properties:
            sessionId:
              type: string
    responses:
      200:
        description: New code sent
      400:
        description: Resend limit exceeded or session already completed
      404:
        description: Verification session not found
    """
    session_id = parse_resend_verification(request.get_json(silent=True))
    session = get_service('verification').resend(session_id)
    return jsonify({
        'sessionId': session.id,
        'expiresAt': session.to_dict()['expiresAt'],
    }), 200
