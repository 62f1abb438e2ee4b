"""
API key guard — Aid Service
When API_KEY is configured, every request must send it in the x-api-key
header. Views decorated with @public are exempt.
"""

import hmac
from flask import current_app, request
from aid_service.errors import Unauthorized

API_KEY_HEADER = "x-api-key"

# Swagger UI and static assets are served without a key
PUBLIC_BLUEPRINTS = {"flasgger"}


def public(view):
    view.is_public = True
    return view


def _is_public_endpoint(endpoint):
    if endpoint is None or endpoint == "static":
        return True
    if "." in endpoint and endpoint.split(".", 1)[0] in PUBLIC_BLUEPRINTS:
        return True
    view = current_app.view_functions.get(endpoint)
    return getattr(view, "is_public", False)


def check_api_key():
    expected = current_app.config.get("API_KEY")
    if not expected:
        return None
    if _is_public_endpoint(request.endpoint):
        return None

    provided = request.headers.get(API_KEY_HEADER)
    if not provided:
        raise Unauthorized("Missing API key")
    if not hmac.compare_digest(provided.encode(), expected.encode()):
        raise Unauthorized("Invalid API key")
    return None


def init_app(app):
    app.before_request(check_api_key)
