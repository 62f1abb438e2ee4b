"""
Aid Service — claim lifecycle and identity verification for aid campaigns.
"""

from aid_service.app import create_app

__all__ = ["create_app"]
