"""
Configuration — Aid Service
Values come from the environment (and a local .env file when present).
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _database_uri():
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    db_user = os.getenv("DB_USER", "aid_svc_user")
    db_pass = os.getenv("DB_PASS", "password")
    db_host = os.getenv("DB_HOST", "aid-db")
    db_name = os.getenv("DB_NAME", "aid_db")
    return f"postgresql://{db_user}:{db_pass}@{db_host}/{db_name}"


class Config:
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    API_KEY = os.getenv("API_KEY", "")
    API_PREFIX = os.getenv("API_PREFIX", "/api/v1")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # One-time codes
    OTP_TTL_MINUTES = int(os.getenv("OTP_TTL_MINUTES", "10"))
    OTP_MAX_RESENDS = int(os.getenv("OTP_MAX_RESENDS", "3"))
    OTP_CODE_LENGTH = int(os.getenv("OTP_CODE_LENGTH", "6"))

    # Empty URL -> codes are only logged (masked), never delivered
    NOTIFY_WEBHOOK_URL = os.getenv("NOTIFY_WEBHOOK_URL", "")
    NOTIFY_TIMEOUT_SEC = float(os.getenv("NOTIFY_TIMEOUT_SEC", "2.0"))
