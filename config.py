import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoices.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Invoice defaults
    INVOICE_DEFAULT_DUE_DAYS = int(data.get("INVOICE_DEFAULT_DUE_DAYS", 14))
    INVOICE_CURRENCY = data.get("INVOICE_CURRENCY", "USD")
    DEFAULT_BUSINESS_NAME = data.get("DEFAULT_BUSINESS_NAME", "Marketplace Seller")

    # Rendered artifacts
    ARTIFACT_DIR = data.get("ARTIFACT_DIR", os.path.join(ROOT_PATH, "artifacts"))
    ARTIFACT_BASE_URL = data.get("ARTIFACT_BASE_URL", "http://localhost:8000/artifacts")

    # Email delivery (Resend); without an API key emails are only logged
    RESEND_API_KEY = data.get("RESEND_API_KEY", None)
    RESEND_API_URL = data.get("RESEND_API_URL", "https://api.resend.com/emails")
    MAIL_FROM_ADDRESS = data.get("MAIL_FROM_ADDRESS", "invoices@example.com")
    MAIL_TIMEOUT_SECONDS = float(data.get("MAIL_TIMEOUT_SECONDS", 10.0))
