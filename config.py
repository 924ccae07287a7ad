import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./billing.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Fallback plan used when a subscription is opened before any plan exists
    DEFAULT_PLAN_NAME = data.get("DEFAULT_PLAN_NAME", "Plano Mensal Padrão")
    DEFAULT_PLAN_DESCRIPTION = data.get(
        "DEFAULT_PLAN_DESCRIPTION", "Plano padrão criado automaticamente."
    )
    DEFAULT_PLAN_PRICE_CENTS = data.get("DEFAULT_PLAN_PRICE_CENTS", 100)

    # Billing Reconciliation Worker
    RECONCILIATION_ENABLED = bool(data.get("RECONCILIATION_ENABLED", True))
    RECONCILIATION_INTERVAL_SECONDS = data.get("RECONCILIATION_INTERVAL_SECONDS", 86400)  # Daily
    RECONCILIATION_NOTIFICATION_WEBHOOK = data.get("RECONCILIATION_NOTIFICATION_WEBHOOK", None)
