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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./billing.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    CREATE_SCHEMA_ON_STARTUP = bool(data.get("CREATE_SCHEMA_ON_STARTUP", True))

    # Invoice rendering
    INVOICE_OUTPUT_DIR = data.get("INVOICE_OUTPUT_DIR", "./invoices")  # <dir>/<YYYY>/<MM>/<number>.pdf

    # Draft generation
    BILL_ALL_STUDENTS_WHEN_NONE_ACTIVE = bool(data.get("BILL_ALL_STUDENTS_WHEN_NONE_ACTIVE", True))

    # Monthly Billing Worker
    MONTHLY_BILLING_ENABLED = bool(data.get("MONTHLY_BILLING_ENABLED", True))
    MONTHLY_BILLING_CHECK_INTERVAL_SECONDS = data.get("MONTHLY_BILLING_CHECK_INTERVAL_SECONDS", 86400)  # Daily
