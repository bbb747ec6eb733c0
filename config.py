import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.environ.get("HELPDESK_CONFIG", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key, default):
    """Environment variable first, then env.yaml, then default"""
    raw = os.environ.get(key)
    if raw is None:
        return data.get(key, default)
    if isinstance(default, (bool, int, float, list, dict)):
        return yaml.safe_load(raw)
    return raw


DEFAULT_TENANT_SCREENS = {
    "LogisticsCo": {
        "name": "Logistics Corporation",
        "theme": "blue",
        "screens": [
            {
                "id": "support-tickets",
                "name": "Support Tickets",
                "url": "/support-tickets",
                "icon": "ticket",
                "permissions": ["User", "Admin"],
            },
            {
                "id": "admin-dashboard",
                "name": "Admin Dashboard",
                "url": "/admin",
                "icon": "dashboard",
                "permissions": ["Admin"],
            },
        ],
    },
    "RetailGmbH": {
        "name": "Retail GmbH",
        "theme": "green",
        "screens": [
            {
                "id": "support-tickets",
                "name": "Customer Support",
                "url": "/support-tickets",
                "icon": "support",
                "permissions": ["User", "Admin"],
            }
        ],
    },
}


class ApplicationConfig:
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./helpdesk.db")
    AUTO_CREATE_TABLES = bool(_get("AUTO_CREATE_TABLES", True))
    API_PREFIX = _get("API_PREFIX", "/api")
    API_PORT = int(_get("API_PORT", 8000))
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = _get("CORS_ORIGINS", ["http://localhost:3000"])
    CORS_ALLOW_CREDENTIALS = bool(_get("CORS_ALLOW_CREDENTIALS", True))
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(_get("ENABLE_LOGGING_MIDDLEWARE", True))

    # Tokens
    JWT_SECRET = _get("JWT_SECRET", "dev-access-secret-change-in-production")
    JWT_REFRESH_SECRET = _get("JWT_REFRESH_SECRET", "dev-refresh-secret-change-in-production")
    JWT_EXPIRES_IN = int(_get("JWT_EXPIRES_IN", 15 * 60))
    JWT_REFRESH_EXPIRES_IN = int(_get("JWT_REFRESH_EXPIRES_IN", 7 * 24 * 60 * 60))
    JWT_ISSUER = _get("JWT_ISSUER", "helpdesk-api")
    JWT_AUDIENCE = _get("JWT_AUDIENCE", "helpdesk-users")
    BCRYPT_ROUNDS = int(_get("BCRYPT_ROUNDS", 12))

    # Workflow engine
    WORKFLOW_BASE_URL = _get("WORKFLOW_BASE_URL", "http://localhost:5678")
    WEBHOOK_SECRET = _get("WEBHOOK_SECRET", "dev-webhook-secret")
    WORKFLOW_TIMEOUT_SECONDS = float(_get("WORKFLOW_TIMEOUT_SECONDS", 10.0))

    AUDIT_RETENTION_DAYS = int(_get("AUDIT_RETENTION_DAYS", 365))
    TENANT_SCREENS = _get("TENANT_SCREENS", DEFAULT_TENANT_SCREENS)
