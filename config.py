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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tenantgate.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "dev")

    # Sessions
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "tg_session")
    SESSION_TTL_DAYS = int(data.get("SESSION_TTL_DAYS", 7))

    # One-time tokens
    PASSWORD_RESET_TTL_MINUTES = int(data.get("PASSWORD_RESET_TTL_MINUTES", 60))
    INVITE_TTL_MINUTES = int(data.get("INVITE_TTL_MINUTES", 60 * 24 * 7))
    EMAIL_VERIFY_TTL_MINUTES = int(data.get("EMAIL_VERIFY_TTL_MINUTES", 60))
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")

    # Email: "log" or "resend"
    EMAIL_BACKEND = data.get("EMAIL_BACKEND", "log")
    RESEND_API_KEY = data.get("RESEND_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "")

    # Rate limits (fixed window)
    RATE_LIMIT_AUTH_LIMIT = int(data.get("RATE_LIMIT_AUTH_LIMIT", 10))
    RATE_LIMIT_API_LIMIT = int(data.get("RATE_LIMIT_API_LIMIT", 20))
    RATE_LIMIT_WINDOW_MS = int(data.get("RATE_LIMIT_WINDOW_MS", 60_000))
