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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./nubo.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ACCESS_TOKEN_TTL_MINUTES = data.get("ACCESS_TOKEN_TTL_MINUTES", 15)
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")
    REFRESH_COOKIE_NAME = data.get("REFRESH_COOKIE_NAME", "nubo_refresh")
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", False))
    RESET_TOKEN_TTL_MINUTES = data.get("RESET_TOKEN_TTL_MINUTES", 60)
    REFRESH_TOKEN_TTL_HOURS = data.get("REFRESH_TOKEN_TTL_HOURS", 24)
    REFRESH_TOKEN_REMEMBER_TTL_DAYS = data.get("REFRESH_TOKEN_REMEMBER_TTL_DAYS", 30)
    TRENDING_RATE_LIMIT = data.get("TRENDING_RATE_LIMIT", 200)
    TRENDING_RATE_WINDOW_SECONDS = data.get("TRENDING_RATE_WINDOW_SECONDS", 60)
    PASSWORD_RESET_RATE_LIMIT = data.get("PASSWORD_RESET_RATE_LIMIT", 5)
    PASSWORD_RESET_RATE_WINDOW_SECONDS = data.get("PASSWORD_RESET_RATE_WINDOW_SECONDS", 3600)
    TRUSTED_PROXIES = data.get("TRUSTED_PROXIES", "")
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = data.get("SMTP_PORT", 587)
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    EMAIL_FROM = data.get("EMAIL_FROM", "Nubo <no-reply@nubo.com>")
