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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRE_MINUTES = int(data.get("JWT_EXPIRE_MINUTES", 60))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:5000")
    RESET_TOKEN_VALIDITY_MINUTES = int(data.get("RESET_TOKEN_VALIDITY_MINUTES", 60))
    TOKEN_CLEANUP_INTERVAL_MINUTES = int(data.get("TOKEN_CLEANUP_INTERVAL_MINUTES", 60))
    EMAIL_FROM_ADDRESS = data.get("EMAIL_FROM_ADDRESS", "no-reply@aditeke.com")
    EMAIL_FROM_NAME = data.get("EMAIL_FROM_NAME", "AdiTeke Software Solutions")
    EMAIL_TIMEOUT_SECONDS = float(data.get("EMAIL_TIMEOUT_SECONDS", 10.0))
    BREVO_API_KEY = data.get("BREVO_API_KEY", "")
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
