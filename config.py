import os

from dotenv import load_dotenv

# Production takes its environment from the platform, not a .env file.
if os.getenv("APP_ENV", "development").lower() != "production":
    load_dotenv()


def _csv(name: str, default: str = ""):
    raw = os.getenv(name, default) or ""
    return [part.strip() for part in raw.split(",") if part.strip()]


class BaseConfig:
    APP_ENV = os.getenv("APP_ENV", "development").lower()
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-not-secure")

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///msfeedback.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT
    JWT_SECRET = os.getenv("JWT_SECRET") or SECRET_KEY
    JWT_EXPIRES_IN = os.getenv("JWT_EXPIRES_IN", "24h")
    JWT_REFRESH_EXPIRES_IN = os.getenv("JWT_REFRESH_EXPIRES_IN", "7d")

    # CORS
    CORS_ORIGINS = _csv("CORS_ORIGINS", "http://localhost:30008,http://localhost:50008")

    # Uploads / request size
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))
    UPLOAD_MAX_SIZE = int(os.getenv("UPLOAD_MAX_SIZE", str(10 * 1024 * 1024)))
    UPLOAD_MAX_FILES = int(os.getenv("UPLOAD_MAX_FILES", "5"))
    UPLOAD_ALLOWED_TYPES = _csv("UPLOAD_ALLOWED_TYPES", "image/*,audio/*,video/*,text/*,application/*")
    BATCH_QUERY_LIMIT = 100

    # Recognised but unused by the core logic
    EMAIL_HOST = os.getenv("EMAIL_HOST", "smtp.gmail.com")
    EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
    EMAIL_SECURE = os.getenv("EMAIL_SECURE", "false").lower() == "true"
    EMAIL_USER = os.getenv("EMAIL_USER", "")
    EMAIL_PASS = os.getenv("EMAIL_PASS", "")
    SPEECH_API_KEY = os.getenv("SPEECH_API_KEY", "")
    SPEECH_API_SECRET = os.getenv("SPEECH_API_SECRET", "")
    SPEECH_ENDPOINT = os.getenv("SPEECH_ENDPOINT", "")

    # Cache / rate limiting
    REDIS_URL = os.getenv("REDIS_URL")
    RATELIMIT_STORAGE_URI = REDIS_URL or "memory://"
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "100 per 15 minutes")
    RATELIMIT_HEADERS_ENABLED = True

    # Seed data
    DEFAULT_EXTERNAL_SYSTEM_NAME = os.getenv("DEFAULT_EXTERNAL_SYSTEM_NAME", "Default External System")
    DEFAULT_API_KEY = os.getenv("DEFAULT_API_KEY", "default-api-key-2024")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    APP_ENV = "development"
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    APP_ENV = "testing"
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET = "test-secret"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = "memory://"


class ProductionConfig(BaseConfig):
    APP_ENV = "production"
    DEBUG = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

    # SQLAlchemy engine pool for managed PostgreSQL
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'pool_size': 5,
        'max_overflow': 10,
        'pool_timeout': 30,
    }


class StagingConfig(ProductionConfig):
    APP_ENV = "staging"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


_CONFIGS = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "staging": StagingConfig,
    "production": ProductionConfig,
}


def get_config(name=None):
    key = (name or os.getenv("APP_ENV", "development") or "development").lower()
    return _CONFIGS.get(key, DevelopmentConfig)
