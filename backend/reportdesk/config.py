import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", os.getenv("SECRET_KEY", "dev-secret"))
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("JWT_ACCESS_HOURS", "12")))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    DEFAULT_PER_PAGE = int(os.getenv("DEFAULT_PER_PAGE", "20"))

    # Object storage (local buckets under UPLOAD_FOLDER)
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    STORAGE_PUBLIC_URL = os.getenv("STORAGE_PUBLIC_URL", "/storage")

    # Edge functions (AI report generation / review / KB parsing)
    FUNCTIONS_BASE_URL = os.getenv("FUNCTIONS_BASE_URL", "http://localhost:54321/functions/v1")
    FUNCTIONS_API_KEY = os.getenv("FUNCTIONS_API_KEY")
    FUNCTIONS_TIMEOUT = int(os.getenv("FUNCTIONS_TIMEOUT", "120"))

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///reportdesk-dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    FUNCTIONS_BASE_URL = "http://functions.test"
    FUNCTIONS_API_KEY = "test-key"

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
