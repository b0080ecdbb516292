from pydantic_settings import BaseSettings
from pydantic import validator
from typing import List
import os

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "PlantCare AI"
    APP_ENV: str = "development"
    DEBUG: bool = True
    ENABLE_API_DOCS: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS - React dev server
    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    # OTP
    OTP_LENGTH: int = 6
    OTP_EXPIRY_SECONDS: int = 300  # 5 minutes
    OTP_STORE_BACKEND: str = "memory"  # memory, redis

    @validator('OTP_STORE_BACKEND')
    def validate_otp_backend(cls, v):
        v = v.strip().lower()
        if v not in ('memory', 'redis'):
            raise ValueError('OTP_STORE_BACKEND must be one of: memory, redis')
        return v

    # Redis (only used when OTP_STORE_BACKEND=redis)
    REDIS_URL: str = "redis://localhost:6379/0"

    # SMS gateway - leave SMS_API_URL empty for demo delivery (log line only)
    SMS_API_URL: str = ""
    SMS_API_KEY: str = ""
    SMS_SENDER_ID: str = "PlantCare"
    SMS_TIMEOUT_SECONDS: int = 10

    # Users
    DEFAULT_USER_NAME: str = "Farmer"

    # File Upload
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 10485760  # 10MB
    ALLOWED_MIME_PREFIX: str = "image/"

    # Mock diagnosis
    ANALYSIS_DELAY_SECONDS: float = 1.5
    CONFIDENCE_JITTER: float = 0.1  # total width, applied as +/- half

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    OTP_RATE_LIMIT: str = "5/minute"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/errors.log"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

# Create settings instance
settings = Settings()

# Ensure directories exist
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
if os.path.dirname(settings.LOG_FILE):
    os.makedirs(os.path.dirname(settings.LOG_FILE), exist_ok=True)
