from redis import Redis

from .config import settings
from .services.otp_service import InMemoryOTPStore, RedisOTPStore, OTPService
from .services.user_service import InMemoryUserStore, UserService
from .services.diagnosis_service import MockDiagnosisService

# Demo mode: no database, state lives as long as the process
if settings.OTP_STORE_BACKEND == "redis":
    redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
    otp_store = RedisOTPStore(redis_client, ttl_seconds=settings.OTP_EXPIRY_SECONDS)
else:
    redis_client = None
    otp_store = InMemoryOTPStore()

user_store = InMemoryUserStore()

diagnosis_service = MockDiagnosisService(
    delay_seconds=settings.ANALYSIS_DELAY_SECONDS,
    jitter=settings.CONFIDENCE_JITTER
)

# Dependencies
def get_otp_service():
    return OTPService(
        otp_store,
        ttl_seconds=settings.OTP_EXPIRY_SECONDS,
        length=settings.OTP_LENGTH
    )

def get_user_service():
    return UserService(user_store, default_name=settings.DEFAULT_USER_NAME)

def get_diagnosis_service():
    return diagnosis_service

# Dependency for Redis
def get_redis():
    return redis_client
