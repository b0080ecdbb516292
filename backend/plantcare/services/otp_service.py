"""
OTP Service - issue and verify one-time passwords

Pending codes live in an expiring key-value store keyed by phone number.
Two backends are provided: a process-local dict (default) and Redis.
"""
import json
import logging
import time
from typing import Callable, Dict, Optional

from ..models.otp import OTP
from ..utils.helpers import generate_otp

logger = logging.getLogger(__name__)


class OTPError(Exception):
    """Base class for verification failures; message is user-facing"""

    message = "OTP verification failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class OTPNotFoundError(OTPError):
    message = "OTP not found. Please request a new one."


class OTPExpiredError(OTPError):
    message = "OTP has expired. Please request a new one."


class InvalidOTPError(OTPError):
    message = "Invalid OTP"


class InMemoryOTPStore:
    """
    Pending OTPs held in a dict for the lifetime of the process.

    Like the Redis backend, a record is kept ``grace_seconds`` past its
    expiry so it still reads as expired; older records are purged on write.
    """

    def __init__(self, grace_seconds: int = 300, clock: Callable[[], float] = time.time):
        self._records: Dict[str, OTP] = {}
        self.grace_seconds = grace_seconds
        self.clock = clock

    def get(self, phone: str) -> Optional[OTP]:
        return self._records.get(phone)

    def set(self, record: OTP) -> None:
        self.purge_stale()
        self._records[record.phone] = record

    def purge_stale(self) -> int:
        cutoff = self.clock() - self.grace_seconds
        stale = [phone for phone, r in self._records.items() if r.expires_at < cutoff]
        for phone in stale:
            del self._records[phone]
        if stale:
            logger.debug(f"Purged {len(stale)} stale OTP records")
        return len(stale)

    def delete(self, phone: str) -> None:
        self._records.pop(phone, None)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self):
        return len(self._records)


class RedisOTPStore:
    """
    Pending OTPs held in Redis, one JSON value per phone.

    The key outlives the code by ``grace_seconds`` so an expired code can
    still be reported as expired instead of missing.
    """

    def __init__(self, redis_client, ttl_seconds: int, grace_seconds: int = 300, prefix: str = "otp:"):
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds
        self.grace_seconds = grace_seconds
        self.prefix = prefix

    def _key(self, phone: str) -> str:
        return f"{self.prefix}{phone}"

    def get(self, phone: str) -> Optional[OTP]:
        raw = self.redis.get(self._key(phone))
        if raw is None:
            return None
        return OTP.from_dict(json.loads(raw))

    def set(self, record: OTP) -> None:
        self.redis.set(
            self._key(record.phone),
            json.dumps(record.to_dict()),
            ex=self.ttl_seconds + self.grace_seconds
        )

    def delete(self, phone: str) -> None:
        self.redis.delete(self._key(phone))

    def clear(self) -> None:
        for key in self.redis.scan_iter(match=f"{self.prefix}*"):
            self.redis.delete(key)


class OTPService:
    """Issues codes and checks submissions against the store"""

    def __init__(self, store, ttl_seconds: int = 300, length: int = 6, clock: Callable[[], float] = time.time):
        self.store = store
        self.ttl_seconds = ttl_seconds
        self.length = length
        self.clock = clock

    def issue(self, phone: str) -> OTP:
        """Generate a new code for phone, replacing any pending one"""
        record = OTP(
            phone=phone,
            otp=generate_otp(self.length),
            expires_at=self.clock() + self.ttl_seconds
        )
        self.store.set(record)
        logger.info(f"OTP issued for {phone}, valid for {self.ttl_seconds}s")
        return record

    def verify(self, phone: str, otp: str) -> None:
        """
        Consume the pending code for phone.

        Raises OTPNotFoundError when nothing is pending, OTPExpiredError
        (and evicts the record) past expiry, InvalidOTPError on mismatch
        (record kept). A match deletes the record, so each code works once.
        """
        record = self.store.get(phone)

        if record is None:
            raise OTPNotFoundError()

        if record.is_expired(self.clock()):
            self.store.delete(phone)
            raise OTPExpiredError()

        if record.otp != otp:
            logger.info(f"Invalid OTP submitted for {phone}")
            raise InvalidOTPError()

        self.store.delete(phone)
