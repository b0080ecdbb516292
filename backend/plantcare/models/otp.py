from dataclasses import dataclass


@dataclass
class OTP:
    """Pending one-time password for a phone number."""

    phone: str
    otp: str
    expires_at: float  # epoch seconds

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at

    def to_dict(self) -> dict:
        return {"phone": self.phone, "otp": self.otp, "expires_at": self.expires_at}

    @classmethod
    def from_dict(cls, data: dict) -> "OTP":
        return cls(phone=data["phone"], otp=data["otp"], expires_at=float(data["expires_at"]))
