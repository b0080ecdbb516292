"""
Models package - in-memory records and the static diagnosis table
"""

from .otp import OTP
from .user import User
from .diagnosis import MOCK_DIAGNOSES, SEVERITY_LEVELS

__all__ = [
    "OTP",
    "User",
    "MOCK_DIAGNOSES",
    "SEVERITY_LEVELS",
]
