import re
from typing import Tuple, Optional

PHONE_PATTERN = re.compile(r'^[0-9]{10}$')
COUNTRY_CODE = '91'


def validate_phone(phone: Optional[str]) -> Tuple[bool, Optional[str], Optional[str]]:
    """
    Validate a 10-digit phone number.

    Returns: (is_valid, normalized_phone, error_message)

    Surrounding whitespace is ignored; anything else that is not exactly
    ten ASCII digits is rejected.
    """
    if not phone:
        return False, None, "Phone number is required"

    phone = phone.strip()

    if not PHONE_PATTERN.match(phone):
        return False, None, "Invalid phone number format"

    return True, phone, None


def validate_otp_format(otp: Optional[str], length: int = 6) -> bool:
    """Check that a submitted code has the expected number of digits"""
    if not otp:
        return False
    return len(otp) == length and otp.isdigit()


def format_phone_international(phone: str) -> str:
    """
    Convert a local 10-digit number to the 91XXXXXXXXXX form SMS gateways expect.

    - 9876543210 -> 919876543210
    - +91 98765 43210 -> 919876543210
    """
    digits = re.sub(r'\D', '', phone)
    if len(digits) == 12 and digits.startswith(COUNTRY_CODE):
        return digits
    return f'{COUNTRY_CODE}{digits.lstrip("0")}'


def format_phone_display(phone: str) -> str:
    """
    Format phone number for display.

    9876543210 -> +91 9876543210
    """
    return f"+{COUNTRY_CODE} {phone}"
