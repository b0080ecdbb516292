"""
Auth Routes
Phone number + OTP sign-up and sign-in (demo mode, in-memory users)
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..config import settings
from ..database import get_otp_service, get_user_service
from ..limiter import limiter
from ..schemas.auth import (
    SendOtpRequest, SignupRequest, SigninRequest, MessageResponse, AuthResponse
)
from ..services.otp_service import OTPService, OTPError
from ..services.user_service import UserService
from ..utils.helpers import send_otp_sms
from ..utils.validators import validate_phone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _verify_otp(otp_service: OTPService, phone: str, otp: str) -> None:
    try:
        otp_service.verify(phone, otp)
    except OTPError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/send-otp", response_model=MessageResponse)
@limiter.limit(settings.OTP_RATE_LIMIT)
async def send_otp(
    request: Request,
    data: SendOtpRequest,
    otp_service: OTPService = Depends(get_otp_service)
):
    """Issue an OTP for a 10-digit phone number"""

    is_valid, phone, error = validate_phone(data.phone)
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)

    record = otp_service.issue(phone)

    # Delivery problems are logged only; the code is stored either way
    try:
        delivery = await send_otp_sms(phone, record.otp)
        if not delivery.get("success"):
            logger.warning(f"SMS delivery to {phone} failed: {delivery.get('message')}")
    except Exception as e:
        logger.error(f"SMS delivery to {phone} failed: {e}")

    return {"success": True, "message": "OTP sent successfully"}


@router.post("/signup", response_model=AuthResponse)
async def signup(
    data: SignupRequest,
    otp_service: OTPService = Depends(get_otp_service),
    user_service: UserService = Depends(get_user_service)
):
    """Verify OTP and register a new user"""

    name = (data.name or "").strip()
    phone = (data.phone or "").strip()
    otp = (data.otp or "").strip()

    if not name or not phone or not otp:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name, phone, and OTP are required"
        )

    _verify_otp(otp_service, phone, otp)

    user = user_service.register(name, phone)

    return {
        "success": True,
        "message": "Registration successful",
        "user": user.public_dict()
    }


@router.post("/signin", response_model=AuthResponse)
async def signin(
    data: SigninRequest,
    otp_service: OTPService = Depends(get_otp_service),
    user_service: UserService = Depends(get_user_service)
):
    """Verify OTP and sign in; unknown phones get a default-named user"""

    phone = (data.phone or "").strip()
    otp = (data.otp or "").strip()

    if not phone or not otp:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Phone and OTP are required"
        )

    _verify_otp(otp_service, phone, otp)

    user = user_service.get_or_create(phone)

    return {
        "success": True,
        "message": "Login successful",
        "user": user.public_dict()
    }
