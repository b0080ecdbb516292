"""
HTTP client for the PlantCare API.

Network and server errors surface as ApiError; there is no offline
fallback that fakes a successful response.
"""
import logging
import mimetypes
import os
from typing import Optional

import requests

from ..config import settings
from ..utils.validators import validate_phone, validate_otp_format

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000/api"
MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10MB


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ClientValidationError(ValueError):
    """Input rejected before any request is made"""


class PlantCareClient:
    def __init__(self, base_url: Optional[str] = None, timeout: float = 30, session=None, otp_length: Optional[int] = None):
        self.base_url = (base_url or os.getenv("PLANTCARE_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.timeout = timeout
        self.otp_length = otp_length or settings.OTP_LENGTH
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"Could not reach PlantCare API: {e}")

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code >= 400:
            message = data.get("detail") or data.get("error") or f"HTTP {response.status_code}"
            raise ApiError(str(message), status_code=response.status_code)

        return data

    # Auth

    def send_otp(self, phone: str) -> dict:
        is_valid, phone, _ = validate_phone(phone)
        if not is_valid:
            raise ClientValidationError("Please enter a valid 10-digit phone number")
        return self._request("POST", "/auth/send-otp", json={"phone": phone})

    def signup(self, name: str, phone: str, otp: str) -> dict:
        if not validate_otp_format(otp, self.otp_length):
            raise ClientValidationError(f"Please enter the complete {self.otp_length}-digit OTP")
        return self._request("POST", "/auth/signup", json={"name": name, "phone": phone, "otp": otp})

    def signin(self, phone: str, otp: str) -> dict:
        if not validate_otp_format(otp, self.otp_length):
            raise ClientValidationError(f"Please enter the complete {self.otp_length}-digit OTP")
        return self._request("POST", "/auth/signin", json={"phone": phone, "otp": otp})

    # Scan

    def analyze_image(self, image_path: str) -> dict:
        content_type = mimetypes.guess_type(image_path)[0] or ""
        if not content_type.startswith("image/"):
            raise ClientValidationError("Please select an image file")
        if os.path.getsize(image_path) > MAX_IMAGE_SIZE:
            raise ClientValidationError("Image size should be less than 10MB")

        with open(image_path, "rb") as f:
            files = {"image": (os.path.basename(image_path), f, content_type)}
            return self._request("POST", "/scan/analyze", files=files)

    def scan_history(self) -> dict:
        return self._request("GET", "/scan/history")

    def health(self) -> dict:
        return self._request("GET", "/health")
