import asyncio
import logging
import os
import random
import re
import uuid
from datetime import datetime
from pathlib import Path

import requests

from ..config import settings
from .validators import format_phone_international

logger = logging.getLogger(__name__)

UPLOAD_CHUNK_SIZE = 1024 * 1024


class UploadRejected(ValueError):
    """Raised when an uploaded file fails validation; the message is user-facing"""


async def send_otp_sms(phone: str, otp: str) -> dict:
    """
    Deliver an OTP by SMS.

    Without SMS_API_URL configured this is demo delivery: the code is only
    written to the log.
    """
    if not settings.SMS_API_URL:
        logger.info(f"[DEMO] OTP for {phone}: {otp}")
        return {"success": True, "message": "OTP logged (demo mode)", "demo": True}

    formatted_phone = format_phone_international(phone)
    minutes = max(1, settings.OTP_EXPIRY_SECONDS // 60)
    message = f"Your PlantCare verification code is: {otp}. Valid for {minutes} minutes. Do not share this code."

    payload = {
        "recipient": formatted_phone,
        "sender_id": settings.SMS_SENDER_ID,
        "message": message
    }

    headers = {
        "Accept": "application/json",
        "Authorization": f"Bearer {settings.SMS_API_KEY}",
        "Content-Type": "application/json"
    }

    try:
        # requests is blocking; keep it off the event loop
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(
            None,
            lambda: requests.post(
                settings.SMS_API_URL, json=payload, headers=headers,
                timeout=settings.SMS_TIMEOUT_SECONDS
            )
        )
    except requests.RequestException as e:
        raise Exception(f"SMS sending failed: {str(e)}")

    logger.debug(f"SMS API response {response.status_code}: {response.text}")

    if response.status_code != 200:
        return {
            "success": False,
            "message": f"Failed to send SMS: HTTP {response.status_code}"
        }

    return {
        "success": True,
        "message": "OTP sent successfully",
        "phone": formatted_phone
    }


def generate_otp(length: int = 6) -> str:
    """Generate random OTP code (not cryptographically strong)"""
    return ''.join([str(random.randint(0, 9)) for _ in range(length)])


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe storage"""
    filename = os.path.basename(filename or "")
    # Remove any non-alphanumeric characters except dots, underscores, and hyphens
    filename = re.sub(r'[^\w\s.-]', '', filename)
    # Replace spaces with underscores
    filename = filename.replace(' ', '_')
    return filename.lstrip('.')


# File Upload Helpers

def get_file_extension(filename: str) -> str:
    """Get file extension from filename"""
    return filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''


def generate_unique_filename(original_filename: str) -> str:
    """Generate unique filename with timestamp"""
    ext = get_file_extension(sanitize_filename(original_filename))
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    unique_id = str(uuid.uuid4())[:8]

    if not ext:
        return f"{timestamp}_{unique_id}"
    return f"{timestamp}_{unique_id}.{ext}"


async def save_uploaded_file(file, upload_dir: str, max_size: int, mime_prefix: str = "image/") -> dict:
    """
    Validate and save an uploaded file to disk.

    Raises UploadRejected for a wrong MIME type or an oversized file; a
    partially written file is removed.
    """
    content_type = file.content_type or ""
    if not content_type.startswith(mime_prefix):
        raise UploadRejected("Only image files are allowed")

    Path(upload_dir).mkdir(parents=True, exist_ok=True)

    unique_filename = generate_unique_filename(file.filename or "")
    file_path = os.path.join(upload_dir, unique_filename)

    written = 0
    with open(file_path, "wb") as buffer:
        while True:
            chunk = file.file.read(UPLOAD_CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > max_size:
                break
            buffer.write(chunk)

    if written > max_size:
        await delete_file(file_path)
        limit_mb = max_size // (1024 * 1024)
        raise UploadRejected(f"Image size should be less than {limit_mb}MB")

    return {
        "success": True,
        "filename": unique_filename,
        "original_filename": file.filename,
        "file_path": file_path,
        "file_size": written,
        "mime_type": content_type
    }


async def delete_file(file_path: str) -> bool:
    """Delete file from disk"""
    try:
        if os.path.exists(file_path):
            os.remove(file_path)
            return True
        return False
    except OSError as e:
        logger.warning(f"Error deleting file {file_path}: {str(e)}")
        return False
