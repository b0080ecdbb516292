import os
import tempfile

# Settings are read at import time, so steer them before importing the app
_TMP_DIR = tempfile.mkdtemp(prefix="plantcare-tests-")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "logs", "errors.log")
os.environ["ANALYSIS_DELAY_SECONDS"] = "0"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["OTP_STORE_BACKEND"] = "memory"
os.environ["SMS_API_URL"] = ""

import pytest
from fastapi.testclient import TestClient

from plantcare.main import app
from plantcare import database


@pytest.fixture(autouse=True)
def reset_stores():
    database.otp_store.clear()
    database.user_store.clear()
    yield
    database.otp_store.clear()
    database.user_store.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def pending_otp():
    """Return the code currently stored for a phone"""
    def _lookup(phone):
        record = database.otp_store.get(phone)
        return record.otp if record else None
    return _lookup
