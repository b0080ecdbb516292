"""
Scan Routes
Plant photo upload and mock disease diagnosis
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from ..config import settings
from ..database import get_diagnosis_service
from ..schemas.scan import AnalyzeResponse, ScanHistoryResponse
from ..services.diagnosis_service import MockDiagnosisService
from ..utils.helpers import save_uploaded_file, UploadRejected

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scan", tags=["Scan"])


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_image(
    image: Optional[UploadFile] = File(None),
    diagnosis_service: MockDiagnosisService = Depends(get_diagnosis_service)
):
    """Store the uploaded photo and return a diagnosis"""

    if image is None or not image.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No image provided")

    try:
        saved = await save_uploaded_file(
            image,
            settings.UPLOAD_DIR,
            max_size=settings.MAX_UPLOAD_SIZE,
            mime_prefix=settings.ALLOWED_MIME_PREFIX
        )
    except UploadRejected as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    result = await diagnosis_service.analyze(saved["file_path"])

    return {
        "success": True,
        "imageUrl": f"/uploads/{saved['filename']}",
        **result
    }


@router.get("/history", response_model=ScanHistoryResponse)
async def get_history():
    # Nothing is persisted in demo mode
    return {
        "success": True,
        "scans": [],
        "message": "Scan history feature coming soon"
    }
