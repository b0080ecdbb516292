from pydantic import BaseModel, Field, validator
from typing import List, Optional

from ..models.diagnosis import SEVERITY_LEVELS


class DiseaseInfo(BaseModel):
    name: str
    scientific_name: Optional[str] = Field(None, alias="scientificName")
    confidence: float = Field(..., ge=0, le=1)
    description: str

    class Config:
        populate_by_name = True


class AnalyzeResponse(BaseModel):
    success: bool = True
    image_url: str = Field(..., alias="imageUrl")
    disease: DiseaseInfo
    recommendations: List[str]
    severity: str
    is_healthy: bool = Field(..., alias="isHealthy")

    @validator('severity')
    def validate_severity(cls, v):
        if v not in SEVERITY_LEVELS:
            raise ValueError(f'Severity must be one of: {", ".join(SEVERITY_LEVELS)}')
        return v

    class Config:
        populate_by_name = True


class ScanHistoryResponse(BaseModel):
    success: bool = True
    scans: List[AnalyzeResponse] = []
    message: Optional[str] = None
