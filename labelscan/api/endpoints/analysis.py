from typing import List, Optional

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from labelscan.application.services.analysis_service import AnalysisService
from labelscan.domain.entities.analysis_report import AnalysisOutcome
from labelscan.domain.errors import ImageDecodeError


router = APIRouter()


class Base64ImageRequest(BaseModel):
    image: str


class ProductMatchResponse(BaseModel):
    key: str
    canonical_name: str
    product_type: str
    category: str
    source_confidence: float


class OCRResponse(BaseModel):
    text: str
    raw_text: str
    confidence: float
    has_text: bool
    looks_like_food_label: bool
    strategy: Optional[str] = None
    segmentation_mode: Optional[str] = None
    quality_score: float
    effective_confidence: float
    words: List[str]
    lines: List[str]
    detected_brands: List[ProductMatchResponse]
    error: Optional[str] = None


class ColorProfileResponse(BaseModel):
    avg_r: int
    avg_g: int
    avg_b: int
    brightness: int
    bright_fraction: float
    dark_fraction: float
    dominant_color_hex: str


class ConfidenceResponse(BaseModel):
    overall: int
    ocr: float
    product_type: float
    is_reliable: bool


class RecommendationResponse(BaseModel):
    kind: str
    message: str


class SectionsResponse(BaseModel):
    ingredients: Optional[str] = None
    nutrition: Optional[str] = None
    product_name: Optional[str] = None


class LabelResponse(BaseModel):
    name: str
    confidence: int


class AnalysisResponse(BaseModel):
    provider: str
    success: bool
    ocr: OCRResponse
    products: List[ProductMatchResponse]
    product_type: str
    product_type_confidence: float
    color_profile: ColorProfileResponse
    confidence: ConfidenceResponse
    recommendations: List[RecommendationResponse]
    sections: SectionsResponse
    cleaned_text: str
    labels: List[LabelResponse]
    timestamp: str


def _to_response(outcome: AnalysisOutcome) -> AnalysisResponse:
    if not outcome.success:
        status_code = 400 if outcome.error_kind == ImageDecodeError.__name__ else 500
        raise HTTPException(
            status_code=status_code,
            detail=f"{outcome.error_kind}: {outcome.error}",
        )
    return AnalysisResponse(**outcome.report.to_dict())


async def _analyze(data) -> AnalysisOutcome:
    analysis_service = AnalysisService()
    try:
        # recognition is CPU-bound; keep it off the event loop
        return await run_in_threadpool(analysis_service.analyze, data)
    finally:
        analysis_service.close()


@router.post("/process", response_model=AnalysisResponse)
async def process_image(file: UploadFile = File(...)):
    # Validate file type
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type: {file.content_type}. Only images are allowed.",
        )

    content = await file.read()
    return _to_response(await _analyze(content))


@router.post("/process-base64", response_model=AnalysisResponse)
async def process_image_base64(request: Base64ImageRequest):
    return _to_response(await _analyze(request.image))
