"""
Review Engine - Reviews API Router

Thin HTTP surface over the review generator. Generation always answers
200: a failed generation shows up as metadata.fallback, never as an error
status. Only the configuration endpoints can reject a request.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..models.review import GenerationRequest
from ..services.review_generator import (
    ReviewSynthesizer,
    SubstitutionRule,
    UnknownVocabularyBankError,
    VoiceProfile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["reviews"])

_synthesizer: Optional[ReviewSynthesizer] = None


def get_synthesizer() -> ReviewSynthesizer:
    """Dependency for FastAPI - the process-wide synthesizer."""
    global _synthesizer
    if _synthesizer is None:
        _synthesizer = ReviewSynthesizer()
    return _synthesizer


# =============================================================================
# PYDANTIC MODELS FOR API
# =============================================================================

class HighlightIn(BaseModel):
    text: str
    category: Optional[str] = None  # inferred from text when absent


class ReviewRequest(BaseModel):
    hotel_name: str
    rating: int  # out-of-range values produce a fallback review, not a 422
    trip_type: Optional[str] = "leisure"
    highlights: List[Union[HighlightIn, str]] = Field(default=[], description="Guest-selected highlights")
    nights: Optional[int] = None
    voice: Optional[str] = None
    language: str = "en"
    seed: Optional[int] = Field(None, description="Seed for reproducible output")


class ReviewResponse(BaseModel):
    text: str
    metadata: Dict[str, Any]


class RuleIn(BaseModel):
    pattern: str
    replacement: str
    ignore_case: bool = True


class VoiceRegistrationRequest(BaseModel):
    name: str
    label: Optional[str] = None
    description: str = ""
    characteristics: List[str] = Field(default=[])
    intensifier_strength: str = "medium"
    hedge_frequency: str = "medium"
    rules: List[RuleIn] = Field(default=[], description="Ordered substitution rules")
    recommendations: Dict[int, str] = Field(..., description="Recommendation sentence per rating 1-5")


class VocabularyRequest(BaseModel):
    bank: str = Field(..., description="emotions | descriptors | intensifiers | hedges | temporal")
    key: str
    sentiment: Optional[str] = None
    words: List[str]


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post("/generate", response_model=ReviewResponse)
async def generate(
    request: ReviewRequest,
    synthesizer: ReviewSynthesizer = Depends(get_synthesizer),
):
    """
    Generate a review.

    Pipeline:
    1. Convert the API request into a GenerationRequest
    2. ReviewSynthesizer.generate() (never raises)
    3. Return text and metadata
    """
    highlights = [
        h if isinstance(h, str) else {"text": h.text, "category": h.category}
        for h in request.highlights
    ]
    generation_request = GenerationRequest(
        hotel_name=request.hotel_name,
        rating=request.rating,
        trip_type=request.trip_type,
        highlights=highlights,
        nights=request.nights,
        voice=request.voice,
        language=request.language,
        seed=request.seed,
    )

    review = synthesizer.generate(generation_request)
    return review.to_dict()


@router.get("/voices")
async def list_voices(synthesizer: ReviewSynthesizer = Depends(get_synthesizer)):
    """List registered voice profiles."""
    return {"voices": [p.to_dict() for p in synthesizer.get_voice_profiles()]}


@router.post("/voices", status_code=201)
async def register_voice(
    request: VoiceRegistrationRequest,
    synthesizer: ReviewSynthesizer = Depends(get_synthesizer),
):
    """Register a new voice with its rules and recommendation sentences."""
    profile = VoiceProfile(
        name=request.name,
        label=request.label or request.name.replace("_", " ").title(),
        description=request.description,
        characteristics=tuple(request.characteristics),
        intensifier_strength=request.intensifier_strength,
        hedge_frequency=request.hedge_frequency,
    )
    rules = [SubstitutionRule(r.pattern, r.replacement, r.ignore_case) for r in request.rules]

    try:
        synthesizer.register_voice(profile, rules, request.recommendations)
    except ValueError as e:
        logger.warning(f"Rejected voice registration: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    missing = [r for r in range(1, 6) if r not in request.recommendations]
    return {"voice": profile.to_dict(), "missing_recommendations": missing}


@router.post("/vocabulary")
async def add_vocabulary(
    request: VocabularyRequest,
    synthesizer: ReviewSynthesizer = Depends(get_synthesizer),
):
    """Append words to an existing vocabulary bank."""
    try:
        added = synthesizer.add_vocabulary(request.bank, request.key, request.words, request.sentiment)
    except UnknownVocabularyBankError as e:
        logger.warning(f"Rejected vocabulary update: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return {"added": added}


@router.get("/stats")
async def engine_stats(synthesizer: ReviewSynthesizer = Depends(get_synthesizer)):
    """Engine statistics: vocabulary, transitions, narrative, voices."""
    return synthesizer.get_engine_stats()
