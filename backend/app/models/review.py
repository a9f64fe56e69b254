"""
Review Engine - Review Models

Request and result records for the review generation pipeline.

GenerationRequest → ReviewSynthesizer → GeneratedReview

A GenerationRequest is immutable for the duration of a call and a
GeneratedReview is immutable once returned. Downstream consumers only
read GeneratedReview.text and GeneratedReview.metadata.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from .. import config


# =============================================================================
# ENUMS
# =============================================================================

class TripType(str, Enum):
    LEISURE = "leisure"
    BUSINESS = "business"
    FAMILY = "family"
    SOLO = "solo"
    COUPLE = "couple"


class Voice(str, Enum):
    """Built-in voices. Registered voices are referenced by plain name."""
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    ENTHUSIASTIC = "enthusiastic"
    DETAILED = "detailed"


class HighlightCategory(str, Enum):
    CLEANLINESS = "cleanliness"
    COMFORT = "comfort"
    SERVICE = "service"
    FOOD = "food"
    LOCATION = "location"
    AMENITIES = "amenities"
    WIFI = "wifi"
    VALUE = "value"
    GENERAL = "general"


class NarrativeArc(str, Enum):
    """Emotional trajectory of a review, derived solely from the rating."""
    HEROIC = "heroic"              # Expectation exceeded
    SATISFYING = "satisfying"      # Expectation met with pleasant surprises
    BALANCED = "balanced"          # Mixed experience
    DISAPPOINTING = "disappointing"  # Expectation not met
    TRAGIC = "tragic"              # Significantly below expectation


ARC_BY_RATING: Dict[int, NarrativeArc] = {
    5: NarrativeArc.HEROIC,
    4: NarrativeArc.SATISFYING,
    3: NarrativeArc.BALANCED,
    2: NarrativeArc.DISAPPOINTING,
    1: NarrativeArc.TRAGIC,
}

DEFAULT_NIGHTS = config.DEFAULT_NIGHTS
DEFAULT_VOICE = config.DEFAULT_VOICE
DEFAULT_LANGUAGE = "en"


def arc_for_rating(rating: int) -> NarrativeArc:
    """Map a rating to its narrative arc. Unknown ratings read as balanced."""
    return ARC_BY_RATING.get(rating, NarrativeArc.BALANCED)


def resolve_trip_type(value: Optional[str]) -> Optional[TripType]:
    """
    Resolve a caller-supplied trip type.

    Returns None when no trip type was supplied. Unknown values degrade to
    LEISURE rather than raising.
    """
    if value is None:
        return None
    if isinstance(value, TripType):
        return value
    normalized = str(value).strip().lower()
    if not normalized:
        return None
    try:
        return TripType(normalized)
    except ValueError:
        return TripType.LEISURE


def normalize_nights(value: Any) -> int:
    """Nights must be a positive integer; anything else becomes the default."""
    if isinstance(value, bool):
        return DEFAULT_NIGHTS
    if isinstance(value, int) and value > 0:
        return value
    return DEFAULT_NIGHTS


# =============================================================================
# REQUEST
# =============================================================================

@dataclass(frozen=True)
class Highlight:
    """A guest-selected aspect of the stay, e.g. "Clean room"."""
    text: str
    category: Optional[HighlightCategory] = None


HighlightInput = Union[str, Highlight, Dict[str, Any]]


@dataclass(frozen=True)
class GenerationRequest:
    """
    Caller-supplied generation parameters.

    Validation is deliberately lenient here: the synthesizer decides which
    problems are fatal (rating, voice) and which degrade (trip type, nights,
    highlights).
    """
    hotel_name: str
    rating: int
    trip_type: Optional[str] = TripType.LEISURE.value
    highlights: Sequence[HighlightInput] = field(default_factory=tuple)
    nights: Optional[int] = DEFAULT_NIGHTS
    voice: Optional[str] = DEFAULT_VOICE
    language: str = DEFAULT_LANGUAGE
    seed: Optional[int] = None

    @property
    def effective_voice(self) -> str:
        return self.voice or DEFAULT_VOICE

    @property
    def effective_nights(self) -> int:
        return normalize_nights(self.nights)


# =============================================================================
# RESULT
# =============================================================================

@dataclass(frozen=True)
class ReviewMetadata:
    """Metadata about a generated review (or a fallback)."""
    generated_at: datetime = field(default_factory=datetime.now)
    voice: Optional[str] = None
    rating: Optional[int] = None
    trip_type: Optional[str] = None
    language: str = DEFAULT_LANGUAGE
    seed: Optional[int] = None

    # Success-only fields
    word_count: int = 0
    sentence_count: int = 0
    readability_score: int = 0
    authenticity_score: int = 0
    authenticity_breakdown: Dict[str, int] = field(default_factory=dict)
    narrative_arc: Optional[NarrativeArc] = None
    sections: List[str] = field(default_factory=list)

    # Fallback-only fields
    fallback: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for API responses and analytics consumers."""
        if self.fallback:
            return {
                "fallback": True,
                "error": self.error,
                "voice": self.voice,
                "rating": self.rating,
                "trip_type": self.trip_type,
                "generated_at": self.generated_at.isoformat(),
            }
        return {
            "fallback": False,
            "voice": self.voice,
            "rating": self.rating,
            "trip_type": self.trip_type,
            "language": self.language,
            "seed": self.seed,
            "word_count": self.word_count,
            "sentence_count": self.sentence_count,
            "readability_score": self.readability_score,
            "authenticity_score": self.authenticity_score,
            "authenticity_breakdown": dict(self.authenticity_breakdown),
            "narrative_arc": self.narrative_arc.value if self.narrative_arc else None,
            "sections": list(self.sections),
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass(frozen=True)
class GeneratedReview:
    """Final output of the generation pipeline."""
    text: str
    metadata: ReviewMetadata = field(default_factory=ReviewMetadata)

    @property
    def is_fallback(self) -> bool:
        return self.metadata.fallback

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "metadata": self.metadata.to_dict()}
