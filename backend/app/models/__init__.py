"""Review Engine - Data Models"""
from .review import (
    # Enums
    TripType, Voice, HighlightCategory, NarrativeArc,
    # Request
    Highlight, GenerationRequest,
    # Result
    ReviewMetadata, GeneratedReview,
    # Helpers
    arc_for_rating, resolve_trip_type, normalize_nights,
)

__all__ = [
    "TripType", "Voice", "HighlightCategory", "NarrativeArc",
    "Highlight", "GenerationRequest",
    "ReviewMetadata", "GeneratedReview",
    "arc_for_rating", "resolve_trip_type", "normalize_nights",
]
