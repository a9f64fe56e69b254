"""
Review Generator - Review Synthesizer

Main orchestrator: GenerationRequest → GeneratedReview.

Pipeline (terminal states: Success, Fallback):
1. Validate request (rating 1-5, known voice)
2. Normalize highlights (infer categories by keyword lookup)
3. Start a fresh transition ledger for this call
4. Compose the narrative
5. Voice pass
6. Emotional nuance pass, then final polish
7. Score and build metadata
8. Success

Any exception at any step produces the deterministic fallback review.
Errors never reach the caller.
"""
import logging
import random
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ... import config
from ...models.review import (
    GeneratedReview,
    GenerationRequest,
    Highlight,
    HighlightCategory,
    ReviewMetadata,
    TripType,
    arc_for_rating,
    resolve_trip_type,
)
from .errors import RequestValidationError
from .narrative import NarrativeComposer
from .scoring import (
    ScoringConfig,
    authenticity_score,
    count_sentences,
    count_words,
    readability_score,
)
from .text_passes import final_polish, inject_emotional_nuance
from .transitions import TransitionAllocator
from .vocabulary import VocabularyStore
from .voice_adapter import SubstitutionRule, VoiceAdapter, VoiceProfile, VoiceRegistry

logger = logging.getLogger(__name__)

ENGINE_VERSION = "1.0.0"

# Stands in for the hotel name until every lexical pass has run, so no
# substitution rule can alter the name.
HOTEL_TOKEN = "__HOTEL_NAME__"

# Fixed iteration order keeps inference deterministic
CATEGORY_KEYWORDS = (
    (HighlightCategory.CLEANLINESS, ("clean", "spotless", "tidy", "hygienic", "pristine")),
    (HighlightCategory.COMFORT, ("comfort", "bed", "pillow", "mattress", "cozy")),
    (HighlightCategory.SERVICE, ("service", "staff", "helpful", "friendly", "professional")),
    (HighlightCategory.FOOD, ("food", "breakfast", "restaurant", "dining", "meal")),
    (HighlightCategory.LOCATION, ("location", "convenient", "central", "nearby", "walking")),
    (HighlightCategory.AMENITIES, ("pool", "gym", "spa", "fitness", "facilities")),
    (HighlightCategory.WIFI, ("wifi", "wi-fi", "internet", "connection", "online")),
    (HighlightCategory.VALUE, ("value", "price", "cost", "worth", "money")),
)

FALLBACK_REVIEWS: Dict[int, str] = {
    5: "Our stay at {hotel} was excellent. Everything exceeded our expectations for this {trip} trip. Would definitely recommend!",
    4: "We had a great time at {hotel}. Most aspects of our {trip} stay were very good. Would stay again.",
    3: "{hotel} provided a decent experience for our {trip} trip. Some things were good, others could be improved.",
    2: "Our stay at {hotel} was disappointing. Several issues affected our {trip} experience. Would look elsewhere next time.",
    1: "Unfortunately, our {trip} stay at {hotel} was very poor. Multiple problems made this an unpleasant experience.",
}


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def infer_category(text: Optional[str]) -> HighlightCategory:
    """Infer a highlight category by keyword match; unmatched → general."""
    lower = (text or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return category
    return HighlightCategory.GENERAL


def _parse_category(value: Any) -> Optional[HighlightCategory]:
    if value is None or isinstance(value, HighlightCategory):
        return value
    try:
        return HighlightCategory(str(value).strip().lower())
    except ValueError:
        return None


def normalize_highlights(highlights: Any) -> List[Highlight]:
    """
    Convert caller highlights into structured Highlight records.

    Accepts strings, Highlight objects, and mappings with "text" (or "name")
    and an optional "category". Malformed items become "Highlight N" rather
    than failing the review.
    """
    if highlights is None:
        return []
    if not isinstance(highlights, (list, tuple)):
        logger.warning(f"Ignoring highlights of type {type(highlights).__name__}")
        return []

    normalized = []
    for index, item in enumerate(highlights):
        if isinstance(item, str):
            text, category = item, None
        elif isinstance(item, Highlight):
            text, category = item.text, _parse_category(item.category)
        elif isinstance(item, Mapping):
            text = item.get("text") or item.get("name")
            category = _parse_category(item.get("category"))
        else:
            logger.warning(f"Malformed highlight at position {index}: {item!r}")
            text, category = None, None

        text = str(text).strip() if text else ""
        if not text:
            text = f"Highlight {index + 1}"
        normalized.append(Highlight(text=text, category=category or infer_category(text)))

    return normalized


def create_fallback_review(request: Any) -> str:
    """
    Deterministic single-template review keyed by rating and trip type.

    Must never raise: every attribute is read defensively.
    """
    hotel = getattr(request, "hotel_name", None) or "this hotel"
    rating = getattr(request, "rating", 3)
    trip = _enum_value(getattr(request, "trip_type", None)) or TripType.LEISURE.value

    if not isinstance(rating, int) or isinstance(rating, bool):
        rating = 3
    template = FALLBACK_REVIEWS.get(rating, FALLBACK_REVIEWS[3])
    return template.format(hotel=hotel, trip=trip)


class ReviewSynthesizer:
    """
    Review generation orchestrator.

    Vocabulary, transition pool, and voice registry are configuration shared
    by every call. Each call owns its random.Random and transition ledger,
    so concurrent generate() calls do not interfere.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        vocabulary: Optional[VocabularyStore] = None,
        transitions: Optional[TransitionAllocator] = None,
        voices: Optional[VoiceRegistry] = None,
        scoring: Optional[ScoringConfig] = None,
    ):
        """
        Initialize with optional seed.

        Args:
            seed: Default random seed for calls that do not carry one
            vocabulary: Word banks (a fresh VocabularyStore by default)
            transitions: Transition pool (a fresh TransitionAllocator by default)
            voices: Voice registry (built-in voices by default)
            scoring: Authenticity thresholds (from config by default)
        """
        self.seed = seed if seed is not None else config.DEFAULT_SEED
        self.vocabulary = vocabulary or VocabularyStore()
        self.transitions = transitions or TransitionAllocator()
        self.voices = voices or VoiceRegistry()
        self.voice_adapter = VoiceAdapter(self.voices)
        self.composer = NarrativeComposer(self.vocabulary, self.voices)
        self.scoring = scoring or config.get_scoring_config()

    def _resolve_seed(self, request: GenerationRequest) -> int:
        seed = getattr(request, "seed", None)
        if seed is None:
            seed = self.seed
        if seed is None:
            seed = random.randint(0, 2**32)
        return seed

    def validate(self, request: GenerationRequest) -> None:
        """
        Raises:
            RequestValidationError: rating outside 1-5 or unknown voice
        """
        rating = request.rating
        if not isinstance(rating, int) or isinstance(rating, bool) or not 1 <= rating <= 5:
            raise RequestValidationError(f"Rating must be between 1 and 5, got {rating!r}")

        voice = request.effective_voice
        if not self.voices.is_known(voice):
            raise RequestValidationError(f"Unknown voice profile: {voice}")

    def generate(self, request: GenerationRequest) -> GeneratedReview:
        """
        Generate a review. Never raises.

        Args:
            request: GenerationRequest from the caller

        Returns:
            GeneratedReview; metadata.fallback is True when generation failed
        """
        try:
            return self._generate(request)
        except Exception as e:
            logger.error(f"Review generation failed, using fallback: {e}")
            return self._fallback(request, e)

    def _generate(self, request: GenerationRequest) -> GeneratedReview:
        self.validate(request)

        seed = self._resolve_seed(request)
        rng = random.Random(seed)
        rating = request.rating
        ledger = self.transitions.start(rng, positive=rating >= 4)

        voice = request.effective_voice
        profile = self.voices.get_profile(voice)
        highlights = normalize_highlights(request.highlights)

        trip_type = resolve_trip_type(request.trip_type)
        raw_trip = _enum_value(request.trip_type)
        if trip_type is TripType.LEISURE and str(raw_trip).strip().lower() != TripType.LEISURE.value:
            logger.warning(f"Unknown trip type {request.trip_type!r}, using leisure phrasing")

        logger.info(f"Generating review: rating={rating} voice={voice} highlights={len(highlights)} seed={seed}")

        parts = self.composer.compose(
            hotel_name=HOTEL_TOKEN,
            rating=rating,
            trip_type=trip_type,
            highlights=highlights,
            nights=request.effective_nights,
            profile=profile,
            rng=rng,
            ledger=ledger,
        )

        text = parts.render()
        text = self.voice_adapter.apply(text, voice)
        text = inject_emotional_nuance(text, rating)
        text = final_polish(text)
        text = text.replace(HOTEL_TOKEN, request.hotel_name)

        authenticity = authenticity_score(text, self.scoring)
        metadata = ReviewMetadata(
            generated_at=datetime.now(),
            voice=voice,
            rating=rating,
            trip_type=_enum_value(request.trip_type),
            language=request.language,
            seed=seed,
            word_count=count_words(text),
            sentence_count=count_sentences(text),
            readability_score=readability_score(text),
            authenticity_score=authenticity.score,
            authenticity_breakdown=authenticity.breakdown,
            narrative_arc=arc_for_rating(rating),
            sections=parts.sections,
        )

        logger.info(
            f"Generated review: {metadata.word_count} words, {metadata.sentence_count} sentences, "
            f"authenticity={metadata.authenticity_score}"
        )
        return GeneratedReview(text=text, metadata=metadata)

    def _fallback(self, request: Any, error: Exception) -> GeneratedReview:
        metadata = ReviewMetadata(
            generated_at=datetime.now(),
            voice=getattr(request, "voice", None),
            rating=getattr(request, "rating", None),
            trip_type=_enum_value(getattr(request, "trip_type", None)),
            fallback=True,
            error=str(error),
        )
        return GeneratedReview(text=create_fallback_review(request), metadata=metadata)

    # =========================================================================
    # CONFIGURATION INTERFACES
    # =========================================================================

    def register_voice(
        self,
        profile: VoiceProfile,
        rules: Optional[Sequence[SubstitutionRule]] = None,
        recommendations: Optional[Dict[int, str]] = None,
    ) -> None:
        """Add a voice profile, its rule set, and its recommendation sentences."""
        self.voices.register(profile, rules, recommendations)

    def add_vocabulary(
        self,
        bank: str,
        key: str,
        words: Sequence[str],
        sentiment: Optional[str] = None,
    ) -> int:
        """Append words to an existing vocabulary axis."""
        return self.vocabulary.add_words(bank, key, words, sentiment)

    def get_voice_profiles(self) -> List[VoiceProfile]:
        return self.voices.list_profiles()

    def get_engine_stats(self) -> Dict[str, Any]:
        return {
            "vocabulary": self.vocabulary.get_stats(),
            "transitions": self.transitions.get_stats(),
            "narrative": self.composer.get_stats(),
            "voices": len(self.voices.list_profiles()),
            "version": ENGINE_VERSION,
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def create_synthesizer(seed: Optional[int] = None) -> ReviewSynthesizer:
    """Create a synthesizer instance."""
    return ReviewSynthesizer(seed=seed)


def generate_review(
    hotel_name: str,
    rating: int,
    trip_type: Optional[str] = TripType.LEISURE.value,
    highlights: Optional[Sequence[Any]] = None,
    nights: Optional[int] = None,
    voice: Optional[str] = None,
    language: str = "en",
    seed: Optional[int] = None,
) -> GeneratedReview:
    """
    Convenience function to generate a review.

    Args:
        hotel_name: Hotel name, used verbatim
        rating: 1-5
        trip_type: leisure, business, family, solo, couple
        highlights: Strings, Highlight objects, or {"text", "category"} dicts
        nights: Stay length (default 3)
        voice: professional, friendly, enthusiastic, detailed
        language: Advisory language tag
        seed: Optional random seed

    Returns:
        GeneratedReview with text and metadata
    """
    request = GenerationRequest(
        hotel_name=hotel_name,
        rating=rating,
        trip_type=trip_type,
        highlights=tuple(highlights or ()),
        nights=nights,
        voice=voice,
        language=language,
        seed=seed,
    )
    return ReviewSynthesizer(seed=seed).generate(request)
