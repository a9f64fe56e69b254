"""
Review Generator - Narrative Composer

Builds the five-part narrative skeleton of a review:

1. Hook        - opening sentence keyed by narrative arc, with trip context
2. Setup       - "We ..." sentence naming the hotel and the stay length
3. Development - one point per highlight, each with a unique transition
4. Climax      - a single turning-point sentence (omitted for rating 3)
5. Resolution  - reflection plus the voice-specific recommendation

Paragraphs: hook + setup | development + climax | resolution.
"""
import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ...models.review import (
    Highlight,
    NarrativeArc,
    TripType,
    arc_for_rating,
)
from .transitions import TransitionLedger
from .vocabulary import VocabularyStore, highlight_phrase
from .voice_adapter import VoiceProfile, VoiceRegistry

logger = logging.getLogger(__name__)


# =============================================================================
# PHRASE POOLS
# =============================================================================

HOOKS: Dict[NarrativeArc, List[str]] = {
    NarrativeArc.HEROIC: [
        "From the moment we arrived, we knew this would be something special.",
        "Sometimes a place exceeds your wildest expectations, and this was one of those times.",
        "After countless hotel stays, it's rare to find one that truly stands out.",
    ],
    NarrativeArc.SATISFYING: [
        "Our stay here was exactly what we hoped for and then some.",
        "Walking into the lobby, we felt immediately welcomed.",
        "It's refreshing to find a hotel that delivers on its promises.",
    ],
    NarrativeArc.BALANCED: [
        "Our experience here was a real mix of highs and lows.",
        "Like many hotels, this one had its strengths and weaknesses.",
        "Our stay was decent overall, with some notable points worth sharing.",
    ],
    NarrativeArc.DISAPPOINTING: [
        "Unfortunately, our stay didn't quite live up to expectations.",
        "We had hoped for better based on the reviews and photos.",
        "While the location drew us in, the experience left us wanting.",
    ],
    NarrativeArc.TRAGIC: [
        "I wish I had better things to say about our stay.",
        "It pains me to write this review, but future guests deserve to know.",
        "Despite our best efforts to enjoy our visit, we encountered numerous issues.",
    ],
}

CONTEXT_SETUPS: Dict[TripType, str] = {
    TripType.BUSINESS: "As business travelers,",
    TripType.LEISURE: "On our vacation,",
    TripType.FAMILY: "Traveling with the family,",
    TripType.SOLO: "As a solo traveler,",
    TripType.COUPLE: "As a couple,",
}

SETUPS: Dict[int, List[str]] = {
    5: [
        "booked {nights_phrase} at {hotel} based on the excellent reviews, but nothing prepared us for how exceptional it would be.",
        "chose {hotel} for our {nights}-night stay, and it turned out to be the perfect decision.",
        "decided on {hotel} after careful research, and it exceeded every expectation.",
    ],
    4: [
        "spent {nights_phrase} at {hotel} and found it to be a solid choice with several standout features.",
        "stayed at {hotel} for {nights_phrase} and were generally impressed with the experience.",
        "chose {hotel} for our {nights}-night trip and were pleased with most aspects of our stay.",
    ],
    3: [
        "stayed {nights_phrase} at {hotel} and had a mixed but acceptable experience.",
        "spent {nights_phrase} at {hotel}, where some things were great and others less so.",
        "booked {nights_phrase} at {hotel} and found it to be adequate for our needs.",
    ],
    2: [
        "unfortunately booked {nights_phrase} at {hotel} and encountered several issues.",
        "stayed at {hotel} for {nights_phrase} but found the experience disappointing.",
        "spent {nights_phrase} at {hotel} hoping for better based on the marketing.",
    ],
    1: [
        "regrettably spent {nights_phrase} at {hotel} and had a thoroughly disappointing experience.",
        "booked {nights_phrase} at {hotel}, which turned out to be a mistake.",
        "unfortunately chose {hotel} for our {nights}-night stay and faced numerous problems.",
    ],
}

# At least four syntactic shapes so repeated categories don't read identically
POINT_PATTERNS: List[str] = [
    "the {phrase} {verb} {descriptor}",
    "I was {emotion} by the {phrase}",
    "the {phrase} felt {descriptor} and {descriptor2}",
    "what stood out was how {descriptor} the {phrase} {verb}",
    "we {frequency} found the {phrase} {intensifier} {descriptor}",
]

GENERIC_DEVELOPMENTS: Dict[int, str] = {
    5: "Every aspect of our stay exceeded expectations, from the moment we walked through the door.",
    4: "Most aspects of the hotel met or exceeded our expectations, with a few minor areas for improvement.",
    3: "The hotel provided a decent experience with both positive and negative aspects worth mentioning.",
    2: "While the hotel had some redeeming qualities, several issues detracted from the overall experience.",
    1: "Unfortunately, multiple problems made this a disappointing stay that fell well short of expectations.",
}

POSITIVE_CLIMAXES: List[str] = [
    "The moment that truly captured the essence of our stay was {moment}.",
    "What made the trip unforgettable was {moment}.",
]

REDEMPTIVE_CLIMAXES: List[str] = [
    "Despite the challenges, {moment}.",
    "In fairness, {moment}.",
]

# Probability of an opinion hedge in the reflection sentence
HEDGE_PROBABILITY: Dict[str, float] = {"high": 0.6, "medium": 0.35, "low": 0.1}

# Opinion hedges that read as a lead-in phrase need a comma
_COMMA_HEDGES = ("in my opinion", "from my perspective")


def sentiment_for_rating(rating: int) -> str:
    if rating >= 4:
        return "positive"
    if rating >= 3:
        return "neutral"
    return "negative"


def lower_first(sentence: str) -> str:
    """Lowercase the leading letter unless the sentence opens with "I"."""
    if not sentence or sentence.startswith(("I ", "I'")):
        return sentence
    return sentence[0].lower() + sentence[1:]


def nights_phrase(nights: int) -> str:
    return "1 night" if nights == 1 else f"{nights} nights"


def is_plural(phrase: str) -> bool:
    """Rough plural check on the head noun: "clean rooms" yes, "glass" no."""
    words = phrase.split()
    if not words:
        return False
    head = words[-1]
    return head.endswith("s") and not head.endswith(("ss", "us", "is"))


@dataclass(frozen=True)
class NarrativeParts:
    """The composed narrative beats of one review."""
    hook: str
    setup: str
    development: str
    climax: Optional[str]
    resolution: str

    @property
    def sections(self) -> List[str]:
        names = ["hook", "setup", "development"]
        if self.climax:
            names.append("climax")
        names.append("resolution")
        return names

    def render(self) -> str:
        """Join the beats into three paragraphs."""
        opening = f"{self.hook} {self.setup}"
        body = self.development
        if self.climax:
            body = f"{body} {self.climax}"
        return "\n\n".join([opening, body, self.resolution])


class NarrativeComposer:
    """
    Composes narrative beats from the vocabulary store and a call-scoped
    transition ledger. Holds no per-call state itself.
    """

    def __init__(self, vocabulary: VocabularyStore, voices: VoiceRegistry):
        self.vocabulary = vocabulary
        self.voices = voices

    def compose(
        self,
        hotel_name: str,
        rating: int,
        trip_type: Optional[TripType],
        highlights: Sequence[Highlight],
        nights: int,
        profile: VoiceProfile,
        rng: random.Random,
        ledger: TransitionLedger,
    ) -> NarrativeParts:
        """
        Build all five beats for one review.

        Raises:
            MissingRecommendationError: if the voice has no sentence for the rating
        """
        parts = NarrativeParts(
            hook=self.create_hook(rating, trip_type, rng),
            setup=self.create_setup(hotel_name, rating, nights, rng),
            development=self.build_development(highlights, rating, profile, rng, ledger),
            climax=self.create_climax(rating, rng) if rating != 3 else None,
            resolution=self.create_resolution(rating, profile, highlights, rng),
        )
        logger.debug(f"Composed narrative sections={parts.sections} arc={arc_for_rating(rating).value}")
        return parts

    # =========================================================================
    # HOOK AND SETUP
    # =========================================================================

    def create_hook(self, rating: int, trip_type: Optional[TripType], rng: random.Random) -> str:
        hook = self.vocabulary.select_random(HOOKS[arc_for_rating(rating)], rng)
        context = CONTEXT_SETUPS.get(trip_type) if trip_type else None
        if context:
            hook = f"{context} {lower_first(hook)}"
        return hook

    def create_setup(self, hotel_name: str, rating: int, nights: int, rng: random.Random) -> str:
        template = self.vocabulary.select_random(SETUPS.get(rating, SETUPS[3]), rng)
        return "We " + template.format(
            hotel=hotel_name,
            nights=nights,
            nights_phrase=nights_phrase(nights),
        )

    # =========================================================================
    # DEVELOPMENT
    # =========================================================================

    def build_development(
        self,
        highlights: Sequence[Highlight],
        rating: int,
        profile: VoiceProfile,
        rng: random.Random,
        ledger: TransitionLedger,
    ) -> str:
        if not highlights:
            return GENERIC_DEVELOPMENTS.get(rating, GENERIC_DEVELOPMENTS[3])

        points = []
        total = len(highlights)
        for index, highlight in enumerate(highlights):
            transition = ledger.allocate(index, total)
            point = self.create_natural_point(highlight, rating, profile, rng)
            touch = self.add_personal_touch(highlight, rating, rng)
            points.append(f"{transition} {point}{touch}")

        return " ".join(points)

    def create_natural_point(
        self,
        highlight: Highlight,
        rating: int,
        profile: VoiceProfile,
        rng: random.Random,
    ) -> str:
        sentiment = sentiment_for_rating(rating)
        category = highlight.category.value if highlight.category else "general"
        vocab = self.vocabulary

        descriptor = vocab.select_descriptor(category, sentiment, rng)
        second = vocab.select_descriptor(category, sentiment, rng)
        if second == descriptor:
            second = vocab.select_descriptor("general", sentiment, rng)

        pattern = vocab.select_random(POINT_PATTERNS, rng)
        phrase = highlight_phrase(highlight.text)
        return pattern.format(
            phrase=phrase,
            verb="were" if is_plural(phrase) else "was",
            descriptor=descriptor,
            descriptor2=second,
            emotion=vocab.select_emotion(rating, rng),
            frequency=vocab.get_temporal("frequency", rng),
            intensifier=vocab.get_intensifier(profile.intensifier_strength, rng),
        )

    def add_personal_touch(self, highlight: Highlight, rating: int, rng: random.Random) -> str:
        """
        Closing clause for a development point, including end punctuation.

        Ratings of 4 and above get praise or detail; ratings below 4 may get
        a hedged mild criticism.
        """
        vocab = self.vocabulary
        category = highlight.category.value if highlight.category else "general"
        detail = vocab.get_specific_detail(category)
        criticism = f", though {vocab.get_hedge('uncertainty', rng)} {vocab.get_mild_criticism(rng)}."

        praise = [
            f" (the {detail} was a nice surprise).",
            " - something I particularly appreciated.",
            ", which made a real difference.",
            f". {vocab.get_personal_anecdote(rng)}.",
        ]
        if rating >= 4:
            touches = praise
        elif rating == 3:
            touches = praise + [criticism]
        else:
            touches = [
                f" (the {detail} in particular needed attention).",
                " - not what we expected at this price.",
                criticism,
            ]
        return vocab.select_random(touches, rng)

    # =========================================================================
    # CLIMAX AND RESOLUTION
    # =========================================================================

    def create_climax(self, rating: int, rng: random.Random) -> str:
        """Memorable moment for high ratings, redemptive moment for low ones."""
        if rating >= 4:
            template = self.vocabulary.select_random(POSITIVE_CLIMAXES, rng)
            return template.format(moment=self.vocabulary.get_memorable_moment(rng))
        template = self.vocabulary.select_random(REDEMPTIVE_CLIMAXES, rng)
        return template.format(moment=self.vocabulary.get_redemptive_moment(rng))

    def create_resolution(
        self,
        rating: int,
        profile: VoiceProfile,
        highlights: Sequence[Highlight],
        rng: random.Random,
    ) -> str:
        reflection = self.create_reflection(rating, profile, highlights, rng)
        recommendation = self.voices.get_recommendation(profile.name, rating)
        return f"{reflection} {recommendation}"

    def create_reflection(
        self,
        rating: int,
        profile: VoiceProfile,
        highlights: Sequence[Highlight],
        rng: random.Random,
    ) -> str:
        hedge = ""
        if rng.random() < HEDGE_PROBABILITY.get(profile.hedge_frequency, 0.35):
            hedge = self.vocabulary.get_hedge("opinion", rng)
            hedge = f"{hedge}, " if hedge in _COMMA_HEDGES else f"{hedge} "

        if rating >= 4:
            summary = self.vocabulary.summarize_highlights(highlights)
            return f"Looking back, {hedge}it's the combination of {summary} that made this stay memorable."
        return f"In reflection, while there were issues, {hedge}{self.vocabulary.find_positive(rng)}."

    def get_stats(self) -> Dict[str, int]:
        return {
            "arc_types": len(HOOKS),
            "hook_variations": sum(len(hooks) for hooks in HOOKS.values()),
            "context_setups": len(CONTEXT_SETUPS),
            "point_patterns": len(POINT_PATTERNS),
        }
