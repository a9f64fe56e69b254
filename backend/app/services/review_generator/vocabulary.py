"""
Review Generator - Vocabulary Store

Categorized word and phrase banks for review generation.

Every lookup draws uniformly at random from one bank. Unknown axis/key
combinations fall back to a generic neutral word instead of raising, so a
bad category never breaks a review.

The random source is injectable: pass an rng to any lookup (the composer
passes its per-call random.Random), otherwise the store's own instance is
used.
"""
import copy
import logging
import random
import re
from typing import Dict, List, Optional, Sequence

from ...models.review import Highlight, HighlightCategory
from .errors import UnknownVocabularyBankError

logger = logging.getLogger(__name__)


# =============================================================================
# EMOTIONS
# =============================================================================

# Every entry reads naturally in "I was ___ by the ..."
EMOTIONS: Dict[str, List[str]] = {
    "delight": ["delighted", "thrilled", "overjoyed", "elated", "pleased", "charmed"],
    "satisfaction": ["satisfied", "pleased", "impressed", "reassured", "gratified"],
    "surprise": ["surprised", "amazed", "astonished", "impressed", "taken aback", "struck"],
    "neutral": [
        "mildly impressed",
        "moderately pleased",
        "neither thrilled nor bothered",
        "reasonably satisfied",
        "somewhat unmoved",
    ],
    "disappointment": ["disappointed", "let down", "underwhelmed", "frustrated", "put off"],
}


def emotion_tier_for_rating(rating: int) -> str:
    """Select the emotion tier for a rating."""
    if rating >= 5:
        return "delight"
    if rating >= 4:
        return "satisfaction"
    if rating >= 3:
        return "neutral"
    return "disappointment"


# =============================================================================
# TEMPORAL EXPRESSIONS
# =============================================================================

TEMPORAL: Dict[str, List[str]] = {
    "sequence": ["initially", "at first", "subsequently", "later", "eventually", "finally"],
    "frequency": ["always", "consistently", "usually", "often", "sometimes", "occasionally"],
    "specific": ["during breakfast", "in the evening", "late at night", "early in the morning", "around noon"],
    "duration": ["throughout our stay", "the entire time", "for the whole trip", "during our visit"],
}


# =============================================================================
# INTENSIFIERS AND HEDGES
# =============================================================================

INTENSIFIERS: Dict[str, List[str]] = {
    "strong": ["absolutely", "completely", "thoroughly", "utterly", "genuinely", "truly"],
    "medium": ["quite", "really", "very", "particularly", "especially", "notably"],
    "mild": ["fairly", "somewhat", "rather", "relatively", "reasonably", "pretty"],
}

HEDGES: Dict[str, List[str]] = {
    "opinion": ["in my opinion", "I feel", "I believe", "it seems to me", "from my perspective"],
    "uncertainty": ["perhaps", "maybe", "possibly", "arguably"],
    "concession": ["although", "while", "despite", "even though", "granted", "admittedly"],
}


# =============================================================================
# DESCRIPTORS (category x sentiment)
# =============================================================================

DESCRIPTORS: Dict[str, Dict[str, List[str]]] = {
    HighlightCategory.CLEANLINESS.value: {
        "positive": ["spotless", "immaculate", "pristine", "fresh", "sparkling", "meticulously kept"],
        "neutral": ["tidy enough", "acceptable", "decently kept", "mostly clean"],
        "negative": ["grubby", "dusty", "musty", "poorly kept", "stained"],
    },
    HighlightCategory.COMFORT.value: {
        "positive": ["cozy", "comfortable", "restful", "inviting", "plush", "spacious"],
        "neutral": ["adequate", "serviceable", "passable", "standard"],
        "negative": ["cramped", "lumpy", "stuffy", "uncomfortable", "tired-looking"],
    },
    HighlightCategory.SERVICE.value: {
        "positive": ["attentive", "courteous", "accommodating", "warm", "responsive", "proactive"],
        "neutral": ["polite", "efficient enough", "businesslike", "reasonably helpful"],
        "negative": ["inattentive", "unhelpful", "slow", "indifferent", "dismissive"],
    },
    HighlightCategory.FOOD.value: {
        "positive": ["delicious", "flavorful", "well-prepared", "varied", "abundant", "memorable"],
        "neutral": ["decent", "standard", "unremarkable", "reasonably varied"],
        "negative": ["bland", "cold", "limited", "overcooked", "tasteless"],
    },
    HighlightCategory.LOCATION.value: {
        "positive": ["convenient", "central", "well-located", "ideal", "perfect for exploring"],
        "neutral": ["workable", "reasonably placed", "slightly out of the way"],
        "negative": ["remote", "inconvenient", "isolated", "noisy"],
    },
    HighlightCategory.AMENITIES.value: {
        "positive": ["modern", "well-maintained", "top-notch", "impressive", "extensive"],
        "neutral": ["basic", "functional", "as advertised", "limited but usable"],
        "negative": ["outdated", "broken", "insufficient", "lacking"],
    },
    HighlightCategory.WIFI.value: {
        "positive": ["fast", "reliable", "seamless", "strong"],
        "neutral": ["usable", "patchy at times", "adequate for email"],
        "negative": ["slow", "unreliable", "constantly dropping", "painfully sluggish"],
    },
    HighlightCategory.VALUE.value: {
        "positive": ["outstanding", "fair", "generous", "unbeatable", "excellent"],
        "neutral": ["reasonable", "fair enough", "acceptable"],
        "negative": ["poor", "hard to justify", "steep"],
    },
    HighlightCategory.GENERAL.value: {
        "positive": ["wonderful", "lovely", "thoughtful", "excellent", "pleasant"],
        "neutral": ["okay", "acceptable", "fine", "ordinary"],
        "negative": ["disappointing", "lackluster", "subpar", "underwhelming"],
    },
}

# Generic neutral fallbacks for unknown descriptor keys
GENERIC_DESCRIPTORS: Dict[str, str] = {
    "positive": "good",
    "neutral": "okay",
    "negative": "disappointing",
}


# =============================================================================
# SUPPORTING BANKS
# =============================================================================

SPECIFIC_DETAILS: Dict[str, str] = {
    HighlightCategory.CLEANLINESS.value: "housekeeping attention",
    HighlightCategory.COMFORT.value: "bedding quality",
    HighlightCategory.SERVICE.value: "staff responsiveness",
    HighlightCategory.FOOD.value: "variety offered",
    HighlightCategory.LOCATION.value: "proximity to attractions",
    HighlightCategory.AMENITIES.value: "facility quality",
    HighlightCategory.WIFI.value: "connection speed",
    HighlightCategory.VALUE.value: "pricing fairness",
}

PERSONAL_ANECDOTES: List[str] = [
    "My partner was particularly impressed",
    "This made our mornings so much better",
    "It was exactly what we needed after a long day",
    "A detail that might seem small meant a lot to us",
]

MILD_CRITICISMS: List[str] = [
    "it could have been more consistent",
    "there was room for improvement",
    "not everyone might appreciate this",
    "it took some getting used to",
]

MEMORABLE_MOMENTS: List[str] = [
    "when the concierge went out of their way to secure us last-minute reservations",
    "watching the sunset from our balcony with a complimentary bottle of wine",
    "the genuine smile from the staff who remembered our names",
    "finding fresh flowers in our room after housekeeping",
]

REDEMPTIVE_MOMENTS: List[str] = [
    "the staff's effort to address our concerns showed they truly cared",
    "there were enough positive aspects to balance things out",
    "certain elements of the stay were genuinely enjoyable",
    "we found ways to make the most of our time there",
]

POSITIVE_ASPECTS: List[str] = [
    "the location was convenient",
    "the bed was comfortable",
    "the staff tried their best",
    "the value was reasonable",
]

# Banks that accept appended words through add_words()
EXTENSIBLE_BANKS = ("emotions", "descriptors", "intensifiers", "hedges", "temporal")

_LEADING_SYMBOLS = re.compile(r"^[^\w]+", re.UNICODE)
_TRAILING_PUNCTUATION = re.compile(r"[\s.!?,;:]+$")


def highlight_phrase(text: str) -> str:
    """
    Turn highlight text into an inline noun phrase.

    Strips leading decoration (emoji, bullets) and trailing sentence
    punctuation, then lowercases, so "✨ Clean room!" becomes "clean room".
    """
    cleaned = _LEADING_SYMBOLS.sub("", text or "")
    cleaned = _TRAILING_PUNCTUATION.sub("", cleaned).strip()
    return cleaned.lower() or "stay"


class VocabularyStore:
    """
    Word and phrase banks with random lookups.

    Banks are copied per instance, so words appended through add_words()
    never leak into another store.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.emotions = copy.deepcopy(EMOTIONS)
        self.descriptors = copy.deepcopy(DESCRIPTORS)
        self.intensifiers = copy.deepcopy(INTENSIFIERS)
        self.hedges = copy.deepcopy(HEDGES)
        self.temporal = copy.deepcopy(TEMPORAL)
        self.specific_details = dict(SPECIFIC_DETAILS)
        self.personal_anecdotes = list(PERSONAL_ANECDOTES)
        self.mild_criticisms = list(MILD_CRITICISMS)
        self.memorable_moments = list(MEMORABLE_MOMENTS)
        self.redemptive_moments = list(REDEMPTIVE_MOMENTS)
        self.positive_aspects = list(POSITIVE_ASPECTS)

    def select_random(self, items: Sequence[str], rng: Optional[random.Random] = None) -> str:
        """Select one item uniformly at random; empty banks yield ''."""
        if not items:
            return ""
        return (rng or self.rng).choice(list(items))

    # =========================================================================
    # AXIS LOOKUPS
    # =========================================================================

    def select_emotion(self, rating: int, rng: Optional[random.Random] = None) -> str:
        """Select an emotion word from the tier matching the rating."""
        return self.get_emotion(emotion_tier_for_rating(rating), rng)

    def get_emotion(self, tier: str, rng: Optional[random.Random] = None) -> str:
        words = self.emotions.get(tier)
        if not words:
            return "pleased"
        return self.select_random(words, rng)

    def select_descriptor(
        self,
        category: str,
        sentiment: str,
        rng: Optional[random.Random] = None,
    ) -> str:
        """Select a descriptor for a category and sentiment."""
        key = category.value if isinstance(category, HighlightCategory) else category
        words = self.descriptors.get(key, {}).get(sentiment)
        if not words:
            return GENERIC_DESCRIPTORS.get(sentiment, "okay")
        return self.select_random(words, rng)

    def get_intensifier(self, strength: str = "medium", rng: Optional[random.Random] = None) -> str:
        words = self.intensifiers.get(strength)
        if not words:
            return "quite"
        return self.select_random(words, rng)

    def get_hedge(self, kind: str = "opinion", rng: Optional[random.Random] = None) -> str:
        words = self.hedges.get(kind)
        if not words:
            return "I feel"
        return self.select_random(words, rng)

    def get_temporal(self, kind: str = "sequence", rng: Optional[random.Random] = None) -> str:
        words = self.temporal.get(kind)
        if not words:
            return "later"
        return self.select_random(words, rng)

    # =========================================================================
    # SUPPORTING PHRASES
    # =========================================================================

    def get_specific_detail(self, category: str) -> str:
        key = category.value if isinstance(category, HighlightCategory) else category
        return self.specific_details.get(key, "attention to detail")

    def get_personal_anecdote(self, rng: Optional[random.Random] = None) -> str:
        return self.select_random(self.personal_anecdotes, rng)

    def get_mild_criticism(self, rng: Optional[random.Random] = None) -> str:
        return self.select_random(self.mild_criticisms, rng)

    def get_memorable_moment(self, rng: Optional[random.Random] = None) -> str:
        return self.select_random(self.memorable_moments, rng)

    def get_redemptive_moment(self, rng: Optional[random.Random] = None) -> str:
        return self.select_random(self.redemptive_moments, rng)

    def find_positive(self, rng: Optional[random.Random] = None) -> str:
        return self.select_random(self.positive_aspects, rng)

    def summarize_highlights(self, highlights: Sequence[Highlight]) -> str:
        """Summarize up to two highlights as an inline phrase."""
        if not highlights:
            return "thoughtful touches"
        phrases = [highlight_phrase(h.text) for h in highlights[:2]]
        return " and ".join(phrases)

    # =========================================================================
    # CONFIGURATION AND INTROSPECTION
    # =========================================================================

    def add_words(
        self,
        bank: str,
        key: str,
        words: Sequence[str],
        sentiment: Optional[str] = None,
    ) -> int:
        """
        Append words to an existing bank axis. Append-only.

        Args:
            bank: One of EXTENSIBLE_BANKS
            key: Tier/strength/kind, or the category for descriptors
            words: Words to append (blanks and duplicates are skipped)
            sentiment: Required for descriptors

        Returns:
            Number of words actually appended
        """
        if bank not in EXTENSIBLE_BANKS:
            raise UnknownVocabularyBankError(f"Unknown vocabulary bank: {bank}")

        if bank == "descriptors":
            if key not in self.descriptors or sentiment not in self.descriptors[key]:
                raise UnknownVocabularyBankError(f"Unknown descriptor axis: {key}/{sentiment}")
            target = self.descriptors[key][sentiment]
        else:
            table = getattr(self, bank)
            if key not in table:
                raise UnknownVocabularyBankError(f"Unknown {bank} key: {key}")
            target = table[key]

        added = 0
        for word in words:
            word = (word or "").strip()
            if word and word not in target:
                target.append(word)
                added += 1

        logger.info(f"Appended {added} words to {bank}/{key}" + (f"/{sentiment}" if sentiment else ""))
        return added

    def get_stats(self) -> Dict[str, int]:
        """Category counts and total item count across all banks."""
        nested = {
            "emotions": self.emotions,
            "intensifiers": self.intensifiers,
            "hedges": self.hedges,
            "temporal": self.temporal,
        }
        flat = [
            self.personal_anecdotes,
            self.mild_criticisms,
            self.memorable_moments,
            self.redemptive_moments,
            self.positive_aspects,
        ]

        total = sum(len(words) for table in nested.values() for words in table.values())
        total += sum(
            len(words)
            for axes in self.descriptors.values()
            for words in axes.values()
        )
        total += sum(len(words) for words in flat)
        total += len(self.specific_details)

        return {
            "total_categories": len(nested) + 1 + len(flat) + 1,
            "emotions": len(self.emotions),
            "descriptors": len(self.descriptors),
            "intensifiers": len(self.intensifiers),
            "hedges": len(self.hedges),
            "temporal": len(self.temporal),
            "total_words": total,
        }
