"""
Review Generator Package

Template-and-phrasebank review generation for hospitality stays.
All reviews are generated through ReviewSynthesizer which:
- Composes a five-part narrative (hook, setup, development, climax, resolution)
- Keeps transitions unique within one review
- Applies the selected voice, then nuance and polish passes
- Scores readability and authenticity
- Falls back to a deterministic sentence instead of raising
"""

from .errors import (
    ReviewGenerationError,
    RequestValidationError,
    MissingRecommendationError,
    UnknownVocabularyBankError,
)

from .vocabulary import (
    VocabularyStore,
    emotion_tier_for_rating,
    highlight_phrase,
)

from .transitions import (
    TransitionAllocator,
    TransitionLedger,
    TRANSITIONS,
)

from .voice_adapter import (
    SubstitutionRule,
    VoiceProfile,
    VoiceRegistry,
    VoiceAdapter,
    apply_rules,
    word_rule,
    VOICE_PROFILES,
    RECOMMENDATIONS,
)

from .narrative import (
    NarrativeComposer,
    NarrativeParts,
)

from .text_passes import (
    inject_emotional_nuance,
    final_polish,
)

from .scoring import (
    ScoringConfig,
    AuthenticityResult,
    authenticity_score,
    readability_score,
    count_syllables,
    count_words,
    count_sentences,
)

from .synthesizer import (
    ReviewSynthesizer,
    create_synthesizer,
    generate_review,
    create_fallback_review,
    infer_category,
    normalize_highlights,
)


__all__ = [
    # Errors
    "ReviewGenerationError",
    "RequestValidationError",
    "MissingRecommendationError",
    "UnknownVocabularyBankError",
    # Vocabulary
    "VocabularyStore",
    "emotion_tier_for_rating",
    "highlight_phrase",
    # Transitions
    "TransitionAllocator",
    "TransitionLedger",
    "TRANSITIONS",
    # Voices
    "SubstitutionRule",
    "VoiceProfile",
    "VoiceRegistry",
    "VoiceAdapter",
    "apply_rules",
    "word_rule",
    "VOICE_PROFILES",
    "RECOMMENDATIONS",
    # Narrative
    "NarrativeComposer",
    "NarrativeParts",
    # Text passes
    "inject_emotional_nuance",
    "final_polish",
    # Scoring
    "ScoringConfig",
    "AuthenticityResult",
    "authenticity_score",
    "readability_score",
    "count_syllables",
    "count_words",
    "count_sentences",
    # Synthesizer
    "ReviewSynthesizer",
    "create_synthesizer",
    "generate_review",
    "create_fallback_review",
    "infer_category",
    "normalize_highlights",
]
