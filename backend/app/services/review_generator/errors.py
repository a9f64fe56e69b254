"""
Review Generator - Errors

None of these reach the caller of ReviewSynthesizer.generate(); the
synthesizer converts every failure into a fallback review. They surface
only from the configuration interfaces (voice and vocabulary registration).
"""


class ReviewGenerationError(Exception):
    """Base class for review generation failures."""
    pass


class RequestValidationError(ReviewGenerationError):
    """Raised when a request has an out-of-range rating or an unknown voice."""
    pass


class MissingRecommendationError(ReviewGenerationError):
    """Raised when a voice has no recommendation sentence for a rating."""

    def __init__(self, voice: str, rating: int):
        super().__init__(f"Voice '{voice}' has no recommendation for rating {rating}")
        self.voice = voice
        self.rating = rating


class UnknownVocabularyBankError(ReviewGenerationError):
    """Raised when appending words to a bank or key that does not exist."""
    pass
