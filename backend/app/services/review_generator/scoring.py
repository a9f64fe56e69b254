"""
Review Generator - Quality Scoring

Heuristic quality metrics computed on the final, voice-adjusted text:

- word and sentence counts (simple punctuation/whitespace splitting)
- readability: Flesch Reading Ease with an approximate syllable counter
- authenticity: five independent heuristics worth a fixed number of points

The thresholds are not validated against ground truth; they live in
ScoringConfig so they can be tuned without touching the heuristics.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_WORD = re.compile(r"\b[a-z]+\b")
_VOWEL_GROUP = re.compile(r"[aeiouy]+")


@dataclass(frozen=True)
class ScoringConfig:
    """Tunable constants for the authenticity heuristics."""
    variance_threshold: float = 10.0
    pronoun_min: int = 3
    points_per_check: int = 20
    max_score: int = 100
    personal_pronouns: Tuple[str, ...] = ("we", "our", "us", "my", "i")
    emotion_words: Tuple[str, ...] = (
        "delighted",
        "impressed",
        "disappointed",
        "surprised",
        "pleased",
        "thrilled",
        "satisfied",
        "let down",
        "underwhelmed",
        "charmed",
    )
    specificity_markers: Tuple[str, ...] = ("particularly", "especially", "specifically", "notably")
    hedge_words: Tuple[str, ...] = (
        "perhaps",
        "maybe",
        "somewhat",
        "fairly",
        "possibly",
        "arguably",
        "in my opinion",
        "i feel",
        "i believe",
    )


@dataclass
class AuthenticityResult:
    score: int
    breakdown: Dict[str, int] = field(default_factory=dict)


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_SPLIT.split(text) if s.strip()]


def count_words(text: str) -> int:
    return len(text.split())


def count_sentences(text: str) -> int:
    return len(split_sentences(text))


def count_syllables(word: str) -> int:
    """Vowel-group clusters in a word, minimum 1."""
    return max(1, len(_VOWEL_GROUP.findall(word.lower())))


def count_text_syllables(text: str) -> int:
    return sum(count_syllables(w) for w in _WORD.findall(text.lower()))


def readability_score(text: str) -> int:
    """Flesch Reading Ease, clamped to 0-100 and rounded."""
    sentences = count_sentences(text)
    words = count_words(text)
    if sentences == 0 or words == 0:
        return 0

    syllables = count_text_syllables(text)
    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)
    return int(max(0, min(100, round(score))))


def sentence_length_variance(text: str) -> float:
    """Population variance of sentence lengths in words."""
    lengths = [len(s.split()) for s in split_sentences(text)]
    if not lengths:
        return 0.0
    mean = sum(lengths) / len(lengths)
    return sum((n - mean) ** 2 for n in lengths) / len(lengths)


def _count_pronouns(text: str, pronouns: Tuple[str, ...]) -> int:
    lower = text.lower()
    return sum(len(re.findall(rf"\b{re.escape(p)}\b", lower)) for p in pronouns)


def _contains_any(text: str, markers: Tuple[str, ...]) -> bool:
    lower = text.lower()
    return any(marker in lower for marker in markers)


def authenticity_score(text: str, config: ScoringConfig = ScoringConfig()) -> AuthenticityResult:
    """
    Score human-like features of a review (0 to config.max_score).

    Checks, each worth config.points_per_check:
    - sentence_variety: sentence-length variance above the threshold
    - personal_voice: at least pronoun_min personal pronouns
    - emotional_language: at least one named emotion word
    - specific_detail: at least one specificity marker
    - hedging: at least one hedge word
    """
    points = config.points_per_check
    checks = {
        "sentence_variety": sentence_length_variance(text) > config.variance_threshold,
        "personal_voice": _count_pronouns(text, config.personal_pronouns) >= config.pronoun_min,
        "emotional_language": _contains_any(text, config.emotion_words),
        "specific_detail": _contains_any(text, config.specificity_markers),
        "hedging": _contains_any(text, config.hedge_words),
    }
    breakdown = {name: (points if passed else 0) for name, passed in checks.items()}
    score = min(config.max_score, sum(breakdown.values()))
    return AuthenticityResult(score=score, breakdown=breakdown)
