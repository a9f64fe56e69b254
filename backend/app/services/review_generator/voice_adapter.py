"""
Review Generator - Voice Adapter

Voice profiles and the final voice pass over composed review text.

Each voice owns:
- a VoiceProfile (static description, intensifier strength, hedge frequency)
- an ordered list of SubstitutionRules applied as a fold
- one recommendation sentence per rating (1-5)

Built-in voices: professional, friendly, enthusiastic, detailed.
Additional voices can be registered at runtime; existing ones are never
mutated in place.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ...models.review import Voice
from .errors import MissingRecommendationError

logger = logging.getLogger(__name__)


# =============================================================================
# SUBSTITUTION RULES
# =============================================================================

@dataclass(frozen=True)
class SubstitutionRule:
    """
    One find/replace step.

    Replacements keep the leading capital of the matched text, so
    "Amazing" becomes "Excellent" and "amazing" becomes "excellent".
    All-caps matches take the replacement as written ("NOW" -> "now").
    `count` limits the number of replacements (0 = all).
    """
    pattern: str
    replacement: str
    ignore_case: bool = True
    count: int = 0

    def compiled(self) -> "re.Pattern[str]":
        return re.compile(self.pattern, re.IGNORECASE if self.ignore_case else 0)

    def apply(self, text: str) -> str:
        def _replace(match: "re.Match[str]") -> str:
            matched = match.group(0)
            replacement = match.expand(self.replacement)
            if matched[:1].isupper() and not matched.isupper() and replacement[:1].islower():
                return replacement[0].upper() + replacement[1:]
            return replacement

        return self.compiled().sub(_replace, text, count=self.count)


def apply_rules(text: str, rules: Sequence[SubstitutionRule]) -> str:
    """Apply rules in order, each to the output of the previous one."""
    for rule in rules:
        text = rule.apply(text)
    return text


def word_rule(word: str, replacement: str, ignore_case: bool = True) -> SubstitutionRule:
    """Whole-word substitution rule."""
    return SubstitutionRule(rf"\b{re.escape(word)}\b", replacement, ignore_case)


VOICE_RULES: Dict[str, List[SubstitutionRule]] = {
    Voice.PROFESSIONAL.value: [
        SubstitutionRule(r"!+", "."),
        SubstitutionRule(r"\b(?:amazing|awesome|incredible)\b", "excellent"),
        SubstitutionRule(r"\b(?:bad|terrible|awful|horrible)\b", "unsatisfactory"),
        word_rule("hated", "did not enjoy"),
        word_rule("NOW", "now", ignore_case=False),
    ],
    Voice.FRIENDLY.value: [],
    Voice.ENTHUSIASTIC.value: [
        SubstitutionRule(r"\.(?=\s|$)", "!"),
        word_rule("good", "fantastic"),
        word_rule("okay", "pretty great"),
    ],
    Voice.DETAILED.value: [
        word_rule("room", "accommodation", ignore_case=False),
        word_rule("nice", "well-appointed", ignore_case=False),
        word_rule("good", "satisfactory", ignore_case=False),
    ],
}


# =============================================================================
# VOICE PROFILES
# =============================================================================

@dataclass(frozen=True)
class VoiceProfile:
    """Static description of a voice. Never mutated once registered."""
    name: str
    label: str
    description: str
    characteristics: Tuple[str, ...] = field(default_factory=tuple)
    intensifier_strength: str = "medium"  # strong, medium, mild
    hedge_frequency: str = "medium"  # high, medium, low

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "characteristics": list(self.characteristics),
            "intensifier_strength": self.intensifier_strength,
            "hedge_frequency": self.hedge_frequency,
        }


VOICE_PROFILES: Dict[str, VoiceProfile] = {
    Voice.PROFESSIONAL.value: VoiceProfile(
        name=Voice.PROFESSIONAL.value,
        label="Professional",
        description="Formal, objective, business-appropriate tone",
        characteristics=("measured", "precise", "respectful", "analytical"),
        intensifier_strength="mild",
        hedge_frequency="high",
    ),
    Voice.FRIENDLY.value: VoiceProfile(
        name=Voice.FRIENDLY.value,
        label="Friendly",
        description="Warm, conversational, approachable tone",
        characteristics=("warm", "personal", "conversational", "helpful"),
        intensifier_strength="medium",
        hedge_frequency="medium",
    ),
    Voice.ENTHUSIASTIC.value: VoiceProfile(
        name=Voice.ENTHUSIASTIC.value,
        label="Enthusiastic",
        description="Energetic, expressive, passionate tone",
        characteristics=("energetic", "expressive", "passionate", "excitable"),
        intensifier_strength="strong",
        hedge_frequency="low",
    ),
    Voice.DETAILED.value: VoiceProfile(
        name=Voice.DETAILED.value,
        label="Detailed",
        description="Thorough, analytical, comprehensive tone",
        characteristics=("thorough", "analytical", "comprehensive", "specific"),
        intensifier_strength="medium",
        hedge_frequency="medium",
    ),
}


# =============================================================================
# RECOMMENDATIONS (rating x voice)
# =============================================================================

RECOMMENDATIONS: Dict[str, Dict[int, str]] = {
    Voice.PROFESSIONAL.value: {
        5: "I would not hesitate to recommend this property to colleagues and friends alike.",
        4: "A solid choice that I would recommend with minor caveats.",
        3: "Suitable for travelers with specific needs or budget constraints.",
        2: "I would recommend looking elsewhere unless this meets very specific needs.",
        1: "I cannot recommend this property based on our experience.",
    },
    Voice.FRIENDLY.value: {
        5: "If you're on the fence, just book it - you won't regret it!",
        4: "Would I come back? Yes, definitely! Just manage your expectations on a few things.",
        3: "It's fine if you need a place to sleep and aren't too fussy.",
        2: "Honestly, there are better options out there for similar money.",
        1: "Save your money and book somewhere else.",
    },
    Voice.ENTHUSIASTIC.value: {
        5: "Stop reading reviews and book this place NOW! You'll thank me later!",
        4: "Great place that just needs a few tweaks to be absolutely perfect!",
        3: "Could be great with some improvements - fingers crossed they make them!",
        2: "Skip this one - your vacation time is too precious!",
        1: "Please, for your own sake, look elsewhere!",
    },
    Voice.DETAILED.value: {
        5: "For travelers seeking quality accommodation with attention to detail, this delivers on all fronts.",
        4: "Recommended for those who value the positives I've mentioned and can overlook minor shortcomings.",
        3: "Consider carefully based on your priorities; it may or may not meet your specific requirements.",
        2: "Only consider if the location is absolutely critical and you can overlook significant shortcomings.",
        1: "Would not recommend unless major improvements are made to address the issues mentioned.",
    },
}


class VoiceRegistry:
    """
    Registry of voices: profile, rule set, and recommendation sentences.

    Built-ins are copied per instance so runtime registrations stay local
    to the registry (and the synthesizer) that received them.
    """

    def __init__(self):
        self._profiles: Dict[str, VoiceProfile] = dict(VOICE_PROFILES)
        self._rules: Dict[str, List[SubstitutionRule]] = {k: list(v) for k, v in VOICE_RULES.items()}
        self._recommendations: Dict[str, Dict[int, str]] = {
            k: dict(v) for k, v in RECOMMENDATIONS.items()
        }

    def is_known(self, voice: Optional[str]) -> bool:
        return voice in self._profiles

    def get_profile(self, voice: str) -> VoiceProfile:
        return self._profiles[voice]

    def get_rules(self, voice: str) -> List[SubstitutionRule]:
        """Rules for a voice; unknown voices get none (identity)."""
        return list(self._rules.get(voice, []))

    def get_recommendation(self, voice: str, rating: int) -> str:
        sentence = self._recommendations.get(voice, {}).get(rating)
        if not sentence:
            raise MissingRecommendationError(voice, rating)
        return sentence

    def list_profiles(self) -> List[VoiceProfile]:
        return list(self._profiles.values())

    def register(
        self,
        profile: VoiceProfile,
        rules: Optional[Sequence[SubstitutionRule]] = None,
        recommendations: Optional[Dict[int, str]] = None,
    ) -> None:
        """
        Register a new voice.

        A voice missing any of the five rating recommendations is still
        registered, but generation for the missing ratings falls back.

        Raises:
            ValueError: if a voice with this name already exists, or a rule
                pattern is not a valid regular expression
        """
        if profile.name in self._profiles:
            raise ValueError(f"Voice '{profile.name}' is already registered")

        for rule in rules or []:
            try:
                rule.compiled()
            except re.error as e:
                raise ValueError(f"Invalid rule pattern {rule.pattern!r} for voice '{profile.name}': {e}")

        recommendations = {int(k): v for k, v in (recommendations or {}).items() if v}
        missing = [r for r in range(1, 6) if r not in recommendations]
        if missing:
            logger.warning(f"Voice '{profile.name}' registered without recommendations for ratings {missing}")

        self._profiles[profile.name] = profile
        self._rules[profile.name] = list(rules or [])
        self._recommendations[profile.name] = recommendations
        logger.info(f"Registered voice '{profile.name}' with {len(self._rules[profile.name])} rules")


class VoiceAdapter:
    """Applies a voice's rule set as the final voice pass."""

    def __init__(self, registry: Optional[VoiceRegistry] = None):
        self.registry = registry or VoiceRegistry()

    def apply(self, text: str, voice: str) -> str:
        return apply_rules(text, self.registry.get_rules(voice))
