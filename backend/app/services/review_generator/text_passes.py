"""
Review Generator - Text Passes

The two structural passes that run after the voice pass, strictly in order:

1. Emotional nuance: rating-driven lexical substitution, never a new sentence
2. Final polish: whitespace, punctuation spacing, capitalization, a/an

Each pass runs exactly once per review so no word is substituted twice.
"""
import re
from typing import Dict, List

from .voice_adapter import SubstitutionRule, apply_rules, word_rule


POSITIVE_NUANCE_RULES: List[SubstitutionRule] = [
    # First plain "was" only, never one that closes a clause
    SubstitutionRule(
        r"\bwas\b"
        r"(?! (?:genuinely|a|an|the|how|when|what|that|it|not|one|something|exactly|so|to|in|on|at)\b)"
        r"(?!\s*(?:[.!?,;:]|$))",
        "was genuinely",
        ignore_case=False,
        count=1,
    ),
    word_rule("found", "discovered", ignore_case=False),
    word_rule("stay", "experience", ignore_case=False),
]

NEGATIVE_NUANCE_RULES: List[SubstitutionRule] = [
    word_rule("unfortunately", "regrettably"),
    # Plural forms keep their "s"
    SubstitutionRule(r"\bissue(s?)\b", r"significant concern\1", ignore_case=False),
    SubstitutionRule(r"\bproblem(s?)\b", r"real problem\1", ignore_case=False),
]

NUANCE_RULES: Dict[int, List[SubstitutionRule]] = {
    5: POSITIVE_NUANCE_RULES,
    4: POSITIVE_NUANCE_RULES,
    3: [],
    2: NEGATIVE_NUANCE_RULES,
    1: NEGATIVE_NUANCE_RULES,
}


def inject_emotional_nuance(text: str, rating: int) -> str:
    """Strengthen positive framing for ratings >= 4, disappointment for <= 2."""
    return apply_rules(text, NUANCE_RULES.get(rating, []))


# =============================================================================
# FINAL POLISH
# =============================================================================

# Vowel letters that do not take "an", and consonants that do
_A_EXCEPTIONS = ("uni", "use", "usu", "eu", "one", "once")
_AN_EXCEPTIONS = ("hour", "honest", "honor", "heir")

_ARTICLE = re.compile(r"\b([Aa])\s+([A-Za-z][\w'-]*)")
_SENTENCE_START = re.compile(r"([.!?][)\"']?\s+)([a-z])")


def _fix_article(match: "re.Match[str]") -> str:
    article, word = match.group(1), match.group(2)
    lower = word.lower()
    starts_with_vowel = lower[0] in "aeiou"
    if starts_with_vowel and lower.startswith(_A_EXCEPTIONS):
        starts_with_vowel = False
    elif lower.startswith(_AN_EXCEPTIONS):
        starts_with_vowel = True
    if not starts_with_vowel:
        return match.group(0)
    return f"{article}n {word}"


def _polish_paragraph(paragraph: str) -> str:
    paragraph = re.sub(r"\s+", " ", paragraph).strip()
    paragraph = re.sub(r"\s+([.!?,;:])", r"\1", paragraph)
    paragraph = _ARTICLE.sub(_fix_article, paragraph)
    return paragraph


def final_polish(text: str) -> str:
    """
    Clean up composed text.

    - collapse whitespace inside paragraphs, keep exactly one blank line
      between paragraphs
    - no space before punctuation
    - capitalize the first letter of the text and of every sentence
    - "a" -> "an" before vowel sounds
    """
    paragraphs = [p for p in re.split(r"\n\s*\n", text) if p.strip()]
    polished = "\n\n".join(_polish_paragraph(p) for p in paragraphs)
    polished = _SENTENCE_START.sub(lambda m: m.group(1) + m.group(2).upper(), polished)
    if polished[:1].islower():
        polished = polished[0].upper() + polished[1:]
    return polished
