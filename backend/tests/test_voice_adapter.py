"""
Voice Adapter Tests

Verifies:
1. Each built-in voice applies its rule table in order
2. Unknown voices are the identity
3. The recommendation table is complete and distinct
4. Runtime registration
"""
import pytest

from app.services.review_generator import (
    RECOMMENDATIONS,
    MissingRecommendationError,
    SubstitutionRule,
    VoiceAdapter,
    VoiceProfile,
    VoiceRegistry,
    apply_rules,
    word_rule,
)


@pytest.fixture
def adapter():
    return VoiceAdapter(VoiceRegistry())


def _profile(name):
    return VoiceProfile(name=name, label=name.title(), description="test voice")


class TestSubstitutionRule:

    def test_preserves_leading_capital(self):
        rule = word_rule("amazing", "excellent")
        assert rule.apply("Amazing pool, amazing spa") == "Excellent pool, excellent spa"

    def test_count_limits_replacements(self):
        rule = SubstitutionRule(r"\bwas\b", "was truly", ignore_case=False, count=1)
        assert rule.apply("It was fine. It was quiet.") == "It was truly fine. It was quiet."

    def test_rules_fold_in_order(self):
        rules = [word_rule("good", "great"), word_rule("great", "superb")]
        assert apply_rules("good food", rules) == "superb food"


class TestBuiltInVoices:

    def test_professional(self, adapter):
        text = "It was amazing! The awful lift was terrible!! We hated the noise. Book NOW."
        assert adapter.apply(text, "professional") == (
            "It was excellent. The unsatisfactory lift was unsatisfactory. "
            "We did not enjoy the noise. Book now."
        )

    def test_professional_removes_exclamations(self, adapter):
        assert "!" not in adapter.apply("Wow! Great!!! Really!", "professional")

    def test_friendly_is_identity(self, adapter):
        text = "It was amazing! Honestly, okay."
        assert adapter.apply(text, "friendly") == text

    def test_enthusiastic(self, adapter):
        text = "The food was good. Okay value."
        assert adapter.apply(text, "enthusiastic") == "The food was fantastic! Pretty great value!"

    def test_enthusiastic_leaves_inner_periods(self, adapter):
        assert adapter.apply("We paid 3.5 times more.", "enthusiastic") == "We paid 3.5 times more!"

    def test_detailed_is_case_sensitive(self, adapter):
        text = "Room service was nice. The room was good."
        assert adapter.apply(text, "detailed") == (
            "Room service was well-appointed. The accommodation was satisfactory."
        )

    def test_unknown_voice_is_identity(self, adapter):
        assert adapter.apply("Amazing!", "pirate") == "Amazing!"


class TestRecommendations:

    def test_table_is_complete(self):
        for voice in ("professional", "friendly", "enthusiastic", "detailed"):
            for rating in range(1, 6):
                assert RECOMMENDATIONS[voice][rating]

    def test_sentences_are_distinct(self):
        sentences = [s for table in RECOMMENDATIONS.values() for s in table.values()]
        assert len(sentences) == len(set(sentences)) == 20

    def test_missing_recommendation_raises(self):
        registry = VoiceRegistry()
        with pytest.raises(MissingRecommendationError):
            registry.get_recommendation("friendly", 9)


class TestRegistration:

    def test_register_new_voice(self):
        registry = VoiceRegistry()
        registry.register(
            _profile("pirate"),
            [word_rule("hello", "ahoy")],
            {r: f"Arr, {r} stars." for r in range(1, 6)},
        )
        assert registry.is_known("pirate")
        assert VoiceAdapter(registry).apply("hello there", "pirate") == "ahoy there"
        assert registry.get_recommendation("pirate", 4) == "Arr, 4 stars."

    def test_duplicate_name_rejected(self):
        registry = VoiceRegistry()
        with pytest.raises(ValueError):
            registry.register(_profile("friendly"), [], {})

    def test_invalid_pattern_rejected(self):
        registry = VoiceRegistry()
        with pytest.raises(ValueError):
            registry.register(_profile("broken"), [SubstitutionRule("(", "x")], {})
        assert not registry.is_known("broken")

    def test_partial_recommendations_accepted(self):
        registry = VoiceRegistry()
        registry.register(_profile("terse"), [], {5: "Go."})
        assert registry.get_recommendation("terse", 5) == "Go."
        with pytest.raises(MissingRecommendationError):
            registry.get_recommendation("terse", 2)

    def test_registration_is_local(self):
        registry = VoiceRegistry()
        registry.register(_profile("local"), [], {})
        assert not VoiceRegistry().is_known("local")

    def test_profiles_listed(self):
        names = [p.name for p in VoiceRegistry().list_profiles()]
        assert names == ["professional", "friendly", "enthusiastic", "detailed"]
