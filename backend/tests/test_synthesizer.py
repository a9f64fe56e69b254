"""
Test Suite: Review Synthesizer

End-to-end generation through ReviewSynthesizer.

Covers:
1. Hotel name present for every rating and voice
2. Transition uniqueness in the development section
3. Seeded reproducibility
4. Climax omitted only for rating 3
5. Professional voice never exclaims
6. Out-of-range ratings and unknown voices fall back
7. Zero highlights produce a generic development paragraph
8. Highlight normalization and category inference
9. Voice and vocabulary configuration
10. Concurrent calls do not interfere
"""
import os
import re
import sys
from concurrent.futures import ThreadPoolExecutor

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.models.review import (
    GenerationRequest,
    Highlight,
    HighlightCategory,
    NarrativeArc,
)
from app.services.review_generator import (
    ReviewSynthesizer,
    SubstitutionRule,
    VoiceProfile,
    create_fallback_review,
    create_synthesizer,
    generate_review,
    infer_category,
    normalize_highlights,
)


VOICES = ["professional", "friendly", "enthusiastic", "detailed"]
RATINGS = [1, 2, 3, 4, 5]

CLIMAX_MARKERS = re.compile(
    r"captured the essence|made the trip unforgettable|Despite the challenges|In fairness"
)

HIGHLIGHTS = [
    {"text": "Spotless bathroom"},
    {"text": "Comfortable bed"},
    {"text": "Helpful staff"},
    {"text": "Great breakfast"},
    {"text": "Central location"},
]


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def synthesizer():
    return ReviewSynthesizer()


def make_request(**overrides):
    fields = {
        "hotel_name": "Seaside Lodge",
        "rating": 4,
        "trip_type": "leisure",
        "highlights": HIGHLIGHTS[:3],
        "nights": 3,
        "voice": "friendly",
        "seed": 42,
    }
    fields.update(overrides)
    return GenerationRequest(**fields)


# =============================================================================
# TESTABLE PROPERTIES
# =============================================================================

class TestHotelName:

    @pytest.mark.parametrize("voice", VOICES)
    @pytest.mark.parametrize("rating", RATINGS)
    def test_name_in_every_review(self, synthesizer, voice, rating):
        review = synthesizer.generate(make_request(rating=rating, voice=voice))
        assert not review.is_fallback
        assert "Seaside Lodge" in review.text

    @pytest.mark.parametrize("voice", VOICES)
    def test_name_survives_voice_and_nuance_passes(self, synthesizer, voice):
        name = "St. Regis amazing good room stay"
        review = synthesizer.generate(make_request(hotel_name=name, rating=5, voice=voice))
        assert name in review.text

    def test_placeholder_never_leaks(self, synthesizer):
        review = synthesizer.generate(make_request())
        assert "__HOTEL_NAME__" not in review.text


class TestTransitions:

    @pytest.mark.parametrize("seed", range(5))
    def test_no_repeated_transitions(self, synthesizer, seed):
        review = synthesizer.generate(make_request(rating=3, highlights=HIGHLIGHTS, seed=seed))
        for phrase in synthesizer.transitions.all_phrases():
            assert review.text.count(phrase) <= 1, phrase


class TestDeterminism:

    def test_same_seed_same_review(self, synthesizer):
        first = synthesizer.generate(make_request(seed=7))
        second = synthesizer.generate(make_request(seed=7))
        assert first.text == second.text
        assert first.metadata.word_count == second.metadata.word_count
        assert first.metadata.sentence_count == second.metadata.sentence_count
        assert first.metadata.authenticity_score == second.metadata.authenticity_score

    def test_separate_synthesizers_agree(self):
        a = ReviewSynthesizer().generate(make_request(seed=99))
        b = ReviewSynthesizer().generate(make_request(seed=99))
        assert a.text == b.text

    def test_default_seed_used_when_request_has_none(self):
        a = ReviewSynthesizer(seed=5).generate(make_request(seed=None))
        b = ReviewSynthesizer(seed=5).generate(make_request(seed=None))
        assert a.text == b.text
        assert a.metadata.seed == 5

    def test_different_seeds_vary(self, synthesizer):
        texts = {synthesizer.generate(make_request(seed=s)).text for s in range(10)}
        assert len(texts) > 1


class TestClimax:

    @pytest.mark.parametrize("seed", range(5))
    def test_rating_three_has_no_climax(self, synthesizer, seed):
        review = synthesizer.generate(make_request(rating=3, seed=seed))
        assert "climax" not in review.metadata.sections
        assert not CLIMAX_MARKERS.search(review.text)

    @pytest.mark.parametrize("rating", [1, 2, 4, 5])
    def test_other_ratings_have_climax(self, synthesizer, rating):
        review = synthesizer.generate(make_request(rating=rating))
        assert "climax" in review.metadata.sections
        assert CLIMAX_MARKERS.search(review.text)


class TestProfessionalVoice:

    @pytest.mark.parametrize("rating", RATINGS)
    def test_no_exclamation_marks(self, synthesizer, rating):
        for seed in range(10):
            review = synthesizer.generate(make_request(rating=rating, voice="professional", seed=seed))
            assert "!" not in review.text

    def test_hotel_name_kept_verbatim_even_with_exclamation(self, synthesizer):
        # The name is never rewritten; every "!" outside it is removed
        name = "Yahoo! Beach Resort"
        for rating in RATINGS:
            review = synthesizer.generate(make_request(hotel_name=name, rating=rating, voice="professional"))
            assert name in review.text
            assert "!" not in review.text.replace(name, "")


class TestFallback:

    @pytest.mark.parametrize("rating", [0, 6, -1, 7])
    def test_out_of_range_rating(self, synthesizer, rating):
        review = synthesizer.generate(make_request(rating=rating))
        assert review.metadata.fallback is True
        assert review.text
        assert "Seaside Lodge" in review.text

    def test_rating_seven_scenario(self, synthesizer):
        review = synthesizer.generate(GenerationRequest(hotel_name="X", rating=7, voice="friendly"))
        assert review.metadata.fallback is True
        assert review.text
        assert "X" in review.text

    def test_unknown_voice(self, synthesizer):
        review = synthesizer.generate(make_request(voice="pirate"))
        assert review.is_fallback
        assert "pirate" in review.metadata.error

    def test_non_integer_rating(self, synthesizer):
        review = synthesizer.generate(make_request(rating="five"))
        assert review.is_fallback

    def test_fallback_metadata_shape(self, synthesizer):
        metadata = synthesizer.generate(make_request(rating=0)).metadata.to_dict()
        assert metadata["fallback"] is True
        assert metadata["error"]
        assert "word_count" not in metadata

    def test_fallback_keyed_by_rating_and_trip(self):
        text = create_fallback_review(make_request(rating=2, trip_type="business"))
        assert "Seaside Lodge" in text
        assert "business" in text

    def test_fallback_never_raises(self):
        assert "this hotel" in create_fallback_review(None)
        assert create_fallback_review(object())

    def test_unexpected_error_falls_back(self, synthesizer, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("composer exploded")

        monkeypatch.setattr(synthesizer.composer, "compose", explode)
        review = synthesizer.generate(make_request())
        assert review.is_fallback
        assert review.metadata.error == "composer exploded"


class TestZeroHighlights:

    @pytest.mark.parametrize("rating", RATINGS)
    def test_generic_development(self, synthesizer, rating):
        review = synthesizer.generate(make_request(rating=rating, highlights=[], voice="friendly"))
        assert not review.is_fallback
        paragraphs = review.text.split("\n\n")
        assert len(paragraphs) == 3
        assert len(paragraphs[1]) > 20

    def test_generic_paragraph_text(self, synthesizer):
        review = synthesizer.generate(make_request(rating=1, highlights=[], voice="friendly"))
        assert "multiple real problems made this a disappointing" in review.text.lower()


class TestNuanceInReviews:
    """Rating-driven substitutions land in real generated text."""

    @pytest.mark.parametrize("seed", range(10))
    def test_rating_two_issues_become_concerns(self, synthesizer, seed):
        review = synthesizer.generate(make_request(rating=2, highlights=[], seed=seed))
        assert "significant concerns" in review.text
        assert "issue" not in review.text

    @pytest.mark.parametrize("seed", range(10))
    def test_rating_one_problems_deepened(self, synthesizer, seed):
        review = synthesizer.generate(make_request(rating=1, highlights=[], seed=seed))
        assert "real problems" in review.text
        assert "regrettably" in review.text.lower()

    @pytest.mark.parametrize("seed", range(20))
    def test_genuinely_never_closes_a_clause(self, synthesizer, seed):
        review = synthesizer.generate(make_request(rating=5, highlights=HIGHLIGHTS, seed=seed))
        assert not re.search(r"\bgenuinely\s*(?:[.!?,;:]|$)", review.text)


class TestHighlightWording:
    """Highlight text reads naturally inside generated sentences."""

    @pytest.mark.parametrize("seed", range(10))
    def test_trailing_punctuation_stripped(self, synthesizer, seed):
        review = synthesizer.generate(make_request(
            rating=5,
            voice="professional",
            highlights=["Great location!", "Clean rooms."],
            seed=seed,
        ))
        assert "location!" not in review.text
        assert not re.search(r"[.!?] (?:Was|Were|And|That|Felt) ", review.text)
        assert "great location and clean rooms that made" in review.text

    @pytest.mark.parametrize("seed", range(10))
    def test_plural_highlights_agree(self, synthesizer, seed):
        review = synthesizer.generate(make_request(highlights=["Clean rooms", "Quiet nights"], seed=seed))
        assert "rooms was" not in review.text
        assert "nights was" not in review.text

    @pytest.mark.parametrize("rating", [1, 2])
    def test_low_ratings_never_say_best_of_all(self, synthesizer, rating):
        for seed in range(30):
            review = synthesizer.generate(make_request(rating=rating, highlights=HIGHLIGHTS, seed=seed))
            assert "Best of all" not in review.text


class TestScenario:

    def test_grand_plaza(self, synthesizer):
        review = synthesizer.generate(GenerationRequest(
            hotel_name="Grand Plaza",
            rating=5,
            trip_type="leisure",
            highlights=[{"text": "Great location"}],
            nights=3,
            voice="friendly",
        ))
        assert not review.is_fallback
        assert "Grand Plaza" in review.text
        assert "climax" in review.metadata.sections
        assert 0 <= review.metadata.authenticity_score <= 100
        assert review.metadata.word_count > 20
        assert review.metadata.narrative_arc == NarrativeArc.HEROIC


class TestMetadata:

    def test_success_metadata(self, synthesizer):
        review = synthesizer.generate(make_request(rating=4, voice="detailed"))
        data = review.to_dict()["metadata"]
        assert data["fallback"] is False
        assert data["voice"] == "detailed"
        assert data["rating"] == 4
        assert data["narrative_arc"] == "satisfying"
        assert data["seed"] == 42
        assert 0 <= data["readability_score"] <= 100
        assert sum(data["authenticity_breakdown"].values()) == data["authenticity_score"]

    def test_default_voice_and_nights(self, synthesizer):
        review = synthesizer.generate(make_request(voice=None, nights=None))
        assert review.metadata.voice == "friendly"
        assert not review.is_fallback

    def test_unknown_trip_type_degrades(self, synthesizer):
        review = synthesizer.generate(make_request(trip_type="spaceflight"))
        assert not review.is_fallback
        assert review.text.startswith("On our vacation,")
        assert review.metadata.trip_type == "spaceflight"

    def test_couple_context(self, synthesizer):
        review = synthesizer.generate(make_request(trip_type="couple"))
        assert review.text.startswith("As a couple,")


# =============================================================================
# HIGHLIGHT NORMALIZATION
# =============================================================================

class TestHighlights:

    @pytest.mark.parametrize("text,category", [
        ("Spotless bathroom", HighlightCategory.CLEANLINESS),
        ("Comfy bed", HighlightCategory.COMFORT),
        ("Helpful staff", HighlightCategory.SERVICE),
        ("Great breakfast", HighlightCategory.FOOD),
        ("Central location", HighlightCategory.LOCATION),
        ("Rooftop pool", HighlightCategory.AMENITIES),
        ("Fast WiFi", HighlightCategory.WIFI),
        ("Worth the price", HighlightCategory.VALUE),
        ("Lovely views", HighlightCategory.GENERAL),
    ])
    def test_infer_category(self, text, category):
        assert infer_category(text) == category

    def test_infer_category_fixed_order(self):
        # Matches both cleanliness and service; cleanliness comes first
        assert infer_category("Clean and friendly") == HighlightCategory.CLEANLINESS

    def test_mixed_inputs(self):
        result = normalize_highlights([
            "Helpful staff",
            Highlight("Views", HighlightCategory.LOCATION),
            {"text": "Quiet nights", "category": "comfort"},
            {"name": "Pool bar"},
        ])
        assert [h.category for h in result] == [
            HighlightCategory.SERVICE,
            HighlightCategory.LOCATION,
            HighlightCategory.COMFORT,
            HighlightCategory.AMENITIES,
        ]

    def test_malformed_items_become_placeholders(self):
        result = normalize_highlights([42, {"category": "food"}, None])
        assert [h.text for h in result] == ["Highlight 1", "Highlight 2", "Highlight 3"]
        assert result[1].category == HighlightCategory.FOOD

    def test_unknown_category_inferred(self):
        result = normalize_highlights([{"text": "Great breakfast", "category": "snacks"}])
        assert result[0].category == HighlightCategory.FOOD

    def test_non_sequence_ignored(self):
        assert normalize_highlights("Helpful staff") == []
        assert normalize_highlights(None) == []

    def test_malformed_highlights_still_generate(self, synthesizer):
        review = synthesizer.generate(make_request(highlights=[None, {"oops": 1}]))
        assert not review.is_fallback


# =============================================================================
# CONFIGURATION INTERFACES
# =============================================================================

class TestConfiguration:

    def test_register_voice(self, synthesizer):
        synthesizer.register_voice(
            VoiceProfile(name="pirate", label="Pirate", description="Salty"),
            [SubstitutionRule(r"\bhotel\b", "port")],
            {r: f"Arr, {r} out of 5." for r in RATINGS},
        )
        review = synthesizer.generate(make_request(voice="pirate", rating=2))
        assert not review.is_fallback
        assert review.text.endswith("Arr, 2 out of 5.")

    def test_registered_voice_missing_rating_falls_back(self, synthesizer):
        synthesizer.register_voice(
            VoiceProfile(name="terse", label="Terse", description="Short"),
            [],
            {5: "Go."},
        )
        assert not synthesizer.generate(make_request(voice="terse", rating=5)).is_fallback
        assert synthesizer.generate(make_request(voice="terse", rating=3)).is_fallback

    def test_duplicate_voice_rejected(self, synthesizer):
        with pytest.raises(ValueError):
            synthesizer.register_voice(VoiceProfile(name="friendly", label="F", description=""))

    def test_add_vocabulary(self, synthesizer):
        added = synthesizer.add_vocabulary("descriptors", "food", ["sublime"], "positive")
        assert added == 1
        assert "sublime" in synthesizer.vocabulary.descriptors["food"]["positive"]

    def test_engine_stats(self, synthesizer):
        stats = synthesizer.get_engine_stats()
        assert stats["voices"] == 4
        assert stats["vocabulary"]["total_words"] > 0
        assert stats["transitions"]["total_transitions"] > 0
        assert stats["narrative"]["arc_types"] == 5


# =============================================================================
# CONCURRENCY AND CONVENIENCE
# =============================================================================

class TestConcurrency:

    def test_parallel_calls_match_sequential(self, synthesizer):
        requests = [make_request(seed=s, highlights=HIGHLIGHTS) for s in range(12)]
        sequential = [synthesizer.generate(r).text for r in requests]
        with ThreadPoolExecutor(max_workers=4) as pool:
            parallel = list(pool.map(lambda r: synthesizer.generate(r).text, requests))
        assert parallel == sequential


class TestConvenience:

    def test_generate_review(self):
        review = generate_review("Lakeview Hotel", 5, highlights=["Great breakfast"], seed=3)
        assert "Lakeview Hotel" in review.text
        assert review.metadata.seed == 3

    def test_create_synthesizer(self):
        assert create_synthesizer(seed=1).seed == 1
