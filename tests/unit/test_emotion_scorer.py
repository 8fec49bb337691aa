import pytest

from personabot.analysis import EmotionScoringEngine, tokenize
from personabot.domain.emotion import SCORED_EMOTIONS, EmotionCategory, IntensityBand


@pytest.fixture
def engine():
    return EmotionScoringEngine()


class TestScoring:
    def test_happy_and_excited_with_intensifier(self, engine):
        result = engine.analyze("I am extremely happy and excited!")

        assert result.primary_emotion in (EmotionCategory.JOY, EmotionCategory.EXCITEMENT)
        assert result.intensity.rank >= IntensityBand.HIGH.rank
        assert result.confidence > 0

    @pytest.mark.parametrize("text", ["", "   ", None, 42])
    def test_empty_or_non_text_is_neutral(self, engine, text):
        result = engine.analyze(text)

        assert result.primary_emotion == EmotionCategory.NEUTRAL
        assert result.confidence == 0.0
        assert all(v == 0.0 for v in result.category_scores.values())

    def test_intensifier_boosts_every_category(self, engine):
        result = engine.analyze("I am very sad")
        assert result.category_scores[EmotionCategory.JOY] == pytest.approx(0.2)
        assert result.category_scores[EmotionCategory.SADNESS] == pytest.approx(0.45)
        assert result.primary_emotion == EmotionCategory.SADNESS

    def test_intensifier_alone_leans_to_first_category(self, engine):
        result = engine.analyze("very")
        assert result.primary_emotion == EmotionCategory.JOY
        assert result.intensity == IntensityBand.MODERATE
        assert all(v == pytest.approx(0.2) for v in result.category_scores.values())

    def test_saturated_scores_tie_to_first_category(self, engine):
        result = engine.analyze("very very very very very sad")
        assert all(v == 1.0 for v in result.category_scores.values())
        assert result.primary_emotion == EmotionCategory.JOY

    def test_tie_goes_to_first_declared_category(self, engine):
        result = engine.analyze("happy sad")
        assert result.category_scores[EmotionCategory.JOY] == result.category_scores[EmotionCategory.SADNESS]
        assert result.primary_emotion == EmotionCategory.JOY

    def test_exact_token_match(self, engine):
        # "made" must not count as "mad"
        assert engine.analyze("I made dinner").primary_emotion == EmotionCategory.NEUTRAL

    def test_scores_are_clamped(self, engine):
        result = engine.analyze("very very very very very happy")
        assert result.category_scores[EmotionCategory.JOY] == 1.0
        assert result.intensity == IntensityBand.EXTREME
        assert result.confidence == 1.0

    def test_every_category_scored(self, engine):
        result = engine.analyze("calm and peaceful")
        assert set(result.category_scores) == set(SCORED_EMOTIONS)
        assert result.primary_emotion == EmotionCategory.CALM

    def test_deterministic(self, engine):
        a = engine.analyze("I'm so worried and anxious about tomorrow")
        b = engine.analyze("I'm so worried and anxious about tomorrow")
        assert (a.primary_emotion, a.intensity, a.category_scores) == (b.primary_emotion, b.intensity, b.category_scores)

    def test_score_returns_result(self, engine):
        result = engine.score("happy")
        assert result.is_ok()
        assert result.unwrap().primary_emotion == EmotionCategory.JOY


class TestIntensityBands:
    @pytest.mark.parametrize(
        "score,band",
        [
            (0.0, IntensityBand.LOW),
            (0.19, IntensityBand.LOW),
            (0.2, IntensityBand.MODERATE),
            (0.4, IntensityBand.HIGH),
            (0.6, IntensityBand.VERY_HIGH),
            (0.8, IntensityBand.EXTREME),
            (1.0, IntensityBand.EXTREME),
        ],
    )
    def test_thresholds(self, score, band):
        assert IntensityBand.from_score(score) == band

    def test_monotonic(self):
        ranks = [IntensityBand.from_score(i / 100).rank for i in range(101)]
        assert ranks == sorted(ranks)


class TestContextualFlags:
    def test_question_and_urgency(self, engine):
        flags = engine.analyze("Can you help me right now?").contextual_flags
        assert flags.question is True
        assert flags.urgency is True

    def test_uncertainty_phrase(self, engine):
        assert engine.analyze("I don't know what to do").contextual_flags.uncertainty is True

    def test_social_and_temporal(self, engine):
        flags = engine.analyze("We will work on it together tomorrow").contextual_flags
        assert flags.social_context == "collaborative"
        assert flags.temporal_context == "future"

    def test_defaults(self, engine):
        flags = engine.analyze("happy").contextual_flags
        assert (flags.question, flags.urgency, flags.uncertainty) == (False, False, False)
        assert flags.social_context == "individual"
        assert flags.temporal_context == "present"


class TestMoodIndicators:
    def test_energy_social_cognitive(self, engine):
        indicators = engine.analyze("tired and alone, my head feels foggy").mood_indicators
        assert indicators.energy == "low"
        assert indicators.social_mood == "introspective"
        assert indicators.cognitive_state == "confused"


def test_tokenize_strips_punctuation_and_apostrophes():
    assert tokenize("Hello, World! 'quoted' don't") == ["hello", "world", "quoted", "don't"]
