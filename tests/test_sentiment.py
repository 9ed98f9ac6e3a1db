import pytest

from comment_analyzer.domain.sentiment import (
    NEUTRAL_CONFIDENCE,
    KeywordPresenceScorer,
    LexicalSentimentScorer,
    parse_confidence,
    sentiment_from_remote_row,
)


def test_lexical_score_counts_matches():
    scorer = LexicalSentimentScorer(["good"], ["bad"])
    assert scorer.raw_score("good good bad") == 1
    assert scorer.raw_score("GOOD Good bad BAD bad") == -1


def test_normalized_score_is_clamped():
    scorer = LexicalSentimentScorer(["good"], ["bad"])
    # 1 / 3 tokens * 5 is above 1
    assert scorer.normalized_score("good good bad") == 1.0
    assert scorer.normalized_score("bad") == -1.0
    # 1 / 10 * 5
    assert scorer.normalized_score("good a b c d e f g h i") == pytest.approx(0.5)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "good",
        "bad bad bad bad",
        "good bad good bad good",
        "nothing to see here at all",
        "good " * 200,
        "bad " * 200 + "good",
    ],
)
def test_normalized_score_stays_in_bounds(text):
    scorer = LexicalSentimentScorer(["good"], ["bad"])
    assert -1.0 <= scorer.normalized_score(text) <= 1.0


def test_dashboard_lexicon_classification(lexical_scorer):
    positive = lexical_scorer.analyze("This is good and helpful")
    assert positive.sentiment == "positive"
    assert positive.score == 1.0
    assert positive.raw_score == 2

    negative = lexical_scorer.analyze("bad problem here")
    assert negative.sentiment == "negative"
    assert negative.score == -1.0

    neutral = lexical_scorer.analyze("The timeline for filing is next year")
    assert neutral.sentiment == "neutral"
    assert neutral.score == 0.0
    assert neutral.confidence == NEUTRAL_CONFIDENCE


def test_empty_text_is_neutral(lexical_scorer):
    result = lexical_scorer.analyze("")
    assert result.sentiment == "neutral"
    assert result.score == 0.0


def test_keyword_scorer_positive_hits():
    scorer = KeywordPresenceScorer(["great", "excellent", "benefit"], ["burden"])
    result = scorer.analyze("This bill is excellent and will benefit businesses greatly!")
    assert result.sentiment == "positive"
    assert result.confidence == pytest.approx(0.8)
    assert result.score == pytest.approx(0.9)
    assert result.source == "keyword"


def test_keyword_scorer_confidence_is_capped():
    scorer = KeywordPresenceScorer([], ["a", "b", "c", "d", "e", "f"])
    result = scorer.analyze("a b c d e f")
    assert result.sentiment == "negative"
    assert result.confidence == pytest.approx(0.9)
    assert result.score == pytest.approx(-0.95)


def test_keyword_scorer_neutral_is_deterministic():
    scorer = KeywordPresenceScorer(["support"], ["oppose"])
    first = scorer.analyze("I have mixed feelings about this amendment.")
    second = scorer.analyze("I have mixed feelings about this amendment.")
    assert first == second
    assert first.sentiment == "neutral"
    assert first.score == 0.0
    assert first.confidence == NEUTRAL_CONFIDENCE


@pytest.mark.parametrize(
    "raw, expected",
    [("87.5%", 0.875), ("100%", 1.0), (0.9, 0.9), (90, 0.9), ("abc", 0.0), (None, 0.0)],
)
def test_parse_confidence(raw, expected):
    assert parse_confidence(raw) == pytest.approx(expected)


def test_remote_row_mapping():
    pos = sentiment_from_remote_row("x", ["x", "Positive", "80%"])
    assert pos.sentiment == "positive"
    assert pos.confidence == pytest.approx(0.8)
    assert pos.score == pytest.approx(0.9)
    assert pos.source == "remote"

    neg = sentiment_from_remote_row("x", ["x", "NEGATIVE", "50.0%"])
    assert neg.sentiment == "negative"
    assert neg.score == pytest.approx(-0.75)

    neu = sentiment_from_remote_row("x", ["x", "neutral", "99%"])
    assert neu.score == 0.0

    unknown = sentiment_from_remote_row("x", ["x", "mixed"])
    assert unknown.sentiment == "neutral"
    assert unknown.confidence == 0.0
