from processing.keyword_classifier import (
    DEFAULT_GENRE,
    DEFAULT_TONE,
    GENRE_KEYWORDS,
    TONE_KEYWORDS,
    classify,
    detect_genre,
    detect_tone,
    score_categories,
)


def test_detect_genre_fantasy_keywords():
    assert detect_genre("Dragon-rider Kara faces the ancient curse") == "Fantasy"


def test_detect_genre_and_tone_defaults_on_empty_text():
    assert detect_genre("") == DEFAULT_GENRE == "Drama"
    assert detect_tone("") == DEFAULT_TONE == "Neutral"


def test_detect_genre_is_case_insensitive():
    assert detect_genre("THE DRAGON AWOKE") == "Fantasy"


def test_tie_goes_to_first_declared_genre():
    # Fantasy ("dragon") and Horror ("blood") both score 1.
    assert detect_genre("dragon blood") == "Fantasy"
    # Horror ("ghost") is declared before Romance ("love").
    assert detect_genre("ghost love") == "Horror"


def test_adding_keyword_occurrence_can_flip_the_winner():
    text = "the ghost and the love letter"
    assert detect_genre(text) == "Horror"
    assert detect_genre(text + " and a kiss") == "Romance"


def test_scores_count_distinct_keywords():
    assert score_categories("dragon", GENRE_KEYWORDS)["Fantasy"] == 1
    assert score_categories("dragon and another dragon", GENRE_KEYWORDS)["Fantasy"] == 1
    assert score_categories("a dragon and a wizard", GENRE_KEYWORDS)["Fantasy"] == 2


def test_repeated_keyword_does_not_outweigh_distinct_cues():
    assert detect_genre("the robot robot robot met a dragon and a wizard") == "Fantasy"


def test_scores_never_decrease_when_keyword_added():
    base = "a quiet village on the edge of the wood"
    for genre, keywords in GENRE_KEYWORDS.items():
        before = score_categories(base, GENRE_KEYWORDS)[genre]
        after = score_categories(f"{base} {keywords[0]}", GENRE_KEYWORDS)[genre]
        assert after > before


def test_detect_tone_lighthearted():
    assert detect_tone("She smiled and laughed in the bright warm sun") == "Lighthearted"


def test_detect_tone_dark():
    assert detect_tone("Grim despair settled over the sinister town") == "Dark"


def test_classify_with_custom_table_keeps_declaration_order():
    table = {"First": ("alpha",), "Second": ("beta",)}
    assert classify("beta alpha", table, "None") == "First"
    assert classify("beta beta alpha", table, "None") == "First"
    assert classify("beta", table, "None") == "Second"
    assert classify("gamma", table, "None") == "None"


def test_tone_table_order():
    assert list(TONE_KEYWORDS) == [
        "Dark",
        "Suspenseful",
        "Emotional",
        "Epic",
        "Lighthearted",
    ]
