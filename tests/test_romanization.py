import pytest

from nepali_relay.romanization import normalize_romanized


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ramro xa", "ramro chha"),
        ("malaai xha", "malaai chha"),
        ("timi k gardai xau", "timi ke gardai chhau"),
        ("XA", "chha"),
        ("ma ghar jadai xu", "ma ghar jadai chhu"),
        ("uniharu aaudai xan", "uniharu aaudai chhan"),
        ("malai thaha xaina", "malai thaha chhaina"),
        ("ma ta jandina xainw", "ma ta jandina chhaina"),
        ("k xa ni", "ke chha ni"),
        ("ni", "ni"),
    ],
)
def test_normalize_rewrites_chat_spellings(raw, expected):
    assert normalize_romanized(raw) == expected


def test_normalize_rewrites_x_inside_words():
    assert normalize_romanized("xito aau") == "chhito aau"
    assert normalize_romanized("paxi") == "pachhi"


def test_normalize_keeps_other_words_untouched():
    assert normalize_romanized("mero nam milan ho") == "mero nam milan ho"
    # "k" is only rewritten as a whole word.
    assert normalize_romanized("khana khayau") == "khana khayau"


def test_normalize_leaves_words_glued_to_digits():
    assert normalize_romanized("xa2 k9") == "xa2 k9"
    assert normalize_romanized("k 9 xa") == "ke 9 chha"


def test_normalize_collapses_spaces_and_keeps_punctuation():
    assert normalize_romanized("  khana \t  khayau?\n") == "khana khayau?"
    assert normalize_romanized("k xa, 2 ota?") == "ke chha, 2 ota?"


def test_normalize_keeps_line_breaks():
    raw = "mero nam   milan ho  \n\n  timi k gardai xau\r\nramro xa"

    assert normalize_romanized(raw) == (
        "mero nam milan ho\n\ntimi ke gardai chhau\nramro chha"
    )


@pytest.mark.parametrize("raw", ["", "   ", "\n\t"])
def test_normalize_blank_input_returns_empty(raw):
    assert normalize_romanized(raw) == ""
