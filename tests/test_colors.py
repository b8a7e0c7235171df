import pytest

from raycube.colors import COLORS, lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("black", 0x0),
        ("white", 0xFFFFFF),
        ("navy", 0x80),
        ("ghost white", 0xF8F8FF),
        ("lightgoldenrodyellow", 0xFAFAD2),
        ("gray50", 0x7F7F7F),
        ("light green", 0x90EE90),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_none_is_transparent():
    assert lookup_color("none") == -1


@pytest.mark.parametrize("name", ["SNOW", "Snow", "GhostWhite", "DARK RED"])
def test_lookup_ignores_case(name):
    assert lookup_color(name) == lookup_color(name.lower())


def test_first_entry_wins_for_duplicate_names():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_unknown_name_raises_key_error():
    with pytest.raises(KeyError):
        lookup_color("not a colour")


def test_empty_name_raises_key_error():
    with pytest.raises(KeyError):
        lookup_color("")


@pytest.mark.parametrize("level", range(0, 101))
def test_gray_and_grey_spellings_agree(level):
    assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_spaced_and_joined_names_agree():
    assert lookup_color("misty rose") == lookup_color("mistyrose")
    assert lookup_color("dodger blue") == lookup_color("dodgerblue")


def test_all_values_fit_in_24_bits_except_none():
    for name, value in COLORS.items():
        if name == "none":
            assert value == -1
        else:
            assert 0 <= value <= 0xFFFFFF


def test_table_is_read_only():
    with pytest.raises(TypeError):
        COLORS["snow"] = 0  # type: ignore[index]
    assert lookup_color("snow") == 0xFFFAFA