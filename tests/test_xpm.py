import pytest

from raycube.colors import lookup_color
from raycube.xpm import (
    TRANSPARENT,
    XpmError,
    convert_color,
    parse_color_spec,
    parse_xpm,
    read_xpm_file,
    split_words,
    strip_comments,
    xpm_to_image,
)

SAMPLE = [
    "3 2 3 1",
    "a c #ff0000",
    "b c blue",
    ". c None",
    "ab.",
    ".ba",
]


def pixels(image):
    return [[image.get_pixel(x, y) for x in range(image.width)] for y in range(image.height)]


def test_split_words_on_spaces_and_tabs():
    assert split_words("  one\ttwo   three \t") == ["one", "two", "three"]
    assert split_words(" \t ") == []


def test_strip_comments_keeps_length_and_quoted_text():
    text = '/* XPM */\n"a//b" // trailing\n"c /* not */"\n'
    result = strip_comments(text)
    assert len(result) == len(text)
    assert '"a//b"' in result
    assert '"c /* not */"' in result
    assert "XPM" not in result
    assert "trailing" not in result


def test_strip_comments_without_comments_is_identity():
    text = '"1 1 1 1",\n"a c red"'
    assert strip_comments(text) == text


def test_parse_color_spec_hex():
    assert parse_color_spec("#ff0000") == 0xFF0000
    assert parse_color_spec("#00ff00", "ignored") == 0x00FF00


def test_parse_color_spec_names():
    assert parse_color_spec("Red") == lookup_color("red")
    assert parse_color_spec("dark", "red") == lookup_color("dark red")
    assert parse_color_spec("None") == -1


def test_parse_color_spec_unknown_is_black():
    assert parse_color_spec("nosuchcolour") == 0


def test_convert_color_true_color_is_identity():
    assert convert_color(0x123456, 24, (16, 8, 8, 8, 0, 8)) == 0x123456


def test_convert_color_rgb565():
    shifts = (11, 5, 5, 6, 0, 5)
    assert convert_color(0xFFFFFF, 16, shifts) == 0xFFFF
    assert convert_color(0, 16, shifts) == 0


def test_parse_xpm_pixels():
    image = parse_xpm(SAMPLE)
    red = 0xFF0000
    blue = lookup_color("blue")
    assert (image.width, image.height) == (3, 2)
    assert pixels(image) == [[red, blue, TRANSPARENT], [TRANSPARENT, blue, red]]


def test_none_color_gives_transparent_pixel():
    image = parse_xpm(["1 1 1 1", "a c None", "a"])
    assert image.get_pixel(0, 0) == 0xFF000000


def test_xpm_to_image_matches_parse():
    assert pixels(xpm_to_image(SAMPLE)) == pixels(parse_xpm(SAMPLE))


def test_two_chars_per_pixel_later_definition_wins():
    data = ["2 1 2 2", "aa c red", "aa c blue", "aaaa"]
    image = parse_xpm(data)
    assert pixels(image) == [[lookup_color("blue"), lookup_color("blue")]]


def test_undefined_key_gives_black():
    image = parse_xpm(["2 1 1 1", "a c red", "az"])
    assert pixels(image) == [[lookup_color("red"), 0]]


@pytest.mark.parametrize(
    "data",
    [
        ["0 1 1 1", "a c red", "a"],
        ["1 1 1", "a c red", "a"],
        ["x 1 1 1", "a c red", "a"],
        ["1 1 1 1", "a s red", "a"],
        ["1 1 1 1", "a c", "a"],
        ["1 2 1 1", "a c red", "a"],
        [],
    ],
)
def test_invalid_data_raises(data):
    with pytest.raises(XpmError):
        parse_xpm(data)


def test_read_xpm_file(tmp_path):
    body = "/* XPM */\nstatic char *sample[] = {\n"
    body += ",\n".join(f'"{line}"' for line in SAMPLE)
    body += "\n// end\n};\n"
    path = tmp_path / "sample.xpm"
    path.write_text(body)
    assert pixels(read_xpm_file(path)) == pixels(xpm_to_image(SAMPLE))


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_xpm_file(tmp_path / "missing.xpm")