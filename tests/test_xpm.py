import pytest

from cubrender.xpm import XpmError, load_xpm, parse_xpm

SAMPLE = """/* XPM */
static char *img[] = {
"2 2 2 1",
"a c #FF0000",
"b c None",
"ab",
"ba"
};
"""


def test_parse_dimensions_and_pixels():
    image = parse_xpm(SAMPLE)
    assert (image.width, image.height) == (2, 2)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(1, 0) == 0
    assert image.get_pixel(0, 1) == 0
    assert image.get_pixel(1, 1) == 0xFF0000


def test_load_from_file(tmp_path):
    path = tmp_path / "t.xpm"
    path.write_text(SAMPLE)
    assert load_xpm(path).pixels == parse_xpm(SAMPLE).pixels


def test_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "missing.xpm")


def test_truncated():
    with pytest.raises(XpmError):
        parse_xpm('"2 2 1 1", "a c #000000", "aa"')


def test_undefined_pixel():
    with pytest.raises(XpmError):
        parse_xpm('"1 1 1 1", "a c #000000", "z"')


def test_no_data():
    with pytest.raises(XpmError):
        parse_xpm("nothing here")