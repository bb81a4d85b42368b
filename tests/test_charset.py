import pytest

from ringkit.charset import Charset

NAMES = ["UTF-8", "GB2312", "GBK", "GB18030", "Big5", "Unicode", "ISO-8859-1"]


@pytest.mark.parametrize(
    "charset, expected",
    [
        (Charset.UTF8, "UTF-8"),
        (Charset.GB2312, "GB2312"),
        (Charset.GBK, "GBK"),
        (Charset.GB18030, "GB18030"),
        (Charset.BIG5, "Big5"),
        (Charset.UNICODE, "Unicode"),
        (Charset.ISO8859_1, "ISO-8859-1"),
    ],
)
def test_str_is_display_name(charset, expected):
    assert str(charset) == expected


@pytest.mark.parametrize("name", NAMES)
def test_lookup_by_display_name(name):
    assert str(Charset(name)) == name


def test_lookup_by_name_round_trip():
    for charset in Charset:
        assert Charset(str(charset)) is charset


def test_names_are_distinct():
    members = {Charset(name) for name in NAMES}
    assert len(members) == len(NAMES)
    assert {str(member) for member in members} == set(NAMES)


def test_unknown_name_rejected():
    with pytest.raises(ValueError):
        Charset("EBCDIC")