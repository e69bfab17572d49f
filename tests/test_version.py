import pytest

from octobot.version import Version


def v(text):
    parsed = Version.parse(text)
    assert parsed is not None
    return parsed


def test_version_parse():
    assert str(v("1.2.3.4.5")) == "1.2.3.4.5"
    assert str(v("1.2.3.4")) == "1.2.3.4"
    assert str(v("1.2.3")) == "1.2.3"
    assert str(v("1.2")) == "1.2.0"
    assert str(v("1")) == "1.0.0"


@pytest.mark.parametrize("text", ["", "1..2", "a.b", "1.2-beta", "1.-2", " 1.2"])
def test_version_parse_invalid(text):
    assert Version.parse(text) is None


def test_version_parse_rejects_overflow():
    assert Version.parse("99999999999") is None


def test_version_equal():
    assert v("1.0") == v("1.0.0")
    assert not (v("1.0") == v("1.1"))


def test_version_not_equal():
    assert v("1.0") != v("2.0.0")
    assert not (v("1.0") != v("1.0.0"))


def test_version_less():
    assert v("1.0.0.0") < v("2.0.0.0")
    assert v("1.0.0.0") < v("1.1.0.0")
    assert v("1.0.0.0") < v("1.0.1.0")
    assert v("1.0.0.0") < v("1.0.0.1")
    assert not (v("2.0.0.0") < v("1.0.0.1"))


def test_version_less_mismatched_parts():
    assert v("1.0.0.0.0") == v("1.0.0.0")
    assert v("1.0.0.0.5") > v("1.0.0.0")
    assert v("1.0.0.0.0") < v("1.0.0.0.5")
    assert v("1.0.0.0.0.5") > v("1.0.0.0")


def test_version_less_or_equal():
    assert v("1.0.0.0") <= v("1.0.0.1")
    assert v("1.0.0.0") <= v("1.0.0.0")
    assert not (v("2.0.0.1") <= v("1.0.0.0"))


def test_version_greater():
    assert v("4.8") > v("4.1.2")
    assert not (v("4.8") > v("4.9"))


def test_version_greater_or_equal():
    assert v("4.8.1") >= v("4.8")
    assert v("4.8") >= v("4.8")
    assert not (v("4.8") >= v("4.9"))


def test_version_sort():
    versions = [v("1.2.0.0"), v("1.2.3.4"), v("1.2.3.0"), v("1.0.0.0")]
    assert sorted(versions) == [v("1.0.0.0"), v("1.2.0.0"), v("1.2.3.0"), v("1.2.3.4")]


def test_version_max():
    versions = [v("1.0.0.0"), v("2.0.0.0")]
    assert max(versions) == v("2.0.0.0")
    assert min(versions) == v("1.0.0.0")


def test_major_minor():
    version = v("3.4.0.1000")
    assert version.major() == 3
    assert version.minor() == 4


def test_equal_versions_hash_equal():
    assert hash(v("1.0")) == hash(v("1.0.0.0"))
    assert len({v("1.2"), v("1.2.0"), v("1.2.0.0")}) == 1


def test_str_round_trip():
    for text in ["1.2.3", "7.7.7.7", "0.0.0"]:
        assert str(v(str(v(text)))) == text