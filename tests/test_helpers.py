import pytest

from pushover_client.helpers import ELLIPSIS, cut


@pytest.mark.parametrize(
    "value,max_len,trailing,want",
    [
        ("Oliver", 10, "", "Oliver"),
        ("Oliver", 5, ELLIPSIS, "Oliv…"),
        ("Olli", 5, ELLIPSIS, "Olli"),
        ("", 5, ELLIPSIS, ""),
        ("", 0, ELLIPSIS, ""),
        ("abcdef", 3, "", "abc"),
    ],
)
def test_cut(value, max_len, trailing, want):
    assert cut(value, max_len, trailing) == want


def test_cut_counts_code_points_not_bytes():
    value = "😀" * 10
    assert cut(value, 10, ELLIPSIS) == value
    assert cut(value + "x", 10, ELLIPSIS) == "😀" * 9 + ELLIPSIS


def test_cut_never_exceeds_max():
    for max_len in range(0, 8):
        assert len(cut("Hello world", max_len, ELLIPSIS)) <= max_len


def test_cut_with_marker_longer_than_max():
    assert cut("Hello", 2, "...") == ".."
