"""
Unit tests for the Levenshtein distance.
"""

import pytest

from icm_lookup.distance import levenshtein_distance


@pytest.mark.parametrize("a, b, expected", [
    ("kitten", "sitting", 3),
    ("flaw", "lawn", 2),
    ("A000", "A001", 1),
    ("A000", "A0100", 1),
    ("A000", "I10", 3),
    ("0SRC0J9", "0SRD0J9", 1),
])
def test_known_distances(a, b, expected):
    """Test distances for known pairs"""
    assert levenshtein_distance(a, b) == expected


@pytest.mark.parametrize("a, b", [
    ("A000", "A0100"),
    ("kitten", "sitting"),
    ("", "E119"),
    ("0016070", "5A1955Z"),
])
def test_symmetric(a, b):
    """Test distance(a, b) == distance(b, a)"""
    assert levenshtein_distance(a, b) == levenshtein_distance(b, a)


def test_identity():
    """Test distance to self is zero"""
    assert levenshtein_distance("J45909", "J45909") == 0
    assert levenshtein_distance("", "") == 0


def test_empty_string():
    """Test distance from empty string is the length"""
    assert levenshtein_distance("", "0DTJ4ZZ") == 7
    assert levenshtein_distance("R531", "") == 4
