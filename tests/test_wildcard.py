import pytest

from rediskit.lib.wildcard import compile_pattern


@pytest.mark.parametrize(
    "pattern, text, expected",
    [
        ("", "", True),
        ("a", "a", True),
        ("a", "b", False),
        ("a?", "ab", True),
        ("a?", "a", False),
        ("a?", "abb", False),
        ("a?", "bb", False),
        ("a*", "ab", True),
        ("a*", "a", True),
        ("a*", "abb", True),
        ("a*", "bb", False),
        ("a[ab[]", "ab", True),
        ("a[ab[]", "aa", True),
        ("a[ab[]", "a[", True),
        ("a[ab[]", "abb", False),
        ("a[ab[]", "bb", False),
        ("h[a-c]llo", "hallo", True),
        ("h[a-c]llo", "hbllo", True),
        ("h[a-c]llo", "hcllo", True),
        ("h[a-c]llo", "hdllo", False),
        ("h[a-c]llo", "hello", False),
        ("h[^ab]llo", "hallo", False),
        ("h[^ab]llo", "hbllo", False),
        ("h[^ab]llo", "hcllo", True),
        ("\\\\", "\\", True),
        ("\\*", "*", True),
        ("\\*", "a", False),
    ],
)
def test_wildcard(pattern, text, expected):
    assert compile_pattern(pattern).is_match(text) is expected


def test_empty_pattern_rejects_non_empty():
    assert compile_pattern("").is_match("a") is False


def test_star_matches_anything():
    p = compile_pattern("*")
    assert p.is_match("")
    assert p.is_match("anything at all")