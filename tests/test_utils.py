import pytest

from genomicutils.utils import unquote


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('"foo"', "foo"),
        ("'foo'", "foo"),
        ('"foo', '"foo'),
        ('foo"', 'foo"'),
        ("'foo", "'foo"),
        ("foo'", "foo'"),
        ("\"foo'", "\"foo'"),
        ("'foo\"", "'foo\""),
        ("", ""),
        ('"', '"'),
        ('""', ""),
        ('"""', '"'),
        ("'", "'"),
        ("''", ""),
        ("'''", "'"),
    ],
)
def test_unquote(raw: str, expected: str) -> None:
    assert unquote(raw) == expected
