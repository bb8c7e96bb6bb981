import itertools

import pytest

from genomicutils.coordinates import (
    compare_positions,
    compare_variant_positions,
    make_interval_str,
    make_position,
    make_range,
    position_interval_str,
    range_contains,
    range_interval_str,
    variant_position,
    variant_range,
)
from genomicutils.errors import ContractViolation
from genomicutils.models import Position, Range
from genomicutils.toy_data import make_variant


def test_make_position() -> None:
    assert make_position("chr1", 1) == Position("chr1", 1, False)
    assert make_position("chr2", 10, True) == Position("chr2", 10, True)
    with pytest.raises(ContractViolation):
        make_position("chr1", -1)


def test_make_range() -> None:
    assert make_range("chr1", 1, 10) == Range("chr1", 1, 10)
    assert make_range("chr2", 100, 1000) == Range("chr2", 100, 1000)
    with pytest.raises(ContractViolation):
        make_range("chr1", 10, 9)


def test_range_contains() -> None:
    outer = make_range("chr1", 1, 10)
    assert range_contains(outer, make_range("chr1", 2, 5))
    assert range_contains(outer, outer)
    assert not range_contains(outer, make_range("chr1", 1, 11))
    assert not range_contains(outer, make_range("chr1", 0, 10))
    assert not range_contains(outer, make_range("chr2", 2, 5))
    assert not range_contains(outer, make_range("chr1", 0, 5))
    assert not range_contains(outer, make_range("chr1", 8, 15))
    # Zero-length ranges.
    assert range_contains(outer, make_range("chr1", 1, 1))
    assert not range_contains(outer, make_range("chr1", 0, 0))
    assert range_contains(make_range("chr1", 10, 10), make_range("chr1", 10, 10))


def test_make_interval_str() -> None:
    assert make_interval_str("chr1", 1, 10) == "chr1:2-11"
    assert make_interval_str("chr2", 2, 20) == "chr2:3-21"
    assert make_interval_str("chr1", 1, 10, False) == "chr1:1-10"
    assert make_interval_str("chr2", 2, 20, False) == "chr2:2-20"
    assert (
        make_interval_str("chr3", 123456789101112, 123456789101113)
        == "chr3:123456789101113-123456789101114"
    )
    assert make_interval_str("chr2", 2, 2, True) == "chr2:3"
    assert make_interval_str("chr2", 2, 2, False) == "chr2:2"


def test_interval_str_overloads() -> None:
    assert position_interval_str(make_position("chr2", 2)) == "chr2:3"
    assert range_interval_str(make_range("chr2", 2, 2)) == "chr2:3"
    assert range_interval_str(make_range("chr2", 2, 3)) == "chr2:3-4"
    assert range_interval_str(make_range("chr2", 2, 3), base_one=False) == "chr2:2-3"


def test_compare_positions() -> None:
    p = make_position
    assert compare_positions(p("chr1", 1), p("chr1", 2)) < 0
    assert compare_positions(p("chr1", 1), p("chr1", 1)) == 0
    assert compare_positions(p("chr1", 2), p("chr1", 1)) > 0
    assert compare_positions(p("chr1", 2), p("chr2", 1)) < 0
    assert compare_positions(p("chr2", 1), p("chr1", 2)) > 0
    # Strand does not participate.
    assert compare_positions(p("chr1", 5, True), p("chr1", 5, False)) == 0


def test_compare_positions_is_total_order() -> None:
    positions = [make_position(c, x) for c in ["chr1", "chr10", "chr2"] for x in [0, 3, 7]]
    for a, b in itertools.product(positions, repeat=2):
        ab = compare_positions(a, b)
        assert ab == -compare_positions(b, a)
        assert (ab == 0) == (a == b)
    for a, b, c in itertools.product(positions, repeat=3):
        if compare_positions(a, b) < 0 and compare_positions(b, c) < 0:
            assert compare_positions(a, c) < 0


def test_variant_position_and_range() -> None:
    v1 = make_variant("chr1", 1, 10)
    v2 = make_variant("chr1", 1, 2)
    v4 = make_variant("chr2", 10, 20)

    assert variant_position(v1) == make_position("chr1", 1)
    assert variant_position(v2) == make_position("chr1", 1)
    assert variant_position(v4) == make_position("chr2", 10)

    assert variant_range(v1) == make_range("chr1", 1, 10)
    assert variant_range(v2) == make_range("chr1", 1, 2)
    assert variant_range(v4) == make_range("chr2", 10, 20)


def test_compare_variant_positions() -> None:
    v = make_variant
    assert compare_variant_positions(v("chr1", 1, 2), v("chr1", 2, 3)) < 0
    # Ends don't matter.
    assert compare_variant_positions(v("chr1", 1, 5), v("chr1", 2, 3)) < 0
    assert compare_variant_positions(v("chr1", 1, 2), v("chr1", 1, 2)) == 0
    assert compare_variant_positions(v("chr1", 2, 3), v("chr1", 1, 2)) > 0
    # reference_name matters more than position.
    assert compare_variant_positions(v("chr1", 2, 3), v("chr2", 1, 2)) < 0
    assert compare_variant_positions(v("chr2", 1, 2), v("chr1", 2, 3)) > 0
