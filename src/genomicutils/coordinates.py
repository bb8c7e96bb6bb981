"""Position / Range construction, ordering and display.

Coordinates are 0-based throughout. Ranges are half-open ``[start, end)``, the same
convention as :class:`~genomicutils.models.Variant`, so a variant's start/end are used
verbatim when building its range.
"""

from __future__ import annotations

from .errors import ContractViolation
from .models import Position, Range, Variant


def make_position(reference_name: str, position: int, reverse_strand: bool = False) -> Position:
    if position < 0:
        raise ContractViolation(f"Invalid position {reference_name}:{position}")
    return Position(reference_name=reference_name, position=position, reverse_strand=reverse_strand)


def make_range(reference_name: str, start: int, end: int) -> Range:
    if start < 0 or end < start:
        raise ContractViolation(f"Invalid range {reference_name}:[{start}, {end})")
    return Range(reference_name=reference_name, start=start, end=end)


def variant_position(variant: Variant) -> Position:
    """Position of the variant's start; ``end`` is ignored."""
    return make_position(variant.reference_name, variant.start)


def variant_range(variant: Variant) -> Range:
    return make_range(variant.reference_name, variant.start, variant.end)


def compare_positions(a: Position, b: Position) -> int:
    """Three-way compare by reference_name, then position. Strand is not considered."""
    if a.reference_name != b.reference_name:
        return -1 if a.reference_name < b.reference_name else 1
    if a.position != b.position:
        return -1 if a.position < b.position else 1
    return 0


def compare_variant_positions(a: Variant, b: Variant) -> int:
    return compare_positions(variant_position(a), variant_position(b))


def range_contains(outer: Range, inner: Range) -> bool:
    """True if ``inner`` lies entirely within ``outer`` on the same contig.

    A range contains itself, and empty ranges are contained when they fall inside the
    bounds of ``outer``.
    """
    return (
        outer.reference_name == inner.reference_name
        and outer.start <= inner.start
        and inner.end <= outer.end
    )


def make_interval_str(reference_name: str, start: int, end: int, base_one: bool = True) -> str:
    """Format an interval as ``contig:lo-hi`` or, when ``start == end``, ``contig:lo``.

    With ``base_one`` (the default) both stored 0-based numbers are shown 1-based.
    This string is used in logs and reports and must stay stable.
    """
    offset = 1 if base_one else 0
    lo = start + offset
    if start == end:
        return f"{reference_name}:{lo}"
    return f"{reference_name}:{lo}-{end + offset}"


def position_interval_str(position: Position, base_one: bool = True) -> str:
    return make_interval_str(position.reference_name, position.position, position.position, base_one)


def range_interval_str(rng: Range, base_one: bool = True) -> str:
    return make_interval_str(rng.reference_name, rng.start, rng.end, base_one)
