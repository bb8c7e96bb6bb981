"""Canonical base checks.

A canonical base is an uppercase ``A``, ``C``, ``G`` or ``T`` (plus ``N`` in
:attr:`CanonicalBases.ACGTN` mode). Lowercase (soft-masked) bases and IUPAC ambiguity
codes are never canonical.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .errors import ContractViolation

_ACGT = frozenset("ACGT")
_ACGTN = frozenset("ACGTN")


class CanonicalBases(Enum):
    ACGT = "ACGT"
    ACGTN = "ACGTN"


def _alphabet(canonical: CanonicalBases) -> frozenset:
    return _ACGTN if canonical is CanonicalBases.ACGTN else _ACGT


def is_canonical_base(base: str, canonical: CanonicalBases = CanonicalBases.ACGT) -> bool:
    return base in _alphabet(canonical)


def find_non_canonical_base(
    bases: str, canonical: CanonicalBases = CanonicalBases.ACGT
) -> Optional[int]:
    """Return the index of the first non-canonical base in ``bases``, or None.

    Raises
    ------
    ContractViolation
        If ``bases`` is empty.
    """
    if not bases:
        raise ContractViolation("bases cannot be empty")
    alphabet = _alphabet(canonical)
    for i, b in enumerate(bases):
        if b not in alphabet:
            return i
    return None


def are_canonical_bases(bases: str, canonical: CanonicalBases = CanonicalBases.ACGT) -> bool:
    return find_non_canonical_base(bases, canonical) is None
