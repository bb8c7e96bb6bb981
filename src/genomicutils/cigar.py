from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import CigarOp, CigarUnit

_OP_BY_CHAR = {
    "M": CigarOp.ALIGNMENT_MATCH,
    "I": CigarOp.INSERT,
    "D": CigarOp.DELETE,
    "N": CigarOp.SKIP,
    "S": CigarOp.CLIP_SOFT,
    "H": CigarOp.CLIP_HARD,
    "P": CigarOp.PAD,
    "=": CigarOp.SEQUENCE_MATCH,
    "X": CigarOp.SEQUENCE_MISMATCH,
}
_CHAR_BY_OP = {op: c for c, op in _OP_BY_CHAR.items()}

_REFERENCE_CONSUMING = frozenset(
    {
        CigarOp.ALIGNMENT_MATCH,
        CigarOp.DELETE,
        CigarOp.SKIP,
        CigarOp.SEQUENCE_MATCH,
        CigarOp.SEQUENCE_MISMATCH,
    }
)

_UNIT_RE = re.compile(r"(\d+)([MIDNSHP=X])")


def consumes_reference(op: CigarOp) -> bool:
    return op in _REFERENCE_CONSUMING


def reference_length(cigar: Iterable[CigarUnit]) -> int:
    """Number of reference bases spanned by an alignment with this CIGAR.

    Insertions, clips and padding contribute nothing.
    """
    return sum(u.operation_length for u in cigar if consumes_reference(u.operation))


def parse_cigar_units(tokens: Sequence[str]) -> Tuple[CigarUnit, ...]:
    """Parse one-operation tokens such as ``["5H", "1M", "3I"]``."""
    units: List[CigarUnit] = []
    for token in tokens:
        m = _UNIT_RE.fullmatch(token)
        if m is None:
            raise ValueError(f"Invalid CIGAR unit: {token!r}")
        units.append(CigarUnit(operation=_OP_BY_CHAR[m.group(2)], operation_length=int(m.group(1))))
    return tuple(units)


def parse_cigar_string(cigar: str) -> Tuple[CigarUnit, ...]:
    """Parse a SAM CIGAR string such as ``"5H1M3I4M"``. ``"*"`` and ``""`` give no units."""
    if cigar in ("", "*"):
        return ()
    tokens = [m.group(0) for m in _UNIT_RE.finditer(cigar)]
    if "".join(tokens) != cigar:
        raise ValueError(f"Invalid CIGAR string: {cigar!r}")
    return parse_cigar_units(tokens)


def cigar_to_string(cigar: Iterable[CigarUnit]) -> str:
    return "".join(f"{u.operation_length}{_CHAR_BY_OP[u.operation]}" for u in cigar)


def cigar_from_tuples(cigartuples: Optional[Iterable[Tuple[int, int]]]) -> Tuple[CigarUnit, ...]:
    """Convert pysam-style ``(op_code, length)`` tuples."""
    if cigartuples is None:
        return ()
    return tuple(CigarUnit(operation=CigarOp(op), operation_length=int(n)) for op, n in cigartuples)
