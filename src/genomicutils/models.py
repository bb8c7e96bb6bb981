from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class Position:
    """A single 0-based locus on a contig, with strand."""

    reference_name: str
    position: int
    reverse_strand: bool = False


@dataclass(frozen=True)
class Range:
    """A 0-based half-open interval ``[start, end)`` on a contig.

    Attributes
    ----------
    reference_name:
        Contig name.
    start:
        First covered base (inclusive).
    end:
        One past the last covered base (exclusive). ``start == end`` is an empty range.
    """

    reference_name: str
    start: int
    end: int


@dataclass(frozen=True)
class ContigInfo:
    """A reference contig and its rank in the source FASTA."""

    name: str
    pos_in_fasta: int
    n_bases: int = 0


class CigarOp(Enum):
    # Values are the SAM/BAM integer op codes used by pysam cigartuples.
    ALIGNMENT_MATCH = 0
    INSERT = 1
    DELETE = 2
    SKIP = 3
    CLIP_SOFT = 4
    CLIP_HARD = 5
    PAD = 6
    SEQUENCE_MATCH = 7
    SEQUENCE_MISMATCH = 8


@dataclass(frozen=True)
class CigarUnit:
    operation: CigarOp
    operation_length: int


@dataclass(frozen=True)
class LinearAlignment:
    """Placement of a read on the reference.

    ``mapping_quality`` is None when the aligner did not report one (BAM MAPQ 255).
    """

    position: Position
    mapping_quality: Optional[int] = None
    cigar: Tuple[CigarUnit, ...] = ()


@dataclass(frozen=True)
class Read:
    """A sequenced read and its alignment flags.

    ``alignment`` is None for unaligned reads. ``number_reads`` is the number of reads
    in the fragment (1 for single-end, 2 for paired-end, 0 when unknown).
    """

    fragment_name: str = ""
    aligned_sequence: str = ""
    alignment: Optional[LinearAlignment] = None
    number_reads: int = 0
    proper_placement: bool = False
    duplicate_fragment: bool = False
    failed_vendor_quality_checks: bool = False
    secondary_alignment: bool = False
    supplementary_alignment: bool = False
    next_mate_position: Optional[Position] = None


@dataclass(frozen=True)
class ReadRequirements:
    """Which classes of reads a consumer is willing to keep.

    Everything defaults to the strict setting: only aligned, primary, properly placed,
    non-duplicate reads that passed vendor QC are kept.
    """

    keep_duplicates: bool = False
    keep_failed_vendor_quality_checks: bool = False
    keep_secondary_alignments: bool = False
    keep_supplementary_alignments: bool = False
    keep_improperly_placed: bool = False
    keep_unaligned: bool = False
    min_mapping_quality: Optional[int] = None


class ValueKind(Enum):
    INT = "int"
    NUMBER = "number"
    STRING = "string"


ScalarType = Union[int, float, str]


@dataclass(frozen=True)
class Value:
    """Tagged scalar annotation value; ``kind`` says which Python type ``data`` holds."""

    kind: ValueKind
    data: ScalarType


@dataclass(frozen=True)
class ListValue:
    values: Tuple[Value, ...] = ()


@dataclass(frozen=True)
class Variant:
    """A variant site. ``start``/``end`` are 0-based half-open like :class:`Range`."""

    reference_name: str
    start: int
    end: int
    reference_bases: str = ""
    alternate_bases: Tuple[str, ...] = ()
    names: Tuple[str, ...] = ()
    info: Mapping[str, ListValue] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class VariantCall:
    call_set_name: str = ""
    genotype: Tuple[int, ...] = ()
    info: Mapping[str, ListValue] = field(default_factory=dict, hash=False)
