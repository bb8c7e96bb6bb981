from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from .cigar import reference_length
from .coordinates import make_range
from .errors import ContractViolation
from .models import LinearAlignment, Range, Read, ReadRequirements

logger = logging.getLogger(__name__)

REJECT_UNALIGNED = "unaligned"
REJECT_DUPLICATE = "duplicate"
REJECT_FAILED_VENDOR_QC = "failed_vendor_qc"
REJECT_SECONDARY = "secondary"
REJECT_SUPPLEMENTARY = "supplementary"
REJECT_IMPROPERLY_PLACED = "improperly_placed"
REJECT_LOW_MAPPING_QUALITY = "low_mapping_quality"

REJECTION_REASONS = (
    REJECT_UNALIGNED,
    REJECT_DUPLICATE,
    REJECT_FAILED_VENDOR_QC,
    REJECT_SECONDARY,
    REJECT_SUPPLEMENTARY,
    REJECT_IMPROPERLY_PLACED,
    REJECT_LOW_MAPPING_QUALITY,
)


def _require_alignment(read: Read) -> LinearAlignment:
    if read.alignment is None:
        raise ContractViolation(f"Read '{read.fragment_name}' is not aligned")
    return read.alignment


def aligned_contig(read: Read) -> str:
    """Contig the read is aligned to, or ``""`` for unaligned reads."""
    if read.alignment is None:
        return ""
    return read.alignment.position.reference_name


def read_start(read: Read) -> int:
    """0-based reference start of the alignment.

    Leading clips are already accounted for in the alignment position.
    """
    return _require_alignment(read).position.position


def read_end(read: Read) -> int:
    """0-based exclusive reference end: start plus the bases consumed by M/D/N/=/X ops."""
    aln = _require_alignment(read)
    return aln.position.position + reference_length(aln.cigar)


def read_range(read: Read) -> Range:
    aln = _require_alignment(read)
    return make_range(aln.position.reference_name, read_start(read), read_end(read))


def is_read_properly_placed(read: Read) -> bool:
    """Whether a read counts as properly placed for filtering.

    Unpaired and unaligned reads are always properly placed. A paired read needs its
    proper-placement flag set and, if its mate is placed, the mate on the same contig.
    """
    if read.number_reads <= 1 or read.alignment is None:
        return True
    if not read.proper_placement:
        return False
    mate = read.next_mate_position
    return mate is None or mate.reference_name == read.alignment.position.reference_name


def read_rejection_reason(read: Read, requirements: ReadRequirements) -> Optional[str]:
    """Name of the first requirement ``read`` fails, or None if it passes them all.

    Unaligned reads are decided by ``keep_unaligned`` alone. A read without a reported
    mapping quality is never rejected by ``min_mapping_quality``.
    """
    if read.alignment is None:
        return None if requirements.keep_unaligned else REJECT_UNALIGNED
    if read.duplicate_fragment and not requirements.keep_duplicates:
        return REJECT_DUPLICATE
    if read.failed_vendor_quality_checks and not requirements.keep_failed_vendor_quality_checks:
        return REJECT_FAILED_VENDOR_QC
    if read.secondary_alignment and not requirements.keep_secondary_alignments:
        return REJECT_SECONDARY
    if read.supplementary_alignment and not requirements.keep_supplementary_alignments:
        return REJECT_SUPPLEMENTARY
    if not requirements.keep_improperly_placed and not is_read_properly_placed(read):
        return REJECT_IMPROPERLY_PLACED

    min_mapq = requirements.min_mapping_quality
    mapq = read.alignment.mapping_quality
    if min_mapq is not None and mapq is not None and mapq < min_mapq:
        return REJECT_LOW_MAPPING_QUALITY
    return None


def read_satisfies_requirements(read: Read, requirements: ReadRequirements) -> bool:
    """Return True if ``read`` passes every filter in ``requirements``."""
    return read_rejection_reason(read, requirements) is None


def filter_reads(reads: Iterable[Read], requirements: ReadRequirements) -> Iterator[Read]:
    """Yield the reads that satisfy ``requirements``, preserving input order."""
    n_in = 0
    n_out = 0
    for read in reads:
        n_in += 1
        if read_satisfies_requirements(read, requirements):
            n_out += 1
            yield read
    logger.debug("filter_reads kept %d of %d reads", n_out, n_in)
