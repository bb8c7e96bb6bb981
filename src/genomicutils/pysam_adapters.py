"""Conversion of pysam records into genomicutils value types.

pysam is the only place file formats are parsed; everything downstream works on the
immutable records in :mod:`genomicutils.models`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import pysam

from .cigar import cigar_from_tuples
from .info import make_list_value
from .models import ContigInfo, LinearAlignment, ListValue, Position, Read, Variant

logger = logging.getLogger(__name__)

# MAPQ 255 means "not available" in SAM/BAM.
_MAPQ_UNAVAILABLE = 255


def read_from_pysam(segment: pysam.AlignedSegment) -> Read:
    """Convert a pysam AlignedSegment (with header) into a :class:`Read`."""
    alignment: Optional[LinearAlignment] = None
    if not segment.is_unmapped and segment.reference_name is not None:
        mapq = int(segment.mapping_quality)
        alignment = LinearAlignment(
            position=Position(
                reference_name=str(segment.reference_name),
                position=int(segment.reference_start),
                reverse_strand=bool(segment.is_reverse),
            ),
            mapping_quality=None if mapq == _MAPQ_UNAVAILABLE else mapq,
            cigar=cigar_from_tuples(segment.cigartuples),
        )

    mate: Optional[Position] = None
    if segment.is_paired and not segment.mate_is_unmapped and segment.next_reference_id >= 0:
        mate = Position(
            reference_name=str(segment.next_reference_name),
            position=int(segment.next_reference_start),
            reverse_strand=bool(segment.mate_is_reverse),
        )

    return Read(
        fragment_name=str(segment.query_name or ""),
        aligned_sequence=segment.query_sequence or "",
        alignment=alignment,
        number_reads=2 if segment.is_paired else 1,
        proper_placement=bool(segment.is_proper_pair),
        duplicate_fragment=bool(segment.is_duplicate),
        failed_vendor_quality_checks=bool(segment.is_qcfail),
        secondary_alignment=bool(segment.is_secondary),
        supplementary_alignment=bool(segment.is_supplementary),
        next_mate_position=mate,
    )


def _info_to_list_value(key: str, value: Any) -> Optional[ListValue]:
    if isinstance(value, bool):
        # Flag fields are present only when set.
        return make_list_value(1) if value else None
    if isinstance(value, (list, tuple)):
        if any(v is None for v in value):
            logger.debug("Skipping INFO/%s with missing elements: %r", key, value)
            return None
        return make_list_value(list(value))
    if value is None:
        return None
    return make_list_value(value)


def variant_from_pysam(record: pysam.VariantRecord) -> Variant:
    """Convert a pysam VariantRecord; ``start``/``stop`` are already 0-based half-open."""
    info: Dict[str, ListValue] = {}
    for key, value in record.info.items():
        lv = _info_to_list_value(key, value)
        if lv is not None:
            info[key] = lv

    names = tuple(record.id.split(";")) if record.id else ()
    return Variant(
        reference_name=str(record.contig),
        start=int(record.start),
        end=int(record.stop),
        reference_bases=record.ref or "",
        alternate_bases=tuple(record.alts or ()),
        names=names,
        info=info,
    )


def contig_infos_from_header(
    header: Union[pysam.AlignmentHeader, pysam.VariantHeader],
) -> List[ContigInfo]:
    """Contigs in header order, ranked from 0."""
    if isinstance(header, pysam.VariantHeader):
        return [
            ContigInfo(name=str(name), pos_in_fasta=i, n_bases=int(contig.length or 0))
            for i, (name, contig) in enumerate(header.contigs.items())
        ]
    return [
        ContigInfo(name=str(name), pos_in_fasta=i, n_bases=int(length))
        for i, (name, length) in enumerate(zip(header.references, header.lengths))
    ]
