from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pysam

from .cigar import parse_cigar_units
from .coordinates import make_position
from .models import LinearAlignment, Read, Variant
from .utils import ensure_outdir, write_json

# FASTA order deliberately differs from lexicographic order (chr10 < chr2).
TOY_CONTIGS: Tuple[Tuple[str, int], ...] = (("chr2", 200), ("chr10", 120))


def make_read(
    chrom: str,
    start: int,
    bases: str,
    cigar: Sequence[str],
    *,
    mapping_quality: Optional[int] = 60,
    fragment_name: str = "read",
) -> Read:
    """Build an aligned single-end :class:`Read` from CIGAR tokens like ``["5H", "3M"]``."""
    return Read(
        fragment_name=fragment_name,
        aligned_sequence=bases,
        alignment=LinearAlignment(
            position=make_position(chrom, start),
            mapping_quality=mapping_quality,
            cigar=parse_cigar_units(cigar),
        ),
        number_reads=1,
    )


def make_variant(chrom: str, start: int, end: int) -> Variant:
    return Variant(reference_name=chrom, start=start, end=end)


def _toy_sequence(n: int, *, soft_mask: Optional[Tuple[int, int]] = None) -> str:
    seq = ("ACGTTGCA" * (n // 8 + 1))[:n]
    if soft_mask is not None:
        lo, hi = soft_mask
        seq = seq[:lo] + seq[lo:hi].lower() + seq[hi:]
    return seq


def _write_fasta(path: Path, contigs: Sequence[Tuple[str, str]]) -> None:
    lines: List[str] = []
    for name, seq in contigs:
        lines.append(f">{name}")
        for i in range(0, len(seq), 60):
            lines.append(seq[i : i + 60])
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _segment(
    name: str,
    *,
    flag: int,
    ref_id: int,
    start0: int,
    seq: str,
    cigar: Optional[List[Tuple[int, int]]],
    mapq: int = 60,
    mate_ref_id: int = -1,
    mate_start0: int = -1,
) -> pysam.AlignedSegment:
    a = pysam.AlignedSegment()
    a.query_name = name
    a.query_sequence = seq
    a.flag = flag
    a.reference_id = ref_id
    a.reference_start = start0
    a.mapping_quality = mapq
    if cigar is not None:
        a.cigartuples = cigar
    a.next_reference_id = mate_ref_id
    a.next_reference_start = mate_start0
    a.query_qualities = pysam.qualitystring_to_array("I" * len(seq))
    return a


def _toy_reads(seqs: Dict[str, str]) -> List[pysam.AlignedSegment]:
    chr2, chr10 = seqs["chr2"], seqs["chr10"]
    return [
        # Proper pair on chr2 (flags 99 / 147).
        _segment("pair1", flag=99, ref_id=0, start0=10, seq=chr2[10:60], cigar=[(0, 50)],
                 mate_ref_id=0, mate_start0=100),
        _segment("dup", flag=1024, ref_id=0, start0=20, seq=chr2[20:70], cigar=[(0, 50)]),
        _segment("secondary", flag=256, ref_id=0, start0=30, seq=chr2[30:80], cigar=[(0, 50)]),
        _segment("lowmapq", flag=0, ref_id=0, start0=40, seq=chr2[40:90], cigar=[(0, 50)], mapq=5),
        _segment("pair1", flag=147, ref_id=0, start0=100, seq=chr2[100:150], cigar=[(0, 50)],
                 mate_ref_id=0, mate_start0=10),
        # 5S40M2D5M: spans 47 reference bases.
        _segment("clipped", flag=0, ref_id=1, start0=5, seq=chr10[0:50].upper(),
                 cigar=[(4, 5), (0, 40), (2, 2), (0, 5)]),
        # Flagged proper, but the mate maps to chr2.
        _segment("chimeric", flag=67, ref_id=1, start0=60, seq=chr10[60:100].upper(),
                 cigar=[(0, 40)], mate_ref_id=0, mate_start0=150),
        _segment("unmapped", flag=4, ref_id=-1, start0=-1, seq="ACGT" * 8, cigar=None, mapq=0),
    ]


def _write_toy_vcf(path: Path, seqs: Dict[str, str]) -> None:
    header = pysam.VariantHeader()
    header.add_meta("fileformat", "VCFv4.2")
    for name, length in TOY_CONTIGS:
        header.contigs.add(name, length=length)
    header.info.add("DP", number=1, type="Integer", description="Total depth")
    header.info.add("AF", number="A", type="Float", description="Allele frequency")
    header.info.add("DB", number=0, type="Flag", description="Known site")
    header.info.add("SRC", number=1, type="String", description="Record source")

    # (contig, start0, stop0, alt, info); written out of genome order on purpose.
    records = [
        ("chr10", 30, 31, "G", {"DP": 12, "AF": (0.5,)}),
        ("chr2", 50, 51, "T", {"DP": 30, "AF": (0.25,), "DB": True}),
        ("chr2", 10, 13, None, {"DP": 8, "SRC": "toy"}),
        ("chr10", 5, 6, "C", {"DP": 20, "AF": (0.125,)}),
    ]
    with pysam.VariantFile(str(path), "w", header=header) as vcf:
        for contig, start0, stop0, alt, info in records:
            ref = seqs[contig][start0:stop0].upper()
            alleles = (ref, alt) if alt is not None else (ref, ref[0])
            rec = vcf.new_record(
                contig=contig,
                start=start0,
                stop=stop0,
                alleles=alleles,
                id=f"{contig}_{start0 + 1}",
                qual=50,
                filter="PASS",
            )
            for key, value in info.items():
                rec.info[key] = value
            vcf.write(rec)


def make_toy_data(*, outdir: str | Path) -> Dict[str, str]:
    """Create a tiny two-contig reference, BAM and VCF for demos/tests.

    The outputs include:
    - toy_ref.fa (+ .fai); chr10 carries a soft-masked (lowercase) stretch
    - reads.bam (+ .bai) with duplicate / secondary / low-MAPQ / clipped / chimeric /
      unmapped reads
    - variants.vcf, records not in genome order

    Returns
    -------
    dict
        Paths to the generated files.
    """
    outdir_p = ensure_outdir(outdir)

    seqs = {
        "chr2": _toy_sequence(200),
        "chr10": _toy_sequence(120, soft_mask=(20, 40)),
    }
    ref_fa = outdir_p / "toy_ref.fa"
    _write_fasta(ref_fa, [(name, seqs[name]) for name, _ in TOY_CONTIGS])
    pysam.faidx(str(ref_fa))

    bam_path = outdir_p / "reads.bam"
    header = {
        "HD": {"VN": "1.6", "SO": "coordinate"},
        "SQ": [{"SN": name, "LN": length} for name, length in TOY_CONTIGS],
    }
    with pysam.AlignmentFile(str(bam_path), "wb", header=header) as bam:
        for read in _toy_reads(seqs):
            bam.write(read)
    pysam.index(str(bam_path))

    vcf_path = outdir_p / "variants.vcf"
    _write_toy_vcf(vcf_path, seqs)

    summary = {
        "ref_fa": str(ref_fa),
        "reads_bam": str(bam_path),
        "variants_vcf": str(vcf_path),
        "outdir": str(outdir_p),
    }

    write_json(outdir_p / "toy_summary.json", summary)
    return summary
