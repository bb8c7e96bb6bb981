from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pysam

from . import __version__
from .contigs import ContigOrderIndex, sort_variants
from .coordinates import make_interval_str, range_interval_str, variant_range
from .errors import ContractViolation
from .filtering import filter_bam
from .models import ContigInfo, ReadRequirements, Variant
from .pysam_adapters import contig_infos_from_header, variant_from_pysam
from .reference import FastaReference
from .toy_data import make_toy_data
from .utils import ensure_outdir, write_json


def _setup_logging(verbosity: int, *, logfile: Optional[Path] = None) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    log_fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(level=level, format=log_fmt, stream=sys.stderr)

    if logfile is not None:
        logfile.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(logfile)
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(log_fmt))
        logging.getLogger().addHandler(fh)


def _path_exists(p: str) -> str:
    if not Path(p).exists():
        raise argparse.ArgumentTypeError(f"Path does not exist: {p}")
    return p


def _non_negative_int(s: str) -> int:
    v = int(s)
    if v < 0:
        raise argparse.ArgumentTypeError(f"Expected a non-negative integer, got {s}")
    return v


def _log_path(outdir: Path, name: str) -> Path:
    return outdir / "logs" / name


def _handle_error(err: Exception, *, log_path: Optional[Path] = None) -> int:
    sys.stderr.write(f"{err.__class__.__name__}: {err}\n")
    if log_path is not None:
        sys.stderr.write(f"See log: {log_path}\n")
    return 2


def read_requirements_from_args(args: argparse.Namespace) -> ReadRequirements:
    return ReadRequirements(
        keep_duplicates=bool(args.keep_duplicates),
        keep_failed_vendor_quality_checks=bool(args.keep_qcfail),
        keep_secondary_alignments=bool(args.keep_secondary),
        keep_supplementary_alignments=bool(args.keep_supplementary),
        keep_improperly_placed=bool(args.keep_improperly_placed),
        keep_unaligned=bool(args.keep_unaligned),
        min_mapping_quality=args.min_mapq,
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="genomicutils",
        description=(
            "genomicutils: genomic coordinate, CIGAR, read-filtering and variant-ordering utilities."
        ),
    )
    p.add_argument("--version", action="version", version=f"genomicutils {__version__}")

    sub = p.add_subparsers(dest="cmd", required=True)

    # -----------------
    # interval
    # -----------------
    i = sub.add_parser("interval", help="Print the display string for a 0-based interval.")
    i.add_argument("contig", help="Contig name.")
    i.add_argument("start", type=_non_negative_int, help="0-based start.")
    i.add_argument("end", type=_non_negative_int, help="0-based end.")
    i.add_argument(
        "--zero-based",
        action="store_true",
        help="Show the stored 0-based numbers instead of 1-based coordinates.",
    )

    # -----------------
    # contigs
    # -----------------
    c = sub.add_parser("contigs", help="List reference contigs with their rank and length.")
    c.add_argument("--ref", required=True, type=_path_exists, help="Indexed reference FASTA.")
    c.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v/-vv).")

    # -----------------
    # filter-reads
    # -----------------
    f = sub.add_parser(
        "filter-reads",
        help="Apply read requirements to a BAM and summarize kept/rejected reads.",
    )
    f.add_argument("--bam", required=True, type=_path_exists, help="Input BAM.")
    f.add_argument("--outdir", required=True, help="Output directory (summary.json, logs/).")
    f.add_argument("--out-bam", default=None, help="Optional BAM of reads that pass.")
    f.add_argument(
        "--min-mapq",
        type=_non_negative_int,
        default=None,
        help="Minimum mapping quality (reads without MAPQ always pass).",
    )
    f.add_argument("--keep-duplicates", action="store_true", help="Keep duplicate reads.")
    f.add_argument("--keep-qcfail", action="store_true", help="Keep reads failing vendor QC.")
    f.add_argument("--keep-secondary", action="store_true", help="Keep secondary alignments.")
    f.add_argument(
        "--keep-supplementary", action="store_true", help="Keep supplementary alignments."
    )
    f.add_argument(
        "--keep-improperly-placed",
        action="store_true",
        help="Keep paired reads that are not properly placed.",
    )
    f.add_argument("--keep-unaligned", action="store_true", help="Keep unaligned reads.")
    f.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    f.add_argument("--dry-run", action="store_true", help="Validate inputs and print planned outputs.")
    f.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v/-vv).")

    # -----------------
    # sort-variants
    # -----------------
    s = sub.add_parser(
        "sort-variants",
        help="Print VCF records in reference contig order as interval strings.",
    )
    s.add_argument("--vcf", required=True, type=_path_exists, help="Input VCF (.vcf/.vcf.gz).")
    s.add_argument(
        "--ref",
        default=None,
        type=_path_exists,
        help="Indexed reference FASTA defining contig order (default: VCF header order).",
    )
    s.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v/-vv).")

    # -----------------
    # make-toy-data
    # -----------------
    t = sub.add_parser(
        "make-toy-data",
        help="Generate a tiny reference, BAM, and VCF for demos/tests.",
    )
    t.add_argument("--outdir", required=True, help="Output directory for toy data.")
    t.add_argument("--dry-run", action="store_true", help="Validate paths without writing files.")

    return p


# -----------------
# Command handlers
# -----------------

def cmd_interval(args: argparse.Namespace) -> int:
    if args.end < args.start:
        return _handle_error(ValueError(f"end ({args.end}) must be >= start ({args.start})"))
    print(make_interval_str(args.contig, args.start, args.end, base_one=not args.zero_based))
    return 0


def cmd_contigs(args: argparse.Namespace) -> int:
    _setup_logging(args.verbose)
    try:
        with FastaReference(args.ref) as ref:
            for info in ref.contigs:
                print(f"{info.name}\t{info.pos_in_fasta}\t{info.n_bases}")
        return 0
    except Exception as e:
        return _handle_error(e)


def cmd_filter_reads(args: argparse.Namespace) -> int:
    outdir = Path(args.outdir).expanduser().resolve()
    log_path = _log_path(outdir, "filter-reads.log")
    _setup_logging(args.verbose, logfile=None if args.dry_run else log_path)

    logger = logging.getLogger("genomicutils")
    logger.info("genomicutils %s", __version__)

    try:
        requirements = read_requirements_from_args(args)

        if args.dry_run:
            print("Dry-run: inputs look OK.")
            print(f"Requirements: {requirements}")
            print("Planned outputs:")
            print(f"  summary.json -> {outdir / 'summary.json'}")
            if args.out_bam:
                print(f"  passing reads -> {args.out_bam}")
            return 0

        outdir = ensure_outdir(outdir)
        summary = filter_bam(
            bam_path=args.bam,
            requirements=requirements,
            out_bam=args.out_bam,
            progress=not bool(args.no_progress),
        )
        summary_path = outdir / "summary.json"
        write_json(summary_path, summary)
        print(str(summary_path))
        return 0
    except Exception as e:
        return _handle_error(e, log_path=log_path)


def _load_variants(vcf_path: str) -> tuple[List[Variant], List[ContigInfo]]:
    with pysam.VariantFile(vcf_path) as vcf:
        header_contigs = contig_infos_from_header(vcf.header)
        variants = [variant_from_pysam(rec) for rec in vcf]
    return variants, header_contigs


def cmd_sort_variants(args: argparse.Namespace) -> int:
    _setup_logging(args.verbose)
    logger = logging.getLogger("genomicutils")

    try:
        variants, contigs = _load_variants(args.vcf)
        if args.ref is not None:
            with FastaReference(args.ref) as ref:
                contigs = ref.contigs
        order = ContigOrderIndex.from_contigs(contigs)
        logger.info("Sorting %d variants over %d contigs", len(variants), len(order))

        try:
            ordered = sort_variants(variants, order)
        except ContractViolation as e:
            raise ContractViolation(f"{e}. Is the VCF from a different reference?") from e

        for v in ordered:
            name = ";".join(v.names) if v.names else "."
            print(f"{range_interval_str(variant_range(v))}\t{name}")
        return 0
    except Exception as e:
        return _handle_error(e)


def cmd_make_toy_data(args: argparse.Namespace) -> int:
    if args.dry_run:
        print(f"Dry-run: would write toy data to {Path(args.outdir).expanduser().resolve()}")
        return 0
    try:
        summary = make_toy_data(outdir=args.outdir)
        for key in sorted(summary):
            print(f"{key}\t{summary[key]}")
        return 0
    except Exception as e:
        return _handle_error(e)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.cmd == "interval":
        return cmd_interval(args)
    if args.cmd == "contigs":
        return cmd_contigs(args)
    if args.cmd == "filter-reads":
        return cmd_filter_reads(args)
    if args.cmd == "sort-variants":
        return cmd_sort_variants(args)
    if args.cmd == "make-toy-data":
        return cmd_make_toy_data(args)

    parser.error(f"Unknown command: {args.cmd}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
