from __future__ import annotations

import logging
import time
from contextlib import ExitStack
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import numpy as np
import pysam
from tqdm import tqdm

from .models import ReadRequirements
from .pysam_adapters import read_from_pysam
from .reads import REJECTION_REASONS, read_rejection_reason

logger = logging.getLogger(__name__)

_MAX_MAPQ = 255


def filter_bam(
    *,
    bam_path: str | Path,
    requirements: ReadRequirements,
    out_bam: Optional[str | Path] = None,
    progress: bool = True,
) -> Dict[str, object]:
    """Apply ``requirements`` to every record of a BAM and return a summary dict.

    Records are visited in file order (unmapped reads included). If ``out_bam`` is given,
    passing records are written there with the input header.
    """
    t0 = time.time()

    counts: Dict[str, int] = {"reads_total": 0, "reads_kept": 0, "reads_rejected": 0}
    rejected: Dict[str, int] = {reason: 0 for reason in REJECTION_REASONS}
    kept_mapqs: List[int] = []

    with ExitStack() as stack:
        bam = stack.enter_context(pysam.AlignmentFile(str(bam_path), "rb"))
        out_fh: Optional[pysam.AlignmentFile] = None
        if out_bam is not None:
            out_fh = stack.enter_context(pysam.AlignmentFile(str(out_bam), "wb", template=bam))

        it: Iterable[pysam.AlignedSegment] = bam.fetch(until_eof=True)
        if progress:
            it = tqdm(it, unit="read", desc="Filtering reads")

        for segment in it:
            counts["reads_total"] += 1
            read = read_from_pysam(segment)
            reason = read_rejection_reason(read, requirements)
            if reason is not None:
                counts["reads_rejected"] += 1
                rejected[reason] += 1
                continue

            counts["reads_kept"] += 1
            if read.alignment is not None and read.alignment.mapping_quality is not None:
                kept_mapqs.append(read.alignment.mapping_quality)
            if out_fh is not None:
                out_fh.write(segment)

    mapq_counts = np.bincount(np.asarray(kept_mapqs, dtype=np.int64), minlength=_MAX_MAPQ)
    mapq_hist = {str(q): int(n) for q, n in enumerate(mapq_counts) if n > 0}

    dt = time.time() - t0
    logger.info(
        "Kept %d of %d reads from %s in %.2fs",
        counts["reads_kept"],
        counts["reads_total"],
        bam_path,
        dt,
    )

    return {
        "bam_path": str(bam_path),
        "out_bam": str(out_bam) if out_bam is not None else None,
        "requirements": asdict(requirements),
        "counts": counts,
        "rejected": rejected,
        "kept_mapq_hist": mapq_hist,
        "runtime_seconds": float(dt),
    }
