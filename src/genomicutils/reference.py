"""Indexed FASTA reference access.

Wraps :class:`pysam.FastaFile` behind a small surface: contig listing, contig lookup,
interval validation and base retrieval, with an explicit open/close lifecycle.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pysam

from .coordinates import range_interval_str
from .models import ContigInfo, Range

logger = logging.getLogger(__name__)


class FastaReference:
    """A FASTA reference with a ``.fai`` index (created by ``samtools faidx`` / ``pysam.faidx``).

    Use as a context manager, or call :meth:`open` and :meth:`close` explicitly.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._fasta: Optional[pysam.FastaFile] = None
        self._contigs: List[ContigInfo] = []
        self._by_name: Dict[str, ContigInfo] = {}

    def open(self) -> "FastaReference":
        if self._fasta is not None:
            return self
        fai = self.path.with_suffix(self.path.suffix + ".fai")
        if not fai.exists():
            raise ValueError(f"FASTA is not indexed. Run: samtools faidx {self.path}")
        self._fasta = pysam.FastaFile(str(self.path))
        self._contigs = [
            ContigInfo(name=name, pos_in_fasta=i, n_bases=int(length))
            for i, (name, length) in enumerate(zip(self._fasta.references, self._fasta.lengths))
        ]
        self._by_name = {c.name: c for c in self._contigs}
        logger.debug("Opened reference %s (%d contigs)", self.path, len(self._contigs))
        return self

    def close(self) -> None:
        if self._fasta is None:
            return
        self._fasta.close()
        self._fasta = None
        logger.debug("Closed reference %s", self.path)

    def __enter__(self) -> "FastaReference":
        return self.open()

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._fasta is not None

    def _require_open(self) -> pysam.FastaFile:
        if self._fasta is None:
            raise ValueError(f"Reference {self.path} is not open")
        return self._fasta

    @property
    def contigs(self) -> List[ContigInfo]:
        """Contigs in FASTA order; ``pos_in_fasta`` is the 0-based index."""
        self._require_open()
        return list(self._contigs)

    def has_contig(self, name: str) -> bool:
        self._require_open()
        return name in self._by_name

    def contig(self, name: str) -> ContigInfo:
        self._require_open()
        try:
            return self._by_name[name]
        except KeyError:
            raise ValueError(f"Unknown contig '{name}' in reference {self.path}") from None

    def is_valid_interval(self, rng: Range) -> bool:
        """True if ``rng`` lies on a known contig within ``[0, contig length]``."""
        self._require_open()
        info = self._by_name.get(rng.reference_name)
        if info is None:
            return False
        return 0 <= rng.start <= rng.end <= info.n_bases

    def get_bases(self, rng: Range) -> str:
        """Uppercased reference bases covered by ``rng``."""
        fasta = self._require_open()
        if not self.is_valid_interval(rng):
            raise ValueError(f"Invalid interval requested: {range_interval_str(rng)}")
        return fasta.fetch(rng.reference_name, rng.start, rng.end).upper()
