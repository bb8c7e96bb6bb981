"""genomicutils: coordinate, CIGAR, read-filtering and annotation primitives for genomics tooling.

Most callers import from the submodules directly:

    from genomicutils.reads import read_satisfies_requirements
    from genomicutils.coordinates import make_interval_str
    from genomicutils.bases import are_canonical_bases

"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
