"""Genome-wide ordering of variants by contig rank in the reference FASTA.

Lexicographic contig order (chr1, chr10, chr2, ...) rarely matches the order of the
reference, so cross-contig comparisons go through an explicit name -> rank index built
once from the reference's contig list.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Union

from .errors import ContractViolation
from .models import ContigInfo, Variant

logger = logging.getLogger(__name__)


def map_contig_name_to_pos_in_fasta(contigs: Iterable[ContigInfo]) -> Dict[str, int]:
    """Map contig name to ``pos_in_fasta``. A repeated name keeps its last rank."""
    ranks: Dict[str, int] = {}
    for c in contigs:
        if c.name in ranks:
            logger.debug(
                "Contig %s listed twice; rank %d replaces %d", c.name, c.pos_in_fasta, ranks[c.name]
            )
        ranks[c.name] = c.pos_in_fasta
    return ranks


@dataclass(frozen=True)
class ContigOrderIndex:
    """Read-only contig name -> rank lookup."""

    ranks: Mapping[str, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ranks", MappingProxyType(dict(self.ranks)))

    @classmethod
    def from_contigs(cls, contigs: Iterable[ContigInfo]) -> "ContigOrderIndex":
        return cls(ranks=map_contig_name_to_pos_in_fasta(contigs))

    def rank(self, name: str) -> int:
        try:
            return self.ranks[name]
        except KeyError:
            raise ContractViolation(f"Contig '{name}' is not in the contig order index") from None

    def __contains__(self, name: object) -> bool:
        return name in self.ranks

    def __len__(self) -> int:
        return len(self.ranks)


ContigOrder = Union[ContigOrderIndex, Mapping[str, int]]


def _rank(contig_order: ContigOrder, name: str) -> int:
    if isinstance(contig_order, ContigOrderIndex):
        return contig_order.rank(name)
    if name not in contig_order:
        raise ContractViolation(f"Contig '{name}' is not in the contig order index")
    return contig_order[name]


def compare_variants(lhs: Variant, rhs: Variant, contig_order: ContigOrder) -> bool:
    """True if ``lhs`` strictly precedes ``rhs`` in genome order.

    Different contigs are ordered by rank alone. On the same contig only ``start`` is
    compared, so variants sharing a start are equivalent whatever their ends. This is a
    strict weak ordering and is safe for sorting.
    """
    if lhs.reference_name != rhs.reference_name:
        return _rank(contig_order, lhs.reference_name) < _rank(contig_order, rhs.reference_name)
    return lhs.start < rhs.start


def variant_sort_key(contig_order: ContigOrder) -> Callable[[Variant], Any]:
    def _cmp(a: Variant, b: Variant) -> int:
        if compare_variants(a, b, contig_order):
            return -1
        if compare_variants(b, a, contig_order):
            return 1
        return 0

    return functools.cmp_to_key(_cmp)


def sort_variants(variants: Iterable[Variant], contig_order: ContigOrder) -> List[Variant]:
    """Stable sort into genome order; equivalent variants keep their input order."""
    return sorted(variants, key=variant_sort_key(contig_order))
