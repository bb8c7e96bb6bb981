import pytest

from genomicutils.contigs import (
    ContigOrderIndex,
    compare_variants,
    map_contig_name_to_pos_in_fasta,
    sort_variants,
)
from genomicutils.errors import ContractViolation
from genomicutils.models import ContigInfo
from genomicutils.toy_data import make_variant


def _contigs(names, ranks):
    return [ContigInfo(name=n, pos_in_fasta=r) for n, r in zip(names, ranks)]


def test_map_contig_name_to_pos_in_fasta() -> None:
    ranks = map_contig_name_to_pos_in_fasta(_contigs(["chr1", "chr10"], [1, 1000]))
    assert ranks == {"chr1": 1, "chr10": 1000}


def test_duplicate_contig_last_wins() -> None:
    ranks = map_contig_name_to_pos_in_fasta(_contigs(["chr1", "chr2", "chr1"], [0, 1, 2]))
    assert ranks == {"chr1": 2, "chr2": 1}


def test_order_index_is_read_only() -> None:
    order = ContigOrderIndex.from_contigs(_contigs(["chr1"], [0]))
    assert "chr1" in order
    assert len(order) == 1
    with pytest.raises(TypeError):
        order.ranks["chr2"] = 1  # type: ignore[index]


def test_same_contig_compares_start() -> None:
    order = map_contig_name_to_pos_in_fasta(_contigs(["xyz"], [1]))
    lhs = make_variant("xyz", 1, 2)
    rhs = make_variant("xyz", 3, 4)
    assert compare_variants(lhs, rhs, order)
    assert not compare_variants(rhs, lhs, order)
    assert not compare_variants(lhs, lhs, order)


def test_same_start_different_end_is_equivalent() -> None:
    order = ContigOrderIndex.from_contigs(_contigs(["xyz"], [1]))
    lhs = make_variant("xyz", 1, 10)
    rhs = make_variant("xyz", 1, 2)
    assert not compare_variants(lhs, rhs, order)
    assert not compare_variants(rhs, lhs, order)


def test_different_contigs_compare_by_rank_only() -> None:
    order = ContigOrderIndex.from_contigs(_contigs(["abc", "xyz"], [1, 1000]))
    lhs = make_variant("abc", 100, 101)
    rhs = make_variant("xyz", 1, 11)
    assert compare_variants(lhs, rhs, order)
    assert not compare_variants(rhs, lhs, order)

    # Rank, not name, decides.
    reversed_order = ContigOrderIndex.from_contigs(_contigs(["abc", "xyz"], [5, 0]))
    assert compare_variants(rhs, lhs, reversed_order)


def test_missing_contig_is_contract_violation() -> None:
    order = ContigOrderIndex.from_contigs(_contigs(["chr1"], [0]))
    with pytest.raises(ContractViolation):
        compare_variants(make_variant("chr1", 0, 1), make_variant("chrUn", 0, 1), order)
    with pytest.raises(ContractViolation):
        compare_variants(make_variant("chrUn", 0, 1), make_variant("chr1", 0, 1), dict(order.ranks))


def test_sort_variants_uses_fasta_order_and_is_stable() -> None:
    order = ContigOrderIndex.from_contigs(_contigs(["chr2", "chr10", "chrX"], [0, 1, 2]))
    variants = [
        make_variant("chrX", 5, 6),
        make_variant("chr10", 50, 51),
        make_variant("chr2", 30, 40),
        make_variant("chr2", 30, 31),
        make_variant("chr2", 3, 4),
    ]
    ordered = sort_variants(variants, order)
    assert [(v.reference_name, v.start, v.end) for v in ordered] == [
        ("chr2", 3, 4),
        ("chr2", 30, 40),
        ("chr2", 30, 31),
        ("chr10", 50, 51),
        ("chrX", 5, 6),
    ]
