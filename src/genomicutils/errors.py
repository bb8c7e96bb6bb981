"""Exception hierarchy.

Only caller bugs raise. A non-canonical base or a read failing its requirements is an
ordinary ``False`` result, never an exception.
"""

from __future__ import annotations


class GenomicUtilsError(Exception):
    """Base class for errors raised by genomicutils."""


class ContractViolation(GenomicUtilsError):
    """A precondition of a primitive was violated by the caller.

    Examples: an empty base sequence, a contig missing from the order index, or the
    extent of an unaligned read. These signal a bug upstream, not bad data.
    """


class InfoValueTypeError(ContractViolation, TypeError):
    """An info value was encoded or decoded as an unsupported / mismatched type."""
