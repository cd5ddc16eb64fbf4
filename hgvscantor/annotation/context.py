"""
Per-transcript inputs of the protein nomenclature code.

A :class:`TranscriptChangeContext` describes one variant allele projected onto one transcript: where it falls on
the coding sequence and on the protein, which bases and residues it changes, and the coding-level HGVS name that
was computed upstream. :class:`VariantEffects` carries the consequence predicates that were decided upstream.

Both are immutable values. Functions that enrich a context, like
:func:`~hgvscantor.annotation.codons.assign_codons`, return a new instance.
"""
from dataclasses import dataclass, replace
from typing import Optional

from hgvscantor.sequence.alphabet import has_non_canonical_base


@dataclass(frozen=True)
class VariantEffects:
    """Consequence predicates of a variant allele on a transcript"""

    is_frameshift: bool = False
    is_stop_lost: bool = False
    is_stop_retained: bool = False
    is_start_lost: bool = False


@dataclass(frozen=True)
class TranscriptChangeContext:
    """
    A variant allele on a transcript.

    Protein and coding positions are 1-based and inclusive. Insertions are expressed with ``begin == end + 1``.
    Alleles are on the transcript strand; an empty string represents the absence of bases.
    """

    protein_begin: int
    protein_end: int
    coding_begin: int
    coding_end: int
    reference_allele: str = ""
    alternate_allele: str = ""
    reference_amino_acids: str = ""
    alternate_amino_acids: str = ""
    hgvs_coding_name: Optional[str] = None
    has_valid_cds_start: bool = True
    has_valid_cds_end: bool = True
    is_reference_call: bool = False
    reference_codon: Optional[str] = None
    alternate_codon: Optional[str] = None
    has_frameshift: bool = False

    @property
    def has_valid_cds(self) -> bool:
        return self.has_valid_cds_start and self.has_valid_cds_end

    @property
    def has_non_canonical_base(self) -> bool:
        """True if the transcript-level alternate allele contains anything other than A, C, G, T or a gap"""
        return has_non_canonical_base(self.alternate_allele)

    def with_codons(
        self, reference_codon: Optional[str], alternate_codon: Optional[str], has_frameshift: bool = False
    ) -> "TranscriptChangeContext":
        return replace(
            self, reference_codon=reference_codon, alternate_codon=alternate_codon, has_frameshift=has_frameshift
        )
