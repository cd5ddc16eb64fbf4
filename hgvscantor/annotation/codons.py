"""
Assigns reference and alternate codons to a :class:`~hgvscantor.annotation.context.TranscriptChangeContext`.

The codons are the changed bases padded with the unchanged bases of the affected codons, the padding in lower case:

.. code-block:: none

    c.5C>T on ATG ACG ...   ->   aCg / aTg

Padding that would run past the end of the translatable sequence is shortened to what is available; in that
case the alleles are allowed to leave a partial trailing codon without being reported as a frameshift. The
start of the transcript gets no such tolerance.
"""
import logging

from hgvscantor.annotation.context import TranscriptChangeContext
from hgvscantor.gene.codon import is_triplet
from hgvscantor.gene.transcript import AbstractTranscript

logger = logging.getLogger(__name__)


def _clean_allele(allele: str) -> str:
    return (allele or "").replace("-", "")


def _get_codon(allele: str, prefix: str, suffix: str) -> str:
    """Returns the codon string consisting of the prefix and suffix bases flanking the allele bases"""
    if not prefix and not suffix:
        return allele
    return prefix + allele + suffix


def _is_frameshift(allele: str, prefix: str, suffix: str, at_tail_end: bool) -> bool:
    # at the tail end a partial codon is tolerated
    return not at_tail_end and not is_triplet(len(prefix) + len(allele) + len(suffix))


def assign_codons(context: TranscriptChangeContext, transcript: AbstractTranscript) -> TranscriptChangeContext:
    """
    Returns a copy of ``context`` with reference codon, alternate codon and frameshift flag set.

    If the CDS boundaries of the context are not valid, the codons are cleared and nothing else happens.
    """
    if not context.has_valid_cds:
        logger.debug(f"CDS boundaries are not valid for {context.hgvs_coding_name}, clearing codons")
        return context.with_codons(None, None)

    amino_acid_start = context.protein_begin * 3 - 2
    amino_acid_end = context.protein_end * 3

    prefix_len = context.coding_begin - amino_acid_start
    suffix_len = amino_acid_end - context.coding_end

    sequence = transcript.translateable_sequence
    prefix_start = amino_acid_start - 1
    suffix_start = amino_acid_end - suffix_len

    at_tail_end = False
    max_suffix_len = len(sequence) - suffix_start
    if suffix_len > max_suffix_len:
        suffix_len = max_suffix_len
        at_tail_end = True

    prefix_start = max(prefix_start, 0)
    suffix_start = max(suffix_start, 0)
    prefix_len = max(prefix_len, 0)
    suffix_len = max(suffix_len, 0)

    if prefix_start + prefix_len < len(sequence):
        prefix = sequence[prefix_start : prefix_start + prefix_len].lower()
    else:
        prefix = ""
    suffix = sequence[suffix_start : suffix_start + suffix_len].lower() if suffix_len > 0 else ""

    reference_allele = _clean_allele(context.reference_allele)
    alternate_allele = _clean_allele(context.alternate_allele)

    has_frameshift = _is_frameshift(reference_allele, prefix, suffix, at_tail_end) or _is_frameshift(
        alternate_allele, prefix, suffix, at_tail_end
    )

    return context.with_codons(
        _get_codon(reference_allele, prefix, suffix),
        _get_codon(alternate_allele, prefix, suffix),
        has_frameshift,
    )
