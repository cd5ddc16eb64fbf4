"""
Amino acid utilities used to build protein nomenclature.

This module translates nucleotide sequences, converts single-letter residues to their three-letter abbreviations,
removes residues shared between a reference and an alternate peptide, and normalizes ambiguous insertions and
deletions to their most 3' position.

All functions are pure and work on plain strings. Positions are 1-based protein positions, matching the
``start``/``end`` fields of :class:`~hgvscantor.annotation.hgvs_protein.ChangeNotation`.
"""
from typing import Optional, Tuple

from Bio.SeqUtils import seq3

from hgvscantor.constants import STOP_MARKER, STOP_ABBREVIATION, UNKNOWN_AMINO_ACID
from hgvscantor.gene.codon import Codon
from hgvscantor.sequence.alphabet import Alphabet


def translate_bases(bases: Optional[str], force_non_triplet: bool = False) -> Optional[str]:
    """
    Translates a nucleotide sequence with the standard genetic code.

    Parameters
    ----------
    bases
        Nucleotide sequence. Case-insensitive.
    force_non_triplet
        If True, a trailing partial codon is translated as ``X``. Otherwise a sequence whose length is not a
        multiple of three cannot be translated.

    Returns
    -------
    Optional[str]
        The translated residues, with stop codons represented by ``*``. ``None`` if there was nothing to
        translate or the sequence is not made of full codons and ``force_non_triplet`` is False.
    """
    if not bases:
        return None
    bases = bases.upper()
    remainder = len(bases) % 3
    if remainder and not force_non_triplet:
        return None

    residues = []
    for i in range(0, len(bases) - remainder, 3):
        codon_str = bases[i : i + 3]
        if not Alphabet.NT_EXTENDED.contains(codon_str):
            residues.append(UNKNOWN_AMINO_ACID)
            continue
        residues.append(Codon(codon_str).translate(strict=False))
    if remainder:
        residues.append(UNKNOWN_AMINO_ACID)
    return "".join(residues)


def get_abbreviations(residues: Optional[str]) -> str:
    """Converts single-letter residues to concatenated three-letter abbreviations, e.g. ``KA*`` -> ``LysAlaTer``"""
    if not residues:
        return ""
    return seq3(residues, custom_map={STOP_MARKER: STOP_ABBREVIATION})


def first_amino_acid3(abbreviation: Optional[str]) -> str:
    """First three-letter abbreviation of a string of abbreviations"""
    if not abbreviation:
        return ""
    return abbreviation[:3]


def last_amino_acid3(abbreviation: Optional[str]) -> str:
    """Last three-letter abbreviation of a string of abbreviations"""
    if not abbreviation:
        return ""
    return abbreviation[-3:]


def remove_prefix_and_suffix(reference: str, alternate: str, start: int, end: int) -> Tuple[str, str, int, int]:
    """
    Removes residues shared at the beginning and then at the end of the reference and alternate peptides.

    Each residue removed from the front moves ``start`` one position downstream; each residue removed from the
    back moves ``end`` one position upstream. For an insertion this can leave ``start == end + 1``, which marks
    the gap between ``end`` and ``start`` as the insertion point.

    Returns
    -------
    Tuple[str, str, int, int]
        The trimmed reference, trimmed alternate, adjusted start and adjusted end.
    """
    reference = reference or ""
    alternate = alternate or ""

    prefix_len = 0
    max_prefix = min(len(reference), len(alternate))
    while prefix_len < max_prefix and reference[prefix_len] == alternate[prefix_len]:
        prefix_len += 1
    reference = reference[prefix_len:]
    alternate = alternate[prefix_len:]
    start += prefix_len

    suffix_len = 0
    max_suffix = min(len(reference), len(alternate))
    while suffix_len < max_suffix and reference[-1 - suffix_len] == alternate[-1 - suffix_len]:
        suffix_len += 1
    if suffix_len:
        reference = reference[:-suffix_len]
        alternate = alternate[:-suffix_len]
        end -= suffix_len

    return reference, alternate, start, end


def rotate_3prime(residues: str, start: int, end: int, peptide: str) -> Tuple[str, int, int]:
    """
    Shifts an inserted or deleted window of residues as far downstream as it can go while describing the same
    protein.

    For a deletion ``residues`` are the deleted reference residues occupying ``start..end``. For an insertion they
    are the inserted residues, placed between ``end`` and ``start``. In both cases the peptide downstream of
    ``end`` is what the window can slide into.

    Returns
    -------
    Tuple[str, int, int]
        The rotated residues and the shifted start and end positions.
    """
    if not residues:
        return residues, start, end

    downstream = peptide[end:] if 0 <= end < len(peptide) else ""
    combined = residues + downstream
    window_len = len(residues)

    shift = 0
    while shift + window_len < len(combined) and combined[shift] == combined[shift + window_len]:
        shift += 1

    if shift == 0:
        return residues, start, end
    return combined[shift : shift + window_len], start + shift, end + shift
