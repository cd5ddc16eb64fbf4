"""
Codons and the translation tables that decide which codons can initiate translation.

Residues are always read with the standard genetic code. Codons containing IUPAC ambiguity codes can be
translated when every base they could stand for gives the same residue.
"""
from enum import IntEnum
from typing import Optional

from Bio.Data.CodonTable import TranslationError
from Bio.Seq import translate

from hgvscantor.constants import gencode, UNKNOWN_AMINO_ACID
from hgvscantor.exc import InvalidCodonException
from hgvscantor.sequence.alphabet import Alphabet


class TranslationTable(IntEnum):
    """
    NCBI translation table numbers, see
    https://www.ncbi.nlm.nih.gov/Taxonomy/Utils/wprintgc.cgi?chapter=tgencodes

    Protein nomenclature is expressed against the standard code, but the set of initiator codons still depends
    on the table. ``DEFAULT`` only recognizes ``ATG``.
    """

    DEFAULT = 0
    STANDARD = 1
    PROKARYOTE = 11


class Codon:
    """A nucleotide triplet. Instances are interned, so two codons with the same bases are the same object."""

    __slots__ = ["_val"]
    _singletons_ = {}

    def __new__(cls, codon: str):
        bases = str(codon).upper()
        if bases not in cls._singletons_:
            cls._singletons_[bases] = super().__new__(cls)
        return cls._singletons_[bases]

    def __init__(self, codon: str):
        self._val = str(codon).upper()
        if len(self._val) != 3:
            raise InvalidCodonException(f"A codon has three bases, got '{self._val}'")
        if not Alphabet.NT_EXTENDED.contains(self._val):
            raise InvalidCodonException(f"Codon '{self._val}' contains non-nucleotide characters")

    def __eq__(self, other) -> bool:
        return other is self

    def __repr__(self) -> str:
        return f"<Codon.{self._val}: {self._val}>"

    def __str__(self) -> str:
        return self._val

    def __hash__(self) -> int:
        return hash(self._val)

    @property
    def value(self) -> str:
        return self._val

    def translate(self, strict: bool = True) -> str:
        """
        Translates this codon to a single-letter residue, ``*`` for stop codons.

        Parameters
        ----------
        strict
            If True, only codons made of A, C, G and T are translated. If False, codons with ambiguity codes are
            translated when the ambiguity does not affect the residue. Anything that cannot be translated
            becomes ``X``.
        """
        residue = gencode.get(self._val)
        if residue is not None:
            return residue
        if strict:
            return UNKNOWN_AMINO_ACID
        try:
            return translate(self._val)
        except TranslationError:
            return UNKNOWN_AMINO_ACID

    def is_start_codon_in_specific_translation_table(
        self, translation_table: Optional[TranslationTable] = TranslationTable.DEFAULT
    ) -> bool:
        """Whether this codon can initiate translation under ``translation_table``"""
        return self in START_CODONS_BY_TRANSLATION_TABLE[translation_table]


def is_triplet(length: int) -> bool:
    """Returns True if the length is a multiple of three."""
    return abs(length) % 3 == 0


START_CODONS_BY_TRANSLATION_TABLE = {
    TranslationTable.DEFAULT: frozenset({Codon("ATG")}),
    TranslationTable.STANDARD: frozenset({Codon("ATG"), Codon("TTG"), Codon("CTG")}),
    TranslationTable.PROKARYOTE: frozenset(
        {Codon("ATG"), Codon("TTG"), Codon("CTG"), Codon("ATT"), Codon("ATC"), Codon("ATA"), Codon("GTG")}
    ),
}
