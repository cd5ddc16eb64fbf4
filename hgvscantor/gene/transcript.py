"""
Transcripts as seen by the protein nomenclature code.

The annotation core never loads transcripts itself. It only needs a handful of read-only accessors, which are
described by :class:`AbstractTranscript`. :class:`Transcript` is a plain sequence-backed implementation that is
suitable for callers that already hold the coding sequence in memory.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from methodtools import lru_cache

from hgvscantor.constants import STOP_MARKER
from hgvscantor.gene.codon import Codon, TranslationTable

logger = logging.getLogger(__name__)


class AbstractTranscript(ABC):
    """Read-only transcript accessors consumed by the codon assigner and the protein notation builder"""

    # Protein identifier, without version
    protein_id: str

    # Protein version, may be None
    protein_version: Optional[str]

    @property
    @abstractmethod
    def peptide(self) -> str:
        """Translated peptide, without a trailing stop marker"""

    @property
    @abstractmethod
    def translateable_sequence(self) -> str:
        """Coding sequence in transcription direction, starting at the first base of the start codon"""

    @abstractmethod
    def get_alternate_cds(self, coding_begin: int, coding_end: int, alternate_allele: str) -> Optional[str]:
        """Coding sequence with the alternate allele spliced over the 1-based inclusive range
        [coding_begin, coding_end], followed by the downstream (3') context."""

    @property
    def versioned_protein_id(self) -> str:
        if not self.protein_version:
            return self.protein_id
        return f"{self.protein_id}.{self.protein_version}"


class Transcript(AbstractTranscript):
    """
    A transcript defined by its coding sequence and the sequence downstream of it.

    The ``coding_sequence`` should include the stop codon when the transcript has one; ``three_prime_utr``
    supplies the context that is read through when a variant removes the stop or shifts the frame.
    """

    def __init__(
        self,
        coding_sequence: str,
        three_prime_utr: Optional[str] = "",
        protein_id: Optional[str] = None,
        protein_version: Optional[str] = None,
        translation_table: Optional[TranslationTable] = TranslationTable.DEFAULT,
    ):
        self.coding_sequence = coding_sequence.upper()
        self.three_prime_utr = (three_prime_utr or "").upper()
        self.protein_id = protein_id
        self.protein_version = protein_version
        self.translation_table = translation_table

    def __str__(self):
        return f"Transcript(protein={self.versioned_protein_id}, cds_length={len(self.coding_sequence)})"

    def __repr__(self):
        return "<{}>".format(str(self))

    @property
    def translateable_sequence(self) -> str:
        return self.coding_sequence

    @lru_cache(maxsize=1)
    def translate(self) -> str:
        """
        Translates the full codons of the coding sequence, including any terminal stop.

        The first codon is translated as Methionine if it is a start codon under this transcript's
        translation table.
        """
        seq = self.coding_sequence
        translated_seq = []
        for i in range(0, len(seq) - len(seq) % 3, 3):
            codon = Codon(seq[i : i + 3])
            if i == 0 and codon.is_start_codon_in_specific_translation_table(self.translation_table):
                translated_seq.append(Codon("ATG").translate())
            else:
                translated_seq.append(codon.translate(strict=False))
        return "".join(translated_seq)

    @property
    def peptide(self) -> str:
        peptide = self.translate()
        if peptide.endswith(STOP_MARKER):
            return peptide[:-1]
        return peptide

    def get_alternate_cds(self, coding_begin: int, coding_end: int, alternate_allele: str) -> Optional[str]:
        """
        Splices ``alternate_allele`` into the coding sequence. Insertions are expressed with
        ``coding_begin == coding_end + 1``, meaning the allele sits between ``coding_end`` and ``coding_begin``.

        Returns ``None`` if the range does not fall within the coding sequence.
        """
        if coding_begin < 1 or coding_end < coding_begin - 1 or coding_end > len(self.coding_sequence):
            logger.debug(f"Coding range {coding_begin}-{coding_end} is outside of {self}")
            return None
        alternate_allele = (alternate_allele or "").upper().replace("-", "")
        return (
            self.coding_sequence[: coding_begin - 1]
            + alternate_allele
            + self.coding_sequence[coding_end:]
            + self.three_prime_utr
        )
