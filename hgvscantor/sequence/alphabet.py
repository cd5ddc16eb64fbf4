from enum import Enum
from typing import Optional


class Alphabet(Enum):
    # A, C, G, T and the gap used for absent bases
    NT_CANONICAL = "ACGT-"
    # IUPAC nucleotide codes
    NT_EXTENDED = "ATUCGNWSMKRYBDHV"

    def contains(self, sequence: Optional[str]) -> bool:
        """Case-insensitive check that every symbol of ``sequence`` belongs to this alphabet."""
        if not sequence:
            return True
        return sequence.upper().strip(self.value) == ""


def has_non_canonical_base(bases: Optional[str]) -> bool:
    """True if ``bases`` contains anything other than A, C, G, T or a gap. ``None`` is treated as empty."""
    return not Alphabet.NT_CANONICAL.contains(bases)
