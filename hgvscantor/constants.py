"""
Genetic code tables and notation constants.

The codon tables are derived from the NCBI standard code (table 1) shipped with Biopython.
"""
from typing import Dict

from Bio.Data.CodonTable import standard_dna_table

STOP_MARKER = "*"
UNKNOWN_AMINO_ACID = "X"
STOP_ABBREVIATION = "Ter"

# sentinels used in protein notation
DELETION_ABBREVIATION = "del"
UNKNOWN_ABBREVIATION = "?"
SYNONYMOUS_SUFFIX = "(p.=)"

# strict codon -> amino acid
gencode: Dict[str, str] = dict(standard_dna_table.forward_table)
gencode.update({codon: STOP_MARKER for codon in standard_dna_table.stop_codons})

# copy number baselines
DEFAULT_PLOIDY = 2
SEX_CHROMOSOME_PLOIDY = 1
DEFAULT_SEX_CHROMOSOMES = ("chrY", "Y")
