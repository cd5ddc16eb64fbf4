from hgvscantor.gene.codon import Codon, TranslationTable  # noqa: F401
from hgvscantor.gene.transcript import AbstractTranscript, Transcript  # noqa: F401
