import pytest

from hgvscantor.gene.transcript import Transcript

# M  K  A  L  P  R  G  S  *
CODING_SEQUENCE = "ATGAAAGCTCTGCCTCGTGGTTCTTAA"
# eleven alanines followed by a stop
READ_THROUGH_UTR = "GCT" * 11 + "TAA"


@pytest.fixture
def transcript() -> Transcript:
    return Transcript(CODING_SEQUENCE, READ_THROUGH_UTR, protein_id="NP_1")


@pytest.fixture
def transcript_without_utr() -> Transcript:
    return Transcript(CODING_SEQUENCE, protein_id="NP_1")


@pytest.fixture
def repeat_transcript() -> Transcript:
    # M  K  A  A  L  P  R  G  S  *
    return Transcript("ATGAAAGCTGCCCTGCCTCGTGGTTCTTAA", protein_id="NP_2", protein_version="1")


@pytest.fixture
def shifted_stop_transcript() -> Transcript:
    # a stop codon two codons into the UTR once the frame shifts by one
    return Transcript(CODING_SEQUENCE, "GTGATAA", protein_id="NP_1")
