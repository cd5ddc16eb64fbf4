from hgvscantor.sequence.alphabet import Alphabet, has_non_canonical_base  # noqa: F401
