from hgvscantor.annotation.codons import assign_codons  # noqa: F401
from hgvscantor.annotation.context import TranscriptChangeContext, VariantEffects  # noqa: F401
from hgvscantor.annotation.hgvs_protein import (  # noqa: F401
    ChangeNotation,
    HgvsProteinNomenclature,
    extra_residues,
    get_hgvs_protein_notation,
)
from hgvscantor.annotation.protein_change import ChangeKind, classify_protein_change  # noqa: F401
from hgvscantor.annotation.variant_type import (  # noqa: F401
    VariantKind,
    canonical_variant_type,
    structural_variant_kind,
    vep_variant_type,
)
