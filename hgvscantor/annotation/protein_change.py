"""
Classification of a protein change from the residues it replaces and the residues it introduces.

Classification happens in two stages. The general stage only looks at whether residues were gained or lost. The
specific stage refines that into the categories used by HGVS protein nomenclature. A change classified as
``NONE`` by the general stage is never refined.
"""
from typing import Optional

from hgvscantor.util.enum import HasMemberMixin


class ChangeKind(str, HasMemberMixin):
    NONE = "none"
    SUBSTITUTION = "substitution"
    DELETION = "deletion"
    INSERTION = "insertion"
    DUPLICATION = "duplication"
    DELETION_INSERTION = "delins"
    FRAMESHIFT = "frameshift"
    UNKNOWN = "unknown"


def classify_general_change(reference: Optional[str], alternate: Optional[str]) -> ChangeKind:
    """Coarse classification based only on whether residues were gained or lost."""
    reference = reference or ""
    alternate = alternate or ""
    if reference == alternate:
        return ChangeKind.NONE
    if not reference and alternate:
        return ChangeKind.INSERTION
    if reference and not alternate:
        return ChangeKind.DELETION
    return ChangeKind.UNKNOWN


def classify_specific_change(
    general_kind: ChangeKind, reference: Optional[str], alternate: Optional[str], is_frameshift: bool
) -> ChangeKind:
    """
    Refines a general classification. Rules are evaluated in order and the first match wins:

    ===  =============================================================  ======================
     #   Condition                                                      Result
    ===  =============================================================  ======================
     1   frameshift                                                     FRAMESHIFT
     2   general kind is INSERTION                                      INSERTION
     3   one residue replaced by one residue                            SUBSTITUTION
     4   general kind is DELETION                                       DELETION
     5   alternate is longer and contains the reference                 DUPLICATION
     6   lengths differ                                                 DELETION_INSERTION
     7   otherwise                                                      SUBSTITUTION
    ===  =============================================================  ======================
    """
    reference = reference or ""
    alternate = alternate or ""

    if is_frameshift:
        return ChangeKind.FRAMESHIFT
    if general_kind == ChangeKind.INSERTION:
        return ChangeKind.INSERTION
    if len(reference) == 1 and len(alternate) == 1:
        return ChangeKind.SUBSTITUTION
    if general_kind == ChangeKind.DELETION:
        return ChangeKind.DELETION
    if len(alternate) > len(reference) and reference in alternate:
        return ChangeKind.DUPLICATION
    if len(reference) != len(alternate):
        return ChangeKind.DELETION_INSERTION
    return ChangeKind.SUBSTITUTION


def classify_protein_change(reference: Optional[str], alternate: Optional[str], is_frameshift: bool) -> ChangeKind:
    """Runs both classification stages. Identical residues are always ``NONE``, even for frameshifts."""
    general_kind = classify_general_change(reference, alternate)
    if general_kind == ChangeKind.NONE:
        return general_kind
    return classify_specific_change(general_kind, reference, alternate, is_frameshift)
