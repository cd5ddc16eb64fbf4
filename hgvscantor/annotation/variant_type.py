"""
Variant type classification.

Small variants are classified from the lengths of their trimmed reference and alternate alleles. Two conventions
are kept side by side because downstream consumers depend on each of them:

* :func:`vep_variant_type` folds every length change into an insertion or a deletion depending on its direction.
* :func:`canonical_variant_type` only reports insertions and deletions when one of the alleles is empty, and calls
  every other length change an indel.

Structural variants are classified from their ``SVTYPE`` token. Copy number variants are further resolved into
gain, loss or flat using an explicit caller tag when there is one, and the copy number otherwise.
"""
import re
import warnings
from typing import Optional, Sequence

from hgvscantor.constants import DEFAULT_PLOIDY, DEFAULT_SEX_CHROMOSOMES, SEX_CHROMOSOME_PLOIDY
from hgvscantor.exc import UnknownStructuralVariantWarning
from hgvscantor.util.enum import HasMemberMixin

TANDEM_DUPLICATION_ALT_ALLELE = "<DUP:TANDEM>"
CANVAS_ID_PREFIX = "Canvas"

_SYMBOLIC_COPY_NUMBER = re.compile(r"<CN(\d+)>")


class VariantKind(str, HasMemberMixin):
    SNV = "SNV"
    MNV = "MNV"
    INSERTION = "insertion"
    DELETION = "deletion"
    INDEL = "indel"
    DUPLICATION = "duplication"
    COPY_NUMBER_GAIN = "copy_number_gain"
    COPY_NUMBER_LOSS = "copy_number_loss"
    COPY_NUMBER_FLAT = "copy_number_variation"
    TANDEM_DUPLICATION = "tandem_duplication"
    INVERSION = "inversion"
    TRANSLOCATION_BREAKEND = "translocation_breakend"
    MOBILE_ELEMENT_INSERTION = "mobile_element_insertion"
    REFERENCE_NO_CALL = "reference_no_call"
    UNKNOWN = "unknown"


class StructuralVariantType(str, HasMemberMixin):
    """SVTYPE tokens"""

    DELETION = "DEL"
    DUPLICATION = "DUP"
    TANDEM_DUPLICATION = "TDUP"
    INVERSION = "INV"
    INSERTION = "INS"
    TRANSLOCATION_BREAKEND = "BND"
    ALU = "ALU"
    LINE1 = "LINE1"
    SVA = "SVA"
    COPY_NUMBER_VARIATION = "CNV"
    LOSS_OF_HETEROZYGOSITY = "LOH"


STRUCTURAL_VARIANT_KINDS = {
    StructuralVariantType.DELETION: VariantKind.DELETION,
    StructuralVariantType.DUPLICATION: VariantKind.DUPLICATION,
    StructuralVariantType.TANDEM_DUPLICATION: VariantKind.TANDEM_DUPLICATION,
    StructuralVariantType.INVERSION: VariantKind.INVERSION,
    StructuralVariantType.INSERTION: VariantKind.INSERTION,
    StructuralVariantType.TRANSLOCATION_BREAKEND: VariantKind.TRANSLOCATION_BREAKEND,
    StructuralVariantType.ALU: VariantKind.MOBILE_ELEMENT_INSERTION,
    StructuralVariantType.LINE1: VariantKind.MOBILE_ELEMENT_INSERTION,
    StructuralVariantType.SVA: VariantKind.MOBILE_ELEMENT_INSERTION,
}

COPY_NUMBER_TYPES = frozenset(
    {StructuralVariantType.COPY_NUMBER_VARIATION, StructuralVariantType.LOSS_OF_HETEROZYGOSITY}
)

CALLER_COPY_NUMBER_TAGS = {
    "GAIN": VariantKind.COPY_NUMBER_GAIN,
    "LOSS": VariantKind.COPY_NUMBER_LOSS,
    "REF": VariantKind.COPY_NUMBER_FLAT,
}


def vep_variant_type(reference_length: int, alternate_length: int) -> VariantKind:
    """Any length change is an insertion or a deletion, depending on which allele is longer."""
    if alternate_length != reference_length:
        return VariantKind.INSERTION if alternate_length > reference_length else VariantKind.DELETION
    return VariantKind.SNV if alternate_length == 1 else VariantKind.MNV


def canonical_variant_type(reference_length: int, alternate_length: int) -> VariantKind:
    """Insertions and deletions require an empty allele; any other length change is an indel."""
    if alternate_length != reference_length:
        if alternate_length == 0 and reference_length > 0:
            return VariantKind.DELETION
        if alternate_length > 0 and reference_length == 0:
            return VariantKind.INSERTION
        return VariantKind.INDEL
    return VariantKind.SNV if alternate_length == 1 else VariantKind.MNV


def is_symbolic_allele(allele: Optional[str]) -> bool:
    """Symbolic alleles are angle-bracketed IDs, e.g. ``<DEL>``"""
    return bool(allele) and allele.startswith("<") and allele.endswith(">")


def extract_copy_number(alternate_allele: Optional[str]) -> Optional[int]:
    """Copy number of a ``<CN{n}>`` symbolic allele. ``None`` for any other allele."""
    if not alternate_allele:
        return None
    match = _SYMBOLIC_COPY_NUMBER.search(alternate_allele)
    if not match:
        return None
    return int(match.group(1))


def parse_caller_copy_number_tag(variant_id: Optional[str]) -> Optional[VariantKind]:
    """
    Copy number kind stated by the caller in the variant ID, e.g. ``Canvas:GAIN:1:1000-2000``.

    Returns ``None`` if the ID does not carry such a statement.
    """
    if not variant_id:
        return None
    fields = variant_id.split(":")
    if len(fields) < 2 or fields[0] != CANVAS_ID_PREFIX:
        return None
    return CALLER_COPY_NUMBER_TAGS.get(fields[1])


def baseline_ploidy(chromosome: Optional[str], sex_chromosomes: Sequence[str] = DEFAULT_SEX_CHROMOSOMES) -> int:
    return SEX_CHROMOSOME_PLOIDY if chromosome in sex_chromosomes else DEFAULT_PLOIDY


def copy_number_kind(
    copy_number: Optional[int],
    chromosome: Optional[str] = None,
    caller_tag: Optional[VariantKind] = None,
    sex_chromosomes: Sequence[str] = DEFAULT_SEX_CHROMOSOMES,
) -> Optional[VariantKind]:
    """
    Resolves a copy number variant into gain, loss or flat.

    An explicit caller tag always wins. Otherwise the copy number is compared to the baseline ploidy of the
    chromosome: 1 on a designated sex chromosome, 2 elsewhere.

    Returns
    -------
    Optional[VariantKind]
        ``None`` if neither a caller tag nor a copy number is available.
    """
    if caller_tag is not None:
        return caller_tag
    if copy_number is None:
        return None
    baseline = baseline_ploidy(chromosome, sex_chromosomes)
    if copy_number < baseline:
        return VariantKind.COPY_NUMBER_LOSS
    if copy_number > baseline:
        return VariantKind.COPY_NUMBER_GAIN
    return VariantKind.COPY_NUMBER_FLAT


def resolve_structural_variant_type(
    sv_type: Optional[str], alternate_allele: Optional[str] = None
) -> Optional[StructuralVariantType]:
    """Parses an SVTYPE token. Duplications with a ``<DUP:TANDEM>`` allele are tandem duplications."""
    if not sv_type or not StructuralVariantType.has_value(sv_type):
        return None
    sv_type = StructuralVariantType(sv_type)
    if sv_type == StructuralVariantType.DUPLICATION and alternate_allele == TANDEM_DUPLICATION_ALT_ALLELE:
        return StructuralVariantType.TANDEM_DUPLICATION
    return sv_type


def structural_variant_kind(
    sv_type: Optional[str],
    alternate_allele: Optional[str] = None,
    copy_number: Optional[int] = None,
    chromosome: Optional[str] = None,
    variant_id: Optional[str] = None,
    sex_chromosomes: Sequence[str] = DEFAULT_SEX_CHROMOSOMES,
) -> VariantKind:
    """
    Classifies a structural variant.

    Parameters
    ----------
    sv_type
        The SVTYPE token.
    alternate_allele
        The ALT allele. Used to recognize tandem duplications and ``<CN{n}>`` copy numbers.
    copy_number
        Copy number reported for the sample. Takes precedence over a copy number parsed from the allele.
    chromosome
        Chromosome name, used to pick the baseline ploidy.
    variant_id
        The variant ID, which may carry an explicit gain/loss statement from the caller.
    sex_chromosomes
        Chromosomes with a baseline ploidy of 1.
    """
    resolved = resolve_structural_variant_type(sv_type, alternate_allele)
    if resolved is None:
        warnings.warn(UnknownStructuralVariantWarning(f"Unknown structural variant type {sv_type}"))
        return VariantKind.UNKNOWN

    if resolved in COPY_NUMBER_TYPES:
        if copy_number is None:
            copy_number = extract_copy_number(alternate_allele)
        kind = copy_number_kind(
            copy_number, chromosome, parse_caller_copy_number_tag(variant_id), sex_chromosomes=sex_chromosomes
        )
        return kind if kind is not None else VariantKind.UNKNOWN

    return STRUCTURAL_VARIANT_KINDS[resolved]
