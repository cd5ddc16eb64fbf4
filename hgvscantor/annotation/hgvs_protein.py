"""
HGVS protein nomenclature.

This module converts a variant allele on a transcript into its protein-level HGVS description, for example
``NP_000537.3:p.Arg248Gln``. The conversion is a pipeline of small steps, each of which takes a
:class:`ChangeNotation` and returns a new one:

1. Residues shared between the reference and alternate peptides are trimmed away.
2. The change is classified (see :mod:`~hgvscantor.annotation.protein_change`).
3. The residues to display are resolved. Frameshifts are re-translated to find the first changed residue,
   insertions and deletions are moved to their most 3' position, and insertions that repeat the residues
   just before them become duplications.
4. Residues are converted to three-letter abbreviations and consequence-specific overrides are applied.
5. The notation is formatted.

Variants that do not qualify for a protein notation (reference calls, invalid CDS boundaries, alleles with
ambiguous bases) produce ``None``. So do ranges that fall past the end of the peptide.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional

from methodtools import lru_cache

from hgvscantor.annotation.context import TranscriptChangeContext, VariantEffects
from hgvscantor.annotation.protein_change import ChangeKind, classify_protein_change
from hgvscantor.constants import (
    DELETION_ABBREVIATION,
    STOP_ABBREVIATION,
    STOP_MARKER,
    SYNONYMOUS_SUFFIX,
    UNKNOWN_ABBREVIATION,
)
from hgvscantor.gene.transcript import AbstractTranscript
from hgvscantor.protein.amino_acids import (
    first_amino_acid3,
    get_abbreviations,
    last_amino_acid3,
    remove_prefix_and_suffix,
    rotate_3prime,
    translate_bases,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeNotation:
    """
    Working record of a single protein notation. ``start`` and ``end`` are 1-based protein positions.

    While insertions are being resolved ``start`` may be ``end + 1``; formatting always sees ``start <= end``.
    """

    protein_id: Optional[str]
    start: int
    end: int
    reference_amino_acids: str = ""
    alternate_amino_acids: str = ""
    reference_abbreviation: str = ""
    alternate_abbreviation: str = ""
    change_kind: ChangeKind = ChangeKind.UNKNOWN

    def __post_init__(self):
        # absent residues are always represented as empty strings
        for field_name in (
            "reference_amino_acids",
            "alternate_amino_acids",
            "reference_abbreviation",
            "alternate_abbreviation",
        ):
            if getattr(self, field_name) is None:
                object.__setattr__(self, field_name, "")

    @property
    def reference_length(self) -> int:
        return len(self.reference_amino_acids)

    @property
    def alternate_length(self) -> int:
        return len(self.alternate_amino_acids)


def extra_residues(
    translated: Optional[str], reference_peptide_length: int, variant_position: int, is_frameshift: bool
) -> Optional[int]:
    """
    Counts the residues translated until the next stop codon.

    Parameters
    ----------
    translated
        Translation of the alternate coding sequence, including its 3' context.
    reference_peptide_length
        Length of the reference peptide, without its stop.
    variant_position
        0-based position of the first changed residue.
    is_frameshift
        Frameshifts count from the first changed residue. Otherwise the count starts after the original stop.

    Returns
    -------
    Optional[int]
        The number of residues, or ``None`` if no stop was found or the count is not positive. The latter
        happens when the stop itself is the first affected residue.
    """
    if translated is None or variant_position > len(translated):
        return None
    stop_position = translated.find(STOP_MARKER)
    if stop_position == -1:
        return None
    offset = variant_position if is_frameshift else reference_peptide_length + 1
    num_residues = stop_position + 1 - offset
    return num_residues if num_residues > 0 else None


def get_surrounding_peptides(peptide: str, position: int) -> str:
    """The two residues at ``position`` and ``position + 1``, which flank an insertion. Empty if out of range."""
    if len(peptide) < position + 1:
        return ""
    return peptide[position - 1 : position + 1]


def trim_notation(notation: ChangeNotation) -> ChangeNotation:
    reference, alternate, start, end = remove_prefix_and_suffix(
        notation.reference_amino_acids, notation.alternate_amino_acids, notation.start, notation.end
    )
    return replace(notation, reference_amino_acids=reference, alternate_amino_acids=alternate, start=start, end=end)


def rotate_notation(notation: ChangeNotation, peptide: str) -> ChangeNotation:
    """Moves an insertion or deletion to its most 3' equivalent position. Other changes are returned unchanged."""
    if notation.change_kind == ChangeKind.INSERTION:
        residues, start, end = rotate_3prime(notation.alternate_amino_acids, notation.start, notation.end, peptide)
        return replace(notation, alternate_amino_acids=residues, start=start, end=end)
    if notation.change_kind == ChangeKind.DELETION:
        residues, start, end = rotate_3prime(notation.reference_amino_acids, notation.start, notation.end, peptide)
        return replace(notation, reference_amino_acids=residues, start=start, end=end)
    return notation


def as_duplication(notation: ChangeNotation, peptide: str) -> Optional[ChangeNotation]:
    """
    If the inserted residues repeat the residues immediately before the insertion point, returns the insertion
    re-expressed as a duplication of those residues. Otherwise returns ``None``.
    """
    inserted = notation.alternate_amino_acids
    if not inserted:
        return None

    test_position = notation.start - len(inserted) - 1
    if test_position < 0 or test_position + len(inserted) > len(peptide):
        return None
    if peptide[test_position : test_position + len(inserted)] != inserted:
        return None

    return replace(
        notation,
        change_kind=ChangeKind.DUPLICATION,
        start=notation.start - len(inserted),
        end=notation.start - 1,
        reference_amino_acids=inserted,
    )


def assign_abbreviations(notation: ChangeNotation) -> ChangeNotation:
    alternate_abbreviation = (
        get_abbreviations(notation.alternate_amino_acids) if notation.alternate_amino_acids else DELETION_ABBREVIATION
    )
    return replace(
        notation,
        reference_abbreviation=get_abbreviations(notation.reference_amino_acids),
        alternate_abbreviation=alternate_abbreviation,
    )


def get_range_string(notation: ChangeNotation) -> str:
    if notation.start == notation.end:
        return f"{notation.reference_abbreviation}{notation.start}{notation.alternate_abbreviation}"
    return f"{notation.reference_abbreviation}{notation.start}_{notation.alternate_abbreviation}{notation.end}"


class HgvsProteinNomenclature:
    """
    Builds the HGVS protein notation of one variant allele on one transcript.

    Instances hold no state beyond their inputs and a cached translation of the alternate coding sequence, so
    a new instance should be created for every (variant, transcript) pair.
    """

    def __init__(
        self, variant_effects: VariantEffects, context: TranscriptChangeContext, transcript: AbstractTranscript
    ):
        self.variant_effects = variant_effects
        self.context = context
        self.transcript = transcript

    def __repr__(self):
        return f"<HgvsProteinNomenclature({self.context.hgvs_coding_name}, {self.transcript})>"

    @property
    def synonymous_notation(self) -> Optional[str]:
        if self.context.hgvs_coding_name is None:
            return None
        return f"{self.context.hgvs_coding_name}{SYNONYMOUS_SUFFIX}"

    @lru_cache(maxsize=1)
    @property
    def translated_alternate_cds(self) -> Optional[str]:
        """Translation of the coding sequence with the alternate allele applied, including the 3' context"""
        alternate_cds = self.transcript.get_alternate_cds(
            self.context.coding_begin, self.context.coding_end, self.context.alternate_allele
        )
        if not alternate_cds:
            return None
        return translate_bases(alternate_cds, force_non_triplet=True)

    def _passes_entry_guards(self) -> bool:
        if self.context.is_reference_call:
            logger.debug(f"{self.context.hgvs_coding_name} is a reference call")
            return False
        if not self.context.has_valid_cds:
            logger.debug(f"{self.context.hgvs_coding_name} does not have valid CDS boundaries")
            return False
        if self.context.has_non_canonical_base:
            logger.debug(f"{self.context.hgvs_coding_name} has non-canonical bases in its alternate allele")
            return False
        return True

    def get_annotation(self) -> Optional[str]:
        """
        Returns the HGVS protein notation, ``{coding name}(p.=)`` if the protein is unchanged, or ``None`` if no
        notation can be produced.
        """
        if not self._passes_entry_guards():
            return None

        if self.variant_effects.is_stop_retained:
            return self.synonymous_notation

        notation = ChangeNotation(
            protein_id=self.transcript.versioned_protein_id,
            start=self.context.protein_begin,
            end=self.context.protein_end,
            reference_amino_acids=self.context.reference_amino_acids,
            alternate_amino_acids=self.context.alternate_amino_acids,
        )
        notation = trim_notation(notation)
        notation = replace(
            notation,
            change_kind=classify_protein_change(
                notation.reference_amino_acids, notation.alternate_amino_acids, self.variant_effects.is_frameshift
            ),
        )

        if notation.change_kind != ChangeKind.NONE:
            notation = self.resolve_peptides(notation)

        if notation.change_kind == ChangeKind.NONE:
            return self.synonymous_notation

        hgvs = self.format_notation(notation)
        if hgvs is None:
            logger.debug(f"Could not express {self.context.hgvs_coding_name} on {notation.protein_id}")
        return hgvs

    def resolve_peptides(self, notation: ChangeNotation) -> ChangeNotation:
        """Resolves the residues to display for the change kind, then abbreviates them."""
        peptide = self.transcript.peptide

        if notation.change_kind == ChangeKind.FRAMESHIFT:
            translated = self.translated_alternate_cds
            if translated is not None and self.context.protein_begin > len(translated):
                return replace(
                    notation,
                    start=self.context.protein_begin,
                    end=self.context.protein_begin,
                    reference_abbreviation=DELETION_ABBREVIATION,
                    alternate_abbreviation=DELETION_ABBREVIATION,
                )
            notation = self.get_frameshift_peptides(notation)
            if notation.change_kind == ChangeKind.NONE:
                return notation

        elif notation.change_kind == ChangeKind.INSERTION:
            if notation.start == notation.end:
                # a single insertion position means the gap before that residue
                notation = replace(notation, end=notation.start - 1)
            notation = rotate_notation(notation, peptide)
            duplication = as_duplication(notation, peptide)
            if duplication is not None:
                notation = duplication
            else:
                position = min(notation.start, notation.end)
                # protein positions start at 1, an insertion before the first residue has end 0
                if position == 0:
                    position = 1
                notation = replace(notation, reference_amino_acids=get_surrounding_peptides(peptide, position))

        elif notation.change_kind == ChangeKind.DELETION:
            notation = rotate_notation(notation, peptide)

        notation = assign_abbreviations(notation)
        return self.apply_overrides(notation)

    def get_frameshift_peptides(self, notation: ChangeNotation) -> ChangeNotation:
        """
        Walks the re-translated alternate peptide against the reference peptide, starting at the first affected
        position, and keeps the first pair of residues that differ. A frameshift that reaches the reference stop
        without changing anything is synonymous.
        """
        translated = self.translated_alternate_cds
        if translated is None:
            return notation

        reference = self.transcript.peptide + STOP_MARKER
        start = self.context.protein_begin
        reference_residue = alternate_residue = None

        while start <= len(translated) and start <= len(reference):
            reference_residue = reference[start - 1]
            alternate_residue = translated[start - 1]

            # the stop codon is kept in place
            if reference_residue == STOP_MARKER and alternate_residue == STOP_MARKER:
                return replace(notation, change_kind=ChangeKind.NONE)

            if reference_residue != alternate_residue:
                break
            start += 1

        if reference_residue is None:
            return notation

        return replace(
            notation,
            start=start,
            end=start,
            reference_amino_acids=reference_residue,
            alternate_amino_acids=alternate_residue,
        )

    def apply_overrides(self, notation: ChangeNotation) -> ChangeNotation:
        if self.variant_effects.is_start_lost:
            # initiator loss, probably no translation
            return replace(notation, alternate_abbreviation=UNKNOWN_ABBREVIATION, change_kind=ChangeKind.UNKNOWN)
        if notation.change_kind == ChangeKind.DELETION:
            return replace(notation, alternate_abbreviation=DELETION_ABBREVIATION)
        if notation.change_kind == ChangeKind.FRAMESHIFT:
            return replace(notation, reference_abbreviation=first_amino_acid3(notation.reference_abbreviation))
        return notation

    def _extra_residues(self, notation: ChangeNotation, is_frameshift: bool) -> Optional[int]:
        return extra_residues(
            self.translated_alternate_cds, len(self.transcript.peptide), notation.start - 1, is_frameshift
        )

    def format_notation(self, notation: ChangeNotation) -> Optional[str]:
        """Formats a resolved notation. Returns ``None`` if the range cannot be expressed on the peptide."""
        notation = replace(notation, start=min(notation.start, notation.end), end=max(notation.start, notation.end))
        if self.variant_effects.is_stop_lost:
            body = self._format_stop_lost(notation)
        else:
            body = self._format_body(notation)
        if body is None:
            return None
        return f"{notation.protein_id}:p.{body}"

    def _format_stop_lost(self, notation: ChangeNotation) -> str:
        alternate = first_amino_acid3(notation.alternate_abbreviation)
        if notation.change_kind in (ChangeKind.DELETION, ChangeKind.SUBSTITUTION):
            num_residues = self._extra_residues(notation, is_frameshift=False)
            if num_residues is not None:
                alternate += f"extTer{num_residues}"
            elif notation.change_kind == ChangeKind.SUBSTITUTION:
                alternate += "extTer?"
        return f"{notation.reference_abbreviation}{notation.start}{alternate}"

    def _format_body(self, notation: ChangeNotation) -> Optional[str]:
        kind = notation.change_kind

        if kind == ChangeKind.DUPLICATION:
            duplicated = notation.alternate_abbreviation
            if notation.start < notation.end:
                return (
                    f"{first_amino_acid3(duplicated)}{notation.start}_"
                    f"{last_amino_acid3(duplicated)}{notation.end}dup"
                )
            return f"{duplicated}{notation.start}dup"

        if kind == ChangeKind.SUBSTITUTION:
            return f"{notation.reference_abbreviation}{notation.start}{notation.alternate_abbreviation}"

        if kind in (ChangeKind.INSERTION, ChangeKind.DELETION_INSERTION):
            return self._format_insertion(notation)

        if kind == ChangeKind.FRAMESHIFT:
            body = f"{notation.reference_abbreviation}{notation.start}{notation.alternate_abbreviation}"
            if notation.alternate_abbreviation != STOP_ABBREVIATION:
                num_residues = self._extra_residues(notation, is_frameshift=True)
                body += f"fsTer{num_residues}" if num_residues is not None else "fsTer?"
            return body

        if kind == ChangeKind.DELETION and len(notation.reference_abbreviation) > 3:
            return (
                f"{first_amino_acid3(notation.reference_abbreviation)}{notation.start}_"
                f"{last_amino_acid3(notation.reference_abbreviation)}{notation.end}del"
            )

        return get_range_string(notation)

    def _format_insertion(self, notation: ChangeNotation) -> Optional[str]:
        alternate = notation.alternate_abbreviation
        if alternate.startswith(STOP_ABBREVIATION):
            alternate = STOP_ABBREVIATION

        first_reference = first_amino_acid3(notation.reference_abbreviation)
        last_reference = last_amino_acid3(notation.reference_abbreviation)

        if notation.reference_amino_acids.endswith(STOP_MARKER):
            num_residues = self._extra_residues(notation, is_frameshift=False)
            if num_residues is not None:
                alternate += f"extTer{num_residues}"

        if notation.start == notation.end and notation.change_kind == ChangeKind.DELETION_INSERTION:
            return f"{first_reference}{notation.start}delins{alternate}"

        start, end = min(notation.start, notation.end), max(notation.start, notation.end)
        if end > len(self.transcript.peptide):
            return None
        operation = "ins" if notation.change_kind == ChangeKind.INSERTION else "delins"
        return f"{first_reference}{start}_{last_reference}{end}{operation}{alternate}"


def get_hgvs_protein_notation(
    context: TranscriptChangeContext, transcript: AbstractTranscript, variant_effects: VariantEffects
) -> Optional[str]:
    """Functional wrapper around :class:`HgvsProteinNomenclature`."""
    return HgvsProteinNomenclature(variant_effects, context, transcript).get_annotation()
