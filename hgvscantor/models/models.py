"""
Data models. These models allow for validation of upstream inputs before they are handed to the
protein nomenclature code.
"""
from typing import ClassVar, Optional, Type

from marshmallow import Schema
from marshmallow_dataclass import dataclass

from hgvscantor.annotation.context import TranscriptChangeContext, VariantEffects
from hgvscantor.exc import ValidationException
from hgvscantor.gene.codon import TranslationTable
from hgvscantor.gene.transcript import Transcript


@dataclass
class BaseModel:
    """Base for all of the models."""

    Schema: ClassVar[Type[Schema]] = Schema  # noqa: F811

    class Meta:
        ordered = True


@dataclass
class TranscriptChangeContextModel(BaseModel):
    """Data model that allows construction of a :class:`~hgvscantor.annotation.context.TranscriptChangeContext`."""

    protein_begin: int
    protein_end: int
    coding_begin: int
    coding_end: int
    reference_allele: Optional[str] = None
    alternate_allele: Optional[str] = None
    reference_amino_acids: Optional[str] = None
    alternate_amino_acids: Optional[str] = None
    hgvs_coding_name: Optional[str] = None
    has_valid_cds_start: bool = True
    has_valid_cds_end: bool = True
    is_reference_call: bool = False

    def to_context(self) -> TranscriptChangeContext:
        """Construct a :class:`TranscriptChangeContext`, checking that the coordinates are consistent.

        Insertions are allowed to have ``begin == end + 1``.
        """
        if self.protein_begin < 0 or self.coding_begin < 0:
            raise ValidationException("Protein and coding positions are 1-based and cannot be negative")
        if self.protein_end < self.protein_begin - 1:
            raise ValidationException(f"Protein end {self.protein_end} is before protein begin {self.protein_begin}")
        if self.coding_end < self.coding_begin - 1:
            raise ValidationException(f"Coding end {self.coding_end} is before coding begin {self.coding_begin}")

        return TranscriptChangeContext(
            protein_begin=self.protein_begin,
            protein_end=self.protein_end,
            coding_begin=self.coding_begin,
            coding_end=self.coding_end,
            reference_allele=self.reference_allele or "",
            alternate_allele=self.alternate_allele or "",
            reference_amino_acids=self.reference_amino_acids or "",
            alternate_amino_acids=self.alternate_amino_acids or "",
            hgvs_coding_name=self.hgvs_coding_name,
            has_valid_cds_start=self.has_valid_cds_start,
            has_valid_cds_end=self.has_valid_cds_end,
            is_reference_call=self.is_reference_call,
        )


@dataclass
class TranscriptModel(BaseModel):
    """Data model that allows construction of a :class:`~hgvscantor.gene.transcript.Transcript`."""

    coding_sequence: str
    protein_id: str
    protein_version: Optional[str] = None
    three_prime_utr: Optional[str] = None
    translation_table: Optional[int] = None

    def to_transcript(self) -> Transcript:
        if not self.coding_sequence:
            raise ValidationException("Coding sequence must not be empty")
        if self.translation_table is not None and self.translation_table not in {t.value for t in TranslationTable}:
            raise ValidationException(f"Unsupported translation table {self.translation_table}")
        translation_table = (
            TranslationTable(self.translation_table) if self.translation_table is not None else TranslationTable.DEFAULT
        )
        return Transcript(
            coding_sequence=self.coding_sequence,
            three_prime_utr=self.three_prime_utr,
            protein_id=self.protein_id,
            protein_version=self.protein_version,
            translation_table=translation_table,
        )


@dataclass
class VariantEffectsModel(BaseModel):
    """Data model that allows construction of :class:`~hgvscantor.annotation.context.VariantEffects`."""

    is_frameshift: bool = False
    is_stop_lost: bool = False
    is_stop_retained: bool = False
    is_start_lost: bool = False

    def to_effects(self) -> VariantEffects:
        return VariantEffects(
            is_frameshift=self.is_frameshift,
            is_stop_lost=self.is_stop_lost,
            is_stop_retained=self.is_stop_retained,
            is_start_lost=self.is_start_lost,
        )
