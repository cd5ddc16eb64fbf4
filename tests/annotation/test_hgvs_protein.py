import pytest

from hgvscantor.annotation.context import TranscriptChangeContext, VariantEffects
from hgvscantor.annotation.hgvs_protein import (
    ChangeNotation,
    HgvsProteinNomenclature,
    as_duplication,
    extra_residues,
    get_hgvs_protein_notation,
    get_surrounding_peptides,
)
from hgvscantor.annotation.protein_change import ChangeKind
from hgvscantor.gene.transcript import Transcript


class TestExtraResidues:
    @pytest.mark.parametrize(
        "translated,reference_length,position,is_frameshift,expected",
        [
            ("MKALPRGSQAAA*", 8, 8, False, 4),
            ("MKL*", 8, 2, True, 2),
            # the stop did not move
            ("MKALPRGS*", 8, 8, False, None),
            ("MKALPRGSQAAA", 8, 8, False, None),
            (None, 8, 8, False, None),
            ("MK*", 8, 5, True, None),
        ],
    )
    def test_extra_residues(self, translated, reference_length, position, is_frameshift, expected):
        assert extra_residues(translated, reference_length, position, is_frameshift) == expected


class TestChangeNotation:
    def test_none_residues_become_empty(self):
        notation = ChangeNotation("NP_1", 3, 3, reference_amino_acids=None, alternate_abbreviation=None)
        assert notation.reference_amino_acids == ""
        assert notation.alternate_abbreviation == ""
        assert notation.reference_length == 0

    @pytest.mark.parametrize("position,expected", [(1, "MK"), (3, "AL"), (7, "GS"), (8, "")])
    def test_get_surrounding_peptides(self, position, expected):
        assert get_surrounding_peptides("MKALPRGS", position) == expected

    def test_as_duplication(self):
        notation = ChangeNotation("NP_1", 4, 3, alternate_amino_acids="A", change_kind=ChangeKind.INSERTION)
        obs = as_duplication(notation, "MKALPRGS")
        assert obs.change_kind == ChangeKind.DUPLICATION
        assert (obs.start, obs.end) == (3, 3)
        assert obs.reference_amino_acids == "A"

    def test_not_a_duplication(self):
        notation = ChangeNotation("NP_1", 4, 3, alternate_amino_acids="W", change_kind=ChangeKind.INSERTION)
        assert as_duplication(notation, "MKALPRGS") is None


def _context(protein_begin, protein_end, coding_begin, coding_end, ref, alt, ref_aa, alt_aa, name=None, **kwargs):
    return TranscriptChangeContext(
        protein_begin=protein_begin,
        protein_end=protein_end,
        coding_begin=coding_begin,
        coding_end=coding_end,
        reference_allele=ref,
        alternate_allele=alt,
        reference_amino_acids=ref_aa,
        alternate_amino_acids=alt_aa,
        hgvs_coding_name=name,
        **kwargs,
    )


class TestSimpleChanges:
    @pytest.mark.parametrize(
        "context,expected",
        [
            (_context(3, 3, 8, 8, "C", "T", "A", "V"), "NP_1:p.Ala3Val"),
            # deletions
            (_context(3, 3, 7, 9, "GCT", "", "A", ""), "NP_1:p.Ala3del"),
            (_context(2, 3, 4, 9, "AAAGCT", "", "KA", ""), "NP_1:p.Lys2_Ala3del"),
            # insertions
            (_context(3, 3, 10, 9, "", "TGG", "A", "AW"), "NP_1:p.Ala3_Leu4insTrp"),
            (_context(3, 3, 10, 9, "", "TAA", "A", "A*"), "NP_1:p.Ala3_Leu4insTer"),
            # duplications
            (_context(3, 3, 10, 9, "", "GCT", "A", "AA"), "NP_1:p.Ala3dup"),
            (_context(4, 4, 13, 12, "", "GCTCTG", "L", "LAL"), "NP_1:p.Ala3_Leu4dup"),
            # deletion-insertions
            (_context(2, 2, 4, 6, "AAA", "AATTGG", "K", "NW"), "NP_1:p.Lys2delinsAsnTrp"),
            (_context(2, 3, 4, 9, "AAAGCT", "TGG", "KA", "W"), "NP_1:p.Lys2_Ala3delinsTrp"),
            (_context(9, 9, 25, 27, "TAA", "TGGCAA", "*", "WQ"), "NP_1:p.Ter9delinsTrpGlnextTer13"),
        ],
    )
    def test_get_annotation(self, transcript, context, expected):
        assert HgvsProteinNomenclature(VariantEffects(), context, transcript).get_annotation() == expected

    def test_synonymous(self, transcript):
        context = _context(3, 3, 9, 9, "T", "C", "A", "A", name="c.9T>C")
        assert get_hgvs_protein_notation(context, transcript, VariantEffects()) == "c.9T>C(p.=)"

    def test_synonymous_without_coding_name(self, transcript):
        context = _context(3, 3, 9, 9, "T", "C", "A", "A")
        assert get_hgvs_protein_notation(context, transcript, VariantEffects()) is None

    def test_insertion_after_last_residue(self, transcript):
        context = _context(8, 8, 25, 24, "", "TGG", "S", "SW")
        assert get_hgvs_protein_notation(context, transcript, VariantEffects()) is None

    def test_insertion_at_single_position(self, transcript):
        # inserted before Leu4
        context = _context(4, 4, 10, 9, "", "TGG", "", "W")
        assert get_hgvs_protein_notation(context, transcript, VariantEffects()) == "NP_1:p.Ala3_Leu4insTrp"

    def test_insertion_at_single_position_in_repeat(self):
        # M followed by eleven prolines
        transcript = Transcript("ATG" + "CCT" * 11 + "TAA", protein_id="NP_1")
        context = _context(10, 10, 28, 27, "", "GCT", "", "A")
        assert get_hgvs_protein_notation(context, transcript, VariantEffects()) == "NP_1:p.Pro9_Pro10insAla"

    def test_coding_range_past_cds(self, transcript):
        context = _context(9, 9, 25, 28, "TAAG", "", "*", "")
        effects = VariantEffects(is_stop_lost=True)
        assert get_hgvs_protein_notation(context, transcript, effects) == "NP_1:p.Ter9del"


class TestShiftedChanges:
    @pytest.mark.parametrize(
        "context,expected",
        [
            # MKAALPRGS, either alanine deleted
            (_context(3, 3, 7, 9, "GCT", "", "A", ""), "NP_2.1:p.Ala4del"),
            # an alanine inserted after the lysine is a duplication of the last alanine
            (_context(2, 2, 7, 6, "", "GCT", "K", "KA"), "NP_2.1:p.Ala4dup"),
        ],
    )
    def test_rotated_to_3prime(self, repeat_transcript, context, expected):
        assert get_hgvs_protein_notation(context, repeat_transcript, VariantEffects()) == expected


class TestFrameshift:
    def test_frameshift_with_stop(self, shifted_stop_transcript):
        context = _context(3, 3, 7, 7, "G", "", "A", "X", name="c.7del")
        effects = VariantEffects(is_frameshift=True)
        assert get_hgvs_protein_notation(context, shifted_stop_transcript, effects) == "NP_1:p.Ala3LeufsTer8"

    def test_frameshift_without_stop(self, transcript_without_utr):
        context = _context(3, 3, 7, 7, "G", "", "A", "X", name="c.7del")
        effects = VariantEffects(is_frameshift=True)
        assert get_hgvs_protein_notation(context, transcript_without_utr, effects) == "NP_1:p.Ala3LeufsTer?"

    def test_frameshift_keeps_stop(self, shifted_stop_transcript):
        context = _context(9, 9, 26, 26, "A", "", "*", "X", name="c.26del")
        effects = VariantEffects(is_frameshift=True)
        assert get_hgvs_protein_notation(context, shifted_stop_transcript, effects) == "c.26del(p.=)"

    def test_frameshift_past_alternate_peptide(self, transcript_without_utr):
        # the alternate coding sequence ends before protein position 8
        context = _context(8, 9, 22, 27, "TCTTAA", "", "S*", "")
        effects = VariantEffects(is_frameshift=True)
        assert get_hgvs_protein_notation(context, transcript_without_utr, effects) == "NP_1:p.del8delfsTer?"

    def test_translation_is_cached(self, transcript):
        context = _context(3, 3, 7, 7, "G", "", "A", "X")
        nomenclature = HgvsProteinNomenclature(VariantEffects(is_frameshift=True), context, transcript)
        assert nomenclature.translated_alternate_cds is nomenclature.translated_alternate_cds


class TestStopAndStartChanges:
    @pytest.mark.parametrize(
        "context,with_utr,without_utr",
        [
            (_context(9, 9, 25, 25, "T", "C", "*", "Q"), "NP_1:p.Ter9GlnextTer12", "NP_1:p.Ter9GlnextTer?"),
            (_context(9, 9, 25, 27, "TAA", "", "*", ""), "NP_1:p.Ter9delextTer11", "NP_1:p.Ter9del"),
        ],
    )
    def test_stop_lost(self, transcript, transcript_without_utr, context, with_utr, without_utr):
        effects = VariantEffects(is_stop_lost=True)
        assert get_hgvs_protein_notation(context, transcript, effects) == with_utr
        assert get_hgvs_protein_notation(context, transcript_without_utr, effects) == without_utr

    def test_stop_retained(self, transcript):
        context = _context(9, 9, 27, 27, "A", "G", "*", "*", name="c.27A>G")
        effects = VariantEffects(is_stop_retained=True)
        assert get_hgvs_protein_notation(context, transcript, effects) == "c.27A>G(p.=)"

    def test_start_lost(self, transcript):
        context = _context(1, 1, 2, 2, "T", "C", "M", "T", name="c.2T>C")
        effects = VariantEffects(is_start_lost=True)
        assert get_hgvs_protein_notation(context, transcript, effects) == "NP_1:p.Met1?"

    def test_start_lost_insertion_range_is_ordered(self, transcript):
        context = _context(1, 1, 4, 3, "", "TGG", "M", "MW")
        effects = VariantEffects(is_start_lost=True)
        assert get_hgvs_protein_notation(context, transcript, effects) == "NP_1:p.MetLys1_?2"


class TestEntryGuards:
    @pytest.mark.parametrize(
        "context",
        [
            _context(3, 3, 8, 8, "C", "T", "A", "V", is_reference_call=True),
            _context(3, 3, 8, 8, "C", "T", "A", "V", has_valid_cds_start=False),
            _context(3, 3, 8, 8, "C", "T", "A", "V", has_valid_cds_end=False),
            _context(3, 3, 8, 8, "C", "N", "A", "X"),
        ],
    )
    def test_no_notation(self, transcript, context):
        assert get_hgvs_protein_notation(context, transcript, VariantEffects()) is None
