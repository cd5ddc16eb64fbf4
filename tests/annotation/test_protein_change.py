import itertools

import pytest

from hgvscantor.annotation.protein_change import (
    ChangeKind,
    classify_general_change,
    classify_protein_change,
    classify_specific_change,
)


class TestGeneralChange:
    @pytest.mark.parametrize(
        "reference,alternate,expected",
        [
            ("K", "K", ChangeKind.NONE),
            ("", "", ChangeKind.NONE),
            (None, "", ChangeKind.NONE),
            ("", "A", ChangeKind.INSERTION),
            ("A", "", ChangeKind.DELETION),
            ("A", None, ChangeKind.DELETION),
            ("A", "V", ChangeKind.UNKNOWN),
            ("AK", "V", ChangeKind.UNKNOWN),
        ],
    )
    def test_classify_general_change(self, reference, alternate, expected):
        assert classify_general_change(reference, alternate) == expected


class TestSpecificChange:
    @pytest.mark.parametrize(
        "general,reference,alternate,is_frameshift,expected",
        [
            (ChangeKind.UNKNOWN, "A", "V", True, ChangeKind.FRAMESHIFT),
            (ChangeKind.INSERTION, "", "A", True, ChangeKind.FRAMESHIFT),
            (ChangeKind.INSERTION, "", "A", False, ChangeKind.INSERTION),
            (ChangeKind.UNKNOWN, "A", "V", False, ChangeKind.SUBSTITUTION),
            (ChangeKind.DELETION, "A", "", False, ChangeKind.DELETION),
            (ChangeKind.DELETION, "AK", "", False, ChangeKind.DELETION),
            (ChangeKind.UNKNOWN, "KA", "AKAW", False, ChangeKind.DUPLICATION),
            (ChangeKind.UNKNOWN, "K", "NW", False, ChangeKind.DELETION_INSERTION),
            (ChangeKind.UNKNOWN, "KA", "W", False, ChangeKind.DELETION_INSERTION),
            (ChangeKind.UNKNOWN, "KA", "WQ", False, ChangeKind.SUBSTITUTION),
        ],
    )
    def test_classify_specific_change(self, general, reference, alternate, is_frameshift, expected):
        assert classify_specific_change(general, reference, alternate, is_frameshift) == expected


class TestClassifyProteinChange:
    def test_identical_residues_are_never_refined(self):
        assert classify_protein_change("K", "K", True) == ChangeKind.NONE

    def test_total_over_lengths(self):
        residues = ["", "A", "AK", "KAK"]
        for reference, alternate, is_frameshift in itertools.product(residues, residues, [True, False]):
            obs = classify_protein_change(reference, alternate, is_frameshift)
            assert isinstance(obs, ChangeKind)
            if reference == alternate:
                assert obs == ChangeKind.NONE
            elif is_frameshift:
                assert obs == ChangeKind.FRAMESHIFT

    def test_has_value(self):
        assert ChangeKind.has_value("delins")
        assert not ChangeKind.has_value("inversion")
