"""Tests for the edit mask."""

import pytest

from procprofile.params import EditMask, ParameterSet


class TestFlags:
    """Tests for setting and reading flags."""

    def test_initial_value(self):
        """Every flag starts at the constructor value."""
        assert EditMask().count() == 0
        full = EditMask(True)
        assert full.count() == len(full.paths())

    def test_covers_every_field(self):
        """The mask has one flag per leaf field."""
        mask = EditMask()
        assert mask.paths() == [spec.path for spec in ParameterSet.field_specs()]

    def test_mark_and_read(self):
        """Marked paths read back as set."""
        mask = EditMask()
        mask.mark("tone_curve.expcomp")
        assert mask.is_set("tone_curve.expcomp")
        assert mask["tone_curve.expcomp"]
        assert mask.marked() == ["tone_curve.expcomp"]
        mask.mark("tone_curve.expcomp", False)
        assert mask.count() == 0

    def test_unknown_path(self):
        """Unknown paths raise KeyError."""
        mask = EditMask()
        with pytest.raises(KeyError):
            mask.mark("tone_curve.nonexistent")
        with pytest.raises(KeyError):
            mask.is_set("nope")
        assert "nope" not in mask
        assert "wb.method" in mask

    def test_set_all(self):
        """set changes every flag."""
        mask = EditMask()
        mask.set(True)
        assert mask.count() == len(mask.paths())
        mask.set(False)
        assert mask.count() == 0

    def test_clear_general(self):
        """clear_general leaves the other flags alone."""
        mask = EditMask(True)
        mask.clear_general()
        assert not mask.is_set("rank")
        assert not mask.is_set("color_label")
        assert not mask.is_set("in_trash")
        assert mask.is_set("crop.enabled")

    def test_copy_independent(self):
        """Copies do not share flags."""
        mask = EditMask()
        clone = mask.copy()
        clone.mark("rank")
        assert mask != clone
        assert not mask.is_set("rank")

    def test_repr(self):
        """repr shows the marked count."""
        mask = EditMask()
        mask.mark("rank")
        assert repr(mask).startswith("EditMask(1/")


class TestInitFrom:
    """Tests for building a mask from several parameter sets."""

    def test_equal_sets_mark_everything(self):
        """Fields equal in every set are marked."""
        mask = EditMask()
        mask.init_from([ParameterSet(), ParameterSet(), ParameterSet()])
        assert mask.count() == len(mask.paths())

    def test_differing_field_unmarked(self, edited_params):
        """A field that differs in any set is unmarked."""
        mask = EditMask()
        mask.init_from([ParameterSet(), ParameterSet(), edited_params])
        assert not mask.is_set("tone_curve.expcomp")
        assert not mask.is_set("sharpening.threshold")
        assert not mask.is_set("exif")
        assert mask.is_set("tone_curve.contrast")

    def test_single_set(self, edited_params):
        """A single set marks every field."""
        mask = EditMask()
        mask.init_from([edited_params])
        assert mask.count() == len(mask.paths())

    def test_empty_clears(self):
        """No sets clears every flag."""
        mask = EditMask(True)
        mask.init_from([])
        assert mask.count() == 0
