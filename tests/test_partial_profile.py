"""Tests for partial profiles."""

from procprofile.params import AutoPartialProfile, EditMask, ParameterSet, PartialProfile


class TestApply:
    """Tests for applying a partial profile to a parameter set."""

    def test_masked_fields_only(self, edited_params):
        """Only marked fields are copied; the rest of the target is kept."""
        mask = EditMask()
        mask.mark("tone_curve.expcomp")
        mask.mark("sharpening.threshold")

        dest = ParameterSet()
        dest.crop.enabled = True
        dest.rank = 5
        PartialProfile(edited_params, mask).apply_to(dest)

        assert dest.tone_curve.expcomp == 0.75
        assert dest.sharpening.threshold.to_control_points() == [10, 60, 1500, 1000]
        assert dest.sharpening.enabled is False
        assert dest.crop.enabled is True
        assert dest.rank == 5

    def test_every_field_without_mask(self, edited_params):
        """No mask copies the whole set."""
        dest = ParameterSet()
        PartialProfile(edited_params).apply_to(dest)
        assert dest == edited_params

    def test_full_mask_equals_source(self, edited_params):
        """A fully set mask gives a target equal to the source."""
        dest = ParameterSet()
        dest.crop.enabled = True
        PartialProfile(edited_params, EditMask(True)).apply_to(dest)
        assert dest == edited_params

    def test_empty_mask_changes_nothing(self, edited_params):
        """An empty mask leaves the target alone."""
        dest = ParameterSet()
        PartialProfile(edited_params, EditMask()).apply_to(dest)
        assert dest == ParameterSet()

    def test_applied_values_not_shared(self, edited_params):
        """Applied lists and curves are copies."""
        mask = EditMask()
        mask.mark("tone_curve.curve")
        mask.mark("iptc")
        dest = ParameterSet()
        PartialProfile(edited_params, mask).apply_to(dest)
        dest.tone_curve.curve.append(0.5)
        dest.iptc["Keywords"].append("x")
        assert edited_params.tone_curve.curve == [1.0, 0.0, 0.0, 0.5, 0.6, 1.0, 1.0]
        assert edited_params.iptc["Keywords"] == ["film", "a;b"]

    def test_missing_params_or_dest(self):
        """Nothing happens without source or destination."""
        PartialProfile().apply_to(ParameterSet())
        PartialProfile(ParameterSet()).apply_to(None)


class TestLifecycle:
    """Tests for creating and releasing partial profiles."""

    def test_shared_references(self, default_params):
        """By default the profile refers to the caller's objects."""
        mask = EditMask()
        partial = PartialProfile(default_params, mask)
        assert partial.pparams is default_params
        assert partial.pedited is mask

    def test_full_copy(self, default_params):
        """full_copy stores independent copies."""
        mask = EditMask()
        partial = PartialProfile(default_params, mask, full_copy=True)
        assert partial.pparams is not default_params
        assert partial.pparams == default_params
        partial.pedited.mark("rank")
        assert not mask.is_set("rank")

    def test_create(self):
        """create allocates defaults with every flag at the given value."""
        partial = PartialProfile.create(True)
        assert partial.pparams == ParameterSet()
        assert partial.pedited.count() == len(partial.pedited.paths())

    def test_set_and_clear_general(self):
        """Flag helpers act on the mask."""
        partial = PartialProfile.create()
        partial.set(True)
        partial.clear_general()
        assert not partial.pedited.is_set("rank")
        assert partial.pedited.is_set("wb.method")

    def test_flag_helpers_without_mask(self):
        """Flag helpers are no-ops without a mask."""
        partial = PartialProfile(ParameterSet())
        partial.set(True)
        partial.clear_general()
        assert partial.pedited is None

    def test_delete_instance(self):
        """delete_instance drops both references."""
        partial = PartialProfile.create()
        partial.delete_instance()
        assert partial.pparams is None
        assert partial.pedited is None

    def test_auto_copy(self):
        """AutoPartialProfile copies are independent."""
        auto = AutoPartialProfile()
        auto.pparams.rank = 2
        auto.pedited.mark("rank")
        clone = auto.copy()
        clone.pparams.rank = 4
        clone.pedited.mark("rank", False)
        assert auto.pparams.rank == 2
        assert auto.pedited.is_set("rank")


class TestLoad:
    """Tests for loading into a partial profile."""

    def test_load_marks_present_keys(self, write_profile):
        """Loading marks only the keys found in the file."""
        path = write_profile("[Version]\nVersion=331\n\n[Exposure]\nCompensation=1.5\n\n[Crop]\nEnabled=true\n")
        partial = PartialProfile()
        result = partial.load(path)
        assert result.ok
        assert partial.pedited.marked() == ["tone_curve.expcomp", "crop.enabled"]
        assert partial.pparams.tone_curve.expcomp == 1.5

    def test_load_then_apply(self, write_profile):
        """Settings from a partial file land on a base set."""
        path = write_profile("[Version]\nVersion=331\n\n[White Balance]\nSetting=Daylight\n")
        partial = AutoPartialProfile()
        partial.load(path)

        base = ParameterSet()
        base.rank = 4
        partial.apply_to(base)
        assert base.wb.method == "Daylight"
        assert base.rank == 4
