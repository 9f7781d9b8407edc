"""Tests for saving and loading profiles."""

import os

import pytest

from procprofile.config import settings
from procprofile.io import load_profile, save_profile, serialize_profile
from procprofile.io.profile_io import relativize_path, resolve_path
from procprofile.params import EditMask, LcMode, ParameterSet, PSMotionCorrection, RenderingIntent
from procprofile.utils.errors import ProfileStatus


def _read(path):
    with open(path, "rb") as f:
        return f.read()


class TestRoundTrip:
    """Tests for save followed by load."""

    def test_defaults(self, default_profile):
        """A saved default set loads back equal."""
        loaded = ParameterSet()
        loaded.rank = 5
        result = loaded.load(default_profile)
        assert result.status == ProfileStatus.OK
        assert loaded == ParameterSet()

    def test_edited(self, tmp_path, edited_params):
        """Every edited value survives a round trip."""
        path = str(tmp_path / "edited.pp3")
        assert edited_params.save(path).ok

        loaded = ParameterSet()
        result = loaded.load(path)
        assert result.status == ProfileStatus.OK
        assert loaded == edited_params
        assert loaded.iptc == {"Keywords": ["film", "a;b"]}
        assert loaded.exif == {"Exif.Photo.UserComment": "test shot"}

    def test_enums_and_floats(self, tmp_path, default_params):
        """Enum members and awkward floats read back unchanged."""
        default_params.raw.bayersensor.pixel_shift_motion_correction = PSMotionCorrection.GRID_5X5
        default_params.icm.output_intent = RenderingIntent.ABSOLUTE
        default_params.lens_prof.lc_mode = LcMode.LENSFUNMANUAL
        default_params.rotate.degree = 0.1 + 0.2
        default_params.wavelet.level0noise.set_values(12.5, 33.25)
        path = str(tmp_path / "p.pp3")
        default_params.save(path)

        loaded = ParameterSet()
        loaded.load(path)
        assert loaded == default_params
        assert loaded.rotate.degree == 0.1 + 0.2

    def test_text_with_special_characters(self, tmp_path, default_params):
        """Strings keep newlines, leading spaces and delimiters."""
        default_params.exif["Exif.Image.ImageDescription"] = " first\nsecond; third"
        default_params.film_simulation.clut_filename = "clut;1.png"
        path = str(tmp_path / "p.pp3")
        default_params.save(path)

        loaded = ParameterSet()
        loaded.load(path)
        assert loaded.exif["Exif.Image.ImageDescription"] == " first\nsecond; third"
        assert loaded.film_simulation.clut_filename == "clut;1.png"

    def test_trailing_whitespace(self, tmp_path, default_params):
        """Strings and paths ending in whitespace are not trimmed."""
        default_params.exif["Exif.Photo.UserComment"] = "note "
        default_params.film_simulation.clut_filename = "clut.png\t "
        default_params.raw.dark_frame = str(tmp_path / "darks" / "dark.nef ")
        path = str(tmp_path / "p.pp3")
        default_params.save(path)

        loaded = ParameterSet()
        loaded.load(path)
        assert loaded.exif["Exif.Photo.UserComment"] == "note "
        assert loaded.film_simulation.clut_filename == "clut.png\t "
        assert loaded.raw.dark_frame == default_params.raw.dark_frame
        assert loaded == default_params

    def test_load_marks_every_field(self, default_profile):
        """A complete file marks every field in the edit mask."""
        mask = EditMask()
        ParameterSet().load(default_profile, edit_mask=mask)
        assert mask.count() == len(mask.paths())
        assert mask.is_set("exif") and mask.is_set("iptc")

    def test_provenance(self, default_profile):
        """The writer version is reported and kept."""
        loaded = ParameterSet()
        result = loaded.load(default_profile)
        assert result.app_version == settings.APP_VERSION
        assert result.file_version == settings.CURRENT_SCHEMA_VERSION
        assert loaded.schema_version == settings.CURRENT_SCHEMA_VERSION


class TestSerialize:
    """Tests for the written text."""

    def test_version_first(self, default_params):
        """The version section leads the document."""
        text = serialize_profile(default_params)
        assert text.startswith(
            f"[Version]\nAppVersion={settings.APP_VERSION}\nVersion={settings.CURRENT_SCHEMA_VERSION}\n\n[General]\n")

    def test_current_schema_written(self, default_params):
        """Sets loaded from old files are written at the current schema."""
        default_params.schema_version = 300
        assert f"Version={settings.CURRENT_SCHEMA_VERSION}\n" in serialize_profile(default_params)

    def test_indexed_keys(self, edited_params):
        """Indexed lists are written one key per element."""
        text = serialize_profile(edited_params)
        assert "Contrast3=15\n" in text
        assert "Contrast1=0\n" in text
        assert "Mult0=" in text

    def test_threshold_and_enum(self, edited_params):
        """Threshold curves are lists; integer enums are numbers."""
        text = serialize_profile(edited_params)
        assert "Threshold=10;60;1500;1000;\n" in text
        assert "PixelShiftMotionCorrection=5\n" in text
        assert "OutputProfileIntent=Relative\n" in text

    def test_edit_mask_limits_output(self, edited_params):
        """With a mask only marked fields are written."""
        mask = EditMask()
        mask.mark("tone_curve.expcomp")
        text = serialize_profile(edited_params, edit_mask=mask)
        assert "[Exposure]\nCompensation=0.75\n" in text
        assert "[Sharpening]" not in text
        assert "Rank=" not in text

    def test_deterministic(self, edited_params):
        """Equal sets give identical text."""
        assert serialize_profile(edited_params) == serialize_profile(edited_params.copy())


class TestPartialFiles:
    """Tests for files with missing or bad keys."""

    def test_removed_key_keeps_default(self, tmp_path, edited_params):
        """A key removed from the file leaves that field at its default."""
        path = tmp_path / "p.pp3"
        edited_params.save(str(path))
        text = path.read_text(encoding="utf-8")
        assert "Compensation=0.75\n" in text
        path.write_text(text.replace("Compensation=0.75\n", ""), encoding="utf-8")

        loaded = ParameterSet()
        mask = EditMask()
        result = loaded.load(str(path), edit_mask=mask)
        assert result.status == ProfileStatus.OK
        assert loaded.tone_curve.expcomp == 0.0
        assert not mask.is_set("tone_curve.expcomp")
        assert mask.is_set("tone_curve.contrast")

        expected = edited_params.copy()
        expected.tone_curve.expcomp = 0.0
        assert loaded == expected

    def test_bad_value_falls_back(self, write_profile):
        """An undecodable value keeps its default and is reported."""
        path = write_profile(
            "[Version]\nVersion=331\n\n"
            "[Exposure]\nCompensation=bright\nContrast=12\n\n"
            "[Sharpening]\nThreshold=1;2;\n"
        )
        loaded = ParameterSet()
        mask = EditMask()
        result = loaded.load(path, edit_mask=mask)
        assert result.status == ProfileStatus.PARTIAL_DEFAULTS
        assert result.ok
        assert {issue.path for issue in result.issues} == {"tone_curve.expcomp", "sharpening.threshold"}
        assert loaded.tone_curve.expcomp == 0.0
        assert loaded.tone_curve.contrast == 12
        assert loaded.sharpening.threshold.to_control_points() == [20, 80, 2000, 1200]
        assert not mask.is_set("tone_curve.expcomp")
        assert mask.is_set("tone_curve.contrast")

    def test_unknown_enum_value(self, write_profile):
        """Unknown enum text is a field issue."""
        path = write_profile("[Version]\nVersion=331\n\n[LensProfile]\nLcMode=magic\n")
        loaded = ParameterSet()
        result = loaded.load(path)
        assert result.status == ProfileStatus.PARTIAL_DEFAULTS
        assert loaded.lens_prof.lc_mode == LcMode.NONE

    def test_wrong_list_length(self, write_profile):
        """Fixed-length lists reject other lengths."""
        path = write_profile("[Version]\nVersion=331\n\n[Channel Mixer]\nRed=100;0;\n")
        loaded = ParameterSet()
        result = loaded.load(path)
        assert [issue.path for issue in result.issues] == ["chmixer.red"]
        assert loaded.chmixer.red == [100, 0, 0]

    def test_malformed_curve_falls_back(self, write_profile):
        """A curve with the wrong number of values keeps its default and stays unmarked."""
        path = write_profile("[Version]\nVersion=331\n\n[Exposure]\nCurve=1.0;0.5;\nContrast=5\n")
        loaded = ParameterSet()
        mask = EditMask()
        result = loaded.load(path, edit_mask=mask)
        assert result.status == ProfileStatus.PARTIAL_DEFAULTS
        assert [issue.path for issue in result.issues] == ["tone_curve.curve"]
        assert loaded.tone_curve.curve == ParameterSet().tone_curve.curve
        assert not mask.is_set("tone_curve.curve")
        assert mask.is_set("tone_curve.contrast")

    def test_flat_curve_needs_quadruplets(self, write_profile):
        """Flat curves store four values per control point."""
        path = write_profile(
            "[Version]\nVersion=331\n\n"
            "[Retinex]\nTransmissionCurve=1;0.0;0.5;0.35;0.35;1.0;0.5;\n"
            "GainTransmissionCurve=1;0.0;0.5;0.35;0.35;1.0;0.5;0.35;0.35;\n"
        )
        loaded = ParameterSet()
        result = loaded.load(path)
        assert [issue.path for issue in result.issues] == ["retinex.transmission_curve"]
        assert loaded.retinex.transmission_curve == ParameterSet().retinex.transmission_curve
        assert loaded.retinex.gaintransmission_curve == [1.0, 0.0, 0.5, 0.35, 0.35, 1.0, 0.5, 0.35, 0.35]

    def test_partial_indexed_list(self, write_profile):
        """Missing indexed elements keep their defaults."""
        path = write_profile("[Version]\nVersion=331\n\n[Wavelet]\nContrast2=7\n")
        loaded = ParameterSet()
        mask = EditMask()
        loaded.load(path, edit_mask=mask)
        assert loaded.wavelet.c == [0, 7, 0, 0, 0, 0, 0, 0, 0]
        assert mask.is_set("wavelet.c")

    def test_unknown_keys_ignored(self, write_profile):
        """Keys and sections this version does not know are skipped."""
        path = write_profile("[Version]\nVersion=331\n\n[Exposure]\nFancy=1\n\n[Nowhere]\nX=1\n")
        result = ParameterSet().load(path)
        assert result.status == ProfileStatus.OK

    def test_missing_version(self, write_profile):
        """A file without a version section is read at the current schema."""
        path = write_profile("[Crop]\nEnabled=true\nX=10\n")
        loaded = ParameterSet()
        result = loaded.load(path)
        assert result.status == ProfileStatus.OK
        assert result.file_version == settings.CURRENT_SCHEMA_VERSION
        assert result.app_version is None
        assert loaded.crop.enabled and loaded.crop.x == 10

    def test_newer_schema(self, write_profile):
        """Files from a newer schema load with a distinct status."""
        path = write_profile("[Version]\nVersion=9999\n\n[Exposure]\nCompensation=0.5\nFutureKey=1\n")
        loaded = ParameterSet()
        result = loaded.load(path)
        assert result.status == ProfileStatus.NEWER_SCHEMA
        assert result.newer_schema
        assert result.ok
        assert loaded.tone_curve.expcomp == 0.5
        assert loaded.schema_version == settings.CURRENT_SCHEMA_VERSION

    def test_loading_resets_previous_values(self, write_profile, edited_params):
        """Fields absent from the file do not keep values from before the load."""
        path = write_profile("[Version]\nVersion=331\n\n[Crop]\nEnabled=true\n")
        edited_params.load(path)
        assert edited_params.rank == 0
        assert edited_params.exif == {}
        assert edited_params.crop.enabled


class TestLoadFailures:
    """Tests for files that cannot be loaded at all."""

    def test_not_found(self, tmp_path):
        """A missing file is reported and the set is reset."""
        params = ParameterSet()
        params.rank = 4
        result = params.load(str(tmp_path / "missing.pp3"))
        assert result.status == ProfileStatus.NOT_FOUND
        assert result.is_fatal
        assert params == ParameterSet()

    def test_unreadable(self, tmp_path):
        """Bytes that are not UTF-8 make the file unreadable."""
        path = tmp_path / "binary.pp3"
        path.write_bytes(b"\xff\xfe\x00[Version]")
        result = ParameterSet().load(str(path))
        assert result.status == ProfileStatus.UNREADABLE

    def test_directory(self, tmp_path):
        """A directory cannot be read as a profile."""
        result = ParameterSet().load(str(tmp_path))
        assert result.status == ProfileStatus.UNREADABLE

    @pytest.mark.parametrize("text", ["", "no sections here\n", "Key=1\n[A]\n"])
    def test_malformed(self, write_profile, text):
        """Text without section structure is malformed."""
        mask = EditMask(True)
        result = ParameterSet().load(write_profile(text), edit_mask=mask)
        assert result.status == ProfileStatus.MALFORMED
        assert mask.count() == 0


class TestSave:
    """Tests for writing profile files."""

    def test_two_destinations_identical(self, tmp_path, edited_params):
        """Both copies are byte-identical."""
        first = str(tmp_path / "a" / "img.pp3")
        second = str(tmp_path / "cache" / "img.pp3")
        result = edited_params.save(first, dest2=second)
        assert result.ok
        assert result.written == [first, second]
        assert _read(first) == _read(second)

    def test_overwrite(self, tmp_path, default_params, edited_params):
        """Saving replaces an existing file."""
        path = str(tmp_path / "p.pp3")
        edited_params.save(path)
        default_params.save(path)
        loaded = ParameterSet()
        loaded.load(path)
        assert loaded == default_params

    def test_no_temporary_files_left(self, tmp_path, default_params):
        """Only the profile remains in the directory."""
        default_params.save(str(tmp_path / "p.pp3"))
        assert os.listdir(tmp_path) == ["p.pp3"]

    def test_write_failure(self, tmp_path, default_params):
        """A failing destination is reported; the other is still written."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory", encoding="utf-8")
        good = str(tmp_path / "good.pp3")
        bad = str(blocker / "bad.pp3")
        result = save_profile(default_params, good, dest2=bad)
        assert result.status == ProfileStatus.WRITE_FAILURE
        assert not result.ok
        assert result.written == [good]
        assert result.failed == [bad]
        assert os.path.exists(good)

    def test_partial_save_and_load(self, tmp_path, edited_params):
        """A masked save followed by a load gives back the marked fields only."""
        mask = EditMask()
        mask.mark("wb.method")
        mask.mark("sharpening.threshold")
        path = str(tmp_path / "partial.pp3")
        edited_params.save(path, edit_mask=mask)

        loaded = ParameterSet()
        loaded_mask = EditMask()
        loaded.load(path, edit_mask=loaded_mask)
        assert loaded_mask == mask
        assert loaded.wb.method == "Daylight"
        assert loaded.tone_curve.expcomp == 0.0


class TestPaths:
    """Tests for relative path handling."""

    def test_relativize_inside(self, tmp_path):
        """Paths inside the base directory become relative."""
        base = str(tmp_path)
        assert relativize_path(os.path.join(base, "lenses", "a.lcp"), base) == os.path.join("lenses", "a.lcp")

    def test_relativize_outside(self, tmp_path):
        """Paths outside the base directory are unchanged."""
        base = str(tmp_path / "profiles")
        other = str(tmp_path / "elsewhere" / "a.lcp")
        assert relativize_path(other, base) == other
        assert relativize_path("", base) == ""
        assert relativize_path("rel/a.lcp", base) == "rel/a.lcp"

    def test_resolve(self, tmp_path):
        """Relative paths are joined to the base directory."""
        base = str(tmp_path)
        assert resolve_path("lenses/a.lcp", base) == os.path.join(base, "lenses", "a.lcp")
        assert resolve_path("", base) == ""

    def test_save_relative_load_absolute(self, tmp_path, default_params):
        """Relativized paths resolve back against the profile's directory."""
        lcp = str(tmp_path / "lenses" / "a.lcp")
        dark = "/elsewhere/dark.nef"
        default_params.lens_prof.lcp_file = lcp
        default_params.raw.dark_frame = dark
        path = tmp_path / "img.pp3"
        default_params.save(str(path), relativize_paths=True)

        text = path.read_text(encoding="utf-8")
        assert f"LCPFile={os.path.join('lenses', 'a.lcp')}\n" in text
        assert f"DarkFrame={dark}\n" in text

        loaded = ParameterSet()
        loaded.load(str(path))
        assert loaded.lens_prof.lcp_file == lcp
        assert loaded.raw.dark_frame == dark

    def test_absolute_by_default(self, tmp_path, default_params):
        """Without relativizing, paths are written as given."""
        lcp = str(tmp_path / "a.lcp")
        default_params.lens_prof.lcp_file = lcp
        path = tmp_path / "img.pp3"
        default_params.save(str(path))
        assert f"LCPFile={lcp}\n" in path.read_text(encoding="utf-8")
