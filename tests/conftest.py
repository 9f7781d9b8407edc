import pytest


@pytest.fixture
def default_params():
    """Returns a ParameterSet with every setting at its default."""
    from procprofile.params import ParameterSet
    return ParameterSet()


@pytest.fixture
def edited_params():
    """Returns a ParameterSet with a handful of settings changed."""
    from procprofile.params import ParameterSet
    params = ParameterSet()
    params.rank = 3
    params.tone_curve.expcomp = 0.75
    params.tone_curve.curve = [1.0, 0.0, 0.0, 0.5, 0.6, 1.0, 1.0]
    params.sharpening.enabled = True
    params.sharpening.threshold.set_values(10, 60, 1500, 1000)
    params.wavelet.c[2] = 15
    params.wb.method = "Daylight"
    params.exif = {"Exif.Photo.UserComment": "test shot"}
    params.iptc = {"Keywords": ["film", "a;b"]}
    return params


@pytest.fixture
def write_profile(tmp_path):
    """Returns a function writing profile text to a file and returning its path."""
    def _write(text, name="profile.pp3"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def default_profile(tmp_path, default_params):
    """Path of a saved default profile."""
    path = str(tmp_path / "default.pp3")
    result = default_params.save(path)
    assert result.ok
    return path
