# The complete processing parameter set
"""
``ParameterSet`` owns one instance of every parameter group plus the
profile metadata (rank, colour label, trash flag, metadata overrides).

Field order below is the section order of a saved profile.
"""

import copy
from dataclasses import dataclass, field, fields
from typing import Dict, List, Tuple

from procprofile.config import settings
from .color import (
    BlackWhiteParams,
    ChannelMixerParams,
    ColorAppearanceParams,
    ColorManagementParams,
    ColorToningParams,
    FilmSimulationParams,
    HSVEqualizerParams,
    VibranceParams,
    WBParams,
)
from .curves import CurveIssue, check_curve
from .detail import (
    DefringeParams,
    DirPyrDenoiseParams,
    DirPyrEqualizerParams,
    ImpulseDenoiseParams,
    SharpenEdgeParams,
    SharpeningParams,
    SharpenMicroParams,
    WaveletParams,
)
from .fields import KIND_EXIF, KIND_IPTC, FieldSpec, field_specs, param, sub_group
from .geometry import (
    CACorrParams,
    CoarseTransformParams,
    CommonTransformParams,
    CropParams,
    DistortionParams,
    GradientParams,
    LensProfParams,
    PCVignetteParams,
    PerspectiveParams,
    ResizeParams,
    RotateParams,
    VignettingParams,
)
from .raw import RAWParams
from .tone import (
    EPDParams,
    FattalToneMappingParams,
    LCurveParams,
    RetinexParams,
    RGBCurvesParams,
    SHParams,
    ToneCurveParams,
)

GENERAL_SECTION = "General"
EXIF_SECTION = "Exif"
IPTC_SECTION = "IPTC"


@dataclass
class ParameterSet:
    """All the processing parameters applied to one image."""
    rank: int = param("Rank", 0, section=GENERAL_SECTION)
    color_label: int = param("ColorLabel", 0, section=GENERAL_SECTION)
    in_trash: bool = param("InTrash", False, section=GENERAL_SECTION)

    tone_curve: ToneCurveParams = sub_group("Exposure", ToneCurveParams)
    retinex: RetinexParams = sub_group("Retinex", RetinexParams)
    chmixer: ChannelMixerParams = sub_group("Channel Mixer", ChannelMixerParams)
    blackwhite: BlackWhiteParams = sub_group("Black & White", BlackWhiteParams)
    lab_curve: LCurveParams = sub_group("Luminance Curve", LCurveParams)
    sharpen_edge: SharpenEdgeParams = sub_group("SharpenEdge", SharpenEdgeParams)
    sharpen_micro: SharpenMicroParams = sub_group("SharpenMicro", SharpenMicroParams)
    sharpening: SharpeningParams = sub_group("Sharpening", SharpeningParams)
    vibrance: VibranceParams = sub_group("Vibrance", VibranceParams)
    wb: WBParams = sub_group("White Balance", WBParams)
    color_appearance: ColorAppearanceParams = sub_group("Color appearance", ColorAppearanceParams)
    impulse_denoise: ImpulseDenoiseParams = sub_group("Impulse Denoising", ImpulseDenoiseParams)
    defringe: DefringeParams = sub_group("Defringing", DefringeParams)
    dirpyr_denoise: DirPyrDenoiseParams = sub_group("Directional Pyramid Denoising", DirPyrDenoiseParams)
    epd: EPDParams = sub_group("EPD", EPDParams)
    fattal: FattalToneMappingParams = sub_group("FattalToneMapping", FattalToneMappingParams)
    sh: SHParams = sub_group("Shadows & Highlights", SHParams)
    crop: CropParams = sub_group("Crop", CropParams)
    coarse: CoarseTransformParams = sub_group("Coarse Transformation", CoarseTransformParams)
    common_trans: CommonTransformParams = sub_group("Common Properties for Transformations", CommonTransformParams)
    rotate: RotateParams = sub_group("Rotation", RotateParams)
    distortion: DistortionParams = sub_group("Distortion", DistortionParams)
    lens_prof: LensProfParams = sub_group("LensProfile", LensProfParams)
    perspective: PerspectiveParams = sub_group("Perspective", PerspectiveParams)
    gradient: GradientParams = sub_group("Gradient", GradientParams)
    pcvignette: PCVignetteParams = sub_group("PCVignette", PCVignetteParams)
    cacorrection: CACorrParams = sub_group("CACorrection", CACorrParams)
    vignetting: VignettingParams = sub_group("Vignetting Correction", VignettingParams)
    resize: ResizeParams = sub_group("Resize", ResizeParams)
    prsharpening: SharpeningParams = sub_group("PostResizeSharpening", SharpeningParams)
    icm: ColorManagementParams = sub_group("Color Management", ColorManagementParams)
    wavelet: WaveletParams = sub_group("Wavelet", WaveletParams)
    dirpyrequalizer: DirPyrEqualizerParams = sub_group("Directional Pyramid Equalizer", DirPyrEqualizerParams)
    hsvequalizer: HSVEqualizerParams = sub_group("HSV Equalizer", HSVEqualizerParams)
    film_simulation: FilmSimulationParams = sub_group("Film Simulation", FilmSimulationParams)
    rgb_curves: RGBCurvesParams = sub_group("RGB Curves", RGBCurvesParams)
    color_toning: ColorToningParams = sub_group("ColorToning", ColorToningParams)
    raw: RAWParams = sub_group("RAW", RAWParams)

    # Metadata overrides: tag name -> replacement value(s)
    exif: Dict[str, str] = field(default_factory=dict, metadata={"kind": KIND_EXIF, "section": EXIF_SECTION})
    iptc: Dict[str, List[str]] = field(default_factory=dict, metadata={"kind": KIND_IPTC, "section": IPTC_SECTION})

    # Provenance, not part of equality
    app_version: str = field(default=settings.APP_VERSION, compare=False)
    schema_version: int = field(default=settings.CURRENT_SCHEMA_VERSION, compare=False)

    def set_defaults(self) -> None:
        """Reset every group and the metadata to the working baseline."""
        fresh = ParameterSet()
        for f in fields(self):
            setattr(self, f.name, getattr(fresh, f.name))

    def copy(self) -> "ParameterSet":
        return copy.deepcopy(self)

    @classmethod
    def field_specs(cls) -> Tuple[FieldSpec, ...]:
        """Every persisted leaf field, in save order."""
        return field_specs(cls)

    def differences(self, other: "ParameterSet") -> List[str]:
        """Paths of the leaf fields whose values differ from ``other``."""
        return [spec.path for spec in self.field_specs() if spec.get(self) != spec.get(other)]

    def validate(self) -> List[CurveIssue]:
        """Curve fields whose control points are not well formed, one issue per field."""
        issues = []
        for spec in self.field_specs():
            if not spec.is_curve:
                continue
            problems = check_curve(spec.get(self), spec.domain, spec.is_flat)
            if problems:
                issues.append(CurveIssue(spec.path, "; ".join(problems)))
        return issues

    def save(self, dest, dest2=None, relativize_paths=False, edit_mask=None):
        """Write this set as a profile. See ``procprofile.io.save_profile``."""
        from procprofile.io.profile_io import save_profile
        return save_profile(self, dest, dest2=dest2, relativize_paths=relativize_paths, edit_mask=edit_mask)

    def load(self, path, edit_mask=None):
        """Replace this set with a profile's content. See ``procprofile.io.load_profile``."""
        from procprofile.io.profile_io import load_profile
        return load_profile(self, path, edit_mask=edit_mask)
