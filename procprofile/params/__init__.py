# Processing parameters: groups, the aggregate set, edit masks and partial profiles.

from .threshold import ThresholdCurve
from .curves import CurveIssue, check_curve
from .fields import FieldSpec, field_specs, param_group
from .tone import (
    ToneCurveMode,
    ToneCurveParams,
    LCurveParams,
    RGBCurvesParams,
    RetinexParams,
    EPDParams,
    FattalToneMappingParams,
    SHParams,
)
from .color import (
    WB_ENTRIES,
    WBEntry,
    WBType,
    find_wb_entry,
    WBParams,
    VibranceParams,
    ColorToningParams,
    ColorAppearanceTCMode,
    ColorAppearanceCTCMode,
    ColorAppearanceParams,
    ChannelMixerParams,
    BlackWhiteCurveMode,
    BlackWhiteParams,
    RenderingIntent,
    ColorManagementParams,
    HSVEqualizerParams,
    FilmSimulationParams,
)
from .detail import (
    SharpeningParams,
    SharpenEdgeParams,
    SharpenMicroParams,
    DefringeParams,
    ImpulseDenoiseParams,
    DirPyrDenoiseParams,
    DirPyrEqualizerParams,
    WaveletParams,
)
from .geometry import (
    CropParams,
    CoarseTransformParams,
    CommonTransformParams,
    RotateParams,
    DistortionParams,
    LcMode,
    LensProfParams,
    PerspectiveParams,
    GradientParams,
    PCVignetteParams,
    CACorrParams,
    VignettingParams,
    ResizeParams,
)
from .raw import (
    BAYER_METHOD_STRINGS,
    XTRANS_METHOD_STRINGS,
    FF_BLUR_TYPE_STRINGS,
    PSMotionCorrection,
    PSMotionCorrectionMethod,
    BayerSensorParams,
    XTransSensorParams,
    RAWParams,
)
from .procparams import ParameterSet
from .edited import EditMask
from .partial import PartialProfile, AutoPartialProfile

__all__ = [
    'ThresholdCurve',
    'CurveIssue',
    'check_curve',
    'FieldSpec',
    'field_specs',
    'param_group',
    # Tone
    'ToneCurveMode',
    'ToneCurveParams',
    'LCurveParams',
    'RGBCurvesParams',
    'RetinexParams',
    'EPDParams',
    'FattalToneMappingParams',
    'SHParams',
    # Colour
    'WB_ENTRIES',
    'WBEntry',
    'WBType',
    'find_wb_entry',
    'WBParams',
    'VibranceParams',
    'ColorToningParams',
    'ColorAppearanceTCMode',
    'ColorAppearanceCTCMode',
    'ColorAppearanceParams',
    'ChannelMixerParams',
    'BlackWhiteCurveMode',
    'BlackWhiteParams',
    'RenderingIntent',
    'ColorManagementParams',
    'HSVEqualizerParams',
    'FilmSimulationParams',
    # Detail
    'SharpeningParams',
    'SharpenEdgeParams',
    'SharpenMicroParams',
    'DefringeParams',
    'ImpulseDenoiseParams',
    'DirPyrDenoiseParams',
    'DirPyrEqualizerParams',
    'WaveletParams',
    # Geometry
    'CropParams',
    'CoarseTransformParams',
    'CommonTransformParams',
    'RotateParams',
    'DistortionParams',
    'LcMode',
    'LensProfParams',
    'PerspectiveParams',
    'GradientParams',
    'PCVignetteParams',
    'CACorrParams',
    'VignettingParams',
    'ResizeParams',
    # Raw
    'BAYER_METHOD_STRINGS',
    'XTRANS_METHOD_STRINGS',
    'FF_BLUR_TYPE_STRINGS',
    'PSMotionCorrection',
    'PSMotionCorrectionMethod',
    'BayerSensorParams',
    'XTransSensorParams',
    'RAWParams',
    # Aggregate
    'ParameterSet',
    'EditMask',
    'PartialProfile',
    'AutoPartialProfile',
]
