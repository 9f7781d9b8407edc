# Tone and contrast parameter groups
from enum import Enum

import numpy as np

from procprofile.config import settings
from . import curves
from .fields import curve_param, param, param_group


class ToneCurveMode(Enum):
    STD = "Standard"                         # Curve applied on every component individually
    WEIGHTEDSTD = "WeightedStd"              # Weighted standard mode
    FILMLIKE = "FilmLike"                    # Film-like mode
    SATANDVALBLENDING = "SatAndValueBlending"  # Modify the Saturation and Value channel
    LUMINANCE = "Luminance"                  # Modify the Luminance channel with Rec 709 coefficients
    PERCEPTUAL = "Perceptual"                # Keep colour appearance constant


@param_group
class ToneCurveParams:
    """Parameters of the exposure tone curve and highlight reconstruction."""
    autoexp: bool = param("Auto", False)
    clip: float = param("Clip", 0.02)
    expcomp: float = param("Compensation", 0.0)
    brightness: int = param("Brightness", 0)
    contrast: int = param("Contrast", 0)
    saturation: int = param("Saturation", 0)
    black: int = param("Black", 0)
    hlcompr: int = param("HighlightCompr", 0)           # Highlight Recovery's compression
    hlcomprthresh: int = param("HighlightComprThreshold", 33)
    shcompr: int = param("ShadowCompr", 50)
    curve_mode: ToneCurveMode = param("CurveMode", ToneCurveMode.STD)
    curve_mode2: ToneCurveMode = param("CurveMode2", ToneCurveMode.STD)
    curve: list = curve_param("Curve")
    curve2: list = curve_param("Curve2")
    hrenabled: bool = param("Enabled", False, section="HLRecovery")
    method: str = param("Method", "Blend", section="HLRecovery")

    @staticmethod
    def hl_reconstruction_necessary(hist_red_raw, hist_green_raw, hist_blue_raw) -> bool:
        """
        True when a raw histogram shows clipping on either end.

        Each histogram is a 256-bin sequence of sample counts.
        """
        limit = settings.CURVE_DEFAULTS["hl_clip_bin_limit"]
        for hist in (hist_red_raw, hist_green_raw, hist_blue_raw):
            counts = np.asarray(hist)
            if counts.size == 0:
                continue
            if counts[0] > limit or counts[-1] > limit:
                return True
        return False


@param_group
class LCurveParams:
    """Parameters of the CIELAB luminance curve."""
    brightness: int = param("Brightness", 0)
    contrast: int = param("Contrast", 0)
    chromaticity: int = param("Chromaticity", 0)
    avoidcolorshift: bool = param("AvoidColorShift", False)
    rstprotection: float = param("RedAndSkinTonesProtection", 0.0)
    lcredsk: bool = param("LCredsk", True)
    lcurve: list = curve_param("LCurve")
    acurve: list = curve_param("aCurve")
    bcurve: list = curve_param("bCurve")
    cccurve: list = curve_param("ccCurve")
    chcurve: list = curve_param("chCurve", curves.flat_linear_curve)
    lhcurve: list = curve_param("lhCurve", curves.flat_linear_curve)
    hhcurve: list = curve_param("hhCurve", curves.flat_linear_curve)
    lccurve: list = curve_param("LcCurve")
    clcurve: list = curve_param("ClCurve")


@param_group
class RGBCurvesParams:
    lumamode: bool = param("LumaMode", False)
    rcurve: list = curve_param("rCurve")
    gcurve: list = curve_param("gCurve")
    bcurve: list = curve_param("bCurve")


@param_group
class RetinexParams:
    """Parameters of Retinex."""
    enabled: bool = param("Enabled", False)
    strength: int = param("Str", 20)
    scal: int = param("Scal", 3)
    iterations: int = param("Iter", 1)
    grad: int = param("Grad", 1)
    grads: int = param("Grads", 1)
    gam: float = param("Gam", 1.30)
    slope: float = param("Slope", 3.0)
    neigh: int = param("Neigh", 80)
    offs: int = param("Offs", 0)
    vart: int = param("Vart", 200)
    limd: int = param("Limd", 8)
    highl: int = param("highl", 4)
    skal: int = param("skal", 3)
    medianmap: bool = param("MedianMap", False)
    retinex_method: str = param("retinexMethod", "high")
    retinex_colorspace: str = param("retinexcolorspace", "Lab")
    gamma_retinex: str = param("Gammaretinex", "none")
    map_method: str = param("mapMethod", "none")
    view_method: str = param("viewMethod", "none")
    highlights: int = param("Highlights", 0)
    htonalwidth: int = param("HighlightTonalWidth", 80)
    shadows: int = param("Shadows", 0)
    stonalwidth: int = param("ShadowTonalWidth", 80)
    radius: int = param("Radius", 40)
    cdcurve: list = curve_param("CDCurve")
    cdhcurve: list = curve_param("CDHCurve")
    lhcurve: list = curve_param("LHCurve", curves.flat_linear_curve)
    mapcurve: list = curve_param("MAPCurve")
    transmission_curve: list = curve_param("TransmissionCurve", curves.retinex_transmission_curve)
    gaintransmission_curve: list = curve_param("GainTransmissionCurve", curves.retinex_gain_transmission_curve)


@param_group
class EPDParams:
    """Edge preserving decomposition tone mapping."""
    enabled: bool = param("Enabled", False)
    strength: float = param("Strength", 0.5)
    gamma: float = param("Gamma", 1.0)
    edge_stopping: float = param("EdgeStopping", 1.4)
    scale: float = param("Scale", 1.0)
    reweighting_iterates: int = param("ReweightingIterates", 0)


@param_group
class FattalToneMappingParams:
    enabled: bool = param("Enabled", False)
    threshold: int = param("Threshold", 0)
    amount: int = param("Amount", 30)


@param_group
class SHParams:
    """Parameters of the shadow/highlight enhancement."""
    enabled: bool = param("Enabled", False)
    hq: bool = param("HighQuality", False)
    highlights: int = param("Highlights", 0)
    htonalwidth: int = param("HighlightTonalWidth", 80)
    shadows: int = param("Shadows", 0)
    stonalwidth: int = param("ShadowTonalWidth", 80)
    localcontrast: int = param("LocalContrast", 0)
    radius: int = param("Radius", 40)
