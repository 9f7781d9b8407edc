# Sharpening, denoising and multi-scale detail groups
from . import curves
from .fields import curve_param, float_list_param, int_list_param, param, param_group, threshold_param
from .threshold import ThresholdCurve


@param_group
class SharpeningParams:
    """
    Parameters of the sharpening.

    Used twice by ParameterSet: once before resize (``Sharpening``) and once
    after it (``PostResizeSharpening``).
    """
    enabled: bool = param("Enabled", False)
    method: str = param("Method", "usm")
    radius: float = param("Radius", 0.5)
    amount: int = param("Amount", 200)
    threshold: ThresholdCurve = threshold_param("Threshold", lambda: ThresholdCurve.double(20, 80, 2000, 1200))
    edgesonly: bool = param("OnlyEdges", False)
    edges_radius: float = param("EdgedetectionRadius", 1.9)
    edges_tolerance: int = param("EdgeTolerance", 1800)
    halocontrol: bool = param("HalocontrolEnabled", False)
    halocontrol_amount: int = param("HalocontrolAmount", 85)
    deconvradius: float = param("DeconvRadius", 0.75)
    deconvamount: int = param("DeconvAmount", 75)
    deconvdamping: int = param("DeconvDamping", 20)
    deconviter: int = param("DeconvIterations", 30)


@param_group
class SharpenEdgeParams:
    enabled: bool = param("Enabled", False)
    passes: int = param("Passes", 2)
    amount: float = param("Strength", 50.0)
    threechannels: bool = param("ThreeChannels", False)


@param_group
class SharpenMicroParams:
    enabled: bool = param("Enabled", False)
    matrix: bool = param("Matrix", False)
    amount: float = param("Strength", 20.0)
    uniformity: float = param("Uniformity", 50.0)


@param_group
class DefringeParams:
    """Parameters of defringing."""
    enabled: bool = param("Enabled", False)
    radius: float = param("Radius", 2.0)
    threshold: float = param("Threshold", 13.0)
    huecurve: list = curve_param("HueCurve", curves.defringe_hue_curve)


@param_group
class ImpulseDenoiseParams:
    enabled: bool = param("Enabled", False)
    thresh: int = param("Threshold", 50)


@param_group
class DirPyrDenoiseParams:
    """Parameters of the directional pyramid denoising."""
    enabled: bool = param("Enabled", False)
    enhance: bool = param("Enhance", False)
    median: bool = param("Median", False)
    luma: float = param("Luma", 0.0)
    ldetail: float = param("Ldetail", 0.0)
    chroma: float = param("Chroma", 15.0)
    redchro: float = param("Redchro", 0.0)
    bluechro: float = param("Bluechro", 0.0)
    gamma: float = param("Gamma", 1.7)
    dmethod: str = param("Method", "Lab")
    lmethod: str = param("LMethod", "SLI")
    cmethod: str = param("CMethod", "MAN")
    c2method: str = param("C2Method", "AUTO")
    smethod: str = param("SMethod", "shal")
    medmethod: str = param("MedMethod", "soft")
    methodmed: str = param("MethodMed", "none")
    rgbmethod: str = param("RGBMethod", "soft")
    passes: int = param("Passes", 1)
    lcurve: list = curve_param("LCurve", curves.denoise_luma_curve)
    cccurve: list = curve_param("CCCurve", curves.denoise_chroma_curve)


@param_group
class DirPyrEqualizerParams:
    """Directional pyramid equalizer (contrast by detail levels)."""
    enabled: bool = param("Enabled", False)
    gamutlab: bool = param("Gamutlab", False)
    cbdl_method: str = param("cbdlMethod", "bef")
    mult: list = float_list_param("Mult", (1.0, 1.0, 1.0, 1.0, 1.0, 1.0), indexed_from=0)
    threshold: float = param("Threshold", 0.2)
    skinprotect: float = param("Skinprotect", 0.0)
    hueskin: ThresholdCurve = threshold_param("Hueskin", lambda: ThresholdCurve.double(20, 80, 2000, 1200))


def _noise_level():
    return ThresholdCurve(0.0, 0.0, value_type=float)


@param_group
class WaveletParams:
    """Parameters of the wavelet decomposition tool."""
    enabled: bool = param("Enabled", False)
    strength: int = param("Strength", 100)
    balance: int = param("Balance", 0)
    iter: int = param("Iter", 0)
    median: bool = param("Median", False)
    medianlev: bool = param("Medianlev", False)
    linkedg: bool = param("Linkedg", True)
    cbenab: bool = param("CBenab", False)
    greenhigh: int = param("CBgreenhigh", 0)
    greenmed: int = param("CBgreenmed", 0)
    greenlow: int = param("CBgreenlow", 0)
    bluehigh: int = param("CBbluehigh", 0)
    bluemed: int = param("CBbluemed", 0)
    bluelow: int = param("CBbluelow", 0)
    lipst: bool = param("Lipst", False)
    avoid: bool = param("AvoidColorShift", False)
    tmr: bool = param("TMr", False)

    # Panel expansion state
    expcontrast: bool = param("Expcontrast", False)
    expchroma: bool = param("Expchroma", False)
    expedge: bool = param("Expedge", False)
    expresid: bool = param("Expresid", False)
    expfinal: bool = param("Expfinal", False)
    exptoning: bool = param("Exptoning", False)
    expnoise: bool = param("Expnoise", False)

    c: list = int_list_param("Contrast", (0,) * 9, indexed_from=1)
    ch: list = int_list_param("Chroma", (0,) * 9, indexed_from=1)

    lmethod: str = param("ChoiceLevMethod", "4")
    clmethod: str = param("LevMethod", "all")
    backmethod: str = param("BackMethod", "grey")
    tilesmethod: str = param("TilesMethod", "full")
    daubcoeffmethod: str = param("DaubMethod", "4_")
    chmethod: str = param("CHromaMethod", "without")
    medgreinf: str = param("Medgreinf", "less")
    chslmethod: str = param("CHSLromaMethod", "SL")
    edmethod: str = param("EDMethod", "CU")
    npmethod: str = param("NPMethod", "none")
    bamethod: str = param("BAMethod", "none")
    tmmethod: str = param("TMMethod", "cont")
    dirmethod: str = param("DirMethod", "all")
    hsmethod: str = param("HSMethod", "with")

    rescon: int = param("ResidualcontShadow", 0)
    rescon_h: int = param("ResidualcontHighlight", 0)
    reschro: int = param("Residualchroma", 0)
    tmrs: float = param("ResidualTM", 0.0)
    gamma: float = param("Residualgamma", 1.0)
    sup: int = param("ContExtra", 0)
    sky: float = param("HueRangeResidual", 0.0)
    thres: int = param("MaxLev", 7)
    chroma: int = param("ThresholdChroma", 5)
    chro: int = param("ChromaLink", 0)
    threshold: int = param("ThresholdHighlight", 5)
    threshold2: int = param("ThresholdShadow", 4)
    edgedetect: int = param("Edgedetect", 90)
    edgedetectthr: int = param("Edgedetectthr", 20)
    edgedetectthr2: int = param("EdgedetectthrHi", 0)
    edgesensi: int = param("Edgesensi", 60)
    edgeampli: int = param("Edgeampli", 10)
    contrast: int = param("Contrast", 0)
    edgrad: int = param("Edgrad", 15)
    edgval: int = param("Edgval", 0)
    edgthresh: int = param("ThrEdg", 10)
    thr: int = param("ThresholdResidShadow", 35)
    thr_h: int = param("ThresholdResidHighLight", 65)
    skinprotect: float = param("SkinProtect", 0.0)

    hueskin: ThresholdCurve = threshold_param("Hueskin", lambda: ThresholdCurve.double(-5, 25, 170, 120))
    hueskin2: ThresholdCurve = threshold_param("HueRange", lambda: ThresholdCurve.double(-260, -250, -130, -140))
    hllev: ThresholdCurve = threshold_param("HLRange", lambda: ThresholdCurve.double(50, 75, 100, 98))
    bllev: ThresholdCurve = threshold_param("SHRange", lambda: ThresholdCurve.double(0, 2, 50, 25))
    pastlev: ThresholdCurve = threshold_param("Pastlev", lambda: ThresholdCurve.double(0, 2, 30, 20))
    satlev: ThresholdCurve = threshold_param("Satlev", lambda: ThresholdCurve.double(30, 45, 130, 100))
    edgcont: ThresholdCurve = threshold_param("Edgcont", lambda: ThresholdCurve.double(0, 10, 75, 40))
    level0noise: ThresholdCurve = threshold_param("Level0noise", _noise_level)
    level1noise: ThresholdCurve = threshold_param("Level1noise", _noise_level)
    level2noise: ThresholdCurve = threshold_param("Level2noise", _noise_level)
    level3noise: ThresholdCurve = threshold_param("Level3noise", _noise_level)

    ccwcurve: list = curve_param("ContrastCurve", curves.wavelet_contrast_curve)
    opacity_curve_rg: list = curve_param("OpacityCurveRG", curves.wavelet_opacity_curve_rg)
    opacity_curve_by: list = curve_param("OpacityCurveBY", curves.wavelet_opacity_curve_by)
    opacity_curve_w: list = curve_param("OpacityCurveW", curves.wavelet_opacity_curve_w)
    opacity_curve_wl: list = curve_param("OpacityCurveWL", curves.wavelet_opacity_curve_wl)
    hhcurve: list = curve_param("HHcurve", curves.flat_linear_curve)
    chcurve: list = curve_param("CHcurve", curves.flat_linear_curve)
    wavcl_curve: list = curve_param("WavclCurve")
