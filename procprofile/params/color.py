# Colour parameter groups
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import curves
from .fields import curve_param, int_list_param, param, param_group, threshold_param
from .threshold import ThresholdCurve


@param_group
class ColorToningParams:
    """Parameters of the colour toning tool."""
    enabled: bool = param("Enabled", False)
    autosat: bool = param("Autosat", True)
    opacity_curve: list = curve_param("OpacityCurve", curves.color_toning_opacity_curve)
    color_curve: list = curve_param("ColorCurve", curves.color_toning_color_curve)
    sat_protection_threshold: int = param("SatProtectionThreshold", 30)
    saturated_opacity: int = param("SaturatedOpacity", 80)
    strength: int = param("Strength", 50)
    balance: int = param("Balance", 0)
    hl_col_sat: ThresholdCurve = threshold_param("HighlightsColorSaturation", lambda: ThresholdCurve(60, 80))
    shadows_col_sat: ThresholdCurve = threshold_param("ShadowsColorSaturation", lambda: ThresholdCurve(80, 208))
    clcurve: list = curve_param("ClCurve", curves.color_toning_cl_curve)
    cl2curve: list = curve_param("Cl2Curve", curves.color_toning_cl2_curve)
    # Splitlr, Splitco, Splitbal, Lab, Lch, RGBSliders or RGBCurves
    method: str = param("Method", "Lab")
    # Std, All, Separ or Two
    twocolor: str = param("Twocolor", "Std")
    redlow: float = param("Redlow", 0.0)
    greenlow: float = param("Greenlow", 0.0)
    bluelow: float = param("Bluelow", 0.0)
    redmed: float = param("Redmed", 0.0)
    greenmed: float = param("Greenmed", 0.0)
    bluemed: float = param("Bluemed", 0.0)
    redhigh: float = param("Redhigh", 0.0)
    greenhigh: float = param("Greenhigh", 0.0)
    bluehigh: float = param("Bluehigh", 0.0)
    satlow: float = param("Satlow", 0.0)
    sathigh: float = param("Sathigh", 0.0)
    lumamode: bool = param("Lumamode", True)


@param_group
class VibranceParams:
    """Parameters of the vibrance tool."""
    enabled: bool = param("Enabled", False)
    pastels: int = param("Pastels", 0)
    saturated: int = param("Saturated", 0)
    psthreshold: ThresholdCurve = threshold_param("PSThreshold", lambda: ThresholdCurve(0, 75))
    protectskins: bool = param("ProtectSkins", False)
    avoidcolorshift: bool = param("AvoidColorShift", True)
    pastsattog: bool = param("PastSatTog", True)
    skintonescurve: list = curve_param("SkinTonesCurve")


class WBType(Enum):
    CAMERA = "Camera"
    AUTO = "Auto"
    DAYLIGHT = "Daylight"
    CLOUDY = "Cloudy"
    SHADE = "Shade"
    WATER = "Water"
    TUNGSTEN = "Tungsten"
    FLUORESCENT = "Fluorescent"
    LAMP = "Lamp"
    FLASH = "Flash"
    LED = "LED"
    # CUSTOM must remain the last one
    CUSTOM = "Custom"


@dataclass(frozen=True)
class WBEntry:
    """A white balance preset."""
    pp_label: str
    type: WBType
    gui_label: str
    temperature: int
    green: float = 1.0
    equal: float = 1.0
    temp_bias: float = 0.0


WB_ENTRIES = (
    WBEntry("Camera", WBType.CAMERA, "Camera", 0),
    WBEntry("Auto", WBType.AUTO, "Auto", 0),
    WBEntry("Daylight", WBType.DAYLIGHT, "Daylight (direct sunlight)", 5300),
    WBEntry("Cloudy", WBType.CLOUDY, "Cloudy", 6200),
    WBEntry("Shade", WBType.SHADE, "Shade", 7600),
    WBEntry("Water 1", WBType.WATER, "Underwater 1", 35000, 0.3, 1.1),
    WBEntry("Water 2", WBType.WATER, "Underwater 2", 48000, 0.63, 1.38),
    WBEntry("Tungsten", WBType.TUNGSTEN, "Tungsten", 2856),
    WBEntry("Fluo F1", WBType.FLUORESCENT, "F1 - Daylight", 6430),
    WBEntry("Fluo F2", WBType.FLUORESCENT, "F2 - Cool White", 4230),
    WBEntry("Fluo F3", WBType.FLUORESCENT, "F3 - White", 3450),
    WBEntry("Fluo F4", WBType.FLUORESCENT, "F4 - Warm White", 2940),
    WBEntry("Fluo F5", WBType.FLUORESCENT, "F5 - Daylight", 6350),
    WBEntry("Fluo F6", WBType.FLUORESCENT, "F6 - Lite White", 4150),
    WBEntry("Fluo F7", WBType.FLUORESCENT, "F7 - D65 Daylight Simulator", 6500),
    WBEntry("Fluo F8", WBType.FLUORESCENT, "F8 - D50 / Sylvania F40 Design", 5020),
    WBEntry("Fluo F9", WBType.FLUORESCENT, "F9 - Cool White Deluxe", 4330),
    WBEntry("Fluo F10", WBType.FLUORESCENT, "F10 - Philips TL85", 5300),
    WBEntry("Fluo F11", WBType.FLUORESCENT, "F11 - Philips TL84", 4000),
    WBEntry("Fluo F12", WBType.FLUORESCENT, "F12 - Philips TL83", 3000),
    WBEntry("HMI Lamp", WBType.LAMP, "HMI (studio)", 4800),
    WBEntry("GTI Lamp", WBType.LAMP, "GTI Graphic Technology", 5000),
    WBEntry("JudgeIII Lamp", WBType.LAMP, "JudgeIII", 5100),
    WBEntry("Solux Lamp 3500K", WBType.LAMP, "Solux 3500K", 3480),
    WBEntry("Solux Lamp 4100K", WBType.LAMP, "Solux 4100K", 3930),
    WBEntry("Solux Lamp 4700K", WBType.LAMP, "Solux 4700K", 4700),
    WBEntry("NG Solux Lamp 4700K", WBType.LAMP, "Solux 4700K (National Gallery)", 4480),
    WBEntry("LED LSI Lumelex 2040", WBType.LED, "LSI Lumelex 2040", 2970),
    WBEntry("LED CRS SP12 WWMR16", WBType.LED, "CRS SP12 WWMR16", 3050),
    WBEntry("Flash Standard", WBType.FLASH, "Standard flash", 5500),
    WBEntry("Flash Canon", WBType.FLASH, "Canon flash", 5500),
    WBEntry("Flash Pentax", WBType.FLASH, "Pentax flash", 5500),
    WBEntry("Flash Nikon", WBType.FLASH, "Nikon flash", 5500),
    WBEntry("Flash Olympus", WBType.FLASH, "Olympus flash", 5500),
    WBEntry("Custom", WBType.CUSTOM, "Custom", 0),
)

_WB_BY_LABEL = {entry.pp_label: entry for entry in WB_ENTRIES}


def find_wb_entry(label: str) -> Optional[WBEntry]:
    """Preset stored under ``label`` in a profile, or None."""
    return _WB_BY_LABEL.get(label)


@param_group
class WBParams:
    """White balance. ``method`` is the ``pp_label`` of one of ``WB_ENTRIES``."""
    method: str = param("Setting", "Camera")
    temperature: int = param("Temperature", 6504)
    green: float = param("Green", 1.0)
    equal: float = param("Equal", 1.0)
    temp_bias: float = param("TemperatureBias", 0.0)

    def preset(self) -> Optional[WBEntry]:
        return find_wb_entry(self.method)


class ColorAppearanceTCMode(Enum):
    LIGHT = "Lightness"
    BRIGHT = "Brightness"


class ColorAppearanceCTCMode(Enum):
    CHROMA = "Chroma"
    SATUR = "Saturation"
    COLORF = "Colorfullness"


@param_group
class ColorAppearanceParams:
    """Parameters of the CIECAM02 colour appearance model."""
    enabled: bool = param("Enabled", False)
    degree: int = param("Degree", 90)
    autodegree: bool = param("AutoDegree", True)
    degreeout: int = param("Degreeout", 90)
    autodegreeout: bool = param("AutoDegreeout", True)
    curve: list = curve_param("Curve")
    curve2: list = curve_param("Curve2")
    curve3: list = curve_param("Curve3")
    curve_mode: ColorAppearanceTCMode = param("CurveMode", ColorAppearanceTCMode.LIGHT)
    curve_mode2: ColorAppearanceTCMode = param("CurveMode2", ColorAppearanceTCMode.LIGHT)
    curve_mode3: ColorAppearanceCTCMode = param("CurveMode3", ColorAppearanceCTCMode.CHROMA)
    surround: str = param("Surround", "Average")
    surrsrc: str = param("Surrsrc", "Average")
    adapscen: float = param("AdaptScene", 2000.0)
    autoadapscen: bool = param("AutoAdapscen", True)
    ybscen: int = param("YbScene", 18)
    autoybscen: bool = param("AutoYbscen", True)
    adaplum: float = param("AdaptLum", 16.0)
    badpixsl: int = param("Badpixsl", 0)
    wbmodel: str = param("Model", "RawT")
    algo: str = param("Algorithm", "No")
    contrast: float = param("J-Contrast", 0.0)
    qcontrast: float = param("Q-Contrast", 0.0)
    jlight: float = param("J-Light", 0.0)
    qbright: float = param("Q-Bright", 0.0)
    chroma: float = param("C-Chroma", 0.0)
    schroma: float = param("S-Chroma", 0.0)
    mchroma: float = param("M-Chroma", 0.0)
    colorh: float = param("H-Hue", 0.0)
    rstprotection: float = param("RSTProtection", 0.0)
    surrsource: bool = param("SurrSource", False)
    gamut: bool = param("Gamut", True)
    datacie: bool = param("Datacie", False)
    tonecie: bool = param("Tonecie", False)
    tempout: int = param("Tempout", 5000)
    ybout: int = param("Ybout", 18)
    greenout: float = param("Greenout", 1.0)
    tempsc: int = param("Tempsc", 5000)
    greensc: float = param("Greensc", 1.0)


@param_group
class ChannelMixerParams:
    red: list = int_list_param("Red", (100, 0, 0))
    green: list = int_list_param("Green", (0, 100, 0))
    blue: list = int_list_param("Blue", (0, 0, 100))


class BlackWhiteCurveMode(Enum):
    STD_BW = "Standard"                          # Curve applied on every component individually
    WEIGHTEDSTD_BW = "WeightedStd"
    FILMLIKE_BW = "FilmLike"
    SATANDVALBLENDING_BW = "SatAndValueBlending"


@param_group
class BlackWhiteParams:
    """Black-and-white conversion."""
    enabled: bool = param("Enabled", False)
    method: str = param("Method", "Desaturation")
    autoc: bool = param("Auto", False)
    enabledcc: bool = param("ComplementaryColors", True)
    filter: str = param("Filter", "None")
    setting: str = param("Setting", "NormalContrast")
    mixer_red: int = param("MixerRed", 33)
    mixer_orange: int = param("MixerOrange", 33)
    mixer_yellow: int = param("MixerYellow", 33)
    mixer_green: int = param("MixerGreen", 33)
    mixer_cyan: int = param("MixerCyan", 33)
    mixer_blue: int = param("MixerBlue", 33)
    mixer_magenta: int = param("MixerMagenta", 33)
    mixer_purple: int = param("MixerPurple", 33)
    gamma_red: int = param("GammaRed", 0)
    gamma_green: int = param("GammaGreen", 0)
    gamma_blue: int = param("GammaBlue", 0)
    algo: str = param("Algorithm", "SP")
    luminance_curve: list = curve_param("LuminanceCurve", curves.flat_linear_curve)
    before_curve_mode: BlackWhiteCurveMode = param("BeforeCurveMode", BlackWhiteCurveMode.STD_BW)
    after_curve_mode: BlackWhiteCurveMode = param("AfterCurveMode", BlackWhiteCurveMode.STD_BW)
    before_curve: list = curve_param("BeforeCurve")
    after_curve: list = curve_param("AfterCurve")


class RenderingIntent(Enum):
    PERCEPTUAL = "Perceptual"
    RELATIVE = "Relative"
    SATURATION = "Saturation"
    ABSOLUTE = "Absolute"


# Position in this tuple is the numeric code older profiles stored
RENDERING_INTENT_CODES = (
    RenderingIntent.PERCEPTUAL,
    RenderingIntent.RELATIVE,
    RenderingIntent.SATURATION,
    RenderingIntent.ABSOLUTE,
)


@param_group
class ColorManagementParams:
    """Colour spaces used during processing."""
    input: str = param("InputProfile", "(cameraICC)")
    tone_curve: bool = param("ToneCurve", False)
    apply_look_table: bool = param("ApplyLookTable", False)
    apply_baseline_exposure_offset: bool = param("ApplyBaselineExposureOffset", True)
    apply_hue_sat_map: bool = param("ApplyHueSatMap", True)
    dcp_illuminant: int = param("DCPIlluminant", 0)
    working: str = param("WorkingProfile", "ProPhoto")
    output: str = param("OutputProfile", "RT_sRGB")
    output_intent: RenderingIntent = param("OutputProfileIntent", RenderingIntent.RELATIVE)
    output_bpc: bool = param("OutputBPC", True)
    gamma: str = param("Gammafree", "default")
    freegamma: bool = param("Freegamma", False)
    gampos: float = param("GammaValue", 2.22)
    slpos: float = param("GammaSlope", 4.5)


@param_group
class HSVEqualizerParams:
    hcurve: list = curve_param("HCurve", curves.flat_linear_curve)
    scurve: list = curve_param("SCurve", curves.flat_linear_curve)
    vcurve: list = curve_param("VCurve", curves.flat_linear_curve)


@param_group
class FilmSimulationParams:
    enabled: bool = param("Enabled", False)
    clut_filename: str = param("ClutFilename", "")
    strength: int = param("Strength", 100)
