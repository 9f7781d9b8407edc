# RAW demosaicing parameters
from dataclasses import fields
from enum import Enum

from .fields import param, param_group, path_param, sub_group


class PSMotionCorrection(Enum):
    GRID_1X1 = 0
    GRID_1X2 = 1
    GRID_3X3 = 2
    GRID_5X5 = 3
    GRID_7X7 = 4
    GRID_3X3_NEW = 5


class PSMotionCorrectionMethod(Enum):
    OFF = 0
    AUTOMATIC = 1
    CUSTOM = 2


BAYER_METHOD_STRINGS = (
    "amaze", "igv", "lmmse", "eahd", "hphd", "vng4", "dcb", "ahd", "fast", "mono", "none", "pixelshift",
)

XTRANS_METHOD_STRINGS = ("3-pass (best)", "1-pass (medium)", "fast", "mono", "none")

FF_BLUR_TYPE_STRINGS = ("Area Flatfield", "Vertical Flatfield", "Horizontal Flatfield", "V+H Flatfield")


@param_group
class BayerSensorParams:
    """Demosaicing parameters specific to Bayer sensors."""
    method: str = param("Method", "amaze")
    image_num: int = param("ImageNum", 1)
    cc_steps: int = param("CcSteps", 0)
    black0: float = param("PreBlack0", 0.0)
    black1: float = param("PreBlack1", 0.0)
    black2: float = param("PreBlack2", 0.0)
    black3: float = param("PreBlack3", 0.0)
    twogreen: bool = param("PreTwoGreen", True)
    linenoise: int = param("LineDenoise", 0)
    greenthresh: int = param("GreenEqThreshold", 0)
    dcb_iterations: int = param("DCBIterations", 2)
    dcb_enhance: bool = param("DCBEnhance", True)
    lmmse_iterations: int = param("LMMSEIterations", 2)
    pixel_shift_motion: int = param("PixelShiftMotion", 0)
    pixel_shift_motion_correction: PSMotionCorrection = param(
        "PixelShiftMotionCorrection", PSMotionCorrection.GRID_3X3_NEW)
    pixel_shift_motion_correction_method: PSMotionCorrectionMethod = param(
        "PixelShiftMotionCorrectionMethod", PSMotionCorrectionMethod.AUTOMATIC)
    pixel_shift_stddev_factor_green: float = param("pixelShiftStddevFactorGreen", 5.0)
    pixel_shift_stddev_factor_red: float = param("pixelShiftStddevFactorRed", 5.0)
    pixel_shift_stddev_factor_blue: float = param("pixelShiftStddevFactorBlue", 5.0)
    pixel_shift_eper_iso: float = param("PixelShiftEperIso", 0.0)
    pixel_shift_nread_iso: float = param("PixelShiftNreadIso", 0.0)
    pixel_shift_prnu: float = param("PixelShiftPrnu", 1.0)
    pixel_shift_sigma: float = param("PixelShiftSigma", 1.0)
    pixel_shift_sum: float = param("PixelShiftSum", 3.0)
    pixel_shift_red_blue_weight: float = param("PixelShiftRedBlueWeight", 0.7)
    pixel_shift_show_motion: bool = param("PixelShiftShowMotion", False)
    pixel_shift_show_motion_mask_only: bool = param("PixelShiftShowMotionMaskOnly", False)
    pixel_shift_automatic: bool = param("pixelShiftAutomatic", True)
    pixel_shift_non_green_horizontal: bool = param("pixelShiftNonGreenHorizontal", False)
    pixel_shift_non_green_vertical: bool = param("pixelShiftNonGreenVertical", False)
    pixel_shift_hole_fill: bool = param("pixelShiftHoleFill", True)
    pixel_shift_median: bool = param("pixelShiftMedian", False)
    pixel_shift_median3: bool = param("pixelShiftMedian3", False)
    pixel_shift_green: bool = param("pixelShiftGreen", True)
    pixel_shift_blur: bool = param("pixelShiftBlur", True)
    pixel_shift_smooth_factor: float = param("pixelShiftSmoothFactor", 0.7)
    pixel_shift_exp0: bool = param("pixelShiftExp0", False)
    pixel_shift_lmmse: bool = param("pixelShiftLmmse", False)
    pixel_shift_equal_bright: bool = param("pixelShiftEqualBright", False)
    pixel_shift_equal_bright_channel: bool = param("pixelShiftEqualBrightChannel", False)
    pixel_shift_non_green_cross: bool = param("pixelShiftNonGreenCross", True)
    pixel_shift_non_green_cross2: bool = param("pixelShiftNonGreenCross2", False)
    pixel_shift_non_green_amaze: bool = param("pixelShiftNonGreenAmaze", False)

    def set_pixel_shift_defaults(self) -> None:
        """Reset the pixel-shift fields only; demosaic settings are kept."""
        fresh = BayerSensorParams()
        for f in fields(self):
            if f.name.startswith("pixel_shift"):
                setattr(self, f.name, getattr(fresh, f.name))


@param_group
class XTransSensorParams:
    """Demosaicing parameters specific to X-Trans sensors."""
    method: str = param("Method", "3-pass (best)")
    cc_steps: int = param("CcSteps", 0)
    blackred: float = param("PreBlackRed", 0.0)
    blackgreen: float = param("PreBlackGreen", 0.0)
    blackblue: float = param("PreBlackBlue", 0.0)


@param_group
class RAWParams:
    """RAW demosaicing parameters common to every sensor type."""
    BayerSensor = BayerSensorParams
    XTransSensor = XTransSensorParams

    dark_frame: str = path_param("DarkFrame")
    df_autoselect: bool = param("DarkFrameAuto", False)

    ff_file: str = path_param("FlatFieldFile")
    ff_auto_select: bool = param("FlatFieldAutoSelect", False)
    ff_blur_radius: int = param("FlatFieldBlurRadius", 32)
    ff_blur_type: str = param("FlatFieldBlurType", FF_BLUR_TYPE_STRINGS[0])
    ff_auto_clip_control: bool = param("FlatFieldAutoClipControl", False)
    ff_clip_control: int = param("FlatFieldClipControl", 0)

    ca_autocorrect: bool = param("CA", False)
    cared: float = param("CARed", 0.0)
    cablue: float = param("CABlue", 0.0)

    # Exposure before interpolation
    expos: float = param("PreExposure", 1.0)
    preser: float = param("PrePreserv", 0.0)

    hot_pixel_filter: bool = param("HotPixelFilter", False)
    dead_pixel_filter: bool = param("DeadPixelFilter", False)
    hotdeadpix_thresh: int = param("HotDeadPixelThresh", 100)

    # Stored after the common keys, in their own sections
    bayersensor: BayerSensorParams = sub_group("RAW Bayer", BayerSensorParams)
    xtranssensor: XTransSensorParams = sub_group("RAW X-Trans", XTransSensorParams)
