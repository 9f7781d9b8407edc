# Geometric transformation parameter groups
from enum import Enum
from typing import Tuple

from .fields import param, param_group, path_param


@param_group
class CropParams:
    """Parameters of the cropping."""
    enabled: bool = param("Enabled", False)
    x: int = param("X", 0)
    y: int = param("Y", 0)
    w: int = param("W", 15000)
    h: int = param("H", 15000)
    fixratio: bool = param("FixedRatio", True)
    ratio: str = param("Ratio", "3:2")
    orientation: str = param("Orientation", "As Image")
    guide: str = param("Guide", "Frame")

    def map_to_resized(self, resized_width: int, resized_height: int, scale: int) -> Tuple[int, int, int, int]:
        """
        Crop rectangle in an image down-scaled by ``scale``.

        Returns:
            ``(x1, x2, y1, y2)``, the whole image when cropping is disabled.
        """
        if not self.enabled:
            return 0, resized_width, 0, resized_height
        x1 = min(resized_width - 1, max(0, self.x // scale))
        y1 = min(resized_height - 1, max(0, self.y // scale))
        x2 = min(resized_width, max(0, (self.x + self.w) // scale))
        y2 = min(resized_height, max(0, (self.y + self.h) // scale))
        return x1, x2, y1, y2


@param_group
class CoarseTransformParams:
    """90 degree rotations and horizontal/vertical flipping."""
    rotate: int = param("Rotate", 0)
    hflip: bool = param("HorizontalFlip", False)
    vflip: bool = param("VerticalFlip", False)


@param_group
class CommonTransformParams:
    autofill: bool = param("AutoFill", True)


@param_group
class RotateParams:
    degree: float = param("Degree", 0.0)


@param_group
class DistortionParams:
    amount: float = param("Amount", 0.0)


class LcMode(Enum):
    NONE = "none"              # No lens correction
    LENSFUNAUTOMATCH = "lfauto"  # Auto matched lensfun database entry
    LENSFUNMANUAL = "lfmanual"   # Manually selected lensfun database entry
    LCP = "lcp"                # Adobe LCP file


LC_METHOD_STRINGS = tuple(mode.value for mode in LcMode)


@param_group
class LensProfParams:
    """Lens profile correction."""
    lc_mode: LcMode = param("LcMode", LcMode.NONE)
    lcp_file: str = path_param("LCPFile")
    use_dist: bool = param("UseDistortion", True)
    use_vign: bool = param("UseVignette", True)
    use_ca: bool = param("UseCA", False)
    lf_camera_make: str = param("LFCameraMake", "")
    lf_camera_model: str = param("LFCameraModel", "")
    lf_lens: str = param("LFLens", "")

    def use_lensfun(self) -> bool:
        return self.lc_mode in (LcMode.LENSFUNAUTOMATCH, LcMode.LENSFUNMANUAL)

    def lf_auto_match(self) -> bool:
        return self.lc_mode == LcMode.LENSFUNAUTOMATCH

    def use_lcp(self) -> bool:
        return self.lc_mode == LcMode.LCP and bool(self.lcp_file)

    def lf_manual(self) -> bool:
        return self.lc_mode == LcMode.LENSFUNMANUAL

    @staticmethod
    def get_method_strings() -> Tuple[str, ...]:
        return LC_METHOD_STRINGS

    @staticmethod
    def get_method_string(mode: LcMode) -> str:
        return mode.value

    @staticmethod
    def get_method_number(text: str) -> LcMode:
        """Mode stored as ``text``; anything unrecognised means no correction."""
        try:
            return LcMode(text)
        except ValueError:
            return LcMode.NONE


@param_group
class PerspectiveParams:
    horizontal: float = param("Horizontal", 0.0)
    vertical: float = param("Vertical", 0.0)


@param_group
class GradientParams:
    """Parameters of the graduated filter."""
    enabled: bool = param("Enabled", False)
    degree: float = param("Degree", 0.0)
    feather: int = param("Feather", 25)
    strength: float = param("Strength", 0.60)
    center_x: int = param("CenterX", 0)
    center_y: int = param("CenterY", 0)


@param_group
class PCVignetteParams:
    """Parameters of the post-crop vignette filter."""
    enabled: bool = param("Enabled", False)
    strength: float = param("Strength", 0.60)
    feather: int = param("Feather", 50)
    roundness: int = param("Roundness", 50)


@param_group
class CACorrParams:
    red: float = param("Red", 0.0)
    blue: float = param("Blue", 0.0)


@param_group
class VignettingParams:
    """Parameters of the vignetting correction."""
    amount: int = param("Amount", 0)
    radius: int = param("Radius", 50)
    strength: int = param("Strength", 1)
    center_x: int = param("CenterX", 0)
    center_y: int = param("CenterY", 0)


@param_group
class ResizeParams:
    enabled: bool = param("Enabled", False)
    scale: float = param("Scale", 1.0)
    applies_to: str = param("AppliesTo", "Cropped area")
    method: str = param("Method", "Lanczos")
    dataspec: int = param("DataSpecified", 3)
    width: int = param("Width", 900)
    height: int = param("Height", 900)
