# Curve control points
"""
Flat control-point sequences used by the curve fields of the parameter groups.

A curve is stored as ``[type, p0, p1, ...]``: the first element selects how
the processing pipeline interprets the rest. Diagonal curves (``DCT_*``) hold
``x, y`` pairs; flat curves with min/max control points (``FCT_MinMaxCPoints``)
hold ``x, y, left_tangent, right_tangent`` quadruplets. A linear curve needs
no points at all.

Turning these into lookup tables is the pipeline's job; this module only
provides the default tables and well-formedness checks.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from procprofile.config import settings

# Diagonal curve types
DCT_LINEAR = 0
DCT_SPLINE = 1
DCT_PARAMETRIC = 2
DCT_NURBS = 3
DCT_CATMULL_ROM = 4

# Flat curve types
FCT_LINEAR = 0
FCT_MIN_MAX_CPOINTS = 1

KNOWN_CURVE_TYPES = frozenset({DCT_LINEAR, DCT_SPLINE, DCT_PARAMETRIC, DCT_NURBS, DCT_CATMULL_ROM})
KNOWN_FLAT_CURVE_TYPES = frozenset({FCT_LINEAR, FCT_MIN_MAX_CPOINTS})

# Values per control point after the type code
_POINT_STRIDE = {
    DCT_SPLINE: 2,
    DCT_NURBS: 2,
    DCT_CATMULL_ROM: 2,
}

_FLAT_POINT_STRIDE = {
    FCT_MIN_MAX_CPOINTS: 4,
}


def linear_curve() -> List[float]:
    return [float(DCT_LINEAR)]


def flat_linear_curve() -> List[float]:
    return [float(FCT_LINEAR)]


# Type codes overlap between the two families, so factories say which one they build
linear_curve.flat = False
flat_linear_curve.flat = True


def _table(curve_type: int, points: Sequence[float], flat: bool = False) -> Callable[[], List[float]]:
    values = (float(curve_type),) + tuple(float(p) for p in points)

    def factory() -> List[float]:
        return list(values)

    factory.flat = flat
    return factory


# --- Default curve tables (factories so every group gets its own list) ---

retinex_transmission_curve = _table(FCT_MIN_MAX_CPOINTS, (
    0.00, 0.50, 0.35, 0.35,
    0.60, 0.75, 0.35, 0.35,
    1.00, 0.50, 0.35, 0.35,
), flat=True)

retinex_gain_transmission_curve = _table(FCT_MIN_MAX_CPOINTS, (
    0.00, 0.10, 0.35, 0.00,
    0.25, 0.25, 0.35, 0.35,
    0.70, 0.25, 0.35, 0.35,
    1.00, 0.10, 0.00, 0.00,
), flat=True)

color_toning_color_curve = _table(FCT_MIN_MAX_CPOINTS, (
    0.050, 0.62, 0.25, 0.25,
    0.585, 0.11, 0.25, 0.25,
), flat=True)

color_toning_opacity_curve = _table(FCT_MIN_MAX_CPOINTS, (
    0.00, 0.3, 0.35, 0.00,
    0.25, 0.8, 0.35, 0.35,
    0.70, 0.8, 0.35, 0.35,
    1.00, 0.3, 0.00, 0.00,
), flat=True)

color_toning_cl_curve = _table(DCT_NURBS, (
    0.00, 0.00,
    0.35, 0.65,
    1.00, 1.00,
))

color_toning_cl2_curve = _table(DCT_NURBS, (
    0.00, 0.00,
    0.35, 0.65,
    1.00, 1.00,
))

defringe_hue_curve = _table(FCT_MIN_MAX_CPOINTS, (
    0.166666667, 0.0, 0.35, 0.35,
    0.347, 0.0, 0.35, 0.35,
    0.513667426, 0.0, 0.35, 0.35,
    0.668944571, 0.0, 0.35, 0.35,
    0.8287775246, 0.97835991, 0.35, 0.35,
    0.9908883827, 0.0, 0.35, 0.35,
), flat=True)

denoise_luma_curve = _table(FCT_MIN_MAX_CPOINTS, (
    0.05, 0.15, 0.35, 0.35,
    0.55, 0.04, 0.35, 0.35,
), flat=True)

denoise_chroma_curve = _table(FCT_MIN_MAX_CPOINTS, (
    0.05, 0.50, 0.35, 0.35,
    0.35, 0.05, 0.35, 0.35,
), flat=True)

wavelet_contrast_curve = _table(FCT_MIN_MAX_CPOINTS, (
    0.00, 0.25, 0.35, 0.35,
    0.50, 0.75, 0.35, 0.35,
    0.90, 0.00, 0.35, 0.35,
), flat=True)

wavelet_opacity_curve_rg = _table(FCT_MIN_MAX_CPOINTS, (
    0.00, 0.50, 0.35, 0.35,
    1.00, 0.50, 0.35, 0.35,
), flat=True)

wavelet_opacity_curve_by = _table(FCT_MIN_MAX_CPOINTS, (
    0.00, 0.50, 0.35, 0.35,
    1.00, 0.50, 0.35, 0.35,
), flat=True)

wavelet_opacity_curve_w = _table(FCT_MIN_MAX_CPOINTS, (
    0.00, 0.35, 0.35, 0.00,
    0.35, 0.75, 0.35, 0.35,
    0.60, 0.75, 0.35, 0.35,
    1.00, 0.35, 0.00, 0.00,
), flat=True)

wavelet_opacity_curve_wl = _table(FCT_MIN_MAX_CPOINTS, (
    0.00, 0.50, 0.35, 0.35,
    1.00, 0.50, 0.35, 0.35,
), flat=True)


@dataclass
class CurveIssue:
    """A malformed curve field."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def check_curve(points: Sequence[float], domain: Optional[Tuple[float, float]] = None,
                flat: bool = False) -> List[str]:
    """
    Check that a control-point sequence is well formed.

    Args:
        points: The stored sequence, type code first.
        domain: Allowed ``(min, max)`` for the point values. Defaults to the
            transfer-curve domain from settings.
        flat: Read the type code as a flat curve type (``FCT_*``).

    Returns:
        List of problems, empty when the curve is usable.
    """
    if domain is None:
        domain = settings.CURVE_DEFAULTS["domain"]

    if len(points) == 0:
        return ["curve has no type code"]

    arr = np.asarray(points, dtype=np.float64)
    if not np.all(np.isfinite(arr)):
        return ["curve contains non-finite values"]

    curve_type = arr[0]
    known = KNOWN_FLAT_CURVE_TYPES if flat else KNOWN_CURVE_TYPES
    if curve_type != int(curve_type) or int(curve_type) not in known:
        return [f"unknown curve type {points[0]!r}"]

    values = arr[1:]
    if int(curve_type) == DCT_LINEAR:
        # Linear curves carry no points; anything left over is ignored by the pipeline
        return []
    if not flat and int(curve_type) == DCT_PARAMETRIC:
        # Three split positions then four slider values in [-100, 100]
        if values.size < 7:
            return [f"parametric curve needs 7 values, got {values.size}"]
        if values[:3].min() < 0.0 or values[:3].max() > 1.0 or np.abs(values[3:7]).max() > 100.0:
            return ["parametric curve values out of range"]
        return []

    errors = []
    stride = (_FLAT_POINT_STRIDE if flat else _POINT_STRIDE).get(int(curve_type))
    if stride and values.size % stride:
        errors.append(f"expected a multiple of {stride} values after the type code, got {values.size}")
    low, high = domain
    if values.size and (values.min() < low or values.max() > high):
        errors.append(f"values outside [{low}, {high}]")
    return errors


def expand_curves(curves: Dict[str, List[float]], builder: Callable[[str, List[float]], object]) -> Dict[str, object]:
    """
    Hand each curve to a caller-supplied lookup-table builder.

    The builder receives ``(name, points)`` and its return value is collected
    under ``name``. Points are copied so the builder cannot alter the stored
    parameters.
    """
    return {name: builder(name, list(points)) for name, points in curves.items()}
