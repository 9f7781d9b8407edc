# Threshold curves
"""
Piecewise-linear 0 <-> max ramps built from two or four control points.

A single-sided curve ramps once between ``bottom_left`` and ``top_left``.
A double-sided curve adds a mirrored ramp between ``top_right`` and
``bottom_right``::

    y_max        ____________
                /            \\
    0     _____/              \\_____
              bl  tl      tr  br

``start_at_one`` flips every branch so the band between the pairs maps to 0
and the outside maps to ``y_max``.
"""

from typing import Generic, List, Sequence, TypeVar, Union

import numpy as np

from procprofile.config import settings

T = TypeVar("T", int, float)


class ThresholdCurve(Generic[T]):
    """Two- or four-point threshold curve with integer or floating control points."""

    __slots__ = ("_bottom_left", "_top_left", "_bottom_right", "_top_right",
                 "_start_at_one", "_is_double", "_value_type")

    def __init__(self, bottom: T, top: T, start_at_one: bool = False, value_type: type = int):
        self._init(bottom, top, 0, 0, start_at_one, False, value_type)

    @classmethod
    def double(
        cls,
        bottom_left: T,
        top_left: T,
        bottom_right: T,
        top_right: T,
        start_at_one: bool = False,
        value_type: type = int,
    ) -> "ThresholdCurve[T]":
        curve = cls.__new__(cls)
        curve._init(bottom_left, top_left, bottom_right, top_right, start_at_one, True, value_type)
        return curve

    def _init(self, bottom_left, top_left, bottom_right, top_right, start_at_one, is_double, value_type):
        if value_type not in (int, float):
            raise ValueError(f"value_type must be int or float, got {value_type!r}")
        self._value_type = value_type
        self._start_at_one = bool(start_at_one)
        self._is_double = bool(is_double)
        self._bottom_left = value_type(bottom_left)
        self._top_left = value_type(top_left)
        self._bottom_right = value_type(bottom_right)
        self._top_right = value_type(top_right)

    # --- accessors ---

    @property
    def bottom(self) -> T:
        return self._bottom_left

    @property
    def top(self) -> T:
        return self._top_left

    @property
    def bottom_left(self) -> T:
        return self._bottom_left

    @property
    def top_left(self) -> T:
        return self._top_left

    @property
    def bottom_right(self) -> T:
        return self._bottom_right

    @property
    def top_right(self) -> T:
        return self._top_right

    @property
    def is_double(self) -> bool:
        return self._is_double

    @property
    def start_at_one(self) -> bool:
        return self._start_at_one

    @property
    def value_type(self) -> type:
        return self._value_type

    @property
    def is_floating(self) -> bool:
        return self._value_type is float

    def set_values(self, *points: T) -> None:
        """
        Replace every active control point at once.

        Single-sided curves take ``(bottom, top)``, double-sided ones
        ``(bottom_left, top_left, bottom_right, top_right)``.
        """
        expected = 4 if self._is_double else 2
        if len(points) != expected:
            raise ValueError(f"expected {expected} control points, got {len(points)}")
        converted = [self._value_type(p) for p in points]
        self._bottom_left, self._top_left = converted[0], converted[1]
        if self._is_double:
            self._bottom_right, self._top_right = converted[2], converted[3]

    def to_control_points(self) -> List[T]:
        if self._is_double:
            return [self._bottom_left, self._top_left, self._bottom_right, self._top_right]
        return [self._bottom_left, self._top_left]

    # --- evaluation ---

    def evaluate(self, x: Union[int, float], y_max: Union[int, float], result_type: type = float):
        """
        Value of the curve at ``x``, scaled to ``[0, y_max]``.

        Interpolation always runs in float; ``result_type`` casts the result
        (``int`` truncates). The left band must not be zero-width when
        ``x`` can fall strictly inside it.
        """
        val = float(x)
        bl = float(self._bottom_left)
        tl = float(self._top_left)
        br = float(self._bottom_right)
        tr = float(self._top_right)

        if self._start_at_one:
            if self._is_double:
                # Both right values equal: keep the bottom value even past the right bound
                if val == br and br == tr:
                    return result_type(0)
                if val >= tr:
                    return result_type(y_max)
                if val > br:
                    return result_type(y_max * (val - br) / (tr - br))
            if val >= bl:
                return result_type(0)
            if val > tl:
                return result_type(y_max * (1.0 - (val - bl) / (tl - bl)))
            return result_type(y_max)

        if self._is_double:
            # Both right values equal: keep the top value even past the right bound
            if val == br and br == tr:
                return result_type(y_max)
            if val >= br:
                return result_type(0)
            if val > tr:
                return result_type(y_max * (1.0 - (val - tr) / (br - tr)))
        if val >= tl:
            return result_type(y_max)
        if val > bl:
            return result_type(y_max * (val - bl) / (tl - bl))
        return result_type(0)

    def evaluate_array(self, xs: Union[Sequence[float], np.ndarray], y_max: float) -> np.ndarray:
        """Vectorised ``evaluate`` over an array of inputs (float64 result)."""
        x = np.asarray(xs, dtype=np.float64)
        bl = float(self._bottom_left)
        tl = float(self._top_left)
        br = float(self._bottom_right)
        tr = float(self._top_right)
        y_max = float(y_max)

        conditions = []
        choices = []
        with np.errstate(divide="ignore", invalid="ignore"):
            if self._start_at_one:
                if self._is_double:
                    conditions += [(x == br) & (br == tr), x >= tr, x > br]
                    choices += [
                        np.zeros_like(x),
                        np.full_like(x, y_max),
                        y_max * (x - br) / (tr - br),
                    ]
                conditions += [x >= bl, x > tl]
                choices += [np.zeros_like(x), y_max * (1.0 - (x - bl) / (tl - bl))]
                default = y_max
            else:
                if self._is_double:
                    conditions += [(x == br) & (br == tr), x >= br, x > tr]
                    choices += [
                        np.full_like(x, y_max),
                        np.zeros_like(x),
                        y_max * (1.0 - (x - tr) / (br - tr)),
                    ]
                conditions += [x >= tl, x > bl]
                choices += [np.full_like(x, y_max), y_max * (x - bl) / (tl - bl)]
                default = 0.0
            return np.select(conditions, choices, default=default)

    # --- comparison ---

    def __eq__(self, other):
        if not isinstance(other, ThresholdCurve):
            return NotImplemented
        mine = self.to_control_points()
        # The left-hand curve decides how many points take part
        theirs = [other._bottom_left, other._top_left, other._bottom_right, other._top_right][:len(mine)]
        if self.is_floating or other.is_floating:
            return all(abs(float(a) - float(b)) < settings.THRESHOLD_EPSILON for a, b in zip(mine, theirs))
        return all(a == b for a, b in zip(mine, theirs))

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __copy__(self):
        return self.__deepcopy__({})

    def __deepcopy__(self, memo):
        clone = type(self).__new__(type(self))
        clone._init(self._bottom_left, self._top_left, self._bottom_right, self._top_right,
                    self._start_at_one, self._is_double, self._value_type)
        return clone

    def __getstate__(self):
        return (self._bottom_left, self._top_left, self._bottom_right, self._top_right,
                self._start_at_one, self._is_double, self._value_type)

    def __setstate__(self, state):
        self._init(*state)

    def __repr__(self) -> str:
        points = ", ".join(repr(p) for p in self.to_control_points())
        return (f"ThresholdCurve({points}, start_at_one={self._start_at_one}, "
                f"value_type={self._value_type.__name__})")
