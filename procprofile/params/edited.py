# Edit mask
"""
Per-field "was explicitly set" flags for a ParameterSet.

Paths are the dotted attribute paths reported by
``ParameterSet.field_specs()``, e.g. ``tone_curve.expcomp`` or
``raw.bayersensor.method``. The exif and iptc maps are flagged as a whole.
"""

from typing import Dict, Iterable, List

from .procparams import ParameterSet

GENERAL_PATHS = ("rank", "color_label", "in_trash")


def mask_paths() -> List[str]:
    return [spec.path for spec in ParameterSet.field_specs() if spec.masked]


class EditMask:
    """One boolean per leaf field of ParameterSet."""

    def __init__(self, value: bool = False):
        self._flags: Dict[str, bool] = dict.fromkeys(mask_paths(), bool(value))

    def _check(self, path: str) -> None:
        if path not in self._flags:
            raise KeyError(f"unknown parameter path: {path}")

    def set(self, value: bool) -> None:
        """Set every flag to ``value``."""
        for path in self._flags:
            self._flags[path] = bool(value)

    def mark(self, path: str, value: bool = True) -> None:
        self._check(path)
        self._flags[path] = bool(value)

    def is_set(self, path: str) -> bool:
        self._check(path)
        return self._flags[path]

    def __getitem__(self, path: str) -> bool:
        return self.is_set(path)

    def __contains__(self, path: object) -> bool:
        return path in self._flags

    def paths(self) -> List[str]:
        return list(self._flags)

    def marked(self) -> List[str]:
        return [path for path, flag in self._flags.items() if flag]

    def count(self) -> int:
        return sum(1 for flag in self._flags.values() if flag)

    def clear_general(self) -> None:
        """Unmark rank, colour label and trash flag."""
        for path in GENERAL_PATHS:
            self._flags[path] = False

    def init_from(self, param_sets: Iterable[ParameterSet]) -> None:
        """
        Mark the fields that hold the same value in every given set.

        The first set is the reference. With no sets every flag is cleared.
        """
        sets = list(param_sets)
        if not sets:
            self.set(False)
            return
        reference = sets[0]
        for spec in ParameterSet.field_specs():
            if not spec.masked:
                continue
            value = spec.get(reference)
            self._flags[spec.path] = all(spec.get(other) == value for other in sets[1:])

    def copy(self) -> "EditMask":
        clone = EditMask()
        clone._flags = dict(self._flags)
        return clone

    def __eq__(self, other):
        if not isinstance(other, EditMask):
            return NotImplemented
        return self._flags == other._flags

    __hash__ = None

    def __repr__(self) -> str:
        return f"EditMask({self.count()}/{len(self._flags)} marked)"
