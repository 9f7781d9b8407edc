# Partial profiles
"""
A ParameterSet paired with an optional EditMask, used to overlay only the
explicitly set fields of one set onto another.
"""

import copy
from dataclasses import fields
from typing import Optional

from procprofile.utils.logger import get_logger
from .edited import EditMask
from .procparams import ParameterSet

logger = get_logger(__name__)


class PartialProfile:
    """
    References to a ParameterSet and an EditMask.

    By default the references are shared with the caller; ``full_copy``
    stores independent deep copies instead.
    """

    def __init__(
        self,
        pparams: Optional[ParameterSet] = None,
        pedited: Optional[EditMask] = None,
        full_copy: bool = False,
    ):
        if full_copy:
            pparams = copy.deepcopy(pparams) if pparams is not None else None
            pedited = pedited.copy() if pedited is not None else None
        self.pparams = pparams
        self.pedited = pedited

    @classmethod
    def create(cls, params_edited_value: bool = False) -> "PartialProfile":
        """Partial profile with freshly allocated defaults and every flag set to ``params_edited_value``."""
        return cls(ParameterSet(), EditMask(params_edited_value))

    def apply_to(self, dest: Optional[ParameterSet]) -> None:
        """
        Copy fields into ``dest``.

        Without an edit mask every field is copied; with one, only the
        marked leaf fields. Values are deep-copied so ``dest`` never shares
        mutable state with this profile.
        """
        if self.pparams is None or dest is None:
            return

        if self.pedited is None:
            for f in fields(self.pparams):
                setattr(dest, f.name, copy.deepcopy(getattr(self.pparams, f.name)))
            return

        applied = 0
        for spec in ParameterSet.field_specs():
            if spec.masked and self.pedited.is_set(spec.path):
                spec.set(dest, copy.deepcopy(spec.get(self.pparams)))
                applied += 1
        logger.debug("Applied %d edited field(s) of a partial profile", applied)

    def load(self, path):
        """Load ``path`` into this profile, allocating missing instances first."""
        if self.pparams is None:
            self.pparams = ParameterSet()
        if self.pedited is None:
            self.pedited = EditMask()
        from procprofile.io.profile_io import load_profile
        return load_profile(self.pparams, path, edit_mask=self.pedited)

    def set(self, value: bool) -> None:
        if self.pedited is not None:
            self.pedited.set(value)

    def clear_general(self) -> None:
        if self.pedited is not None:
            self.pedited.clear_general()

    def delete_instance(self) -> None:
        """Drop both references."""
        self.pparams = None
        self.pedited = None


class AutoPartialProfile(PartialProfile):
    """Partial profile that owns its own ParameterSet and EditMask."""

    def __init__(self):
        super().__init__(ParameterSet(), EditMask())

    def copy(self) -> "AutoPartialProfile":
        clone = AutoPartialProfile()
        if self.pparams is not None:
            clone.pparams = copy.deepcopy(self.pparams)
        if self.pedited is not None:
            clone.pedited = self.pedited.copy()
        return clone
