# Profile schema migrations
"""
Rules that bring profiles written by older schema versions up to date.

Each rule applies when the profile's version is lower than the rule's.
``document`` rules rewrite raw keys before any value is decoded;
``params`` rules adjust decoded values and only touch fields that were
actually present in the file.
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from procprofile.config import settings
from procprofile.params.color import RENDERING_INTENT_CODES
from procprofile.params.geometry import LcMode
from procprofile.utils.errors import FieldParseError
from procprofile.utils.logger import get_logger
from .keyfile import KeyFile

logger = get_logger(__name__)

KIND_DOCUMENT = "document"
KIND_PARAMS = "params"


@dataclass(frozen=True)
class MigrationRule:
    version: int
    kind: str
    description: str
    apply: Callable


# --- document rules ---

def _expand_sharpening_threshold(doc: KeyFile) -> None:
    # Single threshold value became a double-sided curve
    limit = settings.LEGACY_SHARPENING_THRESHOLD_MAX
    for section in ("Sharpening", "PostResizeSharpening"):
        if not doc.has_key(section, "Threshold"):
            continue
        try:
            values = doc.get_int_list(section, "Threshold")
        except FieldParseError:
            continue
        if len(values) == 1:
            t = min(values[0], limit)
            doc.set_int_list(section, "Threshold", [t, t, limit, limit])


def _expand_vibrance_threshold(doc: KeyFile) -> None:
    if not doc.has_key("Vibrance", "PSThreshold"):
        return
    try:
        values = doc.get_int_list("Vibrance", "PSThreshold")
    except FieldParseError:
        return
    if len(values) == 1:
        doc.set_int_list("Vibrance", "PSThreshold", [values[0], values[0]])


def _rename_lab_saturation(doc: KeyFile) -> None:
    section = "Luminance Curve"
    if not doc.has_key(section, "Saturation"):
        return
    raw = doc.get_raw(section, "Saturation")
    doc.remove_key(section, "Saturation")
    if doc.has_key(section, "Chromaticity"):
        return
    try:
        value = int(raw.strip())
    except ValueError:
        # Left for the decoder to report
        doc.set_raw(section, "Chromaticity", raw)
        return
    # -100 used to mean "grayscale"; that setting now lives at -99
    doc.set_int(section, "Chromaticity", -99 if value == -100 else value)


def _name_output_intent(doc: KeyFile) -> None:
    section, key = "Color Management", "OutputProfileIntent"
    if not doc.has_key(section, key):
        return
    try:
        code = doc.get_int(section, key)
    except FieldParseError:
        return
    if 0 <= code < len(RENDERING_INTENT_CODES):
        doc.set_string(section, key, RENDERING_INTENT_CODES[code].value)


def _derive_lc_mode(doc: KeyFile) -> None:
    section = "LensProfile"
    if not doc.has_section(section) or doc.has_key(section, "LcMode"):
        return
    lcp_file = doc.get_string(section, "LCPFile") if doc.has_key(section, "LCPFile") else ""
    mode = LcMode.LCP if lcp_file else LcMode.NONE
    doc.set_string(section, "LcMode", mode.value)


# --- params rules ---

def _rescale_defringe_threshold(params, loaded) -> None:
    if "defringe.threshold" not in loaded:
        return
    params.defringe.threshold = math.sqrt(params.defringe.threshold * 33.0 / 5.0)


RULES = (
    MigrationRule(302, KIND_DOCUMENT, "sharpening threshold becomes a double-sided curve",
                  _expand_sharpening_threshold),
    MigrationRule(302, KIND_DOCUMENT, "vibrance pastel/saturated threshold becomes a curve",
                  _expand_vibrance_threshold),
    MigrationRule(303, KIND_DOCUMENT, "luminance curve Saturation renamed to Chromaticity",
                  _rename_lab_saturation),
    MigrationRule(310, KIND_PARAMS, "defringe threshold rescaled", _rescale_defringe_threshold),
    MigrationRule(321, KIND_DOCUMENT, "numeric output rendering intent replaced by its name",
                  _name_output_intent),
    MigrationRule(327, KIND_DOCUMENT, "lens correction mode derived from the LCP file",
                  _derive_lc_mode),
)


def pending_rules(from_version: int, kind: Optional[str] = None) -> List[MigrationRule]:
    """Rules that a profile at ``from_version`` still needs, oldest first."""
    return [
        rule for rule in sorted(RULES, key=lambda r: r.version)
        if from_version < rule.version and (kind is None or rule.kind == kind)
    ]


def migrate_document(doc: KeyFile, from_version: int) -> List[str]:
    """
    Apply document rules in place.

    Returns:
        Descriptions of the rules that ran.
    """
    applied = []
    for rule in pending_rules(from_version, KIND_DOCUMENT):
        rule.apply(doc)
        applied.append(rule.description)
    if applied:
        logger.info("Migrated profile from version %d: %s", from_version, "; ".join(applied))
    return applied


def migrate_params(params, loaded: Optional[Iterable[str]] = None) -> List[str]:
    """
    Apply params rules for ``params.schema_version`` and stamp the current version.

    Args:
        params: ParameterSet, modified in place.
        loaded: Field paths that came from the file. ``None`` means every field.

    Returns:
        Descriptions of the rules that ran. Empty once the set is current.
    """
    from_version = params.schema_version
    if from_version >= settings.CURRENT_SCHEMA_VERSION:
        return []

    if loaded is None:
        loaded = {spec.path for spec in params.field_specs()}
    else:
        loaded = set(loaded)

    applied = []
    for rule in pending_rules(from_version, KIND_PARAMS):
        rule.apply(params, loaded)
        applied.append(rule.description)
    params.schema_version = settings.CURRENT_SCHEMA_VERSION
    if applied:
        logger.info("Migrated parameters from version %d: %s", from_version, "; ".join(applied))
    return applied
