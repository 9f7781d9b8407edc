# Application settings
import hashlib
import os

import appdirs

# --- Identity ---
APP_NAME = "procprofile"
APP_AUTHOR = "procprofile"
APP_VERSION = "1.0.0"

# --- Profile Format ---
# Bumped whenever a section/key is renamed or a value changes meaning.
# Every bump needs a matching entry in io/migrations.py.
CURRENT_SCHEMA_VERSION = 331
PROFILE_EXTENSION = ".pp3"
LIST_DELIMITER = ";"
COMMENT_PREFIX = "#"

# Absolute tolerance for floating-point threshold curves
THRESHOLD_EPSILON = 1e-10

# Maximum value written for the right pair of migrated sharpening thresholds
LEGACY_SHARPENING_THRESHOLD_MAX = 2000

# --- Curve Validation ---
CURVE_DEFAULTS = {
    "domain": (0.0, 1.0),  # transfer curves map [0,1] -> [0,1]
    "hl_clip_bin_limit": 50,  # histogram samples tolerated in the first/last bin
}

# --- Logging ---
LOGGING_LEVEL = os.environ.get("PROCPROFILE_LOG_LEVEL", "INFO")  # Options: DEBUG, INFO, WARNING, ERROR
LOGGING_FILE = os.environ.get("PROCPROFILE_LOG_FILE", "")  # Empty: console only


def sidecar_path(image_path):
    """Profile stored next to the image: ``photo.nef`` -> ``photo.nef.pp3``."""
    return os.path.abspath(image_path) + PROFILE_EXTENSION


def cache_profile_path(image_path, cache_dir=None):
    """
    Profile copy kept in the per-user cache.

    The file name is derived from the image's absolute path so that two images
    with the same base name in different folders never share a cache entry.
    """
    if cache_dir is None:
        cache_dir = os.path.join(appdirs.user_cache_dir(APP_NAME, APP_AUTHOR), "profiles")
    abs_path = os.path.abspath(image_path)
    digest = hashlib.md5(abs_path.encode("utf-8")).hexdigest()
    name = f"{os.path.basename(abs_path)}.{digest}{PROFILE_EXTENSION}"
    return os.path.join(cache_dir, name)
