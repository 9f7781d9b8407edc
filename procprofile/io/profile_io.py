# Profile persistence
"""
Saving and loading ParameterSets as profile files.

Both entry points return a result object instead of raising for I/O or
document problems: ``save_profile`` -> ``SaveResult``, ``load_profile`` ->
``LoadResult``. Codec exceptions (``FieldParseError``,
``MalformedDocumentError``, ``FileIOError``) are caught here.
"""

import copy
import os
import tempfile
from dataclasses import dataclass, field
from typing import List, Optional

from procprofile.config import settings
from procprofile.params.fields import (
    KIND_BOOL,
    KIND_ENUM,
    KIND_EXIF,
    KIND_FLOAT,
    KIND_FLOAT_LIST,
    KIND_INT,
    KIND_INT_LIST,
    KIND_IPTC,
    KIND_STR,
    KIND_THRESHOLD,
    FieldSpec,
)
from procprofile.params.curves import check_curve
from procprofile.params.procparams import ParameterSet
from procprofile.utils.errors import (
    ErrorCategory,
    FieldParseError,
    FileIOError,
    MalformedDocumentError,
    ProfileStatus,
    log_and_continue,
)
from procprofile.utils.logger import get_logger
from . import migrations
from .keyfile import KeyFile

logger = get_logger(__name__)

VERSION_SECTION = "Version"
APP_VERSION_KEY = "AppVersion"
SCHEMA_VERSION_KEY = "Version"


@dataclass
class FieldIssue:
    """A key whose value could not be decoded; the field kept its default."""
    path: str
    section: str
    key: str
    value: Optional[str]
    message: str

    def __str__(self) -> str:
        return f"[{self.section}] {self.key}: {self.message}"


@dataclass
class LoadResult:
    status: ProfileStatus
    path: str
    file_version: Optional[int] = None
    app_version: Optional[str] = None
    issues: List[FieldIssue] = field(default_factory=list)
    newer_schema: bool = False

    @property
    def ok(self) -> bool:
        return not self.status.is_fatal

    @property
    def is_fatal(self) -> bool:
        return self.status.is_fatal


@dataclass
class SaveResult:
    status: ProfileStatus
    written: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == ProfileStatus.OK


# --- path handling ---

def relativize_path(value: str, base_dir: str) -> str:
    """``value`` relative to ``base_dir`` when it lies inside it, unchanged otherwise."""
    if not value or not os.path.isabs(value):
        return value
    try:
        if os.path.commonpath([base_dir, os.path.abspath(value)]) != base_dir:
            return value
    except ValueError:
        # Different drives
        return value
    return os.path.relpath(value, base_dir)


def resolve_path(value: str, base_dir: str) -> str:
    if not value or os.path.isabs(value):
        return value
    return os.path.normpath(os.path.join(base_dir, value))


# --- encoding ---

def _encode_field(doc: KeyFile, spec: FieldSpec, value, base_dir: Optional[str]) -> None:
    section, key, kind = spec.section, spec.key, spec.kind
    if kind == KIND_BOOL:
        doc.set_bool(section, key, value)
    elif kind == KIND_INT:
        doc.set_int(section, key, value)
    elif kind == KIND_FLOAT:
        doc.set_float(section, key, value)
    elif kind == KIND_STR:
        if spec.is_path and base_dir is not None:
            value = relativize_path(value, base_dir)
        doc.set_string(section, key, value)
    elif kind == KIND_ENUM:
        if isinstance(value.value, int):
            doc.set_int(section, key, value.value)
        else:
            doc.set_string(section, key, value.value)
    elif kind == KIND_THRESHOLD:
        if value.is_floating:
            doc.set_float_list(section, key, value.to_control_points())
        else:
            doc.set_int_list(section, key, value.to_control_points())
    elif kind == KIND_FLOAT_LIST:
        if spec.indexed:
            for item_key, item in zip(spec.keys(), value):
                doc.set_float(section, item_key, item)
        else:
            doc.set_float_list(section, key, value)
    elif kind == KIND_INT_LIST:
        if spec.indexed:
            for item_key, item in zip(spec.keys(), value):
                doc.set_int(section, item_key, item)
        else:
            doc.set_int_list(section, key, value)
    elif kind == KIND_EXIF:
        doc.add_section(section)
        for tag, text in value.items():
            doc.set_string(section, tag, text)
    elif kind == KIND_IPTC:
        doc.add_section(section)
        for tag, values in value.items():
            doc.set_string_list(section, tag, values)


def serialize_profile(params: ParameterSet, edit_mask=None, base_dir: Optional[str] = None) -> str:
    """
    Profile text for ``params``.

    Args:
        params: The set to write.
        edit_mask: When given, only marked fields are written.
        base_dir: When given, path fields inside this directory are written
            relative to it.
    """
    doc = KeyFile()
    doc.set_string(VERSION_SECTION, APP_VERSION_KEY, params.app_version)
    doc.set_int(VERSION_SECTION, SCHEMA_VERSION_KEY, settings.CURRENT_SCHEMA_VERSION)

    for spec in ParameterSet.field_specs():
        if edit_mask is not None and not edit_mask.is_set(spec.path):
            continue
        _encode_field(doc, spec, spec.get(params), base_dir)
    return doc.to_string()


# --- decoding ---

def _decode_enum(doc: KeyFile, spec: FieldSpec):
    raw = doc.get_string(spec.section, spec.key).strip()
    for member in spec.enum_type:
        if str(member.value) == raw:
            return member
    raise FieldParseError(
        f"{spec.section}.{spec.key}: unknown value {raw!r}",
        section=spec.section, key=spec.key, value=raw,
    )


def _decode_list(doc: KeyFile, spec: FieldSpec, current):
    getter = doc.get_float_list if spec.kind == KIND_FLOAT_LIST else doc.get_int_list
    if not spec.indexed:
        values = getter(spec.section, spec.key)
        if spec.length is not None and len(values) != spec.length:
            raise FieldParseError(
                f"{spec.section}.{spec.key}: expected {spec.length} values, got {len(values)}",
                section=spec.section, key=spec.key, value=doc.get_raw(spec.section, spec.key),
            )
        if spec.is_curve:
            problems = check_curve(values, spec.domain, spec.is_flat)
            if problems:
                raise FieldParseError(
                    f"{spec.section}.{spec.key}: {'; '.join(problems)}",
                    section=spec.section, key=spec.key, value=doc.get_raw(spec.section, spec.key),
                )
        return values

    single = doc.get_float if spec.kind == KIND_FLOAT_LIST else doc.get_int
    values = list(current)
    for i, item_key in enumerate(spec.keys()):
        if doc.has_key(spec.section, item_key):
            values[i] = single(spec.section, item_key)
    return values


def _decode_threshold(doc: KeyFile, spec: FieldSpec, current):
    if current.is_floating:
        points = doc.get_float_list(spec.section, spec.key)
    else:
        points = doc.get_int_list(spec.section, spec.key)
    curve = copy.deepcopy(current)
    try:
        curve.set_values(*points)
    except ValueError as e:
        raise FieldParseError(
            f"{spec.section}.{spec.key}: {e}",
            section=spec.section, key=spec.key, value=doc.get_raw(spec.section, spec.key),
        ) from e
    return curve


def _is_present(doc: KeyFile, spec: FieldSpec) -> bool:
    if spec.kind in (KIND_EXIF, KIND_IPTC):
        return doc.has_section(spec.section)
    return any(doc.has_key(spec.section, key) for key in spec.keys())


def _decode_field(doc: KeyFile, spec: FieldSpec, current, base_dir: str):
    section, key, kind = spec.section, spec.key, spec.kind
    if kind == KIND_BOOL:
        return doc.get_bool(section, key)
    if kind == KIND_INT:
        return doc.get_int(section, key)
    if kind == KIND_FLOAT:
        return doc.get_float(section, key)
    if kind == KIND_STR:
        value = doc.get_string(section, key)
        return resolve_path(value, base_dir) if spec.is_path else value
    if kind == KIND_ENUM:
        return _decode_enum(doc, spec)
    if kind == KIND_THRESHOLD:
        return _decode_threshold(doc, spec, current)
    if kind in (KIND_FLOAT_LIST, KIND_INT_LIST):
        return _decode_list(doc, spec, current)
    if kind == KIND_EXIF:
        return {tag: doc.get_string(section, tag) for tag in doc.keys(section)}
    if kind == KIND_IPTC:
        return {tag: doc.get_string_list(section, tag) for tag in doc.keys(section)}
    raise FieldParseError(f"unsupported field kind {kind!r}", section=section, key=key)


def _read_version(doc: KeyFile, issues: List[FieldIssue]):
    app_version = None
    file_version = settings.CURRENT_SCHEMA_VERSION
    if doc.has_key(VERSION_SECTION, APP_VERSION_KEY):
        app_version = doc.get_string(VERSION_SECTION, APP_VERSION_KEY)
    if doc.has_key(VERSION_SECTION, SCHEMA_VERSION_KEY):
        try:
            file_version = doc.get_int(VERSION_SECTION, SCHEMA_VERSION_KEY)
        except FieldParseError as e:
            issues.append(FieldIssue("schema_version", e.section, e.key, e.value, str(e)))
    return file_version, app_version


def load_profile(params: ParameterSet, path, edit_mask=None) -> LoadResult:
    """
    Replace ``params`` with the content of the profile at ``path``.

    ``params`` is reset to defaults and ``edit_mask`` (if given) cleared
    first. Every field read from the file is marked in ``edit_mask``; fields
    whose value cannot be decoded keep their default, stay unmarked and are
    listed in ``LoadResult.issues``.
    """
    path = os.fspath(path)
    params.set_defaults()
    if edit_mask is not None:
        edit_mask.set(False)

    if not os.path.exists(path):
        logger.warning("Profile not found: %s", path)
        return LoadResult(ProfileStatus.NOT_FOUND, path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read profile %s: %s", path, e)
        return LoadResult(ProfileStatus.UNREADABLE, path)

    try:
        doc = KeyFile.from_string(text, file_path=path)
    except MalformedDocumentError as e:
        logger.error("Malformed profile %s: %s", path, e)
        return LoadResult(ProfileStatus.MALFORMED, path)

    issues: List[FieldIssue] = []
    file_version, app_version = _read_version(doc, issues)
    newer = file_version > settings.CURRENT_SCHEMA_VERSION
    if newer:
        logger.warning("Profile %s has schema version %d, newer than %d; unknown keys are ignored",
                       path, file_version, settings.CURRENT_SCHEMA_VERSION)
    else:
        migrations.migrate_document(doc, file_version)

    base_dir = os.path.dirname(os.path.abspath(path))
    loaded = []
    known_keys = {(VERSION_SECTION, APP_VERSION_KEY), (VERSION_SECTION, SCHEMA_VERSION_KEY)}
    for spec in ParameterSet.field_specs():
        if spec.kind in (KIND_EXIF, KIND_IPTC):
            known_keys.update((spec.section, tag) for tag in doc.keys(spec.section))
        else:
            known_keys.update((spec.section, key) for key in spec.keys())
        if not _is_present(doc, spec):
            continue
        try:
            value = _decode_field(doc, spec, spec.get(params), base_dir)
        except FieldParseError as e:
            issues.append(FieldIssue(spec.path, spec.section, e.key or spec.key, e.value, str(e)))
            log_and_continue(f"{path}: {e}; keeping default", ErrorCategory.PARSE)
            continue
        spec.set(params, value)
        loaded.append(spec.path)

    for section, key, _ in doc.items():
        if (section, key) not in known_keys:
            logger.debug("Ignoring unknown key [%s] %s in %s", section, key, path)

    if app_version is not None:
        params.app_version = app_version
    params.schema_version = min(file_version, settings.CURRENT_SCHEMA_VERSION)
    migrations.migrate_params(params, loaded)

    if edit_mask is not None:
        for field_path in loaded:
            edit_mask.mark(field_path)

    if issues:
        status = ProfileStatus.PARTIAL_DEFAULTS
    elif newer:
        status = ProfileStatus.NEWER_SCHEMA
    else:
        status = ProfileStatus.OK
    logger.info("Loaded profile %s (version %d, %d field(s), status %s)",
                path, file_version, len(loaded), status.value)
    return LoadResult(status, path, file_version, app_version, issues, newer)


# --- writing ---

def _atomic_write(path: str, data: bytes) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".", suffix=".tmp")
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise FileIOError(f"Cannot write profile {path}", file_path=path, original_error=e) from e


def save_profile(params: ParameterSet, dest, dest2=None, relativize_paths=False, edit_mask=None) -> SaveResult:
    """
    Write ``params`` to ``dest`` and, when given, ``dest2``.

    The text is produced once, so both files are byte-identical. Each file
    is written to a temporary file in its directory and then moved into
    place. With ``relativize_paths``, path fields inside the directory of
    ``dest`` are written relative to it.
    """
    destinations = [os.fspath(d) for d in (dest, dest2) if d is not None]
    base_dir = os.path.dirname(os.path.abspath(destinations[0])) if relativize_paths else None
    data = serialize_profile(params, edit_mask=edit_mask, base_dir=base_dir).encode("utf-8")

    result = SaveResult(ProfileStatus.OK)
    for destination in destinations:
        try:
            _atomic_write(destination, data)
        except FileIOError as e:
            log_and_continue(str(e), ErrorCategory.FILE_IO, level="error")
            result.failed.append(destination)
            continue
        result.written.append(destination)
        logger.info("Saved profile %s", destination)

    if result.failed:
        result.status = ProfileStatus.WRITE_FAILURE
    return result
