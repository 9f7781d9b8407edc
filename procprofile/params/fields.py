# Field declarations for parameter groups
"""
Declarative field metadata shared by every parameter group.

Each persisted field is declared with one of the helpers below, which wrap
``dataclasses.field`` and record the on-disk key, the value kind and, where
needed, a section override. ``field_specs`` walks those declarations and
yields one ``FieldSpec`` per leaf field, so persistence, equality reporting,
the edit mask and partial merges all work from the same list.
"""

import enum
from dataclasses import dataclass, field, fields, is_dataclass
from functools import lru_cache
from typing import Any, Callable, List, Optional, Sequence, Tuple

from procprofile.utils.errors import ConfigurationError
from . import curves as curve_tables

# Value kinds understood by the profile codec
KIND_BOOL = "bool"
KIND_INT = "int"
KIND_FLOAT = "float"
KIND_STR = "str"
KIND_ENUM = "enum"
KIND_THRESHOLD = "threshold"
KIND_FLOAT_LIST = "float_list"
KIND_INT_LIST = "int_list"
KIND_GROUP = "group"
KIND_EXIF = "exif"
KIND_IPTC = "iptc"


def _infer_kind(default: Any) -> str:
    # bool first: bool is a subclass of int
    if isinstance(default, bool):
        return KIND_BOOL
    if isinstance(default, enum.Enum):
        return KIND_ENUM
    if isinstance(default, int):
        return KIND_INT
    if isinstance(default, float):
        return KIND_FLOAT
    if isinstance(default, str):
        return KIND_STR
    raise ConfigurationError(f"cannot infer field kind from default {default!r}")


def param(key: str, default: Any, *, section: Optional[str] = None):
    """Scalar field (bool, int, float, str or Enum member)."""
    kind = _infer_kind(default)
    metadata = {"key": key, "kind": kind, "section": section}
    if kind == KIND_ENUM:
        metadata["enum"] = type(default)
    return field(default=default, metadata=metadata)


def path_param(key: str, default: str = "", *, section: Optional[str] = None):
    """String field holding a file-system path (may be stored relative to the profile)."""
    return field(default=default, metadata={"key": key, "kind": KIND_STR, "section": section, "path": True})


def curve_param(
    key: str,
    factory: Callable[[], List[float]] = curve_tables.linear_curve,
    *,
    domain: Optional[Tuple[float, float]] = None,
    flat: Optional[bool] = None,
    section: Optional[str] = None,
):
    """Curve control points, type code first. Flat or diagonal follows the factory unless given."""
    if flat is None:
        flat = getattr(factory, "flat", False)
    return field(default_factory=factory, metadata={
        "key": key, "kind": KIND_FLOAT_LIST, "section": section, "curve": True, "domain": domain,
        "flat": flat,
    })


def float_list_param(key: str, default: Sequence[float], *, indexed_from: Optional[int] = None,
               section: Optional[str] = None):
    values = tuple(float(v) for v in default)
    return field(default_factory=lambda: list(values), metadata={
        "key": key, "kind": KIND_FLOAT_LIST, "section": section,
        "indexed_from": indexed_from, "length": len(values),
    })


def int_list_param(key: str, default: Sequence[int], *, indexed_from: Optional[int] = None,
             section: Optional[str] = None):
    """
    Integer list. With ``indexed_from`` every element gets its own key
    (``Contrast1``, ``Contrast2``...) instead of one delimited value.
    """
    values = tuple(int(v) for v in default)
    return field(default_factory=lambda: list(values), metadata={
        "key": key, "kind": KIND_INT_LIST, "section": section,
        "indexed_from": indexed_from, "length": len(values),
    })


def threshold_param(key: str, factory: Callable[[], Any], *, section: Optional[str] = None):
    return field(default_factory=factory, metadata={"key": key, "kind": KIND_THRESHOLD, "section": section})


def sub_group(section: str, group_cls: type):
    """Nested parameter group stored in its own section."""
    return field(default_factory=group_cls, metadata={"kind": KIND_GROUP, "section": section, "group": group_cls})


@dataclass(frozen=True)
class FieldSpec:
    """One persisted leaf field, addressed by its dotted attribute path."""
    path: str
    attrs: Tuple[str, ...]
    section: str
    key: str
    kind: str
    enum_type: Optional[type] = None
    is_path: bool = False
    is_curve: bool = False
    is_flat: bool = False
    domain: Optional[Tuple[float, float]] = None
    indexed_from: Optional[int] = None
    length: Optional[int] = None
    masked: bool = True

    @property
    def indexed(self) -> bool:
        return self.indexed_from is not None

    def keys(self) -> List[str]:
        """On-disk key names used by this field."""
        if self.indexed:
            return [f"{self.key}{i}" for i in range(self.indexed_from, self.indexed_from + self.length)]
        return [self.key]

    def owner(self, obj: Any) -> Any:
        for name in self.attrs[:-1]:
            obj = getattr(obj, name)
        return obj

    def get(self, obj: Any) -> Any:
        return getattr(self.owner(obj), self.attrs[-1])

    def set(self, obj: Any, value: Any) -> None:
        setattr(self.owner(obj), self.attrs[-1], value)


@lru_cache(maxsize=None)
def field_specs(cls: type, section: Optional[str] = None, prefix: Tuple[str, ...] = ()) -> Tuple[FieldSpec, ...]:
    """All leaf fields of a dataclass, nested groups flattened, in declaration order."""
    if not is_dataclass(cls):
        raise ConfigurationError(f"{cls.__name__} is not a parameter group")

    specs: List[FieldSpec] = []
    for f in fields(cls):
        md = f.metadata
        kind = md.get("kind")
        if kind is None:
            continue
        attrs = prefix + (f.name,)
        field_section = md.get("section") or section
        if kind == KIND_GROUP:
            specs.extend(field_specs(md["group"], field_section, attrs))
            continue
        if field_section is None and kind not in (KIND_EXIF, KIND_IPTC):
            raise ConfigurationError(f"field {'.'.join(attrs)} has no section", setting_name=f.name)
        specs.append(FieldSpec(
            path=".".join(attrs),
            attrs=attrs,
            section=field_section,
            key=md.get("key", ""),
            kind=kind,
            enum_type=md.get("enum"),
            is_path=md.get("path", False),
            is_curve=md.get("curve", False),
            is_flat=md.get("flat", False),
            domain=md.get("domain"),
            indexed_from=md.get("indexed_from"),
            length=md.get("length"),
            masked=md.get("masked", True),
        ))
    return tuple(specs)


def curve_fields(cls: type) -> Tuple[str, ...]:
    return tuple(f.name for f in fields(cls) if f.metadata.get("curve"))


def param_group(cls: type) -> type:
    """
    Turn a class body into a parameter group.

    Applies ``@dataclass`` and attaches ``set_defaults``; groups with curve
    fields also get ``curve_points`` and ``expand_curves``.
    """
    cls = dataclass(cls)

    if "set_defaults" not in cls.__dict__:
        def set_defaults(self) -> None:
            """Restore every field to its documented baseline value."""
            fresh = type(self)()
            for f in fields(self):
                setattr(self, f.name, getattr(fresh, f.name))
        cls.set_defaults = set_defaults

    names = curve_fields(cls)
    if names:
        def curve_points(self) -> dict:
            return {name: list(getattr(self, name)) for name in names}

        def expand_curves(self, builder):
            """Pass every curve to ``builder(name, points)``; see ``curves.expand_curves``."""
            return curve_tables.expand_curves(self.curve_points(), builder)

        cls.curve_points = curve_points
        cls.expand_curves = expand_curves

    return cls
