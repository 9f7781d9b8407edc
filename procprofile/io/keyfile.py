# Key-file codec
"""
Reading and writing the ``[Section]`` / ``Key=value`` text used by profiles.

Parsing is delegated to ``configparser`` with interpolation disabled, case
preserved and ``#`` as the only comment prefix. Writing is done here so the
output layout is stable: one ``Key=value`` per line, sections separated by a
blank line, sections and keys in insertion order.

Value encoding:

- booleans ``true``/``false`` (``1``/``0`` accepted when reading)
- floats with ``repr`` so they read back exactly
- lists delimited by ``;`` with a trailing ``;``
- ``\\``, newline, tab and carriage return escaped; a leading or
  trailing space is written as ``\\s``; inside string lists ``;`` is written as ``\\;``
"""

import configparser
from typing import Dict, Iterator, List, Optional

from procprofile.config import settings
from procprofile.utils.errors import FieldParseError, MalformedDocumentError

_DEFAULT_SECTION = "procprofile:defaults"

_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\t": "\\t", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "n": "\n", "t": "\t", "r": "\r", "s": " ", ";": ";"}

_TRUE = ("true", "1")
_FALSE = ("false", "0")


def escape_value(text: str, list_item: bool = False) -> str:
    out = []
    last = len(text) - 1
    for i, ch in enumerate(text):
        # configparser strips whitespace around values
        if ch == " " and (i == 0 or i == last):
            out.append("\\s")
        elif ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif list_item and ch == settings.LIST_DELIMITER:
            out.append("\\" + ch)
        else:
            out.append(ch)
    return "".join(out)


def unescape_value(raw: str) -> str:
    out = []
    chars = iter(raw)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        if nxt in _UNESCAPES:
            out.append(_UNESCAPES[nxt])
        else:
            # Unknown escape, keep it verbatim
            out.append(ch + nxt)
    return "".join(out)


def split_list(raw: str) -> List[str]:
    """Split on unescaped delimiters; a trailing delimiter ends the list."""
    items = []
    current = []
    escaped = False
    for ch in raw:
        if escaped:
            current.append("\\" + ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == settings.LIST_DELIMITER:
            items.append("".join(current))
            current = []
        else:
            current.append(ch)
    if escaped:
        current.append("\\")
    if current:
        items.append("".join(current))
    return items


class KeyFile:
    """Ordered sections of raw (still escaped) ``key -> value`` strings."""

    def __init__(self):
        self._sections: Dict[str, Dict[str, str]] = {}

    # --- parsing / output ---

    @classmethod
    def from_string(cls, text: str, file_path: Optional[str] = None) -> "KeyFile":
        """
        Parse profile text.

        Raises:
            MalformedDocumentError: The text has no section structure.
        """
        parser = configparser.RawConfigParser(
            delimiters=("=",),
            comment_prefixes=(settings.COMMENT_PREFIX,),
            strict=False,
            empty_lines_in_values=False,
            interpolation=None,
            default_section=_DEFAULT_SECTION,
        )
        parser.optionxform = str
        try:
            parser.read_string(text, source=file_path or "<string>")
        except configparser.Error as e:
            raise MalformedDocumentError(
                f"Cannot parse profile: {e}",
                file_path=file_path,
                line=getattr(e, "lineno", None),
                original_error=e,
                user_message="The profile file is damaged or not a profile.",
            ) from e

        if not parser.sections():
            raise MalformedDocumentError(
                "No sections found in profile",
                file_path=file_path,
                user_message="The profile file is empty or not a profile.",
            )

        keyfile = cls()
        for section in parser.sections():
            keyfile.add_section(section)
            for key, value in parser.items(section, raw=True):
                keyfile.set_raw(section, key, value)
        return keyfile

    def to_string(self) -> str:
        blocks = []
        for section, entries in self._sections.items():
            lines = [f"[{section}]"]
            lines.extend(f"{key}={value}" for key, value in entries.items())
            blocks.append("\n".join(lines) + "\n")
        return "\n".join(blocks)

    # --- structure ---

    def sections(self) -> List[str]:
        return list(self._sections)

    def keys(self, section: str) -> List[str]:
        return list(self._sections.get(section, {}))

    def items(self) -> Iterator:
        for section, entries in self._sections.items():
            for key, value in entries.items():
                yield section, key, value

    def has_section(self, section: str) -> bool:
        return section in self._sections

    def has_key(self, section: str, key: str) -> bool:
        return key in self._sections.get(section, {})

    def get_raw(self, section: str, key: str) -> str:
        try:
            return self._sections[section][key]
        except KeyError:
            raise FieldParseError(f"Missing key {section}.{key}", section=section, key=key) from None

    def add_section(self, section: str) -> None:
        self._sections.setdefault(section, {})

    def set_raw(self, section: str, key: str, value: str) -> None:
        self._sections.setdefault(section, {})[key] = value

    def remove_key(self, section: str, key: str) -> None:
        entries = self._sections.get(section)
        if entries is not None:
            entries.pop(key, None)

    # --- typed setters ---

    def set_bool(self, section: str, key: str, value: bool) -> None:
        self.set_raw(section, key, "true" if value else "false")

    def set_int(self, section: str, key: str, value: int) -> None:
        self.set_raw(section, key, str(int(value)))

    def set_float(self, section: str, key: str, value: float) -> None:
        self.set_raw(section, key, repr(float(value)))

    def set_string(self, section: str, key: str, value: str) -> None:
        self.set_raw(section, key, escape_value(value))

    def set_int_list(self, section: str, key: str, values) -> None:
        self.set_raw(section, key, "".join(f"{int(v)}{settings.LIST_DELIMITER}" for v in values))

    def set_float_list(self, section: str, key: str, values) -> None:
        self.set_raw(section, key, "".join(f"{float(v)!r}{settings.LIST_DELIMITER}" for v in values))

    def set_string_list(self, section: str, key: str, values) -> None:
        self.set_raw(section, key, "".join(
            escape_value(v, list_item=True) + settings.LIST_DELIMITER for v in values))

    # --- typed getters ---

    def _fail(self, section, key, raw, expected):
        return FieldParseError(
            f"{section}.{key}: expected {expected}, got {raw!r}",
            section=section, key=key, value=raw,
        )

    def get_bool(self, section: str, key: str) -> bool:
        raw = self.get_raw(section, key).strip()
        if raw in _TRUE:
            return True
        if raw in _FALSE:
            return False
        raise self._fail(section, key, raw, "a boolean")

    def get_int(self, section: str, key: str) -> int:
        raw = self.get_raw(section, key)
        try:
            return int(raw.strip())
        except ValueError:
            raise self._fail(section, key, raw, "an integer") from None

    def get_float(self, section: str, key: str) -> float:
        raw = self.get_raw(section, key)
        try:
            return float(raw.strip())
        except ValueError:
            raise self._fail(section, key, raw, "a number") from None

    def get_string(self, section: str, key: str) -> str:
        return unescape_value(self.get_raw(section, key))

    def get_int_list(self, section: str, key: str) -> List[int]:
        raw = self.get_raw(section, key)
        try:
            return [int(item.strip()) for item in split_list(raw)]
        except ValueError:
            raise self._fail(section, key, raw, "a list of integers") from None

    def get_float_list(self, section: str, key: str) -> List[float]:
        raw = self.get_raw(section, key)
        try:
            return [float(item.strip()) for item in split_list(raw)]
        except ValueError:
            raise self._fail(section, key, raw, "a list of numbers") from None

    def get_string_list(self, section: str, key: str) -> List[str]:
        return [unescape_value(item) for item in split_list(self.get_raw(section, key))]
