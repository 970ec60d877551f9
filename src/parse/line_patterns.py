"""Line-level regex predicates for export state, JSON tags and enum shapes.

Symbol sources report structure but not modifiers, so the last mile of
classification is confirmed against the raw declaration line.
"""

from __future__ import annotations

import re

_EXPORT_LINE = re.compile(r"^\s*export\s+")
_EXPORT_CONST_LINE = re.compile(r"^\s*export\s+const\s+")
_EXPORT_TYPE_LINE = re.compile(r"^\s*export\s+type\s+")
_JSON_TAG = re.compile(r'json:"([^,"]+)')
_UPPERCASE = re.compile(r"[A-Z]")

_STRING_LITERAL = re.compile(r"\"[^\"]*\"|'[^']*'|`[^`]*`")
_NUMBER_VALUE = re.compile(r"=\s*-?\d+\b")
_BOOLEAN_VALUE = re.compile(r"=\s*(?:true|false)\b")
_LITERAL_TYPE = re.compile(r":\s*([\"'`])[^\"'`]*\1|:\s*-?\d+\b|:\s*(?:true|false)\b")

# Optional `const` keyword: the constant may sit inside a `const (...)` block.
_GO_TYPED_CONST = re.compile(r"^\s*(?:const\s+)?(\w+)\s+(\w+)\s*=")
_GO_ENUM_TYPE = re.compile(
    r"type\s+(\w+)\s*=\s*(?:string|int\d*|uint\d*|float\d+|bool|byte|rune)\b"
)
_TS_TYPE_DECL = re.compile(r"export\s+type\s+(\w+)\s*=")
_LEADING_PIPE = re.compile(r"^\s*\|")
_TRAILING_PIPE = re.compile(r"\|\s*$")
_IDENTIFIER = re.compile(r"[A-Za-z_]\w*")


def identifier_at(line: str, character: int) -> str | None:
    """Return the identifier touching column ``character`` of ``line``.

    Examples:
        >>> identifier_at("user.Email = x", 7)
        'Email'
        >>> identifier_at("a + b", 2) is None
        True
    """
    for match in _IDENTIFIER.finditer(line):
        if match.start() <= character <= match.end():
            return match.group()
    return None


def is_go_exported(name: str) -> bool:
    """Go exports every identifier whose first character is uppercase."""
    return name[:1].isupper()


def is_ts_exported_line(line: str) -> bool:
    """TypeScript exports a declaration whose line starts with ``export``."""
    return _EXPORT_LINE.match(line) is not None


def is_ts_export_type_line(line: str) -> bool:
    return _EXPORT_TYPE_LINE.match(line) is not None


def extract_json_tag(line: str) -> str | None:
    """Return the ``json:"..."`` tag name of a Go struct field line, if any.

    Options after the name (``,omitempty``) are dropped.

    Examples:
        >>> extract_json_tag('Email string `json:"email,omitempty"`')
        'email'
        >>> extract_json_tag("Email string") is None
        True
    """
    match = _JSON_TAG.search(line)
    return match.group(1) if match else None


def has_two_uppercase_letters(name: str) -> bool:
    return len(_UPPERCASE.findall(name)) >= 2


def has_literal_value(line: str) -> bool:
    """True when the line assigns a string, number or boolean literal."""
    return bool(
        _STRING_LITERAL.search(line)
        or _NUMBER_VALUE.search(line)
        or _BOOLEAN_VALUE.search(line)
    )


def has_literal_type(line: str) -> bool:
    """True when the line carries a literal type annotation (``: "a"``)."""
    return _LITERAL_TYPE.search(line) is not None


def is_go_enum_const(name: str, line: str) -> bool:
    """Check the ``<Name> <Type> = <literal>`` shape of a Go enum constant.

    The type must be spelled out, both names must be exported, the constant
    must carry the type name as its prefix and have at least two uppercase
    letters (``StatusActive`` for type ``Status``).
    """
    match = _GO_TYPED_CONST.match(line)
    if match is None or match.group(1) != name:
        return False

    type_name = match.group(2)
    return (
        is_go_exported(name)
        and is_go_exported(type_name)
        and name.startswith(type_name)
        and has_two_uppercase_letters(name)
        and has_literal_value(line)
    )


def is_ts_enum_const(name: str, line: str) -> bool:
    """Check the ``export const <Name> = <literal>`` shape of a TS enum constant."""
    return (
        _EXPORT_CONST_LINE.match(line) is not None
        and name[:1].isupper()
        and has_two_uppercase_letters(name)
        and (has_literal_value(line) or has_literal_type(line))
    )


def is_go_enum_type(name: str, line: str) -> bool:
    """Check ``type <Name> = <basic type>`` for an exported Go alias."""
    match = _GO_ENUM_TYPE.search(line)
    return match is not None and match.group(1) == name and is_go_exported(name)


def ts_enum_type_name(line: str, next_line: str = "") -> str | None:
    """Return the alias name when ``line`` declares a union of ``typeof`` constants.

    The ``typeof <Name><Upper>`` member may sit on the declaration line or on
    the following line when a formatter broke the union there; the following
    line only counts when it begins or ends with ``|``.
    """
    match = _TS_TYPE_DECL.search(line)
    if match is None:
        return None

    type_name = match.group(1)
    typeof_pattern = re.compile(rf"typeof\s+{re.escape(type_name)}[A-Z]")
    if typeof_pattern.search(line):
        return type_name

    if typeof_pattern.search(next_line) and (
        _LEADING_PIPE.search(next_line) or _TRAILING_PIPE.search(next_line)
    ):
        return type_name

    return None


__all__ = [
    "extract_json_tag",
    "has_literal_type",
    "has_literal_value",
    "has_two_uppercase_letters",
    "identifier_at",
    "is_go_enum_const",
    "is_go_enum_type",
    "is_go_exported",
    "is_ts_enum_const",
    "is_ts_export_type_line",
    "is_ts_exported_line",
    "ts_enum_type_name",
]
