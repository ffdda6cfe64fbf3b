"""Type-name classification and resolution.

Type names arrive as the shell reports them: short accelerators
(``string``, ``int``, ``switch``) or full names (``System.String``,
``System.Management.Automation.SwitchParameter``), optionally with
array (``[]``) or generic (``[[...]]``, ``<...>``) suffixes.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_ACCELERATORS: dict[str, str] = {
    "string": "System.String",
    "str": "System.String",
    "bool": "System.Boolean",
    "boolean": "System.Boolean",
    "switch": "System.Management.Automation.SwitchParameter",
    "switchparameter": "System.Management.Automation.SwitchParameter",
    "byte": "System.Byte",
    "sbyte": "System.SByte",
    "char": "System.Char",
    "short": "System.Int16",
    "int16": "System.Int16",
    "ushort": "System.UInt16",
    "uint16": "System.UInt16",
    "int": "System.Int32",
    "int32": "System.Int32",
    "uint": "System.UInt32",
    "uint32": "System.UInt32",
    "long": "System.Int64",
    "int64": "System.Int64",
    "ulong": "System.UInt64",
    "uint64": "System.UInt64",
    "float": "System.Single",
    "single": "System.Single",
    "double": "System.Double",
    "decimal": "System.Decimal",
    "datetime": "System.DateTime",
    "timespan": "System.TimeSpan",
    "guid": "System.Guid",
    "uri": "System.Uri",
    "version": "System.Version",
    "object": "System.Object",
    "psobject": "System.Management.Automation.PSObject",
    "pscustomobject": "System.Management.Automation.PSObject",
    "hashtable": "System.Collections.Hashtable",
    "array": "System.Array",
    "scriptblock": "System.Management.Automation.ScriptBlock",
    "pscredential": "System.Management.Automation.PSCredential",
    "securestring": "System.Security.SecureString",
    "regex": "System.Text.RegularExpressions.Regex",
    "xml": "System.Xml.XmlDocument",
    "void": "System.Void",
    "fileinfo": "System.IO.FileInfo",
    "directoryinfo": "System.IO.DirectoryInfo",
    "ipaddress": "System.Net.IPAddress",
}

KNOWN_TYPES: frozenset[str] = frozenset(_ACCELERATORS.values()) | frozenset(
    {
        "System.IO.FileSystemInfo",
        "System.Diagnostics.Process",
        "System.Management.Automation.ErrorRecord",
        "System.Management.Automation.CommandInfo",
        "System.Management.Automation.PathInfo",
        "Microsoft.PowerShell.Commands.MatchInfo",
        "System.Collections.Generic.List",
        "System.Collections.Generic.Dictionary",
        "System.Collections.Generic.IEnumerable",
        "System.Nullable",
    }
)

STRING = "System.String"
BOOLEAN = "System.Boolean"
SWITCH = "System.Management.Automation.SwitchParameter"
URI = "System.Uri"
PSCREDENTIAL = "System.Management.Automation.PSCredential"
SECURE_STRING = "System.Security.SecureString"

NUMERIC_TYPES: frozenset[str] = frozenset(
    {
        "System.Int16",
        "System.UInt16",
        "System.Int32",
        "System.UInt32",
        "System.Int64",
        "System.UInt64",
    }
)

CATCH_ALL_TYPES: frozenset[str] = frozenset(
    {"System.Object", "System.Management.Automation.PSObject"}
)

_ARRAY_SUFFIX = re.compile(r"\[\s*,*\s*\]$")
_GENERIC = re.compile(
    r"^(?P<base>[^\[<`]+)(?:`\d+)?"
    r"(?:\[\[(?P<a>.+)\]\]|\[(?P<b>.+)\]|<(?P<c>.+)>)$"
)
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def normalize(type_name: str) -> str:
    """Map accelerators to full names and strip surrounding brackets.

    Examples:
        >>> normalize("[string]")
        'System.String'
        >>> normalize("Int")
        'System.Int32'
        >>> normalize("My.Widget")
        'My.Widget'
    """
    name = type_name.strip()
    if name.startswith("[") and name.endswith("]") and not _ARRAY_SUFFIX.search(name[1:]):
        name = name[1:-1].strip()
    return _ACCELERATORS.get(name.lower(), name)


def element_type(type_name: str) -> str:
    """Strip array suffixes: ``string[]`` -> ``System.String``."""
    name = normalize(type_name)
    while _ARRAY_SUFFIX.search(name):
        name = _ARRAY_SUFFIX.sub("", name).strip()
    return normalize(name)


def is_string(type_name: str) -> bool:
    return element_type(type_name) == STRING


def is_boolean(type_name: str) -> bool:
    return element_type(type_name) == BOOLEAN


def is_switch(type_name: str) -> bool:
    return normalize(type_name) == SWITCH


def is_numeric(type_name: str) -> bool:
    return element_type(type_name) in NUMERIC_TYPES


def is_catch_all(type_name: str) -> bool:
    return element_type(type_name) in CATCH_ALL_TYPES


def same_type(type_name: str, expected: str) -> bool:
    return element_type(type_name) == expected


class TypeResolver:
    """Decides whether a type name refers to a loadable type.

    Built-in names plus any *extra* names supplied by configuration are
    resolvable; arrays resolve when their element type does, and generics
    when their base and every argument do.
    """

    def __init__(self, extra: Iterable[str] = ()) -> None:
        self._known = {t.lower() for t in KNOWN_TYPES}
        self._known.update(normalize(t).lower() for t in extra)

    def resolves(self, type_name: str) -> bool:
        name = normalize(type_name)
        if not name:
            return False
        if _ARRAY_SUFFIX.search(name):
            return self.resolves(_ARRAY_SUFFIX.sub("", name))
        generic = _GENERIC.match(name)
        if generic:
            args = generic.group("a") or generic.group("b") or generic.group("c") or ""
            parts = [a.strip().strip("[]") for a in args.split(",")]
            return self.resolves(generic.group("base")) and all(self.resolves(p) for p in parts)
        if not _IDENTIFIER.match(name):
            return False
        return name.lower() in self._known
