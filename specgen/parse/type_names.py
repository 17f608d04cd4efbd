"""Map free-text type annotations in the Swagger 2.0 field tables to Python type expressions."""

import keyword
import re
from typing import Iterable

from pydantic import BaseModel

from specgen.config_loader import DEFAULT_SPECIAL_TYPES

DEFAULT_SPECIAL_NAMES = frozenset(t["name"] for t in DEFAULT_SPECIAL_TYPES)

# Keywords the document uses in its "Type" columns
TYPE_MAPPINGS = {
    "string": "str",
    "number": "float",
    "boolean": "bool",
    "integer": "int",
    "Any": "Any",
    "*": "Any",
    "[*]": "list[Any]",
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NON_IDENTIFIER = re.compile(r"\W+")


def resolve_type_name(raw: str) -> str:
    """Resolve a raw annotation such as "[Schema Object]" to "list[Schema]".

    Unions keep their first alternative only ("string | boolean" is "str").
    Anything that is not a keyword is read as an object title: a trailing
    "Object" is dropped and the words are joined ("Path Item Object" is
    "PathItem").
    """
    s = raw.strip()
    if s.startswith("[") and s.endswith("]") and s not in TYPE_MAPPINGS:
        return f"list[{resolve_type_name(s[1:-1])}]"
    if s in TYPE_MAPPINGS:
        return TYPE_MAPPINGS[s]
    if "|" in s:
        return resolve_type_name(s[:s.index("|")])
    if s.endswith("Object"):
        s = s[:-len("Object")]
    return "".join(s.split())


def resolve_field_type(name: str, special_names: Iterable[str] = DEFAULT_SPECIAL_NAMES) -> str:
    """Wrap references to declared objects in Optional.

    Special types are mappings and are used as they are; lower-case names
    (str, list[...], dict[...]) are value types.
    """
    if name in special_names:
        return name
    if name[:1].isupper():
        return f"Optional[{name}]"
    return name


def declaration_field_name(raw: str) -> str:
    """Capitalize the first letter of every word ("basePath" is "BasePath")."""
    if raw == "$ref":
        return "Ref"
    out = []
    at_boundary = True
    for ch in raw:
        out.append(ch.upper() if at_boundary else ch)
        at_boundary = not (ch.isalnum() or ch == "_")
    return "".join(out)


def attribute_name(raw: str) -> str:
    """Python attribute for a field: snake_case of its declaration name.

    Keywords and names already defined on BaseModel ("in", "schema") get a
    trailing underscore; the document key stays available as the alias.
    """
    name = declaration_field_name(raw)
    name = _NON_IDENTIFIER.sub("_", name).strip("_")
    name = _CAMEL_BOUNDARY.sub("_", name).lower()
    if not name or name[0].isdigit():
        name = f"field_{name}"
    if keyword.iskeyword(name) or hasattr(BaseModel, name):
        name += "_"
    return name
