"""Render ObjectSections as a Python module of pydantic declarations."""

import json
from typing import Iterable, List

from specgen.parse.models import FieldRecord, ObjectSection, SpecialType
from specgen.parse.type_names import attribute_name, resolve_field_type, resolve_type_name
from specgen.parse.wrap import comment_block

GENERATED_HEADER = "# This file was generated by specgen. DO NOT EDIT.\n"

MODULE_PREAMBLE = '''
"""Object declarations of the Swagger 2.0 specification."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
'''

INDENT = "    "


def format_field(field: FieldRecord, special_names: Iterable[str], width: int = 80) -> str:
    """One annotated attribute bound to its document key.

    The alias is the key in both JSON and YAML documents. Required fields
    have no default; optional ones also accept an explicit null.
    """
    type_expr = resolve_field_type(resolve_type_name(field.type), frozenset(special_names))
    if not field.required and not type_expr.startswith("Optional["):
        type_expr = f"Optional[{type_expr}]"
    default = "..." if field.required else "None"
    line = (
        f"{INDENT}{attribute_name(field.name)}: {type_expr} = "
        f"Field({default}, alias={json.dumps(field.name)})"
    )
    if not field.description:
        return line
    return f"{comment_block(field.description, width, INDENT)}\n{line}"


def format_comment(section: ObjectSection) -> str:
    return "\n#\n".join(section.comment)


def format_class(section: ObjectSection, special_names: Iterable[str], width: int = 80) -> str:
    lines: List[str] = []
    if section.comment:
        lines.append(format_comment(section))
    lines.append(f"class {section.name}(BaseModel):")
    lines.append(f"{INDENT}model_config = ConfigDict(populate_by_name=True)")
    fields = section.table.fields if section.table else []
    if fields:
        lines.append("")
    for field in fields:
        lines.append(format_field(field, special_names, width))
    return "\n".join(lines)


def format_special(section: ObjectSection, special_type: SpecialType) -> str:
    declaration = f"{special_type.name} = {special_type.type}"
    if section.comment:
        return f"{format_comment(section)}\n{declaration}"
    return declaration


def render_module(
    sections: List[ObjectSection],
    special_types: List[SpecialType],
    field_comment_width: int = 80,
) -> str:
    """Build the generated module text from walked sections."""
    special_by_name = {t.name: t for t in special_types}
    special_names = frozenset(special_by_name)
    parts = [(GENERATED_HEADER + MODULE_PREAMBLE).rstrip("\n")]
    class_names: List[str] = []
    for section in sections:
        if section.special:
            continue
        parts.append(format_class(section, special_names, field_comment_width))
        class_names.append(section.name)
    for section in sections:
        if section.special and section.name in special_by_name:
            parts.append(format_special(section, special_by_name[section.name]))
    if class_names:
        parts.append("\n".join(f"{name}.model_rebuild()" for name in class_names))
    return "\n\n\n".join(parts) + "\n"
