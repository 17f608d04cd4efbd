"""Pydantic models for objects scraped from the Swagger 2.0 HTML.

An ObjectSection is one "... Object" heading of the document together with
the paragraphs describing it and, when it has one, its "Fixed Fields" table.
SpecialType entries name objects that are really mappings and are declared
from configuration instead of from a table.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


REQUIRED_PREFIX = "Required. "


class FieldRecord(BaseModel):
    """A single row of a "Fixed Fields" table."""
    name: str = Field(..., description="Raw field name as written in the table (e.g. 'basePath', '$ref')")
    type: str = Field(..., description="Raw type annotation (e.g. '[string]', 'Schema Object')")
    description: str = Field("", description="Description text with any 'Required. ' prefix removed")
    required: bool = Field(False, description="Whether the description started with 'Required. '")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "swagger",
                "type": "string",
                "description": "Specifies the Swagger Specification version being used.",
                "required": True,
            }
        }

    @classmethod
    def from_cells(cls, name: str, type_text: str, description: str) -> "FieldRecord":
        """Build a record, splitting the required marker off the description."""
        required = description.startswith(REQUIRED_PREFIX)
        if required:
            description = description[len(REQUIRED_PREFIX):]
        return cls(name=name, type=type_text, description=description, required=required)


class FieldTable(BaseModel):
    """Column layout of a definitions table and the rows read from it."""
    name_index: int = Field(..., description="Index of the 'Field Name' column")
    type_index: int = Field(..., description="Index of the 'Type' column")
    validity_index: Optional[int] = Field(None, description="Index of the optional 'Validity' column")
    description_index: int = Field(..., description="Index of the 'Description' column")
    fields: List[FieldRecord] = Field(default_factory=list, description="Body rows in document order")


class SpecialType(BaseModel):
    """An object declared as a fixed mapping type rather than a class."""
    name: str = Field(..., description="Declaration name (e.g. 'Paths')")
    type: str = Field(..., description="Python type expression (e.g. 'dict[str, PathItem]')")

    class Config:
        json_schema_extra = {
            "example": {"name": "SecurityRequirement", "type": "dict[str, list[str]]"}
        }


class ObjectSection(BaseModel):
    """One object of the document between its heading and the next one."""
    name: str = Field(..., description="Resolved declaration name (e.g. 'PathItem')")
    comment: List[str] = Field(default_factory=list, description="Comment blocks, one per paragraph")
    table: Optional[FieldTable] = Field(None, description="Parsed fixed fields, if any")
    special: bool = Field(False, description="Whether the object is declared from a SpecialType")


class GeneratorConfig(BaseModel):
    """Settings read from config/special_types.yaml."""
    anchor: str = Field("#schema", description="href of the link marking the object catalogue")
    comment_width: int = Field(85, description="Wrap width for object comments")
    field_comment_width: int = Field(80, description="Wrap width for field comments")
    special_types: List[SpecialType] = Field(default_factory=list, description="Mapping-typed objects")
