"""Errors raised while extracting object declarations from the Swagger 2.0 HTML."""

from typing import Optional


class SchemaExtractionError(ValueError):
    """Base error for a generation run that cannot continue."""

    def __init__(self, message: str, object_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.object_name = object_name


class AnchorNotFoundError(SchemaExtractionError):
    """The node introducing the object catalogue is missing."""


class TableNotFoundError(SchemaExtractionError):
    """No <table> follows a "Fixed Fields" heading."""


class DuplicateObjectError(SchemaExtractionError):
    """Two object headings resolve to the same declaration name."""


class TableError(SchemaExtractionError):
    """A definitions table could not be read."""


class NotATableError(TableError):
    pass


class MissingColumnError(TableError):
    """The table header lacks one of the required columns."""

    def __init__(self, column: str) -> None:
        super().__init__(f"table header did not contain field {column!r}")
        self.column = column


class MalformedRowError(TableError):
    """A body row has fewer cells than the header columns require."""

    def __init__(self, row: int, cells: int, needed: int, first_cell: str = "") -> None:
        super().__init__(
            f"row {row} ({first_cell!r}) has {cells} cell(s), expected at least {needed}"
        )
        self.row = row
