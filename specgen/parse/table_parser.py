"""Read "Fixed Fields" definition tables into FieldRecords."""

from typing import Dict, List, Optional

from bs4.element import PageElement

from specgen.parse.errors import MalformedRowError, MissingColumnError, NotATableError
from specgen.parse.models import FieldRecord, FieldTable
from specgen.parse.tree import by_tag, find, find_all, text

COL_FIELD_NAME = "Field Name"
COL_TYPE = "Type"
COL_VALIDITY = "Validity"
COL_DESCRIPTION = "Description"

REQUIRED_COLUMNS = (COL_FIELD_NAME, COL_TYPE, COL_DESCRIPTION)


class TableParser:
    """Locate the known columns of a table by header text and read its rows.

    Columns may appear in any order and unknown headers are ignored.
    Validity is optional; the other three columns must all be present.
    """

    def __init__(self, node: PageElement) -> None:
        if not by_tag("table")(node):
            raise NotATableError("node is not a <table> element")
        self.table = node

        columns: Dict[str, int] = {}
        for i, th in enumerate(find_all(node, by_tag("th"))):
            header = text(th)
            if header in (COL_FIELD_NAME, COL_TYPE, COL_VALIDITY, COL_DESCRIPTION):
                columns[header] = i

        for column in REQUIRED_COLUMNS:
            if column not in columns:
                raise MissingColumnError(column)

        self.name_index: int = columns[COL_FIELD_NAME]
        self.type_index: int = columns[COL_TYPE]
        self.validity_index: Optional[int] = columns.get(COL_VALIDITY)
        self.description_index: int = columns[COL_DESCRIPTION]

    def fields(self) -> List[FieldRecord]:
        """Return one record per body row; a table without <tbody> has none."""
        body = find(self.table, by_tag("tbody"))
        if body is None:
            return []
        needed = max(self.name_index, self.type_index, self.description_index) + 1
        records: List[FieldRecord] = []
        for row_number, row in enumerate(find_all(body, by_tag("tr")), start=1):
            cells = find_all(row, by_tag("td"))
            if len(cells) < needed:
                first = text(cells[0]) if cells else ""
                raise MalformedRowError(row_number, len(cells), needed, first)
            records.append(FieldRecord.from_cells(
                name=text(cells[self.name_index]),
                type_text=text(cells[self.type_index]),
                description=text(cells[self.description_index]),
            ))
        return records

    def table_model(self) -> FieldTable:
        """Column layout plus rows as a FieldTable."""
        return FieldTable(
            name_index=self.name_index,
            type_index=self.type_index,
            validity_index=self.validity_index,
            description_index=self.description_index,
            fields=self.fields(),
        )
