"""Walk the object catalogue of the Swagger 2.0 HTML and collect object sections.

The catalogue starts at the element linking to the anchor (``#schema``) and
runs over its following siblings until the next <h3>. Inside it:

- <h4> starts an object ("Swagger Object", "Path Item Object", ...) and the
  <p> elements right after it describe the object;
- <h5>Fixed Fields</h5> is followed by the <table> listing its fields.

The walk is a small state machine driven by the tag of each sibling.
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional

from bs4.element import PageElement

from specgen.config_loader import DEFAULT_SPECIAL_TYPES, special_type_names
from specgen.parse.errors import (
    AnchorNotFoundError,
    DuplicateObjectError,
    SchemaExtractionError,
    TableError,
    TableNotFoundError,
)
from specgen.parse.models import ObjectSection, SpecialType
from specgen.parse.table_parser import TableParser
from specgen.parse.tree import by_tag, find, has_attr, has_child, is_element, next_sibling, text
from specgen.parse.type_names import resolve_type_name
from specgen.parse.wrap import comment_block

FIXED_FIELDS = "Fixed Fields"
SECTION_TAG = "h3"
OBJECT_TAG = "h4"
SUBHEADING_TAG = "h5"

# Objects whose table follows the description directly, without a
# "Fixed Fields" heading
EAGER_TABLE_OBJECTS = frozenset({"Header"})


class WalkState(str, Enum):
    """Where the walker is within the current object."""
    SCANNING_FOR_HEADING = "scanning_for_heading"
    ACCUMULATING_COMMENT = "accumulating_comment"
    AWAITING_TABLE_TRIGGER = "awaiting_table_trigger"


class CommentAccumulator:
    """Comment blocks captured per object name during one run."""

    def __init__(self) -> None:
        self._blocks: Dict[str, List[str]] = {}

    def reset(self, name: str) -> None:
        self._blocks[name] = []

    def append(self, name: str, block: str) -> None:
        self._blocks.setdefault(name, []).append(block)

    def get(self, name: str) -> List[str]:
        return list(self._blocks.get(name, []))

    def __contains__(self, name: str) -> bool:
        return name in self._blocks


def find_anchor(root: PageElement, href: str = "#schema") -> PageElement:
    """Return the node having a direct <a href=...> child for the catalogue."""
    is_link = by_tag("a")

    def matcher(node: PageElement) -> bool:
        return has_child(node, lambda c: is_link(c) and has_attr(c, "href", href))

    anchor = find(root, matcher)
    if anchor is None:
        raise AnchorNotFoundError(f"could not find the element linking to {href!r}")
    return anchor


class SectionWalker:
    """Collect the ObjectSections of one document.

    Args:
        root: Parsed document.
        special_types: Mapping-typed objects; defaults to the built-in list.
        anchor: href of the link introducing the catalogue.
        comment_width: Wrap width for object comments.
    """

    def __init__(
        self,
        root: PageElement,
        special_types: Optional[Iterable[SpecialType]] = None,
        anchor: str = "#schema",
        comment_width: int = 85,
    ) -> None:
        if special_types is None:
            special_types = [SpecialType(**t) for t in DEFAULT_SPECIAL_TYPES]
        self.root = root
        self.special_types: List[SpecialType] = list(special_types)
        self.special_names = frozenset(special_type_names(self.special_types))
        self.anchor = anchor
        self.comment_width = comment_width

        self.comments = CommentAccumulator()
        self.state = WalkState.SCANNING_FOR_HEADING
        self.sections: List[ObjectSection] = []
        self._name: Optional[str] = None
        self._heading: Optional[PageElement] = None

    def walk(self) -> List[ObjectSection]:
        """Return scanned objects in document order, then the special types."""
        start = find_anchor(self.root, self.anchor)
        node = start.next_sibling
        while node is not None and not by_tag(SECTION_TAG)(node):
            self.step(node)
            node = node.next_sibling
        if self.state == WalkState.ACCUMULATING_COMMENT:
            self._end_comment()
        return self.sections + self.special_sections()

    def step(self, node: PageElement) -> None:
        """Advance the state machine by one sibling node."""
        if not is_element(node):
            return
        if self.state == WalkState.ACCUMULATING_COMMENT:
            if by_tag("p")(node):
                block = comment_block(text(node), self.comment_width)
                self.comments.append(self._name, block)
                return
            self._end_comment()

        if by_tag(OBJECT_TAG)(node):
            self._start_object(node)
        elif (
            by_tag(SUBHEADING_TAG)(node)
            and self.state == WalkState.AWAITING_TABLE_TRIGGER
            and text(node) == FIXED_FIELDS
            and self._name not in self.special_names
        ):
            self._parse_table(node)

    def special_sections(self) -> List[ObjectSection]:
        return [
            ObjectSection(name=t.name, comment=self.comments.get(t.name), special=True)
            for t in self.special_types
        ]

    def _start_object(self, heading: PageElement) -> None:
        self._name = resolve_type_name(text(heading))
        self._heading = heading
        self.comments.reset(self._name)
        self.state = WalkState.ACCUMULATING_COMMENT

    def _end_comment(self) -> None:
        self.state = WalkState.AWAITING_TABLE_TRIGGER
        if self._name in EAGER_TABLE_OBJECTS and self._name not in self.special_names:
            self._parse_table(self._heading)

    def _parse_table(self, after: PageElement) -> None:
        name = self._name
        if any(s.name == name for s in self.sections):
            raise DuplicateObjectError(f"object {name} is declared twice", object_name=name)
        table = next_sibling(after, by_tag("table"))
        if table is None:
            raise TableNotFoundError(
                f"<table> does not follow fixed fields for {name}", object_name=name
            )
        try:
            parsed = TableParser(table).table_model()
        except TableError as e:
            raise SchemaExtractionError(f"table {name} failed: {e}", object_name=name) from e
        self.sections.append(
            ObjectSection(name=name, comment=self.comments.get(name), table=parsed)
        )
        self.state = WalkState.SCANNING_FOR_HEADING


def walk_sections(
    root: PageElement,
    special_types: Optional[Iterable[SpecialType]] = None,
    anchor: str = "#schema",
    comment_width: int = 85,
) -> List[ObjectSection]:
    """Convenience wrapper around SectionWalker.walk()."""
    return SectionWalker(root, special_types, anchor, comment_width).walk()
