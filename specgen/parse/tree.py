"""Depth-first query helpers over a parsed BeautifulSoup document tree."""

from typing import Callable, List, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

Predicate = Callable[[PageElement], bool]


def parse_document(markup: str) -> BeautifulSoup:
    """Parse HTML markup with the standard library builder."""
    return BeautifulSoup(markup, "html.parser")


def find(node: PageElement, match: Predicate) -> Optional[PageElement]:
    """Return the first node in pre-order (node itself first) that matches."""
    if match(node):
        return node
    if isinstance(node, Tag):
        for child in node.contents:
            found = find(child, match)
            if found is not None:
                return found
    return None


def find_all(node: PageElement, match: Predicate) -> List[PageElement]:
    """Return every matching node in pre-order.

    The subtree of a matching node is not searched, so a nested <td> inside
    a matched <td> is never reported twice.
    """
    if match(node):
        return [node]
    found: List[PageElement] = []
    if isinstance(node, Tag):
        for child in node.contents:
            found.extend(find_all(child, match))
    return found


def next_sibling(node: PageElement, match: Predicate) -> Optional[PageElement]:
    """Return the first following sibling that matches, without descending."""
    sibling = node.next_sibling
    while sibling is not None:
        if match(sibling):
            return sibling
        sibling = sibling.next_sibling
    return None


def is_element(node: PageElement) -> bool:
    return isinstance(node, Tag)


def is_text(node: PageElement) -> bool:
    """Text leaves exclude comments, doctypes and CDATA sections."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def by_tag(name: str) -> Predicate:
    """Predicate matching elements with the given tag name."""
    def match(node: PageElement) -> bool:
        return isinstance(node, Tag) and node.name == name
    return match


def has_child(node: PageElement, match: Predicate) -> bool:
    """True if any direct child of node matches."""
    if not isinstance(node, Tag):
        return False
    return any(match(child) for child in node.contents)


def has_attr(node: PageElement, key: str, value: str) -> bool:
    if not isinstance(node, Tag):
        return False
    attr = node.attrs.get(key)
    # bs4 returns multi-valued attributes such as class as lists
    if isinstance(attr, list):
        attr = " ".join(attr)
    return attr == value


def text(node: PageElement) -> str:
    """Concatenate every text leaf under node.

    Each leaf loses its leading and trailing newlines and has interior
    newlines replaced by spaces. Blank leaves are skipped and nothing is
    inserted between leaves.
    """
    parts = []
    for leaf in find_all(node, is_text):
        data = str(leaf)
        if data.strip():
            parts.append(data.strip("\n").replace("\n", " "))
    return "".join(parts)
