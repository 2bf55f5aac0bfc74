"""Shared helpers for the XML document parsers."""

from typing import Dict, Iterator, Optional

from bs4 import BeautifulSoup, Tag

from ..errors import ParseError

XMLNS_PREFIX = "xmlns:"


def make_soup(content: bytes, format_name: str) -> BeautifulSoup:
    """Build an XML soup, refusing empty or non-XML payloads."""
    if not content or not content.strip():
        raise ParseError(format_name, "empty document")
    soup = BeautifulSoup(content, "xml")
    if root_element(soup) is None:
        raise ParseError(format_name, "no root element")
    return soup


def root_element(soup: BeautifulSoup) -> Optional[Tag]:
    return soup.find(True)


def qualified_name(tag: Tag) -> str:
    """Return ``prefix:local`` for a namespaced tag, the bare name otherwise."""
    if tag.prefix and ":" not in tag.name:
        return f"{tag.prefix}:{tag.name}"
    return tag.name


def child_elements(tag: Tag) -> Iterator[Tag]:
    return iter(tag.find_all(True, recursive=False))


def declared_namespaces(soup: BeautifulSoup) -> Dict[str, str]:
    """Collect every ``xmlns:prefix`` declaration in document order."""
    namespaces: Dict[str, str] = {}
    for tag in soup.find_all(True):
        for attr, value in tag.attrs.items():
            if attr.startswith(XMLNS_PREFIX):
                namespaces.setdefault(attr[len(XMLNS_PREFIX):], value)
    return namespaces
