"""
Parser for uBio authority metadata (RDF/XML) documents.

Example: http://www.ubio.org/authority/metadata.php?lsid=urn:lsid:ubio.org:namebank:2481730

Each rdf:Description becomes one taxon whose statements are the
description's child elements, predicates kept in their prefixed form.
A document without descriptions yields an empty result.
"""

from ..errors import ParseError
from ..models import ResultSet, TaxonEntry, Taxa
from .common import (
    child_elements,
    declared_namespaces,
    make_soup,
    qualified_name,
    root_element,
)

FORMAT = "ubiometa"
NAME_PREDICATES = ("ubio:canonicalName", "dc:title", "dc:subject")


def _entry_from_description(description) -> TaxonEntry:
    entry = TaxonEntry(guid=description.get("rdf:about"))
    for element in child_elements(description):
        value = element.get_text(strip=True) or element.get("rdf:resource", "")
        if value:
            entry.add_meta(qualified_name(element), value)

    for predicate in NAME_PREDICATES:
        name = entry.get_meta_object(predicate)
        if name:
            entry.name = name
            break
    entry.description = entry.get_meta_object("dc:description") or ""
    return entry


def parse(content: bytes) -> ResultSet:
    soup = make_soup(content, FORMAT)
    root = root_element(soup)
    if qualified_name(root) != "rdf:RDF":
        raise ParseError(FORMAT, f"expected rdf:RDF root, found {qualified_name(root)}")

    result = ResultSet(namespaces=declared_namespaces(soup))
    taxa = result.add_taxa(Taxa())
    for element in child_elements(root):
        if qualified_name(element) == "rdf:Description":
            taxa.insert(_entry_from_description(element))
    return result
