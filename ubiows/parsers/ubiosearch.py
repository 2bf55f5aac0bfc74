"""
Parser for uBio namebank_search XML.

Example: http://www.ubio.org/webservices/examples/namebank_search.xml

Scientific and vernacular matches become one candidate taxon each, in
document order. Name strings arrive base64-encoded. Every candidate
gets a ``dc:identifier`` holding its namebank LSID, which is the key a
resolver uses to look up the full record.
"""

from ..errors import ParseError
from ..models import ResultSet, TaxonEntry, Taxa
from ..normalize import decode_name_string, namebank_lsid
from .common import child_elements, make_soup, root_element

FORMAT = "ubiosearch"

NAMESPACES = {
    "dc": "http://purl.org/dc/elements/1.1/",
    "ubio": "http://purl.org/ubio/ubioschema#",
}

SECTIONS = (
    ("scientificNames", "scientific"),
    ("vernacularNames", "vernacular"),
)

ENCODED_FIELDS = {"nameString", "fullNameString"}


def _candidate(value, name_type: str) -> TaxonEntry:
    fields = {}
    for element in child_elements(value):
        text = element.get_text(strip=True)
        if element.name in ENCODED_FIELDS:
            text = decode_name_string(text)
        if text:
            fields[element.name] = text

    entry = TaxonEntry(
        name=fields.get("nameString", ""),
        description=fields.get("fullNameString", ""),
    )
    namebank_id = fields.get("namebankID")
    if namebank_id:
        entry.guid = namebank_lsid(namebank_id)
        entry.add_meta("dc:identifier", entry.guid)
    entry.add_meta("ubio:nameType", name_type)
    for field_name, text in fields.items():
        entry.add_meta(f"ubio:{field_name}", text)
    return entry


def parse(content: bytes) -> ResultSet:
    soup = make_soup(content, FORMAT)
    root = root_element(soup)
    if root.name != "results":
        raise ParseError(FORMAT, f"expected results root, found {root.name}")

    result = ResultSet(namespaces=dict(NAMESPACES))
    taxa = result.add_taxa(Taxa())
    for section_name, name_type in SECTIONS:
        section = root.find(section_name, recursive=False)
        if section is None:
            continue
        for value in section.find_all("value", recursive=False):
            taxa.insert(_candidate(value, name_type))
    return result
