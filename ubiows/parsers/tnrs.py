"""
Parser for PhyloTastic TNRS (taxonomic name reconciliation) JSON.

Sources consulted by the reconciliation are attached to the taxa block
as ``tnrs:source`` statements. Each submitted name becomes a taxon with
one ``tnrs:<sourceId>`` statement per match pointing at the match URI.
"""

import json

from ..errors import ParseError
from ..models import ResultSet, TaxonEntry, Taxa
from ..normalize import clean_source_name

FORMAT = "tnrs"
TNRS_NAMESPACE = "http://phylotastic.org/terms/tnrs.rdf#"


def _object(value, what: str) -> dict:
    if not isinstance(value, dict):
        raise ParseError(FORMAT, f"{what} must be an object, got {type(value).__name__}")
    return value


def _objects(value, what: str) -> list:
    """A list of objects; a missing or null list is empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(FORMAT, f"{what} list must be an array, got {type(value).__name__}")
    return [_object(item, what) for item in value]


def parse(content: bytes) -> ResultSet:
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(FORMAT, str(e)) from e
    if not isinstance(data, dict):
        raise ParseError(FORMAT, "top-level value must be an object")

    result = ResultSet(namespaces={"tnrs": TNRS_NAMESPACE})
    taxa = result.add_taxa(Taxa())

    metadata = _object(data.get("metadata") or {}, "metadata")
    for source in _objects(metadata.get("sources"), "source"):
        source_id = clean_source_name(str(source.get("sourceId") or ""))
        if source_id:
            taxa.add_meta("tnrs:source", source_id)

    for name in _objects(data.get("names"), "name"):
        taxon = TaxonEntry(name=str(name.get("submittedName") or ""))
        for match in _objects(name.get("matches"), "match"):
            source_id = clean_source_name(str(match.get("sourceId") or ""))
            uri = match.get("uri")
            if source_id and uri:
                taxon.add_meta(f"tnrs:{source_id}", str(uri))
        taxa.insert(taxon)
    return result
