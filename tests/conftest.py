"""
Pytest configuration and shared fixtures.
"""

import base64

import pytest

from ubiows.errors import FetchError, FetchErrorKind
from ubiows.logger import StructuredLogger

SERVICE_URL = "http://example.org/phylows/ubio/"


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class StubTransport:
    """Serves canned documents by URL and records every call."""

    def __init__(self, documents=None):
        self.documents = dict(documents or {})
        self.calls = []

    def get(self, url: str) -> bytes:
        self.calls.append(url)
        doc = self.documents.get(url)
        if doc is None:
            raise FetchError(FetchErrorKind.NOT_FOUND, url, status=404)
        if isinstance(doc, Exception):
            raise doc
        return doc


@pytest.fixture
def quiet_logger() -> StructuredLogger:
    """Logger with no handlers, metrics only."""
    return StructuredLogger(name="ubiows-test", enable_file=False, enable_console=False)


@pytest.fixture
def stub_transport():
    return StubTransport


@pytest.fixture
def service_url() -> str:
    return SERVICE_URL


@pytest.fixture
def metadata_document():
    """Factory for uBio RDF metadata documents."""

    def build(namebank_id: int, subject: str, title: str | None = None, extra: str = "") -> bytes:
        title = title or subject
        return f"""<?xml version="1.0" encoding="UTF-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:dc="http://purl.org/dc/elements/1.1/"
         xmlns:ubio="http://purl.org/ubio/ubioschema#"
         xmlns:gla="urn:lsid:lsid.zoology.gla.ac.uk:predicates:">
  <rdf:Description rdf:about="urn:lsid:ubio.org:namebank:{namebank_id}">
    <dc:identifier>urn:lsid:ubio.org:namebank:{namebank_id}</dc:identifier>
    <dc:creator rdf:resource="http://www.ubio.org"/>
    <dc:subject>{subject}</dc:subject>
    <dc:title>{title}</dc:title>
    <ubio:canonicalName>{title}</ubio:canonicalName>
    <gla:rank>species</gla:rank>{extra}
  </rdf:Description>
</rdf:RDF>
""".encode("utf-8")

    return build


@pytest.fixture
def empty_metadata_document() -> bytes:
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:dc="http://purl.org/dc/elements/1.1/">
</rdf:RDF>
"""


@pytest.fixture
def search_document():
    """Factory for namebank_search XML; takes (namebank_id, name, full_name) tuples."""

    def build(scientific, vernacular=()) -> bytes:
        sci = "".join(
            f"""
    <value>
      <namebankID>{nid}</namebankID>
      <nameString>{_b64(name)}</nameString>
      <fullNameString>{_b64(full)}</fullNameString>
      <packageID>464</packageID>
      <packageName>Hominidae</packageName>
      <rankName>species</rankName>
    </value>"""
            for nid, name, full in scientific
        )
        vern = "".join(
            f"""
    <value>
      <namebankID>{nid}</namebankID>
      <nameString>{_b64(name)}</nameString>
      <languageCode>{lang}</languageCode>
    </value>"""
            for nid, name, lang in vernacular
        )
        return f"""<?xml version="1.0" encoding="utf-8"?>
<results>
  <scientificNames>{sci}
  </scientificNames>
  <vernacularNames>{vern}
  </vernacularNames>
</results>
""".encode("utf-8")

    return build


@pytest.fixture
def homo_sapiens_search(search_document) -> bytes:
    return search_document(
        [
            (2481730, "Homo sapiens", "Homo sapiens Linnaeus 1758"),
            (109086, "Homo sapiens sapiens", "Homo sapiens sapiens"),
        ]
    )


@pytest.fixture
def tnrs_document() -> bytes:
    return b"""{
  "metadata": {"sources": [{"sourceId": "NCBI Taxonomy"}, {"sourceId": "iPlant_TNRS"}]},
  "names": [
    {
      "submittedName": "Homo sapiens",
      "matches": [
        {"sourceId": "NCBI Taxonomy", "uri": "http://www.ncbi.nlm.nih.gov/taxonomy/9606"},
        {"sourceId": "iPlant_TNRS", "uri": "http://tnrs.iplantcollaborative.org/?name=Homo+sapiens"}
      ]
    },
    {"submittedName": "Pan troglodytes", "matches": []}
  ]
}"""
