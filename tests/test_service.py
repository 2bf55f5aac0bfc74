"""
Tests for the request-level service surface.
"""

import json

import pytest

from ubiows.config import Settings
from ubiows.errors import ValidationError
from ubiows.service import RequestParams, UbioService
from ubiows.urls import metadata_url, search_url


@pytest.fixture
def service_for(stub_transport, service_url, quiet_logger):
    def build(documents, api_key="KEY"):
        transport = stub_transport(documents)
        settings = Settings(service_url=service_url, api_key=api_key)
        return UbioService(settings, transport, quiet_logger), transport

    return build


@pytest.fixture
def documents(homo_sapiens_search, metadata_document):
    return {
        search_url("Homo sapiens", "KEY"): homo_sapiens_search,
        metadata_url(2481730): metadata_document(2481730, "Homo sapiens Linnaeus 1758", "Homo sapiens"),
        metadata_url(109086): metadata_document(109086, "Homo sapiens sapiens"),
    }


class TestUbioService:
    def test_supported_formats(self, service_for):
        service, _ = service_for({})
        assert service.get_supported_formats() == ["nexml", "html", "json", "nexus"]

    def test_get_record_uses_trailing_digits(self, service_for, documents):
        service, _ = service_for(documents)

        result = service.get_record("urn:lsid:ubio.org:namebank:2481730")

        assert result.guid == "2481730"

    def test_get_record_bad_guid(self, service_for):
        service, transport = service_for({})
        with pytest.raises(ValidationError):
            service.get_record("namebank:abc")
        assert transport.calls == []


class TestHandleRequest:
    def test_html_query_redirects(self, service_for):
        service, transport = service_for({})

        response = service.handle_request(RequestParams(path="find", format="html", query="Homo sapiens"))

        assert response.status == 303
        assert response.headers["Location"] == "http://www.ubio.org/browser/search.php?search_all=Homo+sapiens"
        assert transport.calls == []

    def test_html_record_redirects(self, service_for):
        service, _ = service_for({})

        response = service.handle_request(RequestParams(path="phylows/ubio/2481730", format="html"))

        assert response.headers["Location"] == "http://www.ubio.org/browser/details.php?namebankID=2481730"

    def test_html_long_identifier_redirects(self, service_for):
        service, _ = service_for({})
        digits = "9" * 5000

        response = service.handle_request(RequestParams(path="/" + digits, format="html"))

        assert response.status == 303
        assert response.headers["Location"].endswith("namebankID=" + digits)

    def test_html_bad_path_is_400(self, service_for):
        service, _ = service_for({})

        response = service.handle_request(RequestParams(path="service/lookup/xyz", format="html"))

        assert response.status == 400
        assert "service/lookup/xyz" in response.body

    def test_record_as_json(self, service_for, documents, service_url):
        service, _ = service_for(documents)

        response = service.handle_request(RequestParams(path="phylows/ubio/2481730", format="json"))

        assert response.status == 200
        assert response.headers["Content-Type"].startswith("application/json")
        data = json.loads(response.body)
        assert data["guid"] == "2481730"
        assert data["base_url"] == service_url

    def test_guid_preferred_over_path(self, service_for, documents):
        service, transport = service_for(documents)

        service.handle_request(RequestParams(path="phylows/ubio/1", guid="namebank:2481730", format="json"))

        assert transport.calls == [metadata_url(2481730)]

    def test_query_defaults_to_nexml(self, service_for, documents):
        service, _ = service_for(documents)

        response = service.handle_request(RequestParams(path="find", query="Homo sapiens"))

        assert response.status == 200
        assert response.headers["Content-Type"].startswith("application/xml")
        assert response.body.count("<otu ") == 2

    def test_missing_key_is_500(self, service_for, documents):
        service, transport = service_for(documents, api_key="")

        response = service.handle_request(RequestParams(path="find", query="Homo sapiens", format="json"))

        assert response.status == 500
        assert transport.calls == []

    def test_upstream_failure_is_502(self, service_for):
        service, _ = service_for({})

        response = service.handle_request(RequestParams(path="phylows/ubio/2481730", format="json"))

        assert response.status == 502

    def test_unsupported_format_is_400(self, service_for):
        service, _ = service_for({})

        response = service.handle_request(RequestParams(path="phylows/ubio/2481730", format="rss1"))

        assert response.status == 400

    def test_leading_zeros_survive_as_guid(self, service_for, metadata_document, service_url):
        service, transport = service_for({metadata_url("0042"): metadata_document(42, "Taxon 42")})

        response = service.handle_request(RequestParams(path="record-0042", format="json"))

        assert response.status == 200
        assert json.loads(response.body)["guid"] == "0042"
        assert transport.calls == [metadata_url("0042")]
