"""
Tests for the html redirect policy.
"""

import pytest

from ubiows.errors import ValidationError, ValidationErrorKind
from ubiows.redirect import decide

SEARCH_PAGE = "http://www.ubio.org/browser/search.php?search_all="
RECORD_PAGE = "http://www.ubio.org/browser/details.php?namebankID="


class TestDecide:
    @pytest.mark.parametrize("path", ["", "phylows/ubio/2481730", "service/lookup/xyz"])
    def test_html_query_goes_to_search_page(self, path):
        assert decide("html", "foo", path) == SEARCH_PAGE + "foo"

    def test_query_is_url_encoded(self):
        assert decide("html", "Homo sapiens", "") == SEARCH_PAGE + "Homo+sapiens"

    def test_html_record_goes_to_record_page(self):
        assert decide("html", "", "phylows/ubio/namebank/123") == RECORD_PAGE + "123"

    def test_html_without_query_uses_path(self):
        assert decide("html", None, "/phylows/ubio/2481730") == RECORD_PAGE + "2481730"

    def test_record_page_keeps_digits_verbatim(self):
        assert decide("html", None, "record-0042") == RECORD_PAGE + "0042"
        digits = "9" * 5000
        assert decide("html", None, "/" + digits) == RECORD_PAGE + digits

    @pytest.mark.parametrize("fmt", ["json", "nexml", "nexus", None, "HTML"])
    @pytest.mark.parametrize("query", [None, "", "foo"])
    def test_other_formats_never_redirect(self, fmt, query):
        assert decide(fmt, query, "service/lookup/xyz") is None

    def test_unparseable_path_fails(self):
        with pytest.raises(ValidationError) as exc:
            decide("html", None, "service/lookup/xyz")
        assert exc.value.kind is ValidationErrorKind.NOT_PARSEABLE
        assert exc.value.value == "service/lookup/xyz"
