"""Record lookup: one namebank identifier, one metadata document."""

from typing import Callable, Protocol

from .errors import FetchError, FetchErrorKind, ParseError
from .logger import StructuredLogger
from .models import ResultSet
from .parsers import parse as parse_document
from .urls import metadata_url

METADATA_FORMAT = "ubiometa"


class Transport(Protocol):
    def get(self, url: str) -> bytes: ...


class RecordFetcher:
    """
    Fetches the authority's metadata document for a namebank identifier
    and returns it as a single-taxon ResultSet.

    The result's base URL is the service's own URL, not the authority's,
    so downstream citations point back at this service. Each taxon keeps
    the authority document URL as its provenance.
    """

    def __init__(
        self,
        transport: Transport,
        service_url: str,
        logger: StructuredLogger,
        parser: Callable[[bytes, str], ResultSet] = parse_document,
    ):
        self.transport = transport
        self.service_url = service_url
        self.logger = logger
        self.parser = parser

    def fetch_record(self, identifier: str) -> ResultSet:
        """
        Look up one namebank record.

        Raises:
            FetchError: NETWORK_FAILURE, PARSE_FAILURE or NOT_FOUND
        """
        url = metadata_url(identifier)
        self.logger.info(f"Going to fetch metadata for record {identifier}", url=url)
        self.logger.record_attempt("record")
        try:
            result = self._retrieve(identifier, url)
        except FetchError as e:
            self.logger.record_failure("record", e.kind.value)
            raise

        entry = result.first_taxon()
        if entry.base_url is None:
            entry.base_url = url
        result.base_url = self.service_url
        result.guid = identifier
        self.logger.record_success("record")
        return result

    def _retrieve(self, identifier: str, url: str) -> ResultSet:
        try:
            content = self.transport.get(url)
        except FetchError as e:
            e.identifier = identifier
            raise

        try:
            result = self.parser(content, METADATA_FORMAT)
        except ParseError as e:
            self.logger.error("Metadata document did not parse", url=url, reason=e.reason)
            raise FetchError(
                FetchErrorKind.PARSE_FAILURE, url, identifier=identifier, detail=e.reason
            ) from e

        if result.first_taxon() is None:
            self.logger.warning("Authority returned no record", url=url, identifier=identifier)
            raise FetchError(FetchErrorKind.NOT_FOUND, url, identifier=identifier)
        return result
