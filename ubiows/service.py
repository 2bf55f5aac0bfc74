"""
PhyloWS service for uBio namebank records.

Record lookups return a result holding the RDF metadata of one namebank
record as annotations on a single taxon. Queries run a namebank search
and fold each match's record metadata into it. Requests for
``format=html`` are redirected to www.ubio.org: to the search listing
for queries, to the namebank record page for lookups.

A host dispatcher hands `handle_request` the request already split into
format, query, path and guid; this module never sees raw request bytes.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import Settings
from .errors import (
    FetchError,
    ResolveError,
    ResolveErrorKind,
    UbioError,
    ValidationError,
    ValidationErrorKind,
)
from .fetcher import RecordFetcher, Transport
from .identifiers import extract_identifier
from .logger import StructuredLogger
from .models import ResultSet
from .redirect import decide
from .resolver import QueryResolver
from .serializers import CONTENT_TYPES, serialize

SUPPORTED_FORMATS = ["nexml", "html", "json", "nexus"]
DEFAULT_FORMAT = "nexml"


@dataclass
class RequestParams:
    path: str = ""
    format: Optional[str] = None
    query: Optional[str] = None
    guid: Optional[str] = None


@dataclass
class Response:
    status: int
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)


class UbioService:
    def __init__(self, settings: Settings, transport: Transport, logger: StructuredLogger):
        self.settings = settings
        self.logger = logger
        self.fetcher = RecordFetcher(transport, settings.service_url, logger)
        self.resolver = QueryResolver(
            transport,
            self.fetcher,
            api_key=settings.api_key,
            service_url=settings.service_url,
            logger=logger,
            max_workers=settings.max_workers,
            on_enrichment_error=settings.on_enrichment_error,
        )

    def get_supported_formats(self) -> List[str]:
        return list(SUPPORTED_FORMATS)

    def get_record(self, guid: str) -> ResultSet:
        """Look up a record; only the trailing digits of `guid` matter."""
        return self.fetcher.fetch_record(extract_identifier(guid))

    def get_query_result(self, query: str) -> ResultSet:
        return self.resolver.resolve_query(query)

    def get_redirect(self, params: RequestParams) -> Optional[str]:
        url = decide(params.format, params.query, params.path)
        if url:
            self.logger.info("Redirecting to uBio page", url=url)
        return url

    def handle_request(self, params: RequestParams) -> Response:
        """Serve one request: redirect, query or record lookup."""
        fmt = params.format or DEFAULT_FORMAT
        try:
            if fmt not in SUPPORTED_FORMATS:
                raise ValidationError(ValidationErrorKind.UNSUPPORTED_FORMAT, fmt)

            redirect = self.get_redirect(
                RequestParams(path=params.path, format=fmt, query=params.query, guid=params.guid)
            )
            if redirect:
                return Response(status=303, headers={"Location": redirect})

            if params.query:
                result = self.get_query_result(params.query)
            else:
                result = self.get_record(params.guid or params.path)
            body = serialize(result, fmt)
        except UbioError as e:
            return self._error_response(e, params)

        return Response(
            status=200,
            body=body,
            headers={"Content-Type": CONTENT_TYPES[fmt] + "; charset=utf-8"},
        )

    def _error_response(self, error: UbioError, params: RequestParams) -> Response:
        if isinstance(error, ValidationError):
            status = 400
        elif isinstance(error, ResolveError) and error.kind is ResolveErrorKind.MISSING_CREDENTIAL:
            status = 500
        elif isinstance(error, (FetchError, ResolveError)):
            status = 502
        else:
            status = 500

        log = self.logger.warning if status == 400 else self.logger.error
        log(
            "Request failed",
            status=status,
            error_type=type(error).__name__,
            path=params.path,
            query=params.query,
            context=error.context(),
        )
        return Response(
            status=status,
            body=str(error),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )
