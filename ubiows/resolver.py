"""
Query resolution: namebank search, then per-candidate record enrichment.

The search document is terse, so every candidate is looked up again by
its namebank identifier and the full record is folded into it. Resolving
N matches therefore costs N+1 round trips. With max_workers > 1 the
record lookups run on a bounded thread pool; merging always happens on
the calling thread in search order.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from .config import ENRICHMENT_ABORT, ENRICHMENT_DEGRADE
from .errors import (
    FetchError,
    ParseError,
    ResolveError,
    ResolveErrorKind,
    UbioError,
    ValidationError,
)
from .fetcher import RecordFetcher, Transport
from .identifiers import extract_identifier
from .logger import StructuredLogger
from .merge import merge_metadata
from .models import ResultSet, TaxonEntry
from .parsers import parse as parse_document
from .urls import search_url

SEARCH_FORMAT = "ubiosearch"
CORRELATION_PREDICATE = "dc:identifier"


class QueryResolver:
    def __init__(
        self,
        transport: Transport,
        fetcher: RecordFetcher,
        api_key: str,
        service_url: str,
        logger: StructuredLogger,
        max_workers: int = 1,
        on_enrichment_error: str = ENRICHMENT_ABORT,
        parser: Callable[[bytes, str], ResultSet] = parse_document,
    ):
        self.transport = transport
        self.fetcher = fetcher
        self.api_key = api_key
        self.service_url = service_url
        self.logger = logger
        self.max_workers = max_workers
        self.on_enrichment_error = on_enrichment_error
        self.parser = parser

    def resolve_query(self, query: str) -> ResultSet:
        """
        Run a namebank search for `query` and enrich every match.

        The returned ResultSet lists candidates in the order the search
        returned them. Its GUID is the query string itself.

        Raises:
            ResolveError: MISSING_CREDENTIAL before any network call,
                SEARCH_FAILED when the search document cannot be had,
                CORRELATION_FAILED when a candidate has no usable identifier
            FetchError: a candidate's record lookup failed (abort policy)
        """
        if not self.api_key:
            self.logger.error("No uBio keyCode configured", query=query)
            raise ResolveError(
                ResolveErrorKind.MISSING_CREDENTIAL, query, detail="no uBio keyCode configured"
            )

        result = self._search(query)
        candidates = result.entries()
        self.logger.info(f"Search for '{query}' returned {len(candidates)} candidates")

        records = self._lookup_all(query, candidates)
        for index, (candidate, record) in enumerate(zip(candidates, records)):
            if record is None:
                continue
            self.logger.info(
                f"Going to fold metadata into search result {candidate.guid}",
                candidate_index=index,
            )
            source = record.first_taxon()
            merge_metadata(candidate, source, result.namespaces, record.namespaces)
            if candidate.base_url is None:
                candidate.base_url = source.base_url

        result.base_url = self.service_url
        result.guid = query
        return result

    def _search(self, query: str) -> ResultSet:
        url = search_url(query, self.api_key)
        self.logger.record_attempt("search")
        try:
            content = self.transport.get(url)
            result = self.parser(content, SEARCH_FORMAT)
        except (FetchError, ParseError) as e:
            self.logger.record_failure("search", type(e).__name__)
            self.logger.error("Namebank search failed", query=query, error=str(e))
            raise ResolveError(
                ResolveErrorKind.SEARCH_FAILED, query, detail=str(e)
            ) from e
        self.logger.record_success("search")
        return result

    def _lookup_all(self, query: str, candidates: List[TaxonEntry]) -> List[Optional[ResultSet]]:
        jobs = [(query, index, candidate) for index, candidate in enumerate(candidates)]
        if self.max_workers <= 1 or len(jobs) <= 1:
            return [self._lookup(*job) for job in jobs]

        workers = min(self.max_workers, len(jobs))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order, so the search ranking survives
            return list(executor.map(lambda job: self._lookup(*job), jobs))

    def _lookup(self, query: str, index: int, candidate: TaxonEntry) -> Optional[ResultSet]:
        self.logger.record_attempt("enrichment")
        try:
            identifier = self._correlate(query, index, candidate)
            record = self.fetcher.fetch_record(identifier)
        except UbioError as e:
            self.logger.record_failure("enrichment", type(e).__name__)
            if self.on_enrichment_error == ENRICHMENT_DEGRADE:
                self.logger.warning(
                    "Keeping search-only data for candidate",
                    query=query,
                    candidate_index=index,
                    error=str(e),
                )
                return None
            raise
        self.logger.record_success("enrichment")
        return record

    def _correlate(self, query: str, index: int, candidate: TaxonEntry) -> str:
        lsid = candidate.get_meta_object(CORRELATION_PREDICATE)
        try:
            return extract_identifier(lsid)
        except ValidationError as e:
            raise ResolveError(
                ResolveErrorKind.CORRELATION_FAILED,
                query,
                candidate_index=index,
                detail=f"no namebank identifier in {CORRELATION_PREDICATE} '{lsid}'",
            ) from e
