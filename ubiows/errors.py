"""
Error taxonomy for the uBio service core.

Each component fails with one closed set of kinds. Context travels as
attributes so callers can log and map failures without parsing messages.
"""

from enum import Enum
from typing import Optional


class ValidationErrorKind(str, Enum):
    NOT_PARSEABLE = "not_parseable"
    UNSUPPORTED_FORMAT = "unsupported_format"


class FetchErrorKind(str, Enum):
    NETWORK_FAILURE = "network_failure"
    PARSE_FAILURE = "parse_failure"
    NOT_FOUND = "not_found"


class ResolveErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    SEARCH_FAILED = "search_failed"
    CORRELATION_FAILED = "correlation_failed"


class UbioError(Exception):
    """Base class for all service core failures."""

    def context(self) -> dict:
        return {}


class ParseError(UbioError):
    """Raised when a document does not conform to its declared format."""

    def __init__(self, format_name: str, reason: str):
        super().__init__(f"Cannot parse '{format_name}' document: {reason}")
        self.format_name = format_name
        self.reason = reason

    def context(self) -> dict:
        return {"format": self.format_name, "reason": self.reason}


class ValidationError(UbioError, ValueError):
    """User input problem: a malformed identifier, path or format."""

    def __init__(self, kind: ValidationErrorKind, value: Optional[str]):
        if kind is ValidationErrorKind.UNSUPPORTED_FORMAT:
            message = f"Unsupported format: '{value}'"
        else:
            message = f"No parseable GUID: '{value}'"
        super().__init__(message)
        self.kind = kind
        self.value = value

    def context(self) -> dict:
        return {"kind": self.kind.value, "value": self.value}


class FetchError(UbioError):
    """Network or upstream authority problem while retrieving a document."""

    def __init__(
        self,
        kind: FetchErrorKind,
        url: str,
        identifier: Optional[str] = None,
        status: Optional[int] = None,
        detail: str = "",
    ):
        message = f"Fetch failed ({kind.value}): {url}"
        if status is not None:
            message += f" [HTTP {status}]"
        if detail:
            message += f" - {detail}"
        super().__init__(message)
        self.kind = kind
        self.url = url
        self.identifier = identifier
        self.status = status
        self.detail = detail

    def context(self) -> dict:
        return {
            "kind": self.kind.value,
            "url": self.url,
            "identifier": self.identifier,
            "status": self.status,
        }


class ResolveError(UbioError):
    """Failure during the search-then-enrich query resolution."""

    def __init__(
        self,
        kind: ResolveErrorKind,
        query: str,
        candidate_index: Optional[int] = None,
        detail: str = "",
    ):
        message = f"Query '{query}' failed ({kind.value})"
        if candidate_index is not None:
            message += f" at candidate {candidate_index}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.kind = kind
        self.query = query
        self.candidate_index = candidate_index
        self.detail = detail

    def context(self) -> dict:
        return {
            "kind": self.kind.value,
            "query": self.query,
            "candidate_index": self.candidate_index,
        }
