from typing import Optional

from .identifiers import extract_identifier
from .urls import html_record_url, html_search_url

HTML_FORMAT = "html"


def decide(fmt: Optional[str], query: Optional[str], path: str) -> Optional[str]:
    """
    Decide whether a request should be sent to a page on www.ubio.org.

    Only `format=html` redirects. A query goes to the search listing,
    otherwise the trailing identifier of `path` goes to the namebank
    record page. Returns None when no redirect applies.

    Raises:
        ValidationError: html requested without a query or a parseable path
    """
    if fmt != HTML_FORMAT:
        return None
    if query:
        return html_search_url(query)
    return html_record_url(extract_identifier(path))
