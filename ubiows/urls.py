from urllib.parse import quote_plus

UBIO_BASE = "http://www.ubio.org/"
UBIO_SEARCH_PAGE = UBIO_BASE + "browser/search.php?search_all={query}"
UBIO_RECORD_PAGE = UBIO_BASE + "browser/details.php?namebankID={identifier}"
UBIO_METADATA = UBIO_BASE + "authority/metadata.php?lsid=urn:lsid:ubio.org:namebank:{identifier}"
UBIO_NAMEBANK_SEARCH = (
    UBIO_BASE
    + "webservices/service.php?function=namebank_search"
    + "&searchName={query}&sci=1&vern=1&keyCode={key}"
)


def metadata_url(identifier: str) -> str:
    return UBIO_METADATA.format(identifier=identifier)


def search_url(query: str, key: str) -> str:
    return UBIO_NAMEBANK_SEARCH.format(query=quote_plus(query), key=quote_plus(key))


def html_search_url(query: str) -> str:
    return UBIO_SEARCH_PAGE.format(query=quote_plus(query))


def html_record_url(identifier: str) -> str:
    return UBIO_RECORD_PAGE.format(identifier=identifier)
