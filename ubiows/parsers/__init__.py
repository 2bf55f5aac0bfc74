"""Document parsers keyed by format name."""

from typing import Callable, Dict

from ..errors import ParseError
from ..models import ResultSet
from . import tnrs, ubiometa, ubiosearch

PARSERS: Dict[str, Callable[[bytes], ResultSet]] = {
    "ubiometa": ubiometa.parse,
    "ubiosearch": ubiosearch.parse,
    "tnrs": tnrs.parse,
}


def parse(content: bytes, format_name: str) -> ResultSet:
    """Parse `content` as `format_name` into a ResultSet.

    Raises:
        ParseError: unknown format, or content that does not conform to it
    """
    parser = PARSERS.get(format_name)
    if parser is None:
        raise ParseError(format_name, "no parser registered for this format")
    return parser(content)


def supported_formats() -> list[str]:
    return sorted(PARSERS)
