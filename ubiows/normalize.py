import base64
import binascii
import re

NAMEBANK_LSID_PREFIX = "urn:lsid:ubio.org:namebank:"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def normalize_text(s: str) -> str:
    return " ".join(s.strip().split())


def clean_source_name(name: str) -> str:
    """Strip a TNRS source id down to something usable as a predicate suffix."""
    return _NON_ALNUM.sub("", name or "")


def decode_name_string(value: str) -> str:
    """
    Decode a base64 name string from a namebank search document.

    The search service base64-encodes name strings. Anything that does
    not decode to UTF-8 text is returned as-is.
    """
    raw = (value or "").strip()
    if not raw:
        return ""
    try:
        decoded = base64.b64decode(raw, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return normalize_text(raw)
    return normalize_text(decoded)


def namebank_lsid(namebank_id: int | str) -> str:
    return f"{NAMEBANK_LSID_PREFIX}{namebank_id}"
