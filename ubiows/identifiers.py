import re

from .errors import ValidationError, ValidationErrorKind

TRAILING_DIGITS = re.compile(r"([0-9]+)\Z")


def extract_identifier(raw: str | None) -> str:
    """
    Return the trailing run of decimal digits in `raw`.

    Only the tail matters: "urn:lsid:ubio.org:namebank:2481730" and
    "phylows/ubio/2481730" both give "2481730". The digits are returned
    as written, leading zeros included, and are never converted to int,
    so runs of any length are accepted. No trimming is done, so a
    trailing slash or newline makes the value unparseable.

    Raises:
        ValidationError: NOT_PARSEABLE when there are no trailing digits
    """
    if raw is None:
        raise ValidationError(ValidationErrorKind.NOT_PARSEABLE, raw)
    match = TRAILING_DIGITS.search(raw)
    if not match:
        raise ValidationError(ValidationErrorKind.NOT_PARSEABLE, raw)
    return match.group(1)
