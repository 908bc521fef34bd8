"""Validation for user-supplied recommendation links."""

import re
from urllib.parse import urlsplit

from app.services.exceptions import DisallowedSchemeError, MalformedURLError

ALLOWED_SCHEMES = frozenset({"http", "https"})

# RFC 3986 scheme followed by its delimiter
_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")


def validate_link(raw: str) -> str:
    """
    Validate a user-supplied URL.

    The same function backs the write path and the advisory pre-check, so
    there is exactly one definition of a valid link.

    Args:
        raw: URL as typed by the user

    Returns:
        The trimmed URL, otherwise unchanged (query and fragment kept)

    Raises:
        MalformedURLError: If the value is not an absolute URL
        DisallowedSchemeError: If the scheme is not http or https
    """
    trimmed = raw.strip()

    match = _SCHEME_RE.match(trimmed)
    if not match:
        raise MalformedURLError()

    scheme = match.group(1).lower()
    if scheme not in ALLOWED_SCHEMES:
        raise DisallowedSchemeError(f"{scheme}:")

    try:
        parts = urlsplit(trimmed)
        hostname = parts.hostname
        parts.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError:
        raise MalformedURLError()

    if not hostname or any(ch.isspace() for ch in parts.netloc):
        raise MalformedURLError()

    return trimmed
