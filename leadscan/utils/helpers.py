"""General-purpose URL and text helpers for the assessment pipeline."""

import re
from typing import Optional
from urllib.parse import urlparse

_TRIM_TLDS = (".com", ".net", ".org", ".edu")


def normalize_url(url: str) -> str:
    """Ensure URL has a scheme."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def extract_domain(url: str) -> str:
    """Extract the bare domain (no scheme, no ``www.``) from a URL.

    Examples:
        >>> extract_domain("https://www.example.com/about")
        'example.com'
        >>> extract_domain("example.org")
        'example.org'
    """
    parsed = urlparse(url if "://" in url else f"https://{url}")
    host = (parsed.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def domain_from_url(url: Optional[str]) -> Optional[str]:
    """Return everything after ``www.`` (or after ``//``) in *url*.

    Unlike :func:`extract_domain` this keeps any trailing path, which is
    what lead lists store as the site name.
    """
    if not url:
        return None
    if "www." in url:
        return url.split("www.", 1)[1]
    if "//" in url:
        return url.split("//", 1)[1]
    return url


def trim_url(url: str) -> Optional[str]:
    """Cut *url* right after its first recognised TLD.

    Returns ``None`` when no ``.com``/``.net``/``.org``/``.edu`` is present.

    Examples:
        >>> trim_url("https://acme.com/services/roofing")
        'https://acme.com'
        >>> trim_url("https://acme.io") is None
        True
    """
    for tld in _TRIM_TLDS:
        if tld in url:
            return url.split(tld, 1)[0] + tld
    return None


def site_root(url: str) -> str:
    """Scheme + host of *url* with no trailing slash."""
    parsed = urlparse(normalize_url(url))
    return f"{parsed.scheme}://{parsed.netloc}"


def collapse_whitespace(text: str) -> str:
    """Replace newlines with spaces and squeeze runs of whitespace."""
    text = re.sub(r"[\n\r]", " ", text)
    return re.sub(r"\s{2,}", " ", text).strip()


def pluralize(count: int, word: str) -> str:
    """``'1 image'`` / ``'3 images'``."""
    return f"{count} {word}{'' if count == 1 else 's'}"
