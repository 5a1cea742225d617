"""Input validation for user-supplied URLs."""

from urllib.parse import urlparse


def validate_url(url: str) -> tuple[bool, str]:
    """Validate a URL string.

    Args:
        url: The URL to validate.

    Returns:
        Tuple of (is_valid, error_message).  error_message is empty on success.
    """
    if not url or not isinstance(url, str):
        return False, "URL is empty or not a string."
    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        return False, f"URL parse error: {exc}"
    if parsed.scheme not in ("http", "https"):
        return False, f"Invalid scheme: {parsed.scheme!r}. Must be http or https."
    if not parsed.netloc:
        return False, "URL has no network location (domain)."
    hostname = parsed.hostname or ""
    if not hostname or len(hostname) > 253:
        return False, "Invalid hostname length."
    return True, ""
