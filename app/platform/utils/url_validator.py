from urllib.parse import urlparse
from typing import Tuple

ALLOWED_SCHEMES = ("http", "https")


def normalize_url(url: str) -> Tuple[str, bool]:
    """Trim the URL and default to https:// when no scheme was given."""
    url = url.strip()

    if "://" not in url:
        return f"https://{url}", True

    return url, False


def validate_url(url: str) -> Tuple[bool, str, str]:
    """
    Check that a submitted URL can be opened by the browser.

    Returns:
        (is_valid, normalized_url, error_message)
    """
    if not url or not url.strip():
        return False, "", "URL cannot be empty"

    normalized_url, _ = normalize_url(url)

    if any(ch.isspace() for ch in normalized_url):
        return False, normalized_url, "Invalid URL format: contains whitespace"

    try:
        parsed = urlparse(normalized_url)
        # Accessing .port validates it and raises ValueError when out of range
        parsed.port
    except ValueError as e:
        return False, normalized_url, f"URL parsing error: {str(e)}"

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        return False, normalized_url, f"Invalid URL scheme: {parsed.scheme} (must be http or https)"

    if not parsed.hostname:
        return False, normalized_url, "Invalid URL format: missing domain"

    return True, normalized_url, ""
