import pytest

from app.platform.utils.url_validator import normalize_url, validate_url


def test_normalize_adds_https():
    assert normalize_url("example.com") == ("https://example.com", True)


def test_normalize_keeps_scheme():
    assert normalize_url("  http://example.com/page ") == ("http://example.com/page", False)


@pytest.mark.parametrize("url", [
    "https://example.com",
    "http://example.com:8080/path?q=1",
    "example.com",
    "https://sub.example.co.uk/a/b#top",
])
def test_valid_urls(url):
    is_valid, normalized, error = validate_url(url)

    assert is_valid is True
    assert normalized.startswith(("http://", "https://"))
    assert error == ""


@pytest.mark.parametrize("url, message", [
    ("", "URL cannot be empty"),
    ("   ", "URL cannot be empty"),
    ("not a url", "whitespace"),
    ("ftp://example.com", "Invalid URL scheme"),
    ("javascript://alert(1)", "Invalid URL scheme"),
    ("https://", "missing domain"),
    ("https://example.com:99999", "URL parsing error"),
])
def test_invalid_urls(url, message):
    is_valid, _, error = validate_url(url)

    assert is_valid is False
    assert message in error
