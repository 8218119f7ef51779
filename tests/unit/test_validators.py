"""Unit tests for URL validation."""

import pytest

from a11y_audit.orchestrator.validators import filter_excluded, is_valid_url, parse_urls


class TestIsValidUrl:
    """Test cases for is_valid_url."""

    @pytest.mark.parametrize("url", [
        "https://example.com",
        "http://example.com/path?q=1",
        "https://sub.example.co.uk:8443/a/b",
        "  https://example.com  ",
        "HTTPS://EXAMPLE.COM",
    ])
    def test_accepts_http_urls(self, url):
        assert is_valid_url(url) is True

    @pytest.mark.parametrize("url", [
        "",
        "   ",
        "example.com",
        "ftp://example.com",
        "javascript:alert(1)",
        "mailto:a@example.com",
        "https://",
        "http://exa mple.com",
        "https://example.com:notaport",
        "https://example.com:99999",
    ])
    def test_rejects_invalid_urls(self, url):
        assert is_valid_url(url) is False

    def test_rejects_non_strings(self):
        assert is_valid_url(None) is False
        assert is_valid_url(42) is False


class TestParseUrls:
    """Test cases for parse_urls."""

    def test_newline_and_comma_separated(self):
        text = "https://a.com\nhttps://b.com, https://c.com,,\n\nnot a url"

        assert parse_urls(text) == ["https://a.com", "https://b.com", "https://c.com"]

    def test_keeps_order_and_duplicates(self):
        assert parse_urls("https://b.com,https://a.com,https://b.com") == [
            "https://b.com",
            "https://a.com",
            "https://b.com",
        ]

    def test_empty_input(self):
        assert parse_urls("") == []
        assert parse_urls(None) == []


class TestFilterExcluded:
    """Test cases for exclude patterns."""

    def test_glob_patterns(self):
        urls = ["https://a.com/", "https://a.com/admin/users", "https://b.com/"]

        assert filter_excluded(urls, ["*/admin/*"]) == ["https://a.com/", "https://b.com/"]

    def test_no_patterns_keeps_everything(self):
        urls = ["https://a.com/", "https://b.com/"]

        assert filter_excluded(urls, []) == urls
        assert filter_excluded(urls, [""]) == urls
