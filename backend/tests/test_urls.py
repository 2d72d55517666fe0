"""
Tests for URL issuing and key resolution.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlsplit

import pytest
from botocore.exceptions import NoCredentialsError

from object_gateway.exceptions import MalformedURLError, PresignError
from object_gateway.storage.operations import presigned_url, public_url, resolve_key


KEY = "myfile-3b241101-e2bb-4255-8caf-4136c566a962_1700000000.png"


class TestPublicUrl:
    """Tests for public_url."""

    def test_endpoint_bucket_key(self, mock_s3_client: MagicMock):
        """Test public URL is endpoint/bucket/key."""
        assert public_url(mock_s3_client, "media", KEY) == f"https://storage.example.com/media/{KEY}"

    def test_trailing_slash_endpoint(self, mock_s3_client: MagicMock):
        """Test no double slash when the endpoint ends with one."""
        mock_s3_client.meta.endpoint_url = "https://storage.example.com/"
        assert public_url(mock_s3_client, "media", "a.png") == "https://storage.example.com/media/a.png"

    def test_key_is_percent_encoded(self, mock_s3_client: MagicMock):
        """Test unsafe characters in keys are encoded."""
        url = public_url(mock_s3_client, "media", "my photo #1.png")
        assert url == "https://storage.example.com/media/my%20photo%20%231.png"

    def test_real_client_endpoint(self, real_s3_client):
        """Test a host-only endpoint is served over https."""
        assert public_url(real_s3_client, "media", KEY) == f"https://storage.example.com/media/{KEY}"

    def test_no_backend_call(self, mock_s3_client: MagicMock):
        """Test public URLs are built without contacting the backend."""
        public_url(mock_s3_client, "media", KEY)
        assert mock_s3_client.method_calls == []


class TestPresignedUrl:
    """Tests for presigned_url."""

    def test_presigned_expiry(self, real_s3_client):
        """Test URL carries a one-hour expiry signed at issuance time."""
        issued_at = datetime.now(timezone.utc)

        url = presigned_url(real_s3_client, "media", KEY, ttl=3600)

        parts = urlsplit(url)
        query = parse_qs(parts.query)
        assert parts.scheme == "https"
        assert parts.netloc == "storage.example.com"
        assert parts.path == f"/media/{KEY}"
        assert query["X-Amz-Expires"] == ["3600"]
        assert query["X-Amz-Algorithm"] == ["AWS4-HMAC-SHA256"]
        assert "X-Amz-Signature" in query

        signed_at = datetime.strptime(query["X-Amz-Date"][0], "%Y%m%dT%H%M%SZ").replace(tzinfo=timezone.utc)
        assert abs((signed_at - issued_at).total_seconds()) < 60

    def test_default_ttl_is_one_hour(self, real_s3_client):
        """Test default expiry."""
        url = presigned_url(real_s3_client, "media", KEY)
        assert parse_qs(urlsplit(url).query)["X-Amz-Expires"] == ["3600"]

    def test_presigned_resolves_to_key(self, real_s3_client):
        """Test signing parameters are ignored by the resolver."""
        url = presigned_url(real_s3_client, "media", "voice memo.m4a", ttl=60)
        assert resolve_key(url) == "voice memo.m4a"

    @pytest.mark.parametrize("ttl", [0, -1, 7 * 24 * 3600 + 1, 1.5, True, "3600"])
    def test_invalid_ttl(self, mock_s3_client: MagicMock, ttl):
        """Test out-of-range ttl is rejected before signing."""
        with pytest.raises(PresignError, match="ttl"):
            presigned_url(mock_s3_client, "media", KEY, ttl=ttl)

        mock_s3_client.generate_presigned_url.assert_not_called()

    def test_signing_failure(self, mock_s3_client: MagicMock):
        """Test missing credentials surface as PresignError."""
        error = NoCredentialsError()
        mock_s3_client.generate_presigned_url.side_effect = error

        with pytest.raises(PresignError) as exc_info:
            presigned_url(mock_s3_client, "media", KEY)

        assert exc_info.value.__cause__ is error

    def test_get_object_is_signed(self, mock_s3_client: MagicMock):
        """Test a GET (read) URL is requested, not a PUT."""
        mock_s3_client.generate_presigned_url.return_value = "https://signed"

        assert presigned_url(mock_s3_client, "media", KEY, ttl=120) == "https://signed"
        mock_s3_client.generate_presigned_url.assert_called_once_with(
            ClientMethod="get_object",
            Params={"Bucket": "media", "Key": KEY},
            ExpiresIn=120,
        )


class TestResolveKey:
    """Tests for resolve_key."""

    def test_presigned_style_url(self):
        """Test query string signing parameters are ignored."""
        assert resolve_key("https://host/bucket/myfile_1700000000.png?X-Sig=abc") == "myfile_1700000000.png"

    @pytest.mark.parametrize("url,expected", [
        ("https://storage.example.com/media/a.png", "a.png"),
        ("https://storage.example.com/media/a.png#fragment", "a.png"),
        ("https://storage.example.com:9000/media/a%20b.png", "a b.png"),
        ("http://localhost/bucket/nested/path/c.txt", "c.txt"),
        ("  https://host/bucket/padded.gif  ", "padded.gif"),
    ])
    def test_basename(self, url, expected):
        """Test final path segment is returned decoded."""
        assert resolve_key(url) == expected

    @pytest.mark.parametrize("url", [
        "",
        "https://host/",
        "https://host/bucket/",
        "https://host",
        "http://[::1/bucket/a.png",
        "http://host:99999/bucket/a.png",
    ])
    def test_malformed(self, url):
        """Test unparseable URLs and URLs without a key are rejected."""
        with pytest.raises(MalformedURLError):
            resolve_key(url)

    def test_non_string(self):
        """Test non-string input is rejected."""
        with pytest.raises(MalformedURLError):
            resolve_key(None)

    def test_malformed_is_value_error(self):
        """Test callers can catch resolver failures as ValueError."""
        with pytest.raises(ValueError):
            resolve_key("https://host/")
