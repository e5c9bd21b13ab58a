"""Tests for the blocking Telegraph client."""

from unittest.mock import patch

import pytest

from telegraph_api import ApiError, BlockingTelegraph, ClientConfig, TransportError


def _sent(mock_sync_http_client):
    """Return (url, json body) of the single request issued."""
    mock_sync_http_client.post.assert_called_once()
    call = mock_sync_http_client.post.call_args
    return call.args[0], call.kwargs["json"]


class TestBlockingTelegraph:
    """Tests for BlockingTelegraph."""

    def test_create_page(self, mock_sync_http_client, ok_response, sample_page, token):
        """Test createPage over the blocking transport."""
        mock_sync_http_client.post.return_value = ok_response(sample_page)
        telegraph = BlockingTelegraph(token, http_client=mock_sync_http_client)

        page = telegraph.create_page("Sample Page", ["Hello, world"])

        url, body = _sent(mock_sync_http_client)
        assert url == "https://api.telegra.ph/createPage"
        assert body["content"] == ["Hello, world"]
        assert body["access_token"] == token
        assert page.url == "https://telegra.ph/Sample-Page-12-15"

    def test_get_page_not_found(self, mock_sync_http_client, error_response):
        """Test that ok=false surfaces as ApiError."""
        mock_sync_http_client.post.return_value = error_response("PAGE_NOT_FOUND")
        telegraph = BlockingTelegraph(http_client=mock_sync_http_client)

        with pytest.raises(ApiError) as exc_info:
            telegraph.get_page("missing")

        assert exc_info.value.error == "PAGE_NOT_FOUND"

    def test_transport_error_propagates(self, mock_sync_http_client):
        """Test that transport failures are raised unchanged."""
        mock_sync_http_client.post.side_effect = TransportError("timed out")
        telegraph = BlockingTelegraph(http_client=mock_sync_http_client)

        with pytest.raises(TransportError):
            telegraph.get_views("Sample-Page-12-15")

    def test_account_round_trip(self, mock_sync_http_client, ok_response, sample_account):
        """Test creating an account then switching to its token."""
        mock_sync_http_client.post.return_value = ok_response(sample_account)
        anonymous = BlockingTelegraph(http_client=mock_sync_http_client)

        account = anonymous.create_account("Sandbox")
        telegraph = anonymous.with_access_token(account.access_token)

        assert telegraph.access_token == sample_account["access_token"]

    def test_get_page_list_and_views(self, mock_sync_http_client, ok_response, token):
        """Test list and views parameters."""
        mock_sync_http_client.post.side_effect = [
            ok_response({"total_count": 0, "pages": []}),
            ok_response({"views": 5}),
        ]
        telegraph = BlockingTelegraph(token, http_client=mock_sync_http_client)

        page_list = telegraph.get_page_list(limit=0)
        views = telegraph.get_views("Sample-Page-12-15", 2019, 5, 19, 12)

        assert page_list.pages == []
        assert views.views == 5
        last_call = mock_sync_http_client.post.call_args
        assert last_call.kwargs["json"] == {"year": 2019, "month": 5, "day": 19, "hour": 12}

    def test_owned_transport_is_closed(self):
        """Test that the owned requests session closes with the client."""
        with patch("telegraph_api.core.blocking.BlockingHttpClient") as transport_cls:
            with BlockingTelegraph(config=ClientConfig(proxy="http://127.0.0.1:8080")):
                pass

        transport_cls.assert_called_once()
        assert transport_cls.call_args.kwargs["proxy"] == "http://127.0.0.1:8080"
        transport_cls.return_value.close.assert_called_once()

    def test_upload(self, mock_sync_http_client, raw_response, tmp_path):
        """Test uploading through the blocking client."""
        image = tmp_path / "cat.png"
        image.write_bytes(b"\x89PNG")
        mock_sync_http_client.post.return_value = raw_response(b'[{"src": "/file/cat.png"}]')
        telegraph = BlockingTelegraph(http_client=mock_sync_http_client)

        urls = telegraph.upload([image])

        assert urls == ["https://telegra.ph/file/cat.png"]
        assert mock_sync_http_client.post.call_args.args[0] == "https://telegra.ph/upload"

    def test_author_defaults(self, mock_sync_http_client, ok_response, sample_page, token):
        """Test that author defaults apply unless the call overrides them."""
        mock_sync_http_client.post.return_value = ok_response(sample_page)
        telegraph = BlockingTelegraph(
            token,
            http_client=mock_sync_http_client,
            author_name="Anonymous",
            author_url="https://t.me/anonymous",
        )

        telegraph.create_page("Sample Page", ["Hello, world"])
        default_body = mock_sync_http_client.post.call_args.kwargs["json"]
        telegraph.with_access_token("new-token").edit_page(
            "Sample-Page-12-15", "Sample Page", ["Hi"], author_url="https://example.com"
        )
        edited_body = mock_sync_http_client.post.call_args.kwargs["json"]

        assert default_body["author_name"] == "Anonymous"
        assert default_body["author_url"] == "https://t.me/anonymous"
        assert edited_body["access_token"] == "new-token"
        assert edited_body["author_name"] == "Anonymous"
        assert edited_body["author_url"] == "https://example.com"

    def test_with_account(self, mock_sync_http_client, ok_response, sample_account, sample_page):
        """Test switching to a created account and its author name."""
        mock_sync_http_client.post.side_effect = [ok_response(sample_account), ok_response(sample_page)]
        anonymous = BlockingTelegraph(http_client=mock_sync_http_client)

        telegraph = anonymous.with_account(anonymous.create_account("Sandbox", author_name="Anonymous"))
        telegraph.create_page("Sample Page", ["Hello, world"])

        body = mock_sync_http_client.post.call_args.kwargs["json"]
        assert body["access_token"] == sample_account["access_token"]
        assert body["author_name"] == "Anonymous"
        assert "author_url" not in body
