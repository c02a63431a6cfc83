# tests/test_flipkart_client.py

"""Tests for the Flipkart API client using mocked HTTP responses."""

import json
import unittest
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

from src.config.settings import SyncConfig
from src.scrapers.flipkart_client import FlipkartAPIError, FlipkartClient

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _fixture(name: str) -> Any:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


def _json_response(data: Any, status_code: int = 200) -> MagicMock:
    """Mock response whose .json() returns *data*."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data
    return resp


@patch("src.scrapers.flipkart_client.curl_requests.Session")
class TestFetchCategories(unittest.TestCase):
    """Category directory parsing."""

    def _client(self, mock_session_cls: MagicMock) -> tuple[FlipkartClient, MagicMock]:
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        config = SyncConfig(
            native_api=True, tracking_id="testaff", token="secret",
            request_timeout=12,
        )
        client = FlipkartClient(config)
        return client, mock_session

    def test_returns_category_to_url_mapping(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client, session = self._client(mock_session_cls)
        session.get.return_value = _json_response(
            _fixture("flipkart_categories.json")
        )

        categories = client.fetch_categories()

        self.assertEqual(set(categories), {"mobiles", "footwear"})
        self.assertTrue(
            categories["mobiles"].startswith(
                "https://affiliate-api.flipkart.net/affiliate/1.0/feeds/"
            )
        )
        self.assertNotIn("deltaFeeds", categories["mobiles"])

    def test_sends_credentials_and_timeout(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client, session = self._client(mock_session_cls)
        session.get.return_value = _json_response(
            _fixture("flipkart_categories.json")
        )

        client.fetch_categories()

        args, kwargs = session.get.call_args
        self.assertEqual(
            args[0],
            "https://affiliate-api.flipkart.net/affiliate/api/testaff.json",
        )
        self.assertEqual(
            kwargs["headers"],
            {
                "Fk-Affiliate-Id": "testaff",
                "Fk-Affiliate-Token": "secret",
                "Accept": "application/json",
            },
        )
        self.assertEqual(kwargs["timeout"], 12)

    def test_affiliate_id_is_quoted_in_url(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Reserved characters in the tracking id stay inside one path segment."""
        mock_session_cls.return_value = MagicMock()
        config = SyncConfig(
            native_api=True, tracking_id="aff/../x y?", token="t",
        )
        client = FlipkartClient(config)
        self.assertEqual(
            client.categories_url(),
            "https://affiliate-api.flipkart.net/affiliate/api/"
            "aff%2F..%2Fx%20y%3F.json",
        )

    def test_missing_nested_keys_raise(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client, session = self._client(mock_session_cls)
        session.get.return_value = _json_response({"apiGroups": {}})
        with self.assertRaises(FlipkartAPIError):
            client.fetch_categories()

    def test_missing_version_variant_raises(
        self, mock_session_cls: MagicMock,
    ) -> None:
        data = _fixture("flipkart_categories.json")
        listings = data["apiGroups"]["affiliate"]["apiListings"]
        listings["footwear"]["availableVariants"] = {"v0.1.0": {"get": "x"}}
        client, session = self._client(mock_session_cls)
        session.get.return_value = _json_response(data)
        with self.assertRaises(FlipkartAPIError):
            client.fetch_categories()

    def test_invalid_json_raises(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client, session = self._client(mock_session_cls)
        resp = MagicMock()
        resp.status_code = 200
        resp.json.side_effect = json.JSONDecodeError("bad", "<html>", 0)
        session.get.return_value = resp
        with self.assertRaises(FlipkartAPIError) as ctx:
            client.fetch_categories()
        self.assertIn("not valid JSON", str(ctx.exception))

    def test_http_error_raises(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client, session = self._client(mock_session_cls)
        session.get.return_value = _json_response({}, status_code=401)
        with self.assertRaises(FlipkartAPIError) as ctx:
            client.fetch_categories()
        self.assertIn("401", str(ctx.exception))

    def test_transport_error_raises_without_retry(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client, session = self._client(mock_session_cls)
        session.get.side_effect = ConnectionError("Connection refused")
        with self.assertRaises(FlipkartAPIError) as ctx:
            client.fetch_categories()
        self.assertIn("Connection refused", str(ctx.exception))
        self.assertEqual(session.get.call_count, 1)


@patch("src.scrapers.flipkart_client.curl_requests.Session")
class TestFetchProducts(unittest.TestCase):
    """Product listing parsing."""

    def _client(self, mock_session_cls: MagicMock) -> tuple[FlipkartClient, MagicMock]:
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        config = SyncConfig(native_api=True, tracking_id="a", token="t")
        return FlipkartClient(config), mock_session

    def test_returns_products_array(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client, session = self._client(mock_session_cls)
        session.get.return_value = _json_response(
            _fixture("flipkart_products.json")
        )
        products = client.fetch_products("https://feed/mobiles.json")
        self.assertEqual(len(products), 3)
        self.assertEqual(
            session.get.call_args[0][0], "https://feed/mobiles.json"
        )

    def test_missing_products_key_raises(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client, session = self._client(mock_session_cls)
        session.get.return_value = _json_response({"nextUrl": None})
        with self.assertRaises(FlipkartAPIError):
            client.fetch_products("https://feed/x.json")

    def test_non_object_body_raises(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client, session = self._client(mock_session_cls)
        session.get.return_value = _json_response([1, 2])
        with self.assertRaises(FlipkartAPIError):
            client.fetch_products("https://feed/x.json")

    def test_empty_products_is_fine(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client, session = self._client(mock_session_cls)
        session.get.return_value = _json_response({"products": []})
        self.assertEqual(client.fetch_products("https://feed/x.json"), [])


if __name__ == "__main__":
    unittest.main()
