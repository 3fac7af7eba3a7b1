"""Tests for concurrent batch extraction."""

from __future__ import annotations

import threading

import httpx
import respx

from quizsource.scraper.batch import extract_many
from quizsource.scraper.errors import Cancelled, FetchError, InvalidUrlError, NoContentFound

_GOOD = (
    "<html><head><title>{title}</title></head><body><article>"
    "<p>Every page in this batch carries a paragraph long enough to qualify.</p>"
    "</article></body></html>"
)


class TestExtractMany:
    def test_results_keep_input_order_and_errors_are_per_url(self) -> None:
        urls = [
            "https://example.com/a",
            "https://example.com/missing",
            "https://example.com/b",
            "https://example.com/empty",
        ]
        with respx.mock:
            respx.get(urls[0]).mock(return_value=httpx.Response(200, text=_GOOD.format(title="A")))
            respx.get(urls[1]).mock(return_value=httpx.Response(404))
            respx.get(urls[2]).mock(return_value=httpx.Response(200, text=_GOOD.format(title="B")))
            respx.get(urls[3]).mock(return_value=httpx.Response(200, text="<html><body></body></html>"))
            items = extract_many(urls, max_workers=2)

        assert [item.url for item in items] == urls
        assert items[0].ok and items[0].result.title == "A"
        assert isinstance(items[1].error, FetchError)
        assert items[1].error.status == 404
        assert items[2].ok and items[2].result.title == "B"
        assert isinstance(items[3].error, NoContentFound)

    def test_empty_input(self) -> None:
        assert extract_many([]) == []

    def test_cancelled_batch_makes_no_requests(self) -> None:
        cancel = threading.Event()
        cancel.set()
        with respx.mock(assert_all_called=False) as mock:
            route = mock.get("https://example.com/a").mock(
                return_value=httpx.Response(200, text=_GOOD.format(title="A"))
            )
            items = extract_many(["https://example.com/a", "https://example.com/a"], cancel=cancel)

        assert route.called is False
        assert all(isinstance(item.error, Cancelled) for item in items)

    def test_invalid_url_is_reported_not_raised(self) -> None:
        items = extract_many(["not a url"])
        assert len(items) == 1
        assert items[0].ok is False

    def test_url_httpx_rejects_does_not_abort_batch(self) -> None:
        urls = ["http://example.com:abc/a", "https://example.com/a"]
        with respx.mock:
            respx.get(urls[1]).mock(return_value=httpx.Response(200, text=_GOOD.format(title="A")))
            items = extract_many(urls)

        assert isinstance(items[0].error, InvalidUrlError)
        assert items[1].ok and items[1].result.title == "A"
