"""Tests for the HTTP data source using an in-process mock transport."""

from __future__ import annotations

import unittest

import httpx

from faultnav.data_source import HttpDataSource
from faultnav.errors import FetchError, ParseError


def _transport(routes: dict[str, httpx.Response], seen: list[str]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        response = routes.get(request.url.path)
        if response is None:
            return httpx.Response(404)
        return response

    return httpx.MockTransport(handler)


class HttpDataSourceTests(unittest.IsolatedAsyncioTestCase):
    async def test_fetch_resolves_ids_against_base_url(self) -> None:
        seen: list[str] = []
        routes = {"/kb/data/main.json": httpx.Response(200, json=[{"title": "Leak", "type": "page"}])}
        async with HttpDataSource("http://example.test/kb/data", transport=_transport(routes, seen)) as source:
            descriptors = await source.fetch("main")

        self.assertEqual(seen, ["/kb/data/main.json"])
        self.assertEqual(descriptors[0].title, "Leak")

    async def test_http_error_status_raises_fetch_error(self) -> None:
        seen: list[str] = []
        source = HttpDataSource("http://example.test/", transport=_transport({}, seen))
        try:
            with self.assertRaises(FetchError) as ctx:
                await source.fetch("a.json")
        finally:
            await source.close()
        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual(ctx.exception.source_id, "a.json")

    async def test_non_json_body_raises_parse_error(self) -> None:
        seen: list[str] = []
        routes = {"/a.json": httpx.Response(200, text="<html>oops</html>")}
        async with HttpDataSource("http://example.test", transport=_transport(routes, seen)) as source:
            with self.assertRaises(ParseError):
                await source.fetch("a.json")

    async def test_transport_failure_raises_fetch_error_with_cause(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with HttpDataSource("http://example.test", transport=httpx.MockTransport(handler)) as source:
            with self.assertRaises(FetchError) as ctx:
                await source.fetch("a.json")
        self.assertIsInstance(ctx.exception.cause, httpx.ConnectError)
        self.assertIsNone(ctx.exception.status)


if __name__ == "__main__":
    unittest.main()
