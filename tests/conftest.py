"""
Shared fixtures for the batchpdf test-suite.

`FakePdfSite` is a tiny aiohttp application that serves canned responses and
records every path it was asked for, so tests can assert on both what ended
up on disk and how many requests were issued.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Tuple

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n%%EOF\n"


@dataclass
class FakePdfSite:
    routes: Dict[str, Tuple[int, str, bytes]] = field(default_factory=dict)
    requests: List[str] = field(default_factory=list)
    delay: float = 0.0

    def add_pdf(self, path: str, body: bytes = PDF_BYTES) -> None:
        self.routes[path] = (200, "application/pdf", body)

    def add(self, path: str, status: int, content_type: str, body: bytes) -> None:
        self.routes[path] = (status, content_type, body)

    async def _handle(self, request: web.Request) -> web.Response:
        self.requests.append(request.path_qs)
        if self.delay:
            await asyncio.sleep(self.delay)
        status, content_type, body = self.routes.get(
            request.path, (404, "text/plain", b"not found")
        )
        return web.Response(status=status, body=body, headers={"Content-Type": content_type})

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("GET", "/{tail:.*}", self._handle)
        return app

    def serve(self, scenario: Callable[[str], Awaitable]):
        """Runs `scenario(base_url)` against a live server on a fresh event loop."""

        async def _main():
            async with TestServer(self.make_app()) as server:
                return await scenario(f"http://{server.host}:{server.port}")

        return asyncio.run(_main())


@pytest.fixture
def pdf_site() -> FakePdfSite:
    return FakePdfSite()


@pytest.fixture
def write_url_list(tmp_path):
    def _write(*lines: str) -> str:
        path = tmp_path / "valid_pdf.txt"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)

    return _write


async def closed_server_url() -> str:
    """Returns the address of a server that has already been shut down."""
    server = TestServer(web.Application())
    await server.start_server()
    url = f"http://{server.host}:{server.port}"
    await server.close()
    return url
