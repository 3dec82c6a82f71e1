"""Tests for main module."""

import asyncio
from dataclasses import dataclass

import pytest

from swiss_nutrition_mcp.containers import AppContainer
from swiss_nutrition_mcp.main import serve


@dataclass
class _FakeServer:
    fail: bool = False
    ran: str | None = None

    async def run_stdio_async(self) -> None:
        self.ran = "stdio"
        if self.fail:
            raise RuntimeError("stdin closed")

    async def run_sse_async(self) -> None:
        self.ran = "sse"

    async def run_streamable_http_async(self) -> None:
        self.ran = "streamable-http"


def _track_close(container: AppContainer) -> list[bool]:
    closed: list[bool] = []

    async def close_resources() -> None:
        closed.append(True)

    container.close_resources = close_resources
    return closed


def test_serve_runs_transport_and_closes_resources(container: AppContainer) -> None:
    closed = _track_close(container)
    server = _FakeServer()

    asyncio.run(serve(server, container))  # type: ignore[arg-type]

    assert server.ran == "stdio"
    assert closed == [True]


def test_serve_closes_resources_when_transport_fails(container: AppContainer) -> None:
    closed = _track_close(container)
    server = _FakeServer(fail=True)

    with pytest.raises(RuntimeError):
        asyncio.run(serve(server, container))  # type: ignore[arg-type]

    assert closed == [True]
