"""
Integration smoke test for the Contentful delivery client.

This script spins up:
1. A mock Content Delivery API (Starlette) that exposes the space, entries,
   and assets endpoints and checks the bearer token.
2. The delivery client in insecure mode, pointed at the mock with an
   explicit ``host:port``.

Usage:
    uv run python scripts/smoke_test.py

The script prints the responses and exits with code 0 if the end-to-end flow
works. Use Ctrl+C to abort.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from contentful_cda import ClientParameters, TransportError, create_client

MOCK_SERVICE_HOST = "127.0.0.1"
MOCK_SERVICE_PORT = 9070
SPACE_ID = "smoke-space"
ACCESS_TOKEN = "smoke-token"


@dataclass
class MockSpace:
    """In-memory content for the smoke test's pretend space."""

    entries: dict[str, dict[str, Any]] = field(
        default_factory=lambda: {
            "entry-1": {"sys": {"id": "entry-1", "type": "Entry"}, "fields": {"title": "Hello"}},
            "entry-2": {"sys": {"id": "entry-2", "type": "Entry"}, "fields": {"title": "World"}},
        }
    )
    assets: dict[str, dict[str, Any]] = field(
        default_factory=lambda: {
            "asset-1": {"sys": {"id": "asset-1", "type": "Asset"}, "fields": {"title": "Logo"}},
        }
    )

    def collection(self, items: list[dict[str, Any]]) -> dict[str, Any]:
        return {"sys": {"type": "Array"}, "total": len(items), "skip": 0, "limit": 100, "items": items}


def _authorized(request: Request) -> bool:
    return request.headers.get("authorization") == f"Bearer {ACCESS_TOKEN}"


def _unauthorized() -> JSONResponse:
    return JSONResponse({"sys": {"id": "AccessTokenInvalid"}}, status_code=401)


async def space_endpoint(request: Request) -> JSONResponse:
    if not _authorized(request):
        return _unauthorized()
    return JSONResponse({"sys": {"id": request.path_params["space_id"], "type": "Space"}, "name": "Smoke"})


async def entries_endpoint(request: Request) -> JSONResponse:
    if not _authorized(request):
        return _unauthorized()
    space: MockSpace = request.app.state.space
    items = list(space.entries.values())
    entry_id = request.query_params.get("sys.id")
    if entry_id:
        items = [item for item in items if item["sys"]["id"] == entry_id]
    return JSONResponse(space.collection(items))


async def asset_endpoint(request: Request) -> JSONResponse:
    if not _authorized(request):
        return _unauthorized()
    asset = request.app.state.space.assets.get(request.path_params["asset_id"])
    if asset is None:
        return JSONResponse({"sys": {"id": "NotFound"}}, status_code=404)
    return JSONResponse(asset)


def build_mock_service() -> Starlette:
    app = Starlette(
        routes=[
            Route("/spaces/{space_id:str}/", space_endpoint, methods=["GET"]),
            Route("/spaces/{space_id:str}/entries", entries_endpoint, methods=["GET"]),
            Route("/spaces/{space_id:str}/assets/{asset_id:str}", asset_endpoint, methods=["GET"]),
        ],
    )
    app.state.space = MockSpace()
    return app


async def run_uvicorn_app(app: Starlette, host: str, port: int) -> uvicorn.Server:
    config = uvicorn.Config(app, host=host, port=port, log_level="error")
    server = uvicorn.Server(config)

    async def _serve() -> None:
        await server.serve()

    asyncio.create_task(_serve())
    # Give the server a moment to bind the port.
    await asyncio.sleep(0.3)
    return server


async def run_smoke_flow() -> None:
    print("Starting mock Content Delivery API...")
    mock_server = await run_uvicorn_app(build_mock_service(), MOCK_SERVICE_HOST, MOCK_SERVICE_PORT)

    params = ClientParameters(
        space=SPACE_ID,
        access_token=ACCESS_TOKEN,
        insecure=True,
        host=f"{MOCK_SERVICE_HOST}:{MOCK_SERVICE_PORT}",
        application="smoke-test/1.0.0",
    )

    try:
        async with create_client(params) as client:
            print("Base URL:", client.http.base_url)

            space = await client.get_space()
            print("get_space result:", space)

            entries = await client.get_entries({"limit": 10})
            print("get_entries total:", entries["total"])

            entry = await client.get_entry("entry-2")
            print("get_entry result:", entry)

            asset = await client.get_asset("asset-1")
            print("get_asset result:", asset)

            try:
                await client.get_asset("missing")
            except TransportError as exc:
                print("get_asset(missing) raised as expected:", exc.status_code)

            print("Smoke test succeeded")
    finally:
        print("Stopping mock Content Delivery API...")
        mock_server.should_exit = True
        await asyncio.sleep(0.2)


if __name__ == "__main__":
    try:
        asyncio.run(run_smoke_flow())
    except KeyboardInterrupt:
        print("Smoke test interrupted.")
