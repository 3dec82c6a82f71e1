"""Command line entry point for the Swiss Nutrition MCP server."""

import asyncio
import logging

from mcp.server.fastmcp import FastMCP

from swiss_nutrition_mcp.api.server import create_server
from swiss_nutrition_mcp.app_logging import configure_logging
from swiss_nutrition_mcp.config import Settings
from swiss_nutrition_mcp.containers import AppContainer, build_container

_logger = logging.getLogger(__name__)


async def serve(server: FastMCP, container: AppContainer) -> None:
    """Serve on the configured transport, closing resources on the same loop."""
    runners = {
        "stdio": server.run_stdio_async,
        "sse": server.run_sse_async,
        "streamable-http": server.run_streamable_http_async,
    }
    try:
        await runners[container.settings.transport]()
    finally:
        await container.close_resources()
        _logger.info("Shut down %s", container.settings.server_name)


def main() -> None:
    """Run the MCP server until the client disconnects."""
    settings = Settings()
    configure_logging(settings.log_level)
    container = build_container(settings)
    server = create_server(container)
    _logger.info(
        "Starting %s on %s (API %s)",
        settings.server_name,
        settings.transport,
        settings.nutrition_api_base_url,
    )
    asyncio.run(serve(server, container))


if __name__ == "__main__":
    main()
