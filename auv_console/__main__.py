"""Entry point for the AUV Console server."""

import logging

from auv_console.server import mcp  # This import also configures logging
from auv_console.services import get_config

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the MCP server with configured transport."""
    config = get_config()

    if config.transport == "stdio":
        logger.info("Starting AUV Console (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting AUV Console (transport=http, host=%s, port=%d)",
            config.http_host,
            config.http_port,
        )
        mcp.run(
            transport="http",
            host=config.http_host,
            port=config.http_port,
        )


if __name__ == "__main__":
    run_server()
