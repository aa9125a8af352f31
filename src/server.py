"""
Checklist MCP Server entry point.

Startup sequence:
1. Read CHECKLIST_ROOT and LOG_LEVEL from environment
2. Initialize DocumentCache
3. Register all MCP tools
4. Start REST API server in background thread (if API_ENABLED)
5. Run MCP server (stdio transport)
"""

import logging
import os
import sys
import threading
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from cache.document_cache import DocumentCache
from tools import register_checklist_tools

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    stream=sys.stderr,
)
log = logging.getLogger(__name__)


def _start_api_server(cache, port: int) -> None:
    """Run the FastAPI/uvicorn server in a daemon thread."""
    import uvicorn

    from api.app import create_app

    app = create_app(cache)
    log.info("Starting REST API on port %d", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="warning")


def main() -> None:
    root = Path(os.environ.get("CHECKLIST_ROOT", "") or Path.cwd())
    if not root.is_dir():
        log.error("CHECKLIST_ROOT does not exist or is not a directory: %s", root)
        sys.exit(1)

    log.info("Checklist root: %s", root)
    cache = DocumentCache(root)

    # Start REST API in a daemon thread
    api_enabled = os.environ.get("API_ENABLED", "true").lower() in ("true", "1", "yes")
    if api_enabled:
        api_port = int(os.environ.get("API_PORT", "9400"))
        api_thread = threading.Thread(
            target=_start_api_server, args=(cache, api_port), daemon=True
        )
        api_thread.start()

    # Create MCP server and register tools
    mcp = FastMCP("checklist-mcp")
    register_checklist_tools(mcp, cache)

    log.info("Starting checklist-mcp server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
