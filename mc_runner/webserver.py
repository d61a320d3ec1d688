"""Auxiliary HTTP endpoint served by uvicorn on a daemon thread while the server runs."""

from __future__ import annotations

import logging
import subprocess
import threading
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8080


def create_app(server_process: Optional[subprocess.Popen] = None) -> FastAPI:
    """Build the app. The server process handle is kept on app.state for future routes."""
    app = FastAPI(title="mc-runner", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.server_process = server_process

    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        return "Hello, World"

    return app


def _serve(server: uvicorn.Server) -> None:
    try:
        server.run()
    except SystemExit as e:
        # uvicorn exits when the address cannot be bound
        logger.error(f"Webserver exited with status {e.code}")
    except Exception as e:
        logger.error(f"Webserver exited with {e!r}")


def start_web_server(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    server_process: Optional[subprocess.Popen] = None,
) -> threading.Thread:
    """Start serving in the background. The thread is abandoned when the launcher exits."""
    config = uvicorn.Config(
        create_app(server_process),
        host=host,
        port=port,
        log_level="warning",
        log_config=None,
    )
    server = uvicorn.Server(config)
    thread = threading.Thread(target=_serve, args=(server,), daemon=True, name="mc-runner.webserver")
    thread.start()
    logger.info(f"Webserver starting on http://{host}:{port}")
    return thread
