from __future__ import annotations

import os

import uvicorn

from llmhub.config.defaults import LLMHUB_SERVICE_DEFAULT_HOST, LLMHUB_SERVICE_DEFAULT_PORT


def _parse_port(value: str | None, default: int) -> int:
    """Parse a port from string, falling back to ``default``."""
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def main() -> None:
    """Start the development server for the llmhub FastAPI app.

    Environment:

    - LLMHUB_SERVICE_HOST: interface to bind (default "127.0.0.1")
    - LLMHUB_SERVICE_PORT: port to bind (default 8091)
    - LLMHUB_SERVICE_RELOAD: "true"/"false" to toggle auto-reload (default true)
    """
    host = os.getenv("LLMHUB_SERVICE_HOST", LLMHUB_SERVICE_DEFAULT_HOST)
    port = _parse_port(os.getenv("LLMHUB_SERVICE_PORT"), LLMHUB_SERVICE_DEFAULT_PORT)
    reload_env = os.getenv("LLMHUB_SERVICE_RELOAD")
    reload_enabled = True if reload_env is None else reload_env.lower() == "true"

    uvicorn.run(
        "llmhub.service.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
    )


if __name__ == "__main__":
    main()
